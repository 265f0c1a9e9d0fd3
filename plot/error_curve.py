import pandas as pd
import matplotlib.pyplot as plt


def prepare_snapshot_df(snapshots):
    df = pd.DataFrame(snapshots, columns=["inserted_count", "current_error_rate", "fill_ratio"])
    return df.sort_values("inserted_count").reset_index(drop=True)


def plot_error_curve(snapshots, target_error_rate=None, capacity=None, show=True):
    """
    Plot the estimated false positive rate and fill ratio against the number
    of inserted keys. Returns the figure.
    """
    df = prepare_snapshot_df(snapshots)
    fig, ax = plt.subplots(figsize=(11, 6))
    ax.plot(df["inserted_count"], df["current_error_rate"], marker='o', linewidth=2, label="Current error rate")
    if target_error_rate is not None:
        ax.axhline(target_error_rate, color='gray', linestyle='--', label="Target error rate")
    if capacity is not None:
        ax.axvline(capacity, color='black', linestyle=':', label="Capacity")
    ax.set_title("Bloom Filter False Positive Rate Over Time")
    ax.set_xlabel("Inserted Keys")
    ax.set_ylabel("False Positive Probability")

    ax2 = ax.twinx()
    ax2.plot(df["inserted_count"], df["fill_ratio"], color='tab:orange', linewidth=1, label="Fill ratio")
    ax2.set_ylabel("Fill Ratio")
    ax2.set_ylim(0, 1)

    handles, labels = ax.get_legend_handles_labels()
    handles2, labels2 = ax2.get_legend_handles_labels()
    ax.legend(handles + handles2, labels + labels2, loc='upper center', bbox_to_anchor=(0.5, -0.1),
              ncol=4, fontsize=8, frameon=False)
    fig.tight_layout()
    if show:
        plt.show()
    return fig
