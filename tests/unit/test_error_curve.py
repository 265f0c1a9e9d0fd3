import matplotlib.pyplot as plt

from plot.error_curve import plot_error_curve, prepare_snapshot_df

SNAPSHOTS = [
    {"inserted_count": 200, "current_error_rate": 0.002, "fill_ratio": 0.2},
    {"inserted_count": 100, "current_error_rate": 0.0001, "fill_ratio": 0.1},
    {"inserted_count": 300, "current_error_rate": 0.01, "fill_ratio": 0.3},
]


class TestErrorCurve:
    def test_prepare_sorts_by_inserted_count(self) -> None:
        df = prepare_snapshot_df(SNAPSHOTS)
        assert df["inserted_count"].tolist() == [100, 200, 300]
        assert list(df.columns) == ["inserted_count", "current_error_rate", "fill_ratio"]

    def test_plot_returns_figure(self) -> None:
        fig = plot_error_curve(SNAPSHOTS, target_error_rate=0.01, capacity=250, show=False)
        try:
            ax = fig.axes[0]
            assert ax.get_xlabel() == "Inserted Keys"
            assert len(fig.axes) == 2
        finally:
            plt.close(fig)
