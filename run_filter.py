import json
import logging
from typing import Iterator, List, Dict

import click

from membership.algorithms.bloom_filter import BloomFilter
from membership.errors import InvalidArgumentError
from membership.pipeline import FilterPipeline
from plot.error_curve import plot_error_curve


def iter_keys(path: str, limit: int | None = None) -> Iterator[bytes]:
    """
    Yield one UTF-8 encoded key per non-empty line of a text file, up to an optional limit.
    Trailing newlines are stripped; other whitespace is part of the key.
    """
    count = 0
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            key = line.rstrip("\r\n")
            if not key:
                continue
            if limit is not None and count >= limit:
                break
            count += 1
            yield key.encode("utf-8")


def build_filter(
        capacity: int | None,
        error_rate: float | None,
        bits: int | None,
        hash_count: int | None,
    ) -> BloomFilter:
    """
    Pick the construction mode from the combination of options given:
      capacity + bits + hash-count, capacity + error-rate, or error-rate + bits.
    """
    given = tuple(v is not None for v in (capacity, error_rate, bits, hash_count))
    if given == (True, False, True, True):
        return BloomFilter.with_parameters(capacity, bits, hash_count)
    if given == (True, True, False, False):
        return BloomFilter.from_error_rate(capacity, error_rate)
    if given == (False, True, True, False):
        return BloomFilter.from_memory(error_rate, bits)
    raise click.UsageError(
        "Give exactly one of: --capacity/--bits/--hash-count, "
        "--capacity/--error-rate, or --error-rate/--bits."
    )


@click.command()
@click.option(
    "--insert",
    "insert_path",
    type=click.Path(exists=True, dir_okay=False, readable=True, path_type=str),
    required=True,
    help="Text file with one key per line to stream into the filter.",
)
@click.option(
    "--query",
    "query_path",
    type=click.Path(exists=True, dir_okay=False, readable=True, path_type=str),
    default=None,
    help="Text file with one key per line to test for membership after inserting.",
)
@click.option("--capacity", type=int, default=None, help="Expected number of distinct keys.")
@click.option("--error-rate", type=float, default=None, help="Target false positive rate, e.g. 0.01.")
@click.option("--bits", type=int, default=None, help="Number of bits in the filter.")
@click.option("--hash-count", type=int, default=None, help="Number of hash probes per key.")
@click.option(
    "--max-keys",
    type=int,
    default=None,
    help="Maximum number of keys to insert (per run).",
)
@click.option(
    "--update-interval",
    type=int,
    default=1000,
    show_default=True,
    help="Number of inserted keys between periodic snapshots.",
)
@click.option(
    "--show-keys/--hide-keys",
    "show_keys",
    default=False,
    show_default=True,
    help="Include every queried key and its result in the output.",
)
@click.option(
    "--plot/--no-plot",
    "plot",
    default=False,
    show_default=True,
    help="Plot the error rate snapshots after the run.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def main(
        insert_path: str,
        query_path: str | None,
        capacity: int | None,
        error_rate: float | None,
        bits: int | None,
        hash_count: int | None,
        max_keys: int | None,
        update_interval: int,
        show_keys: bool,
        plot: bool,
        verbose: bool,
) -> None:
    """
    Stream keys from a file into a Bloom filter, optionally query a second file,
    and print a JSON summary with periodic error rate snapshots.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if update_interval <= 0:
        raise click.BadParameter("must be positive", param_hint="--update-interval")

    try:
        bloom = build_filter(capacity, error_rate, bits, hash_count)
    except InvalidArgumentError as e:
        raise click.UsageError(str(e)) from e

    pipeline = FilterPipeline(bloom, snapshot_interval=update_interval)

    for key in iter_keys(insert_path, limit=max_keys):
        pipeline.observe(key)

    results: List[Dict] = []
    if query_path is not None:
        for key in iter_keys(query_path):
            found = pipeline.query(key)
            if show_keys:
                results.append({"key": key.decode("utf-8"), "possibly_present": found})

    summary = pipeline.summary()
    if show_keys:
        summary["query_results"] = results

    print(json.dumps(summary, ensure_ascii=False, indent=2))

    if plot and pipeline.snapshots:
        plot_error_curve(pipeline.snapshots, target_error_rate=bloom.target_error_rate, capacity=bloom.capacity)

    click.echo(f"Inserted {pipeline.observed} keys ({pipeline.possible_duplicates} possible duplicates).", err=True)
    if query_path is not None:
        click.echo(f"Queried {pipeline.queries} keys, {pipeline.possible_hits} possibly present.", err=True)
    if bloom.inserted_count > bloom.capacity:
        click.echo(
            f"Warning: {bloom.inserted_count} keys exceed capacity {bloom.capacity}; "
            f"error rate is now {bloom.current_error_rate:.4g}.",
            err=True,
        )


if __name__ == "__main__":
    main()
