import json
from unittest.mock import patch

import click
import pytest
from click.testing import CliRunner

from run_filter import build_filter, iter_keys, main


def parse_summary(output: str) -> dict:
    """The JSON summary is followed by status lines on stderr."""
    return json.loads(output[output.index("{"): output.rindex("}") + 1])


class TestBuildFilter:
    def test_explicit_mode(self) -> None:
        bloom = build_filter(31935, None, 256784, 6)
        assert (bloom.capacity, bloom.bit_count, bloom.hash_count) == (31935, 256784, 6)

    def test_capacity_mode(self) -> None:
        assert build_filter(31935, 0.021, None, None).bit_count == 256784

    def test_memory_mode(self) -> None:
        assert build_filter(None, 0.021, 256784, None).capacity == 31935

    def test_ambiguous_options(self) -> None:
        with pytest.raises(click.UsageError):
            build_filter(1000, 0.01, 10000, None)
        with pytest.raises(click.UsageError):
            build_filter(None, None, None, None)


class TestIterKeys:
    def test_skips_blank_lines(self, key_file) -> None:
        path = key_file("keys.txt", ["a", "", "b c", "d"])
        assert list(iter_keys(path)) == [b"a", b"b c", b"d"]

    def test_limit(self, key_file) -> None:
        path = key_file("keys.txt", ["a", "b", "c"])
        assert list(iter_keys(path, limit=2)) == [b"a", b"b"]


class TestMain:
    def test_insert_and_query(self, key_file) -> None:
        inserts = key_file("insert.txt", [f"user-{i}" for i in range(100)] + ["user-1"])
        queries = key_file("query.txt", ["user-5", "user-50"])
        result = CliRunner().invoke(
            main,
            ["--insert", inserts, "--query", queries, "--capacity", "1000",
             "--error-rate", "0.01", "--update-interval", "50", "--show-keys"],
        )
        assert result.exit_code == 0, result.output
        summary = parse_summary(result.output)
        assert summary["observed"] == 101
        assert summary["possible_duplicates"] >= 1
        assert summary["queries"] == 2
        assert summary["possible_hits"] == 2
        assert [s["inserted_count"] for s in summary["periodic_snapshots"]] == [50, 100]
        assert summary["query_results"][0] == {"key": "user-5", "possibly_present": True}

    def test_memory_mode_and_max_keys(self, key_file) -> None:
        inserts = key_file("insert.txt", [str(i) for i in range(20)])
        result = CliRunner().invoke(
            main, ["--insert", inserts, "--error-rate", "0.021", "--bits", "256784", "--max-keys", "5"]
        )
        assert result.exit_code == 0, result.output
        summary = parse_summary(result.output)
        assert summary["config"]["capacity"] == 31935
        assert summary["observed"] == 5
        assert "query_results" not in summary

    def test_invalid_argument_is_usage_error(self, key_file) -> None:
        inserts = key_file("insert.txt", ["a"])
        result = CliRunner().invoke(main, ["--insert", inserts, "--capacity", "0", "--error-rate", "0.01"])
        assert result.exit_code == 2
        assert "Invalid capacity" in result.output

    def test_missing_mode_options(self, key_file) -> None:
        inserts = key_file("insert.txt", ["a"])
        result = CliRunner().invoke(main, ["--insert", inserts, "--bits", "100"])
        assert result.exit_code == 2

    def test_over_capacity_warning(self, key_file) -> None:
        inserts = key_file("insert.txt", [str(i) for i in range(20)])
        result = CliRunner().invoke(main, ["--insert", inserts, "--capacity", "10", "--error-rate", "0.1"])
        assert result.exit_code == 0
        assert "exceed capacity 10" in result.output

    def test_plot(self, key_file) -> None:
        inserts = key_file("insert.txt", [str(i) for i in range(10)])
        with patch("run_filter.plot_error_curve") as mock_plot:
            result = CliRunner().invoke(
                main,
                ["--insert", inserts, "--capacity", "100", "--error-rate", "0.01",
                 "--update-interval", "5", "--plot"],
            )
        assert result.exit_code == 0, result.output
        mock_plot.assert_called_once()
        assert len(mock_plot.call_args[0][0]) == 2
