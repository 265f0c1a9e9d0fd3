import matplotlib
import pytest

# Plots must never open a window during tests
matplotlib.use("Agg")

from membership.algorithms.bloom_filter import BloomFilter


@pytest.fixture
def small_bloom():
    """A filter sized for 1000 keys at a 1% false positive rate."""
    return BloomFilter.from_error_rate(capacity=1000, error_rate=0.01)


@pytest.fixture
def keys():
    return [f"key-{i}".encode() for i in range(1000)]


@pytest.fixture
def key_file(tmp_path):
    """Write lines to a file under tmp_path and return its path."""
    def _write(name, lines):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return str(path)
    return _write
