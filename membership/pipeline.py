from typing import Dict, List, Optional

from membership.algorithms.bloom_filter import BloomFilter


class FilterPipeline:
    """
    Streams keys through a BloomFilter.

    Each observed key is first checked, then inserted, so the filter doubles as
    a probabilistic duplicate detector. Every snapshot_interval observations the
    current error rate and fill ratio are recorded for later inspection.
    """

    def __init__(self, bloom: BloomFilter, snapshot_interval: Optional[int] = None) -> None:
        if snapshot_interval is not None and snapshot_interval <= 0:
            raise ValueError("snapshot_interval must be positive")
        self.bloom = bloom
        self.snapshot_interval = snapshot_interval
        self.observed = 0
        self.possible_duplicates = 0
        self.queries = 0
        self.possible_hits = 0
        self.snapshots: List[Dict] = []

    def observe(self, key: bytes) -> Dict:
        """
        Check key against the filter, then insert it.
        Returns a dict with the duplicate status and current error rate.
        """
        seen = self.bloom.may_contain(key)
        self.bloom.insert(key)
        self.observed += 1
        if seen:
            self.possible_duplicates += 1

        if self.snapshot_interval and self.observed % self.snapshot_interval == 0:
            self.snapshots.append(self.snapshot())

        return {"possibly_seen": seen, "current_error_rate": self.bloom.current_error_rate}

    def query(self, key: bytes) -> bool:
        found = self.bloom.may_contain(key)
        self.queries += 1
        if found:
            self.possible_hits += 1
        return found

    def snapshot(self) -> Dict:
        return {
            "inserted_count": self.bloom.inserted_count,
            "current_error_rate": self.bloom.current_error_rate,
            "fill_ratio": self.bloom.fill_ratio,
        }

    def summary(self) -> Dict:
        config = self.bloom.config
        return {
            "config": {
                "capacity": config.capacity,
                "bit_count": config.bit_count,
                "hash_count": config.hash_count,
                "target_error_rate": config.target_error_rate,
                "memory_bytes": self.bloom.memory_bytes,
            },
            "observed": self.observed,
            "possible_duplicates": self.possible_duplicates,
            "queries": self.queries,
            "possible_hits": self.possible_hits,
            "final": self.snapshot(),
            "periodic_snapshots": self.snapshots,
        }

    def __repr__(self) -> str:
        return f"FilterPipeline(bloom={self.bloom!r}, observed={self.observed})"
