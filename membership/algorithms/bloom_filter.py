"""
Bloom filter over raw byte keys.

A filter answers "definitely absent" or "possibly present" for a key, with a
false positive rate fixed by three interacting quantities: capacity (n),
bits (m) and hash count (k). Filters can be dimensioned three ways:

  BloomFilter.with_parameters(capacity, bit_count, hash_count)
  BloomFilter.from_error_rate(capacity, error_rate)
  BloomFilter.from_memory(error_rate, bit_count)

References:
  - https://en.wikipedia.org/wiki/Bloom_filter
  - http://billmill.org/bloomfilter-tutorial
"""
import logging
import numbers
from dataclasses import dataclass
from typing import Iterable, Optional

from membership.algorithms import parameters
from membership.algorithms.bitset import MAX_BITS, BitSet
from membership.algorithms.murmur import KeyLike, key_bytes, probe_indices
from membership.algorithms.parameters import MAX_ERROR_RATE, MAX_HASH_COUNT, MIN_ERROR_RATE
from membership.errors import InvalidArgumentError

logger = logging.getLogger(__name__)


def _check_integral(name: str, value) -> None:
    # bool is an Integral but never a meaningful size
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidArgumentError(f"Invalid {name}: {value!r}, must be an integer")


def _check_capacity(capacity: int) -> None:
    _check_integral("capacity", capacity)
    if capacity <= 0:
        raise InvalidArgumentError(f"Invalid capacity: {capacity}, must be positive")


def _check_bit_count(bit_count: int) -> None:
    _check_integral("bit count", bit_count)
    if bit_count <= 0 or bit_count > MAX_BITS:
        raise InvalidArgumentError(f"Invalid bit count: {bit_count}, should be within (0, {MAX_BITS}]")


def _check_hash_count(hash_count: int) -> None:
    _check_integral("hash count", hash_count)
    if hash_count <= 0 or hash_count > MAX_HASH_COUNT:
        raise InvalidArgumentError(
            f"Invalid hash count: {hash_count}, should be within (0, {MAX_HASH_COUNT}]"
        )


def _check_error_rate(error_rate: float) -> None:
    # negated so NaN fails too
    if not (MIN_ERROR_RATE <= error_rate <= MAX_ERROR_RATE):
        raise InvalidArgumentError(
            f"Invalid error rate: {error_rate}, should be within [{MIN_ERROR_RATE}, {MAX_ERROR_RATE}]"
        )


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


@dataclass(frozen=True)
class FilterConfig:
    """
    Resolved dimensions of a filter.

    capacity: expected number of distinct elements (n)
    bit_count: addressable bits (m)
    hash_count: probes per key (k)
    target_error_rate: false positive rate the filter is dimensioned for at capacity
    """

    capacity: int
    bit_count: int
    hash_count: int
    target_error_rate: float

    def __post_init__(self) -> None:
        _check_capacity(self.capacity)
        _check_bit_count(self.bit_count)
        _check_hash_count(self.hash_count)

    @classmethod
    def explicit(cls, capacity: int, bit_count: int, hash_count: int) -> "FilterConfig":
        """Take all three dimensions as given; the error rate is derived, not asserted."""
        _check_capacity(capacity)
        _check_bit_count(bit_count)
        _check_hash_count(hash_count)
        rate = parameters.error_rate(capacity, bit_count, hash_count)
        return cls(int(capacity), int(bit_count), int(hash_count), rate)

    @classmethod
    def for_capacity(cls, capacity: int, error_rate: float) -> "FilterConfig":
        """Size bits and hash count for capacity elements at error_rate."""
        _check_capacity(capacity)
        _check_error_rate(error_rate)
        bit_count = _clamp(parameters.bits_for_target(capacity, error_rate), 1, MAX_BITS)
        hash_count = _clamp(parameters.hash_count_for_optimal(capacity, bit_count), 1, MAX_HASH_COUNT)
        return cls(int(capacity), bit_count, hash_count, float(error_rate))

    @classmethod
    def for_memory(cls, error_rate: float, bit_count: int) -> "FilterConfig":
        """Work out how many elements bit_count bits can hold at error_rate."""
        _check_error_rate(error_rate)
        _check_bit_count(bit_count)
        # a zero capacity would break the hash count derivation
        capacity = max(1, parameters.elems_for_target(bit_count, error_rate))
        hash_count = _clamp(parameters.hash_count_for_optimal(capacity, bit_count), 1, MAX_HASH_COUNT)
        return cls(capacity, int(bit_count), hash_count, float(error_rate))


class BloomFilter:
    """
    Probabilistic set of byte keys with no false negatives.

    Keys are raw byte ranges; see membership.elements for arbitrary values.
    There is no deletion, resizing or merging, and no internal locking:
    concurrent inserts need external synchronization.

    Methods:
      insert(key), may_contain(key), __contains__(key), reset(), is_empty()
    """

    def __init__(self, config: FilterConfig) -> None:
        self._config = config
        self._bits = BitSet(config.bit_count)
        self._inserted_count = 0
        logger.debug(
            "BloomFilter created: capacity=%d, bits=%d, hash_count=%d, target_error_rate=%.6g",
            config.capacity,
            config.bit_count,
            config.hash_count,
            config.target_error_rate,
        )

    @classmethod
    def with_parameters(cls, capacity: int, bit_count: int, hash_count: int) -> "BloomFilter":
        """
        Build a filter from explicit dimensions. Prefer from_error_rate or
        from_memory unless the dimensions are known to be sensible.
        """
        return cls(FilterConfig.explicit(capacity, bit_count, hash_count))

    @classmethod
    def from_error_rate(cls, capacity: int, error_rate: float) -> "BloomFilter":
        """
        Build a filter for an approximate cardinality and a target false positive rate.
        capacity: expected number of elements (e.g., 1_000_000)
        error_rate: false positive probability at capacity (e.g., 0.01)
        """
        return cls(FilterConfig.for_capacity(capacity, error_rate))

    @classmethod
    def from_memory(cls, error_rate: float, bit_count: int) -> "BloomFilter":
        """Build a filter within a fixed bit budget for a target false positive rate."""
        return cls(FilterConfig.for_memory(error_rate, bit_count))

    @property
    def config(self) -> FilterConfig:
        return self._config

    @property
    def capacity(self) -> int:
        return self._config.capacity

    @property
    def bit_count(self) -> int:
        return self._config.bit_count

    @property
    def hash_count(self) -> int:
        return self._config.hash_count

    @property
    def target_error_rate(self) -> float:
        return self._config.target_error_rate

    @property
    def inserted_count(self) -> int:
        """Number of insert calls since construction or the last reset, duplicates included."""
        return self._inserted_count

    @property
    def current_error_rate(self) -> float:
        """Estimated false positive probability given what has been inserted so far."""
        return parameters.error_rate(self._inserted_count, self.bit_count, self.hash_count)

    @property
    def fill_ratio(self) -> float:
        return self._bits.count() / self.bit_count

    @property
    def memory_bytes(self) -> int:
        return self._bits.memory_bytes

    def insert(self, key: KeyLike, offset: int = 0, length: Optional[int] = None) -> None:
        """Add the byte range key[offset:offset + length] to the filter."""
        data = key_bytes(key, offset, length)
        for idx in probe_indices(data, self.hash_count, self.bit_count):
            self._bits.set(idx)
        self._inserted_count += 1

    def insert_many(self, keys: Iterable[KeyLike]) -> None:
        for key in keys:
            self.insert(key)

    def may_contain(self, key: KeyLike, offset: int = 0, length: Optional[int] = None) -> bool:
        """
        False if the byte range was definitely never inserted, True if it
        possibly was (see current_error_rate for how likely a false positive is).
        """
        data = key_bytes(key, offset, length)
        for idx in probe_indices(data, self.hash_count, self.bit_count):
            if not self._bits.test(idx):
                return False
        return True

    def __contains__(self, key: KeyLike) -> bool:
        return self.may_contain(key)

    def reset(self) -> None:
        """Empty the filter; its dimensions are kept."""
        self._bits.clear_all()
        self._inserted_count = 0
        logger.debug("BloomFilter reset: bits=%d", self.bit_count)

    def is_empty(self) -> bool:
        if self._inserted_count > 0:
            return False
        return self._bits.is_all_zero()

    def __repr__(self) -> str:
        return (
            f"BloomFilter(capacity={self.capacity}, bits={self.bit_count}, "
            f"hash_count={self.hash_count}, error_rate={self.target_error_rate:.4g}, "
            f"inserted={self._inserted_count})"
        )
