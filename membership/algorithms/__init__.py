from .bitset import MAX_BITS, WORD_BITS, BitSet
from .bloom_filter import BloomFilter, FilterConfig
from .parameters import MAX_HASH_COUNT, MIN_ERROR_RATE

__all__ = ["BitSet", "BloomFilter", "FilterConfig", "MAX_BITS", "MAX_HASH_COUNT", "MIN_ERROR_RATE", "WORD_BITS"]
