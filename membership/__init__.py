"""
Space-efficient probabilistic set membership.

This package provides:
- algorithms: parameter math, packed bit set, Murmur probes, BloomFilter
- elements: membership over arbitrary values via an encoder
- pipeline: streaming insert/query driver with periodic snapshots
"""

from .algorithms import BloomFilter, FilterConfig
from .elements import ElementFilter
from .errors import BloomFilterError, InvalidArgumentError, InvalidSizeError
from .pipeline import FilterPipeline

__all__ = [
    "BloomFilter",
    "FilterConfig",
    "ElementFilter",
    "FilterPipeline",
    "BloomFilterError",
    "InvalidArgumentError",
    "InvalidSizeError",
]
