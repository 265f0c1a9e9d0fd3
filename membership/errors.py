class BloomFilterError(Exception):
    """Base class for errors raised by this package."""


class InvalidArgumentError(BloomFilterError, ValueError):
    """A filter was constructed with out-of-range parameters."""


class InvalidSizeError(InvalidArgumentError):
    """A bit set was requested with a non-positive or oversized bit count."""
