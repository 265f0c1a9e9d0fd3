"""
Seeded MurmurHash3 probes for Bloom filters.

One hash pass per seed 0..k-1 gives k independent-looking bit positions for a
key. The 64-bit value comes from a native 64-bit Murmur round rather than a
32-bit hash duplicated into both halves, so bit counts above 2^32 still see
the full range. Not suitable where collision resistance matters.
"""
from typing import Iterator, Optional, Union

import mmh3

KeyLike = Union[bytes, bytearray, memoryview]

_BYTES_LIKE = (bytes, bytearray, memoryview)


def key_bytes(key: KeyLike, offset: int = 0, length: Optional[int] = None) -> bytes:
    """
    Return the byte range key[offset:offset + length] as bytes.

    length defaults to the rest of the buffer. A range reaching outside the
    buffer raises IndexError instead of being silently truncated.
    """
    if not isinstance(key, _BYTES_LIKE):
        raise TypeError(f"key must be bytes-like, got {type(key).__name__}")
    if isinstance(key, memoryview) and not key.c_contiguous:
        # strided views can't be cast, so take their bytes in logical order
        key = key.tobytes()
    size = key.nbytes if isinstance(key, memoryview) else len(key)
    if length is None:
        length = size - offset
    if offset < 0 or length < 0 or offset + length > size:
        raise IndexError(f"byte range [{offset}, {offset + length}) outside key of {size} bytes")
    if isinstance(key, bytes) and offset == 0 and length == size:
        return key
    return bytes(memoryview(key).cast("B")[offset:offset + length])


def hash64(data: bytes, seed: int) -> int:
    """Unsigned 64-bit Murmur hash of data under the given seed."""
    return mmh3.hash64(data, seed=seed, signed=False)[0]


def probe_indices(data: bytes, hash_count: int, bit_count: int) -> Iterator[int]:
    """
    Yield one bit index in [0, bit_count) per seed in [0, hash_count).
    Lazy, so membership checks can stop at the first unset bit.
    """
    for seed in range(hash_count):
        yield hash64(data, seed) % bit_count
