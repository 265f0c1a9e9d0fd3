from array import array

from membership.errors import InvalidSizeError

WORD_BITS = 64
_WORD_SHIFT = 6
_OFFSET_MASK = WORD_BITS - 1

# Keeps the word array addressable by a signed 32-bit index.
MAX_BITS = 2 ** 31 * WORD_BITS


class BitSet:
    """
    Fixed-size bit array packed into unsigned 64-bit words.

    Bit i lives in word i // 64 at offset i % 64. Trailing bits of the last
    word are never addressed since callers reduce indices modulo bit_count.
    """

    def __init__(self, bit_count: int) -> None:
        if bit_count <= 0 or bit_count > MAX_BITS:
            raise InvalidSizeError(f"bit_count must be in (0, {MAX_BITS}], got {bit_count}")
        self._bit_count = int(bit_count)
        self._words = self._zeroed_words(self.word_count)

    @staticmethod
    def _zeroed_words(word_count: int) -> array:
        return array("Q", bytes(8 * word_count))

    @property
    def bit_count(self) -> int:
        return self._bit_count

    @property
    def word_count(self) -> int:
        return (self._bit_count + WORD_BITS - 1) // WORD_BITS

    @property
    def memory_bytes(self) -> int:
        """Bytes held by the word array."""
        return len(self._words) * self._words.itemsize

    def set(self, index: int) -> None:
        assert 0 <= index < self._bit_count, index
        self._words[index >> _WORD_SHIFT] |= 1 << (index & _OFFSET_MASK)

    def test(self, index: int) -> bool:
        assert 0 <= index < self._bit_count, index
        return bool((self._words[index >> _WORD_SHIFT] >> (index & _OFFSET_MASK)) & 1)

    def clear_all(self) -> None:
        self._words = self._zeroed_words(len(self._words))

    def is_all_zero(self) -> bool:
        # any() stops at the first nonzero word
        return not any(self._words)

    def count(self) -> int:
        """Number of set bits."""
        return sum(word.bit_count() for word in self._words)

    def __len__(self) -> int:
        return self._bit_count

    def __repr__(self) -> str:
        return f"BitSet(bit_count={self._bit_count}, words={len(self._words)})"
