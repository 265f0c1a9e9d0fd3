from typing import Callable, Generic, Iterable, TypeVar

from membership.algorithms.bloom_filter import BloomFilter

T = TypeVar("T")


def default_encoder(item) -> bytes:
    """
    Bytes-like values pass through; anything else is hashed by its UTF-8 text
    form. Lone surrogates are kept (surrogatepass), so "a\\ud800" and "a" differ.
    """
    if isinstance(item, (bytes, bytearray, memoryview)):
        return bytes(item)
    return str(item).encode("utf-8", errors="surrogatepass")


class ElementFilter(Generic[T]):
    """
    Membership over arbitrary values, built on a byte-keyed BloomFilter.

    Values are turned into bytes by the encoder and forwarded to the filter.
    The default encoder relies on str(), so two values with the same text
    form are indistinguishable; pass an explicit encoder when that matters.
    """

    def __init__(self, bloom: BloomFilter, encoder: Callable[[T], bytes] = default_encoder) -> None:
        self.bloom = bloom
        self.encoder = encoder

    def add(self, item: T) -> None:
        self.bloom.insert(self.encoder(item))

    def add_many(self, items: Iterable[T]) -> None:
        for it in items:
            self.add(it)

    def may_contain(self, item: T) -> bool:
        return self.bloom.may_contain(self.encoder(item))

    def __contains__(self, item: T) -> bool:
        return self.may_contain(item)

    def __repr__(self) -> str:
        return f"ElementFilter(bloom={self.bloom!r})"
