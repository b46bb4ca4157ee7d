"""
Dense indexing of unordered key pairs.

Every unordered pair of distinct keys maps to a unique offset in
``range(total_values())``. Offsets are assigned so that the pairs sharing the
same smaller key occupy a contiguous run, which keeps ``position`` down to two
binary searches and lets a value store be filled by walking ``iter_key_pairs``.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from typing import Any, Generic, Iterable, Iterator, TypeVar

from loguru import logger

from .errors import MissingKey, SimilarKeys

K = TypeVar("K")


@dataclass(frozen=True)
class IndexEntry(Generic[K]):
    """A key and the offset of the first pair in which it is the smaller key."""

    key: K
    offset: int


def _distinct_sorted(keys: Iterable[K]) -> list[K]:
    # Sorting first lets duplicates be dropped by equality without hashing.
    ordered = sorted(keys)  # type: ignore[type-var]
    distinct: list[K] = []
    for key in ordered:
        if not distinct or distinct[-1] != key:
            distinct.append(key)
    return distinct


class KeyIndex(Generic[K]):
    """Immutable mapping between unordered key pairs and contiguous offsets."""

    def __init__(self, entries: Iterable[IndexEntry[K]]) -> None:
        self._entries: tuple[IndexEntry[K], ...] = tuple(entries)
        self._keys: tuple[K, ...] = tuple(entry.key for entry in self._entries)
        self._offsets: tuple[int, ...] = tuple(entry.offset for entry in self._entries)

    @classmethod
    def from_keys(cls, keys: Iterable[K]) -> "KeyIndex[K]":
        """
        Build an index from an arbitrary key collection.

        Duplicate keys are collapsed and the remaining keys sorted ascending.
        Keys are then popped smallest first; each one is recorded at the
        running offset, which afterwards advances by the number of keys still
        waiting to be popped.

        Parameters
        ----------
        keys:
            Iterable of mutually comparable keys. Order and duplicates do not
            matter.
        """
        raw = list(keys)
        pending = _distinct_sorted(raw)
        pending.reverse()

        entries: list[IndexEntry[K]] = []
        offset = 0
        while pending:
            key = pending.pop()
            entries.append(IndexEntry(key=key, offset=offset))
            offset += len(pending)

        logger.debug(
            "Built key index with {} distinct keys from {} inputs ({} pairs).",
            len(entries),
            len(raw),
            entries[-1].offset if entries else 0,
        )
        return cls(entries)

    @property
    def entries(self) -> tuple[IndexEntry[K], ...]:
        return self._entries

    @property
    def keys(self) -> tuple[K, ...]:
        """Distinct keys in ascending order."""
        return self._keys

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[K]:
        return iter(self._keys)

    def __contains__(self, key: object) -> bool:
        try:
            self.rank(key)
        except (MissingKey, TypeError):
            return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyIndex):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"KeyIndex(keys={list(self._keys)!r})"

    def total_values(self) -> int:
        """Number of unordered pairs, i.e. ``n * (n - 1) // 2`` for ``n`` keys."""
        if not self._entries:
            return 0
        return self._entries[-1].offset

    def rank(self, key: Any) -> int:
        """Return the sorted position of ``key`` or raise :class:`MissingKey`."""
        position = bisect_left(self._keys, key)
        if position == len(self._keys) or self._keys[position] != key:
            raise MissingKey(key)
        return position

    def position(self, key_a: K, key_b: K) -> int:
        """
        Resolve an unordered key pair to its dense offset.

        Raises
        ------
        SimilarKeys
            If both keys are equal, whether or not they belong to the index.
        MissingKey
            If either key is absent; the smaller key is checked first.
        """
        if key_a == key_b:
            raise SimilarKeys()

        if key_a < key_b:  # type: ignore[operator]
            left, right = key_a, key_b
        else:
            left, right = key_b, key_a

        start = self.rank(left)
        end = self.rank(right)
        return self._entries[start].offset + end - start - 1

    def pair_at(self, offset: int) -> tuple[K, K]:
        """Inverse of :meth:`position`: the ``(left, right)`` pair at ``offset``."""
        if offset < 0 or offset >= self.total_values():
            raise IndexError(f"Offset {offset} out of bounds for key index")
        start = bisect_right(self._offsets, offset) - 1
        end = start + 1 + offset - self._offsets[start]
        return self._keys[start], self._keys[end]

    def iter_key_pairs(self) -> "KeyPairIterator[K]":
        """Return a fresh iterator over all pairs in offset order."""
        return KeyPairIterator(self)


class KeyPairIterator(Generic[K]):
    """
    Cursor walking every ``(left, right)`` pair with ``left < right``.

    ``left`` is fixed at the smallest unvisited key while ``right`` walks all
    larger keys; then ``left`` advances. The n-th pair yielded sits at offset n.
    """

    def __init__(self, index: KeyIndex[K]) -> None:
        self._keys = index.keys
        self._total = index.total_values()
        self._key = 0
        self._walk = 1
        self._emitted = 0

    def __iter__(self) -> "KeyPairIterator[K]":
        return self

    def __next__(self) -> tuple[K, K]:
        size = len(self._keys)
        if self._key + self._walk >= size:
            raise StopIteration

        left = self._keys[self._key]
        right = self._keys[self._key + self._walk]

        if self._key + self._walk + 1 == size:
            self._key += 1
            self._walk = 1
        else:
            self._walk += 1

        self._emitted += 1
        return left, right

    def __length_hint__(self) -> int:
        return self._total - self._emitted
