"""
Pairwise storage façade.

A :class:`PairwiseStorage` keeps one value per unordered pair of distinct keys.
It owns a :class:`~pairstore.index.KeyIndex` that turns a key pair into a dense
offset and a value store that holds the slot at that offset. Both are built
together from the same key collection so the store always has exactly
``index.total_values()`` slots.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, Iterator, Mapping, TypeVar

import numpy as np
import pandas as pd
from loguru import logger

from ..index import KeyIndex, PairIndexError
from ..stores import ListStore, SlotRef, Store

K = TypeVar("K")
V = TypeVar("V")


class PairwiseStorage(Generic[K, V]):
    """Values addressed by unordered key pairs rather than raw offsets."""

    def __init__(self, index: KeyIndex[K], store: Store) -> None:
        self._index = index
        self._store = store

    @classmethod
    def from_keys(
        cls,
        keys: Iterable[K],
        default: V,
        *,
        store_cls: type = ListStore,
        store_options: Mapping[str, Any] | None = None,
    ) -> "PairwiseStorage[K, V]":
        """Build a storage where every pair starts out holding ``default``."""
        index = KeyIndex.from_keys(keys)
        store = store_cls.new(index.total_values(), default, **(store_options or {}))
        return cls(index, store)

    @classmethod
    def from_keys_and_strategy(
        cls,
        keys: Iterable[K],
        compute: Callable[[K, K], V],
        *,
        store_cls: type = ListStore,
        store_options: Mapping[str, Any] | None = None,
    ) -> "PairwiseStorage[K, V]":
        """
        Build a storage whose values are derived from each key pair.

        Parameters
        ----------
        keys:
            Key collection; duplicates are collapsed.
        compute:
            Called once per pair as ``compute(left, right)`` with
            ``left < right``, in offset order.
        store_cls:
            Store backend to fill; see :mod:`pairstore.stores`.
        store_options:
            Extra keyword arguments for the backend constructor, e.g. ``dtype``.
        """
        index = KeyIndex.from_keys(keys)
        store = store_cls.with_capacity(index.total_values(), **(store_options or {}))
        for left, right in index.iter_key_pairs():
            store.push(compute(left, right))
        return cls(index, store)

    @classmethod
    def from_raw_parts(cls, index: KeyIndex[K], store: Store) -> "PairwiseStorage[K, V]":
        """Assemble a storage from parts; keeping their lengths in sync is up to the caller."""
        if len(store) != index.total_values():
            logger.debug(
                "Assembling storage from a store of length {} for an index of {} pairs.",
                len(store),
                index.total_values(),
            )
        return cls(index, store)

    def into_raw_parts(self) -> tuple[KeyIndex[K], Store]:
        return self._index, self._store

    @property
    def index(self) -> KeyIndex[K]:
        return self._index

    @property
    def store(self) -> Store:
        return self._store

    def get(self, key_a: K, key_b: K) -> V:
        position = self._index.position(key_a, key_b)
        return self._store.ref_at(position)

    def get_mut(self, key_a: K, key_b: K) -> SlotRef:
        position = self._index.position(key_a, key_b)
        return self._store.mut_ref_at(position)

    def set(self, key_a: K, key_b: K, value: V) -> None:
        self.get_mut(key_a, key_b).value = value

    def __getitem__(self, pair: tuple[K, K]) -> V:
        key_a, key_b = _unpack_pair(pair)
        return self.get(key_a, key_b)

    def __setitem__(self, pair: tuple[K, K], value: V) -> None:
        key_a, key_b = _unpack_pair(pair)
        self.set(key_a, key_b, value)

    def __contains__(self, pair: object) -> bool:
        # Malformed pairs and keys that do not compare with the index's keys
        # are simply absent, as for ``KeyIndex.__contains__``.
        try:
            key_a, key_b = _unpack_pair(pair)
            self._index.position(key_a, key_b)
        except (PairIndexError, TypeError):
            return False
        return True

    def __len__(self) -> int:
        return self._index.total_values()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(keys={len(self._index)}, pairs={len(self)}, "
            f"store={type(self._store).__name__})"
        )

    def keys(self) -> tuple[K, ...]:
        return self._index.keys

    def pairs(self) -> Iterator[tuple[K, K]]:
        return self._index.iter_key_pairs()

    def values(self) -> Iterator[V]:
        for offset in range(len(self)):
            yield self._store.ref_at(offset)

    def items(self) -> Iterator[tuple[tuple[K, K], V]]:
        for offset, pair in enumerate(self._index.iter_key_pairs()):
            yield pair, self._store.ref_at(offset)

    def to_matrix(self, fill: Any = 0) -> np.ndarray:
        """
        Expand the storage into a dense symmetric ``(n, n)`` matrix.

        Rows and columns follow ``keys()``; the diagonal holds ``fill``. Only
        scalar values are supported.
        """
        size = len(self._index)
        values = np.asarray([np.asarray(value) for value in self.values()])
        if values.ndim > 1:
            raise ValueError("to_matrix() requires scalar pair values.")

        fill_array = np.asarray(fill)
        dtype = fill_array.dtype if values.size == 0 else np.result_type(values, fill_array)
        matrix = np.full((size, size), fill, dtype=dtype)
        # Row-major upper-triangle order matches the offset order of the pairs.
        rows, cols = np.triu_indices(size, k=1)
        matrix[rows, cols] = values
        matrix[cols, rows] = values
        return matrix

    def to_frame(self) -> pd.DataFrame:
        """Long-format table with ``left``, ``right`` and ``value`` columns in offset order."""
        records = [(left, right, value) for (left, right), value in self.items()]
        return pd.DataFrame.from_records(records, columns=["left", "right", "value"])


Lookup = PairwiseStorage


def _unpack_pair(pair: Any) -> tuple[Any, Any]:
    if not isinstance(pair, tuple) or len(pair) != 2:
        raise TypeError(f"Expected a (key_a, key_b) tuple, got {pair!r}")
    return pair[0], pair[1]
