"""
NumPy-backed store for numeric pair values.

Slots live in one contiguous ``ndarray``. Each slot may itself be an array
(e.g. a feature vector per pair); its shape is taken from the default value or
from the first pushed value.

Without an explicit ``dtype`` the buffer widens to fit every incoming value
(``int`` to ``float``, short to long strings, mixed kinds to ``object``). With
an explicit ``dtype`` values that would be narrowed across kinds are rejected.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from .base import SlotRef, check_offset

_TEXT_KINDS = frozenset("USO")


def _promote(current: np.dtype, incoming: np.dtype) -> np.dtype:
    if current == incoming:
        return current
    # NumPy would otherwise stringify numbers mixed with text.
    if current.kind != incoming.kind and (
        current.kind in _TEXT_KINDS or incoming.kind in _TEXT_KINDS
    ):
        return np.dtype(object)
    try:
        return np.result_type(current, incoming)
    except TypeError:
        return np.dtype(object)


class NumpyStore:
    """Flat ``numpy.ndarray`` store with amortised appends."""

    def __init__(
        self,
        data: np.ndarray | None = None,
        *,
        length: int | None = None,
        capacity: int = 0,
        dtype: Any = None,
    ) -> None:
        self._data = data
        self._length = length if length is not None else (0 if data is None else data.shape[0])
        self._capacity = capacity
        self._dtype = np.dtype(dtype) if dtype is not None else None

    @classmethod
    def new(cls, size: int, default: Any, *, dtype: Any = None) -> "NumpyStore":
        sample = np.asarray(default, dtype=dtype)
        data = np.empty((size, *sample.shape), dtype=sample.dtype)
        data[...] = sample
        return cls(data, length=size, dtype=dtype)

    @classmethod
    def with_capacity(cls, capacity: int, *, dtype: Any = None) -> "NumpyStore":
        # Allocation waits for the first value so the slot shape is known.
        return cls(None, length=0, capacity=capacity, dtype=dtype)

    def _coerce(self, value: Any) -> np.ndarray:
        sample = np.asarray(value)
        if self._dtype is not None:
            if not np.can_cast(sample.dtype, self._dtype, casting="same_kind"):
                raise TypeError(
                    f"Cannot store a {sample.dtype} value in a store of dtype {self._dtype}"
                )
            return sample.astype(self._dtype)
        if self._data is not None:
            target = _promote(self._data.dtype, sample.dtype)
            if target != self._data.dtype:
                self._data = self._data.astype(target)
        return sample

    def push(self, value: Any) -> None:
        sample = self._coerce(value)
        if self._data is None:
            capacity = max(self._capacity, 1)
            self._data = np.empty((capacity, *sample.shape), dtype=sample.dtype)
        elif self._length == self._data.shape[0]:
            grown = np.empty(
                (max(1, self._data.shape[0] * 2), *self._data.shape[1:]),
                dtype=self._data.dtype,
            )
            grown[: self._length] = self._data[: self._length]
            self._data = grown
        self._data[self._length] = sample
        self._length += 1

    def ref_at(self, offset: int) -> Any:
        check_offset(offset, self._length)
        return self._data[offset]  # type: ignore[index]

    def mut_ref_at(self, offset: int) -> SlotRef:
        check_offset(offset, self._length)
        return SlotRef(self, offset)

    def set_at(self, offset: int, value: Any) -> None:
        check_offset(offset, self._length)
        self._data[offset] = self._coerce(value)  # type: ignore[index]

    def __len__(self) -> int:
        return self._length

    def __repr__(self) -> str:
        return f"NumpyStore(length={self._length}, dtype={self.dtype})"

    @property
    def dtype(self) -> np.dtype | None:
        return self._data.dtype if self._data is not None else self._dtype

    def as_array(self) -> np.ndarray:
        """Read-only view on the filled slots."""
        if self._data is None:
            return np.empty((0,), dtype=self._dtype or np.float64)
        view = self._data[: self._length].view()
        view.flags.writeable = False
        return view
