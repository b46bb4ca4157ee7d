"""Default in-memory backend: a flat Python list."""

from __future__ import annotations

import copy
from typing import Any, Iterator

from .base import SlotRef, check_offset


class ListStore:
    """Contiguous, zero-indexed list of arbitrary Python values."""

    def __init__(self, values: list[Any] | None = None) -> None:
        self._values: list[Any] = values if values is not None else []

    @classmethod
    def new(cls, size: int, default: Any) -> "ListStore":
        # Deep copy per slot so no part of a mutable default is shared between pairs.
        return cls([copy.deepcopy(default) for _ in range(size)])

    @classmethod
    def with_capacity(cls, capacity: int) -> "ListStore":
        # Lists grow on demand; capacity is only a hint.
        return cls()

    def push(self, value: Any) -> None:
        self._values.append(value)

    def ref_at(self, offset: int) -> Any:
        check_offset(offset, len(self._values))
        return self._values[offset]

    def mut_ref_at(self, offset: int) -> SlotRef:
        check_offset(offset, len(self._values))
        return SlotRef(self, offset)

    def set_at(self, offset: int, value: Any) -> None:
        check_offset(offset, len(self._values))
        self._values[offset] = value

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ListStore):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"ListStore({self._values!r})"

    def to_list(self) -> list[Any]:
        return list(self._values)
