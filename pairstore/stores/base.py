"""
Backend contract for the dense value sequence behind a pairwise storage.

Offsets handed to a store have already been validated by the key index, so an
out-of-range offset is a programming error and surfaces as the builtin
``IndexError`` rather than a pair-resolution error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, TypeVar, runtime_checkable

S = TypeVar("S", bound="Store")


@runtime_checkable
class Store(Protocol):
    """Resizable sequence of values addressed by integer offset."""

    @classmethod
    def new(cls: type[S], size: int, default: Any) -> S:
        """Create a store of exactly ``size`` slots holding ``default``."""
        ...

    @classmethod
    def with_capacity(cls: type[S], capacity: int) -> S:
        """Create an empty store with room for ``capacity`` appends."""
        ...

    def push(self, value: Any) -> None:
        ...

    def ref_at(self, offset: int) -> Any:
        ...

    def mut_ref_at(self, offset: int) -> "SlotRef":
        ...

    def set_at(self, offset: int, value: Any) -> None:
        ...

    def __len__(self) -> int:
        ...


@dataclass
class SlotRef:
    """Writable handle on a single store slot."""

    store: Store
    offset: int

    @property
    def value(self) -> Any:
        return self.store.ref_at(self.offset)

    @value.setter
    def value(self, new_value: Any) -> None:
        self.store.set_at(self.offset, new_value)

    def get(self) -> Any:
        return self.value

    def set(self, new_value: Any) -> None:
        self.value = new_value


def check_offset(offset: int, length: int) -> None:
    if offset < 0 or offset >= length:
        raise IndexError(f"Offset {offset} out of bounds for store of length {length}")
