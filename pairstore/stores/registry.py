"""Name-based lookup of store backends, used by configuration files."""

from __future__ import annotations

from .list_store import ListStore
from .numpy_store import NumpyStore
from .tensor_store import TensorStore

STORE_BACKENDS: dict[str, type] = {
    "list": ListStore,
    "numpy": NumpyStore,
    "torch": TensorStore,
}


def resolve_store(name: str) -> type:
    try:
        return STORE_BACKENDS[name.lower()]
    except KeyError as exc:
        choices = ", ".join(sorted(STORE_BACKENDS))
        raise ValueError(f"Unknown store backend '{name}'. Expected one of: {choices}.") from exc
