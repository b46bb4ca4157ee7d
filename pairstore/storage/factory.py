"""Build pairwise storages from YAML files or configuration mappings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

import numpy as np
import torch
from loguru import logger

from ..stores import resolve_store
from ..utils import get_by_dotted_path, load_config
from .pairwise import PairwiseStorage

DEFAULT_BACKEND = "list"

_UNSET: Any = object()


@dataclass(frozen=True)
class StorageSettings:
    """
    The ``storage`` section of a configuration file.

    ``backend`` names a store from :data:`pairstore.stores.STORE_BACKENDS`;
    ``dtype`` optionally pins the element type of the ``numpy``/``torch``
    backends (e.g. ``float32``).
    """

    backend: str = DEFAULT_BACKEND
    dtype: str | None = None

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | Path | str) -> "StorageSettings":
        """Read settings from a mapping or from the YAML file at ``config``."""
        if not isinstance(config, Mapping):
            config = load_config(config)

        backend = str(get_by_dotted_path(config, "storage.backend", DEFAULT_BACKEND)).lower()
        resolve_store(backend)
        dtype = get_by_dotted_path(config, "storage.dtype")
        if dtype is not None and backend == "list":
            raise ValueError("'storage.dtype' only applies to the numpy and torch backends.")
        return cls(backend=backend, dtype=None if dtype is None else str(dtype))

    def store_options(self) -> dict[str, Any]:
        if self.dtype is None:
            return {}
        if self.backend == "torch":
            dtype = getattr(torch, self.dtype, None)
            if not isinstance(dtype, torch.dtype):
                raise ValueError(f"Unknown torch dtype '{self.dtype}'.")
            return {"dtype": dtype}
        try:
            return {"dtype": np.dtype(self.dtype)}
        except TypeError as exc:
            raise ValueError(f"Unknown numpy dtype '{self.dtype}'.") from exc


def storage_from_config(
    keys: Iterable[Any],
    config: Mapping[str, Any] | Path | str,
    *,
    default: Any = _UNSET,
    compute: Callable[[Any, Any], Any] | None = None,
) -> PairwiseStorage:
    """
    Create a storage laid out as described by ``config``.

    ``config`` is either an already parsed mapping or the path of a YAML file
    such as ``configs/default.yaml``. Exactly one of ``default`` (fill every
    pair) or ``compute`` (derive each pair's value) must be given.

    Examples
    --------
    >>> storage = storage_from_config([1, 2, 3], {"storage": {"backend": "list"}}, default=0)
    >>> storage.get(1, 3)
    0
    """
    if (default is _UNSET) == (compute is None):
        raise ValueError("Provide exactly one of 'default' or 'compute'.")

    settings = StorageSettings.from_config(config)
    store_cls = resolve_store(settings.backend)
    options = settings.store_options()

    if compute is not None:
        storage = PairwiseStorage.from_keys_and_strategy(
            keys, compute, store_cls=store_cls, store_options=options
        )
    else:
        storage = PairwiseStorage.from_keys(
            keys, default, store_cls=store_cls, store_options=options
        )

    logger.info(
        "Built pairwise storage with {} keys and {} pairs on the '{}' backend.",
        len(storage.index),
        len(storage),
        settings.backend,
    )
    return storage
