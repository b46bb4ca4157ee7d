"""Pairwise storage façade and its construction helpers."""

from .factory import StorageSettings, storage_from_config  # noqa: F401
from .pairwise import Lookup, PairwiseStorage  # noqa: F401
