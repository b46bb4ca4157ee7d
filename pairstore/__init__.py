"""
Compact storage for values keyed by unordered pairs of keys.

Modules are grouped into the key index (pair -> dense offset), pluggable value
stores, the storage façade tying both together, and configuration/reporting
utilities.
"""

from .index import IndexEntry, KeyIndex, MissingKey, PairIndexError, SimilarKeys  # noqa: F401
from .storage import Lookup, PairwiseStorage, StorageSettings, storage_from_config  # noqa: F401
from .stores import ListStore, NumpyStore, SlotRef, Store, TensorStore  # noqa: F401
