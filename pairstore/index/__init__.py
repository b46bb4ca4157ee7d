"""Dense offsets for unordered key pairs."""

from .errors import MissingKey, PairIndexError, SimilarKeys  # noqa: F401
from .key_index import IndexEntry, KeyIndex, KeyPairIterator  # noqa: F401
