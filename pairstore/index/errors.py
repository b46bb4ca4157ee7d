"""Errors raised when a key pair cannot be resolved to a dense offset."""

from __future__ import annotations

from typing import Any


class PairIndexError(LookupError):
    """Base class for key-pair resolution failures."""

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.args == other.args  # type: ignore[union-attr]

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class SimilarKeys(PairIndexError):
    """Both keys of the pair are equal; a key cannot be paired with itself."""

    def __init__(self) -> None:
        super().__init__()

    def __str__(self) -> str:
        return "A pair must reference two distinct keys."


class MissingKey(PairIndexError):
    """The key is not part of the key set the index was built from."""

    def __init__(self, key: Any) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Key {self.key!r} missing from key index"
