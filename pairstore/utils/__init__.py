"""Utility helpers shared across modules."""

from .config import get_by_dotted_path, load_config  # noqa: F401
