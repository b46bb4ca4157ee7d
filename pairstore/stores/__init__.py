"""Value store backends addressed by dense pair offsets."""

from .base import SlotRef, Store  # noqa: F401
from .list_store import ListStore  # noqa: F401
from .numpy_store import NumpyStore  # noqa: F401
from .registry import STORE_BACKENDS, resolve_store  # noqa: F401
from .tensor_store import TensorStore  # noqa: F401
