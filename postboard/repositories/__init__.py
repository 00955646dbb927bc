"""
Persistence adapters.

The JSON store owns the on-disk document; services and routers should go
through it instead of touching the file directly.
"""

from .errors import AlreadyExists, CorruptStore, InvalidRecord, NotFound, StoreError, StoreIOError
from .json_storage import JSONStore, ensure_store

__all__ = [
    "AlreadyExists",
    "CorruptStore",
    "InvalidRecord",
    "JSONStore",
    "NotFound",
    "StoreError",
    "StoreIOError",
    "ensure_store",
]
