"""Persistent key-value store and its storage backends."""

from app.store.base import PersistentKeyValueStore, StorageBackend, WriteResult
from app.store.memory import InMemoryBackend

__all__ = [
    "PersistentKeyValueStore",
    "StorageBackend",
    "WriteResult",
    "InMemoryBackend",
]
