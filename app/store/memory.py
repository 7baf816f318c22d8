"""In-process storage backend.  Nothing survives a restart."""

from typing import Optional

from app.store.base import StorageBackend


class InMemoryBackend(StorageBackend):
    """Dict-backed medium, used by tests and throwaway runs."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def write(self, key: str, raw: str) -> None:
        self.data[key] = raw
