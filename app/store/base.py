"""
Persistent key-value store.

Maps a string key to a JSON-serializable value and writes every change
through to a :class:`StorageBackend`.

Initialization is two-phase and the transition is observable:

1. :meth:`PersistentKeyValueStore.register`: the in-memory value is the
   caller's default.  No I/O happens.
2. :meth:`PersistentKeyValueStore.hydrate`: runs once per key.  The
   persisted value, if any, replaces the default; a missing, unreadable
   or validator-rejected value leaves the default in place.
   :meth:`is_hydrated` flips to ``True`` and :meth:`on_hydrated`
   callbacks fire exactly once.

Reads before hydration see the default.  That window is accepted: it is
bounded and closes on its own.

Writes are fail-open.  :meth:`update` always applies ``updater(old)`` to
the in-memory value; if serialization or the backend write fails the
fault is logged and reported in the returned :class:`WriteResult`, and
callers are expected to ignore it.  Do not turn this into a fail-closed
write: a lost durability write must never block the in-memory update.
"""

from __future__ import annotations

import copy
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Optional

from app.core.exceptions import PersistenceFault

logger = logging.getLogger(__name__)

Updater = Callable[[Any], Any]
HydrationCallback = Callable[[str, Any], None]
# Raises ValueError (pydantic ValidationError included) for unusable values
Validator = Callable[[Any], Any]


class StorageBackend(ABC):
    """Durable medium holding one serialized JSON document per key."""

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """Return the raw JSON text for *key*, or ``None`` if absent.

        Raises:
            PersistenceFault: If the medium cannot be read.
        """
        ...

    @abstractmethod
    def write(self, key: str, raw: str) -> None:
        """Store raw JSON text under *key*.

        Raises:
            PersistenceFault: If the medium cannot be written.
        """
        ...


@dataclass(frozen=True)
class WriteResult:
    """Outcome of the durable half of an update."""

    ok: bool
    error: Optional[str] = None


class PersistentKeyValueStore:
    """Process-wide key -> JSON value store with write-through persistence."""

    def __init__(self, backend: StorageBackend, prefix: str = ""):
        self.backend = backend
        self.prefix = prefix
        self._values: dict[str, Any] = {}
        self._hydrated: set[str] = set()
        self._callbacks: dict[str, list[HydrationCallback]] = {}
        self._validators: dict[str, Validator] = {}

    # ------------------------------------------------------------------
    # Phase 1
    # ------------------------------------------------------------------

    def register(self, key: str, default: Any, validator: Optional[Validator] = None) -> None:
        """Declare *key* with its default value.  Re-registering is a no-op.

        *validator* is called on the persisted value during hydration; a
        ``ValueError`` from it keeps the default.
        """
        if key in self._values:
            return
        self._values[key] = copy.deepcopy(default)
        if validator is not None:
            self._validators[key] = validator

    def keys(self) -> list[str]:
        return list(self._values)

    def get(self, key: str) -> Any:
        """Current in-memory value (a copy; mutate through :meth:`update`)."""
        return copy.deepcopy(self._values[self._require(key)])

    # ------------------------------------------------------------------
    # Phase 2
    # ------------------------------------------------------------------

    def is_hydrated(self, key: str) -> bool:
        return key in self._hydrated

    @property
    def fully_hydrated(self) -> bool:
        return all(key in self._hydrated for key in self._values)

    def on_hydrated(self, key: str, callback: HydrationCallback) -> None:
        """Call ``callback(key, value)`` once *key* has been hydrated.

        Fires immediately when hydration already happened.
        """
        self._require(key)
        if key in self._hydrated:
            callback(key, self.get(key))
            return
        self._callbacks.setdefault(key, []).append(callback)

    def hydrate(self, key: Optional[str] = None) -> None:
        """Load persisted values for *key* (or every registered key).

        Keys that were already hydrated are skipped.
        """
        targets = [self._require(key)] if key is not None else list(self._values)
        for target in targets:
            if target in self._hydrated:
                continue
            self._hydrate_one(target)

    def _hydrate_one(self, key: str) -> None:
        try:
            raw = self.backend.read(self._storage_key(key))
            if raw is not None:
                value = json.loads(raw)
                validator = self._validators.get(key)
                if validator is not None:
                    validator(value)
                self._values[key] = value
                logger.debug("Hydrated '%s' from storage", key)
        except (PersistenceFault, ValueError) as e:
            # Unreadable, corrupt or wrongly shaped: the default stays authoritative
            logger.warning("Could not hydrate '%s', keeping default: %s", key, e)

        self._hydrated.add(key)
        for callback in self._callbacks.pop(key, []):
            callback(key, self.get(key))

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def update(self, key: str, updater: Updater) -> WriteResult:
        """Read-modify-write *key* and write the result through.

        The in-memory value reflects ``updater(old)`` whatever happens to
        the persistence write.
        """
        self._require(key)
        new_value = updater(copy.deepcopy(self._values[key]))
        self._values[key] = new_value
        return self._persist(key, new_value)

    def set(self, key: str, value: Any) -> WriteResult:
        return self.update(key, lambda _old: value)

    def _persist(self, key: str, value: Any) -> WriteResult:
        try:
            raw = json.dumps(value, ensure_ascii=False)
            self.backend.write(self._storage_key(key), raw)
        except (PersistenceFault, TypeError, ValueError) as e:
            # Fail-open: durability is lost for this write, the update is not
            logger.warning("Write-through failed for '%s': %s", key, e)
            return WriteResult(ok=False, error=str(e))
        return WriteResult(ok=True)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _storage_key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def _require(self, key: str) -> str:
        if key not in self._values:
            raise KeyError(f"Key '{key}' is not registered. Registered: {sorted(self._values)}")
        return key
