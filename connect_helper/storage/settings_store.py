"""
Settings store capability and in-process implementations.

A settings store maps option names to values that survive across requests.
The connect helper only ever writes whole values: every field change is a
read of the full value, a local mutation, and a write of the full value.
`SettingsStore.update` does exactly that with no locking, so two concurrent
writers of the same option can clobber each other (last writer wins).
`AtomicSettingsStore` wraps any store to serialise updates and adds
versioned compare-and-set for callers that need optimistic concurrency.
"""

import copy
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from ..utils.logger import get_logger

Mutator = Callable[[Any], Any]


class SettingsStore(ABC):
    """Durable key/value option storage provided by the host."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value for ``key`` or ``default`` when absent."""

    @abstractmethod
    def set(self, key: str, value: Any) -> bool:
        """Persist ``value`` under ``key``; return whether the write succeeded."""

    def update(self, key: str, mutate: Mutator, default: Any = None) -> bool:
        """
        Read, mutate and write back one option.

        Not atomic: a concurrent writer between the read and the write is
        silently overwritten.

        Args:
            key: Option name
            mutate: Receives the current value and returns the new value
            default: Value passed to ``mutate`` when the option is absent

        Returns:
            Result of the underlying ``set``
        """
        return self.set(key, mutate(self.get(key, default)))


class InMemorySettingsStore(SettingsStore):
    """
    Process-local settings store.

    Values are deep-copied on the way in and out so callers never share
    mutable state with the store, matching a serialising backend.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> bool:
        self._data[key] = copy.deepcopy(value)
        return True

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def __contains__(self, key: str) -> bool:
        return key in self._data


class AtomicSettingsStore(SettingsStore):
    """
    Single-writer wrapper around another settings store.

    ``update`` runs its read-modify-write under a re-entrant lock, so updates
    made through this wrapper never lose each other's changes. Every
    successful write bumps a per-key version that ``compare_and_set`` checks.
    Writes that bypass the wrapper are not tracked.
    """

    def __init__(self, store: SettingsStore):
        self.store = store
        self._lock = threading.RLock()
        self._versions: Dict[str, int] = {}
        self.logger = get_logger()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self.store.get(key, default)

    def set(self, key: str, value: Any) -> bool:
        with self._lock:
            return self._write(key, value)

    def update(self, key: str, mutate: Mutator, default: Any = None) -> bool:
        with self._lock:
            return self._write(key, mutate(self.store.get(key, default)))

    def version(self, key: str) -> int:
        """Return the number of successful writes made to ``key`` through this wrapper."""
        with self._lock:
            return self._versions.get(key, 0)

    def compare_and_set(self, key: str, expected_version: int, value: Any) -> bool:
        """
        Write ``value`` only if ``key`` is still at ``expected_version``.

        Returns:
            False when another write happened since the version was read
        """
        with self._lock:
            current = self._versions.get(key, 0)
            if current != expected_version:
                self.logger.debug(
                    "Settings write rejected, version changed",
                    extra={"key": key, "expected": expected_version, "current": current},
                )
                return False
            return self._write(key, value)

    def _write(self, key: str, value: Any) -> bool:
        written = self.store.set(key, value)
        if written:
            self._versions[key] = self._versions.get(key, 0) + 1
        return written
