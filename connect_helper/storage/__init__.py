"""Settings storage capability and in-process stores."""

from .settings_store import AtomicSettingsStore, InMemorySettingsStore, SettingsStore

__all__ = [
    "AtomicSettingsStore",
    "InMemorySettingsStore",
    "SettingsStore",
]
