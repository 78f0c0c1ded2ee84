"""Storage backends behind preference bindings."""

from typed_prefs.stores.base import Store
from typed_prefs.stores.memory import InMemoryStore
from typed_prefs.stores.sqlite import SQLiteStore

__all__ = ["InMemoryStore", "SQLiteStore", "Store"]
