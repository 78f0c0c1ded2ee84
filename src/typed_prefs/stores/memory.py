"""InMemoryStore: zero-config, dict-backed storage for development and testing."""

from __future__ import annotations

import copy
from typing import Any

from typed_prefs.stores.base import Store


class InMemoryStore(Store):
    """In-memory store using a plain dict.  Data is lost on process exit.

    Values are copied on the way in and out, so callers never share
    mutable state with the store.

    Parameters:
        namespace: Suite identifier, used only for identification and logs.
    """

    def __init__(self, namespace: str = "") -> None:
        self.namespace = namespace
        self._data: dict[str, Any] = {}

    def get(self, key: str) -> Any | None:
        return copy.deepcopy(self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        if value is None:
            self._data.pop(key, None)
            return
        self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def list_keys(self) -> list[str]:
        return list(self._data.keys())

    def exists(self, key: str) -> bool:
        return key in self._data

    def clear(self) -> None:
        self._data.clear()
