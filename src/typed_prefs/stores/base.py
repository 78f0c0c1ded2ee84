"""Store protocol: flat key-value persistence behind every binding."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Store(ABC):
    """Abstract base for all storage backends.

    A store instance is one flat keyspace (a "suite").  Several instances
    may coexist, for example a private per-installation store and a store
    shared across related processes; a key is only unique within one
    instance.  The store is agnostic to what is being stored and never
    interprets values: type checking belongs to the binding on top.

    ``None`` is the absent marker, so a store never reports ``None`` as a
    stored value.
    """

    namespace: str = ""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the stored raw value, or ``None`` if not found."""
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Create or overwrite a value."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete a value.  No-op if the key does not exist."""
        ...

    @abstractmethod
    def list_keys(self) -> list[str]:
        """Return all keys held by this store."""
        ...

    def exists(self, key: str) -> bool:
        """Return ``True`` if the key is present."""
        return self.get(key) is not None

    def clear(self) -> None:
        """Delete every key held by this store instance."""
        for key in self.list_keys():
            self.delete(key)

    def close(self) -> None:
        """Release any underlying resources.  Default is a no-op."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(namespace={self.namespace!r})"
