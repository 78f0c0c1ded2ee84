"""Binding: a typed accessor over one key of one store."""

from __future__ import annotations

import copy
import logging
import types
from typing import Any, Generic, Optional, TypeVar, Union, get_args, get_origin

from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticSchemaGenerationError

from typed_prefs.exceptions import BindingConfigError
from typed_prefs.stores.base import Store

T = TypeVar("T")

logger = logging.getLogger(__name__)


def accepts_none(value_type: Any) -> bool:
    """Return ``True`` when ``None`` is a legal value of *value_type*."""
    if value_type is Any or value_type is None or value_type is type(None):
        return True
    if get_origin(value_type) in (Union, types.UnionType):
        return type(None) in get_args(value_type)
    return False


def type_name(value_type: Any) -> str:
    return getattr(value_type, "__name__", None) or repr(value_type)


class Binding(Generic[T]):
    """Pairs one store, one key and one default value.

    Reads never fail: an absent key, or a stored value that does not
    validate as ``value_type``, resolves to ``default``.  Writing ``None``
    to an optional binding removes the key instead of storing a marker.
    The binding keeps no copy of the value; the store is the only source
    of truth.  No locking is done: a ``get`` followed by a ``set`` on the
    same key is not atomic.

    Parameters:
        key:        Non-empty key string, fixed for the binding's lifetime.
        store:      Backing store.  Not owned; usually shared with other
                    bindings.
        default:    Value returned when the store has nothing usable.  A
                    ``None`` default makes the binding optional.
        value_type: Declared type, anything pydantic can validate
                    (``str``, ``int | None``, ``list[str]``, ``bytes`` ...).
                    Inferred from ``default`` when omitted.
    """

    def __init__(
        self,
        key: str,
        store: Store,
        default: T | None = None,
        *,
        value_type: Any = None,
    ) -> None:
        if not isinstance(key, str) or not key:
            raise BindingConfigError(repr(key), "key must be a non-empty string")

        if value_type is None:
            value_type = Any if default is None else type(default)
        if default is None and not accepts_none(value_type):
            value_type = Optional[value_type]  # noqa: UP007

        try:
            adapter: TypeAdapter[Any] = TypeAdapter(value_type)
        except PydanticSchemaGenerationError as exc:
            raise BindingConfigError(key, f"unsupported value type {value_type!r}") from exc

        self._key = key
        self._store = store
        self._default = default
        self._value_type = value_type
        self._adapter = adapter
        self._optional = accepts_none(value_type)

    @classmethod
    def optional(cls, key: str, store: Store, value_type: Any = Any) -> Binding[Any]:
        """Create an optional binding whose implicit default is ``None``."""
        return cls(key, store, None, value_type=value_type)

    # ── identity ─────────────────────────────────────────────

    @property
    def key(self) -> str:
        return self._key

    @property
    def store(self) -> Store:
        return self._store

    @property
    def default(self) -> T | None:
        return copy.deepcopy(self._default)

    @property
    def value_type(self) -> Any:
        return self._value_type

    @property
    def is_optional(self) -> bool:
        """``True`` when writing ``None`` is a deletion request."""
        return self._optional

    # ── access ───────────────────────────────────────────────

    def get(self) -> T:
        """Return the stored value, or the default when absent or mismatched."""
        raw = self._store.get(self._key)
        if raw is None:
            return self.default  # type: ignore[return-value]
        try:
            value: T = self._adapter.validate_python(raw, strict=True)
        except ValidationError:
            logger.debug(
                "preference.type_mismatch: %s expected %s, got %s",
                self._key,
                type_name(self._value_type),
                type(raw).__name__,
            )
            return self.default  # type: ignore[return-value]
        return value

    def set(self, value: T | None) -> None:
        """Persist *value*; ``None`` removes the key from the store.

        Raises:
            TypeError: If *value* is ``None`` and the binding is not optional.
        """
        if value is None:
            if not self._optional:
                raise TypeError(
                    f"Preference '{self._key}' is not optional; use delete() to restore "
                    "its default"
                )
            self._store.delete(self._key)
            logger.debug("preference.removed: %s@%s", self._key, self._store.namespace)
            return

        self._store.set(self._key, value)
        logger.debug(
            "preference.set: %s@%s (%s)", self._key, self._store.namespace, type(value).__name__
        )

    def delete(self) -> None:
        """Remove the key so the next read returns the default."""
        self._store.delete(self._key)
        logger.debug("preference.removed: %s@%s", self._key, self._store.namespace)

    def is_set(self) -> bool:
        """Return ``True`` if the store currently holds a value for the key."""
        return self._store.exists(self._key)

    def __repr__(self) -> str:
        return (
            f"Binding(key={self._key!r}, type={type_name(self._value_type)}, "
            f"default={self._default!r}, store={self._store!r})"
        )
