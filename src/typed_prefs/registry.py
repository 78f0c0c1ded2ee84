"""Registry: the fields an application declares, bound to concrete stores."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from types import TracebackType
from typing import Any, ClassVar, Generic, TypeVar, overload

from typed_prefs.binding import Binding
from typed_prefs.exceptions import BindingConfigError
from typed_prefs.reset import clear_all
from typed_prefs.stores.base import Store

T = TypeVar("T")


class StoreRole(str, Enum):
    """Which of the registry's stores a field lives in."""

    PRIVATE = "private"
    SHARED = "shared"


class Field(Generic[T]):
    """Class-level declaration of one preference.

    Reading the attribute on a registry instance returns the current value,
    assigning writes it (``None`` removes an optional field) and ``del``
    restores the default.

    Parameters:
        key:             Key string in the backing store.
        value_type:      Declared type; inferred from the default if omitted.
        default:         Value read when the key is absent or mismatched.
        default_factory: Called once per registry instance to build the
                         default (e.g. a timestamp).  Exclusive with
                         ``default``.
        store:           Store role the field is persisted in.
    """

    def __init__(
        self,
        key: str,
        value_type: Any = None,
        *,
        default: T | None = None,
        default_factory: Callable[[], T] | None = None,
        store: StoreRole = StoreRole.PRIVATE,
    ) -> None:
        if not isinstance(key, str) or not key:
            raise BindingConfigError(repr(key), "key must be a non-empty string")
        if default is not None and default_factory is not None:
            raise BindingConfigError(key, "cannot set both default and default_factory")
        self.key = key
        self.value_type = value_type
        self.default = default
        self.default_factory = default_factory
        self.store = StoreRole(store)
        self.name = key

    @classmethod
    def optional(
        cls, key: str, value_type: Any = Any, *, store: StoreRole = StoreRole.PRIVATE
    ) -> Field[Any]:
        """Declare an optional field whose implicit default is ``None``."""
        return cls(key, value_type, store=store)

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def bind(self, store: Store) -> Binding[T]:
        """Create the binding for this field against *store*."""
        default = self.default_factory() if self.default_factory is not None else self.default
        return Binding(self.key, store, default, value_type=self.value_type)

    @overload
    def __get__(self, instance: None, owner: type) -> Field[T]: ...

    @overload
    def __get__(self, instance: Registry, owner: type) -> T: ...

    def __get__(self, instance: Registry | None, owner: type) -> Field[T] | T:
        if instance is None:
            return self
        return instance.binding(self.name).get()

    def __set__(self, instance: Registry, value: T | None) -> None:
        instance.binding(self.name).set(value)

    def __delete__(self, instance: Registry) -> None:
        instance.binding(self.name).delete()

    def __repr__(self) -> str:
        return f"Field(key={self.key!r}, store={self.store.value!r}, default={self.default!r})"


class Registry:
    """Ordered collection of every preference an application declares.

    Subclass and declare :class:`Field` attributes; construct the subclass
    once at startup with the two store handles and pass the instance to the
    code that needs it::

        class Profile(Registry):
            firstname = Field("firstname", str, default="Shivam", store=StoreRole.SHARED)
            cover_image = Field.optional("coverImage", bytes)

        prefs = Profile(private=InMemoryStore(), shared=InMemoryStore("group.app"))
        prefs.firstname = "Ravi"

    A key string may be used by at most one field per store role.
    """

    _fields: ClassVar[dict[str, Field[Any]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        fields: dict[str, Field[Any]] = dict(cls._fields)
        for name, value in cls.__dict__.items():
            if isinstance(value, Field):
                fields[name] = value

        owners: dict[tuple[StoreRole, str], str] = {}
        for name, declared in fields.items():
            slot = (declared.store, declared.key)
            if slot in owners:
                raise BindingConfigError(
                    name,
                    f"key '{declared.key}' is already bound to '{owners[slot]}' "
                    f"in the {declared.store.value} store",
                )
            owners[slot] = name
        cls._fields = fields

    def __init__(self, *, private: Store, shared: Store) -> None:
        self._stores: dict[StoreRole, Store] = {
            StoreRole.PRIVATE: private,
            StoreRole.SHARED: shared,
        }
        self._bindings: dict[str, Binding[Any]] = {
            name: declared.bind(self._stores[declared.store])
            for name, declared in self._fields.items()
        }

    # ── introspection ────────────────────────────────────────

    @classmethod
    def fields(cls) -> dict[str, Field[Any]]:
        """Return the declared fields by attribute name, in declaration order."""
        return dict(cls._fields)

    @classmethod
    def all_keys(cls) -> list[str]:
        """Return every key string in use, in declaration order, without repeats."""
        return list(dict.fromkeys(declared.key for declared in cls._fields.values()))

    @property
    def bindings(self) -> dict[str, Binding[Any]]:
        return dict(self._bindings)

    @property
    def stores(self) -> dict[StoreRole, Store]:
        return dict(self._stores)

    def binding(self, name: str) -> Binding[Any]:
        """Look up the binding behind the field called *name*."""
        try:
            return self._bindings[name]
        except KeyError:
            raise BindingConfigError(name, "no such field in this registry") from None

    def store(self, role: StoreRole | str) -> Store:
        return self._stores[StoreRole(role)]

    def snapshot(self) -> dict[str, Any]:
        """Return the current value of every field, keyed by field name."""
        return {name: binding.get() for name, binding in self._bindings.items()}

    # ── reset ────────────────────────────────────────────────

    def clear_all(self, *, continue_on_error: bool = False) -> None:
        """Remove every declared key from both stores.

        Afterwards every field reads its default.  See
        :func:`typed_prefs.reset.clear_all` for the failure semantics.
        """
        clear_all(
            self.all_keys(),
            list(self._stores.values()),
            continue_on_error=continue_on_error,
        )

    # ── lifecycle ────────────────────────────────────────────

    def close(self) -> None:
        closed: list[Store] = []
        for store in self._stores.values():
            if not any(store is seen for seen in closed):
                store.close()
                closed.append(store)

    def __enter__(self) -> Registry:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
