"""typed_prefs: typed, keyed preferences over flat key-value stores.

Every preference is a binding of one key to one store with a default.
Reads fall back to the default, writing ``None`` deletes, and a registry
groups the bindings an application declares across a private and a
shared store.
"""

from typed_prefs.binding import Binding
from typed_prefs.exceptions import (
    BindingConfigError,
    ConfigError,
    PreferenceError,
    ResetError,
    ResetFailure,
    StoreError,
)
from typed_prefs.registry import Field, Registry, StoreRole
from typed_prefs.reset import clear_all

__all__ = [
    "Binding",
    "BindingConfigError",
    "ConfigError",
    "Field",
    "PreferenceError",
    "Registry",
    "ResetError",
    "ResetFailure",
    "StoreError",
    "StoreRole",
    "clear_all",
]
