"""Custom exceptions for the typed_prefs package."""

from __future__ import annotations

from dataclasses import dataclass


class PreferenceError(Exception):
    """Base exception for all preference-related errors."""


class BindingConfigError(PreferenceError):
    """Raised when a binding or registry is declared incorrectly."""

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        super().__init__(f"Preference '{name}' misconfigured: {message}")


class ConfigError(PreferenceError):
    """Raised when store configuration cannot be turned into a store."""


class StoreError(PreferenceError):
    """Raised when a store operation fails."""

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        msg = f"Store error during '{operation}'"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


@dataclass(frozen=True)
class ResetFailure:
    """One ``(key, store)`` pair that could not be removed during a reset."""

    key: str
    namespace: str
    error: Exception


class ResetError(StoreError):
    """Raised by a best-effort reset when one or more removals failed."""

    def __init__(self, failures: list[ResetFailure]) -> None:
        self.failures = failures
        pairs = ", ".join(f"{f.key!r}@{f.namespace or '<private>'}" for f in failures)
        super().__init__("clear_all", f"{len(failures)} removal(s) failed: {pairs}")
