# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Configuration models for opening a registry.

These Pydantic models describe where the private and shared stores live.
A JSON document matching :class:`RegistryConfig` can be loaded with
``RegistryConfig.model_validate_json``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_SHARED_NAMESPACE = "group.com.organisation.appname"


class StoreConfig(BaseModel):
    """Configuration for a single store.

    Attributes:
        type: Store type ("memory" or "sqlite")
        path: Path to SQLite database file (for sqlite type)
        namespace: Suite identifier the store is partitioned by
    """

    model_config = {"frozen": True}

    type: str = "memory"
    path: str = ""
    namespace: str = ""


def _shared_store_config() -> StoreConfig:
    return StoreConfig(namespace=DEFAULT_SHARED_NAMESPACE)


class RegistryConfig(BaseModel):
    """Complete configuration for a registry and its two stores.

    Attributes:
        private: The per-installation store
        shared: The store shared across related processes
        log_level: Level for the typed_prefs logger
        log_json: Emit JSON log lines instead of console output
    """

    model_config = {"frozen": True}

    private: StoreConfig = Field(default_factory=StoreConfig)
    shared: StoreConfig = Field(default_factory=_shared_store_config)
    log_level: str = "WARNING"
    log_json: bool = False
