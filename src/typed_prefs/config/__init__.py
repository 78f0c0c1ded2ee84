# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Configuration: store settings, the store factory and logging setup."""

from typed_prefs.config.factory import StoreFactory, create_store, open_registry
from typed_prefs.config.logging import configure_logging
from typed_prefs.config.schema import DEFAULT_SHARED_NAMESPACE, RegistryConfig, StoreConfig

__all__ = [
    "DEFAULT_SHARED_NAMESPACE",
    "RegistryConfig",
    "StoreConfig",
    "StoreFactory",
    "configure_logging",
    "create_store",
    "open_registry",
]
