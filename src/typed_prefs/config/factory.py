# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Store factory for creating stores and registries from configuration.

Uses the Registry pattern to map type strings to store builders,
allowing extra backends without modifying factory code.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar, TypeVar

from typed_prefs.config.logging import configure_logging
from typed_prefs.config.schema import RegistryConfig, StoreConfig
from typed_prefs.exceptions import ConfigError
from typed_prefs.registry import Registry
from typed_prefs.stores import InMemoryStore, SQLiteStore, Store

R = TypeVar("R", bound=Registry)

StoreBuilder = Callable[[StoreConfig], Store]


def _build_memory(config: StoreConfig) -> Store:
    return InMemoryStore(namespace=config.namespace)


def _build_sqlite(config: StoreConfig) -> Store:
    if not config.path:
        raise ConfigError("SQLite store requires 'path' configuration")
    return SQLiteStore(config.path, namespace=config.namespace)


class StoreFactory:
    """Creates store instances from configuration.

    Store types are registered at class level and can be extended via the
    `register` class method.

    Example:
        store = StoreFactory.create(StoreConfig(type="sqlite", path="prefs.db"))
    """

    _registry: ClassVar[dict[str, StoreBuilder]] = {
        "memory": _build_memory,
        "sqlite": _build_sqlite,
    }

    @classmethod
    def register(cls, type_name: str, builder: StoreBuilder) -> None:
        """Register a custom store type.

        Args:
            type_name: Type string to use in configuration
            builder: Callable turning a StoreConfig into a Store

        Example:
            StoreFactory.register("redis", lambda cfg: RedisStore(cfg.path, cfg.namespace))
        """
        cls._registry[type_name] = builder

    @classmethod
    def registered_types(cls) -> list[str]:
        """Return list of registered store type names."""
        return list(cls._registry.keys())

    @classmethod
    def create(cls, config: StoreConfig) -> Store:
        """Create a single store.

        Raises:
            ConfigError: If the type is unknown or the configuration is incomplete
        """
        builder = cls._registry.get(config.type)
        if builder is None:
            available = ", ".join(sorted(cls.registered_types()))
            raise ConfigError(f"Unknown store type: '{config.type}'. Available types: {available}")
        return builder(config)


def create_store(config: StoreConfig) -> Store:
    """Create a store from configuration.  See :meth:`StoreFactory.create`."""
    return StoreFactory.create(config)


def open_registry(
    registry_cls: type[R],
    config: RegistryConfig | None = None,
    *,
    setup_logging: bool = False,
) -> R:
    """Build both stores from *config* and construct *registry_cls* on them.

    Args:
        registry_cls: The application's Registry subclass
        config: Store configuration; defaults to two in-memory stores
        setup_logging: Also apply the logging section of *config*

    Returns:
        A registry instance owning the created stores
    """
    config = config or RegistryConfig()
    if setup_logging:
        configure_logging(level=config.log_level, log_json=config.log_json)

    private = create_store(config.private)
    try:
        shared = create_store(config.shared)
    except ConfigError:
        private.close()
        raise
    return registry_cls(private=private, shared=shared)
