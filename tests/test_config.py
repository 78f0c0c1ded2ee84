"""Tests for configuration models and the store factory."""

import logging

import pytest

from tests.fakes import Profile
from typed_prefs import ConfigError
from typed_prefs.config import (
    DEFAULT_SHARED_NAMESPACE,
    RegistryConfig,
    StoreConfig,
    StoreFactory,
    create_store,
    open_registry,
)
from typed_prefs.stores import InMemoryStore, SQLiteStore


def test_default_config_is_two_memory_stores():
    config = RegistryConfig()
    assert config.private.type == "memory"
    assert config.shared.namespace == DEFAULT_SHARED_NAMESPACE


def test_config_from_json(tmp_path):
    db = tmp_path / "prefs.db"
    raw = (
        '{"private": {"type": "sqlite", "path": "%s"},'
        ' "shared": {"type": "sqlite", "path": "%s", "namespace": "group.test"}}' % (db, db)
    )
    config = RegistryConfig.model_validate_json(raw)
    assert config.shared.namespace == "group.test"
    assert config.log_level == "WARNING"


def test_create_memory_store():
    store = create_store(StoreConfig(namespace="group.app"))
    assert isinstance(store, InMemoryStore)
    assert store.namespace == "group.app"


def test_create_sqlite_store(tmp_path):
    store = create_store(StoreConfig(type="sqlite", path=str(tmp_path / "p.db")))
    assert isinstance(store, SQLiteStore)
    store.close()


def test_sqlite_requires_path():
    with pytest.raises(ConfigError):
        create_store(StoreConfig(type="sqlite"))


def test_unknown_type():
    with pytest.raises(ConfigError, match="Unknown store type"):
        create_store(StoreConfig(type="redis"))


def test_register_custom_type():
    StoreFactory.register("custom_memory", lambda cfg: InMemoryStore(f"custom:{cfg.namespace}"))
    try:
        store = create_store(StoreConfig(type="custom_memory", namespace="x"))
        assert store.namespace == "custom:x"
        assert "custom_memory" in StoreFactory.registered_types()
    finally:
        StoreFactory._registry.pop("custom_memory")


def test_open_registry_defaults():
    prefs = open_registry(Profile)
    assert prefs.firstname == "Shivam"
    assert prefs.store("shared").namespace == DEFAULT_SHARED_NAMESPACE


def test_open_registry_sqlite_persists(tmp_path):
    db = str(tmp_path / "prefs.db")
    config = RegistryConfig(
        private=StoreConfig(type="sqlite", path=db),
        shared=StoreConfig(type="sqlite", path=db, namespace="group.test"),
    )

    with open_registry(Profile, config) as prefs:
        prefs.firstname = "Ravi"
        prefs.cover_image = b"img"

    with open_registry(Profile, config) as reopened:
        assert reopened.firstname == "Ravi"
        assert reopened.cover_image == b"img"
        reopened.clear_all()
        assert reopened.firstname == "Shivam"
        assert reopened.cover_image is None


@pytest.fixture
def restore_logging():
    yield
    prefs_logger = logging.getLogger("typed_prefs")
    prefs_logger.handlers.clear()
    prefs_logger.propagate = True
    prefs_logger.setLevel(logging.NOTSET)


def test_open_registry_with_logging(restore_logging):
    config = RegistryConfig(log_level="DEBUG", log_json=True)
    prefs = open_registry(Profile, config, setup_logging=True)
    prefs.firstname = "Ravi"
    assert prefs.firstname == "Ravi"
