"""Shared test fixtures."""

import pytest

from tests.fakes import Profile
from typed_prefs.stores import InMemoryStore


@pytest.fixture
def private_store():
    return InMemoryStore()


@pytest.fixture
def shared_store():
    return InMemoryStore("group.com.organisation.appname")


@pytest.fixture
def profile(private_store, shared_store):
    return Profile(private=private_store, shared=shared_store)
