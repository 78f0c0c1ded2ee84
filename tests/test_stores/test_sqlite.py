"""Tests for SQLiteStore."""

from datetime import UTC, datetime

import pytest

from typed_prefs import Binding, StoreError
from typed_prefs.stores import SQLiteStore
from typed_prefs.stores.sqlite import decode_value, encode_value


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "prefs.db"


@pytest.fixture
def store(db_path):
    s = SQLiteStore(db_path)
    yield s
    s.close()


def test_get_nonexistent(store):
    assert store.get("key") is None


def test_set_and_get_scalars(store):
    store.set("name", "Ravi")
    store.set("grade", 7)
    store.set("ratio", 0.5)
    store.set("active", False)
    assert store.get("name") == "Ravi"
    assert store.get("grade") == 7
    assert store.get("ratio") == 0.5
    assert store.get("active") is False


def test_bytes_and_datetime_keep_their_type(store):
    stamp = datetime(2024, 5, 17, 9, 30, tzinfo=UTC)
    store.set("image", b"\x00\x01\xff")
    store.set("modified", stamp)
    assert store.get("image") == b"\x00\x01\xff"
    assert store.get("modified") == stamp


def test_collections(store):
    store.set("subjects", ["English", "Maths"])
    store.set("teachers", {"English": "Mrs. Jaggi"})
    assert store.get("subjects") == ["English", "Maths"]
    assert store.get("teachers") == {"English": "Mrs. Jaggi"}


def test_overwrite(store):
    store.set("k", "a")
    store.set("k", "b")
    assert store.get("k") == "b"
    assert store.list_keys() == ["k"]


def test_delete(store):
    store.set("k", 1)
    store.delete("k")
    assert store.get("k") is None
    assert not store.exists("k")


def test_delete_nonexistent(store):
    store.delete("nope")  # should not raise


def test_namespaces_share_a_file(db_path):
    private = SQLiteStore(db_path)
    shared = SQLiteStore(db_path, namespace="group.app")
    private.set("firstname", "private")
    shared.set("firstname", "shared")

    assert private.get("firstname") == "private"
    assert shared.get("firstname") == "shared"

    shared.clear()
    assert shared.list_keys() == []
    assert private.get("firstname") == "private"
    private.close()
    shared.close()


def test_visible_to_another_store_on_same_file(db_path):
    writer = SQLiteStore(db_path, namespace="group.app")
    reader = SQLiteStore(db_path, namespace="group.app")
    writer.set("isActive", True)
    assert reader.get("isActive") is True
    writer.close()
    reader.close()


def test_unstorable_value_raises_store_error(store):
    with pytest.raises(StoreError) as exc_info:
        store.set("k", object())
    assert exc_info.value.operation == "set"


def test_unusable_path_raises_store_error(tmp_path):
    store = SQLiteStore(tmp_path)  # a directory, not a file
    with pytest.raises(StoreError):
        store.get("k")


def test_encoding_is_tagged_json():
    encoded = encode_value({"img": b"ab"})
    assert "__bytes__" in encoded
    assert decode_value(encoded) == {"img": b"ab"}


def test_dict_shaped_like_a_tag_round_trips(store):
    store.set("meta", {"__bytes__": "aGk="})
    store.set("nested", {"a": {"__datetime__": "not a date"}, "b": [{"__dict__": "x"}]})
    assert store.get("meta") == {"__bytes__": "aGk="}
    assert store.get("nested") == {"a": {"__datetime__": "not a date"}, "b": [{"__dict__": "x"}]}


def test_tag_shaped_dict_survives_binding(store):
    meta = Binding("meta", store, {"k": "v"}, value_type=dict[str, str])
    meta.set({"__bytes__": "aGk="})
    assert meta.get() == {"__bytes__": "aGk="}


@pytest.mark.parametrize("value", [{1: "a"}, {"outer": {2: "b"}}, [{(1, 2): "c"}]])
def test_non_str_dict_keys_raise_store_error(store, value):
    with pytest.raises(StoreError) as exc_info:
        store.set("m", value)
    assert exc_info.value.operation == "set"
    assert not store.exists("m")
