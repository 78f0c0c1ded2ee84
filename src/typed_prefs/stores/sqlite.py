"""SQLiteStore: durable, single-file storage backend using SQLAlchemy Core.

Several stores may point at the same database file; each one owns the rows
of its ``namespace``, which is how a private store and a shared "suite"
store live side by side.  Values are kept as JSON with tagged shapes so
``bytes`` and ``datetime`` read back with their original type; a user dict
that happens to look like a tag is wrapped so it reads back unchanged.
Dicts must have ``str`` keys.
"""

from __future__ import annotations

import base64
import json
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

from sqlalchemy import Column, MetaData, Table, Text, create_engine, delete, select
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from typed_prefs.exceptions import StoreError
from typed_prefs.stores.base import Store

metadata = MetaData()

preferences = Table(
    "preferences",
    metadata,
    Column("namespace", Text, primary_key=True),
    Column("key", Text, primary_key=True),
    Column("value", Text, nullable=False),  # tagged JSON
)

_BYTES_TAG = "__bytes__"
_DATETIME_TAG = "__datetime__"
_DICT_TAG = "__dict__"  # wraps a user dict that looks like a tag
_TAGS = frozenset({_BYTES_TAG, _DATETIME_TAG, _DICT_TAG})


def _tag(obj: Any) -> Any:
    if obj is None or isinstance(obj, str | int | float):
        return obj
    if isinstance(obj, bytes | bytearray):
        return {_BYTES_TAG: base64.b64encode(bytes(obj)).decode("ascii")}
    if isinstance(obj, datetime):
        return {_DATETIME_TAG: obj.isoformat()}
    if isinstance(obj, list | tuple):
        return [_tag(item) for item in obj]
    if isinstance(obj, dict):
        for k in obj:
            if not isinstance(k, str):
                raise TypeError(f"dict keys must be str, not {type(k).__name__}")
        tagged = {k: _tag(v) for k, v in obj.items()}
        if len(tagged) == 1 and next(iter(tagged)) in _TAGS:
            return {_DICT_TAG: tagged}
        return tagged
    raise TypeError(f"Object of type {type(obj).__name__} cannot be stored")


def _untag(obj: Any) -> Any:
    if isinstance(obj, list):
        return [_untag(item) for item in obj]
    if not isinstance(obj, dict):
        return obj
    if len(obj) == 1:
        if _BYTES_TAG in obj:
            return base64.b64decode(obj[_BYTES_TAG])
        if _DATETIME_TAG in obj:
            return datetime.fromisoformat(obj[_DATETIME_TAG])
        if _DICT_TAG in obj:
            obj = obj[_DICT_TAG]
    return {k: _untag(v) for k, v in obj.items()}


def encode_value(value: Any) -> str:
    """Serialize a raw value to the tagged JSON stored in the ``value`` column.

    Raises:
        TypeError: If the value, or anything nested in it, cannot be stored.
    """
    return json.dumps(_tag(value))


def decode_value(raw: str) -> Any:
    """Inverse of :func:`encode_value`."""
    return _untag(json.loads(raw))


@contextmanager
def _store_operation(operation: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        raise StoreError(operation, str(exc)) from exc


class SQLiteStore(Store):
    """Persistent store backed by a single SQLite file.

    Parameters:
        db_path:   Path to the SQLite database file.  Use ``":memory:"``
                   for an in-memory database (useful for testing).
        namespace: Suite identifier.  Rows of other namespaces in the same
                   file are invisible to this store.
    """

    def __init__(self, db_path: str | Path = "preferences.db", namespace: str = "") -> None:
        self._db_path = str(db_path)
        self.namespace = namespace
        self._engine: Engine | None = None

    def _connect(self) -> Engine:
        if self._engine is None:
            with _store_operation("connect"):
                engine = create_engine(f"sqlite:///{self._db_path}", echo=False)
                metadata.create_all(engine)
            self._engine = engine
        return self._engine

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    # ── Store protocol ───────────────────────────────────────

    def get(self, key: str) -> Any | None:
        engine = self._connect()
        with _store_operation("get"), engine.connect() as conn:
            row = conn.execute(
                select(preferences.c.value).where(
                    preferences.c.namespace == self.namespace,
                    preferences.c.key == key,
                )
            ).first()
        if row is None:
            return None
        return decode_value(row[0])

    def set(self, key: str, value: Any) -> None:
        if value is None:
            self.delete(key)
            return
        try:
            encoded = encode_value(value)
        except (TypeError, ValueError) as exc:
            raise StoreError("set", f"cannot store value for key '{key}': {exc}") from exc

        engine = self._connect()
        stmt = insert(preferences).values(namespace=self.namespace, key=key, value=encoded)
        stmt = stmt.on_conflict_do_update(
            index_elements=[preferences.c.namespace, preferences.c.key],
            set_={"value": stmt.excluded["value"]},
        )
        with _store_operation("set"), engine.begin() as conn:
            conn.execute(stmt)

    def delete(self, key: str) -> None:
        engine = self._connect()
        with _store_operation("delete"), engine.begin() as conn:
            conn.execute(
                delete(preferences).where(
                    preferences.c.namespace == self.namespace,
                    preferences.c.key == key,
                )
            )

    def list_keys(self) -> list[str]:
        engine = self._connect()
        with _store_operation("list_keys"), engine.connect() as conn:
            rows = conn.execute(
                select(preferences.c.key).where(preferences.c.namespace == self.namespace)
            ).all()
        return [row[0] for row in rows]

    def exists(self, key: str) -> bool:
        engine = self._connect()
        with _store_operation("exists"), engine.connect() as conn:
            row = conn.execute(
                select(preferences.c.key).where(
                    preferences.c.namespace == self.namespace,
                    preferences.c.key == key,
                )
            ).first()
        return row is not None

    def clear(self) -> None:
        engine = self._connect()
        with _store_operation("clear"), engine.begin() as conn:
            conn.execute(delete(preferences).where(preferences.c.namespace == self.namespace))
