"""Host function interface for functions, with an in-memory test double.

All module-level calls are dispatched to the backend installed with
:func:`set_mock_runtime`.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol


class HostError(Exception):
    """Error reported by a host function call."""


@dataclass
class FetchRequest:
    """An outbound HTTP request executed by the host."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""


@dataclass
class FetchResponse:
    """The HTTP response returned by the host."""

    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""


@dataclass
class Record:
    """A single table row returned from the host."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class Filter:
    """A single predicate for :func:`query_records`.

    ``operator`` is one of equals, not_equals, contains, gt, gte, lt, lte.
    """

    column: str
    operator: str
    value: str


@dataclass
class QueryOptions:
    """Filtering and pagination for :func:`query_records`."""

    filters: list[Filter] = field(default_factory=list)
    limit: int = 0
    offset: int = 0


class Backend(Protocol):
    """Interface implemented by :class:`MockRuntime` and custom test doubles."""

    def get_object(self, bucket: str, key: str) -> bytes: ...

    def put_object(self, bucket: str, key: str, data: bytes) -> None: ...

    def delete_object(self, bucket: str, key: str) -> None: ...

    def list_objects(self, bucket: str) -> list[str]: ...

    def evaluate_flag(self, key: str) -> bool: ...

    def invoke_function(self, id: str) -> bytes: ...

    def fetch(self, req: FetchRequest) -> FetchResponse: ...

    def get_record(self, table_key: str, id: str) -> Optional[Record]: ...

    def put_record(self, table_key: str, record: dict[str, Any]) -> Record: ...

    def delete_record(self, table_key: str, id: str) -> None: ...

    def query_records(self, table_key: str, opts: QueryOptions) -> list[Record]: ...


_BACKEND_METHODS = (
    "get_object",
    "put_object",
    "delete_object",
    "list_objects",
    "evaluate_flag",
    "invoke_function",
    "fetch",
    "get_record",
    "put_record",
    "delete_record",
    "query_records",
)


class _BackendSlot:
    """Holds the backend that module-level calls are dispatched to."""

    def __init__(self) -> None:
        self.backend: Optional[Backend] = None


_slot = _BackendSlot()


def set_mock_runtime(backend: Optional[Backend]) -> None:
    """Install the backend used by all module-level calls (``None`` clears it).

    Raises :class:`TypeError` if ``backend`` lacks any of the backend methods.
    """
    if backend is not None:
        missing = [
            name for name in _BACKEND_METHODS if not callable(getattr(backend, name, None))
        ]
        if missing:
            raise TypeError(
                f"backend {type(backend).__name__} is missing methods: {', '.join(missing)}"
            )
    _slot.backend = backend


def _require() -> Backend:
    backend = _slot.backend
    if backend is None:
        raise RuntimeError(
            "fnruntime: no mock runtime — call "
            "set_mock_runtime(MockRuntime()) before invoking the function"
        )
    return backend


def get_object(bucket: str, key: str) -> bytes:
    return _require().get_object(bucket, key)


def put_object(bucket: str, key: str, data: bytes) -> None:
    _require().put_object(bucket, key, data)


def delete_object(bucket: str, key: str) -> None:
    _require().delete_object(bucket, key)


def list_objects(bucket: str) -> list[str]:
    return _require().list_objects(bucket)


def evaluate_flag(key: str) -> bool:
    return _require().evaluate_flag(key)


def invoke_function(id: str) -> bytes:
    return _require().invoke_function(id)


def fetch(req: FetchRequest) -> FetchResponse:
    return _require().fetch(req)


def get_record(table_key: str, id: str) -> Optional[Record]:
    return _require().get_record(table_key, id)


def put_record(table_key: str, record: dict[str, Any]) -> Record:
    return _require().put_record(table_key, record)


def delete_record(table_key: str, id: str) -> None:
    _require().delete_record(table_key, id)


def query_records(table_key: str, opts: QueryOptions) -> list[Record]:
    return _require().query_records(table_key, opts)


def _without_id(row: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in row.items() if k != "_id"}


class MockRuntime:
    """In-memory backend for unit-testing functions without a server."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._buckets: dict[str, dict[str, bytes]] = {}
        self._flags: dict[str, bool] = {}
        self._tables: dict[str, list[dict[str, Any]]] = {}
        self._fetcher: Optional[Callable[[FetchRequest], FetchResponse]] = None
        self._invoker: Optional[Callable[[str], bytes]] = None
        self._seq = 0

    # Seeding helpers (chainable).

    def put_object_in_bucket(self, bucket: str, key: str, data: bytes) -> "MockRuntime":
        """Store a copy of ``data`` under ``key`` in ``bucket``."""
        with self._lock:
            self._buckets.setdefault(bucket, {})[key] = bytes(data)
        return self

    def set_flag(self, key: str, value: bool) -> "MockRuntime":
        """Set the value that :meth:`evaluate_flag` returns for ``key``."""
        with self._lock:
            self._flags[key] = value
        return self

    def seed_record(self, table_key: str, id: str, data: dict[str, Any]) -> "MockRuntime":
        """Append a row with the given ``id``; any ``_id`` in ``data`` is ignored."""
        with self._lock:
            row = dict(data)
            row["_id"] = id
            self._tables.setdefault(table_key, []).append(row)
        return self

    def set_fetcher(self, fn: Callable[[FetchRequest], FetchResponse]) -> "MockRuntime":
        """Install the handler for all :meth:`fetch` calls."""
        with self._lock:
            self._fetcher = fn
        return self

    def set_invoker(self, fn: Callable[[str], bytes]) -> "MockRuntime":
        """Install the handler for all :meth:`invoke_function` calls."""
        with self._lock:
            self._invoker = fn
        return self

    # Observation helpers.

    def objects_in_bucket(self, bucket: str) -> dict[str, bytes]:
        """Return a copy of all objects stored in ``bucket``."""
        with self._lock:
            return dict(self._buckets.get(bucket, {}))

    def records_in_table(self, table_key: str) -> list[dict[str, Any]]:
        """Return copies of all rows in ``table_key``, including ``_id``."""
        with self._lock:
            return [dict(row) for row in self._tables.get(table_key, [])]

    # Backend interface.

    def get_object(self, bucket: str, key: str) -> bytes:
        with self._lock:
            objects = self._buckets.get(bucket)
            if objects is None:
                raise HostError(f"bucket {bucket!r} not found")
            if key not in objects:
                raise HostError(f"key {key!r} not found in bucket {bucket!r}")
            return objects[key]

    def put_object(self, bucket: str, key: str, data: bytes) -> None:
        self.put_object_in_bucket(bucket, key, data)

    def delete_object(self, bucket: str, key: str) -> None:
        with self._lock:
            self._buckets.get(bucket, {}).pop(key, None)

    def list_objects(self, bucket: str) -> list[str]:
        with self._lock:
            return list(self._buckets.get(bucket, {}))

    def evaluate_flag(self, key: str) -> bool:
        with self._lock:
            return self._flags.get(key, False)

    def invoke_function(self, id: str) -> bytes:
        with self._lock:
            fn = self._invoker
        if fn is None:
            raise HostError(f"no invoker registered for {id!r}; call set_invoker()")
        return fn(id)

    def fetch(self, req: FetchRequest) -> FetchResponse:
        with self._lock:
            fn = self._fetcher
        if fn is None:
            raise HostError("no fetcher registered; call set_fetcher() to mock HTTP calls")
        return fn(req)

    def get_record(self, table_key: str, id: str) -> Optional[Record]:
        with self._lock:
            for row in self._tables.get(table_key, []):
                if row.get("_id") == id:
                    return Record(id=id, data=_without_id(row))
        return None

    def put_record(self, table_key: str, record: dict[str, Any]) -> Record:
        with self._lock:
            rows = self._tables.setdefault(table_key, [])
            existing_id = record.get("_id")
            if isinstance(existing_id, str) and existing_id:
                for row in rows:
                    if row.get("_id") == existing_id:
                        row.update(_without_id(record))
                        return Record(id=existing_id, data=_without_id(row))
                raise HostError(
                    f"record {existing_id!r} not found in table {table_key!r}"
                )
            self._seq += 1
            new_id = f"mock-{self._seq}"
            row = _without_id(record)
            row["_id"] = new_id
            rows.append(row)
            return Record(id=new_id, data=_without_id(row))

    def delete_record(self, table_key: str, id: str) -> None:
        with self._lock:
            rows = self._tables.get(table_key, [])
            for index, row in enumerate(rows):
                if row.get("_id") == id:
                    del rows[index]
                    return

    def query_records(self, table_key: str, opts: QueryOptions) -> list[Record]:
        """Return every row of ``table_key`` in insertion order; ``opts`` is not applied."""
        with self._lock:
            records = []
            for row in self._tables.get(table_key, []):
                row_id = row.get("_id")
                records.append(
                    Record(id=row_id if isinstance(row_id, str) else "", data=_without_id(row))
                )
            return records