import pytest

from flagbase import fnruntime
from flagbase.fnruntime import (
    FetchRequest,
    FetchResponse,
    HostError,
    MockRuntime,
    QueryOptions,
    Record,
)


@pytest.fixture
def rt():
    runtime = MockRuntime()
    fnruntime.set_mock_runtime(runtime)
    yield runtime
    fnruntime.set_mock_runtime(None)


def test_calls_without_runtime_raise():
    fnruntime.set_mock_runtime(None)
    with pytest.raises(RuntimeError):
        fnruntime.evaluate_flag("anything")


def test_object_round_trip_through_module(rt):
    fnruntime.put_object("cfg", "settings.json", b'{"limit":10}')
    assert fnruntime.get_object("cfg", "settings.json") == b'{"limit":10}'
    assert rt.objects_in_bucket("cfg") == {"settings.json": b'{"limit":10}'}


def test_get_object_missing_bucket_and_key(rt):
    with pytest.raises(HostError, match="not found"):
        fnruntime.get_object("nope", "k")
    rt.put_object_in_bucket("b", "k", b"x")
    with pytest.raises(HostError, match="not found in bucket"):
        fnruntime.get_object("b", "other")


def test_seeded_object_is_copied(rt):
    data = bytearray(b"abc")
    rt.put_object_in_bucket("b", "k", data)
    data[0] = ord("z")
    assert fnruntime.get_object("b", "k") == b"abc"


def test_delete_and_list_objects(rt):
    rt.put_object_in_bucket("b", "one", b"1").put_object_in_bucket("b", "two", b"2")
    assert sorted(fnruntime.list_objects("b")) == ["one", "two"]
    fnruntime.delete_object("b", "one")
    assert fnruntime.list_objects("b") == ["two"]
    fnruntime.delete_object("missing", "one")
    assert fnruntime.list_objects("missing") == []


def test_flags(rt):
    assert fnruntime.evaluate_flag("new-checkout") is False
    rt.set_flag("new-checkout", True)
    assert fnruntime.evaluate_flag("new-checkout") is True


def test_invoke_function(rt):
    with pytest.raises(HostError, match="no invoker registered"):
        fnruntime.invoke_function("fn")
    rt.set_invoker(lambda fid: fid.encode())
    assert fnruntime.invoke_function("fn") == b"fn"


def test_fetch(rt):
    req = FetchRequest(method="GET", url="http://localhost/x")
    with pytest.raises(HostError, match="no fetcher registered"):
        fnruntime.fetch(req)
    seen = []

    def fetcher(r):
        seen.append(r)
        return FetchResponse(status=200, body=b"ok")

    rt.set_fetcher(fetcher)
    resp = fnruntime.fetch(req)
    assert resp.status == 200
    assert resp.body == b"ok"
    assert seen == [req]


def test_put_record_inserts_with_generated_ids(rt):
    first = fnruntime.put_record("orders", {"item": "a", "_id": ""})
    second = fnruntime.put_record("orders", {"item": "b"})
    assert first.id == "mock-1"
    assert first.id != second.id
    assert first.data == {"item": "a"}
    rows = rt.records_in_table("orders")
    assert rows == [{"item": "a", "_id": first.id}, {"item": "b", "_id": second.id}]


def test_put_record_updates_existing(rt):
    created = fnruntime.put_record("orders", {"item": "a", "qty": 1})
    updated = fnruntime.put_record("orders", {"_id": created.id, "qty": 2})
    assert updated == Record(id=created.id, data={"item": "a", "qty": 2})
    assert fnruntime.get_record("orders", created.id) == updated
    assert len(rt.records_in_table("orders")) == 1


def test_put_record_unknown_id_raises(rt):
    with pytest.raises(HostError, match="not found in table"):
        fnruntime.put_record("orders", {"_id": "ghost", "qty": 2})


def test_seed_record_uses_given_id(rt):
    rt.seed_record("users", "u1", {"_id": "ignored", "name": "Ann"})
    assert fnruntime.get_record("users", "u1") == Record(id="u1", data={"name": "Ann"})
    assert fnruntime.get_record("users", "ignored") is None


def test_get_record_missing_returns_none(rt):
    assert fnruntime.get_record("empty", "x") is None


def test_delete_record(rt):
    rt.seed_record("t", "a", {"v": 1}).seed_record("t", "b", {"v": 2})
    fnruntime.delete_record("t", "a")
    assert [row["_id"] for row in rt.records_in_table("t")] == ["b"]
    fnruntime.delete_record("t", "missing")
    assert len(rt.records_in_table("t")) == 1


def test_query_records_returns_all_in_order(rt):
    rt.seed_record("t", "a", {"v": 1}).seed_record("t", "b", {"v": 2})
    records = fnruntime.query_records("t", QueryOptions(limit=1))
    assert records == [Record(id="a", data={"v": 1}), Record(id="b", data={"v": 2})]
    assert fnruntime.query_records("none", QueryOptions()) == []


def test_records_in_table_returns_copies(rt):
    rt.seed_record("t", "a", {"v": 1})
    rows = rt.records_in_table("t")
    rows[0]["v"] = 99
    assert rt.records_in_table("t")[0]["v"] == 1


def test_seed_helpers_are_chainable():
    runtime = MockRuntime()
    assert runtime.set_flag("f", True).set_invoker(lambda i: b"").set_fetcher(
        lambda r: FetchResponse(status=204)
    ) is runtime