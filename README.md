# flagbase

Python tools for working with a flagbase feature-flag server:

- `flagbase.sdk`: an HTTP client, `Client`, that evaluates flags and records
  metric events.
- `flagbase.fnruntime`: host functions for flagbase functions (buckets, flags,
  tables, peer invocation and outbound HTTP). It comes with `MockRuntime`, an
  in-memory backend for unit-testing functions without a server.
- `flagbase.example`: two small helpers, `greet` and `calculate`.

The package has no runtime dependencies.

## Installation

```
pip install flagbase
```

## Evaluating flags from a service

```python
from flagbase.sdk import Client

client = Client("http://localhost:8080", "token")
if client.evaluate_flag("new-checkout"):
    ...
client.record_event("new-checkout", "treatment", "conversion", 1.0)
```

`Client(base_url, token="", timeout=10.0)` sends `Authorization: Bearer <token>`
only when a token is given.

- `evaluate_flag(key)` sends `GET {base_url}/api/v1/flags/{key}/evaluate` and
  returns the boolean `value` field of the JSON reply. If that field is missing
  or null, it returns `False`. A status other than 200 raises `RuntimeError`. A
  body that is not valid JSON, or a `value` that is not a boolean, raises
  `ValueError`.
- `record_event(flag_key, variant, event_type, value)` posts a JSON object with
  those four fields to `{base_url}/api/v1/metrics`. A status of 300 or more
  raises `RuntimeError`.

Network failures propagate as `OSError`.

## Testing a function with the mock runtime

```python
from flagbase import fnruntime
from flagbase.fnruntime import MockRuntime

def handler():
    settings = fnruntime.get_object("cfg", "settings.json")
    if fnruntime.evaluate_flag("new-checkout"):
        fnruntime.put_record("orders", {"item": "book"})

def test_handler():
    rt = MockRuntime()
    rt.put_object_in_bucket("cfg", "settings.json", b'{"limit":10}')
    rt.set_flag("new-checkout", True)
    fnruntime.set_mock_runtime(rt)

    handler()

    assert len(rt.records_in_table("orders")) == 1
```

Module-level calls are sent to the backend installed with
`set_mock_runtime`. These calls are `get_object`, `put_object`,
`delete_object`, `list_objects`, `evaluate_flag`, `invoke_function`, `fetch`,
`get_record`, `put_record`, `delete_record` and `query_records`.

- Passing `None` to `set_mock_runtime` clears the backend.
- Passing an object that lacks any of these methods raises `TypeError`.
- If no backend is set, a call raises `RuntimeError`.

Records, requests and query parameters use the dataclasses `Record`,
`FetchRequest`, `FetchResponse`, `Filter` and `QueryOptions`. `Backend` is the
protocol a custom test double implements.

### How `MockRuntime` behaves

- **Seeding helpers.** These return the runtime, so calls can be chained:
  `put_object_in_bucket`, `set_flag`, `seed_record`, `set_fetcher` and
  `set_invoker`.
- **Inspecting state.** `objects_in_bucket(bucket)` and
  `records_in_table(table_key)` return copies of the stored state. Rows
  include their `_id`.
- **Objects.** `get_object` raises `fnruntime.HostError` for a missing bucket
  or key. `delete_object` of a missing object does nothing. `list_objects`
  returns the keys in insertion order.
- **Flags.** `evaluate_flag` returns `False` for a flag that was never set.
- **Handlers.** `fetch` and `invoke_function` are answered by the handlers
  installed with `set_fetcher` and `set_invoker`. Without a handler they raise
  `HostError`.
- **Records.**
  - `get_record` returns `None` when no row has that id.
  - `put_record` without an `_id` inserts a row with a generated id
    (`mock-1`, `mock-2`, and so on).
  - `put_record` with an `_id` updates that row, and raises `HostError` if no
    row has that id.
  - `delete_record` of a missing id does nothing.
  - `query_records` returns every row of the table in insertion order. Its
    filters, limit and offset are not applied.

## Example helpers

```python
from flagbase.example import greet, calculate

greet("Alice")                # "Hello, Alice!"
calculate(20, 4, "divide")    # 5
```

`calculate` supports `add`, `subtract`, `multiply` and `divide`. Division
truncates toward zero. Dividing by zero raises `ZeroDivisionError`, and an
unknown operation raises `ValueError`.

## What this package does not do

There is no flag server, command-line tool, storage or WebAssembly host here.

- `Client` talks to a server that runs elsewhere.
- `fnruntime` only dispatches to a backend you install, such as `MockRuntime`.

## Running the tests

```
pip install -e .[test]
pytest
```