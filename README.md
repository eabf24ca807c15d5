# balancekv

A small key-value storage service built on the standard library:

- a log-structured key-value store that keeps its data in append-only
  segment files, with an in-memory hash index and a SHA-1 checksum on every
  record;
- an HTTP service exposing that store;
- a per-client request report that backend services can keep, and a
  command that collects such reports from several backends.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## The store as a library

```python
from balancekv.db import Db, NotFoundError

with Db("/tmp/kv-data", 10 * 1024 * 1024) as db:
    db.put("greeting", "hello")
    print(db.get("greeting"))   # hello
    print(db.size())            # bytes written to the current segment

    try:
        db.get("missing")
    except NotFoundError:
        print("no such key")
```

The directory must already exist. `open_db(directory, segment_limit)` opens
a store the same way; the segment limit defaults to 10 MiB. `put` takes a
lock, so it is safe to call from many threads at once. When the current
segment would grow past the segment limit, a new file named by
`segment_filename(segment_id)` (`segment-1`, `segment-2`, …) is started.
`size()` reports the bytes written to the current segment only. After
`close()`, `put` raises `ValueError`.

Reopening a directory rebuilds the index from every segment file in it, in
order of segment number; later records win. A segment that cannot be read
back raises `balancekv.entry.CorruptedError` on opening, and a record whose
stored checksum does not match its value raises `CorruptedError` from
`get`.

### Record format

`balancekv.entry.Entry` encodes one record, all integers little-endian
32-bit:

| field        | size |
|--------------|------|
| total size   | 4    |
| key length   | 4    |
| key          | kl   |
| value length | 4    |
| value        | vl   |
| SHA-1(value) | 20   |

```python
import io
from balancekv.entry import Entry

data = Entry("key", "value").encode()
assert Entry.decode(data) == Entry("key", "value")
assert Entry.read_from(io.BytesIO(data)) == (Entry("key", "value"), len(data))
```

`Entry.read_from` raises `EOFError` at the end of a stream.

## Request reports

`balancekv.report.Report` is a dictionary from an author to the request
counters it sent. `process(headers)` reads the `lb-author` and `lb-req-cnt`
headers (case-insensitively) and appends the counter under the author,
keeping the last 100; requests without an author are ignored.
`to_json()` returns the report as a JSON object followed by a newline.

```python
from balancekv.report import Report

report = Report()
report.process({"lb-author": "client-a", "lb-req-cnt": "1"})
print(report.to_json())   # {"client-a":["1"]}
```

## Commands

- `balancekv-db` serves the store over HTTP on port 8079, with its data in
  a `db-data` directory under the system temporary directory.
  `GET /db/<key>` answers `{"key": ..., "value": ...}`, or 404 when the key
  is missing or its record is corrupted. `POST /db/<key>` with the body
  `{"value": ...}` stores the value and answers 201; a body that is not
  JSON, or a value that is not a string, gets 400. An empty key gets 400
  and any other method 405. It runs until interrupted with Ctrl-C.
- `balancekv-stats` fetches `/report` from backends at `localhost:8080`,
  `localhost:8081` and `localhost:8082` (over HTTPS with `--https`) and
  logs, per backend, the last five entries of every author as JSON.

`balancekv.shutdown.wait_for_termination_signal()` blocks the main thread
until SIGINT or SIGTERM arrives and returns the signal received.

## What is not included

The package has no backend service that serves `/report` and
`/api/v1/some-data`, no load balancer and no polling client. The
`balancekv-stats` command only reads reports from backends run by other
means; `Report` is the building block for producing them.