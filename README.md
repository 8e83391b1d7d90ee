# ngebut

Building blocks for a small HTTP server, in plain Python with no third-party
dependencies: request parsing, response serialisation, a route tree, caches,
an in-memory key/value store, object pools and a levelled logger.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `ngebut.httpparser` – `HTTPParser` reads a request line and headers;
  `Codec` parses whole requests (bodies given by `Content-Length` or sent
  chunked) and writes responses into its `buf`. `parse_chunked_body` decodes a
  chunked body. Errors are raised as `ParseError`, `IncompleteBodyError` and
  `InvalidChunkError` (both subclasses of `ParseError`). `BodyReader` is a
  readable view of a body whose `close()` rewinds it.
- `ngebut.httpresponse` – `build_response`, `date_header` (cached per second),
  `status_text` and `estimate_response_size`.
- `ngebut.radix` – `Tree`, a route tree with static segments, `:name`
  parameters and `*` wildcards; `Node`, `Kind`, `PathMatchContext` and
  `split_path`. Lookups take the first matching child and do not backtrack.
- `ngebut.memory` – `Storage`, a thread-safe key/value store of bytes with an
  optional time to live in seconds and an optional background cleanup thread.
  `get` raises `NotFoundError` for missing or expired keys.
- `ngebut.filecache` – `Cache`, an LRU cache of file contents bounded by total
  bytes and by number of files.
- `ngebut.fdcache` – `FDCache`, an LRU cache of open file objects that closes
  files idle longer than its expiration; `default_fd_cache()` returns a shared
  one (100 files, five minutes).
- `ngebut.pool` – `Pool` and `BufferPool`, thread-safe pools of reusable
  objects and bytearrays.
- `ngebut.filebuffer` – shared buffer pools: `get_buffer`/`release_buffer`
  and 64 KiB read buffers via `get_read_buffer`/`release_read_buffer`.
- `ngebut.log.logger` – `Logger`, `Level`, `Event`, `LoggerConfig`,
  `new_with_config`, `format_message` (handles `%s`, `%d`, `%v`) and a default
  logger reached through `debug()`, `info()`, `warn()`, `error()`, `fatal()`,
  `set_level()` and `set_output()`.
- `ngebut.log.console` – `ConsoleWriter` turns `timestamp | LEVEL | message`
  records into readable, optionally coloured lines; `default_console_writer()`
  adds boxed level labels.
- `ngebut.log.color` – ANSI colour constants, `colored_string` and
  `colored_level`.
- `ngebut.log.adapter` – `set_logger`/`get_logger` for a replaceable global
  logger, and the pass-through `AdapterLogger` and `AdapterEvent`.
- `ngebut.startup` – `init_logger`, `get_app_logger` and
  `display_startup_message`, which logs a banner and the listening address.

## Examples

Routing:

```python
from ngebut.radix import Tree

def show_user():
    return "user"

tree = Tree()
tree.insert("/users/:id", "GET", show_user)
params = {}
handlers = tree.find("/users/123", params)
assert handlers["GET"] is show_user
assert params == {"id": "123"}
assert tree.find("/nowhere") is None
```

Parsing a request and writing a response:

```python
from ngebut.httpparser import Codec

codec = Codec(None)
data = b"POST / HTTP/1.1\r\nHost: example.com\r\nContent-Length: 11\r\n\r\nHello World"
consumed, body = codec.parse(data)
assert consumed == len(data) and body == b"Hello World"

codec.reset_parser()  # before parsing the next request
codec.write_response(200, {"Content-Type": ["text/plain"]}, b"hi")
assert bytes(codec.buf).startswith(b"HTTP/1.1 200 OK\r\n")
```

Storage with a time to live:

```python
from ngebut.memory import NotFoundError, Storage

with Storage(1.0) as store:  # sweep expired keys every second
    store.set("greeting", b"hello", 60)
    assert store.get("greeting") == b"hello"
    store.delete("greeting")
    try:
        store.get("greeting")
    except NotFoundError:
        pass
```

Logging:

```python
from ngebut.log.logger import Level
from ngebut.startup import display_startup_message, init_logger

logger = init_logger(Level.DEBUG)  # console output on stdout
logger.info().msgf("listening on %s", ":8080")
display_startup_message(":8080")
```

A bare `Logger` writes each record with a single `write` call and no trailing
newline; give it a `ConsoleWriter` (as `init_logger` does) to get one line per
record. Level methods return `None` when the level is filtered out, except
`fatal()`, which always returns an event.

## What this package does not do

It has no network listener, event loop or request-handling framework: nothing
here opens a socket or dispatches requests to handlers by itself, and there is
no command to run. `Codec`, `Tree` and the caches are pieces to build such a
server from. `Codec.router` is only stored, never used.