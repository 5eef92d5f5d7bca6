# schemamigrate

Discover, order and read versioned schema migrations.

Migration files follow the naming pattern

    <version>_<identifier>.<up|down>.<extension>

for example `1_create_users.up.sql` and `1_create_users.down.sql`. A source
driver lists the available versions in ascending order and hands out the body
of the up or down migration for any version.

## Install

    pip install schemamigrate

The package has no runtime dependencies.

## Parsing file names

```python
from schemamigrate.source.parse import parse, ParseError

m = parse("20170412214116_date_foobar.up.sql")
m.version      # 20170412214116
m.identifier   # "date_foobar"
m.direction    # Direction.UP
m.raw          # "20170412214116_date_foobar.up.sql"

parse("foobar.up.sql")   # raises ParseError (a ValueError)
```

A version larger than 2**64 - 1 raises `ValueError`.

`schemamigrate.source.migration.Migrations` keeps parsed migrations indexed by
version: `append(m)` returns `False` for `None` or for a second migration with
the same version and direction; `first()`, `prev(v)` and `next(v)` return a
version or `None`; `up(v)` and `down(v)` return a `Migration` or `None`.

## Reading migrations from a directory

```python
from schemamigrate.source.file import File

driver = File().open("file://./migrations")
version = driver.first()
body, identifier = driver.read_up(version)
with body:
    print(identifier, body.read())
next_version = driver.next(version)
```

`file://dir` and `file://./dir` are taken relative to the current directory,
`file:///abs/dir` is absolute and `file://` alone means the current directory
(see `schemamigrate.source.file.parse_url`).

Every driver's `first`, `prev`, `next`, `read_up` and `read_down` raise
`FileNotFoundError` when there is no such version or body. `prev` and `next`
also raise it for a version the source does not have. The directory-based
drivers (`file`, `iofs`, `httpfs`, `vfs`) raise
`schemamigrate.source.driver.DuplicateMigrationError` when two files share a
version and direction; the `bindata` and `s3` drivers raise `ValueError` for
that case.

## Other sources

- `schemamigrate.source.iofs.new(fsys, path)` reads from any object offering
  `open(name)` and `read_dir(name)` with relative, slash-separated names
  (`"."` is the root), such as `DirFS(root)` or the in-memory
  `MapFS({"1_a.up.sql": "..."})`. `close()` closes the file system if it has a
  `close` method.
- `schemamigrate.source.httpfs.new(fs, path)` works on the same kind of object
  but cleans `path` like a web server: `""`, `"/"` and `"."` all name the root.
- `schemamigrate.source.vfs.with_instance(fs, search_path)` builds on the
  httpfs driver; an empty `search_path` means `"/"`.
- `schemamigrate.source.bindata.with_instance(resource(names, asset_func))`
  serves migrations from named assets; `asset_func(name)` returns the bytes.
- `schemamigrate.source.s3.with_instance(client, Config(bucket, prefix))`
  lists and fetches objects through a client with `list_objects(Bucket=,
  Prefix=, Delimiter=)` and `get_object(Bucket=, Key=)`.
  `parse_uri("s3://bucket/prefix")` builds the `Config`.
- `schemamigrate.source.stub` is an in-memory driver for tests: fill its
  `migrations`; the body read for a version is the migration's identifier and
  the identifier returned is `"<version>.up.stub"` or `"<version>.down.stub"`.

## The driver registry

Importing `schemamigrate.source.file`, `stub`, `bindata`, `s3` or `vfs`
registers a driver under the scheme `file`, `stub`, `go-bindata`, `s3` or
`godoc-vfs`. `schemamigrate.source.driver.open_source(url)` opens a URL with
the driver of its scheme, and `list_drivers()` returns the registered names,
sorted. `register(name, driver)` adds your own `Driver` subclass; registering a
name twice raises `ValueError`.

Only `file` and `stub` can actually be opened from a URL. The registered
`s3` driver has no client and raises `ValueError`; `go-bindata` raises
`ValueError` and `godoc-vfs`, like the `iofs` and `httpfs` drivers, raises
`RuntimeError` — build those with their `with_instance` or `new` functions.

## Migrations in flight

`schemamigrate.migration.Migration` carries the body of one migration from a
source to a database, records timing and byte counts while it is buffered, and
describes itself for logs:

```python
import io
import threading
from schemamigrate.migration import Migration

Migration(None, "", 1486686016, 1486689359).log_string()
# '1486686016/u <empty>'

m = Migration(io.BytesIO(b"CREATE TABLE t (id int);"), "create_t", 1, 2)
worker = threading.Thread(target=m.buffer)
worker.start()
data = m.buffered_body.read()
worker.join()
m.bytes_read   # 24
```

A target version below the version logs as `d` (down), otherwise `u` (up).

## Helpers

`schemamigrate.util` holds `MultiError(*errors)`, which drops `None` entries
and joins the messages with `" and "`; `suint(n)`, which raises `ValueError`
for negative `n`; and `filter_custom_query(url)`, which removes query values
whose keys start with `x-`.

## What it does not do

This package finds and reads migrations; it does not apply them. There are no
database drivers, no tracking of the applied version in a database, and no
command-line tool. Sources on remote code hosts or cloud storage other than
an S3-style client you supply are not included.