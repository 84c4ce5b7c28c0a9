# confdb

A small JSON configuration database and a command-line tool for inspecting,
searching and comparing database files.

Configurations are stored as a two-level JSON document: categories at the top
level, each holding named config values. A config is addressed by its full
name, `category.config`, where the category part is everything before the
last dot (whitespace in the name is ignored).

## Installation

```
pip install .
```

## Command-line tool

`confdb-tool` prints its result as indented JSON, always with a `returnValue`
field and, on failure, an `errorText` field. It exits with status 1 after a
run, and with status 4 when the options cannot be parsed.

Print where the database and log files live:

```
confdb-tool --print
```

Delete the main, factory and debug database files (under
`/var/lib/configd`) and any `/tmp/configd_*` dumps:

```
confdb-tool --clean
```

Dump the unified database, that is the main database with the factory
database merged over it:

```
confdb-tool --dump > /tmp/unified.json
```

Show the differences between two database files. The report holds
`removedKeys`, `addedKeys` and `changedKeys` where there are any, and
`isDifferent`:

```
confdb-tool --diff A.json B.json
```

Find every config whose full name matches a regular expression:

```
confdb-tool --search=settings db.json
```

Get one config value (`category.*` returns the whole category):

```
confdb-tool --get-config=tv.rmm.ttxMode db.json
```

## Library use

```python
from confdb.jsondb import JsonDB

db = JsonDB("Example Database")
db.insert("com.example.app.enabled", True)   # True: the database changed
print(db.fetch("com.example.app.enabled"))   # {'com.example.app.enabled': True}
print(db.search_key("app"))
db.set_filename("/tmp/example_db.json")
db.flush()                                   # atomic write of the JSON file
```

`fetch` raises `KeyError` for a missing config, and `insert`, `remove` and
`fetch` raise `ValueError` for a name with no dot. `confdb.jsondb.instance()`
returns the shared database of a `DatabaseKind`, loading its file on first use.

Other modules:

- `confdb.comparator`: `compare_files(path_a, path_b)` returns the same
  report as `confdb-tool --diff`; `diff_array` and `diff_object` compare
  single values; `DBComparator` queries a base database file;
  `convert_file` reads a file of one JSON message per line and
  `LS2Comparator` loads two such files.
- `confdb.logger`: `get_logger()` returns the shared `Logger`, which writes
  to the console, a file, memory or Python's `logging`, filtered by
  `LogLevel`.
- `confdb.lazylog`: `LazyDebugPrinter` folds repeated messages into counted
  log lines.
- `confdb.fsutil`: small file and path helpers, and `execute_command`, which
  runs a shell command and returns its trimmed output.
- `confdb.jsonutil`: helpers over decoded JSON values.
- `confdb.timer`: `Timer`, a blocking one-shot wait that another thread can
  cancel with `clear()`.
- `confdb.buildinfo`: `BuildInfo` reads `key = value` lines from
  `/etc/buildinfo` or another file.
- `confdb.object_counter`: `ObjectCounter`, a mixin counting live instances
  per class.

## What it does not do

There is no running configuration service: nothing here serves configs to
other processes, watches for changes or notifies clients. The package holds
the database and the offline tool that works on its files.

## Running the tests

```
pip install .[test]
pytest
```