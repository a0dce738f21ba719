# rarhunter

`rarhunter` walks a directory tree, looks for directories that hold a
complete RAR set described by an `.sfv` file, and extracts each one with the
`unrar` tool. The extractions run side by side, one thread per archive.

## Requirements

- Python 3.10 or later
- The `unrar` command on your `PATH`

There are no other dependencies.

## Installation

```
pip install .
```

## Usage

```
rar-hunter /path/to/downloads
```

`rar-hunter` visits the given directory and every directory below it. For
each one it takes a snapshot of the names of all entries below it (at any
depth) and picks the directory for extraction only when:

1. It contains an `.sfv` file, and the first one found can be read, with
   every line of the form `name checksum`.
2. Every file named in that `.sfv` file is present.
3. The file packed in the first `.rar`, as reported by `unrar lb`, is not
   already present. If `unrar lb` itself fails, this check does not skip the
   directory.
4. It contains a `.rar` file.

Directories that fail a check are skipped, and the number skipped is printed
to standard error. For each chosen archive a line `unrar <file> in <dir>` is
written to standard output, and the archive is extracted in its own
directory with `unrar e`. If any extraction fails (the tool cannot be started
or exits with a non-zero status), the failures are printed to standard error
and the command exits with status 1. Run without an argument, it stops with
the message `need one argument`. An interrupt gives exit status 130.

## Library use

```python
import sys

from rarhunter.snapshot import snapshot_dir
from rarhunter.unrar import do_all, find_unrarable

snapshot = snapshot_dir("/path/to/release")
target = find_unrarable(snapshot)   # raises UnrarError or CriteriaError
print(target.path())
do_all([target], sys.stdout)        # raises UnrarError if extraction fails
```

Modules:

- `rarhunter.snapshot`: `DirSnapshot` (`find`, `find_name`, `find_ext`,
  `path`), `snapshot_dir`, `SFVFile`, `parse_sfv`, `any_missing` and
  `filename_from_rar`.
- `rarhunter.criteria`: the checks `missing_files` and `already_unrared`,
  each returning a `(hit, CriteriaResult)` pair; `CriteriaResult.error()`
  gives a `CriteriaError`.
- `rarhunter.unrar`: `Unrar`, `find_unrarable`, `do_all` and `UnrarError`.
- `rarhunter.cli`: `all_dirs`, `run` and `main`, the command above.
- `rarhunter.eventbus`: a small threaded publish/subscribe bus keyed by event
  type. `EventBus` has `start`, `stop(timeout)`, `subscribe`, `unsubscribe`,
  `subscribers` and `publish`, and works as a context manager. Events
  published while the bus is not running are dropped. `default_bus`,
  `subscribe`, `unsubscribe` and `publish` act on one process-wide bus, and
  a `Subscription` can be removed with `close()`.

## What it does not do

It does not check the CRC values listed in `.sfv` files; only the presence
of the named files is checked. It does not read RAR archives itself; listing
and extraction are left to the `unrar` command.

## Running the tests

```
pip install .[test]
pytest
```