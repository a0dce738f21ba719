"""Command line entry point: find and extract rar releases below a directory."""

from __future__ import annotations

import os
import sys
from typing import Optional, Sequence

from .criteria import CriteriaError
from .eventbus import default_bus
from .snapshot import snapshot_dir
from .unrar import Unrar, UnrarError, do_all, find_unrarable


def all_dirs(start: str | os.PathLike[str]) -> list[str]:
    """Return ``start`` followed by every directory below it, in walk order."""
    start = os.fspath(start)
    dirs = [start]

    def walk(path: str) -> None:
        try:
            with os.scandir(path) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError:
            return
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                dirs.append(entry.path)
                walk(entry.path)

    walk(start)
    return dirs


def run(argv: Sequence[str]) -> None:
    """Extract every ready release below ``argv[0]``; raise UnrarError on failure."""
    target_dir = argv[0]
    with default_bus():
        targets: list[Unrar] = []
        skipped = 0
        for directory in all_dirs(target_dir):
            try:
                targets.append(find_unrarable(snapshot_dir(directory)))
            except (UnrarError, CriteriaError):
                skipped += 1
        print(f"skipped {skipped} dirs", file=sys.stderr)
        do_all(targets, sys.stdout)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command and return its exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        raise SystemExit("need one argument")
    try:
        run(args)
    except UnrarError as exc:
        print(exc, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())