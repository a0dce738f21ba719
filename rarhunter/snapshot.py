"""Directory snapshots, SFV checksum lists and rar archive inspection."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass, field
from typing import Callable, Iterator


def _ext(name: str) -> str:
    """Return the suffix from the final dot of the last path element, dot included."""
    base = name.replace(os.sep, "/").rsplit("/", 1)[-1]
    dot = base.rfind(".")
    return base[dot:] if dot >= 0 else ""


@dataclass(frozen=True)
class DirSnapshot:
    """The base names of every entry found below ``root`` at one moment."""

    root: str
    names: tuple[str, ...] = ()

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

    def find(self, predicate: Callable[[str], bool]) -> list[str]:
        """Return the names for which ``predicate`` holds."""
        return [name for name in (n.strip() for n in self.names) if predicate(name)]

    def find_name(self, name: str) -> list[str]:
        """Return the entries called exactly ``name``."""
        return self.find(lambda item: item == name)

    def find_ext(self, ext: str) -> list[str]:
        """Return the entries whose extension (with its dot) equals ``ext``."""
        return self.find(lambda item: _ext(item) == ext)

    def path(self, file: str) -> str:
        """Join ``file`` onto the snapshot root."""
        return os.path.join(self.root, file)


@dataclass
class SFVFile:
    """Entries of an SFV file: file name mapped to its checksum."""

    items: dict[str, str] = field(default_factory=dict)

    def __contains__(self, name: object) -> bool:
        return name in self.items

    def __iter__(self) -> Iterator[str]:
        return iter(self.items)


def _walk(path: str) -> Iterator[str]:
    try:
        with os.scandir(path) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError:
        return
    for entry in entries:
        yield entry.name
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            is_dir = False
        if is_dir:
            yield from _walk(entry.path)


def snapshot_dir(root: str | os.PathLike[str]) -> DirSnapshot:
    """Record the base names of all entries below ``root``, recursively."""
    root = os.fspath(root)
    names = dict.fromkeys(name.strip() for name in _walk(root))
    return DirSnapshot(root=root, names=tuple(names))


def parse_sfv(filename: str | os.PathLike[str]) -> SFVFile:
    """Read an SFV file of ``name checksum`` lines.

    Raises OSError when the file cannot be read and ValueError on a line
    without a checksum.
    """
    with open(filename, encoding="utf-8", errors="replace", newline="") as fh:
        content = fh.read().strip()
    sfv = SFVFile()
    for line in content.split("\n"):
        parts = line.split(" ")
        if len(parts) < 2:
            raise ValueError(f"malformed sfv line in {os.fspath(filename)}: {line!r}")
        sfv.items[parts[0]] = parts[1]
    return sfv


def any_missing(sfv: SFVFile, snapshot: DirSnapshot) -> list[str]:
    """Return the SFV entries that are absent from ``snapshot``."""
    return [name for name in sfv.items if name not in snapshot]


def filename_from_rar(rar_path: str | os.PathLike[str]) -> str:
    """Ask ``unrar lb`` for the bare name of the file inside ``rar_path``."""
    try:
        proc = subprocess.run(
            ["unrar", "lb", os.fspath(rar_path)],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            check=False,
        )
    except OSError as exc:
        raise RuntimeError(f"rar command failure: {exc}") from exc
    if proc.returncode != 0:
        raise RuntimeError(f"rar command failure: exit status {proc.returncode}")
    return (proc.stdout or b"").decode("utf-8", errors="replace").strip()