"""Locating extractable archives and extracting them with ``unrar``."""

from __future__ import annotations

import os
import subprocess
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Optional, TextIO

from .criteria import already_unrared, missing_files
from .snapshot import DirSnapshot, parse_sfv


class UnrarError(Exception):
    """A directory cannot be extracted, or extraction failed."""


@dataclass(frozen=True)
class Unrar:
    """A rar archive ``filename`` to extract inside directory ``wd``."""

    filename: str
    wd: str

    def path(self) -> str:
        """Full path of the archive."""
        return os.path.join(self.wd, self.filename)


def find_unrarable(snapshot: DirSnapshot) -> Unrar:
    """Return the archive to extract in ``snapshot``.

    Raises UnrarError when there is no SFV, it cannot be read or there is no
    rar, and CriteriaError when files are missing or already extracted.
    """
    sfv_files = snapshot.find_ext(".sfv")
    if not sfv_files:
        raise UnrarError(f"no .sfv files found in {snapshot.root}")

    sfv_path = snapshot.path(sfv_files[0])
    try:
        sfv = parse_sfv(sfv_path)
    except (OSError, ValueError) as exc:
        raise UnrarError(f"failed to read {sfv_path}: {exc}") from exc

    for criterion in (missing_files, already_unrared):
        hit, result = criterion(snapshot, sfv)
        if hit:
            raise result.error()

    rars = snapshot.find_ext(".rar")
    if not rars:
        raise UnrarError(f"failed to find .rar in {snapshot.root}")
    return Unrar(filename=rars[0], wd=snapshot.root)


def _extract(target: Unrar) -> Optional[str]:
    try:
        proc = subprocess.run(
            ["unrar", "e", target.filename],
            cwd=target.wd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            check=False,
        )
    except OSError as exc:
        return str(exc)
    if proc.returncode != 0:
        return f"exit status {proc.returncode}"
    return None


def do_all(targets: list[Unrar], out: TextIO) -> None:
    """Extract every target concurrently; raise UnrarError listing failures."""
    if not targets:
        return
    errors: list[str] = []
    with ThreadPoolExecutor(max_workers=len(targets)) as pool:
        futures = {}
        for target in targets:
            out.write(f"unrar {target.filename} in {target.wd}\n")
            futures[pool.submit(_extract, target)] = target
        for future in as_completed(futures):
            failure = future.result()
            if failure is not None:
                errors.append(
                    f"[{futures[future].filename}] did not complete successfully:  {failure}"
                )
    if errors:
        content = "".join(f"{e}\n" for e in errors)
        raise UnrarError(f"encountered {len(errors)} errors\n{content}\n")