"""Checks that decide whether a directory should be extracted."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from .snapshot import DirSnapshot, SFVFile, any_missing, filename_from_rar


class CriteriaError(Exception):
    """A directory failed one of the extraction criteria."""


@dataclass
class CriteriaResult:
    """Outcome of a criterion: the value found and why it matters."""

    value: Any = None
    reason: str = ""
    string_fn: Optional[Callable[[Any], str]] = None

    def __str__(self) -> str:
        text = str(self.value) if self.string_fn is None else self.string_fn(self.value)
        return f"Reason: {text}\n"

    def error(self) -> CriteriaError:
        """Return an exception describing this result."""
        return CriteriaError(str(self))


def _format_missing(names: list[str]) -> str:
    joined = "\n".join(names)
    return f"Missing files:\n{joined}\n"


def missing_files(snapshot: DirSnapshot, sfv: SFVFile) -> tuple[bool, CriteriaResult]:
    """Hold when files listed in the SFV are not present in the directory."""
    result = CriteriaResult(value=[])
    missing = any_missing(sfv, snapshot)
    if missing:
        result.value = missing
        result.reason = "required files were missing"
        result.string_fn = _format_missing
    return bool(result.value), result


def already_unrared(snapshot: DirSnapshot, sfv: SFVFile) -> tuple[bool, CriteriaResult]:
    """Hold when the file packed in the first rar already exists in the directory."""
    result = CriteriaResult(value="", string_fn=lambda v: v)
    rars = snapshot.find_ext(".rar")
    if not rars:
        result.reason = "error finding .rar files: no first because zero length"
        return False, result

    try:
        name = filename_from_rar(snapshot.path(rars[0]))
    except RuntimeError:
        result.reason = "problem getting rar filename"
        return False, result

    if snapshot.find_name(name):
        result.reason = "file already exists"
        return True, result
    result.value = name
    return False, result