import subprocess
from unittest.mock import patch

from rarhunter.criteria import (
    CriteriaError,
    CriteriaResult,
    already_unrared,
    missing_files,
)
from rarhunter.snapshot import SFVFile, snapshot_dir


def _lb(output, code=0):
    def fake(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, code, stdout=output.encode())

    return fake


def test_result_string_without_formatter():
    assert str(CriteriaResult(value="abc")) == "Reason: abc\n"


def test_result_error_carries_message():
    err = CriteriaResult(value="abc", string_fn=lambda v: v.upper()).error()
    assert isinstance(err, CriteriaError)
    assert str(err) == "Reason: ABC\n"


def test_missing_files_detected(tmp_path):
    (tmp_path / "a.rar").write_bytes(b"")
    snap = snapshot_dir(tmp_path)
    ok, result = missing_files(snap, SFVFile({"a.rar": "1", "a.r00": "2"}))
    assert ok is True
    assert result.value == ["a.r00"]
    assert result.reason == "required files were missing"
    assert str(result) == "Reason: Missing files:\na.r00\n\n"


def test_missing_files_none(tmp_path):
    (tmp_path / "a.rar").write_bytes(b"")
    ok, result = missing_files(snapshot_dir(tmp_path), SFVFile({"a.rar": "1"}))
    assert ok is False
    assert result.reason == ""


def test_already_unrared_without_rar(tmp_path):
    (tmp_path / "a.txt").write_text("x")
    ok, result = already_unrared(snapshot_dir(tmp_path), SFVFile())
    assert ok is False
    assert result.reason.startswith("error finding .rar files")


def test_already_unrared_when_extracted(tmp_path):
    (tmp_path / "a.rar").write_bytes(b"")
    (tmp_path / "movie.mkv").write_bytes(b"")
    with patch("subprocess.run", side_effect=_lb("movie.mkv\n")):
        ok, result = already_unrared(snapshot_dir(tmp_path), SFVFile())
    assert ok is True
    assert result.reason == "file already exists"


def test_already_unrared_not_yet(tmp_path):
    (tmp_path / "a.rar").write_bytes(b"")
    with patch("subprocess.run", side_effect=_lb("movie.mkv\n")):
        ok, result = already_unrared(snapshot_dir(tmp_path), SFVFile())
    assert ok is False
    assert result.value == "movie.mkv"


def test_already_unrared_command_failure(tmp_path):
    (tmp_path / "a.rar").write_bytes(b"")
    with patch("subprocess.run", side_effect=_lb("", code=2)):
        ok, result = already_unrared(snapshot_dir(tmp_path), SFVFile())
    assert ok is False
    assert result.reason == "problem getting rar filename"