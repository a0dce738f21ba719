import subprocess
from unittest.mock import patch

import pytest

from rarhunter.cli import all_dirs, main, run


def _fake(extract_code=0):
    def fake(cmd, **kwargs):
        if cmd[1] == "lb":
            return subprocess.CompletedProcess(cmd, 0, stdout=b"movie.mkv")
        return subprocess.CompletedProcess(cmd, extract_code, stdout=b"")

    return fake


@pytest.fixture
def library(tmp_path):
    ready = tmp_path / "ready"
    ready.mkdir()
    (ready / "a.rar").write_bytes(b"")
    (ready / "a.sfv").write_text("a.rar 11\n")
    (tmp_path / "empty").mkdir()
    (tmp_path / "empty" / "nested").mkdir()
    return tmp_path


def test_all_dirs_lists_start_first(library):
    dirs = all_dirs(library)
    assert dirs[0] == str(library)
    assert set(dirs[1:]) == {
        str(library / "ready"),
        str(library / "empty"),
        str(library / "empty" / "nested"),
    }


def test_run_with_nothing_to_do(tmp_path, capsys):
    (tmp_path / "child").mkdir()
    run([str(tmp_path)])
    assert "skipped 2 dirs" in capsys.readouterr().err


def test_main_extracts_ready_release(library, capsys):
    with patch("subprocess.run", side_effect=_fake()):
        code = main([str(library)])
    captured = capsys.readouterr()
    assert code == 0
    assert "skipped 3 dirs" in captured.err
    assert f"unrar a.rar in {library / 'ready'}" in captured.out


def test_main_reports_failure(library, capsys):
    with patch("subprocess.run", side_effect=_fake(extract_code=1)):
        code = main([str(library)])
    assert code == 1
    assert "[a.rar] did not complete successfully" in capsys.readouterr().err


def test_main_requires_argument():
    with pytest.raises(SystemExit, match="need one argument"):
        main([])