# tests/test_cli.py
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from pbcat import clipboard
from pbcat.cli import create_arg_parser, main


def write(base: Path, name: str, contents: str) -> Path:
    path = base / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(contents, encoding="utf-8")
    return path


@pytest.fixture
def clipboard_file(tmp_path, monkeypatch):
    """Redirects clipboard output to a file for the duration of a test."""
    out = tmp_path / "clipboard.txt"
    monkeypatch.setenv("PBCAT_CLIPBOARD_FILE", str(out))
    return out

# --- Test 1: Argument parsing ---

def test_parser_defaults():
    args = create_arg_parser().parse_args(["a.txt"])
    assert args.paths == ["a.txt"]
    assert args.separator is None
    assert args.header is False
    assert args.sort == "args"
    assert args.list is False

def test_unknown_option_is_usage_error(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["--bogus", "a.txt"])
    assert exc_info.value.code == 2
    err = capsys.readouterr().err
    assert "usage: pbcat" in err
    assert "Error:" in err

def test_missing_paths_is_usage_error():
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 2

def test_bad_sort_mode_is_usage_error():
    with pytest.raises(SystemExit) as exc_info:
        main(["--sort", "size", "a.txt"])
    assert exc_info.value.code == 2

# --- Test 2: End-to-end runs ---

def test_end_to_end_with_separator_header_and_sort(tmp_path, clipboard_file, capsys):
    b = write(tmp_path, "b.txt", "Bravo")
    a = write(tmp_path, "a.txt", "Alpha")

    main(["--sort", "name", "-H", "-s", "\n---\n", str(b), str(a)])

    expected = f"== {a.resolve()} ==\nAlpha\n---\n== {b.resolve()} ==\nBravo"
    assert clipboard_file.read_text(encoding="utf-8") == expected
    out = capsys.readouterr().out
    assert f"Copied 2 files ({len(expected.encode('utf-8'))} bytes) to {clipboard_file}" in out

def test_end_to_end_directory(tmp_path, clipboard_file):
    """
    Simulates `pbcat <project>` through sys.argv, the way the console
    script is invoked.
    """
    project = tmp_path / "project"
    write(project, "src/main.py", "def hello():\n  print('hello')\n")
    write(project, "src/utils.py", "# utility\n")
    write(project, "logs/app.log", "ERROR: ...")
    write(project, "README.md", "# My Project\n")
    write(project, "node_modules/dep/index.js", "module.exports = 1;")
    write(project, ".gitignore", "*.log\nsrc/utils.py\n")

    with patch.object(sys, "argv", ["pbcat", str(project)]):
        main()

    assert clipboard_file.read_text(encoding="utf-8") == "# My Project\ndef hello():\n  print('hello')\n"

def test_single_file_copied_verbatim(tmp_path, clipboard_file, capsys):
    a = write(tmp_path, "only.txt", "just this")
    main(["-s", "|", str(a)])
    assert clipboard_file.read_text(encoding="utf-8") == "just this"
    assert "Copied 1 file (9 bytes)" in capsys.readouterr().out

def test_list_mode_prints_files_and_skips_clipboard(tmp_path, clipboard_file, capsys):
    a = write(tmp_path, "one.txt", "one")
    b = write(tmp_path, "two.txt", "two")

    main(["--list", str(a), str(b)])

    out = capsys.readouterr().out
    assert str(a.resolve()) in out
    assert str(b.resolve()) in out
    assert "Listed 2 files (6 bytes)" in out
    assert not clipboard_file.exists()

def test_verbose_logs_to_stderr(tmp_path, clipboard_file, capsys):
    a = write(tmp_path, "one.txt", "one")
    main(["-v", str(a)])
    err = capsys.readouterr().err
    assert "[pbcat] Resolved 1 file" in err

# --- Test 3: Failures ---

def test_missing_file_fails(tmp_path, clipboard_file, capsys):
    missing = tmp_path / "missing.txt"
    with pytest.raises(SystemExit) as exc_info:
        main([str(missing)])
    assert exc_info.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: ")
    assert str(missing) in err

def test_empty_directory_fails(tmp_path, clipboard_file, capsys):
    empty = tmp_path / "empty"
    empty.mkdir()
    with pytest.raises(SystemExit) as exc_info:
        main([str(empty)])
    assert exc_info.value.code == 1
    assert "No files to copy" in capsys.readouterr().err

def test_binary_file_aborts_without_output(tmp_path, clipboard_file, capsys):
    good = write(tmp_path, "good.txt", "fine")
    bad = tmp_path / "bad.bin"
    bad.write_bytes(b"\x00\xff\xfe")

    with pytest.raises(SystemExit) as exc_info:
        main([str(good), str(bad)])
    assert exc_info.value.code == 1
    assert "not valid UTF-8" in capsys.readouterr().err
    assert not clipboard_file.exists()

def test_no_clipboard_available(tmp_path, monkeypatch, capsys):
    monkeypatch.delenv("PBCAT_CLIPBOARD_FILE", raising=False)
    monkeypatch.setattr(clipboard, "preferred_clipboard_tools", lambda platform=None: [])
    a = write(tmp_path, "one.txt", "one")

    with pytest.raises(SystemExit) as exc_info:
        main([str(a)])
    assert exc_info.value.code == 1
    assert "No clipboard utility" in capsys.readouterr().err
