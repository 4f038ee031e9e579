"""
Mana CLI Tests

1. fmt reprints files, stdin and to an output file
2. check reports per-input status and exit codes
"""

import io
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mana.cli import main


def write_file(path, text):
    path.write_text(text, encoding="utf-8")
    return str(path)


# --- Test 1: fmt ---

def test_fmt_file(tmp_path, capsys):
    src = write_file(tmp_path / "a.mana", "( 1 2 )\n#t ; yes\n")
    assert main(["fmt", src]) == 0
    assert capsys.readouterr().out == "(1 2)\n#t\n"


def test_fmt_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO('#[ cons (#f ()) "" ]'))
    assert main(["fmt"]) == 0
    assert capsys.readouterr().out == "(#f)\n"


def test_fmt_output_file(tmp_path):
    src = write_file(tmp_path / "a.mana", '#[ int () "\\x02\\x00\\x00\\x00\\x00\\x00\\x00\\x00" ]')
    out = tmp_path / "out.mana"
    assert main(["fmt", "-o", str(out), src]) == 0
    assert out.read_text(encoding="utf-8") == "2\n"


def test_fmt_error(tmp_path, capsys):
    src = write_file(tmp_path / "bad.mana", "(1 2")
    assert main(["fmt", src]) == 1
    assert "UnbalancedDelimiter" in capsys.readouterr().err


# --- Test 2: check ---

def test_check(tmp_path, capsys):
    good = write_file(tmp_path / "good.mana", "1 2")
    bad = write_file(tmp_path / "bad.mana", "9223372036854775808")
    assert main(["--no-color", "check", good, bad]) == 1
    out = capsys.readouterr().out
    assert "good.mana (2 datums)" in out
    assert "IntegerOutOfRange" in out


def test_check_depth_option(tmp_path, capsys):
    src = write_file(tmp_path / "deep.mana", "(((1)))")
    assert main(["--max-depth", "2", "check", src]) == 1
    assert "NestingTooDeep" in capsys.readouterr().out


def test_missing_file(tmp_path, capsys):
    assert main(["check", str(tmp_path / "missing.mana")]) == 1


def test_no_command(capsys):
    assert main([]) == 2
