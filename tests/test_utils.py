"""Tests for utility functions."""

import json
from pathlib import Path

import pytest

from snipkeep.errors import StorageError, ValidationError
from snipkeep.utils import (
    detect_language_id,
    parse_line_range,
    read_text,
    select_lines,
    write_json_atomic,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("main.py", "python"),
        ("app.JS", "javascript"),
        ("view.tsx", "typescriptreact"),
        ("Dockerfile", "dockerfile"),
        ("Makefile", "makefile"),
        ("notes", None),
        ("<stdin>", None),
    ],
)
def test_detect_language_id(name, expected):
    assert detect_language_id(Path(name)) == expected


def test_parse_line_range():
    assert parse_line_range("3-7") == (3, 7)
    assert parse_line_range("4") == (4, 4)


@pytest.mark.parametrize("value", ["0-3", "5-2", "a-b", ""])
def test_parse_line_range_invalid(value):
    with pytest.raises(ValidationError):
        parse_line_range(value)


def test_select_lines():
    text = "one\ntwo\nthree\nfour"
    assert select_lines(text, None) == text
    assert select_lines(text, (2, 3)) == "two\nthree"
    assert select_lines(text, (4, 10)) == "four"


def test_write_json_atomic_creates_parents(tmp_path):
    target = tmp_path / "a" / "b" / "data.json"
    write_json_atomic(target, {"ü": [1]})
    assert json.loads(target.read_text(encoding="utf-8")) == {"ü": [1]}
    assert "ü" in target.read_text(encoding="utf-8")
    assert [p.name for p in target.parent.iterdir()] == ["data.json"]


def test_write_json_atomic_unwritable_parent(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(StorageError, match="Could not write"):
        write_json_atomic(blocker / "data.json", {})


def test_read_text_errors(tmp_path):
    with pytest.raises(StorageError, match="Could not read"):
        read_text(tmp_path / "missing.txt")
    binary = tmp_path / "bin.dat"
    binary.write_bytes(b"\xff\xfe\x00")
    with pytest.raises(StorageError, match="not UTF-8"):
        read_text(binary)
