"""Utility functions for snipkeep."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from snipkeep.errors import StorageError, ValidationError

logger = logging.getLogger(__name__)

_EXTENSION_LANGUAGES = {
    ".py": "python",
    ".pyi": "python",
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascriptreact",
    ".ts": "typescript",
    ".tsx": "typescriptreact",
    ".json": "json",
    ".md": "markdown",
    ".sh": "shellscript",
    ".bash": "shellscript",
    ".zsh": "shellscript",
    ".ps1": "powershell",
    ".html": "html",
    ".css": "css",
    ".scss": "scss",
    ".sql": "sql",
    ".go": "go",
    ".rs": "rust",
    ".java": "java",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".hpp": "cpp",
    ".cs": "csharp",
    ".rb": "ruby",
    ".php": "php",
    ".yml": "yaml",
    ".yaml": "yaml",
    ".toml": "toml",
}


def detect_language_id(path: Path) -> str | None:
    """Guess an editor language identifier from a file extension."""
    if path.name.lower().startswith("dockerfile"):
        return "dockerfile"
    if path.name.lower() == "makefile":
        return "makefile"
    return _EXTENSION_LANGUAGES.get(path.suffix.lower())


def parse_line_range(value: str) -> tuple[int, int]:
    """Parse a 1-based inclusive ``START-END`` (or single ``N``) line range."""
    start_text, _, end_text = value.partition("-")
    try:
        start = int(start_text)
        end = int(end_text) if end_text else start
    except ValueError as e:
        raise ValidationError("lines", f"Invalid line range {value!r}; use START-END") from e
    if start < 1 or end < start:
        raise ValidationError("lines", f"Invalid line range {value!r}; use START-END")
    return start, end


def select_lines(text: str, line_range: tuple[int, int] | None) -> str:
    """Return the lines of ``text`` inside ``line_range`` (the whole text if None)."""
    if line_range is None:
        return text
    start, end = line_range
    lines = text.split("\n")
    return "\n".join(lines[start - 1 : end])


def write_json_atomic(path: Path, data: Any, indent: int = 2) -> None:
    """Write JSON to ``path`` through a temporary sibling file and a rename.

    Either the new content is fully in place or the previous file is untouched.

    Raises:
        StorageError: If the directory cannot be created or the file written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    except OSError as e:
        raise StorageError(path, "write", e) from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=indent, ensure_ascii=False)
            f.write("\n")
        os.replace(tmp_name, path)
    except OSError as e:
        Path(tmp_name).unlink(missing_ok=True)
        raise StorageError(path, "write", e) from e
    logger.debug("Wrote %s", path)


def read_text(path: Path) -> str:
    """Read a UTF-8 text file, wrapping OS failures in `StorageError`."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise StorageError(path, "read", OSError(f"not UTF-8 text ({e.reason})")) from e
    except OSError as e:
        raise StorageError(path, "read", e) from e
