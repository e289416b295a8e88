"""Markdown log of saved snippets.

Each saved snippet is mirrored into ``SavedSnippets.md`` at the project root as
a four-line block::

    ### <prefix>
    - **Description**: <description>
    - **Language**: <languageId>
    <blank line>

Removal scans the document line by line for blocks of exactly this shape, so
`render_entry` and `_scan_blocks` must change together.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from snipkeep.config import DEFAULT_LOG_FILENAME
from snipkeep.errors import LogMirrorError
from snipkeep.models import NO_DESCRIPTION, Snippet

__all__ = ["LogEntry", "LogMirror", "render_entry"]

logger = logging.getLogger(__name__)

HEADING_MARK = "### "
DESCRIPTION_MARK = "- **Description**: "
LANGUAGE_MARK = "- **Language**: "


@dataclass(frozen=True)
class LogEntry:
    """One parsed log block."""

    prefix: str
    description: str
    language_id: str


def _single_line(text: str) -> str:
    return text.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")


def render_entry(snippet: Snippet, language_id: str) -> str:
    """Render the log block for ``snippet``, blank terminator included."""
    description = _single_line(snippet.description) or NO_DESCRIPTION
    return (
        f"{HEADING_MARK}{snippet.prefix}\n"
        f"{DESCRIPTION_MARK}{description}\n"
        f"{LANGUAGE_MARK}{_single_line(language_id)}\n"
        "\n"
    )


def _split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, keeping line endings."""
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def _scan_blocks(lines: list[str]):
    """Yield ``(index, LogEntry)`` for every well-formed block in ``lines``."""
    i = 0
    while i + 3 < len(lines):
        heading, description, language, blank = lines[i : i + 4]
        if (
            heading.startswith(HEADING_MARK)
            and description.startswith(DESCRIPTION_MARK)
            and language.startswith(LANGUAGE_MARK)
            and blank == "\n"
            and description.endswith("\n")
            and language.endswith("\n")
        ):
            yield i, LogEntry(
                prefix=heading[len(HEADING_MARK) : -1],
                description=description[len(DESCRIPTION_MARK) : -1],
                language_id=language[len(LANGUAGE_MARK) : -1],
            )
            i += 4
        else:
            i += 1


class LogMirror:
    """Keeps the project's markdown snippet log in step with the store.

    Without a project root every operation is a no-op.

    Attributes:
        project_root (Path | None): Directory the log lives in.
        filename (str): Log file name.
    """

    def __init__(self, project_root: Path | None, filename: str = DEFAULT_LOG_FILENAME):
        self.project_root = Path(project_root) if project_root else None
        self.filename = filename

    @property
    def path(self) -> Path | None:
        """Location of the log document, or None when no project is bound."""
        if self.project_root is None:
            return None
        return self.project_root / self.filename

    def append(self, snippet: Snippet, language_id: str) -> Path | None:
        """Append the block for ``snippet``.

        Returns:
            Path | None: The log path, or None when no project is bound.

        Raises:
            LogMirrorError: If the document cannot be written.
        """
        path = self.path
        if path is None:
            logger.debug("No project root; skipping log entry for %r", snippet.prefix)
            return None

        entry = render_entry(snippet, language_id)
        try:
            if self._needs_separator(path):
                entry = "\n" + entry
            with open(path, "a", encoding="utf-8", newline="") as f:
                f.write(entry)
        except OSError as e:
            raise LogMirrorError(path, "append to", e) from e
        logger.debug("Logged %r (%s) to %s", snippet.prefix, language_id, path)
        return path

    def remove(
        self, prefix: str, language_id: str | None = None, limit: int | None = None
    ) -> int:
        """Delete every block headed ``### <prefix>``.

        Args:
            prefix (str): Heading to match exactly.
            language_id (str | None): When given, only blocks for this language.
            limit (int | None): Remove at most this many blocks, earliest first.

        Returns:
            int: Number of blocks removed.

        Raises:
            LogMirrorError: If the document cannot be read or rewritten.
        """
        path = self.path
        if path is None or not path.exists():
            return 0

        lines = _split_lines(self._read(path))
        doomed = [
            index
            for index, entry in _scan_blocks(lines)
            if entry.prefix == prefix and (language_id is None or entry.language_id == language_id)
        ]
        if limit is not None:
            doomed = doomed[:limit]
        if not doomed:
            return 0

        for index in reversed(doomed):
            del lines[index : index + 4]
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write("".join(lines))
        except OSError as e:
            raise LogMirrorError(path, "rewrite", e) from e
        logger.debug("Removed %d log block(s) for %r from %s", len(doomed), prefix, path)
        return len(doomed)

    def entries(self) -> list[LogEntry]:
        """Parse the blocks currently in the log, in document order."""
        path = self.path
        if path is None or not path.exists():
            return []
        return [entry for _, entry in _scan_blocks(_split_lines(self._read(path)))]

    @staticmethod
    def _read(path: Path) -> str:
        try:
            with open(path, encoding="utf-8", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            cause = e if isinstance(e, OSError) else OSError(f"not UTF-8 text ({e.reason})")
            raise LogMirrorError(path, "read", cause) from e

    @staticmethod
    def _needs_separator(path: Path) -> bool:
        """True if the existing document does not end with a newline."""
        if not path.exists() or path.stat().st_size == 0:
            return False
        with open(path, "rb") as f:
            f.seek(-1, 2)
            return f.read(1) != b"\n"
