"""
snipkeep - A personal library of reusable code snippets.
Stores snippets per language as editor-compatible JSON files and keeps a
human-readable SavedSnippets.md log of them in the current project.
"""

__version__ = "0.3.0"

from snipkeep.config import Config
from snipkeep.errors import (
    CorruptStoreError,
    LogMirrorError,
    NotFoundError,
    SnipkeepError,
    StorageError,
    ValidationError,
)
from snipkeep.interfaces import ActiveContext
from snipkeep.log_mirror import LogMirror
from snipkeep.manager import SnippetManager
from snipkeep.models import Snippet
from snipkeep.store import SnippetStore

__all__ = [
    "ActiveContext",
    "Config",
    "CorruptStoreError",
    "LogMirror",
    "LogMirrorError",
    "NotFoundError",
    "Snippet",
    "SnippetManager",
    "SnippetStore",
    "SnipkeepError",
    "StorageError",
    "ValidationError",
]
