"""
SnippetStore: JSON-file persistence for snippet collections.

One file per language identifier, ``<snippets_dir>/<languageId>.json``, holding
a ``prefix -> snippet`` mapping in the layout editors read as user snippets.

Usage::

    store = SnippetStore(Path("~/.config/snipkeep/snippets"))
    store.upsert("python", Snippet("main", ["if __name__ == '__main__':"]))
    store.load("python")["main"]
    store.remove("python", "main")

Every mutating call is a complete load/modify/save cycle. There is no locking:
if another process rewrites a file between our load and save, the last writer
wins.
"""

import json
import logging
from pathlib import Path

from snipkeep.errors import CorruptStoreError, StorageError, ValidationError
from snipkeep.models import Collection, Snippet, collection_from_dict, collection_to_dict
from snipkeep.utils import read_text, write_json_atomic

__all__ = ["SnippetStore"]

logger = logging.getLogger(__name__)

_SUFFIX = ".json"


class SnippetStore:
    """Keyed snippet collections partitioned by language identifier.

    Attributes:
        root (Path): Directory holding the per-language files. Created lazily
            on the first write.
        indent (int): JSON indentation used when saving.
    """

    def __init__(self, root: Path, indent: int = 2):
        self.root = Path(root).expanduser()
        self.indent = indent

    def path_for(self, language_id: str) -> Path:
        """Return the file backing ``language_id``.

        Raises:
            ValidationError: If the identifier is empty or would leave the root.
        """
        if not language_id or not language_id.strip():
            raise ValidationError("language", "Language identifier must not be empty")
        if "/" in language_id or "\\" in language_id or language_id in (".", ".."):
            raise ValidationError(
                "language", f"Language identifier {language_id!r} must not contain path separators"
            )
        return self.root / f"{language_id}{_SUFFIX}"

    def has_language(self, language_id: str) -> bool:
        """True when a collection file exists for ``language_id``."""
        return self.path_for(language_id).is_file()

    def load(self, language_id: str) -> Collection:
        """Read the collection for ``language_id``.

        Returns:
            Collection: The stored snippets, or an empty collection if the
            language has never been written.

        Raises:
            CorruptStoreError: If the file is not a JSON object of snippet records.
            StorageError: If the file exists but cannot be read.
        """
        path = self.path_for(language_id)
        if not path.exists():
            logger.debug("No collection for %s at %s", language_id, path)
            return {}

        text = read_text(path)
        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptStoreError(
                path, f"invalid JSON ({e.msg} at line {e.lineno}); comments are not supported"
            ) from e
        if not isinstance(data, dict):
            raise CorruptStoreError(path, "top level must be a JSON object")
        try:
            collection = collection_from_dict(data)
        except ValidationError as e:
            raise CorruptStoreError(path, str(e)) from e

        logger.debug("Loaded %d snippet(s) for %s", len(collection), language_id)
        return collection

    def save(self, language_id: str, collection: Collection) -> Path:
        """Write ``collection`` back in full, atomically.

        Returns:
            Path: The file written.
        """
        path = self.path_for(language_id)
        write_json_atomic(path, collection_to_dict(collection), indent=self.indent)
        logger.debug("Saved %d snippet(s) for %s", len(collection), language_id)
        return path

    def upsert(self, language_id: str, snippet: Snippet) -> Snippet | None:
        """Insert or overwrite ``snippet`` under its prefix.

        Returns:
            Snippet | None: The snippet that was replaced, if any.
        """
        collection = self.load(language_id)
        previous = collection.get(snippet.prefix)
        collection[snippet.prefix] = snippet
        self.save(language_id, collection)
        return previous

    def remove(self, language_id: str, prefix: str) -> Snippet | None:
        """Delete ``prefix`` from the collection.

        Returns:
            Snippet | None: The removed snippet, or None if it was absent (in
            which case nothing is written).
        """
        collection = self.load(language_id)
        removed = collection.pop(prefix, None)
        if removed is None:
            logger.debug("Prefix %r not in %s; nothing removed", prefix, language_id)
            return None
        self.save(language_id, collection)
        return removed

    def list_languages(self) -> list[str]:
        """Enumerate languages that have a collection file, sorted by name."""
        if not self.root.is_dir():
            return []
        try:
            return sorted(p.stem for p in self.root.glob(f"*{_SUFFIX}") if p.is_file())
        except OSError as e:
            raise StorageError(self.root, "list", e) from e

    def merge_import(self, language_id: str, imported: Collection) -> int:
        """Upsert every entry of ``imported``, overwriting on conflict.

        Returns:
            int: Number of snippets processed.
        """
        collection = self.load(language_id)
        overwritten = [key for key in imported if key in collection]
        collection.update(imported)
        self.save(language_id, collection)
        logger.debug(
            "Merged %d snippet(s) into %s (%d overwritten)",
            len(imported),
            language_id,
            len(overwritten),
        )
        return len(imported)
