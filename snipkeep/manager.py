"""Snippet management operations.

This module defines `SnippetManager`, which creates, deletes, imports and
exports snippets on top of a `SnippetStore`, and mirrors every change into the
project's markdown log through a `LogMirror`.

Store failures propagate to the caller. Log failures never undo a store change;
they are reported to the notifier as warnings.
"""

import json
import logging
from pathlib import Path
from typing import Any

from snipkeep.config import Config
from snipkeep.errors import LogMirrorError, NotFoundError, ValidationError
from snipkeep.interfaces import ActiveContext, Notifier
from snipkeep.log_mirror import LogMirror
from snipkeep.models import Collection, Snippet, collection_to_dict
from snipkeep.store import SnippetStore
from snipkeep.utils import read_text, write_json_atomic

logger = logging.getLogger(__name__)

_SINGLE_SNIPPET_FIELDS = ("prefix", "body", "description")


class SnippetManager:
    """User-facing snippet operations.

    Attributes:
        store (SnippetStore): Per-language snippet collections.
        log (LogMirror): Markdown log bound to the current project, if any.
        notifier (Notifier): Receives success messages and log warnings.
        import_default_prefix (str): Key for an imported snippet without prefix.
    """

    def __init__(
        self,
        store: SnippetStore,
        log: LogMirror,
        notifier: Notifier,
        import_default_prefix: str = "importedSnippet",
        indent: int = 2,
    ):
        self.store = store
        self.log = log
        self.notifier = notifier
        self.import_default_prefix = import_default_prefix
        self.indent = indent

    @classmethod
    def for_context(
        cls, config: Config, context: ActiveContext, notifier: Notifier
    ) -> "SnippetManager":
        """Build a manager whose log is bound to ``context.project_root``."""
        return cls(
            store=SnippetStore(config.snippets_dir, indent=config.indent),
            log=LogMirror(context.project_root, config.log_filename),
            notifier=notifier,
            import_default_prefix=config.import_default_prefix,
            indent=config.indent,
        )

    def create_from_selection(
        self, text: str, prefix: str, description: str, language_id: str
    ) -> Snippet:
        """Save ``text`` as a snippet and log it.

        Overwrites an existing snippet with the same prefix; its old log block
        for this language is replaced so each snippet keeps a single entry.

        Raises:
            ValidationError: If any argument is empty.
        """
        if not text:
            raise ValidationError("text", "No text selected to generate a snippet")
        if not prefix or not prefix.strip():
            raise ValidationError("prefix", "Snippet name (prefix) is required")
        if not description or not description.strip():
            raise ValidationError("description", "Snippet description is required")
        _require_language(language_id)

        snippet = Snippet.from_text(text, prefix, description)
        previous = self.store.upsert(language_id, snippet)
        self.notifier.info(f"Snippet saved globally to {self.store.path_for(language_id)}")

        if previous is not None:
            collection = self.store.load(language_id)
            self._unlog(
                previous.prefix,
                language_id,
                announce=False,
                limit=_sibling_limit(collection, snippet.prefix, previous.prefix),
            )
        self._log(snippet, language_id)
        return snippet

    def delete(self, language_id: str, prefix: str) -> Snippet:
        """Remove a snippet and its log block.

        Raises:
            NotFoundError: If the language has no collection or lacks ``prefix``.
        """
        _require_language(language_id)
        if not self.store.has_language(language_id):
            raise NotFoundError(f"No snippets found for language '{language_id}'")

        removed = self.store.remove(language_id, prefix)
        if removed is None:
            raise NotFoundError(f"Snippet '{prefix}' not found in '{language_id}'")
        self.notifier.info(f'Snippet "{prefix}" deleted from {self.store.path_for(language_id)}')

        remaining = self.store.load(language_id)
        self._unlog(
            removed.prefix, language_id, limit=_sibling_limit(remaining, prefix, removed.prefix)
        )
        return removed

    def import_from(self, parsed_json: Any, language_id: str) -> int:
        """Merge a single snippet or a ``key -> snippet`` mapping.

        Args:
            parsed_json (Any): Decoded JSON, or raw JSON text.
            language_id (str): Collection to merge into.

        Returns:
            int: Number of snippets imported.

        Raises:
            ValidationError: If the language is empty or the data is not a
                snippet record or mapping of records.
        """
        _require_language(language_id)
        if isinstance(parsed_json, str):
            try:
                parsed_json = json.loads(parsed_json)
            except json.JSONDecodeError as e:
                raise ValidationError("file", f"Snippet data is not valid JSON: {e}") from e
        if not isinstance(parsed_json, dict):
            raise ValidationError("file", "Snippet data must be a JSON object")

        imported = self._normalize_import(parsed_json)
        existing = self.store.load(language_id)
        count = self.store.merge_import(language_id, imported)
        merged = {**existing, **imported}
        for key, snippet in imported.items():
            previous = existing.get(key)
            if previous is not None:
                self._unlog(
                    previous.prefix,
                    language_id,
                    announce=False,
                    limit=_sibling_limit(merged, key, previous.prefix),
                )
            self._log(snippet, language_id)

        self.notifier.info(f"Imported {count} snippet(s) successfully for {language_id}!")
        return count

    def import_file(self, path: Path, language_id: str) -> int:
        """Read ``path`` and import its snippets.

        Raises:
            StorageError: If the file cannot be read.
            ValidationError: If it does not hold valid snippet JSON.
        """
        text = read_text(Path(path))
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValidationError("file", f"Failed to parse snippet file {path}: {e}") from e
        return self.import_from(data, language_id)

    def export_all(self) -> dict[str, Collection]:
        """Load every known collection.

        Raises:
            NotFoundError: If no language has been saved yet.
        """
        languages = self.store.list_languages()
        if not languages:
            raise NotFoundError(f"No snippets found to export in {self.store.root}")
        return {language_id: self.store.load(language_id) for language_id in languages}

    def export_to(self, path: Path) -> int:
        """Write every collection to ``path`` as ``{languageId: collection}``.

        Returns:
            int: Number of languages exported.
        """
        collections = self.export_all()
        self.write_export(collections, path)
        return len(collections)

    def write_export(self, collections: dict[str, Collection], path: Path) -> Path:
        """Persist collections gathered by `export_all` to ``path``."""
        path = Path(path)
        data = {language_id: collection_to_dict(c) for language_id, c in collections.items()}
        write_json_atomic(path, data, indent=self.indent)
        self.notifier.info(f"Snippets exported to {path}")
        return path

    def list_snippets(self, language_id: str | None = None) -> dict[str, Collection]:
        """Collections for one language, or for all of them."""
        if language_id:
            return {language_id: self.store.load(language_id)}
        return {lang: self.store.load(lang) for lang in self.store.list_languages()}

    def _normalize_import(self, data: dict[str, Any]) -> Collection:
        """Turn imported JSON into a collection.

        A single snippet is keyed by its prefix; a mapping keeps its own keys.
        """
        if all(name in data for name in _SINGLE_SNIPPET_FIELDS):
            prefix = data.get("prefix") or self.import_default_prefix
            snippet = Snippet.from_dict({**data, "prefix": prefix})
            return {snippet.prefix: snippet}

        imported: Collection = {}
        for key, record in data.items():
            if isinstance(record, Snippet):
                snippet = record
            else:
                snippet = Snippet.from_dict(record, default_prefix=key)
            imported[key] = snippet
        return imported

    def _log(self, snippet: Snippet, language_id: str) -> None:
        try:
            path = self.log.append(snippet, language_id)
        except LogMirrorError as e:
            logger.debug("Log append failed for %r", snippet.prefix, exc_info=True)
            self.notifier.warn(f"Snippet saved, but the log was not updated: {e}")
            return
        if path is None:
            self.notifier.warn(
                "No active workspace found. Snippet names cannot be saved to the project folder."
            )
        else:
            self.notifier.info(f'Snippet "{snippet.prefix}" added to {path}')

    def _unlog(
        self, prefix: str, language_id: str, announce: bool = True, limit: int | None = None
    ) -> None:
        try:
            removed = self.log.remove(prefix, language_id, limit=limit)
        except LogMirrorError as e:
            logger.debug("Log removal failed for %r", prefix, exc_info=True)
            self.notifier.warn(f"Snippet stored, but the log was not updated: {e}")
            return
        if removed and announce:
            self.notifier.info(f'Snippet "{prefix}" removed from {self.log.filename}.')


def _sibling_limit(collection: Collection, key: str, prefix: str) -> int | None:
    """Log blocks to drop for ``key``: one if another entry still shows ``prefix``."""
    if any(k != key and s.prefix == prefix for k, s in collection.items()):
        return 1
    return None


def _require_language(language_id: str) -> None:
    if not language_id or not language_id.strip():
        raise ValidationError("language", "Language is required for snippets")
