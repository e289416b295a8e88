"""Output formatting for snippet listings.

Renders the collections held by the store as plain text, a Markdown table per
language, or JSON in the same layout `snipkeep export` writes.
"""

import json
from enum import Enum

from snipkeep.models import Collection, Snippet, collection_to_dict


class OutputFormat(Enum):
    """Enum representing available output formats."""

    TEXT = "text"
    MARKDOWN = "markdown"
    JSON = "json"


class CollectionFormatter:
    """Formats snippet collections for the ``list`` command.

    Attributes:
        output_format (OutputFormat): Selected rendering.
        search_terms (list[str]): Keep only snippets whose prefix or description
            contains one of these (case-insensitive).
    """

    def __init__(
        self,
        output_format: OutputFormat = OutputFormat.TEXT,
        search_terms: list[str] | None = None,
    ):
        self.output_format = output_format
        self.search_terms = [term.lower() for term in search_terms or []]

    def matches(self, snippet: Snippet) -> bool:
        """Check a snippet against the search terms (always True without terms)."""
        if not self.search_terms:
            return True
        haystack = f"{snippet.prefix}\n{snippet.description}".lower()
        return any(term in haystack for term in self.search_terms)

    def filter(self, collections: dict[str, Collection]) -> dict[str, Collection]:
        """Apply the search terms, dropping languages left empty by them."""
        filtered = {
            language_id: {key: s for key, s in collection.items() if self.matches(s)}
            for language_id, collection in collections.items()
        }
        if not self.search_terms:
            return filtered
        return {language_id: c for language_id, c in filtered.items() if c}

    def format(self, collections: dict[str, Collection]) -> str:
        """Render ``collections`` in the selected format."""
        collections = self.filter(collections)
        if self.output_format == OutputFormat.JSON:
            return json.dumps(
                {lang: collection_to_dict(c) for lang, c in collections.items()},
                indent=2,
                ensure_ascii=False,
            )

        sections = [self.format_collection(lang, c) for lang, c in collections.items()]
        total = sum(len(c) for c in collections.values())
        sections.append(self.format_footer(len(collections), total))
        return "\n".join(sections)

    def format_collection(self, language_id: str, collection: Collection) -> str:
        """Render one language's snippets."""
        if self.output_format == OutputFormat.TEXT:
            lines = [f"{language_id} ({len(collection)} snippet(s))"]
            width = max((len(key) for key in collection), default=0)
            for key, snippet in collection.items():
                lines.append(f"  {key.ljust(width)}  {snippet.display_description}")
            return "\n".join(lines) + "\n"

        lines = [f"## {language_id}", ""]
        if not collection:
            lines.append("_No snippets._")
        else:
            lines.append("| Prefix | Description | Lines |")
            lines.append("| --- | --- | --- |")
            for key, snippet in collection.items():
                lines.append(
                    f"| {_cell(key)} | {_cell(snippet.display_description)} | {len(snippet.body)} |"
                )
        return "\n".join(lines) + "\n"

    def format_footer(self, language_count: int, snippet_count: int) -> str:
        """Format the totals line."""
        if self.output_format == OutputFormat.TEXT:
            return f"Total: {snippet_count} snippet(s) in {language_count} language(s)"
        return f"---\nTotal: {snippet_count} snippet(s) in {language_count} language(s)"


def _cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")
