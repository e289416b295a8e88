"""Snippet records and the collection type that groups them by prefix."""

from dataclasses import dataclass, field
from typing import Any

from snipkeep.errors import ValidationError

NO_DESCRIPTION = "No description"

_KNOWN_FIELDS = ("prefix", "body", "description")


@dataclass
class Snippet:
    """A named, reusable block of text.

    Attributes:
        prefix (str): Trigger word; unique key within a language collection.
        body (list[str]): Expansion content, one entry per line.
        description (str): Free text shown next to the prefix.
        extra (dict[str, Any]): Unrecognised keys (e.g. ``scope``) kept as-is.
    """

    prefix: str
    body: list[str]
    description: str = ""
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        validate_prefix(self.prefix)

    @classmethod
    def from_text(cls, text: str, prefix: str, description: str) -> "Snippet":
        """Build a snippet from selected text, one body entry per line."""
        return cls(prefix=prefix, body=text.split("\n"), description=description)

    @classmethod
    def from_dict(cls, data: Any, default_prefix: str | None = None) -> "Snippet":
        """Build a snippet from a decoded JSON record.

        A string ``body`` is split into lines. When the record carries no
        ``prefix``, ``default_prefix`` (usually its mapping key) is used.

        Raises:
            ValidationError: If the record is not an object or has no body.
        """
        label = default_prefix or "snippet"
        if not isinstance(data, dict):
            raise ValidationError("snippet", f"Snippet '{label}' must be a JSON object")
        prefix = data.get("prefix") or default_prefix
        if isinstance(prefix, list):
            raise ValidationError(
                "prefix",
                f"Snippet '{label}' prefix must be a string; prefix lists are not supported",
            )
        if not prefix or not isinstance(prefix, str):
            raise ValidationError("prefix", f"Snippet '{label}' has no prefix")
        if "body" not in data:
            raise ValidationError("body", f"Snippet '{prefix}' has no body")
        body = data["body"]
        if isinstance(body, str):
            body = body.split("\n")
        elif not isinstance(body, list) or not all(isinstance(line, str) for line in body):
            raise ValidationError("body", f"Snippet '{prefix}' body must be a list of strings")
        description = data.get("description") or ""
        if not isinstance(description, str):
            raise ValidationError(
                "description", f"Snippet '{prefix}' description must be a string"
            )
        extra = {k: v for k, v in data.items() if k not in _KNOWN_FIELDS}
        return cls(prefix=prefix, body=list(body), description=description, extra=extra)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the on-disk record layout."""
        record: dict[str, Any] = {
            "prefix": self.prefix,
            "body": list(self.body),
            "description": self.description,
        }
        record.update(self.extra)
        return record

    @property
    def display_description(self) -> str:
        """Description with the placeholder used when none was given."""
        return self.description or NO_DESCRIPTION


# prefix -> Snippet, one per language identifier
Collection = dict[str, Snippet]


def validate_prefix(prefix: str) -> None:
    """Reject prefixes that cannot serve as a key or a log heading."""
    if not prefix or not prefix.strip():
        raise ValidationError("prefix", "Snippet prefix must not be empty")
    if "\n" in prefix or "\r" in prefix:
        raise ValidationError("prefix", f"Snippet prefix {prefix!r} must be a single line")


def collection_to_dict(collection: Collection) -> dict[str, dict[str, Any]]:
    """Serialize a collection to plain JSON-compatible data."""
    return {key: snippet.to_dict() for key, snippet in collection.items()}


def collection_from_dict(data: dict[str, Any]) -> Collection:
    """Parse a ``prefix -> record`` mapping, keeping the mapping keys."""
    return {key: Snippet.from_dict(record, default_prefix=key) for key, record in data.items()}
