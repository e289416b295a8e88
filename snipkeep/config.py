"""Configuration management for snipkeep.

The snippets directory and the log file name are resolved once at startup and
handed to the store and log mirror; nothing below reads environment variables
or platform paths on its own.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from snipkeep.errors import ValidationError

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "snipkeep"
DEFAULT_SNIPPETS_DIR = CONFIG_DIR / "snippets"
DEFAULT_LOG_FILENAME = "SavedSnippets.md"
DEFAULT_EXPORT_FILENAME = "exported-snippets.json"


def default_config_paths() -> list[Path]:
    """Locations searched for a config file, in priority order."""
    return [Path.cwd() / "snipkeep.json", CONFIG_DIR / "config.json"]


@dataclass
class Config:
    """Configuration for the snippet store and its markdown log.

    Attributes:
        snippets_dir (Path): Directory holding one ``<languageId>.json`` per language.
        log_filename (str): Name of the markdown log inside the project root.
        default_language (str): Language used when none is given or detected.
        import_default_prefix (str): Key for an imported single snippet without prefix.
        export_filename (str): Suggested file name for exports.
        indent (int): JSON indentation for written files.
    """

    snippets_dir: Path = field(default_factory=lambda: DEFAULT_SNIPPETS_DIR)
    log_filename: str = DEFAULT_LOG_FILENAME
    default_language: str = "javascript"
    import_default_prefix: str = "importedSnippet"
    export_filename: str = DEFAULT_EXPORT_FILENAME
    indent: int = 2

    def __post_init__(self):
        self.snippets_dir = Path(self.snippets_dir).expanduser()

    @classmethod
    def from_file(cls, path: str | Path | None) -> "Config":
        """Load configuration from a JSON file.

        If no path is provided, tries ``snipkeep.json`` in the current
        directory, then ``~/.config/snipkeep/config.json``.

        Args:
            path (str | Path | None): Path to JSON config file, or None for auto-search.

        Returns:
            Config: A configuration instance.

        Raises:
            ValidationError: If the file is not a JSON object.
        """
        if not path:
            for default_path in default_config_paths():
                if default_path.exists():
                    path = default_path
                    break
            else:
                return cls()

        path = Path(path)
        logger.debug("Loading config from %s", path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError("config", f"Config file {path} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ValidationError("config", f"Config file {path} must contain a JSON object")

        config = cls()
        config.update(
            {
                "snippets_dir": data.get("snippets_dir"),
                "log_filename": data.get("log_filename"),
                "default_language": data.get("default_language"),
                "import_default_prefix": data.get("import_default_prefix"),
                "export_filename": data.get("export_filename"),
                "indent": data.get("indent"),
            }
        )
        return config

    def to_dict(self) -> dict:
        """Convert configuration to dictionary.

        Returns:
            dict: JSON-compatible representation of configuration.
        """
        return {
            "snippets_dir": str(self.snippets_dir),
            "log_filename": self.log_filename,
            "default_language": self.default_language,
            "import_default_prefix": self.import_default_prefix,
            "export_filename": self.export_filename,
            "indent": self.indent,
        }

    def update(self, updates: dict[str, Any]) -> None:
        """Update configuration fields, skipping unknown keys and None values.

        Args:
            updates (dict[str, Any]): Dictionary of config values to update.
        """
        for key, value in updates.items():
            if hasattr(self, key) and value is not None:
                setattr(self, key, value)
        self.snippets_dir = Path(self.snippets_dir).expanduser()

    @property
    def export_path(self) -> Path:
        """Default destination offered when exporting.

        Kept out of ``snippets_dir`` so an export is never listed as a language.
        """
        return Path.cwd() / self.export_filename
