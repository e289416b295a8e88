"""Collaborators the snippet manager and workflows talk to.

These are the seams between the core and whatever front-end drives it. Any
interactive call may return None, meaning the user abandoned the step.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

# extension label -> extensions, e.g. {"JSON": ["json"]}
FileFilters = dict[str, list[str]]

JSON_FILTERS: FileFilters = {"JSON": ["json"]}


@dataclass(frozen=True)
class ActiveContext:
    """What the user is working on when a command runs.

    Attributes:
        selected_text (str): Current selection; empty when nothing is selected.
        language_id (str | None): Language of the active document, if known.
        project_root (Path | None): Workspace root; None disables the markdown log.
    """

    selected_text: str = ""
    language_id: str | None = None
    project_root: Path | None = None


class PromptProvider(Protocol):
    def ask_text(self, label: str, placeholder: str = "", default: str | None = None) -> str | None: ...


class Picker(Protocol):
    def pick_one(self, options: Sequence[str], label: str) -> str | None: ...


class FileDialog(Protocol):
    def open_file(self, filters: FileFilters) -> Path | None: ...

    def save_file(self, filters: FileFilters, default_path: Path) -> Path | None: ...


class Notifier(Protocol):
    def info(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...
