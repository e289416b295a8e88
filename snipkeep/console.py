"""Terminal implementations of the prompt, picker, dialog and notifier seams.

Answers given up front (usually from command-line options) are returned
without prompting. Ctrl-C or end of input at a prompt counts as abandoning it.
"""

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from snipkeep.interfaces import FileFilters

logger = logging.getLogger(__name__)


class ConsoleNotifier:
    """Prints messages with the ✓ / Warning / Error markers used across the CLI."""

    def __init__(self, console: Console):
        self.console = console

    def info(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {escape(message)}", soft_wrap=True)

    def warn(self, message: str) -> None:
        self.console.print(f"[yellow]Warning:[/yellow] {escape(message)}", soft_wrap=True)

    def error(self, message: str) -> None:
        self.console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)


class RecordingNotifier:
    """Collects messages instead of printing them."""

    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def warn(self, message: str) -> None:
        self.messages.append(("warn", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def of_level(self, level: str) -> list[str]:
        return [message for lvl, message in self.messages if lvl == level]


class ConsolePrompts:
    """Text prompts via `click.prompt`.

    Args:
        console (Console): Where placeholder hints are shown.
        answers (Mapping[str, str] | None): Pre-filled answers keyed by prompt label.
        interactive (bool): When False, unanswered prompts take their default
            (or are abandoned if there is none).
    """

    def __init__(
        self,
        console: Console,
        answers: Mapping[str, str] | None = None,
        interactive: bool = True,
    ):
        self.console = console
        self.answers = dict(answers or {})
        self.interactive = interactive

    def ask_text(self, label: str, placeholder: str = "", default: str | None = None) -> str | None:
        if label in self.answers:
            return self.answers[label]
        if not self.interactive:
            return default
        if placeholder:
            self.console.print(f"[dim]{escape(placeholder)}[/dim]")
        try:
            return click.prompt(label, default=default, show_default=default is not None)
        except click.Abort:
            logger.debug("Prompt %r abandoned", label)
            return None


class ConsolePicker:
    """Numbered choice list; accepts either the number or the option itself.

    An answer naming an option exactly wins over the same text read as a number.
    """

    def __init__(
        self,
        console: Console,
        answers: Mapping[str, str] | None = None,
        interactive: bool = True,
    ):
        self.console = console
        self.answers = dict(answers or {})
        self.interactive = interactive

    def pick_one(self, options: Sequence[str], label: str) -> str | None:
        if label in self.answers:
            return self.answers[label]
        if not options or not self.interactive:
            return None
        for number, option in enumerate(options, start=1):
            self.console.print(f"  [bold]{number}[/bold]. {escape(option)}")
        numbers = [str(n) for n in range(1, len(options) + 1)]
        accepted = list(dict.fromkeys(numbers + list(options)))
        try:
            choice = click.prompt(label, type=click.Choice(accepted), show_choices=False)
        except click.Abort:
            logger.debug("Picker %r abandoned", label)
            return None
        if choice in options:
            return choice
        return options[int(choice) - 1]


class ConsoleFileDialog:
    """File selection by typed path, or by paths given on the command line."""

    def __init__(
        self,
        open_path: Path | None = None,
        save_path: Path | None = None,
        interactive: bool = True,
    ):
        self.open_path = open_path
        self.save_path = save_path
        self.interactive = interactive

    def open_file(self, filters: FileFilters) -> Path | None:
        if self.open_path is not None or not self.interactive:
            return self.open_path
        try:
            return click.prompt(
                f"Select snippet file ({_describe(filters)})",
                type=click.Path(exists=True, dir_okay=False, path_type=Path),
            )
        except click.Abort:
            return None

    def save_file(self, filters: FileFilters, default_path: Path) -> Path | None:
        if self.save_path is not None:
            return self.save_path
        if not self.interactive:
            return default_path
        try:
            return click.prompt(
                f"Export snippets to ({_describe(filters)})",
                default=str(default_path),
                type=click.Path(dir_okay=False, path_type=Path),
            )
        except click.Abort:
            return None


def _describe(filters: FileFilters) -> str:
    return ", ".join(
        f"{name}: " + " ".join(f"*.{ext}" for ext in extensions)
        for name, extensions in filters.items()
    )
