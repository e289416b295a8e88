"""Command-line interface for snipkeep.

This module wires the snippet workflows to the terminal: selections come from a
file or stdin, prompts and pickers are answered interactively unless the
matching option was given, and messages are printed with rich.

The snippets directory is resolved once here (option, ``SNIPKEEP_SNIPPETS_DIR``,
config file, default) and passed down; the markdown log goes to the project
root, which defaults to the current directory.
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from snipkeep import __version__
from snipkeep.config import Config
from snipkeep.console import ConsoleFileDialog, ConsoleNotifier, ConsolePicker, ConsolePrompts
from snipkeep.errors import SnipkeepError
from snipkeep.formatters import CollectionFormatter, OutputFormat
from snipkeep.interfaces import ActiveContext
from snipkeep.log_mirror import LogMirror
from snipkeep.manager import SnippetManager
from snipkeep.utils import detect_language_id, parse_line_range, select_lines
from snipkeep.workflows import (
    DESCRIPTION_LABEL,
    LANGUAGE_LABEL,
    LANGUAGE_PICK_LABEL,
    PREFIX_LABEL,
    SNIPPET_PICK_LABEL,
    DeleteSnippetWorkflow,
    ExportSnippetsWorkflow,
    GenerateSnippetWorkflow,
    ImportSnippetsWorkflow,
    Workflow,
)

console = Console()


@dataclass
class CliState:
    """Settings shared by every subcommand."""

    config: Config
    project_root: Path | None

    def context(self, selected_text: str = "", language_id: str | None = None) -> ActiveContext:
        return ActiveContext(
            selected_text=selected_text,
            language_id=language_id,
            project_root=self.project_root,
        )


def language_option(f):
    """Decorator to add the -l/--language option to a Click command.

    Args:
        f (function): The function to decorate.

    Returns:
        function: Decorated function with the `--language` option added.
    """
    return click.option(
        "-l",
        "--language",
        help=(
            "Language identifier of the snippet collection (e.g. python, javascript). "
            "Prompted for when omitted."
        ),
    )(f)


def prefix_option(f):
    """Decorator to add the -p/--prefix option."""
    return click.option(
        "-p",
        "--prefix",
        help="Snippet name (the trigger prefix). Prompted for when omitted.",
    )(f)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _run_workflow(workflow: Workflow, context: ActiveContext) -> None:
    """Run a workflow, turning snipkeep errors into an exit status of 1."""
    try:
        workflow.run(context)
    except SnipkeepError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="snipkeep")
@click.option(
    "--snippets-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="SNIPKEEP_SNIPPETS_DIR",
    help="Directory holding one <language>.json snippet file per language.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON config file (default: ./snipkeep.json or ~/.config/snipkeep/config.json).",
)
@click.option(
    "--project-root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Project folder that receives SavedSnippets.md (default: current directory).",
)
@click.option("--no-log", is_flag=True, help="Do not mirror changes into SavedSnippets.md.")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging on stderr.")
@click.pass_context
def main(
    ctx: click.Context,
    snippets_dir: Path | None,
    config_path: Path | None,
    project_root: Path | None,
    no_log: bool,
    verbose: bool,
) -> None:
    """Save, delete, import and export reusable code snippets.

    Snippets are stored per language as editor-compatible JSON files, and
    every saved snippet is listed in the project's SavedSnippets.md.
    """
    _configure_logging(verbose)
    try:
        config = Config.from_file(config_path)
    except SnipkeepError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        sys.exit(1)
    if snippets_dir:
        config.update({"snippets_dir": snippets_dir})

    if no_log:
        project_root = None
    elif project_root is None:
        project_root = Path.cwd()
    ctx.obj = CliState(config=config, project_root=project_root)


@main.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--lines", help="Only use lines START-END of SOURCE (1-based, inclusive).")
@language_option
@prefix_option
@click.option("-d", "--description", help="Snippet description. Prompted for when omitted.")
@click.pass_obj
def add(state: CliState, source, lines, language, prefix, description) -> None:
    """Save text from SOURCE (a file, or - for stdin) as a snippet."""
    try:
        text = select_lines(source.read(), parse_line_range(lines) if lines else None)
    except SnipkeepError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        sys.exit(1)
    language = language or detect_language_id(Path(source.name))

    answers = {PREFIX_LABEL: prefix, DESCRIPTION_LABEL: description}
    prompts = ConsolePrompts(console, {k: v for k, v in answers.items() if v is not None})
    workflow = GenerateSnippetWorkflow(state.config, ConsoleNotifier(console), prompts=prompts)
    _run_workflow(workflow, state.context(selected_text=text, language_id=language))


@main.command()
@language_option
@prefix_option
@click.pass_obj
def delete(state: CliState, language, prefix) -> None:
    """Delete a snippet and its SavedSnippets.md entry."""
    answers = {LANGUAGE_PICK_LABEL: language, SNIPPET_PICK_LABEL: prefix}
    picker = ConsolePicker(console, {k: v for k, v in answers.items() if v is not None})
    workflow = DeleteSnippetWorkflow(state.config, ConsoleNotifier(console), picker=picker)
    _run_workflow(workflow, state.context())


@main.command(name="import")
@click.argument(
    "file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=False,
)
@language_option
@click.pass_obj
def import_(state: CliState, file, language) -> None:
    """Import a snippet, or a prefix-to-snippet mapping, from a JSON FILE."""
    answers = {LANGUAGE_LABEL: language} if language else {}
    workflow = ImportSnippetsWorkflow(
        state.config,
        ConsoleNotifier(console),
        prompts=ConsolePrompts(console, answers),
        dialog=ConsoleFileDialog(open_path=file),
    )
    _run_workflow(workflow, state.context())


@main.command()
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Destination JSON file. Prompted for (with a default) when omitted.",
)
@click.pass_obj
def export(state: CliState, output) -> None:
    """Export every language's snippets into a single JSON file."""
    workflow = ExportSnippetsWorkflow(
        state.config,
        ConsoleNotifier(console),
        dialog=ConsoleFileDialog(save_path=output),
    )
    _run_workflow(workflow, state.context())


@main.command(name="list")
@language_option
@click.option(
    "-s",
    "--search-term",
    multiple=True,
    help="Only show snippets whose prefix or description contains the keyword(s).",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.TEXT.value,
    show_default=True,
    help="Listing format.",
)
@click.pass_obj
def list_(state: CliState, language, search_term, output_format) -> None:
    """List stored snippets."""
    manager = SnippetManager.for_context(state.config, state.context(), ConsoleNotifier(console))
    formatter = CollectionFormatter(OutputFormat(output_format), list(search_term))
    try:
        collections = manager.list_snippets(language)
    except SnipkeepError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        sys.exit(1)
    click.echo(formatter.format(collections))


@main.command()
@click.pass_obj
def log(state: CliState) -> None:
    """Show the entries recorded in SavedSnippets.md."""
    mirror = LogMirror(state.project_root, state.config.log_filename)
    if mirror.path is None:
        console.print("[yellow]Warning:[/yellow] Logging is disabled (--no-log).")
        return
    try:
        entries = mirror.entries()
    except SnipkeepError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        sys.exit(1)
    if not entries:
        click.echo(f"No entries in {mirror.path}")
        return
    for entry in entries:
        click.echo(f"{entry.prefix}\t{entry.language_id}\t{entry.description}")


if __name__ == "__main__":
    main()
