"""Interactive snippet commands as staged workflows.

Each workflow runs a fixed sequence of named stages. A stage either produces a
value, which later stages read from the shared state, or returns None because
the user abandoned a prompt or picker. Abandoning any stage stops the workflow
without touching the store; errors raised by a stage propagate unchanged.
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from snipkeep.config import Config
from snipkeep.errors import NotFoundError, ValidationError
from snipkeep.interfaces import (
    JSON_FILTERS,
    ActiveContext,
    FileDialog,
    Notifier,
    Picker,
    PromptProvider,
)
from snipkeep.manager import SnippetManager
from snipkeep.utils import read_text

logger = logging.getLogger(__name__)

PREFIX_LABEL = "Enter a name for your snippet (prefix)"
DESCRIPTION_LABEL = "Enter a description for your snippet"
LANGUAGE_LABEL = "Enter the language for these snippets (e.g., javascript, python)"
LANGUAGE_PICK_LABEL = "Select a snippet file to delete from"
SNIPPET_PICK_LABEL = "Select a snippet to delete"

DEFAULT_PREFIX = "exampleSnippet"
DEFAULT_DESCRIPTION = "Generated snippet from selected text"


@dataclass
class WorkflowResult:
    """Outcome of a workflow run.

    Attributes:
        completed (bool): False if the user abandoned a stage.
        stage (Enum): The last stage that ran.
        value (Any): Value produced by the final stage when completed.
    """

    completed: bool
    stage: Enum
    value: Any = None


class Workflow:
    """Base class: runs ``stages`` in order against a per-run manager.

    Subclasses define a ``Stage`` enum and one ``_<stage value>`` method per
    stage taking the run state dict.
    """

    Stage: type[Enum]
    abandon_messages: dict[str, str] = {}

    def __init__(
        self,
        config: Config,
        notifier: Notifier,
        prompts: PromptProvider | None = None,
        picker: Picker | None = None,
        dialog: FileDialog | None = None,
    ):
        self.config = config
        self.notifier = notifier
        self.prompts = prompts
        self.picker = picker
        self.dialog = dialog

    def run(self, context: ActiveContext) -> WorkflowResult:
        """Run every stage for ``context``, stopping at the first abandoned one."""
        state: dict[str, Any] = {
            "context": context,
            "manager": SnippetManager.for_context(self.config, context, self.notifier),
        }
        value = None
        stage = None
        for stage in self.Stage:
            value = getattr(self, f"_{stage.value}")(state)
            if value is None:
                logger.debug("%s abandoned at stage %s", type(self).__name__, stage.name)
                message = self.abandon_messages.get(stage.value)
                if message:
                    self.notifier.warn(message)
                return WorkflowResult(completed=False, stage=stage)
            state[stage.value] = value
        return WorkflowResult(completed=True, stage=stage, value=value)


class GenerateSnippetWorkflow(Workflow):
    """Save the current selection as a snippet: language, name, description, save."""

    abandon_messages = {
        "language": "Language is required for snippets. Nothing was saved.",
        "prefix": "Snippet name (prefix) is required. Nothing was saved.",
        "description": "Snippet description is required. Nothing was saved.",
    }

    class Stage(Enum):
        SELECTION = "selection"
        LANGUAGE = "language"
        PREFIX = "prefix"
        DESCRIPTION = "description"
        SAVE = "save"

    def _selection(self, state):
        text = state["context"].selected_text
        if not text:
            raise ValidationError("text", "No text selected to generate a snippet")
        return text

    def _language(self, state):
        if state["context"].language_id:
            return state["context"].language_id
        return self.prompts.ask_text(
            LANGUAGE_LABEL, placeholder="e.g., javascript", default=self.config.default_language
        )

    def _prefix(self, state):
        return self.prompts.ask_text(
            PREFIX_LABEL, placeholder="e.g., mySnippetName", default=DEFAULT_PREFIX
        )

    def _description(self, state):
        return self.prompts.ask_text(
            DESCRIPTION_LABEL,
            placeholder="e.g., A reusable fetch function snippet",
            default=DEFAULT_DESCRIPTION,
        )

    def _save(self, state):
        return state["manager"].create_from_selection(
            state["selection"], state["prefix"], state["description"], state["language"]
        )


class DeleteSnippetWorkflow(Workflow):
    """Pick a language, pick one of its snippets, delete it."""

    class Stage(Enum):
        LANGUAGE = "language"
        SNIPPET = "snippet"
        DELETE = "delete"

    def _language(self, state):
        languages = state["manager"].store.list_languages()
        if not languages:
            raise NotFoundError("No snippets found.")
        return self.picker.pick_one(languages, LANGUAGE_PICK_LABEL)

    def _snippet(self, state):
        language_id = state["language"]
        if not state["manager"].store.has_language(language_id):
            raise NotFoundError(f"No snippets found for language '{language_id}'")
        prefixes = list(state["manager"].store.load(language_id))
        if not prefixes:
            raise NotFoundError(f"No snippets left in '{language_id}'")
        return self.picker.pick_one(prefixes, SNIPPET_PICK_LABEL)

    def _delete(self, state):
        return state["manager"].delete(state["language"], state["snippet"])


class ImportSnippetsWorkflow(Workflow):
    """Choose a JSON file, read it, ask for the language, merge it in."""

    abandon_messages = {
        "file": "No file selected.",
        "language": "Language is required for importing snippets.",
    }

    class Stage(Enum):
        FILE = "file"
        PARSE = "parse"
        LANGUAGE = "language"
        IMPORT = "import"

    def _file(self, state):
        return self.dialog.open_file(JSON_FILTERS)

    def _parse(self, state):
        path = state["file"]
        try:
            data = json.loads(read_text(path))
        except json.JSONDecodeError as e:
            raise ValidationError("file", f"Failed to parse the snippet file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValidationError("file", f"Snippet file {path} must contain a JSON object")
        return data

    def _language(self, state):
        return self.prompts.ask_text(
            LANGUAGE_LABEL, placeholder="e.g., javascript", default=self.config.default_language
        )

    def _import(self, state):
        return state["manager"].import_from(state["parse"], state["language"])


class ExportSnippetsWorkflow(Workflow):
    """Collect every collection, choose a destination, write it."""

    abandon_messages = {"destination": "Export cancelled."}

    class Stage(Enum):
        COLLECT = "collect"
        DESTINATION = "destination"
        WRITE = "write"

    def _collect(self, state):
        return state["manager"].export_all()

    def _destination(self, state):
        return self.dialog.save_file(JSON_FILTERS, self.config.export_path)

    def _write(self, state):
        return state["manager"].write_export(state["collect"], state["destination"])
