"""Tests for the terminal collaborators."""

from pathlib import Path

import click
import pytest
from rich.console import Console

from snipkeep.console import (
    ConsoleFileDialog,
    ConsoleNotifier,
    ConsolePicker,
    ConsolePrompts,
    RecordingNotifier,
)
from snipkeep.interfaces import JSON_FILTERS


@pytest.fixture
def console():
    return Console(record=True, width=200)


def test_notifier_prints_levels_without_markup(console):
    notifier = ConsoleNotifier(console)
    notifier.info("saved [python]")
    notifier.warn("careful")
    notifier.error("broken")
    text = console.export_text()
    assert "✓ saved [python]" in text
    assert "Warning: careful" in text
    assert "Error: broken" in text


def test_recording_notifier():
    notifier = RecordingNotifier()
    notifier.info("a")
    notifier.warn("b")
    assert notifier.messages == [("info", "a"), ("warn", "b")]
    assert notifier.of_level("warn") == ["b"]


def test_prompts_use_answers_first(console, monkeypatch):
    monkeypatch.setattr(click, "prompt", lambda *a, **k: pytest.fail("should not prompt"))
    prompts = ConsolePrompts(console, {"Name": "given"})
    assert prompts.ask_text("Name") == "given"


def test_prompts_abort_means_abandoned(console, monkeypatch):
    def abort(*args, **kwargs):
        raise click.Abort()

    monkeypatch.setattr(click, "prompt", abort)
    assert ConsolePrompts(console).ask_text("Name", default="x") is None


def test_prompts_non_interactive_take_default(console):
    prompts = ConsolePrompts(console, interactive=False)
    assert prompts.ask_text("Name", default="fallback") == "fallback"
    assert prompts.ask_text("Other") is None


def test_picker_accepts_number_or_name(console, monkeypatch):
    picker = ConsolePicker(console)
    monkeypatch.setattr(click, "prompt", lambda *a, **k: "2")
    assert picker.pick_one(["go", "python"], "Pick") == "python"
    monkeypatch.setattr(click, "prompt", lambda *a, **k: "go")
    assert picker.pick_one(["go", "python"], "Pick") == "go"


def test_picker_without_options(console):
    assert ConsolePicker(console).pick_one([], "Pick") is None


def test_file_dialog_presets(tmp_path):
    dialog = ConsoleFileDialog(open_path=tmp_path / "in.json", save_path=tmp_path / "out.json")
    assert dialog.open_file(JSON_FILTERS) == tmp_path / "in.json"
    assert dialog.save_file(JSON_FILTERS, Path("default.json")) == tmp_path / "out.json"


def test_file_dialog_non_interactive(tmp_path):
    dialog = ConsoleFileDialog(interactive=False)
    assert dialog.open_file(JSON_FILTERS) is None
    assert dialog.save_file(JSON_FILTERS, tmp_path / "d.json") == tmp_path / "d.json"


def test_picker_prefers_exact_option_over_number(console, monkeypatch):
    picker = ConsolePicker(console)
    monkeypatch.setattr(click, "prompt", lambda *a, **k: "2")
    assert picker.pick_one(["2", "python"], "Pick") == "2"
    monkeypatch.setattr(click, "prompt", lambda *a, **k: "1")
    assert picker.pick_one(["2", "python"], "Pick") == "2"
