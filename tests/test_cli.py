"""Tests for the snipkeep command-line interface."""

import json

import click
import pytest
from click.testing import CliRunner

from snipkeep.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def dirs(tmp_path):
    snippets = tmp_path / "snippets"
    project = tmp_path / "project"
    project.mkdir()
    return snippets, project


def invoke(runner, dirs, *args, **kwargs):
    snippets, project = dirs
    base = ["--snippets-dir", str(snippets), "--project-root", str(project)]
    return runner.invoke(main, base + list(args), **kwargs)


def add_fetch(runner, dirs):
    return invoke(
        runner,
        dirs,
        "add", "-", "-l", "javascript", "-p", "fetchIt", "-d", "fetch wrapper",
        input="fetch(url)",
    )


def test_add_from_stdin(runner, dirs):
    snippets, project = dirs
    result = add_fetch(runner, dirs)

    assert result.exit_code == 0, result.output
    assert "Snippet saved globally to" in result.output
    data = json.loads((snippets / "javascript.json").read_text(encoding="utf-8"))
    assert data["fetchIt"] == {
        "prefix": "fetchIt",
        "body": ["fetch(url)"],
        "description": "fetch wrapper",
    }
    assert "### fetchIt\n" in (project / "SavedSnippets.md").read_text(encoding="utf-8")


def test_add_from_file_lines_detects_language(runner, dirs, tmp_path):
    snippets, _ = dirs
    source = tmp_path / "code.py"
    source.write_text("import os\ndef main():\n    pass\nmain()\n")

    result = invoke(runner, dirs, "add", str(source), "--lines", "2-3", "-p", "mainfn", "-d", "entry")

    assert result.exit_code == 0, result.output
    data = json.loads((snippets / "python.json").read_text())
    assert data["mainfn"]["body"] == ["def main():", "    pass"]


def test_add_prompts_for_missing_fields(runner, dirs, tmp_path):
    snippets, _ = dirs
    source = tmp_path / "code.py"
    source.write_text("print('hi')")

    result = invoke(runner, dirs, "add", str(source), input="greet\nSay hello\n")

    assert result.exit_code == 0, result.output
    data = json.loads((snippets / "python.json").read_text())
    assert data["greet"]["description"] == "Say hello"


def test_add_abandoned_prompt_changes_nothing(runner, dirs, tmp_path, monkeypatch):
    snippets, project = dirs
    source = tmp_path / "code.py"
    source.write_text("print('hi')")

    def abort(*args, **kwargs):
        raise click.Abort()

    monkeypatch.setattr("snipkeep.console.click.prompt", abort)
    result = invoke(runner, dirs, "add", str(source))

    assert result.exit_code == 0
    assert "Nothing was saved." in result.output
    assert not snippets.exists()
    assert not (project / "SavedSnippets.md").exists()


def test_add_empty_selection_fails(runner, dirs):
    result = invoke(runner, dirs, "add", "-", "-l", "go", "-p", "x", "-d", "y", input="")
    assert result.exit_code == 1
    assert "No text selected" in result.output


def test_add_bad_line_range(runner, dirs, tmp_path):
    source = tmp_path / "a.py"
    source.write_text("x\n")
    result = invoke(runner, dirs, "add", str(source), "--lines", "5-2", "-p", "x", "-d", "y")
    assert result.exit_code == 1
    assert "Invalid line range" in result.output


def test_add_no_log(runner, dirs):
    snippets, project = dirs
    result = runner.invoke(
        main,
        ["--snippets-dir", str(snippets), "--no-log", "add", "-", "-l", "go", "-p", "x", "-d", "y"],
        input="fmt.Println()",
    )
    assert result.exit_code == 0, result.output
    assert (snippets / "go.json").exists()
    assert not (project / "SavedSnippets.md").exists()
    assert "No active workspace" in result.output


def test_snippets_dir_from_environment(runner, dirs):
    snippets, project = dirs
    result = runner.invoke(
        main,
        ["--project-root", str(project), "add", "-", "-l", "go", "-p", "x", "-d", "y"],
        input="x",
        env={"SNIPKEEP_SNIPPETS_DIR": str(snippets)},
    )
    assert result.exit_code == 0, result.output
    assert (snippets / "go.json").exists()


def test_delete(runner, dirs):
    snippets, project = dirs
    add_fetch(runner, dirs)

    result = invoke(runner, dirs, "delete", "-l", "javascript", "-p", "fetchIt")

    assert result.exit_code == 0, result.output
    assert 'Snippet "fetchIt" deleted' in result.output
    assert json.loads((snippets / "javascript.json").read_text()) == {}
    assert "### fetchIt" not in (project / "SavedSnippets.md").read_text()


def test_delete_interactive_pick(runner, dirs):
    snippets, _ = dirs
    add_fetch(runner, dirs)

    result = invoke(runner, dirs, "delete", input="1\nfetchIt\n")

    assert result.exit_code == 0, result.output
    assert json.loads((snippets / "javascript.json").read_text()) == {}


def test_delete_missing_prefix(runner, dirs):
    add_fetch(runner, dirs)
    result = invoke(runner, dirs, "delete", "-l", "javascript", "-p", "nope")
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "nope" in result.output


def test_delete_with_empty_store(runner, dirs):
    result = invoke(runner, dirs, "delete", "-l", "javascript", "-p", "nope")
    assert result.exit_code == 1
    assert "No snippets found" in result.output


def test_import_and_export(runner, dirs, tmp_path):
    source = tmp_path / "incoming.json"
    source.write_text(
        json.dumps(
            {
                "one": {"prefix": "one", "body": ["1"], "description": "first"},
                "two": {"prefix": "two", "body": ["2"], "description": "second"},
            }
        )
    )
    result = invoke(runner, dirs, "import", str(source), "-l", "python")
    assert result.exit_code == 0, result.output
    assert "Imported 2 snippet(s) successfully for python!" in result.output

    target = tmp_path / "exported.json"
    result = invoke(runner, dirs, "export", "-o", str(target))
    assert result.exit_code == 0, result.output
    exported = json.loads(target.read_text())
    assert set(exported["python"]) == {"one", "two"}


def test_import_prompts_for_language(runner, dirs, tmp_path):
    snippets, _ = dirs
    source = tmp_path / "single.json"
    source.write_text(json.dumps({"prefix": "p", "body": ["x"], "description": "d"}))

    result = invoke(runner, dirs, "import", str(source), input="rust\n")

    assert result.exit_code == 0, result.output
    assert (snippets / "rust.json").exists()


def test_import_invalid_json(runner, dirs, tmp_path):
    source = tmp_path / "broken.json"
    source.write_text("{nope")
    result = invoke(runner, dirs, "import", str(source), "-l", "python")
    assert result.exit_code == 1
    assert "Failed to parse" in result.output


def test_export_nothing(runner, dirs, tmp_path):
    result = invoke(runner, dirs, "export", "-o", str(tmp_path / "x.json"))
    assert result.exit_code == 1
    assert "No snippets found to export" in result.output


def test_list_formats(runner, dirs):
    add_fetch(runner, dirs)

    text = invoke(runner, dirs, "list")
    assert text.exit_code == 0
    assert "javascript (1 snippet(s))" in text.output
    assert "fetchIt" in text.output

    markdown = invoke(runner, dirs, "list", "--format", "markdown")
    assert "| fetchIt | fetch wrapper | 1 |" in markdown.output

    as_json = invoke(runner, dirs, "list", "--format", "json", "-s", "fetch")
    assert json.loads(as_json.output)["javascript"]["fetchIt"]["body"] == ["fetch(url)"]


def test_list_corrupt_store(runner, dirs):
    snippets, _ = dirs
    snippets.mkdir()
    (snippets / "python.json").write_text("{bad")
    result = invoke(runner, dirs, "list")
    assert result.exit_code == 1
    assert "python.json" in result.output


def test_log_command(runner, dirs):
    add_fetch(runner, dirs)
    result = invoke(runner, dirs, "log")
    assert result.exit_code == 0
    assert "fetchIt\tjavascript\tfetch wrapper" in result.output


def test_invalid_config_file(runner, dirs, tmp_path):
    cfg = tmp_path / "cfg.json"
    cfg.write_text("[]")
    result = runner.invoke(main, ["--config", str(cfg), "list"])
    assert result.exit_code == 1
    assert "must contain a JSON object" in result.output


def test_cli_help(runner):
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "Save, delete, import and export reusable code snippets" in result.output


def test_cli_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "snipkeep" in result.output
