"""Tests for main module execution."""

import runpy
import sys
from unittest.mock import patch


def test_main_module_execution():
    """Test execution of the module as a script."""
    with (
        patch("snipkeep.cli.main") as mock_main,
        patch.object(sys, "argv", ["python", "-m", "snipkeep"]),
    ):
        try:
            runpy.run_module("snipkeep.__main__", run_name="__main__")
        except SystemExit:
            pass

        mock_main.assert_called_once()


def test_main_module_with_arguments():
    """Test module execution with a subcommand."""
    with (
        patch("snipkeep.cli.main") as mock_main,
        patch.object(sys, "argv", ["python", "-m", "snipkeep", "list", "-l", "python"]),
    ):
        try:
            runpy.run_module("snipkeep.__main__", run_name="__main__")
        except SystemExit:
            pass

        mock_main.assert_called_once()
