"""Entry point for the snipkeep package when run as a module."""

from snipkeep.cli import main


def _run_main():
    """Wrapper to ensure main is called."""
    main()


if __name__ == "__main__":
    _run_main()
