"""Command-line interface - click commands, interactive menu and reports."""

from gradetrack.cli.main import main

__all__ = ["main"]
