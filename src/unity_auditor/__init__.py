"""Unity Auditor - Unity project quality analysis tool."""

from .cli import cli


def main() -> None:
    """Entry point for the CLI application."""
    cli()
