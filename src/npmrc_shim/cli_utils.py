"""Shared CLI helpers: console output, logging setup and exit codes."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

# Exit codes
EXIT_SUCCESS: int = 0
EXIT_ERROR: int = 1
EXIT_CONFIG_ERROR: int = 2

# Rich console for all user-facing output
console = Console()


def _setup_logging(verbose: bool, quiet: bool) -> None:
    """Configure root logging with a Rich handler.

    --verbose takes precedence over --quiet.

    Args:
        verbose: Log at DEBUG level.
        quiet: Log at WARNING level.

    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    root = logging.getLogger()
    # Replace our handler on repeated calls, leave foreign handlers alone
    for existing in list(root.handlers):
        if isinstance(existing, RichHandler):
            root.removeHandler(existing)

    handler = RichHandler(console=console, rich_tracebacks=True, show_path=verbose)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root.addHandler(handler)
    root.setLevel(level)


def _error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error:[/red] {message}")


def _warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning:[/yellow] {message}")


def _success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def _info(message: str) -> None:
    """Print an informational message."""
    console.print(f"[dim]{message}[/dim]")


def _validate_project_path(project: str) -> Path:
    """Resolve the project directory, exiting if it is not a directory.

    Raises:
        typer.Exit: With EXIT_ERROR if the path is missing or not a directory.

    """
    project_path = Path(project).expanduser().resolve()

    if not project_path.exists():
        _error(f"Project directory does not exist: {project_path}")
        raise typer.Exit(code=EXIT_ERROR)

    if not project_path.is_dir():
        _error(f"Path is not a directory: {project_path}")
        raise typer.Exit(code=EXIT_ERROR)

    return project_path
