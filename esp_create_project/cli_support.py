"""Shared utilities for the esp-create-project CLI."""
from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from esp_create_project.core.errors import InputError, ProjectIOError


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> None:
    """Set up file logging for the CLI run.

    Args:
        log_file: Path to log file (optional)
        verbose: Enable verbose logging

    Raises:
        ProjectIOError: If the log file cannot be opened
    """
    from esp_create_project.core.logger import set_verbose
    from esp_create_project.core.logger import setup_file_logging as _setup_file_logging

    try:
        _setup_file_logging(log_file=log_file, verbose=verbose)
    except OSError as e:
        raise ProjectIOError(f"Cannot write log file '{log_file}': {e}") from e
    set_verbose(verbose)


def confirm_action(message: str, default: bool = False) -> bool:
    """Ask a yes/no question.

    Raises:
        InputError: If the prompt is aborted (Ctrl-C or end of input)
    """
    try:
        return typer.confirm(message, default=default)
    except typer.Abort as e:
        raise InputError("Aborted by user") from e


def handle_cli_error(
    e: Exception,
    console: Console,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        e: Exception to handle
        console: Rich console for output
        verbose: Show exception traceback if True
        exit_code: Exit code to use
    """
    print_error(console, str(e), prefix="Error:")
    if verbose:
        console.print_exception()
    raise typer.Exit(exit_code)


def print_success(console: Console, message: str, prefix: str = "✓") -> None:
    """Print success message with consistent formatting."""
    console.print(f"[green]{prefix}[/green] {escape(message)}")


def print_error(console: Console, message: str, prefix: str = "✗") -> None:
    """Print error message with consistent formatting."""
    console.print(f"[red]{prefix}[/red] {escape(message)}")


def print_warning(console: Console, message: str, prefix: str = "⚠") -> None:
    """Print warning message with consistent formatting."""
    console.print(f"[yellow]{prefix}[/yellow] {escape(message)}")


def print_info(console: Console, message: str, prefix: str = "ℹ") -> None:
    """Print info message with consistent formatting."""
    console.print(f"[cyan]{prefix}[/cyan] {escape(message)}")
