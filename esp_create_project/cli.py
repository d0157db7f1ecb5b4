#!/usr/bin/env python3
"""esp-create-project CLI - Scaffold a new ESP-IDF project."""
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from esp_create_project import __version__
from esp_create_project.cli_support import (
    confirm_action,
    handle_cli_error,
    print_info,
    print_success,
    print_warning,
    setup_file_logging,
)
from esp_create_project.core.config import CreatorConfig, set_config
from esp_create_project.core.creator import ProjectCreator
from esp_create_project.core.errors import AlreadyExistsError, ProjectCreationError
from esp_create_project.core.logger import get_logger
from esp_create_project.models.project import CppStandard, Language
from esp_create_project.scaffold.core import is_non_empty
from esp_create_project.scaffold.options import OptionCollector

DEFAULT_FOLDER = "esp-new-project"

app = typer.Typer(
    name="esp-create-project",
    help="""Create a new ESP-IDF project from the official template.

Quick start:
  esp-create-project                      # Interactive, creates ./esp-new-project
  esp-create-project blink -l cpp --std 17 --git
""",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


def _version_callback(value: bool):
    if value:
        console.print(f"esp-create-project v{__version__}")
        raise typer.Exit()


def _load_config(template_url: Optional[str], timeout: Optional[int]) -> CreatorConfig:
    """Load configuration and apply command-line overrides."""
    config = CreatorConfig.load()
    if template_url:
        config = replace(config, template_url=template_url)
    if timeout is not None:
        config = replace(config, download_timeout=timeout)
    set_config(config)
    return config


@app.command()
def create(
    folder: str = typer.Argument(DEFAULT_FOLDER, help="Name or path of the project folder"),
    language: Optional[Language] = typer.Option(
        None, "--language", "-l", case_sensitive=False, help="Programming language (c, cpp)"
    ),
    std: Optional[CppStandard] = typer.Option(None, "--std", help="C++ standard (implies --language cpp)"),
    git: Optional[bool] = typer.Option(None, "--git/--no-git", help="Initialize a git repository"),
    overwrite: bool = typer.Option(False, "--overwrite", "-f", help="Delete a non-empty target folder"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not prompt, use defaults for missing options"),
    template_url: Optional[str] = typer.Option(None, "--template-url", help="Template zip archive URL"),
    timeout: Optional[int] = typer.Option(None, "--timeout", min=1, help="Download timeout in seconds"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Write a log file"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """Create a new ESP-IDF project in FOLDER (default: esp-new-project)."""
    try:
        if verbose or log_file:
            setup_file_logging(log_file=log_file, verbose=verbose)

        config = _load_config(template_url, timeout)
        logger.debug(f"Using config: {config}")

        target = Path(folder)
        if is_non_empty(target) and not overwrite:
            if yes or not confirm_action("Directory not empty, delete?"):
                raise AlreadyExistsError(target)
            overwrite = True

        collector = OptionCollector(
            console=console,
            default_init_git=config.default_init_git,
            non_interactive=yes,
        )
        project = collector.collect(folder, language=language, cpp_standard=std, init_git=git)

        creator = ProjectCreator(config=config, console=console)
        result = creator.create(project, overwrite=overwrite)
    except ProjectCreationError as e:
        handle_cli_error(e, console, verbose)

    for warning in result.warnings:
        print_warning(console, warning)

    print_success(console, f"Created {project.describe()} project in {result.path}")
    print_info(console, f"Next: cd {result.path} && idf.py build")
    console.print("😁 Have fun!")


def main():
    app()


if __name__ == "__main__":
    main()
