"""Interactive collection of project options."""
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from esp_create_project.core.errors import InputError
from esp_create_project.core.logger import get_logger
from esp_create_project.models.project import (
    LANGUAGE_MENU,
    CppStandard,
    Language,
    ProjectConfig,
)

logger = get_logger(__name__)

DEFAULT_CPP_STANDARD = CppStandard.CPP17


class OptionCollector:
    """Asks for language, C++ standard and git initialization, in that order.

    Values passed to collect() skip their prompt. In non-interactive mode no
    prompt is shown and missing values fall back to their defaults.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        default_init_git: bool = False,
        non_interactive: bool = False,
    ):
        self.console = console or Console()
        self.default_init_git = default_init_git
        self.non_interactive = non_interactive

    def collect(
        self,
        target: str,
        language: Optional[Language] = None,
        cpp_standard: Optional[CppStandard] = None,
        init_git: Optional[bool] = None,
    ) -> ProjectConfig:
        """Return a fully populated ProjectConfig.

        Raises:
            InputError: If a prompt is aborted, an answer is invalid or the
                supplied values contradict each other
        """
        if cpp_standard is not None and language is None:
            language = Language.CPP
        if language == Language.C and cpp_standard is not None:
            raise InputError("--std can only be used with C++ projects")

        if language is None:
            language, cpp_standard = self._prompt_language()

        if language == Language.CPP and cpp_standard is None:
            cpp_standard = self._prompt_cpp_standard()

        if init_git is None:
            init_git = self._prompt_git()

        try:
            config = ProjectConfig(
                target=target,
                language=language,
                cpp_standard=cpp_standard,
                init_git=init_git,
            )
        except ValidationError as e:
            raise InputError(str(e)) from e

        logger.debug(f"Collected options: {config!r}")
        return config

    def _prompt_language(self):
        if self.non_interactive:
            _, language, standard = LANGUAGE_MENU[0]
            return language, standard

        self.console.print("[bold]💻 Programming language?[/bold]")
        for index, (label, _, _) in enumerate(LANGUAGE_MENU):
            self.console.print(f"  [cyan]{index}[/cyan]) {label}")

        answer = str(self._ask("Select", default="0")).strip()
        try:
            choice = int(answer)
        except ValueError as e:
            raise InputError(f"Invalid language selection '{answer}', expected a number") from e
        if not 0 <= choice < len(LANGUAGE_MENU):
            raise InputError(
                f"Invalid language selection {choice}, expected 0-{len(LANGUAGE_MENU) - 1}"
            )
        _, language, standard = LANGUAGE_MENU[choice]
        return language, standard

    def _prompt_cpp_standard(self) -> CppStandard:
        if self.non_interactive:
            return DEFAULT_CPP_STANDARD

        allowed = ", ".join(s.value for s in CppStandard)
        answer = str(self._ask(
            f"C++ standard ({allowed})",
            default=DEFAULT_CPP_STANDARD.value,
        )).strip()
        try:
            return CppStandard(answer)
        except ValueError as e:
            raise InputError(f"Invalid C++ standard '{answer}', expected one of {allowed}") from e

    def _prompt_git(self) -> bool:
        if self.non_interactive:
            return self.default_init_git
        try:
            return typer.confirm("Initialize git repo? (needs git)", default=self.default_init_git)
        except typer.Abort as e:
            raise InputError("Aborted by user") from e

    def _ask(self, text: str, **kwargs):
        try:
            return typer.prompt(text, **kwargs)
        except typer.Abort as e:
            raise InputError("Aborted by user") from e
