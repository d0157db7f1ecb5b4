"""Project creation pipeline: fetch, materialize, then optionally git init."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from esp_create_project.core.config import CreatorConfig, get_config
from esp_create_project.core.errors import GitUnavailableError
from esp_create_project.core.logger import get_logger
from esp_create_project.models.project import ProjectConfig
from esp_create_project.scaffold.core import ProjectMaterializer
from esp_create_project.services.git_manager import GitManager
from esp_create_project.services.template_fetcher import TemplateFetcher

logger = get_logger(__name__)


@dataclass
class CreationResult:
    """Outcome of a successful project creation."""
    path: Path
    git_initialized: bool = False
    warnings: List[str] = field(default_factory=list)


class ProjectCreator:
    """Runs the creation stages strictly in order.

    The target is checked before anything is downloaded, so a conflicting
    target or a failed download leaves the filesystem untouched. Only git
    failures are non-fatal; they end up in CreationResult.warnings.
    """

    def __init__(
        self,
        config: Optional[CreatorConfig] = None,
        console: Optional[Console] = None,
        fetcher: Optional[TemplateFetcher] = None,
        materializer: Optional[ProjectMaterializer] = None,
        git: Optional[GitManager] = None,
    ):
        self.config = config or get_config()
        self.console = console or Console()
        self.fetcher = fetcher or TemplateFetcher(self.config)
        self.materializer = materializer or ProjectMaterializer()
        self.git = git or GitManager(self.config)

    def create(self, project: ProjectConfig, overwrite: bool = False) -> CreationResult:
        """Create the project described by project.

        Raises:
            AlreadyExistsError: Target occupied and overwrite not set
            NetworkError: Template download failed
            ProjectIOError: Writing the project failed
        """
        target = Path(project.target)
        self.materializer.check_target(target, overwrite)

        logger.debug(f"Creating {project.describe()} project in {target}")

        with self.console.status("🌐 Downloading template"):
            archive = self.fetcher.fetch(self.config.template_url)
        self.console.print("[green]✓[/green] Template downloaded")

        try:
            with self.console.status("📁 Writing files"):
                path = self.materializer.materialize(archive, project, overwrite=overwrite)
        finally:
            archive.close()
        self.console.print("[green]✓[/green] Files written")

        result = CreationResult(path=path)

        if project.init_git:
            try:
                self.git.init_repo(path)
                result.git_initialized = True
                self.console.print("[green]✓[/green] Git repo initialized")
            except GitUnavailableError as e:
                logger.debug(f"Git initialization skipped: {e}")
                result.warnings.append(f"Git initialization skipped: {e}")

        return result
