"""Git repository initialization for new projects."""
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from esp_create_project.core.config import CreatorConfig, get_config
from esp_create_project.core.errors import GitUnavailableError
from esp_create_project.core.logger import get_logger

logger = get_logger(__name__)


class GitManager:
    """Runs git against a freshly created project directory."""

    def __init__(self, config: Optional[CreatorConfig] = None):
        self.config = config or get_config()

    def find_git(self) -> str:
        """Locate the git executable.

        Raises:
            GitUnavailableError: If git is not on PATH
        """
        git = shutil.which(self.config.git_executable)
        if git is None:
            raise GitUnavailableError(
                f"Git executable '{self.config.git_executable}' not found. Please install git first."
            )
        return git

    def init_repo(self, path: Path) -> None:
        """Initialize a git repository in path.

        Raises:
            GitUnavailableError: If git is missing, times out or exits non-zero
        """
        cmd = [self.find_git(), 'init', str(path)]
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.config.git_timeout,
            )
        except subprocess.CalledProcessError as e:
            stderr = e.stderr.strip() if e.stderr else str(e)
            raise GitUnavailableError(f"git init failed: {stderr}") from e
        except subprocess.TimeoutExpired as e:
            raise GitUnavailableError(
                f"git init timed out after {self.config.git_timeout}s"
            ) from e
        except OSError as e:
            raise GitUnavailableError(f"Cannot run git: {e}") from e
