"""Runtime configuration for esp-create-project."""
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from esp_create_project.core.errors import InputError
from esp_create_project.core.logger import get_logger

logger = get_logger(__name__)

TEMPLATE_URL = "https://github.com/espressif/esp-idf-template/archive/refs/heads/master.zip"

USER_CONFIG_FILE = Path.home() / ".config" / "esp-create-project" / "config.yml"

ENV_PREFIX = "ESP_CREATE_PROJECT_"


@dataclass
class CreatorConfig:
    """Runtime configuration for project creation.

    Attributes:
        template_url: Location of the template zip archive
        download_timeout: Timeout in seconds for the template download (default: 60)
        chunk_size: Bytes read per chunk while streaming the download
        git_executable: Name or path of the git binary (default: git)
        git_timeout: Timeout in seconds for `git init` (default: 30)
        default_init_git: Answer pre-selected in the git prompt
    """

    template_url: str = TEMPLATE_URL
    download_timeout: int = 60
    chunk_size: int = 64 * 1024

    git_executable: str = "git"
    git_timeout: int = 30
    default_init_git: bool = False

    @classmethod
    def from_env(cls, base: Optional["CreatorConfig"] = None) -> "CreatorConfig":
        """Create config from environment variables.

        Environment variables:
            ESP_CREATE_PROJECT_TEMPLATE_URL: Template archive URL
            ESP_CREATE_PROJECT_DOWNLOAD_TIMEOUT: Download timeout in seconds
            ESP_CREATE_PROJECT_GIT: Git executable
            ESP_CREATE_PROJECT_GIT_TIMEOUT: Git timeout in seconds

        Args:
            base: Values used when a variable is unset (defaults otherwise)

        Returns:
            CreatorConfig instance with values from environment or base
        """
        base = base or cls()
        return cls(
            template_url=os.getenv(f"{ENV_PREFIX}TEMPLATE_URL", base.template_url),
            download_timeout=int(
                os.getenv(f"{ENV_PREFIX}DOWNLOAD_TIMEOUT", base.download_timeout)
            ),
            chunk_size=base.chunk_size,
            git_executable=os.getenv(f"{ENV_PREFIX}GIT", base.git_executable),
            git_timeout=int(os.getenv(f"{ENV_PREFIX}GIT_TIMEOUT", base.git_timeout)),
            default_init_git=base.default_init_git,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CreatorConfig":
        """Create config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(unknown)}")
        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "CreatorConfig":
        """Load configuration: defaults, then the YAML user file, then the environment.

        Args:
            path: Explicit config file. Defaults to $ESP_CREATE_PROJECT_CONFIG
                  or ~/.config/esp-create-project/config.yml

        Raises:
            InputError: If the config file is not valid YAML or not a mapping
        """
        if path is None:
            env_path = os.getenv(f"{ENV_PREFIX}CONFIG")
            path = Path(env_path) if env_path else USER_CONFIG_FILE

        base = cls()
        if path.exists():
            logger.debug(f"Loading config from {path}")
            try:
                with open(path) as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise InputError(f"Invalid config file {path}: {e}") from e

            if data is None:
                data = {}
            if not isinstance(data, dict):
                raise InputError(f"Config file {path} must contain a mapping")
            base = cls.from_dict(data)

        try:
            return cls.from_env(base)
        except ValueError as e:
            raise InputError(f"Invalid numeric value in environment: {e}") from e


# Global config instance (can be overridden)
_config: Optional[CreatorConfig] = None


def get_config() -> CreatorConfig:
    """Get the global configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = CreatorConfig.load()
    return _config


def set_config(config: Optional[CreatorConfig]):
    """Set (or reset with None) the global configuration."""
    global _config
    _config = config
