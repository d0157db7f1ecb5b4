"""Data models for esp-create-project."""
from esp_create_project.models.project import (
    LANGUAGE_MENU,
    CppStandard,
    Language,
    ProjectConfig,
)

__all__ = [
    'LANGUAGE_MENU',
    'CppStandard',
    'Language',
    'ProjectConfig',
]
