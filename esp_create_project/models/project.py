"""Project configuration model collected before creating a project."""
import re
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Language(str, Enum):
    """Programming language of the generated project."""

    C = "c"
    CPP = "cpp"


class CppStandard(str, Enum):
    """C++ standard passed to CMake as CMAKE_CXX_STANDARD."""

    CPP11 = "11"
    CPP14 = "14"
    CPP17 = "17"


# Entries of the interactive language menu, in display order
LANGUAGE_MENU: List[Tuple[str, Language, Optional[CppStandard]]] = [
    ("C", Language.C, None),
    ("C++ 11", Language.CPP, CppStandard.CPP11),
    ("C++ 14", Language.CPP, CppStandard.CPP14),
    ("C++ 17", Language.CPP, CppStandard.CPP17),
]


class ProjectConfig(BaseModel):
    """Options for a single project creation run."""

    model_config = ConfigDict(extra='forbid', frozen=True)

    target: str = Field("esp-new-project", description="Folder the project is created in")
    language: Language = Language.C
    cpp_standard: Optional[CppStandard] = None
    init_git: bool = False

    @field_validator('target')
    @classmethod
    def validate_target(cls, v):
        """Reject empty target paths."""
        if not v or not v.strip():
            raise ValueError("Target folder must not be empty")
        return v

    @model_validator(mode='after')
    def validate_standard(self) -> 'ProjectConfig':
        """A C++ standard is required for C++ and forbidden for C."""
        if self.language == Language.CPP and self.cpp_standard is None:
            raise ValueError("C++ projects require a C++ standard (11, 14 or 17)")
        if self.language == Language.C and self.cpp_standard is not None:
            raise ValueError("A C++ standard can only be set for C++ projects")
        return self

    @property
    def project_name(self) -> str:
        """CMake project name derived from the target folder."""
        name = Path(self.target).resolve().name or "esp-new-project"
        return re.sub(r'[^A-Za-z0-9_.+-]', '-', name)

    @property
    def main_source(self) -> str:
        return "main.cpp" if self.language == Language.CPP else "main.c"

    def describe(self) -> str:
        if self.language == Language.CPP:
            return f"C++ {self.cpp_standard.value}"
        return "C"
