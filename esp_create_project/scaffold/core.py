"""Materialization of the downloaded template into a project directory."""
import re
import shutil
import zipfile
from pathlib import Path, PurePosixPath
from typing import IO, List, Optional

from esp_create_project.core.errors import AlreadyExistsError, ProjectIOError
from esp_create_project.core.logger import get_logger
from esp_create_project.models.project import Language, ProjectConfig
from esp_create_project.scaffold.templates import TemplateEngine

logger = get_logger(__name__)

CMAKE_FILE = "CMakeLists.txt"
MAIN_DIR = "main"

_PROJECT_RE = re.compile(r'^([ \t]*project\(\s*)[^\s)]+', re.MULTILINE)
_CXX_STANDARD_RE = re.compile(r'^[ \t]*set\(\s*CMAKE_CXX_(STANDARD|VERSION)\b.*$\n?', re.MULTILINE)
_IDF_INCLUDE_RE = re.compile(r'^[ \t]*include\(.*project\.cmake.*\)', re.MULTILINE)
_MAIN_C_RE = re.compile(r'\bmain\.c\b')


def is_non_empty(path: Path) -> bool:
    """True if path is a file or a directory with at least one entry."""
    if not path.exists():
        return False
    if not path.is_dir():
        return True
    return any(path.iterdir())


class ProjectMaterializer:
    """Extracts the template archive and customizes it for the chosen language."""

    def __init__(self, templates: Optional[TemplateEngine] = None):
        self.templates = templates or TemplateEngine()

    def check_target(self, path: Path, overwrite: bool = False) -> None:
        """Fail if the target is occupied. Never touches the filesystem.

        Raises:
            AlreadyExistsError: If path is a file or a non-empty directory
                and overwrite is not set
        """
        if is_non_empty(path) and not overwrite:
            raise AlreadyExistsError(path)

    def materialize(self, archive: IO[bytes], config: ProjectConfig, overwrite: bool = False) -> Path:
        """Write the project described by config into its target directory.

        Args:
            archive: Template zip archive (binary file object)
            config: Collected project options
            overwrite: Replace an existing non-empty target

        Returns:
            Path to the created project

        Raises:
            AlreadyExistsError: If the target is occupied and overwrite is not set
            ProjectIOError: On filesystem failure or a corrupt archive
        """
        target = Path(config.target)
        self.check_target(target, overwrite)

        created = not target.exists()
        try:
            if not created and is_non_empty(target):
                self._clear(target)
            target.mkdir(parents=True, exist_ok=True)

            self._extract(archive, target)
            self._write_main_source(target, config)
            self._configure_cmake(target, config)
        except (OSError, zipfile.BadZipFile, ProjectIOError) as e:
            if created and target.exists():
                shutil.rmtree(target, ignore_errors=True)
            if isinstance(e, ProjectIOError):
                raise
            raise ProjectIOError(f"Failed to write project to '{target}': {e}") from e

        logger.debug(f"Materialized {config.describe()} project in {target}")
        return target

    def _clear(self, target: Path) -> None:
        logger.debug(f"Removing existing contents of {target}")
        if not target.is_dir():
            target.unlink()
            return
        # The directory itself stays, it may be the working directory
        for child in target.iterdir():
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()

    def _extract(self, archive: IO[bytes], target: Path) -> None:
        """Extract all members, dropping the archive's single top-level folder."""
        root = target.resolve()
        with zipfile.ZipFile(archive) as zf:
            members = zf.infolist()
            prefix = self._common_prefix(members)

            for member in members:
                relative = self._relative_path(member.filename, prefix)
                if relative is None:
                    continue

                destination = target.joinpath(*relative.parts)
                if not destination.resolve().is_relative_to(root):
                    logger.warning(f"Skipping archive member outside project: {member.filename}")
                    continue

                if member.is_dir():
                    destination.mkdir(parents=True, exist_ok=True)
                    continue

                destination.parent.mkdir(parents=True, exist_ok=True)
                with zf.open(member) as src, open(destination, "wb") as dst:
                    shutil.copyfileobj(src, dst)

                mode = (member.external_attr >> 16) & 0o777
                if mode & 0o111:
                    destination.chmod(mode)

    @staticmethod
    def _common_prefix(members: List[zipfile.ZipInfo]) -> Optional[str]:
        paths = [PurePosixPath(m.filename.replace("\\", "/")) for m in members]
        heads = {p.parts[0] for p in paths if p.parts}
        if len(heads) == 1 and any(len(p.parts) > 1 for p in paths):
            return heads.pop()
        return None

    @staticmethod
    def _relative_path(name: str, prefix: Optional[str]) -> Optional[PurePosixPath]:
        path = PurePosixPath(name.replace("\\", "/"))
        parts = path.parts
        if prefix and parts and parts[0] == prefix:
            parts = parts[1:]
        if not parts:
            return None
        if path.is_absolute() or ".." in parts or parts[0].endswith(":"):
            logger.warning(f"Skipping unsafe archive member: {name}")
            return None
        return PurePosixPath(*parts)

    def _write_main_source(self, target: Path, config: ProjectConfig) -> None:
        main_dir = target / MAIN_DIR
        main_dir.mkdir(parents=True, exist_ok=True)

        context = {
            "project_name": config.project_name,
            "language": config.language.value,
            "cpp_standard": config.cpp_standard.value if config.cpp_standard else "",
        }
        source = self.templates.render_template(config.main_source, context)
        (main_dir / config.main_source).write_text(source)

        if config.language != Language.CPP:
            return

        c_file = main_dir / "main.c"
        if c_file.exists():
            c_file.unlink()

        component_cmake = main_dir / CMAKE_FILE
        if component_cmake.exists():
            text = component_cmake.read_text()
            component_cmake.write_text(_MAIN_C_RE.sub("main.cpp", text))

    def _configure_cmake(self, target: Path, config: ProjectConfig) -> None:
        """Rename the CMake project and set the C++ standard."""
        cmake_file = target / CMAKE_FILE
        if not cmake_file.exists():
            raise ProjectIOError(f"Template has no {CMAKE_FILE} in '{target}'")

        text = cmake_file.read_text()
        text = _PROJECT_RE.sub(lambda m: m.group(1) + config.project_name, text, count=1)
        text = _CXX_STANDARD_RE.sub("", text)

        if config.language == Language.CPP:
            line = f"set(CMAKE_CXX_STANDARD {config.cpp_standard.value})\n"
            anchor = _IDF_INCLUDE_RE.search(text) or _PROJECT_RE.search(text)
            if anchor:
                text = text[:anchor.start()] + line + text[anchor.start():]
            else:
                text = text.rstrip("\n") + "\n" + line

        cmake_file.write_text(text)
