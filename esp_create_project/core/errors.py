"""Error taxonomy for project creation.

Every failure raised by the pipeline derives from ProjectCreationError so the
CLI can report it uniformly. All of them are fatal except GitUnavailableError,
which the creator downgrades to a warning.
"""


class ProjectCreationError(Exception):
    """Base class for all project creation failures."""
    pass


class InputError(ProjectCreationError):
    """Raised when a prompt is aborted or answered with an invalid value."""
    pass


class NetworkError(ProjectCreationError):
    """Raised when the template archive cannot be downloaded."""
    pass


class ProjectIOError(ProjectCreationError):
    """Raised when writing the project to disk fails."""
    pass


class AlreadyExistsError(ProjectCreationError):
    """Raised when the target path is a file or a non-empty directory."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Directory '{path}' already exists and is not empty")


class GitUnavailableError(ProjectCreationError):
    """Raised when git cannot be found or `git init` fails."""
    pass
