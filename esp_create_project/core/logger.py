"""Console and file logging for esp-create-project."""
import logging
import tempfile
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

console = Console()

ROOT_LOGGER = "esp_create_project"
LOG_FILE = Path.home() / ".cache" / "esp-create-project" / "esp-create-project.log"


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> Path:
    """Send package log records to a file as well as the console.

    Args:
        log_file: Path to log file (defaults to ~/.cache/esp-create-project/)
        verbose: Record debug messages too

    Returns:
        Path of the log file in use. Only the default location falls back to
        the system temp dir when it cannot be created.

    Raises:
        OSError: If an explicitly requested log file cannot be opened
    """
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
    else:
        path = LOG_FILE
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            path = Path(tempfile.gettempdir()) / LOG_FILE.name

    handler = logging.FileHandler(path)
    handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    root_logger.info(f"Logging to {path}")
    return path


def set_verbose(verbose: bool) -> None:
    """Switch every package logger between INFO and DEBUG."""
    level = logging.DEBUG if verbose else logging.INFO
    for name, logger in logging.root.manager.loggerDict.items():
        if name.startswith(ROOT_LOGGER) and isinstance(logger, logging.Logger):
            logger.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for name with a single Rich console handler attached."""
    logger = logging.getLogger(name)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=console, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)

    return logger
