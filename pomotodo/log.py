"""Log sink setup. The TUI owns the terminal, so logs go to a file."""

from pathlib import Path
from typing import Optional, Union

from loguru import logger
from platformdirs import user_log_dir

APP_NAME = "pomotodo"
LOG_FILE = "pomotodo.log"


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME)) / LOG_FILE


def setup_logging(level: str = "INFO", log_file: Optional[Union[str, Path]] = None) -> Path:
    """Route loguru output to a rotating file.

    Args:
        level: Minimum level to record.
        log_file: Target file; defaults to the platform log directory.

    Returns:
        Path of the log file in use.
    """
    path = Path(log_file) if log_file else default_log_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.add(
        path,
        level=level.upper(),
        rotation="1 MB",
        retention=3,
        encoding="utf-8",
        format="{time:YYYY-MM-DDTHH:mm:ss} {level: <8} [{name}] {message}",
    )
    return path
