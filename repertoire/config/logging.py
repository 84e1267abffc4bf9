"""Loguru setup for the repertoire core.

Two sinks are installed: a colorized console sink for humans and a rotating
JSON file sink for later inspection. Modules never configure loguru
themselves; they ask for a bound logger:

    from repertoire.config import get_logger
    logger = get_logger(__name__)
    logger.info("Moving section", song_id=str(song_id))

Keyword arguments passed to a log call end up in the record's ``extra``
dict, next to the ``service`` and ``module`` values bound here.
"""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

from .settings import settings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[module]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[service]} | "
    "{extra[module]} | {function}:{line} | {message}"
)


def _log_file_path() -> Path:
    """Relative log files live under the data directory."""
    path = Path(settings.logging.log_file)
    if not path.is_absolute():
        path = settings.data_dir / "logs" / path
    return path


def setup_loguru_logger(verbose: bool = False) -> None:
    """Install the console and file sinks, replacing any existing ones.

    Args:
        verbose: Log DEBUG to the console and include variable values in
            tracebacks
    """
    logger.remove()
    logger.configure(extra={"service": "repertoire", "module": "root"})

    logger.add(
        sink=sys.stderr,
        level="DEBUG" if verbose else settings.logging.console_level,
        format=CONSOLE_FORMAT,
        colorize=True,
        backtrace=verbose,
        diagnose=verbose,
    )

    log_file = _log_file_path()
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        sink=str(log_file),
        level=settings.logging.file_level,
        format=FILE_FORMAT,
        rotation="10 MB",
        retention="1 week",
        compression="zip",
        serialize=True,
        backtrace=True,
        diagnose=False,
        # Queue writes through a worker unless lines must appear immediately
        enqueue=not settings.logging.real_time_debug,
        catch=True,
    )


def get_logger(name: str) -> Any:  # loguru's Logger type is stub-only
    """Return the shared logger bound to the calling module.

    Args:
        name: Module name, normally ``__name__``
    """
    return logger.bind(module=name, service="repertoire")
