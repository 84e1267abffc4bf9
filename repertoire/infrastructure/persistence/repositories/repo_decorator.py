"""Repository decorator for standardizing DB operations.

Repository methods decorated with ``db_operation`` get:
- trace-level logging with timing information
- classification of SQLAlchemy errors into log levels

Errors are always re-raised unchanged; callers decide what they mean.
"""

import functools
import inspect
import time
from collections.abc import Callable, Coroutine
from typing import Any, ParamSpec, TypeVar
from uuid import UUID

from sqlalchemy.exc import (
    DatabaseError,
    IntegrityError,
    MultipleResultsFound,
    NoResultFound,
    OperationalError,
    SQLAlchemyError,
    TimeoutError,
)

from repertoire.config import get_logger

logger = get_logger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

# Checked in order; the first matching class decides level and message.
_ERROR_CLASSIFICATION: tuple[tuple[type[Exception], str, str], ...] = (
    (NoResultFound, "DEBUG", "DB record not found"),
    (MultipleResultsFound, "WARNING", "Multiple results found"),
    (IntegrityError, "WARNING", "DB integrity error"),
    (TimeoutError, "ERROR", "DB timeout error"),
    (OperationalError, "ERROR", "DB operational error"),
    (DatabaseError, "ERROR", "DB error"),
    (SQLAlchemyError, "ERROR", "SQLAlchemy error"),
)


def db_operation(operation_name: str | None = None):
    """Decorate repository methods with consistent logging and error handling.

    Args:
        operation_name: Optional name for the operation (defaults to function name)

    Example:
        @db_operation("get_song")
        async def get_song(self, song_id: UUID) -> Song | None:
            ...
    """

    def decorator(
        func: Callable[P, Coroutine[Any, Any, T]],
    ) -> Callable[P, Coroutine[Any, Any, T]]:
        func_name = operation_name or func.__name__

        if not inspect.iscoroutinefunction(func):
            raise TypeError(
                f"db_operation can only be used with async functions, but {func_name} is not async",
            )

        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            start_time = time.perf_counter()
            repo_name = args[0].__class__.__name__ if args else "Repository"
            context = _build_log_context(kwargs)

            logger.trace(
                f"DB operation starting: {repo_name}.{func_name}",
                operation=func_name,
                **context,
            )
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                exec_time = (time.perf_counter() - start_time) * 1000
                _log_failure(e, f"{repo_name}.{func_name}", func_name, exec_time, context)
                raise

            logger.trace(
                f"DB operation completed: {repo_name}.{func_name}",
                operation=func_name,
                exec_time_ms=(time.perf_counter() - start_time) * 1000,
                **context,
            )
            return result

        return wrapper

    return decorator


def _log_failure(
    error: Exception,
    target: str,
    operation: str,
    exec_time: float,
    context: dict[str, Any],
) -> None:
    for error_type, level, message in _ERROR_CLASSIFICATION:
        if isinstance(error, error_type):
            logger.log(
                level,
                f"{message}: {target}",
                operation=operation,
                error=str(error),
                exec_time_ms=exec_time,
                **context,
            )
            return

    logger.exception(
        f"Unhandled exception in {target}",
        operation=operation,
        error=str(error),
        exec_time_ms=exec_time,
        **context,
    )


def _build_log_context(kwargs: dict[str, Any]) -> dict[str, Any]:
    """Extract loggable scalar values (IDs first) from keyword arguments."""
    context = {
        k: v
        for k, v in kwargs.items()
        if not k.startswith("_") and isinstance(v, int | str | float | bool)
    }
    context.update(
        {k: str(v) for k, v in kwargs.items() if k.endswith("_id") and isinstance(v, UUID)}
    )
    return context
