"""
Log-then-propagate error boundary.

Errors are never recovered locally: the decorated call logs the failure and
re-raises it so the hosting runtime decides what the caller sees.
"""

from __future__ import annotations

import functools
import inspect
from typing import Any, Callable, TypeVar

from imbibe_action.core.exceptions import AssemblyFailure, ImbibeError
from imbibe_action.logging import get_logger

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _reraise(event: str, exc: Exception) -> None:
    if isinstance(exc, ImbibeError):
        # Nested boundaries log a failure once, at the innermost layer.
        if not getattr(exc, "_logged", False):
            logger.error(event, error=str(exc), error_type=type(exc).__name__)
            exc._logged = True
        raise exc
    logger.exception(event, error=str(exc), error_type=type(exc).__name__)
    wrapped = AssemblyFailure(f"{event}: {exc}")
    wrapped._logged = True
    raise wrapped from exc


def log_and_reraise(event: str) -> Callable[[F], F]:
    """
    Decorate a sync or async callable so any exception is logged under `event`.

    ImbibeError subclasses propagate unchanged; anything else is wrapped in
    AssemblyFailure with the original attached as __cause__. A failure that
    crosses several decorated layers is logged only by the first one.
    """

    def decorator(func: F) -> F:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                try:
                    return await func(*args, **kwargs)
                except Exception as exc:
                    _reraise(event, exc)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except Exception as exc:
                _reraise(event, exc)

        return wrapper  # type: ignore[return-value]

    return decorator
