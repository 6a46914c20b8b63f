"""
Decorators for session-level functionality.

This module provides decorators for rollback on failure and action logging.
"""

import functools
import logging
import time
from typing import Any, Callable, Optional, TypeVar

F = TypeVar('F', bound=Callable[..., Any])

_logger = logging.getLogger(__name__)


def atomic(func: F) -> F:
    """
    Decorator to make a session mutation all-or-nothing.

    The instance must provide ``_capture()`` returning an opaque memento of
    everything the method may touch and ``_rollback(memento)`` restoring it.
    If the decorated method raises, the instance is restored and the
    original exception is re-raised.

    Example:
        @atomic
        def perform_action(self, action: Action) -> bool:
            self._history.append(self._state.clone())
            self._state = process_action(self._state, action)
            self._sync()   # may raise; history and state are restored
            return True
    """
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        if not hasattr(self, '_capture') or not hasattr(self, '_rollback'):
            raise AttributeError(
                f"@atomic decorator requires '_capture' and '_rollback' methods. "
                f"Class {self.__class__.__name__} does not provide them."
            )

        memento = self._capture()
        try:
            return func(self, *args, **kwargs)
        except Exception as e:
            self._rollback(memento)
            logger = getattr(self, '_logger', None)
            if logger:
                logger.warning(f"Rolled back {func.__name__} due to error: {e}")
            raise

    return wrapper


def logged_action(action_name: Optional[str] = None):
    """
    Decorator to log the start, outcome and duration of a session action.

    The instance's ``_logger`` is used when present, otherwise this
    module's logger.

    Args:
        action_name: Name shown in the log. Defaults to the function name.
    """
    def decorator(func: F) -> F:
        name = action_name or func.__name__

        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            logger = getattr(self, '_logger', None) or _logger
            started = time.perf_counter()
            logger.debug(f"Starting {name}")

            try:
                result = func(self, *args, **kwargs)
            except Exception as e:
                logger.error(f"Failed {name}: {e}")
                raise

            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.debug(f"Completed {name} -> {result!r} ({elapsed_ms:.1f} ms)")
            return result

        return wrapper
    return decorator
