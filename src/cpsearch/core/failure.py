"""Failure policies — What to do with a backend error that reached the API.

``FailFast`` reproduces the classic behaviour of reporting the error on
stderr and terminating the process.  ``Propagate`` hands the error back to
the caller, which lets the HTTP layer answer with an error response and
lets tests observe failures without the runner being killed.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from typing import TYPE_CHECKING, NoReturn, Protocol

from cpsearch.observability.logging import get_logger

if TYPE_CHECKING:
    from cpsearch.config.settings import Settings

logger = get_logger("failure")


class FailurePolicy(Protocol):
    """Handle an unrecoverable error. Implementations never return normally."""

    def __call__(self, error: BaseException) -> NoReturn: ...


class Propagate:
    """Re-raise the error unchanged."""

    def __call__(self, error: BaseException) -> NoReturn:
        raise error


class FailFast:
    """Write ``Fatal error: ...`` to stderr and end the process with status 1.

    The default exit is ``os._exit``: a ``SystemExit`` raised inside a
    request task is caught by the ASGI server and would not stop it.
    """

    def __init__(self, exit_func: Callable[[int], object] = os._exit, stream=None) -> None:
        self._exit = exit_func
        self._stream = stream

    def __call__(self, error: BaseException) -> NoReturn:
        stream = self._stream or sys.stderr
        logger.critical("fatal_error", error=str(error), error_type=type(error).__name__)
        print(f"Fatal error: {error}", file=stream)
        stream.flush()
        self._exit(1)
        raise error


def failure_policy(settings: Settings) -> FailurePolicy:
    """Pick the policy configured by ``settings.fail_fast``."""
    return FailFast() if settings.fail_fast else Propagate()
