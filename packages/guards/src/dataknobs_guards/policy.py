"""Error policy deciding how guard failures surface.

An ``ErrorPolicy`` is owned by exactly one validator set. It answers a single
question for every failure a guard reports: raise it, or hand its message to
a callback and let the guard carry on with a best-effort value.

Two scoped states override the configured behavior:

- **suppression** forces every failure to raise so the combinator that entered
  it can catch the failure and decide what to do next
- **collection** gathers messages into a list instead of raising or calling
  the handler (used by ``ValidatorSet.validate``)

Both live in ``ContextVar`` instances private to the policy and are entered
through context managers that reset the previous value on exit, so nesting is
safe and nothing leaks between unrelated calls, threads or asyncio tasks.

Example:
    ```python
    policy = ErrorPolicy(error_handler=print)

    with policy.suppress():
        policy.report(GuardError("boom"))   # raises

    policy.report(GuardError("boom"))       # prints "boom"
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from enum import Enum
from typing import List

from .exceptions import GuardConfigError, GuardError
from .types import ErrorHandler

logger = logging.getLogger(__name__)


class ReportingMode(Enum):
    """How unsuppressed failures are surfaced."""

    DEFAULT = "default"
    """Raise the failure."""

    CUSTOM = "custom"
    """Pass the failure message to the configured handler."""


class ErrorPolicy:
    """Routes guard failures according to mode and scoped suppression.

    Args:
        error_handler: Optional callback receiving failure messages. When given
            the policy runs in ``ReportingMode.CUSTOM``.
    """

    def __init__(self, error_handler: ErrorHandler | None = None) -> None:
        self._error_handler = error_handler
        self._suppressed: ContextVar[bool] = ContextVar(
            f"dataknobs_guards.suppressed.{id(self):x}", default=False
        )
        self._collector: ContextVar[List[str] | None] = ContextVar(
            f"dataknobs_guards.collector.{id(self):x}", default=None
        )

    @property
    def mode(self) -> ReportingMode:
        """The configured reporting mode."""
        if self._error_handler is None:
            return ReportingMode.DEFAULT
        return ReportingMode.CUSTOM

    @property
    def error_handler(self) -> ErrorHandler | None:
        """The configured handler, if any."""
        return self._error_handler

    @property
    def suppressed(self) -> bool:
        """Whether failures are currently forced to raise."""
        return self._suppressed.get()

    @contextmanager
    def suppress(self) -> Iterator[None]:
        """Force failures to raise for the extent of the block.

        The previous suppression state is restored on exit whether the block
        returns or raises.
        """
        token = self._suppressed.set(True)
        try:
            yield
        finally:
            self._suppressed.reset(token)

    @contextmanager
    def collect(self) -> Iterator[List[str]]:
        """Collect unsuppressed failure messages instead of surfacing them.

        Yields:
            The list that receives every reported message.
        """
        messages: List[str] = []
        token = self._collector.set(messages)
        # a fresh collection scope is never suppressed by an outer caller
        suppress_token = self._suppressed.set(False)
        try:
            yield messages
        finally:
            self._suppressed.reset(suppress_token)
            self._collector.reset(token)

    def report(self, error: GuardError) -> None:
        """Surface a failure.

        Args:
            error: The failure to surface

        Raises:
            GuardError: When suppressed, or when no handler is configured and no
                collection is active.
        """
        if self._suppressed.get():
            raise error

        collector = self._collector.get()
        if collector is not None:
            collector.append(str(error))
            return

        if self._error_handler is None:
            raise error

        logger.debug("Reporting guard failure to handler: %s", error)
        self._error_handler(str(error))

    def notify(self, message: str) -> None:
        """Deliver an informational message about a best-effort recovery.

        Only reachable after ``report`` declined to raise, so the message goes
        to the active collection or the handler; otherwise it is only logged.
        """
        collector = self._collector.get()
        if collector is not None:
            collector.append(message)
        elif self._error_handler is not None:
            self._error_handler(message)
        else:
            logger.debug("%s", message)

    def __repr__(self) -> str:
        return f"ErrorPolicy(mode={self.mode.value}, suppressed={self.suppressed})"


def logging_error_handler(
    logger_name: str = "dataknobs_guards", level: int | str = logging.WARNING
) -> ErrorHandler:
    """Build a handler that logs failure messages instead of raising.

    Args:
        logger_name: Name of the logger to write to
        level: Logging level, as a number or a level name such as ``"INFO"``

    Returns:
        A handler suitable for ``ErrorPolicy``
    """
    target = logging.getLogger(logger_name)
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise GuardConfigError(
                f"Unknown log level: {level}", context={"log_level": level}
            )
        level = resolved

    def _handler(message: str) -> None:
        target.log(level, "%s", message)

    return _handler


__all__ = ["ErrorPolicy", "ReportingMode", "logging_error_handler"]
