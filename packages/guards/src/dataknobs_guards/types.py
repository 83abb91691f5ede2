"""Core types shared by guards and combinators.

A guard is any callable taking one untyped value and returning a narrowed
value of type ``T``. Plain functions, lambdas and bound methods all qualify,
so combinators are written once against the ``Guard`` protocol rather than a
class hierarchy.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, Tuple, TypeVar, runtime_checkable

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

ErrorHandler = Callable[[str], None]
"""Callback receiving the message of every unsuppressed failure."""


@runtime_checkable
class Guard(Protocol[T_co]):
    """Protocol for guards: ``(value) -> T``, reporting failures through a policy."""

    def __call__(self, value: Any, /) -> T_co:
        ...


class _Missing:
    """Marker for an absent value, the counterpart of ``None`` for missing keys."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


@dataclass(frozen=True)
class GuardResult(Generic[T]):
    """Outcome of running a guard in lenient mode.

    When ``errors`` is empty the value satisfied the guard. Otherwise the value
    is the guard's best-effort output and must be treated as unsafe.

    Attributes:
        value: The validated value, or a best-effort value when ``lenient``
        errors: Messages reported while validating, in order
    """

    value: T
    errors: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        """True when no failure was reported."""
        return not self.errors

    @property
    def lenient(self) -> bool:
        """True when ``value`` is a best-effort value that failed validation."""
        return bool(self.errors)


__all__ = ["ErrorHandler", "Guard", "GuardResult", "MISSING"]
