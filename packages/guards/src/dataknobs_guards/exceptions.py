"""Exception hierarchy for guard failures.

Every failure a guard can report is a ``GuardError``. The hierarchy mirrors
the failure taxonomy of the validation engine:

- ``KindMismatchError``: wrong runtime kind for a primitive guard
- ``NotANumberError``: numeric value that is NaN
- ``NotASequenceError``: ``array`` input that is not a list or tuple
- ``NotAStructureError``: ``object``/``record_of`` input that is not a mapping
- ``FieldError``: wraps a field failure inside ``object``
- ``UnionExhaustedError``: wraps the failures of every ``either`` branch
- ``NotAMemberError``: value outside of a ``one_of``/``enum_member`` set
- ``MappingError``: a ``mapper`` statement raised

``GuardError`` is a ``dataknobs_common.ValidationError``. Invalid settings
raise ``GuardConfigError``, a ``dataknobs_common.ConfigurationError``.

Example:
    ```python
    from dataknobs_guards import GuardError, number

    try:
        number("4")
    except GuardError as e:
        print(e)          # `"4"` is not a `number`.
        print(e.context)  # {'value': '"4"', 'expected': 'a `number`'}
    ```
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from dataknobs_common import ConfigurationError, ValidationError

from .types import MISSING


def describe(value: Any) -> str:
    """Render a value for an error message.

    JSON is used where possible so strings keep their quotes; anything JSON
    cannot encode falls back to ``repr``.
    """
    if value is MISSING:
        return "undefined"
    try:
        return json.dumps(value, default=repr)
    except (TypeError, ValueError):
        return repr(value)


class GuardError(ValidationError):
    """Base exception for all guard failures.

    Built on the common ``ValidationError``, so callers catching
    ``DataknobsError`` also see guard failures.
    """

    @property
    def message(self) -> str:
        """Human-readable failure message."""
        return str(self)


class KindMismatchError(GuardError):
    """Raised when a value is not of the runtime kind a guard expects."""

    def __init__(self, value: Any, expected: str, message: str | None = None):
        self.value = value
        self.expected = expected
        super().__init__(
            message or f"`{describe(value)}` is not {expected}.",
            context={"value": describe(value), "expected": expected},
        )


class NotANumberError(GuardError):
    """Raised when a numeric value is NaN."""

    def __init__(self, value: Any, message: str | None = None):
        self.value = value
        super().__init__(
            message or f'"{value}" is a NaN',
            context={"value": describe(value)},
        )


class NotASequenceError(KindMismatchError):
    """Raised when ``array`` receives something other than a list or tuple."""

    def __init__(self, value: Any):
        super().__init__(value, "an `array`")


class NotAStructureError(KindMismatchError):
    """Raised when ``object`` or ``record_of`` receives a non-mapping value."""

    def __init__(self, value: Any):
        super().__init__(value, "an `object`")


class FieldError(GuardError):
    """Raised when a declared field of an ``object`` guard fails.

    Attributes:
        field: Name of the failing field
        cause: The failure raised by the field's guard
    """

    def __init__(self, field: str, cause: BaseException):
        self.field = field
        self.cause = cause
        super().__init__(
            f"Object '{field}' property error: {cause}",
            context={"field": field, "error": str(cause)},
        )


class UnionExhaustedError(GuardError):
    """Raised when no alternative of an ``either`` guard accepts the value.

    Attributes:
        value: The rejected value
        errors: The failure of each alternative, in order
    """

    def __init__(self, value: Any, errors: Sequence[BaseException]):
        self.value = value
        self.errors = list(errors)
        messages = [str(e) for e in self.errors]
        super().__init__(
            f"`{describe(value)}` matched no alternative: " + " | ".join(messages),
            context={"value": describe(value), "errors": messages},
        )


class NotAMemberError(GuardError):
    """Raised when a value is not one of an allowed set of values."""

    def __init__(self, value: Any, expected: str):
        self.value = value
        super().__init__(
            f"`{describe(value)}` is not {expected}.",
            context={"value": describe(value), "expected": expected},
        )


class MappingError(GuardError):
    """Raised when a ``mapper`` statement fails."""

    def __init__(self, name: str, cause: BaseException):
        self.name = name
        self.cause = cause
        super().__init__(
            f"Cannot map `{name}`: {cause}",
            context={"name": name, "error": str(cause)},
        )


class GuardConfigError(ConfigurationError):
    """Raised when a validator set configuration is invalid."""

    pass


__all__ = [
    "GuardError",
    "KindMismatchError",
    "NotANumberError",
    "NotASequenceError",
    "NotAStructureError",
    "FieldError",
    "UnionExhaustedError",
    "NotAMemberError",
    "MappingError",
    "GuardConfigError",
    "describe",
]
