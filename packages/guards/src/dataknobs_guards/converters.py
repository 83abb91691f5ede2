"""Lenient converters and membership guards.

Converters never reject their input outright: they turn it into the target
type and report a failure only when the result is unusable. Membership guards
(``one_of``, ``enum_member``) check a value against a fixed set of allowed
values.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Type, TypeVar, Union

from .exceptions import KindMismatchError, NotAMemberError, NotANumberError
from .types import MISSING

if TYPE_CHECKING:
    from .policy import ErrorPolicy

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound=Enum)


def coerce_number(value: Any) -> Union[int, float]:
    """Best-effort conversion of any value to a number.

    Booleans become ``0``/``1``, ``None``, blank strings and empty lists
    become ``0``, a one-element list converts its element, numeric strings
    are parsed (digit separators such as ``"1_000"`` are not), and anything
    else that ``float`` rejects becomes NaN.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if value is None:
        return 0
    if value is MISSING:
        return math.nan
    if isinstance(value, (list, tuple)):
        if not value:
            return 0
        if len(value) == 1:
            return coerce_number(value[0])
        return math.nan
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        # digit separators are not part of a number
        if "_" in text:
            return math.nan
        try:
            return int(text)
        except ValueError:
            pass
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _same_value(left: Any, right: Any) -> bool:
    # booleans only match booleans, even though True == 1 in Python
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    return bool(left == right)


class ConverterMixin:
    """Converters and membership guards for ``ValidatorSet``.

    Requires the host class to provide ``_policy``.
    """

    _policy: ErrorPolicy

    def to_number(self, value: Any) -> Union[int, float]:
        """Convert a value to a number, reporting when the result is NaN."""
        parsed = coerce_number(value)
        if isinstance(parsed, float) and math.isnan(parsed):
            self._policy.report(NotANumberError(value, f'"to_number({value!r})" is NaN'))
        return parsed

    def to_string(self, value: Any) -> str:
        return str(value)

    def to_boolean(self, value: Any) -> bool:
        return bool(value)

    def string_boolean(self, value: Any) -> bool:
        """Accept a boolean or the strings ``"true"`` and ``"false"``."""
        if isinstance(value, bool):
            return value
        if value == "true":
            return True
        if value == "false":
            return False
        self._policy.report(
            KindMismatchError(
                value,
                '"true" or "false" string',
                message=f'"{value}" is not "true" or "false" string',
            )
        )
        return bool(value)

    def one_of(self, *values: Any) -> Callable[[Any], Any]:
        """Build a guard accepting only the given values.

        Example:
            ```python
            color = one_of("red", "green", "blue")
            color("red")    # "red"
            color("pink")   # raises NotAMemberError
            ```
        """
        expected = "one of " + ",".join(str(v) for v in values)

        def _one_of(value: Any) -> Any:
            if any(_same_value(value, allowed) for allowed in values):
                return value
            self._policy.report(NotAMemberError(value, expected))
            return value

        return _one_of

    def enum_member(
        self, enum_type: Union[Type[E], Mapping[str, Any]]
    ) -> Callable[[Any], Any]:
        """Build a guard accepting members of an enum.

        For an ``Enum`` class both members and member values are accepted and
        the member is returned. A mapping is treated as a plain lookup table and
        its values are accepted unchanged.
        """
        if isinstance(enum_type, Mapping):
            allowed = list(enum_type.values())

            def _mapping_member(value: Any) -> Any:
                if any(_same_value(value, member) for member in allowed):
                    return value
                self._policy.report(NotAMemberError(value, "a member of passed enum"))
                return value

            return _mapping_member

        def _enum_member(value: Any) -> Any:
            if isinstance(value, enum_type):
                return value
            for member in enum_type:
                if _same_value(value, member.value):
                    return member
            self._policy.report(NotAMemberError(value, "a member of passed enum"))
            return value

        return _enum_member

    def as_(self, guard: Callable[[Any], T]) -> Callable[[Any], U]:
        """Re-type a guard's result as a narrower type.

        This is an identity cast for type checkers: the value is validated by
        ``guard`` and returned unchanged.
        """

        def _as(value: Any) -> U:
            return guard(value)  # type: ignore[return-value]

        return _as
