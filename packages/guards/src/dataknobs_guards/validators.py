"""Guards, structural combinators and the validator set factory.

A ``ValidatorSet`` bundles every guard and combinator with one private
``ErrorPolicy``. Combinators try their inner guards under suppression, so a
failure deep inside a structure is caught by the nearest enclosing combinator,
re-reported with context, and only then surfaced through the set's policy:

    ```python
    from dataknobs_guards import create_validator_set

    messages = []
    guards = create_validator_set(custom_error_handler=messages.append)

    user = guards.object({
        "id": guards.number,
        "name": guards.string,
        "tags": guards.array(guards.string),
        "email": guards.optional(guards.string),
    })

    user({"id": "7", "name": "Ada", "tags": []})
    # {'id': '7', 'name': 'Ada', 'tags': [], 'email': MISSING}
    messages
    # ["Object 'id' property error: `\"7\"` is not a `number`."]
    ```

Without a handler every unsuppressed failure raises a ``GuardError``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, TypeVar, Union

from .config import GuardConfig
from .converters import ConverterMixin, coerce_number
from .exceptions import (
    FieldError,
    KindMismatchError,
    NotANumberError,
    NotASequenceError,
    NotAStructureError,
    UnionExhaustedError,
    describe,
)
from .policy import ErrorPolicy
from .reshape import ReshapeMixin
from .types import MISSING, ErrorHandler, GuardResult

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")

GuardFn = Callable[[Any], T]


class ValidatorSet(ConverterMixin, ReshapeMixin):
    """An independent set of guards bound to one error policy.

    Guards are exposed as methods, so bound methods such as
    ``guards.number`` are themselves guards and can be passed to
    combinators. Two sets never share suppression state.

    Args:
        policy: The error policy to report failures through. Defaults to a
            policy that raises every unsuppressed failure.
    """

    def __init__(self, policy: ErrorPolicy | None = None) -> None:
        self._policy = policy or ErrorPolicy()

    @property
    def policy(self) -> ErrorPolicy:
        return self._policy

    # Primitive guards

    def number(self, value: Any) -> Union[int, float]:
        """Accept an ``int`` or ``float`` (booleans excluded) that is not NaN."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            self._policy.report(KindMismatchError(value, "a `number`"))
            self._policy.notify(f"Casting `{describe(value)}` to a `number`.")
            return coerce_number(value)
        if isinstance(value, float) and math.isnan(value):
            self._policy.report(NotANumberError(value))
        return value

    def string(self, value: Any) -> str:
        """Accept a ``str``."""
        if not isinstance(value, str):
            self._policy.report(KindMismatchError(value, "a `string`"))
            self._policy.notify(f"Casting `{describe(value)}` to a `string`.")
            return str(value)
        return value

    def boolean(self, value: Any) -> bool:
        """Accept a ``bool``."""
        if not isinstance(value, bool):
            self._policy.report(KindMismatchError(value, "a `boolean`"))
            self._policy.notify(f"Casting `{describe(value)}` to a `boolean`.")
            return bool(value)
        return value

    # Structural combinators

    def array(self, inner: GuardFn[T]) -> GuardFn[List[T]]:
        """Build a guard for a list or tuple whose elements satisfy ``inner``.

        A non-sequence value is reported and, when the policy does not raise,
        wrapped in a one-element list and validated as such. Element failures
        propagate from ``inner`` unchanged, so the first failing element stops
        the scan when the policy raises.
        """

        def _array(value: Any) -> List[T]:
            if not isinstance(value, (list, tuple)):
                self._policy.report(NotASequenceError(value))
                self._policy.notify(f"Wrapping `{describe(value)}` in array")
                return [inner(value)]
            return [inner(item) for item in value]

        return _array

    def object(self, shape: Mapping[str, GuardFn[Any]]) -> GuardFn[Dict[str, Any]]:
        """Build a guard for a mapping with the declared fields.

        Each field is checked in declaration order under suppression. A field
        failure is re-reported as ``FieldError`` through the ambient policy and
        the raw field value is kept. Undeclared keys are dropped; absent keys
        are read as ``MISSING``.

        A non-mapping value is reported and, when the policy does not raise,
        returned unchanged. That value is unvalidated.
        """

        def _object(value: Any) -> Dict[str, Any]:
            if not isinstance(value, Mapping):
                self._report_not_a_structure(value)
                return value
            out: Dict[str, Any] = {}
            for key, guard in shape.items():
                raw = value.get(key, MISSING)
                try:
                    with self._policy.suppress():
                        out[key] = guard(raw)
                except Exception as e:
                    logger.debug("Field %r failed validation: %s", key, e)
                    self._policy.report(FieldError(key, e))
                    out[key] = raw
            return out

        return _object

    def record_of(self, inner: GuardFn[T]) -> GuardFn[Dict[Any, T]]:
        """Build a guard for a mapping whose every value satisfies ``inner``.

        Value failures are not annotated with their key; they propagate from
        ``inner`` as-is.
        """

        def _record_of(value: Any) -> Dict[Any, T]:
            if not isinstance(value, Mapping):
                self._report_not_a_structure(value)
                return value
            return {key: inner(item) for key, item in value.items()}

        return _record_of

    def nullable(self, inner: GuardFn[T]) -> GuardFn[T | None]:
        """Build a guard that lets ``None`` through and delegates otherwise."""

        def _nullable(value: Any) -> T | None:
            if value is None:
                return None
            return inner(value)

        return _nullable

    def optional(self, inner: GuardFn[T], default: Any = MISSING) -> GuardFn[Any]:
        """Build a guard that lets ``MISSING`` through and delegates otherwise.

        Args:
            inner: Guard applied to present values
            default: Value returned for ``MISSING`` (``MISSING`` itself unless
                given)
        """

        def _optional(value: Any) -> Any:
            if value is MISSING:
                return default
            return inner(value)

        return _optional

    def either(
        self, first: GuardFn[T], second: GuardFn[U], *rest: GuardFn[Any]
    ) -> GuardFn[Union[T, U]]:
        """Build a guard accepting values that satisfy any alternative.

        Alternatives are tried in order under suppression. The original value
        is returned on success; no alternative's conversion is applied. When
        every alternative fails a single ``UnionExhaustedError`` is reported
        and, when the policy does not raise, the original value is returned.
        """
        alternatives = (first, second, *rest)

        def _either(value: Any) -> Union[T, U]:
            errors: List[Exception] = []
            for alternative in alternatives:
                try:
                    with self._policy.suppress():
                        alternative(value)
                    return value
                except Exception as e:
                    errors.append(e)
            self._policy.report(UnionExhaustedError(value, errors))
            return value

        return _either

    # Checks

    def is_(self, value: Any, guard: GuardFn[Any]) -> bool:
        """Return whether ``guard`` accepts ``value``.

        Never raises and never calls the error handler, whatever the policy.
        Safe to call from inside other guards.
        """
        try:
            with self._policy.suppress():
                guard(value)
            return True
        except Exception as e:
            logger.debug("Predicate check rejected %s: %s", describe(value), e)
            return False

    def validate(self, value: Any, guard: GuardFn[T]) -> GuardResult[T]:
        """Run ``guard`` leniently and return its result with every failure.

        Failures are collected instead of raised or handed to the policy's
        handler, so the call always returns. Check ``GuardResult.ok`` before
        trusting ``GuardResult.value``.
        """
        with self._policy.collect() as messages:
            result = guard(value)
        return GuardResult(result, tuple(messages))

    def _report_not_a_structure(self, value: Any) -> None:
        self._policy.report(NotAStructureError(value))
        self._policy.notify(
            f"Cannot cast `{describe(value)}` to object. "
            "Fingers crossed it's not important."
        )

    def __repr__(self) -> str:
        return f"ValidatorSet({self._policy!r})"


def create_validator_set(
    config: GuardConfig | Mapping[str, Any] | None = None,
    *,
    custom_error_handler: ErrorHandler | None = None,
) -> ValidatorSet:
    """Create an independent validator set.

    Args:
        config: A ``GuardConfig``, a configuration mapping accepted by
            ``GuardConfig.from_dict``, or None for defaults
        custom_error_handler: Shortcut for a config whose failures go to this
            handler instead of raising

    Returns:
        A new ``ValidatorSet`` with its own error policy

    Example:
        ```python
        strict = create_validator_set()
        lenient = create_validator_set(custom_error_handler=print)
        logged = create_validator_set({"error_mode": "log"})
        ```
    """
    if config is None:
        config = GuardConfig()
    elif isinstance(config, Mapping):
        config = GuardConfig.from_dict(config, use_env=False)

    if custom_error_handler is not None:
        config = config.with_handler(custom_error_handler)

    return ValidatorSet(ErrorPolicy(config.build_handler()))
