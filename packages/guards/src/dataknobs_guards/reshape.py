"""Helpers that reshape mappings before or after validation.

These are plain value transforms. They compose with guards through
``decorate``, which runs a transform before delegating to a guard:

    ```python
    user = decorate(
        object({"userId": number, "createdAt": string}),
        rename_snake_to_camel,
    )
    user({"user_id": 1, "created_at": "2024-01-01"})
    # {'userId': 1, 'createdAt': '2024-01-01'}
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable, Dict, TypeVar

from .casing import snake_to_camel
from .exceptions import MappingError

if TYPE_CHECKING:
    from .policy import ErrorPolicy

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ReshapeMixin:
    """Mapping reshaping helpers for ``ValidatorSet``.

    Requires the host class to provide ``_policy``.
    """

    _policy: ErrorPolicy

    def mapper(
        self, statements: Mapping[str, Callable[[Mapping[str, Any]], Any]]
    ) -> Callable[[Mapping[str, Any]], Dict[str, Any]]:
        """Build a transform that derives new keys from a mapping.

        Each statement receives the whole input and its result is stored under
        the statement's name, overriding any existing key. A statement that
        raises is reported as a ``MappingError`` and its key is set to ``None``.

        Args:
            statements: Mapping from output key to a function of the input

        Returns:
            A function returning a new dict with the derived keys applied
        """

        def _mapper(value: Mapping[str, Any]) -> Dict[str, Any]:
            mapped: Dict[str, Any] = {}
            for name, statement in statements.items():
                try:
                    mapped[name] = statement(value)
                except Exception as e:
                    logger.debug("Mapper statement %r failed: %s", name, e)
                    self._policy.report(MappingError(name, e))
                    self._policy.notify(
                        f"Skipping `{name}`. Fingers crossed it's not important."
                    )
                    mapped[name] = None
            return {**value, **mapped}

        return _mapper

    def rename(
        self, statements: Mapping[str, str]
    ) -> Callable[[Mapping[str, Any]], Dict[str, Any]]:
        """Build a transform renaming keys; keys not listed are kept as-is."""

        def _rename(value: Mapping[str, Any]) -> Dict[str, Any]:
            renamed: Dict[str, Any] = {}
            for name, item in value.items():
                renamed[statements.get(name) or name] = item
            return renamed

        return _rename

    def rename_snake_to_camel(self, value: Mapping[str, Any]) -> Dict[str, Any]:
        """Rename every snake_case key of a mapping to camelCase."""
        return self.rename({name: snake_to_camel(name) for name in value})(value)

    def decorate(
        self, guard: Callable[[Any], T], transform: Callable[[Any], Any]
    ) -> Callable[[Any], T]:
        """Build a guard that applies ``transform`` before ``guard``."""

        def _decorated(value: Any) -> T:
            return guard(transform(value))

        return _decorated
