"""Configuration for validator sets.

A ``GuardConfig`` decides how a validator set surfaces failures:

- ``"raise"`` (default): every unsuppressed failure raises a ``GuardError``
- ``"handler"``: failures go to ``custom_error_handler`` and guards return
  best-effort values
- ``"log"``: failures are logged to ``logger_name`` at ``log_level`` and
  guards return best-effort values

Configurations can be loaded from dictionaries, YAML or JSON files, and
overridden from the environment:

    DATAKNOBS_GUARDS_ERROR_MODE=log
    DATAKNOBS_GUARDS_LOGGER_NAME=myapp.validation
    DATAKNOBS_GUARDS_LOG_LEVEL=INFO

Example:
    ```python
    from dataknobs_guards import GuardConfig, create_validator_set

    config = GuardConfig.from_file("guards.yaml")
    guards = create_validator_set(config)
    ```
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, ClassVar, Dict, Union

import yaml  # type: ignore[import-untyped]

from .exceptions import GuardConfigError
from .policy import logging_error_handler
from .types import ErrorHandler

ERROR_MODES = ("raise", "handler", "log")


@dataclass(frozen=True)
class GuardConfig:
    """Settings for a validator set's error policy.

    Attributes:
        error_mode: One of ``"raise"``, ``"handler"`` or ``"log"``
        custom_error_handler: Callback for ``"handler"`` mode. Supplying one
            while the mode is ``"raise"`` switches the mode to ``"handler"``;
            any other mode is rejected.
        logger_name: Logger used by ``"log"`` mode
        log_level: Level name used by ``"log"`` mode
    """

    ENV_PREFIX: ClassVar[str] = "DATAKNOBS_GUARDS_"

    error_mode: str = "raise"
    custom_error_handler: ErrorHandler | None = None
    logger_name: str = "dataknobs_guards"
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.custom_error_handler is not None and self.error_mode == "raise":
            object.__setattr__(self, "error_mode", "handler")
        if self.error_mode not in ERROR_MODES:
            raise GuardConfigError(
                f"Invalid error_mode '{self.error_mode}'. "
                f"Expected one of: {', '.join(ERROR_MODES)}",
                context={"error_mode": self.error_mode},
            )
        if self.error_mode == "handler" and self.custom_error_handler is None:
            raise GuardConfigError(
                "error_mode 'handler' requires a custom_error_handler",
                context={"error_mode": self.error_mode},
            )
        if self.custom_error_handler is not None and not callable(
            self.custom_error_handler
        ):
            raise GuardConfigError("custom_error_handler must be callable")
        if self.custom_error_handler is not None and self.error_mode != "handler":
            raise GuardConfigError(
                f"custom_error_handler cannot be used with error_mode '{self.error_mode}'",
                context={"error_mode": self.error_mode},
            )
        if not isinstance(logging.getLevelName(str(self.log_level).upper()), int):
            raise GuardConfigError(
                f"Unknown log level: {self.log_level}",
                context={"log_level": self.log_level},
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], use_env: bool = True) -> GuardConfig:
        """Create a config from a dictionary.

        Args:
            data: Configuration values keyed by field name
            use_env: Whether ``DATAKNOBS_GUARDS_*`` variables override ``data``

        Returns:
            GuardConfig object

        Raises:
            GuardConfigError: If ``data`` holds unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise GuardConfigError(
                f"Unknown configuration keys: {', '.join(unknown)}",
                context={"unknown": unknown, "known": sorted(known)},
            )
        values: Dict[str, Any] = dict(data)
        if use_env:
            values.update(cls._environment_overrides())
        return cls(**values)

    @classmethod
    def from_file(cls, path: Union[str, Path], use_env: bool = True) -> GuardConfig:
        """Create a config from a YAML or JSON file.

        Args:
            path: Path to a ``.yaml``, ``.yml`` or ``.json`` file
            use_env: Whether ``DATAKNOBS_GUARDS_*`` variables override the file

        Returns:
            GuardConfig object
        """
        path = Path(path).resolve()
        if not path.exists():
            raise GuardConfigError(
                f"Configuration file not found: {path}", context={"path": str(path)}
            )

        suffix = path.suffix.lower()
        with open(path) as f:
            if suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise GuardConfigError(
                    f"Unsupported file format: {suffix}", context={"path": str(path)}
                )

        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise GuardConfigError(
                f"Configuration file must hold a mapping: {path}",
                context={"path": str(path)},
            )
        # allow the settings to be nested under a "guards" section
        if "guards" in data and isinstance(data["guards"], Mapping):
            data = data["guards"]
        return cls.from_dict(data, use_env=use_env)

    @classmethod
    def from_env(cls) -> GuardConfig:
        """Create a config from defaults and ``DATAKNOBS_GUARDS_*`` variables."""
        return cls.from_dict({}, use_env=True)

    @classmethod
    def _environment_overrides(cls) -> Dict[str, Any]:
        overrides: Dict[str, Any] = {}
        for name in ("error_mode", "logger_name", "log_level"):
            value = os.environ.get(f"{cls.ENV_PREFIX}{name.upper()}")
            if value:
                overrides[name] = value.strip().lower() if name == "error_mode" else value
        return overrides

    def with_handler(self, handler: ErrorHandler) -> GuardConfig:
        """Return a copy of this config that sends failures to ``handler``."""
        return replace(self, error_mode="handler", custom_error_handler=handler)

    def build_handler(self) -> ErrorHandler | None:
        """Build the error handler for this config.

        Returns:
            None for ``"raise"`` mode, otherwise the handler to install
        """
        if self.error_mode == "handler":
            return self.custom_error_handler
        if self.error_mode == "log":
            return logging_error_handler(self.logger_name, self.log_level)
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Export the serializable settings as a dictionary."""
        return {
            "error_mode": self.error_mode,
            "logger_name": self.logger_name,
            "log_level": self.log_level,
        }
