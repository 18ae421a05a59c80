"""SQLFront configuration.

Settings can come from keyword arguments, a YAML file or environment
variables:

    encoding: utf-8
    allow_unterminated_strings: false
    indent_width: 4
    log_level: WARNING
"""

from __future__ import annotations

import codecs
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")
_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


class ConfigError(ValueError):
    """Invalid configuration value or file."""


@dataclass
class ParserConfig:
    """Configuration for tokenizing, parsing and printing."""
    encoding: str = "utf-8"
    allow_unterminated_strings: bool = False
    indent_width: int = 4
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        try:
            codecs.lookup(self.encoding)
        except (LookupError, TypeError) as e:
            raise ConfigError(f"Unknown encoding: {self.encoding!r}") from e
        if not isinstance(self.allow_unterminated_strings, bool):
            raise ConfigError(
                f"allow_unterminated_strings must be a boolean, got {self.allow_unterminated_strings!r}"
            )
        if not isinstance(self.indent_width, int) or self.indent_width <= 0:
            raise ConfigError(f"indent_width must be a positive integer, got {self.indent_width!r}")
        level = str(self.log_level).upper()
        if level not in _LOG_LEVELS:
            raise ConfigError(f"Unknown log level: {self.log_level}")
        self.log_level = level

    @property
    def indent(self) -> str:
        return " " * self.indent_width

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ParserConfig":
        """Build a config from a mapping, rejecting unknown keys."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "ParserConfig":
        """Load configuration from YAML file."""
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        logger.debug(f"Loaded configuration from {path}")
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ParserConfig":
        """Load configuration from SQLFRONT_* environment variables."""
        env = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        if "SQLFRONT_ENCODING" in env:
            data["encoding"] = env["SQLFRONT_ENCODING"]
        if "SQLFRONT_ALLOW_UNTERMINATED_STRINGS" in env:
            data["allow_unterminated_strings"] = _parse_bool(
                "SQLFRONT_ALLOW_UNTERMINATED_STRINGS", env["SQLFRONT_ALLOW_UNTERMINATED_STRINGS"]
            )
        if "SQLFRONT_INDENT_WIDTH" in env:
            try:
                data["indent_width"] = int(env["SQLFRONT_INDENT_WIDTH"])
            except ValueError as e:
                raise ConfigError(f"SQLFRONT_INDENT_WIDTH must be an integer: {e}") from e
        if "SQLFRONT_LOG_LEVEL" in env:
            data["log_level"] = env["SQLFRONT_LOG_LEVEL"]
        return cls(**data)


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


__all__ = ["ConfigError", "ParserConfig"]
