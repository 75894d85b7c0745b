"""Tool settings loading and validation.

Settings start from environment-derived defaults and may be overridden by a
YAML or JSON settings file. Command-line flags are applied last by the CLI.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from core.errors import ConfigValidationError

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class ToolSettings:
    """Effective settings for one generator run."""

    output_folder: str
    min_acl: str
    skip_unbalanced: bool
    sourcekitten_path: str
    swiftformat_path: str
    swiftformat_args: tuple[str, ...] = ()
    timeout_s: int = 600


def env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


def env_int(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back on bad input."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r; using %d", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%r; using %d", name, raw, default)
        return default
    return value


def _load_settings_payload(path: str) -> dict[str, Any]:
    settings_path = Path(path)
    if not settings_path.is_file():
        raise ConfigValidationError(f"Settings file not found: {settings_path}")

    text = settings_path.read_text(encoding="utf-8")
    try:
        if settings_path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigValidationError(
            f"Failed to parse settings file {settings_path}: {exc}"
        ) from exc

    if payload is None:
        logger.warning("Settings file %s is empty; using defaults", settings_path)
        return {}
    if not isinstance(payload, dict):
        raise ConfigValidationError(
            f"Settings file must contain a mapping, got {type(payload).__name__}"
        )
    return payload


def _coerce_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigValidationError(f"'{key}' must be a boolean, got {value!r}")


def _coerce_str(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ConfigValidationError(f"'{key}' must be a string, got {value!r}")
    return value.strip()


def _coerce_args(key: str, value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return tuple(value.split())
    if not isinstance(value, list):
        raise ConfigValidationError(f"'{key}' must be a list of strings")
    for item in value:
        if not isinstance(item, str):
            raise ConfigValidationError(
                f"'{key}' must be a list of strings, got {item!r}"
            )
    return tuple(value)


def _coerce_timeout(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigValidationError(f"'{key}' must be a positive integer")
    try:
        timeout = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigValidationError(f"'{key}' must be a positive integer") from exc
    if timeout <= 0:
        raise ConfigValidationError(f"'{key}' must be a positive integer")
    return timeout


_COERCERS = {
    "output_folder": _coerce_str,
    "min_acl": _coerce_str,
    "skip_unbalanced": _coerce_bool,
    "sourcekitten_path": _coerce_str,
    "swiftformat_path": _coerce_str,
    "swiftformat_args": _coerce_args,
    "timeout_s": _coerce_timeout,
}


def load_settings(path: str | None, defaults: ToolSettings) -> ToolSettings:
    """Return ``defaults`` overridden by the settings file at ``path``.

    Unknown keys are rejected so that typos do not silently fall back to
    defaults.
    """
    if not path:
        return defaults

    payload = _load_settings_payload(path)
    non_string = [key for key in payload if not isinstance(key, str)]
    if non_string:
        raise ConfigValidationError(
            "Setting names must be strings: "
            + ", ".join(repr(key) for key in non_string)
        )
    unknown = sorted(set(payload) - set(_COERCERS))
    if unknown:
        raise ConfigValidationError("Unknown settings: " + ", ".join(unknown))

    overrides = {key: _COERCERS[key](key, value) for key, value in payload.items()}
    for key in ("sourcekitten_path", "swiftformat_path"):
        if key in overrides and not overrides[key]:
            raise ConfigValidationError(f"'{key}' must not be empty")

    logger.info("Loaded settings from %s (%d overrides)", path, len(overrides))
    return dataclasses.replace(defaults, **overrides)
