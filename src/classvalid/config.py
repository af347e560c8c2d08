# Copyright 2026 classvalid Contributors
# SPDX-License-Identifier: Apache-2.0

"""YAML loader for default validation options.

Example file::

    allow-unknown: true
    convert: false
"""

from __future__ import annotations

from pathlib import Path

import yaml

from classvalid.schema import ValidationOptions

# ###############
# Public Interface
# ###############


class ConfigError(Exception):
    """Raised when a validation options file is invalid or cannot be loaded."""


def load_validation_options(path: Path) -> ValidationOptions:
    """Load validation options from a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        The options; keys absent from the file keep their defaults and are not
        considered explicitly set.

    Raises:
        ConfigError: If the file cannot be read or its content is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Validation options file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read validation options file: {exc}") from exc

    return parse_validation_options(text, source_label=str(path))


def parse_validation_options(text: str, source_label: str = "<string>") -> ValidationOptions:
    """Parse YAML text into validation options.

    Args:
        text: Raw YAML content; a mapping of kebab-case option names to booleans.
        source_label: Human-readable label used in error messages (e.g. the file path).

    Returns:
        The parsed options.

    Raises:
        ConfigError: If the YAML is invalid, not a mapping, or holds unknown keys or non-boolean values.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: validation options must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in _OPTION_KEYS)
    if unknown:
        raise ConfigError(f"{source_label}: unknown option(s) {', '.join(repr(key) for key in unknown)}")

    values = {_OPTION_KEYS[key]: _require_bool(data, key, source_label) for key in data}
    return ValidationOptions(**values)


# ################
# Implementation
# ################

_OPTION_KEYS = {
    "allow-unknown": "allow_unknown",
    "strip-unknown": "strip_unknown",
    "convert": "convert",
    "abort-early": "abort_early",
}


def _require_bool(mapping: dict[str, object], key: str, source_label: str) -> bool:
    """Extract a boolean option from a mapping, raising ConfigError for other types."""
    value = mapping[key]
    if not isinstance(value, bool):
        raise ConfigError(f"{source_label}: '{key}' must be a boolean")
    return value
