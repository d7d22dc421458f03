# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the SchemaGen configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".schemagen.yaml"
DEFAULT_OUTPUT_DIRECTORY = "json-schemes/output"


class ConfigError(Exception):
    """Raised when a configuration file is invalid or cannot be loaded."""


@dataclass
class GeneratorConfig:
    """Settings for one generation run.

    Attributes:
        root_package: Dotted name of the package whose types are scanned.
        output_directory: Directory the schema tree is written to.
        classpath: Additional import roots searched for the root package.
        fail_fast: Abort on the first type that fails instead of continuing.
    """

    root_package: str
    output_directory: str = DEFAULT_OUTPUT_DIRECTORY
    classpath: list[str] = field(default_factory=list)
    fail_fast: bool = False


@dataclass
class ConfigFile:
    """The optional values read from a configuration file.

    Every attribute is ``None`` when the file does not set it, so command line
    values can be layered on top.
    """

    root_package: str | None = None
    output_directory: str | None = None
    classpath: list[str] | None = None
    fail_fast: bool | None = None


def load_config(path: Path) -> ConfigFile:
    """Load and parse a SchemaGen configuration file.

    Args:
        path: Path to the `.schemagen.yaml` file.

    Returns:
        A ConfigFile populated from the file.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return _parse_config(text, source_label=str(path))


# ################
# Implementation
# ################

_KNOWN_KEYS = {"root-package", "output-directory", "classpath", "fail-fast"}


def _parse_config(text: str, source_label: str = "<string>") -> ConfigFile:
    """Parse config YAML text into a ConfigFile.

    An empty document yields a ConfigFile with every value unset.

    Raises:
        ConfigError: If the YAML is invalid or a value has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return ConfigFile()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: config must be a YAML mapping")

    unknown = sorted(str(key) for key in set(data) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"{source_label}: unknown key(s): {', '.join(unknown)}")

    return ConfigFile(
        root_package=_optional_string(data, "root-package", source_label),
        output_directory=_optional_string(data, "output-directory", source_label),
        classpath=_optional_string_list(data, "classpath", source_label),
        fail_fast=_optional_bool(data, "fail-fast", source_label),
    )


def _optional_string(mapping: dict[str, object], key: str, source_label: str) -> str | None:
    """Extract an optional string field, raising ConfigError on a wrong type."""
    if key not in mapping:
        return None
    value = mapping[key]
    if not isinstance(value, str):
        raise ConfigError(f"{source_label}: '{key}' must be a string")
    return value


def _optional_string_list(mapping: dict[str, object], key: str, source_label: str) -> list[str] | None:
    if key not in mapping:
        return None
    value = mapping[key]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{source_label}: '{key}' must be a list of strings")
    return list(value)


def _optional_bool(mapping: dict[str, object], key: str, source_label: str) -> bool | None:
    if key not in mapping:
        return None
    value = mapping[key]
    if not isinstance(value, bool):
        raise ConfigError(f"{source_label}: '{key}' must be true or false")
    return value
