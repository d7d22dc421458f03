# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run configuration for SchemaGen."""

from schemagen.config.settings import (
    CONFIG_FILE_NAME,
    DEFAULT_OUTPUT_DIRECTORY,
    ConfigError,
    ConfigFile,
    GeneratorConfig,
    load_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_OUTPUT_DIRECTORY",
    "ConfigError",
    "ConfigFile",
    "GeneratorConfig",
    "load_config",
]
