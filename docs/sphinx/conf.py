# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for SchemaGen documentation."""

project = "SchemaGen"
author = "SchemaGen Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc"]

html_theme = "alabaster"
