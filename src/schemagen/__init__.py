# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""SchemaGen: one JSON Schema document per Python data type, shaped by a fixed constraint policy."""

__version__ = "0.1.0"
