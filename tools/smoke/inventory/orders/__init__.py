# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0
