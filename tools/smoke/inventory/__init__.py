# Copyright 2026 SchemaGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Small catalog the CI smoke run generates schemas for."""
