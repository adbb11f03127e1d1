# SPDX-FileCopyrightText: 2026 Rivos Inc.
#
# SPDX-License-Identifier: Apache-2.0

# __init__.py

from .padding import STRING_ALIGNMENT_IN_BYTES, PaddingPolicy
from .registry import (
    DescriptorKind,
    Schema,
    SchemaRegistry,
    get_registry,
    get_schema,
    list_schema_versions,
)

# PEP8 guideline:
# https://peps.python.org/pep-0008/#public-and-internal-interfaces
# To better support introspection, modules should explicitly declare
# the names in their public API using the __all__ attribute.

__all__ = [
    "DescriptorKind",
    "PaddingPolicy",
    "Schema",
    "SchemaRegistry",
    "STRING_ALIGNMENT_IN_BYTES",
    "get_registry",
    "get_schema",
    "list_schema_versions",
]
