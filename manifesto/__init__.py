# SPDX-FileCopyrightText: 2026 Rivos Inc.
#
# SPDX-License-Identifier: Apache-2.0

# __init__.py

from .compiler import ResolvedManifest, compile_manifest, resolve, serialize, write_manifest
from .errors import (
    ConfigurationError,
    EncodingOverflowError,
    ManifestError,
    ManifestSourceError,
    ManifestStateError,
)
from .model import ManifestModel, new_manifest
from .readers import read_manifest_source
from .schema import PaddingPolicy, get_schema, list_schema_versions

# PEP8 guideline:
# https://peps.python.org/pep-0008/#public-and-internal-interfaces
# To better support introspection, modules should explicitly declare
# the names in their public API using the __all__ attribute.

__all__ = [
    "ConfigurationError",
    "EncodingOverflowError",
    "ManifestError",
    "ManifestModel",
    "ManifestSourceError",
    "ManifestStateError",
    "PaddingPolicy",
    "ResolvedManifest",
    "compile_manifest",
    "get_schema",
    "list_schema_versions",
    "new_manifest",
    "read_manifest_source",
    "resolve",
    "serialize",
    "write_manifest",
]
