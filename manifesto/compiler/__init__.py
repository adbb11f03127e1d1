# SPDX-FileCopyrightText: 2026 Rivos Inc.
#
# SPDX-License-Identifier: Apache-2.0

# __init__.py

from .resolver import ResolvedDescriptor, ResolvedHeader, ResolvedManifest, resolve
from .serializer import compile_manifest, serialize, write_manifest

# PEP8 guideline:
# https://peps.python.org/pep-0008/#public-and-internal-interfaces
# To better support introspection, modules should explicitly declare
# the names in their public API using the __all__ attribute.

__all__ = [
    "ResolvedDescriptor",
    "ResolvedHeader",
    "ResolvedManifest",
    "compile_manifest",
    "resolve",
    "serialize",
    "write_manifest",
]
