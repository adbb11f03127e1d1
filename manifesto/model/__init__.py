# SPDX-FileCopyrightText: 2026 Rivos Inc.
#
# SPDX-License-Identifier: Apache-2.0

# __init__.py

from .manifest import Descriptor, ManifestHeader, ManifestModel, new_manifest

# PEP8 guideline:
# https://peps.python.org/pep-0008/#public-and-internal-interfaces
# To better support introspection, modules should explicitly declare
# the names in their public API using the __all__ attribute.

__all__ = ["Descriptor", "ManifestHeader", "ManifestModel", "new_manifest"]
