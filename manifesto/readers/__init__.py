# SPDX-FileCopyrightText: 2026 Rivos Inc.
#
# SPDX-License-Identifier: Apache-2.0

# __init__.py

from typing import Any, Dict, Optional

from manifesto.errors import ManifestSourceError
from manifesto.model import ManifestModel

from .gcfg_reader import read_gcfg_manifest
from .manifest_source import build_manifest_model
from .yaml_reader import read_yaml_manifest

yaml_source_extensions = [".yaml", ".yml"]
gcfg_source_extensions = [".mnfs"]


def read_manifest_source(
    manifest_source: str,
    schema_version: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> ManifestModel:
    """Pick the reader from the source file's extension."""
    if manifest_source.endswith(tuple(yaml_source_extensions)):
        return read_yaml_manifest(manifest_source, schema_version, overrides)
    if manifest_source.endswith(tuple(gcfg_source_extensions)):
        return read_gcfg_manifest(manifest_source, schema_version, overrides)
    raise ManifestSourceError(
        manifest_source,
        f"unknown manifest source type. Supported extensions are: {yaml_source_extensions + gcfg_source_extensions}",
    )


# PEP8 guideline:
# https://peps.python.org/pep-0008/#public-and-internal-interfaces
# To better support introspection, modules should explicitly declare
# the names in their public API using the __all__ attribute.

__all__ = [
    "build_manifest_model",
    "read_gcfg_manifest",
    "read_manifest_source",
    "read_yaml_manifest",
]
