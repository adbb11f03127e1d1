# SPDX-FileCopyrightText: 2026 Rivos Inc.
#
# SPDX-License-Identifier: Apache-2.0

import logging as log
from typing import Any, Dict, Optional

import yaml

from manifesto.errors import ManifestSourceError
from manifesto.model import ManifestModel

from .manifest_source import build_manifest_model


def read_yaml_manifest(
    manifest_yaml: str,
    schema_version: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> ManifestModel:
    log.debug(f"Reading YAML manifest source {manifest_yaml}")

    try:
        with open(manifest_yaml) as f:
            source_data = yaml.safe_load(f)
    except OSError as e:
        raise ManifestSourceError(manifest_yaml, f"unable to read: {e}")
    except yaml.YAMLError as e:
        raise ManifestSourceError(manifest_yaml, f"invalid YAML: {e}")

    if source_data is None:
        source_data = {}
    if not isinstance(source_data, dict):
        raise ManifestSourceError(manifest_yaml, "top level must be a mapping of sections")

    return build_manifest_model(source_data, schema_version, manifest_yaml, overrides)
