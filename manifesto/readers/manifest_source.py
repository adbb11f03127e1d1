# SPDX-FileCopyrightText: 2026 Rivos Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""Builds a ManifestModel from the section dictionary every reader produces.

Layout of the dictionary:

    schema: <schema version>                      (optional)
    manifest_header: {version_major: ..., version_minor: ...}
    <kind>_descriptor: {<field>: <value>, ...}    for the singleton kind
    <kind>_descriptor:                            for the collection kinds
      <descriptor name>: {<field>: <value>, ...}
"""

import logging as log
from typing import Any, Dict, Optional

from manifesto.data_structures import DictUtils
from manifesto.errors import ManifestSourceError
from manifesto.model import ManifestModel, new_manifest
from manifesto.model.manifest import string_payload_field

schema_key = "schema"
header_section = "manifest_header"
descriptor_section_suffix = "_descriptor"
header_version_fields = ["version_major", "version_minor"]


def parse_int_value(value: Any, source: str, where: str) -> int:
    if isinstance(value, bool):
        raise ManifestSourceError(source, f"{where}: expected an integer, got {value}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        try:
            if text.startswith("0x"):
                return int(text, 16)
            elif text.startswith("0b"):
                return int(text, 2)
            elif text.isnumeric():
                return int(text)
        except ValueError:
            pass
    raise ManifestSourceError(source, f"{where}: invalid integer value {value!r}")


def _stringify_keys(data: Any, source: str, where: str) -> Any:
    # YAML turns keys like `1:` into ints; sections, descriptor names and field
    # names are strings everywhere else, overrides included.
    if not isinstance(data, dict):
        return data

    stringified = {}
    for key, value in data.items():
        name = str(key)
        if name in stringified:
            raise ManifestSourceError(source, f"{where or 'top level'}: duplicate key {name}")
        stringified[name] = _stringify_keys(value, source, f"{where}.{name}" if where else name)
    return stringified


def _parse_fields(fields: Any, source: str, where: str) -> Dict[str, Any]:
    if fields is None:
        return {}
    if not isinstance(fields, dict):
        raise ManifestSourceError(source, f"{where}: expected a mapping of fields, got {fields!r}")

    parsed = {}
    for field_name, value in fields.items():
        field_name = str(field_name)
        if field_name == string_payload_field:
            if isinstance(value, (int, float)):
                value = str(value)
            parsed[field_name] = value
        else:
            parsed[field_name] = parse_int_value(value, source, f"{where}.{field_name}")
    return parsed


def build_manifest_model(
    source_data: Dict[str, Any],
    schema_version: Optional[str],
    source: str,
    overrides: Optional[Dict[str, Any]] = None,
) -> ManifestModel:
    source_data = _stringify_keys(source_data, source, "")

    if overrides:
        try:
            DictUtils.override_dict(source_data, overrides)
        except ValueError as e:
            raise ManifestSourceError(source, str(e))

    if schema_version is None:
        schema_version = source_data.get(schema_key)
    if schema_version is None:
        raise ManifestSourceError(
            source, f"no schema version given and the source has no {schema_key} key"
        )

    model = new_manifest(str(schema_version))
    log.debug(f"Building {schema_version} manifest from {source}")

    for section, section_data in source_data.items():
        if section == schema_key:
            continue

        if section == header_section:
            header = _parse_fields(section_data, source, section)
            unknown = [f for f in header if f not in header_version_fields]
            if unknown:
                raise ManifestSourceError(source, f"{section} has unknown fields {unknown}")
            model.set_header_version(
                header.get("version_major", model.header.version_major),
                header.get("version_minor", model.header.version_minor),
            )
            continue

        if not section.endswith(descriptor_section_suffix):
            raise ManifestSourceError(source, f"unknown section {section}")

        kind = model.schema.get_kind(section[: -len(descriptor_section_suffix)])
        if kind.singleton:
            model.add(kind.name, kind.name, _parse_fields(section_data, source, section))
            continue

        if section_data is None:
            continue
        if not isinstance(section_data, dict):
            raise ManifestSourceError(
                source, f"{section}: expected a mapping of descriptor names to fields"
            )
        for name, fields in section_data.items():
            model.add(kind.name, str(name), _parse_fields(fields, source, f"{section}.{name}"))

    return model
