# SPDX-FileCopyrightText: 2026 Rivos Inc.
#
# SPDX-License-Identifier: Apache-2.0

import logging as log
import os
from typing import Dict, List, Optional

import yaml

from manifesto.data_structures import CStruct
from manifesto.errors import ConfigurationError

from .padding import PaddingPolicy

default_schemas_yaml = os.path.join(os.path.dirname(os.path.abspath(__file__)), "schemas.yaml")

# Fields every descriptor starts with. The compiler fills them in.
descriptor_common_fields = ["size", "type"]
string_length_field = "length"


class DescriptorKind:
    """One descriptor kind of a schema version: type code, fixed layout and flags."""

    def __init__(self, name: str, kind_data: dict) -> None:
        self.name = name

        for required_key in ["type_code", "size_in_bytes", "fields"]:
            if required_key not in kind_data:
                raise ConfigurationError(f"Descriptor kind {name} is missing {required_key}")

        self.type_code = kind_data["type_code"]
        if not isinstance(self.type_code, int) or not (0 < self.type_code <= 0xFF):
            raise ConfigurationError(
                f"Descriptor kind {name} has an invalid type code: {self.type_code}"
            )

        self.singleton = kind_data.get("singleton", False)
        self.string_payload = kind_data.get("string_payload", False)
        if self.singleton and self.string_payload:
            raise ConfigurationError(f"Descriptor kind {name} can't be a singleton string")

        self.layout = CStruct(name, kind_data["fields"])
        self.size_in_bytes = self.layout.size_in_bytes

        if self.size_in_bytes != kind_data["size_in_bytes"]:
            raise ConfigurationError(
                f"Descriptor kind {name}: declared size {kind_data['size_in_bytes']} does not match the {self.size_in_bytes} bytes of its fields"
            )

        field_names = self.layout.get_field_names()
        if field_names[: len(descriptor_common_fields)] != descriptor_common_fields:
            raise ConfigurationError(
                f"Descriptor kind {name} must start with the fields {descriptor_common_fields}"
            )
        if self.layout.get_field("size").field_type != "uint16_t":
            raise ConfigurationError(f"Descriptor kind {name}: size field must be uint16_t")
        if self.layout.get_field("type").field_type != "uint8_t":
            raise ConfigurationError(f"Descriptor kind {name}: type field must be uint8_t")

        self.computed_fields = list(descriptor_common_fields)
        if self.string_payload:
            if string_length_field not in field_names:
                raise ConfigurationError(
                    f"String descriptor kind {name} needs a {string_length_field} field"
                )
            self.computed_fields.append(string_length_field)

    def __str__(self) -> str:
        return f"DescriptorKind(name={self.name}, type_code={self.type_code}, size_in_bytes={self.size_in_bytes}, singleton={self.singleton})"

    def get_field_names(self) -> List[str]:
        return self.layout.get_field_names()

    def get_semantic_field_names(self) -> List[str]:
        """Fields supplied by the manifest source rather than the compiler."""
        return [f for f in self.layout.get_field_names() if f not in self.computed_fields]


class Schema:
    """A schema version: the descriptor kinds, their write order and the padding policy."""

    def __init__(self, version: str, schema_data: dict, header_layout: CStruct) -> None:
        self.version = version
        self.description = schema_data.get("description", "")
        self.header_layout = header_layout

        if "descriptors" not in schema_data or not isinstance(schema_data["descriptors"], dict):
            raise ConfigurationError(f"Schema {version} has no descriptors")

        self.padding_policy = PaddingPolicy.get_policy(schema_data.get("padding_policy"))

        default_version = schema_data.get("default_version", {"major": 0, "minor": 1})
        self.default_version_major = default_version["major"]
        self.default_version_minor = default_version["minor"]

        # Definition order is the order kinds are resolved in.
        self.kinds: Dict[str, DescriptorKind] = {}
        type_codes = {}
        for kind_name, kind_data in schema_data["descriptors"].items():
            kind = DescriptorKind(kind_name, kind_data)
            if kind.type_code in type_codes:
                raise ConfigurationError(
                    f"Schema {version}: kinds {type_codes[kind.type_code]} and {kind_name} share type code {kind.type_code}"
                )
            type_codes[kind.type_code] = kind_name
            self.kinds[kind_name] = kind

        singletons = [k for k in self.kinds.values() if k.singleton]
        if len(singletons) != 1:
            raise ConfigurationError(
                f"Schema {version} must have exactly one singleton descriptor kind, found {[k.name for k in singletons]}"
            )
        self.singleton_kind = singletons[0]

        string_kinds = [k for k in self.kinds.values() if k.string_payload]
        if len(string_kinds) != 1:
            raise ConfigurationError(
                f"Schema {version} must have exactly one string descriptor kind, found {[k.name for k in string_kinds]}"
            )
        self.string_kind = string_kinds[0]

        self.write_order: List[str] = list(schema_data.get("write_order", []))
        if sorted(self.write_order) != sorted(self.kinds.keys()):
            raise ConfigurationError(
                f"Schema {version}: write order {self.write_order} must list each of {list(self.kinds.keys())} once"
            )

    def __str__(self) -> str:
        return f"Schema(version={self.version}, kinds={list(self.kinds.keys())}, write_order={self.write_order}, padding_policy={self.padding_policy.value})"

    def has_kind(self, kind_name: str) -> bool:
        return kind_name in self.kinds

    def get_kind(self, kind_name: str) -> DescriptorKind:
        if kind_name not in self.kinds:
            raise ConfigurationError(
                f"Descriptor kind {kind_name} is not part of schema {self.version}. Valid kinds are: {list(self.kinds.keys())}"
            )
        return self.kinds[kind_name]

    def get_collection_kinds(self) -> List[DescriptorKind]:
        """Kinds other than the singleton and the string kind, in definition order."""
        return [
            kind
            for kind in self.kinds.values()
            if kind is not self.singleton_kind and kind is not self.string_kind
        ]


class SchemaRegistry:
    def __init__(self, schemas_yaml: str = default_schemas_yaml) -> None:
        log.debug(f"Loading manifest schemas from {schemas_yaml}")
        try:
            with open(schemas_yaml) as f:
                schemas_data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Unable to load schema registry {schemas_yaml}: {e}")

        if not isinstance(schemas_data, dict) or "schemas" not in schemas_data:
            raise ConfigurationError(f"{schemas_yaml} has no schemas")

        header_data = schemas_data.get("manifest_header")
        if header_data is None:
            raise ConfigurationError(f"{schemas_yaml} has no manifest_header layout")
        self.header_layout = CStruct("manifest_header", header_data["fields"])
        if self.header_layout.size_in_bytes != header_data["size_in_bytes"]:
            raise ConfigurationError(
                f"manifest_header: declared size {header_data['size_in_bytes']} does not match the {self.header_layout.size_in_bytes} bytes of its fields"
            )

        self.schemas: Dict[str, Schema] = {}
        for version, schema_data in schemas_data["schemas"].items():
            self.schemas[version] = Schema(version, schema_data, self.header_layout)
            log.debug(f"Loaded {self.schemas[version]}")

    def get_schema(self, version: str) -> Schema:
        if version not in self.schemas:
            raise ConfigurationError(
                f"Unknown schema version: {version}. Valid versions are: {list(self.schemas.keys())}"
            )
        return self.schemas[version]

    def list_schema_versions(self) -> List[str]:
        return list(self.schemas.keys())


_default_registry: Optional[SchemaRegistry] = None


def get_registry() -> SchemaRegistry:
    global _default_registry
    if _default_registry is None:
        _default_registry = SchemaRegistry()
    return _default_registry


def get_schema(version: str) -> Schema:
    return get_registry().get_schema(version)


def list_schema_versions() -> List[str]:
    return get_registry().list_schema_versions()
