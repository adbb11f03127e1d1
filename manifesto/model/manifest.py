# SPDX-FileCopyrightText: 2026 Rivos Inc.
#
# SPDX-License-Identifier: Apache-2.0

import logging as log
from typing import Dict, List, Optional, Union

from manifesto.errors import ConfigurationError
from manifesto.schema import DescriptorKind, Schema, get_schema

# Source field holding the contents of a string descriptor.
string_payload_field = "string"


class ManifestHeader:
    def __init__(self, version_major: int, version_minor: int) -> None:
        self.version_major = version_major
        self.version_minor = version_minor

    def __str__(self) -> str:
        return f"ManifestHeader(version={self.version_major}.{self.version_minor})"


class Descriptor:
    """A descriptor as supplied by the manifest source: semantic fields only."""

    def __init__(self, kind: DescriptorKind, name: str, fields: Dict[str, int]) -> None:
        self.kind = kind
        self.name = name
        self.fields: Dict[str, int] = {}
        self.string: Optional[bytes] = None

        fields = dict(fields)

        if kind.string_payload:
            if string_payload_field not in fields:
                raise ConfigurationError(
                    f"{kind.name} descriptor {name} is missing its {string_payload_field} value"
                )
            self.string = self._encode_string(fields.pop(string_payload_field))

        computed = [f for f in fields if f in kind.computed_fields]
        if computed:
            raise ConfigurationError(
                f"{kind.name} descriptor {name}: {computed} are computed by the compiler and can't be supplied"
            )

        semantic_field_names = kind.get_semantic_field_names()
        unknown = [f for f in fields if f not in semantic_field_names]
        if unknown:
            raise ConfigurationError(
                f"{kind.name} descriptor {name} has unknown fields {unknown}. Valid fields are: {semantic_field_names}"
            )

        # Every field is written, the ones the source leaves out are zero.
        for field_name in semantic_field_names:
            value = fields.get(field_name, 0)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigurationError(
                    f"{kind.name} descriptor {name}: field {field_name} must be an integer, got {value!r}"
                )
            self.fields[field_name] = value

    def _encode_string(self, value: Union[str, bytes]) -> bytes:
        if isinstance(value, bytes):
            return value
        if isinstance(value, str):
            return value.encode("utf-8")
        raise ConfigurationError(
            f"{self.kind.name} descriptor {self.name}: {string_payload_field} must be a string, got {value!r}"
        )

    def __str__(self) -> str:
        return f"Descriptor(kind={self.kind.name}, name={self.name}, fields={self.fields})"


class ManifestModel:
    """The descriptors of one manifest before sizes and type codes are computed."""

    def __init__(self, schema: Schema) -> None:
        self.schema = schema
        self.header = ManifestHeader(schema.default_version_major, schema.default_version_minor)
        # kind name -> descriptor name -> descriptor, in insertion order.
        self.descriptors: Dict[str, Dict[str, Descriptor]] = {
            kind_name: {} for kind_name in schema.kinds
        }

    def __str__(self) -> str:
        counts = {kind: len(descriptors) for kind, descriptors in self.descriptors.items()}
        return f"ManifestModel(schema={self.schema.version}, {self.header}, descriptors={counts})"

    def set_header_version(self, major: int, minor: int) -> None:
        for name, value in (("version_major", major), ("version_minor", minor)):
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigurationError(f"Header {name} must be an integer, got {value!r}")
        self.header.version_major = major
        self.header.version_minor = minor

    def add(self, kind: str, name: str, fields: Dict[str, int]) -> Descriptor:
        descriptor_kind = self.schema.get_kind(kind)
        descriptors = self.descriptors[kind]

        if name in descriptors:
            raise ConfigurationError(f"Duplicate {kind} descriptor: {name}")
        if descriptor_kind.singleton and len(descriptors) > 0:
            raise ConfigurationError(
                f"Only one {kind} descriptor is allowed, already have {list(descriptors.keys())[0]}"
            )

        descriptor = Descriptor(descriptor_kind, name, fields)
        descriptors[name] = descriptor
        log.debug(f"Added {descriptor}")
        return descriptor

    def get_descriptors(self, kind: str) -> List[Descriptor]:
        self.schema.get_kind(kind)
        return list(self.descriptors[kind].values())

    def get_singleton(self) -> Optional[Descriptor]:
        descriptors = self.get_descriptors(self.schema.singleton_kind.name)
        if len(descriptors) == 0:
            return None
        return descriptors[0]

    def get_num_descriptors(self) -> int:
        return sum(len(descriptors) for descriptors in self.descriptors.values())


def new_manifest(version: str) -> ManifestModel:
    return ManifestModel(get_schema(version))
