# SPDX-FileCopyrightText: 2026 Rivos Inc.
#
# SPDX-License-Identifier: Apache-2.0

import logging as log
from typing import Dict, Iterator, List

from manifesto.errors import ConfigurationError, EncodingOverflowError, ManifestStateError
from manifesto.model import Descriptor, ManifestModel
from manifesto.schema import DescriptorKind, Schema
from manifesto.schema.registry import string_length_field


class ResolvedHeader:
    def __init__(self, total_size: int, version_major: int, version_minor: int) -> None:
        self.total_size = total_size
        self.version_major = version_major
        self.version_minor = version_minor

    def __str__(self) -> str:
        return f"ResolvedHeader(total_size={self.total_size}, version={self.version_major}.{self.version_minor})"

    def get_values(self) -> Dict[str, int]:
        return {
            "size": self.total_size,
            "version_major": self.version_major,
            "version_minor": self.version_minor,
        }


class ResolvedDescriptor:
    """A descriptor with every field of its layout filled in."""

    def __init__(
        self, kind: DescriptorKind, name: str, values: Dict[str, int], payload: bytes = b""
    ) -> None:
        self.kind = kind
        self.name = name
        # Field name -> value, in layout order.
        self.values = values
        self.payload = payload

    @property
    def size(self) -> int:
        return self.values["size"]

    @property
    def type_code(self) -> int:
        return self.values["type"]

    def __str__(self) -> str:
        return f"ResolvedDescriptor(kind={self.kind.name}, name={self.name}, size={self.size}, type={self.type_code})"


class ResolvedManifest:
    def __init__(
        self,
        schema: Schema,
        header: ResolvedHeader,
        descriptors: Dict[str, List[ResolvedDescriptor]],
    ) -> None:
        self.schema = schema
        self.header = header
        self.descriptors = descriptors

    def __str__(self) -> str:
        return f"ResolvedManifest(schema={self.schema.version}, {self.header})"

    def get_descriptors(self, kind: str) -> List[ResolvedDescriptor]:
        self.schema.get_kind(kind)
        return self.descriptors.get(kind, [])

    def iter_descriptors_in_write_order(self) -> Iterator[ResolvedDescriptor]:
        for kind_name in self.schema.write_order:
            for descriptor in self.get_descriptors(kind_name):
                yield descriptor


def _resolve_fixed_descriptor(descriptor: Descriptor) -> ResolvedDescriptor:
    kind = descriptor.kind
    values = {"size": kind.size_in_bytes, "type": kind.type_code}
    values.update(descriptor.fields)
    return ResolvedDescriptor(kind, descriptor.name, _order_and_check(kind, descriptor, values))


def _resolve_string_descriptor(schema: Schema, descriptor: Descriptor) -> ResolvedDescriptor:
    kind = descriptor.kind
    raw_length = len(descriptor.string)

    length_field = kind.layout.get_field(string_length_field)
    if raw_length > length_field.max_value():
        raise EncodingOverflowError(
            f"{kind.name} descriptor {descriptor.name}: string is {raw_length} bytes, the {string_length_field} field holds at most {length_field.max_value()}"
        )

    payload = schema.padding_policy.pad(kind.size_in_bytes, descriptor.string)
    log.debug(
        f"{kind.name} descriptor {descriptor.name}: {raw_length} bytes padded to {len(payload)} ({schema.padding_policy.value})"
    )

    values = {
        "size": kind.size_in_bytes + len(payload),
        "type": kind.type_code,
        string_length_field: raw_length,
    }
    values.update(descriptor.fields)
    return ResolvedDescriptor(
        kind, descriptor.name, _order_and_check(kind, descriptor, values), payload
    )


def _order_and_check(kind: DescriptorKind, descriptor: Descriptor, values: Dict[str, int]):
    where = f"{kind.name} descriptor {descriptor.name}"
    ordered_values = {}
    for field in kind.layout.fields:
        value = values[field.name]
        field.check_value(value, where)
        ordered_values[field.name] = value
    return ordered_values


def resolve(model: ManifestModel) -> ResolvedManifest:
    """Compute the type code and size of every descriptor and the manifest's total size.

    The model is left untouched: resolving it again gives the same result. A
    manifest that has already been resolved is rejected.
    """
    if isinstance(model, ResolvedManifest):
        raise ManifestStateError(f"{model} has already been resolved")
    if not isinstance(model, ManifestModel):
        raise ManifestStateError(f"Expected a ManifestModel, got {type(model).__name__}")

    schema = model.schema
    log.debug(f"Resolving {model}")

    total_size = 0
    resolved: Dict[str, List[ResolvedDescriptor]] = {}

    singleton = model.get_singleton()
    if singleton is None:
        raise ConfigurationError(
            f"Manifest has no {schema.singleton_kind.name} descriptor (schema {schema.version})"
        )
    resolved_singleton = _resolve_fixed_descriptor(singleton)
    resolved[schema.singleton_kind.name] = [resolved_singleton]
    total_size += resolved_singleton.size

    resolved[schema.string_kind.name] = []
    for descriptor in model.get_descriptors(schema.string_kind.name):
        resolved_string = _resolve_string_descriptor(schema, descriptor)
        resolved[schema.string_kind.name].append(resolved_string)
        total_size += resolved_string.size

    for kind in schema.get_collection_kinds():
        resolved[kind.name] = []
        for descriptor in model.get_descriptors(kind.name):
            resolved_descriptor = _resolve_fixed_descriptor(descriptor)
            resolved[kind.name].append(resolved_descriptor)
            total_size += resolved_descriptor.size

    header = ResolvedHeader(
        schema.header_layout.size_in_bytes + total_size,
        model.header.version_major,
        model.header.version_minor,
    )
    header_values = header.get_values()
    for field in schema.header_layout.fields:
        field.check_value(header_values[field.name], "Manifest header")

    log.debug(f"Resolved {model.get_num_descriptors()} descriptors: {header}")
    return ResolvedManifest(schema, header, resolved)
