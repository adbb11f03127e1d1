# SPDX-FileCopyrightText: 2026 Rivos Inc.
#
# SPDX-License-Identifier: Apache-2.0

import logging as log
import struct
from typing import BinaryIO

from manifesto.errors import ManifestStateError
from manifesto.model import ManifestModel

from .resolver import ResolvedDescriptor, ResolvedManifest, resolve


def _pack_descriptor(descriptor: ResolvedDescriptor) -> bytes:
    layout = descriptor.kind.layout
    fixed = struct.pack(layout.get_struct_format(), *descriptor.values.values())
    # The string payload goes out verbatim after the fixed fields.
    return fixed + descriptor.payload


def serialize(manifest: ResolvedManifest) -> bytes:
    """Encode a resolved manifest: header first, then every descriptor group in write order."""
    if isinstance(manifest, ManifestModel):
        raise ManifestStateError(f"{manifest} must be resolved before it is serialized")
    if not isinstance(manifest, ResolvedManifest):
        raise ManifestStateError(f"Expected a ResolvedManifest, got {type(manifest).__name__}")

    header_layout = manifest.schema.header_layout
    header_values = manifest.header.get_values()
    chunks = [
        struct.pack(
            header_layout.get_struct_format(),
            *[header_values[field_name] for field_name in header_layout.get_field_names()],
        )
    ]

    for descriptor in manifest.iter_descriptors_in_write_order():
        packed = _pack_descriptor(descriptor)
        if len(packed) != descriptor.size:
            raise ManifestStateError(
                f"{descriptor} encoded to {len(packed)} bytes instead of {descriptor.size}"
            )
        chunks.append(packed)

    blob = b"".join(chunks)
    if len(blob) != manifest.header.total_size:
        raise ManifestStateError(
            f"Manifest encoded to {len(blob)} bytes but its header says {manifest.header.total_size}"
        )

    log.debug(f"Serialized {manifest}: {len(blob)} bytes")
    return blob


def write_manifest(manifest: ResolvedManifest, sink: BinaryIO) -> int:
    """Serialize the manifest completely, then write it to sink. Returns the bytes written."""
    blob = serialize(manifest)
    sink.write(blob)
    return len(blob)


def compile_manifest(model: ManifestModel) -> bytes:
    return serialize(resolve(model))
