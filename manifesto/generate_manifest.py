#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2026 Rivos Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""Generates a binary module manifest (.mnfb) from a manifest source file."""

import argparse
import logging as log
import os
import sys

from manifesto.compiler import resolve, serialize
from manifesto.data_structures import DictUtils
from manifesto.errors import ManifestError
from manifesto.readers import read_manifest_source
from manifesto.schema import get_schema, list_schema_versions

binary_manifest_extension = ".mnfb"


def get_default_output_file(manifest_source):
    basename = os.path.splitext(manifest_source)[0]
    return basename + binary_manifest_extension


def generate_manifest(
    manifest_source,
    output_file=None,
    schema_version=None,
    override_manifest_attributes=None,
):
    overrides = None
    if override_manifest_attributes:
        overrides = DictUtils.create_dict(override_manifest_attributes)

    model = read_manifest_source(manifest_source, schema_version, overrides)
    resolved = resolve(model)
    log.debug(f"Resolved {resolved} from {manifest_source}")

    if output_file is None:
        output_file = get_default_output_file(manifest_source)

    blob = serialize(resolved)
    write_output_file(output_file, blob)

    log.info(
        f"Wrote {len(blob)} byte {resolved.schema.version} manifest v{resolved.header.version_major}.{resolved.header.version_minor} to {output_file}"
    )
    return output_file


def write_output_file(output_file, blob):
    # A failed write leaves no output file behind.
    try:
        with open(output_file, "wb") as f:
            f.write(blob)
    except OSError:
        if os.path.isfile(output_file):
            log.debug(f"Removing partially written {output_file}")
            os.remove(output_file)
        raise


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "manifest_source",
        help="Manifest source file (.yaml, .yml or .mnfs).",
        nargs="?",
        default=None,
    )
    parser.add_argument(
        "--schema",
        help="Schema version of the manifest. Overrides the schema named in the source.",
        required=False,
        choices=list_schema_versions(),
        default=None,
    )
    parser.add_argument(
        "--output",
        help=f"Binary manifest to write. Defaults to the source path with a {binary_manifest_extension} extension.",
        required=False,
        type=str,
        default=None,
    )
    parser.add_argument(
        "--override_manifest_attributes",
        help="Overrides manifest source attributes: section.field=value or section.name.field=value.",
        required=False,
        nargs="+",
        default=None,
    )
    parser.add_argument(
        "--list_schemas",
        help="List the supported schema versions and exit.",
        action="store_true",
        default=False,
    )
    parser.add_argument(
        "-v", "--verbose", help="Verbose output.", action="store_true", default=False
    )
    args = parser.parse_args(argv)

    if args.verbose:
        log.basicConfig(format="%(levelname)s: [%(threadName)s]: %(message)s", level=log.DEBUG)
    else:
        log.basicConfig(format="%(levelname)s: [%(threadName)s]: %(message)s", level=log.INFO)

    if args.list_schemas:
        for version in list_schema_versions():
            print(f"{version}: {get_schema(version).description}")
        return 0

    if args.manifest_source is None:
        parser.error("the manifest_source argument is required")

    if os.path.exists(args.manifest_source) is False:
        log.error(f"Manifest source {args.manifest_source} not found")
        return 1

    try:
        generate_manifest(
            args.manifest_source,
            args.output,
            args.schema,
            args.override_manifest_attributes,
        )
    except ManifestError as e:
        log.error(f"Failed to generate manifest: {e}")
        return 1
    except (OSError, ValueError) as e:
        log.error(f"Failed to generate manifest from {args.manifest_source}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
