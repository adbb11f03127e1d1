# SPDX-FileCopyrightText: 2026 Rivos Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""Reader for manifest sources in git-config syntax.

    [manifest-header]
    version-major = 0
    version-minor = 1

    [module-descriptor]
    vendor = 0xffff

    [string-descriptor "1"]
    id = 1
    string = "Project Ara"
"""

import configparser
import logging as log
import re
from typing import Any, Dict, Optional

from manifesto.errors import ManifestSourceError
from manifesto.model import ManifestModel

from .manifest_source import build_manifest_model

# .mnfs sources describe module schema manifests unless told otherwise.
default_gcfg_schema_version = "module"

section_name_regex = re.compile(r'^\s*([A-Za-z][\w-]*)\s*(?:"((?:[^"\\]|\\.)*)")?\s*$')

escape_sequences = {"n": "\n", "t": "\t", '"': '"', "\\": "\\"}
comment_prefixes = ("#", ";")


def normalize_name(name: str) -> str:
    return name.strip().lower().replace("-", "_")


def unquote_value(value: str) -> str:
    """Decode a gcfg value: quoted parts, backslash escapes and trailing comments.

    A '#' or ';' outside double quotes starts a comment. Whitespace is kept
    inside quotes and stripped from the unquoted ends.
    """
    out = []
    # Characters up to keep survive the trailing whitespace strip.
    keep = 0
    in_quotes = False
    value = value.strip()
    i = 0
    while i < len(value):
        ch = value[i]
        if ch == "\\" and i + 1 < len(value):
            i += 1
            out.append(escape_sequences.get(value[i], value[i]))
            keep = len(out)
        elif ch == '"':
            in_quotes = not in_quotes
            keep = len(out)
        elif ch in comment_prefixes and not in_quotes:
            break
        else:
            out.append(ch)
            if in_quotes or not ch.isspace():
                keep = len(out)
        i += 1
    return "".join(out[:keep])


def _parse_gcfg(manifest_gcfg: str) -> Dict[str, Any]:
    parser = configparser.ConfigParser(
        delimiters=("=",),
        comment_prefixes=comment_prefixes,
        # Comments after a value are stripped by unquote_value, outside quotes only.
        inline_comment_prefixes=None,
        interpolation=None,
        strict=True,
        default_section="__gcfg_default__",
    )
    parser.optionxform = normalize_name

    try:
        with open(manifest_gcfg) as f:
            parser.read_file(f, source=manifest_gcfg)
    except OSError as e:
        raise ManifestSourceError(manifest_gcfg, f"unable to read: {e}")
    except configparser.Error as e:
        raise ManifestSourceError(manifest_gcfg, f"invalid syntax: {e}")

    source_data: Dict[str, Any] = {}
    for section in parser.sections():
        match = section_name_regex.match(section)
        if match is None:
            raise ManifestSourceError(manifest_gcfg, f"invalid section name [{section}]")

        section_name = normalize_name(match.group(1))
        subsection = match.group(2)
        fields = {key: unquote_value(value) for key, value in parser.items(section)}

        if subsection is None:
            if section_name in source_data:
                raise ManifestSourceError(manifest_gcfg, f"duplicate section [{section}]")
            source_data[section_name] = fields
            continue

        subsection = unquote_value(f'"{subsection}"')
        descriptors = source_data.setdefault(section_name, {})
        if subsection in descriptors:
            raise ManifestSourceError(manifest_gcfg, f"duplicate section [{section}]")
        descriptors[subsection] = fields

    return source_data


def read_gcfg_manifest(
    manifest_gcfg: str,
    schema_version: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> ManifestModel:
    log.debug(f"Reading gcfg manifest source {manifest_gcfg}")

    source_data = _parse_gcfg(manifest_gcfg)
    if schema_version is None:
        schema_version = default_gcfg_schema_version

    return build_manifest_model(source_data, schema_version, manifest_gcfg, overrides)
