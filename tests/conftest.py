# SPDX-FileCopyrightText: 2026 Rivos Inc.
#
# SPDX-License-Identifier: Apache-2.0

import textwrap

import pytest

from manifesto.model import new_manifest

MODULE_FIELDS = {
    "vendor": 0xFFFF,
    "product": 0x0001,
    "version": 0x0002,
    "vendor_string_id": 1,
    "product_string_id": 2,
    "unique_id": 0x0123456789ABCDEF,
}

INTERFACE_FIELDS = {
    "id": 0,
    "vendor": 0x1234,
    "product": 0x5678,
    "version": 0x0100,
    "vendor_string_id": 1,
    "product_string_id": 2,
    "serial_string_id": 0,
    "unique_id": 0xDEADBEEF,
}


@pytest.fixture
def module_manifest():
    """Module schema manifest with the module descriptor and the string "ab"."""
    model = new_manifest("module")
    model.add("module", "module", MODULE_FIELDS)
    model.add("string", "vendor", {"id": 1, "string": "ab"})
    return model


@pytest.fixture
def interface_manifest():
    model = new_manifest("interface_bundle")
    model.add("interface", "interface", INTERFACE_FIELDS)
    return model


@pytest.fixture
def write_source(tmp_path):
    """Writes a dedented manifest source into tmp_path and returns its path."""

    def _write_source(file_name, text):
        path = tmp_path / file_name
        path.write_text(textwrap.dedent(text))
        return str(path)

    return _write_source
