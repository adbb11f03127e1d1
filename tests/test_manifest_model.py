# SPDX-FileCopyrightText: 2026 Rivos Inc.
#
# SPDX-License-Identifier: Apache-2.0

import pytest

from manifesto.errors import ConfigurationError
from manifesto.model import ManifestModel, new_manifest

from .conftest import MODULE_FIELDS


def test_new_manifest_starts_empty():
    model = new_manifest("module")
    assert isinstance(model, ManifestModel)
    assert model.schema.version == "module"
    assert model.get_num_descriptors() == 0
    assert model.get_singleton() is None
    assert (model.header.version_major, model.header.version_minor) == (0, 1)


def test_add_fills_missing_fields_with_zero():
    model = new_manifest("module")
    cport = model.add("cport", "cport0", {"id": 3})
    assert cport.fields == {"interface": 0, "id": 3, "protocol": 0}


def test_add_keeps_insertion_order():
    model = new_manifest("module")
    for name in ["zeta", "alpha", "mid"]:
        model.add("cport", name, {"id": 1})
    assert [d.name for d in model.get_descriptors("cport")] == ["zeta", "alpha", "mid"]


def test_string_descriptor_payload_is_utf8():
    model = new_manifest("module")
    string = model.add("string", "s", {"id": 1, "string": "é"})
    assert string.string == b"\xc3\xa9"
    assert string.fields == {"id": 1}


def test_string_descriptor_accepts_bytes():
    model = new_manifest("module")
    assert model.add("string", "s", {"id": 1, "string": b"\x01\x02"}).string == b"\x01\x02"


def test_duplicate_name_within_a_kind_is_rejected():
    model = new_manifest("module")
    model.add("cport", "cport0", {"id": 1})
    with pytest.raises(ConfigurationError, match="Duplicate cport descriptor"):
        model.add("cport", "cport0", {"id": 2})


def test_same_name_in_different_kinds_is_allowed():
    model = new_manifest("module")
    model.add("cport", "one", {"id": 1})
    model.add("interface", "one", {"id": 1})
    assert model.get_num_descriptors() == 2


def test_second_singleton_is_rejected():
    model = new_manifest("module")
    model.add("module", "module", MODULE_FIELDS)
    with pytest.raises(ConfigurationError, match="Only one module descriptor"):
        model.add("module", "other", MODULE_FIELDS)


def test_unknown_kind_is_rejected():
    model = new_manifest("interface_bundle_noclass")
    with pytest.raises(ConfigurationError, match="class is not part of schema"):
        model.add("class", "c0", {"class": 1})
    assert model.get_num_descriptors() == 0


def test_unknown_field_is_rejected():
    model = new_manifest("module")
    with pytest.raises(ConfigurationError, match="unknown fields"):
        model.add("cport", "cport0", {"id": 1, "bundle": 2})


@pytest.mark.parametrize("field", ["size", "type"])
def test_computed_fields_are_rejected(field):
    model = new_manifest("module")
    with pytest.raises(ConfigurationError, match="computed by the compiler"):
        model.add("cport", "cport0", {"id": 1, field: 7})


def test_string_length_is_computed():
    model = new_manifest("module")
    with pytest.raises(ConfigurationError, match="computed by the compiler"):
        model.add("string", "s", {"id": 1, "string": "ab", "length": 2})


def test_string_descriptor_needs_a_string():
    model = new_manifest("module")
    with pytest.raises(ConfigurationError, match="missing its string value"):
        model.add("string", "s", {"id": 1})


def test_non_integer_field_is_rejected():
    model = new_manifest("module")
    with pytest.raises(ConfigurationError, match="must be an integer"):
        model.add("cport", "cport0", {"id": "one"})


def test_set_header_version():
    model = new_manifest("module")
    model.set_header_version(1, 2)
    assert (model.header.version_major, model.header.version_minor) == (1, 2)
    with pytest.raises(ConfigurationError):
        model.set_header_version("1", 2)
