# SPDX-FileCopyrightText: 2026 Rivos Inc.
#
# SPDX-License-Identifier: Apache-2.0

import logging
import os

import pytest

from manifesto import generate_manifest as cli
from manifesto.errors import ManifestSourceError, ManifestStateError

from .test_readers import MANIFESTS_DIR, MODULE_YAML
from .test_serializer import HEADER, MODULE, STRING_AB


def test_default_output_file():
    assert cli.get_default_output_file("dir/module.mnfs") == "dir/module.mnfb"
    assert cli.get_default_output_file("module.yaml") == "module.mnfb"


def test_main_writes_mnfb_next_to_source(write_source):
    source = write_source("module.yaml", MODULE_YAML)
    assert cli.main([source]) == 0

    output = os.path.splitext(source)[0] + ".mnfb"
    with open(output, "rb") as f:
        assert f.read() == bytes.fromhex(HEADER + MODULE + STRING_AB)


def test_main_output_option(write_source, tmp_path):
    source = write_source("module.yaml", MODULE_YAML)
    output = str(tmp_path / "out.bin")
    assert cli.main([source, "--output", output]) == 0
    assert os.path.getsize(output) == 32


def test_main_overrides(write_source, tmp_path):
    source = write_source("module.yaml", MODULE_YAML)
    output = str(tmp_path / "out.bin")
    assert (
        cli.main(
            [
                source,
                "--output",
                output,
                "--override_manifest_attributes",
                "manifest_header.version_minor=2",
                "string_descriptor.vendor.string=abcd",
            ]
        )
        == 0
    )
    with open(output, "rb") as f:
        blob = f.read()
    # "abcd" takes no padding: same size as the padded "ab".
    assert blob[0:4] == bytes.fromhex("2000" "00" "02")
    assert blob[-4:] == b"abcd"


def test_main_schema_option(write_source, tmp_path):
    source = write_source("module.yaml", MODULE_YAML.replace("    schema: module\n", ""))
    output = str(tmp_path / "out.bin")
    assert cli.main([source, "--schema", "module", "--output", output]) == 0
    assert os.path.exists(output)


def test_main_reports_errors_without_writing(write_source, caplog):
    text = MODULE_YAML + """\
    bundle_descriptor:
      b0:
        id: 1
    """
    source = write_source("module.yaml", text)
    with caplog.at_level(logging.ERROR):
        assert cli.main([source]) == 1
    assert "bundle is not part of schema module" in caplog.text
    assert not os.path.exists(os.path.splitext(source)[0] + ".mnfb")


def test_main_missing_source(tmp_path, caplog):
    with caplog.at_level(logging.ERROR):
        assert cli.main([str(tmp_path / "missing.yaml")]) == 1
    assert "not found" in caplog.text


def test_main_bad_override(write_source, caplog):
    source = write_source("module.yaml", MODULE_YAML)
    with caplog.at_level(logging.ERROR):
        assert cli.main([source, "--override_manifest_attributes", "no_equals_sign"]) == 1
    assert "KEY=VALUE" in caplog.text


def test_main_requires_a_source():
    with pytest.raises(SystemExit):
        cli.main([])


def test_main_list_schemas(capsys):
    assert cli.main(["--list_schemas"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert [line.split(":")[0] for line in lines] == [
        "module",
        "interface_bundle",
        "interface_bundle_noclass",
        "module_function",
    ]


class FailingFile:
    def __init__(self, path):
        self.f = open(path, "wb")

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.f.close()

    def write(self, data):
        self.f.write(data[:1])
        self.f.flush()
        raise OSError("disk full")


def test_generate_manifest_removes_partial_output(write_source, tmp_path, monkeypatch):
    source = write_source("module.yaml", MODULE_YAML)
    output = str(tmp_path / "out.bin")

    monkeypatch.setattr(cli, "open", lambda path, mode: FailingFile(path), raising=False)
    with pytest.raises(OSError, match="disk full"):
        cli.generate_manifest(source, output)
    assert not os.path.exists(output)


def test_serialization_failure_opens_no_output(write_source, tmp_path, monkeypatch):
    source = write_source("module.yaml", MODULE_YAML)
    output = str(tmp_path / "out.bin")

    def failing_serialize(manifest):
        raise ManifestStateError("broken")

    monkeypatch.setattr(cli, "serialize", failing_serialize)
    with pytest.raises(ManifestStateError):
        cli.generate_manifest(source, output)
    assert not os.path.exists(output)


def test_generate_manifest_source_errors(write_source):
    source = write_source("module.txt", MODULE_YAML)
    with pytest.raises(ManifestSourceError):
        cli.generate_manifest(source)


def test_main_overrides_sample_string(tmp_path):
    source = os.path.join(MANIFESTS_DIR, "simple-module.yaml")
    output = str(tmp_path / "out.bin")
    assert (
        cli.main(
            [
                source,
                "--output",
                output,
                "--override_manifest_attributes",
                "string_descriptor.1.string=Foo",
                "string_descriptor.2.string=2024",
            ]
        )
        == 0
    )
    with open(output, "rb") as f:
        blob = f.read()
    assert b"Foo" in blob
    assert b"2024" in blob
    assert b"Project Ara" not in blob
