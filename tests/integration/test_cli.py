"""Integration tests for CLI commands.

These run the click application end to end: a JSON record file goes in and
an EAD document comes out on disk.
"""

import json

from click.testing import CliRunner
from lxml import etree
import pytest

from ead_exporter.cli import app
from ead_exporter.constants import Namespaces

NS = {"ead": Namespaces.EAD, "xlink": Namespaces.XLINK}


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def record_file(tmp_path, resource_payload):
    resource_payload["children"] = [
        {"title": "Series 1", "level": "series", "ref_id": "ref1"},
        {"title": "Draft", "level": "file", "publish": False},
        {
            "title": "Photographs",
            "level": "file",
            "instances": [
                {
                    "instance_type": "digital_object",
                    "digital_object": {"digital_object_id": "do-1", "title": "Pier"},
                }
            ],
        },
    ]
    path = tmp_path / "ms042.json"
    path.write_text(json.dumps(resource_payload), encoding="utf-8")
    return path


def _parse(path):
    return etree.parse(str(path)).getroot()


@pytest.mark.integration
class TestExportCommand:
    def test_export_help(self, runner):
        result = runner.invoke(app, ["export", "--help"])

        assert result.exit_code == 0
        assert "RECORD_FILE" in result.output
        assert "--include-unpublished" in result.output
        assert "--numbered-c" in result.output
        assert "--strict" in result.output

    def test_export_default_output(self, runner, record_file):
        result = runner.invoke(app, ["export", str(record_file)])

        assert result.exit_code == 0, result.output
        output = record_file.with_name("ms042_ead.xml")
        root = _parse(output)
        titles = root.xpath("//ead:dsc/ead:c/ead:did/ead:unittitle/text()", namespaces=NS)
        assert titles == ["Series 1", "Photographs"]
        assert root.xpath("//ead:dao", namespaces=NS) == []
        assert "EAD Export Summary" in result.output

    def test_export_with_flags(self, runner, record_file, tmp_path):
        output = tmp_path / "out" / "finding_aid.xml"

        result = runner.invoke(
            app,
            [
                "export",
                str(record_file),
                "-o",
                str(output),
                "--include-unpublished",
                "--daos",
                "--numbered-c",
                "--component-ids",
                "--chunk-size",
                "64",
            ],
        )

        assert result.exit_code == 0, result.output
        root = _parse(output)
        components = root.xpath("//ead:dsc/ead:c01", namespaces=NS)
        assert len(components) == 3
        assert components[0].get("id") == "aspace_ref1"
        assert components[1].get("audience") == "internal"
        (dao,) = root.xpath("//ead:dao", namespaces=NS)
        assert dao.get(f"{{{Namespaces.XLINK}}}href") == "do-1"

    def test_config_file_is_applied(self, runner, record_file, tmp_path):
        config_file = tmp_path / "export.toml"
        config_file.write_text("[export]\nuse_numbered_c_tags = true\n", encoding="utf-8")
        output = tmp_path / "configured.xml"

        result = runner.invoke(
            app, ["export", str(record_file), "-o", str(output), "--config", str(config_file)]
        )

        assert result.exit_code == 0, result.output
        assert _parse(output).xpath("//ead:c01", namespaces=NS)

    def test_flag_overrides_config_file(self, runner, record_file, tmp_path):
        config_file = tmp_path / "export.toml"
        config_file.write_text("[export]\nuse_numbered_c_tags = true\n", encoding="utf-8")
        output = tmp_path / "flat.xml"

        result = runner.invoke(
            app,
            [
                "export",
                str(record_file),
                "-o",
                str(output),
                "--config",
                str(config_file),
                "--flat-c",
            ],
        )

        assert result.exit_code == 0, result.output
        assert _parse(output).xpath("//ead:c01", namespaces=NS) == []

    def test_invalid_json_fails(self, runner, tmp_path):
        broken = tmp_path / "broken.json"
        broken.write_text("{not json", encoding="utf-8")

        result = runner.invoke(app, ["export", str(broken)])

        assert result.exit_code != 0
        assert "Invalid JSON" in result.output

    def test_missing_file_rejected(self, runner, tmp_path):
        result = runner.invoke(app, ["export", str(tmp_path / "nope.json")])

        assert result.exit_code == 2

    def test_strict_mode_fails_on_contained_errors(self, runner, tmp_path, resource_payload):
        resource_payload["children"] = [{"title": "Bad", "extents": [{"number": "1"}]}]
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(resource_payload), encoding="utf-8")

        lenient = runner.invoke(app, ["export", str(path)])
        strict = runner.invoke(app, ["export", str(path), "--strict"])

        assert lenient.exit_code == 0, lenient.output
        assert strict.exit_code == 1
        assert "contained failure" in strict.output
        assert path.with_name("bad_ead.xml").exists()


@pytest.mark.integration
class TestVocabularyCommand:
    def test_note_types(self, runner):
        result = runner.invoke(app, ["vocabulary"])

        assert result.exit_code == 0
        assert "scopecontent" in result.output
        assert "bioghist" in result.output

    def test_controlaccess_buckets(self, runner):
        result = runner.invoke(app, ["vocabulary", "--controlaccess"])

        assert result.exit_code == 0
        assert "Personal Names" in result.output
        assert "genreform" in result.output
