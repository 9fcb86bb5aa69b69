"""Tests for the EAD file writer."""

from __future__ import annotations

import pytest

from ead_exporter.infrastructure.io import EADFileWriter, EADWriteError, write_ead_file


def _chunks():
    yield '<?xml version="1.0" encoding="UTF-8"?>\n'
    yield "<ead>"
    yield "Café & co"
    yield "</ead>"


class TestWriteEadFile:
    def test_writes_all_chunks(self, tmp_path):
        output = tmp_path / "ms042.xml"

        written = write_ead_file(_chunks(), output)

        text = output.read_text(encoding="utf-8")
        assert text.endswith("<ead>Café & co</ead>")
        assert written == len(text)

    def test_creates_parent_directories(self, tmp_path):
        output = tmp_path / "nested" / "dir" / "out.xml"

        write_ead_file(["<ead/>"], output)

        assert output.read_text(encoding="utf-8") == "<ead/>"

    def test_newlines_are_not_translated(self, tmp_path):
        output = tmp_path / "out.xml"

        write_ead_file(["a\nb"], output)

        assert output.read_bytes() == b"a\nb"

    def test_failed_stream_keeps_previous_file(self, tmp_path):
        output = tmp_path / "out.xml"
        output.write_text("previous", encoding="utf-8")

        def broken():
            yield "<ead>"
            raise RuntimeError("render failed")

        with pytest.raises(RuntimeError, match="render failed"):
            write_ead_file(broken(), output)

        assert output.read_text(encoding="utf-8") == "previous"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["out.xml"]

    def test_os_error_is_wrapped(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")

        with pytest.raises(EADWriteError):
            write_ead_file(["<ead/>"], blocker / "out.xml")


class TestEADFileWriter:
    def test_write_delegates(self, tmp_path):
        output = tmp_path / "out.xml"

        assert EADFileWriter().write(iter(["<ead/>"]), output) == 6
        assert output.read_text(encoding="utf-8") == "<ead/>"
