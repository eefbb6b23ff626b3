"""Tests for source-to-destination path mapping."""

from pathlib import Path

from paperless_copier.importer.paths import destination_for, relativize


class TestRelativize:
    def test_file_at_root(self):
        assert relativize("/data/src/report.pdf", "/data/src") == Path("report.pdf")

    def test_keeps_intermediate_segments(self):
        result = relativize("/data/src/2024/taxes/q1/report.pdf", "/data/src")
        assert result == Path("2024/taxes/q1/report.pdf")

    def test_root_with_trailing_separator(self):
        assert relativize("/data/src/a/b.pdf", "/data/src/") == Path("a/b.pdf")

    def test_sibling_sharing_prefix_is_not_confused(self):
        # "/data/src" is a string prefix of "/data/src-backup"
        result = relativize("/data/src-backup/a.pdf", "/data/src-backup")
        assert result == Path("a.pdf")
        assert relativize("/data/src2/x/a.pdf", "/data/src2") == Path("x/a.pdf")

    def test_accepts_path_objects(self, tmp_path):
        root = tmp_path / "src"
        assert relativize(root / "a" / "b.docx", root) == Path("a/b.docx")


class TestDestinationFor:
    def test_reroots_onto_destination(self):
        dest = destination_for("/data/src/docs/report.pdf", "/data/src", "/consume")
        assert dest == Path("/consume/docs/report.pdf")

    def test_prefix_sibling_roots(self):
        dest = destination_for("/data/src-backup/docs/a.pdf", "/data/src-backup", "/data/src")
        assert dest == Path("/data/src/docs/a.pdf")
