"""Tests for source scanning and candidate filtering."""

import time
from datetime import datetime, timedelta
from pathlib import Path

from paperless_copier.importer.scanner import (
    DOCUMENT_EXTENSIONS,
    file_extension,
    filter_candidates,
    scan_source,
)
from paperless_copier.schemas.importer import SourceFile


def _make_file(name: str, *, accessed_at: datetime | None = None) -> SourceFile:
    path = Path("/src") / name
    return SourceFile(
        source_path=path,
        relative_path=Path(name),
        extension=path.suffix,
        accessed_at=accessed_at or datetime(2024, 6, 1, 12, 0, 0),
    )


# ------------------------------------------------------------------
# scan_source
# ------------------------------------------------------------------


class TestScanSource:
    def test_finds_files_at_every_depth(self, tmp_path):
        (tmp_path / "a" / "b" / "c").mkdir(parents=True)
        (tmp_path / "top.pdf").write_bytes(b"1")
        (tmp_path / "a" / "mid.docx").write_bytes(b"2")
        (tmp_path / "a" / "b" / "c" / "deep.xlsx").write_bytes(b"3")

        files = scan_source(tmp_path)

        assert {f.relative_path for f in files} == {
            Path("top.pdf"),
            Path("a/mid.docx"),
            Path("a/b/c/deep.xlsx"),
        }

    def test_records_metadata(self, tmp_path, set_atime):
        f = tmp_path / "Report.PDF"
        f.write_bytes(b"content")
        set_atime(f, 1_700_000_000)

        [record] = scan_source(tmp_path)

        assert record.source_path == tmp_path / "Report.PDF"
        assert record.relative_path == Path("Report.PDF")
        assert record.extension == ".PDF"
        assert record.accessed_at == datetime(2023, 11, 14, 22, 13, 20)

    def test_order_is_deterministic(self, tmp_path):
        for name in ["zeta", "alpha", "mid"]:
            (tmp_path / name).mkdir()
            (tmp_path / name / "b.pdf").write_bytes(b"x")
            (tmp_path / name / "a.pdf").write_bytes(b"x")

        first = [f.relative_path for f in scan_source(tmp_path)]
        second = [f.relative_path for f in scan_source(tmp_path)]

        assert first == second
        assert first[0] == Path("alpha/a.pdf")

    def test_includes_unrecognized_and_hidden_files(self, tmp_path):
        (tmp_path / "photo.jpg").write_bytes(b"x")
        (tmp_path / ".PaperlessImportTimestamp").write_text("05-Jan-2024 13:45:02")

        assert len(scan_source(tmp_path)) == 2

    def test_empty_tree(self, tmp_path):
        assert scan_source(tmp_path) == []

    def test_broken_symlink_is_left_out(self, tmp_path):
        (tmp_path / "real.pdf").write_bytes(b"x")
        (tmp_path / "dangling.pdf").symlink_to(tmp_path / "missing.pdf")

        files = scan_source(tmp_path)

        assert [f.relative_path for f in files] == [Path("real.pdf")]


# ------------------------------------------------------------------
# file_extension
# ------------------------------------------------------------------


class TestFileExtension:
    def test_regular_name(self):
        assert file_extension("report.PDF") == ".PDF"

    def test_last_dot_wins(self):
        assert file_extension("archive.pdf.bak") == ".bak"

    def test_name_that_is_only_an_extension(self):
        assert file_extension(".pdf") == ".pdf"

    def test_no_dot(self):
        assert file_extension("README") == ""

    def test_bare_dotfile_is_a_candidate(self, tmp_path):
        (tmp_path / ".pdf").write_bytes(b"x")

        result = filter_candidates(scan_source(tmp_path), datetime.min)

        assert [f.relative_path for f in result] == [Path(".pdf")]


# ------------------------------------------------------------------
# filter_candidates
# ------------------------------------------------------------------


class TestFilterCandidates:
    def test_recognized_extensions(self):
        assert DOCUMENT_EXTENSIONS == frozenset({".pdf", ".docx", ".xlsx"})

    def test_excludes_unrecognized_extensions(self):
        files = [_make_file(n) for n in ["a.jpg", "b.png", "c.txt", "d.doc", "e", "f.pdf.bak"]]
        assert filter_candidates(files, datetime.min) == []

    def test_extension_match_is_case_insensitive(self):
        files = [_make_file(n) for n in ["a.PDF", "b.Docx", "c.XLSX"]]
        assert len(filter_candidates(files, datetime.min)) == 3

    def test_strictly_newer_than_watermark(self):
        watermark = datetime(2024, 6, 1, 12, 0, 0)
        older = _make_file("older.pdf", accessed_at=watermark - timedelta(seconds=1))
        equal = _make_file("equal.pdf", accessed_at=watermark)
        newer = _make_file("newer.pdf", accessed_at=watermark + timedelta(seconds=1))

        result = filter_candidates([older, equal, newer], watermark)

        assert [f.relative_path for f in result] == [Path("newer.pdf")]

    def test_minimum_watermark_admits_everything_recognized(self):
        files = [_make_file("a.pdf", accessed_at=datetime(1990, 1, 1)), _make_file("b.txt")]
        result = filter_candidates(files, datetime.min)
        assert [f.relative_path for f in result] == [Path("a.pdf")]

    def test_preserves_input_order(self):
        names = ["c.pdf", "a.xlsx", "b.docx"]
        result = filter_candidates([_make_file(n) for n in names], datetime.min)
        assert [str(f.relative_path) for f in result] == names

    def test_custom_extension_set(self):
        files = [_make_file("a.pdf"), _make_file("b.txt")]
        result = filter_candidates(files, datetime.min, extensions=[".TXT"])
        assert [f.relative_path for f in result] == [Path("b.txt")]

    def test_scanned_file_accessed_now_passes_old_watermark(self, tmp_path, set_atime):
        f = tmp_path / "doc.pdf"
        f.write_bytes(b"x")
        set_atime(f, time.time())

        result = filter_candidates(scan_source(tmp_path), datetime(2000, 1, 1))

        assert len(result) == 1
