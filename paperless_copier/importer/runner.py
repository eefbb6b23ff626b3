"""Run sequencing for one import.

``build_context`` validates the command-line arguments before anything is
touched. ``run_import`` then reads the watermark, scans, filters, copies,
trims and finally writes the new watermark. Once copying has started the
watermark is always written, however many files failed.
"""

import logging
from pathlib import Path

from paperless_copier.errors import StartupError
from paperless_copier.importer.audit import CopyAuditLog
from paperless_copier.importer.scanner import DOCUMENT_EXTENSIONS, filter_candidates, scan_source
from paperless_copier.importer.transfer import copy_all
from paperless_copier.importer.trim import trim_empty_directories
from paperless_copier.importer.watermark import format_watermark, read_watermark, write_watermark
from paperless_copier.schemas.importer import ImportContext, ImportReport

logger = logging.getLogger(__name__)


def build_context(
    source_dir: str | None,
    dest_dir: str,
    *,
    audit_log_path: str = "",
) -> ImportContext:
    """Validate the directories for a run.

    Raises:
        StartupError: If the source is missing, or either directory does not exist.
    """
    if not source_dir:
        raise StartupError("Please specify source folder.")

    source = Path(source_dir).resolve()
    dest = Path(dest_dir).resolve()

    if not source.is_dir():
        raise StartupError(f"Source folder {source} does not exist.")
    if not dest.is_dir():
        raise StartupError(f"Destination folder {dest} does not exist.")

    return ImportContext(
        source_dir=source,
        dest_dir=dest,
        audit_log_path=Path(audit_log_path) if audit_log_path else None,
    )


def _open_audit_log(path: Path | None) -> CopyAuditLog | None:
    if path is None:
        return None
    try:
        return CopyAuditLog(path)
    except OSError as exc:
        logger.warning("Audit log disabled, cannot open %s: %s", path, exc)
        return None


def _unresolved_errors(audit_log: CopyAuditLog) -> list[str]:
    try:
        return [e.relative_path for e in audit_log.unresolved_errors()]
    except OSError as exc:
        logger.warning("Cannot read audit log %s: %s", audit_log.path, exc)
        return []


def run_import(context: ImportContext) -> ImportReport:
    """Copy new documents from the source tree and tidy the destination.

    Returns:
        An ImportReport describing the run.
    """
    watermark = read_watermark(context.sentinel_path)
    report = ImportReport(watermark=watermark)
    logger.info("Importing docs with timestamp since %s", format_watermark(watermark))

    logger.info("Starting document import from %s...", context.source_dir)
    files = scan_source(context.source_dir)
    report.files_found = len(files)
    logger.info("Found %d files in source folder.", report.files_found)

    candidates = filter_candidates(files, watermark, DOCUMENT_EXTENSIONS)
    report.candidates = len(candidates)
    logger.info("Found %d files that match the filter.", report.candidates)

    audit_log = _open_audit_log(context.audit_log_path)

    try:
        report.summary = copy_all(
            candidates, context.source_dir, context.dest_dir, audit_log=audit_log
        )
        logger.info("Trimming empty folders...")
        report.trim = trim_empty_directories(context.dest_dir)
        if audit_log is not None:
            report.unresolved_errors = _unresolved_errors(audit_log)
    finally:
        logger.info("Writing timestamp...")
        report.new_watermark = write_watermark(context.sentinel_path)

    return report
