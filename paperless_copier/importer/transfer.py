"""Core copy logic for the importer.

Each candidate is copied to the same relative path under the destination
root, at most once: if anything already sits at the destination path the
candidate is skipped, even when the source has changed since. A failure on
one file is recorded and the batch moves on.
"""

import logging
import shutil
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from paperless_copier.importer.audit import CopyAuditLog
from paperless_copier.importer.paths import destination_for
from paperless_copier.schemas.importer import CopyEvent, CopyStatus, RunSummary, SourceFile

logger = logging.getLogger(__name__)


def copy_file(
    candidate: SourceFile,
    source_root: Path,
    dest_root: Path,
    *,
    audit_log: CopyAuditLog | None = None,
) -> CopyEvent:
    """Copy a single candidate into the destination tree.

    Args:
        candidate: File selected by the scanner.
        source_root: Root the candidate was scanned from.
        dest_root: Root of the destination tree.
        audit_log: Optional log every outcome is appended to.

    Returns:
        The CopyEvent recording what happened.
    """
    source = candidate.source_path
    dest = destination_for(source, source_root, dest_root)

    status = CopyStatus.COPIED
    error_message = ""
    file_size = 0

    if dest.exists():
        logger.info("%s already existed. Skipping...", dest)
        status = CopyStatus.SKIPPED
    else:
        logger.info("Copying %s to %s...", source, dest_root.name)
        try:
            if not dest.parent.is_dir():
                logger.info("Creating directory %s", dest.parent)
                dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, dest)
            file_size = dest.stat().st_size
        except (OSError, shutil.Error) as exc:
            logger.exception("Error copying %s: %s", dest, exc)
            status = CopyStatus.ERROR
            error_message = str(exc)

    event = CopyEvent(
        timestamp=datetime.now(UTC),
        source_path=str(source),
        relative_path=str(candidate.relative_path),
        destination=str(dest),
        status=status,
        error_message=error_message,
        file_size_bytes=file_size,
    )
    if audit_log is not None:
        try:
            audit_log.log(event)
        except OSError as exc:
            logger.warning("Could not record %s in the audit log: %s", candidate.relative_path, exc)
    return event


def copy_all(
    candidates: Iterable[SourceFile],
    source_root: Path,
    dest_root: Path,
    *,
    audit_log: CopyAuditLog | None = None,
) -> RunSummary:
    """Copy every candidate in order and tally the outcomes."""
    summary = RunSummary()
    for candidate in candidates:
        summary.record(copy_file(candidate, source_root, dest_root, audit_log=audit_log))

    logger.info(
        "Copied %d files, skipped %d, errors: %d.",
        summary.copied,
        summary.skipped,
        summary.errored,
    )
    return summary
