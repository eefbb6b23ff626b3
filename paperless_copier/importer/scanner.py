"""Source tree scanning and candidate selection.

Only files whose last-access time is newer than the watermark and whose
extension is a recognized document type are copied. Images and plain text
are left out on purpose: they would need OCR downstream.
"""

import logging
import os
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from paperless_copier.importer.paths import relativize
from paperless_copier.schemas.importer import SourceFile

logger = logging.getLogger(__name__)

DOCUMENT_EXTENSIONS: frozenset[str] = frozenset({".pdf", ".docx", ".xlsx"})


def file_extension(name: str) -> str:
    """Return the text from the last dot onwards, so ``.pdf`` on its own is a PDF."""
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def scan_source(source_root: str | Path) -> list[SourceFile]:
    """List every file under ``source_root``, at any depth.

    Directories and files are visited in sorted order so repeated scans of an
    unchanged tree return the same sequence. Symlinked directories are not
    descended into.
    """
    root = Path(source_root)
    found: list[SourceFile] = []

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath) / name
            try:
                stat = path.stat()
            except OSError as exc:
                logger.warning("Cannot read %s: %s", path, exc)
                continue
            found.append(
                SourceFile(
                    source_path=path,
                    relative_path=relativize(path, root),
                    extension=file_extension(name),
                    accessed_at=datetime.fromtimestamp(stat.st_atime, UTC).replace(tzinfo=None),
                )
            )

    return found


def filter_candidates(
    files: Iterable[SourceFile],
    watermark: datetime,
    extensions: Iterable[str] = DOCUMENT_EXTENSIONS,
) -> list[SourceFile]:
    """Keep files accessed strictly after ``watermark`` with a recognized extension.

    Extensions compare case-insensitively. Input order is preserved.
    """
    wanted = {ext.lower() for ext in extensions}
    return [
        f for f in files
        if f.accessed_at > watermark and f.extension.lower() in wanted
    ]
