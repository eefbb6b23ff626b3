"""Empty-directory trimming for the destination tree.

Once Paperless has consumed the copied files, the mirrored folders they
were dropped into are left behind. Directories are processed bottom-up:
children first, then the directory itself, which is removed when it holds
neither files nor subdirectories. A ``.DS_Store`` does not count as content.
"""

import logging
import os
from pathlib import Path

from paperless_copier.schemas.importer import TrimResult

logger = logging.getLogger(__name__)

IGNORABLE_ARTIFACT = ".DS_Store"


def _list_entries(directory: Path) -> tuple[list[Path], list[Path]]:
    """Split a directory's entries into (subdirectories, everything else).

    Symlinks are never followed, so a link to a directory counts as a file.
    """
    subdirs: list[Path] = []
    files: list[Path] = []
    with os.scandir(directory) as it:
        for entry in sorted(it, key=lambda e: e.name):
            if entry.is_dir(follow_symlinks=False):
                subdirs.append(Path(entry.path))
            else:
                files.append(Path(entry.path))
    return subdirs, files


def _trim(directory: Path, result: TrimResult, *, is_root: bool) -> None:
    try:
        subdirs, _ = _list_entries(directory)
    except OSError as exc:
        logger.warning("Unable to list folder %s: %s", directory, exc)
        result.failed.append(directory)
        return

    for subdir in subdirs:
        _trim(subdir, result, is_root=False)

    try:
        subdirs, files = _list_entries(directory)
        artifact = directory / IGNORABLE_ARTIFACT
        if artifact in files:
            artifact.unlink()
            logger.debug("Deleted %s", artifact)
            subdirs, files = _list_entries(directory)
    except OSError as exc:
        logger.warning("Unable to clean folder %s: %s", directory, exc)
        result.failed.append(directory)
        return

    # The root is the folder the consumer watches; it stays even when empty
    if files or subdirs or is_root:
        return

    try:
        os.rmdir(directory)
    except OSError as exc:
        logger.warning("Unable to delete folder %s: %s", directory, exc)
        result.failed.append(directory)
        return

    logger.info("Deleted folder %s.", directory)
    result.removed.append(directory)


def trim_empty_directories(root: str | Path) -> TrimResult:
    """Remove every directory under ``root`` left without files or subdirectories.

    The root itself is kept; it is the folder the downstream consumer watches.
    Failures are logged and recorded in the result, never raised.
    """
    result = TrimResult()
    _trim(Path(root), result, is_root=True)
    return result
