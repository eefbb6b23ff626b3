"""Source-to-destination path mapping."""

import os
from pathlib import Path


def relativize(full_path: str | Path, source_root: str | Path) -> Path:
    """Return ``full_path`` relative to ``source_root``.

    The root always gets a trailing separator first, so ``/data/src`` is never
    treated as a prefix of ``/data/src2/...``. ``full_path`` must lie under
    ``source_root``.
    """
    root = str(source_root)
    if not root.endswith(os.sep):
        root += os.sep
    return Path(os.path.relpath(str(full_path), root))


def destination_for(full_path: str | Path, source_root: str | Path, dest_root: str | Path) -> Path:
    """Re-root a source file onto the destination tree."""
    return Path(dest_root) / relativize(full_path, source_root)
