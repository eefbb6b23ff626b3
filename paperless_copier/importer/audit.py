"""Append-only JSONL audit log of copy events.

One line per candidate file per run, whatever the outcome. A file that
fails to copy is not retried once the watermark moves past it, so the log
is the only place that remembers it; ``unresolved_errors`` lists those.
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from paperless_copier.schemas.importer import CopyEvent, CopyStatus

logger = logging.getLogger(__name__)


class CopyAuditLog:
    """Append-only JSONL audit log for copy events.

    Usage::

        audit = CopyAuditLog("/path/to/copy_audit.jsonl")
        audit.log(event)
        for event in audit.unresolved_errors():
            print(event.relative_path, event.error_message)
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def log(self, event: CopyEvent) -> None:
        """Append a single event to the log file."""
        with self._path.open("a") as f:
            f.write(event.model_dump_json() + "\n")
        logger.debug("Copy audit: %s status=%s", event.relative_path, event.status)

    def latest_by_path(self) -> dict[str, CopyEvent]:
        """Return the most recent event recorded for each relative path.

        Lines that cannot be decoded (e.g. a write cut short by a full disk)
        are logged and ignored.
        """
        latest: dict[str, CopyEvent] = {}
        if not self._path.exists():
            return latest

        with self._path.open() as f:
            for lineno, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    event = CopyEvent.model_validate_json(line)
                except ValidationError:
                    logger.warning("Ignoring unreadable audit line %d in %s", lineno, self._path)
                    continue
                latest[event.relative_path] = event
        return latest

    def unresolved_errors(self) -> list[CopyEvent]:
        """Files whose last recorded attempt failed, oldest failure first.

        A later copy or skip of the same relative path resolves the error.
        """
        failed = [e for e in self.latest_by_path().values() if e.status == CopyStatus.ERROR]
        return sorted(failed, key=lambda e: e.timestamp)
