"""Schemas for the incremental import pipeline.

Covers the run context, scanned source files, per-file copy outcomes and
the run summaries reported at the end of an import.
"""

from datetime import datetime
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field

SENTINEL_FILE_NAME = ".PaperlessImportTimestamp"


class ImportContext(BaseModel):
    """Directories for one import run, resolved and validated at startup."""

    source_dir: Path
    dest_dir: Path
    audit_log_path: Path | None = Field(
        default=None, description="JSONL audit log of copy events (disabled if unset)"
    )

    @property
    def sentinel_path(self) -> Path:
        return self.source_dir / SENTINEL_FILE_NAME


class SourceFile(BaseModel):
    """A file found by scanning the source tree."""

    source_path: Path = Field(description="Absolute path in the source tree")
    relative_path: Path = Field(description="Path relative to the source root")
    extension: str = Field(description="Suffix including the dot, original case")
    accessed_at: datetime = Field(description="Last-access time, naive UTC")


class CopyStatus(StrEnum):
    """Outcome of a single copy attempt."""

    COPIED = "copied"
    SKIPPED = "skipped"
    ERROR = "error"


class CopyEvent(BaseModel):
    """An audit record for a single candidate file."""

    timestamp: datetime
    source_path: str
    relative_path: str
    destination: str
    status: CopyStatus
    error_message: str = Field(default="", description="Error details if status is error")
    file_size_bytes: int = Field(default=0, ge=0)


class RunSummary(BaseModel):
    """Aggregate counts of a copy pass."""

    copied: int = 0
    skipped: int = 0
    errored: int = 0
    events: list[CopyEvent] = Field(default_factory=list)

    def record(self, event: CopyEvent) -> None:
        """Add an event and bump the matching counter."""
        self.events.append(event)
        if event.status == CopyStatus.COPIED:
            self.copied += 1
        elif event.status == CopyStatus.SKIPPED:
            self.skipped += 1
        else:
            self.errored += 1


class TrimResult(BaseModel):
    """Directories removed, or left in place after a failed removal."""

    removed: list[Path] = Field(default_factory=list)
    failed: list[Path] = Field(default_factory=list)


class ImportReport(BaseModel):
    """Everything learned during one import run."""

    watermark: datetime = Field(description="Cutoff read at the start of the run")
    files_found: int = 0
    candidates: int = 0
    summary: RunSummary = Field(default_factory=RunSummary)
    trim: TrimResult = Field(default_factory=TrimResult)
    new_watermark: datetime | None = Field(
        default=None, description="Value written to the sentinel at the end of the run"
    )
    unresolved_errors: list[str] = Field(
        default_factory=list,
        description="Relative paths whose last recorded copy failed (audit log only)",
    )
