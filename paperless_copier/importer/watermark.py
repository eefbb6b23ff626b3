"""Persisted import watermark.

The watermark is the cutoff below which source files count as already
imported. It lives as a single line in the sentinel file under the source
root, formatted as ``dd-MMM-yyyy HH:mm:ss`` (e.g. ``05-Jan-2024 13:45:02``).
Times are naive and UTC-equivalent.
"""

import logging
from datetime import UTC, datetime
from pathlib import Path

logger = logging.getLogger(__name__)

WATERMARK_FORMAT = "%d-%b-%Y %H:%M:%S"


def format_watermark(value: datetime) -> str:
    """Render a watermark in the sentinel format.

    The year is zero-padded explicitly; ``%Y`` does not pad years below 1000
    on every platform, and ``datetime.min`` must render as ``0001``.
    """
    return value.strftime(WATERMARK_FORMAT.replace("%Y", f"{value.year:04d}"))


def parse_watermark(text: str) -> datetime | None:
    """Parse a sentinel line, returning None if it is not in the exact format.

    Only the line ending is dropped. ``strptime`` tolerates unpadded fields
    such as ``5-Jan-2024``, so the value must also format back to the same text.
    """
    text = text.rstrip("\r\n")
    try:
        value = datetime.strptime(text, WATERMARK_FORMAT)
    except ValueError:
        return None
    if format_watermark(value) != text:
        return None
    return value


def read_watermark(sentinel_path: str | Path) -> datetime:
    """Read the watermark from the sentinel file.

    Returns ``datetime.min`` (import everything) when the file is missing,
    unreadable, empty or malformed.
    """
    path = Path(sentinel_path)
    try:
        with path.open(encoding="utf-8") as f:
            first_line = f.readline()
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("No usable watermark at %s: %s", path, exc)
        return datetime.min

    value = parse_watermark(first_line)
    if value is None:
        logger.debug("Ignoring malformed watermark %r in %s", first_line.strip(), path)
        return datetime.min
    return value


def write_watermark(sentinel_path: str | Path, timestamp: datetime | None = None) -> datetime:
    """Overwrite the sentinel file with a single watermark line.

    Args:
        sentinel_path: Where the sentinel lives (directly under the source root).
        timestamp: Value to store. Defaults to the current UTC time.

    Returns:
        The value written, truncated to whole seconds.
    """
    if timestamp is None:
        timestamp = datetime.now(UTC).replace(tzinfo=None)
    timestamp = timestamp.replace(microsecond=0)
    Path(sentinel_path).write_text(format_watermark(timestamp), encoding="utf-8")
    logger.debug("Wrote watermark %s to %s", format_watermark(timestamp), sentinel_path)
    return timestamp
