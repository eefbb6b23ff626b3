"""CLI entry point for the Paperless document copier.

Usage:
    paperless-copier SOURCE_DIR [DEST_DIR]

Copies documents accessed since the last run from SOURCE_DIR into DEST_DIR
(default: the configured Paperless consume folder), then removes folders
left empty in DEST_DIR.
"""

import logging
import time

import click

from paperless_copier.config import AUDIT_LOG_PATH, DEFAULT_DEST_DIR, FATAL_DELAY_SECONDS, LOG_LEVEL
from paperless_copier.errors import StartupError
from paperless_copier.importer.runner import build_context, run_import
from paperless_copier.importer.watermark import format_watermark
from paperless_copier.schemas.importer import ImportReport

logger = logging.getLogger("paperless_copier")


def _report(report: ImportReport) -> None:
    summary = report.summary
    click.echo(f"Importing docs with timestamp since {format_watermark(report.watermark)}")
    click.echo(f"Found {report.files_found} files in source folder.")
    click.echo(f"Found {report.candidates} files that match the filter.")
    click.echo(f"Copied {summary.copied} files, skipped {summary.skipped}, errors: {summary.errored}.")
    click.echo(f"Trimmed {len(report.trim.removed)} empty folders.")
    for folder in report.trim.failed:
        click.echo(f"Unable to delete folder {folder}.")
    if report.unresolved_errors:
        click.echo(f"{len(report.unresolved_errors)} files failed to copy and will not be retried:")
        for path in report.unresolved_errors:
            click.echo(f"  {path}")


def _fatal(message: str) -> None:
    """Report a fatal error and pause so it can be read before the console closes."""
    click.echo(message)
    time.sleep(FATAL_DELAY_SECONDS)


@click.command()
@click.argument("source_dir", required=False)
@click.argument("dest_dir", required=False)
def cli(source_dir: str | None, dest_dir: str | None) -> None:
    """Copy new documents from SOURCE_DIR into a Paperless-ngx consume folder."""
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        context = build_context(
            source_dir, dest_dir or DEFAULT_DEST_DIR, audit_log_path=AUDIT_LOG_PATH
        )
    except StartupError as exc:
        _fatal(f"Error: {exc}")
        return

    try:
        report = run_import(context)
    except Exception as exc:
        logger.exception("Import failed")
        _fatal(f"Unexpected error: {exc}")
        return

    _report(report)
    click.echo("Import process complete.")


if __name__ == "__main__":
    cli()
