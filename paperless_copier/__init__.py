"""Incremental document copier feeding a Paperless-ngx consume folder."""

__version__ = "0.1.0"
