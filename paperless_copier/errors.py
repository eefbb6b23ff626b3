"""Exceptions raised by the importer."""


class StartupError(ValueError):
    """Bad arguments or missing directories, detected before any file is touched."""
