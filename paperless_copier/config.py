"""Single source of truth for all configuration.

All modules import from here. Settings come from an optional dotenv-format
file, ``paperless_copier.env``, at the project root; a missing file means
every setting keeps its default.
"""

from pathlib import Path

from dotenv import dotenv_values

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SETTINGS_PATH = PROJECT_ROOT / "paperless_copier.env"


def load_settings(path: str | Path) -> dict[str, str | None]:
    """Load key-value pairs from a dotenv file, or an empty dict if it is absent.

    Args:
        path: Path to a plain .env file.

    Returns:
        Dictionary of key-value pairs.
    """
    path = Path(path)
    if not path.exists():
        return {}
    return dict(dotenv_values(path))


_settings = load_settings(SETTINGS_PATH)

# --- Destination (Paperless consume folder) ---
DEFAULT_DEST_DIR: str = _settings.get("COPIER_DEFAULT_DEST_DIR") or "/volume1/dockerdata/paperless/data/consume"

# --- Audit / logging ---
AUDIT_LOG_PATH: str = _settings.get("COPIER_AUDIT_LOG_PATH") or ""
LOG_LEVEL: str = (_settings.get("COPIER_LOG_LEVEL") or "INFO").upper()

# Pause after a fatal error so an operator watching the console can read it
FATAL_DELAY_SECONDS: float = float(_settings.get("COPIER_FATAL_DELAY_SECONDS") or "6")
