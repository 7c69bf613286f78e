"""Application folders and file system helpers."""

import logging
from pathlib import Path

from appdirs import user_config_dir, user_log_dir

logger = logging.getLogger(__name__)

APP_DIR_NAME = "lanchat"
APP_AUTHOR = "lanchat"

SETTINGS_FILE_NAME = "lanchat.ini"


def get_config_dir() -> Path:
    """Get the application folder, where the settings are stored."""
    return Path(user_config_dir(APP_DIR_NAME, APP_AUTHOR))


def get_log_dir() -> Path:
    """Get the default folder for chat logs."""
    return Path(user_log_dir(APP_DIR_NAME, APP_AUTHOR))


def get_settings_file() -> Path:
    """Get the path to the settings file."""
    return get_config_dir() / SETTINGS_FILE_NAME


def ensure_folder(path: Path) -> None:
    """Create a folder, with any missing parents, if it does not exist.

    Raises OSError if the folder can not be created, for example when a
    file with the same name is in the way.
    """
    if path.is_dir():
        return
    path.mkdir(parents=True, exist_ok=True)
    logger.info(f"Created folder {path}")
