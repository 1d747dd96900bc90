"""Platform-related utility functions."""

import logging
import os

from gi.repository import GLib

APP_ID = "io.github.reorderlist"
APP_NAME = "reorderlist"

logger = logging.getLogger(__name__)


def get_config_dir() -> str:
    """Return the per-user configuration directory for reorderlist."""
    return os.path.join(GLib.get_user_config_dir(), APP_NAME)


def get_data_dir() -> str:
    """Return the per-user data directory for reorderlist."""
    return os.path.join(GLib.get_user_data_dir(), APP_NAME)


def get_config_file() -> str:
    """Return the path of the optional JSON configuration file.

    The ``REORDERLIST_CONFIG`` environment variable overrides the default
    location inside :func:`get_config_dir`.
    """
    override = os.environ.get("REORDERLIST_CONFIG")
    if override:
        return os.path.abspath(os.path.expanduser(override))
    return os.path.join(get_config_dir(), "config.json")
