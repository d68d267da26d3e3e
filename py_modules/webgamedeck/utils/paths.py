"""WebGameDeck file path constants and utilities."""

import os
from pathlib import Path
from typing import Optional, Union


# WebGameDeck data directory
WEBGAMEDECK_DATA_DIR = os.environ.get(
    "WEBGAMEDECK_DATA_DIR", os.path.expanduser("~/.local/share/webgamedeck")
)

# Settings file
SETTINGS_PATH = os.path.join(WEBGAMEDECK_DATA_DIR, "settings.json")

# Layout under the data directory
BROWSER_DIR_NAME = "Browser"
ICONS_DIR_NAME = "Icons"
BACKGROUNDS_DIR_NAME = "Backgrounds"
PROFILES_DIR_NAME = "Profiles"
SHARED_PROFILE_NAME = "Shared"


def get_data_dir(base_dir: Optional[Union[str, Path]] = None) -> Path:
    """Get the data directory, falling back to the default location."""
    return Path(base_dir) if base_dir else Path(WEBGAMEDECK_DATA_DIR)


def get_icons_dir(base_dir: Union[str, Path]) -> Path:
    """Directory holding cached favicons (<identifier>.png)."""
    return Path(base_dir) / BROWSER_DIR_NAME / ICONS_DIR_NAME


def get_backgrounds_dir(base_dir: Union[str, Path]) -> Path:
    """Directory holding cached background images (<identifier>_bg.jpg)."""
    return Path(base_dir) / BROWSER_DIR_NAME / BACKGROUNDS_DIR_NAME


def get_profiles_root(base_dir: Union[str, Path]) -> Path:
    """Parent directory of all per-family browser profiles."""
    return Path(base_dir) / BROWSER_DIR_NAME / PROFILES_DIR_NAME
