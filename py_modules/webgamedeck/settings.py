"""
WebGameDeck settings.

Settings live in a JSON file under the data directory. They are loaded into
an immutable WebGamesSettings value that is passed to the services; only
save_settings() writes them back, so nothing in the enrichment path mutates
configuration.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .errors import SettingsError
from .models import BrowserFamily, WebGame
from .utils.browser import detect_browser_family
from .utils.paths import SETTINGS_PATH

logger = logging.getLogger(__name__)

DEFAULT_BROWSER_PATH = "/usr/bin/brave-browser"
DEFAULT_MAX_CONCURRENCY = 4


@dataclass(frozen=True)
class WebGamesSettings:
    """User configuration for the web games library."""
    browser_executable_path: str = DEFAULT_BROWSER_PATH
    browser_games: Tuple[WebGame, ...] = field(default_factory=tuple)
    use_shared_profile: bool = False
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY

    @property
    def browser_family(self) -> BrowserFamily:
        return detect_browser_family(self.browser_executable_path)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'browser_executable_path': self.browser_executable_path,
            'use_shared_profile': self.use_shared_profile,
            'max_concurrency': self.max_concurrency,
            'browser_games': [
                {'name': game.display_name, 'url': game.url}
                for game in self.browser_games
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WebGamesSettings":
        games = []
        for i, entry in enumerate(data.get('browser_games') or []):
            if not isinstance(entry, dict) or not isinstance(entry.get('url'), str):
                logger.warning(f"[Settings] Skipping malformed game entry #{i}: {entry!r}")
                continue
            games.append(WebGame(display_name=str(entry.get('name', '')), url=entry['url']))

        try:
            max_concurrency = max(1, int(data.get('max_concurrency', DEFAULT_MAX_CONCURRENCY)))
        except (TypeError, ValueError):
            logger.warning(f"[Settings] Invalid max_concurrency {data.get('max_concurrency')!r}, using default")
            max_concurrency = DEFAULT_MAX_CONCURRENCY

        use_shared_profile = data.get('use_shared_profile', False)
        if not isinstance(use_shared_profile, bool):
            logger.warning(f"[Settings] Invalid use_shared_profile {use_shared_profile!r}, using false")
            use_shared_profile = False

        return cls(
            browser_executable_path=str(data.get('browser_executable_path') or DEFAULT_BROWSER_PATH),
            browser_games=tuple(games),
            use_shared_profile=use_shared_profile,
            max_concurrency=max_concurrency,
        )


def verify_settings(settings: WebGamesSettings) -> List[str]:
    """Check that the configured browser can be launched.

    Returns:
        List of error messages, empty if the settings are usable
    """
    errors = []
    path = settings.browser_executable_path
    if not path or not path.strip():
        errors.append("Browser executable path cannot be empty.")
    elif not os.path.isfile(path):
        errors.append(f"Browser executable not found at: {path}")
    return errors


def load_settings(path: Optional[Union[str, Path]] = None) -> WebGamesSettings:
    """Load settings from disk.

    Args:
        path: Settings file, defaults to SETTINGS_PATH

    Returns:
        Loaded settings, or defaults if the file does not exist

    Raises:
        SettingsError: If the file exists but is not a JSON object
    """
    settings_path = path or SETTINGS_PATH
    if not os.path.exists(settings_path):
        logger.info(f"[Settings] No settings at {settings_path}, using defaults")
        return WebGamesSettings()

    try:
        with open(settings_path, 'r') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SettingsError(f"Cannot read settings {settings_path}: {e}") from e

    if not isinstance(data, dict):
        raise SettingsError(f"Settings {settings_path} must contain a JSON object")

    settings = WebGamesSettings.from_dict(data)
    logger.debug(f"[Settings] Loaded {len(settings.browser_games)} games from {settings_path}")
    return settings


def save_settings(settings: WebGamesSettings, path: Optional[Union[str, Path]] = None) -> bool:
    """Save settings to disk, creating the directory if needed."""
    settings_path = path or SETTINGS_PATH
    try:
        os.makedirs(os.path.dirname(os.path.abspath(settings_path)), exist_ok=True)
        with open(settings_path, 'w') as f:
            json.dump(settings.to_dict(), f, indent=2)
        logger.info(f"[Settings] Saved {len(settings.browser_games)} games to {settings_path}")
        return True
    except OSError as e:
        logger.error(f"[Settings] Error saving settings: {e}")
        return False
