"""Browser profile directory resolution.

Directories are only computed here; the launcher creates them when the
browser is started.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from ..models import BrowserFamily, ProfileKey, WebGame
from .identity import derive_profile_folder_name
from .paths import SHARED_PROFILE_NAME, get_profiles_root

logger = logging.getLogger(__name__)


def resolve_profile_path(
    base_dir: Union[str, Path],
    browser_family: BrowserFamily,
    shared: bool,
    game: Optional[WebGame] = None,
) -> Optional[Path]:
    """Get the profile directory for a game.

    Args:
        base_dir: WebGameDeck data directory
        browser_family: Family of the configured browser
        shared: Use one profile for every game of this family
        game: Game to resolve an individual profile for

    Returns:
        <base_dir>/Browser/Profiles/<family>/Shared when shared,
        <base_dir>/Browser/Profiles/<family>/<folder name> otherwise,
        or None when an individual profile is requested without a game
    """
    family_dir = get_profiles_root(base_dir) / BrowserFamily(browser_family).value

    if shared:
        return family_dir / SHARED_PROFILE_NAME

    if game is None:
        logger.warning("[Profiles] Individual profile requested without a game")
        return None

    return family_dir / derive_profile_folder_name(game)


def resolve_profile_key(base_dir: Union[str, Path], key: ProfileKey) -> Optional[Path]:
    return resolve_profile_path(base_dir, key.browser_family, key.shared, key.game)
