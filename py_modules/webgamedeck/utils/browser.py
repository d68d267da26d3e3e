"""Browser family detection and play-action arguments."""

from pathlib import Path
from typing import List, Optional, Union

from ..models import BrowserFamily

FIREFOX_MARKERS = ('firefox', 'mozilla')


def detect_browser_family(executable_path: Optional[Union[str, Path]]) -> BrowserFamily:
    """Guess the browser family from its executable path.

    Best-effort: only the path text is inspected, never the binary. Anything
    that does not look like Firefox (including an empty path) is treated as
    Chromium-based, which covers Chrome, Brave, Edge, Vivaldi and friends.

    Args:
        executable_path: Path to the browser executable

    Returns:
        BrowserFamily.FIREFOX or BrowserFamily.CHROMIUM
    """
    if not executable_path:
        return BrowserFamily.CHROMIUM

    lowered = str(executable_path).lower()
    if any(marker in lowered for marker in FIREFOX_MARKERS):
        return BrowserFamily.FIREFOX
    return BrowserFamily.CHROMIUM


def build_launch_arguments(family: BrowserFamily, profile_path: Union[str, Path], url: str) -> List[str]:
    """Build command-line arguments that open url in an isolated profile.

    Chromium opens the page as a chromeless app window; Firefox has no app
    mode, so it gets a new window on the given profile.
    """
    if family == BrowserFamily.FIREFOX:
        return ["-profile", str(profile_path), "-new-window", url]
    return [f"--user-data-dir={profile_path}", f"--app={url}"]
