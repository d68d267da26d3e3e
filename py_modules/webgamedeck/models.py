"""Data model for web games and the metadata derived from them."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple


class BrowserFamily(str, Enum):
    """Browser families that need different launch arguments.

    The value doubles as the directory name under Browser/Profiles.
    """
    CHROMIUM = "Chromium"
    FIREFOX = "Firefox"


class ArtifactKind(str, Enum):
    FAVICON = "favicon"
    BACKGROUND = "background"


@dataclass(frozen=True)
class WebGame:
    """A URL the user wants to treat as a playable title.

    Only ``url`` feeds the identifier; renaming a game keeps its cache
    entries and profile suffix.
    """
    display_name: str
    url: str


@dataclass(frozen=True)
class PageMetadata:
    """Description and og:image URL scraped from a game's page."""
    description: str = ""
    og_image_url: str = ""


@dataclass(frozen=True)
class CachedArtifact:
    identifier: str
    kind: ArtifactKind
    path: Path


@dataclass(frozen=True)
class ProfileKey:
    browser_family: BrowserFamily
    shared: bool
    game: Optional[WebGame] = None


@dataclass
class WebGameMetadata:
    """Library entry handed to the host for one web game."""
    name: str
    game_id: str
    url: str
    description: str = ""
    is_installed: bool = False
    platforms: List[str] = field(default_factory=lambda: ["PC"])
    links: List[Tuple[str, str]] = field(default_factory=list)
    icon_path: Optional[Path] = None
    background_path: Optional[Path] = None
    profile_path: Optional[Path] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'game_id': self.game_id,
            'url': self.url,
            'description': self.description,
            'is_installed': self.is_installed,
            'platforms': list(self.platforms),
            'links': [{'name': name, 'url': url} for name, url in self.links],
            'icon': str(self.icon_path) if self.icon_path else None,
            'background_image': str(self.background_path) if self.background_path else None,
            'profile_path': str(self.profile_path) if self.profile_path else None,
        }
