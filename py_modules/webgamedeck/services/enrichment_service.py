"""
EnrichmentService - Builds library entries for all configured web games.

Responsibilities:
- Derive each game's identifier and profile directory
- Fetch description, favicon and background through MetadataService
- Run games in parallel with semaphore control
- Build the play action (browser executable + arguments) for a game
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from ..errors import EmptyInputError
from ..models import WebGame, WebGameMetadata
from ..settings import WebGamesSettings
from ..utils.browser import build_launch_arguments
from ..utils.identity import derive_identifier
from ..utils.paths import get_backgrounds_dir, get_data_dir, get_icons_dir
from ..utils.profiles import resolve_profile_path
from .metadata_service import MetadataService

logger = logging.getLogger(__name__)

PLAY_ACTION_NAME = "Play in Browser"


class EnrichmentService:
    """Service for turning configured web games into library entries."""

    def __init__(
        self,
        settings: WebGamesSettings,
        data_dir: Optional[Union[str, Path]] = None,
        metadata_service: Optional[MetadataService] = None,
    ):
        """Initialize EnrichmentService.

        Args:
            settings: Immutable user settings
            data_dir: Storage root for icons, backgrounds and profiles
            metadata_service: MetadataService to fetch with; a new one is
                created (and owned) when omitted
        """
        self.settings = settings
        self.data_dir = get_data_dir(data_dir)
        self.icons_dir = get_icons_dir(self.data_dir)
        self.backgrounds_dir = get_backgrounds_dir(self.data_dir)
        self._owns_metadata_service = metadata_service is None
        self.metadata_service = metadata_service or MetadataService()

    async def __aenter__(self) -> "EnrichmentService":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_metadata_service:
            await self.metadata_service.close()

    @property
    def is_installed(self) -> bool:
        """A web game counts as installed when the browser executable exists."""
        return os.path.isfile(self.settings.browser_executable_path)

    def profile_path(self, game: WebGame) -> Optional[Path]:
        return resolve_profile_path(
            self.data_dir,
            self.settings.browser_family,
            self.settings.use_shared_profile,
            game,
        )

    def play_action(self, game: WebGame) -> Optional[Dict[str, Any]]:
        """Build the play action for a game.

        Returns:
            dict: {name, path, arguments, profile_path}, or None when the
            game has no URL
        """
        if not game.url:
            return None

        profile = self.profile_path(game)
        if profile is None:
            return None

        return {
            'name': PLAY_ACTION_NAME,
            'path': self.settings.browser_executable_path,
            'arguments': build_launch_arguments(self.settings.browser_family, profile, game.url),
            'profile_path': str(profile),
        }

    async def enrich_game(self, game: WebGame) -> WebGameMetadata:
        """Fetch everything the library needs for one game.

        Raises:
            EmptyInputError: If the game has no URL
        """
        identifier = derive_identifier(game.url)
        page = await self.metadata_service.enrich_page(
            game.url, identifier, self.icons_dir, self.backgrounds_dir
        )

        return WebGameMetadata(
            name=game.display_name,
            game_id=identifier,
            url=game.url,
            description=page.description,
            is_installed=self.is_installed,
            links=[("Website", game.url)],
            icon_path=page.icon.path,
            background_path=page.background.path,
            profile_path=self.profile_path(game),
        )

    async def _enrich_with_semaphore(self, game: WebGame, semaphore: asyncio.Semaphore) -> WebGameMetadata:
        async with semaphore:
            try:
                entry = await self.enrich_game(game)
            except Exception as e:
                logger.error(f"Error enriching {game.display_name} ({game.url}): {e}")
                return WebGameMetadata(
                    name=game.display_name,
                    game_id=derive_identifier(game.url),
                    url=game.url,
                    is_installed=self.is_installed,
                    links=[("Website", game.url)],
                    profile_path=self.profile_path(game),
                )

            found = [label for label, value in (
                ('description', entry.description),
                ('icon', entry.icon_path),
                ('background', entry.background_path),
            ) if value]
            logger.info(f"  {game.display_name} [{' '.join(found) or 'NO_METADATA'}]")
            return entry

    async def enrich_all(self, games: Optional[Sequence[WebGame]] = None) -> List[WebGameMetadata]:
        """Enrich every configured game, in configuration order.

        Games without a URL are skipped. Games sharing a URL share an
        identifier, so only the first of them is enriched.

        Args:
            games: Games to enrich, defaults to the settings' game list

        Returns:
            One WebGameMetadata per unique game
        """
        games = self.settings.browser_games if games is None else games

        unique: List[WebGame] = []
        seen = set()
        for game in games:
            try:
                identifier = derive_identifier(game.url)
            except EmptyInputError:
                logger.warning(f"Skipping {game.display_name!r}: no URL configured")
                continue
            if identifier in seen:
                logger.warning(f"Skipping duplicate URL for {game.display_name!r}: {game.url}")
                continue
            seen.add(identifier)
            unique.append(game)

        if not unique:
            return []

        logger.info(f"Enriching {len(unique)} web games (max {self.settings.max_concurrency} in parallel)...")
        semaphore = asyncio.Semaphore(self.settings.max_concurrency)
        entries = await asyncio.gather(
            *(self._enrich_with_semaphore(game, semaphore) for game in unique)
        )
        return list(entries)
