# WebGameDeck
# Treats arbitrary URLs as games: metadata, artwork caching and per-game browser profiles.

from .models import BrowserFamily, PageMetadata, WebGame, WebGameMetadata
from .settings import WebGamesSettings, load_settings, save_settings, verify_settings
