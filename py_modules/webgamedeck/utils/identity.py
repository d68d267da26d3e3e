"""Identifier and profile folder name derivation for web games."""

import hashlib
import re

from ..errors import EmptyInputError
from ..models import WebGame

# Length limits for profile folder names
FOLDER_NAME_PREFIX_LENGTH = 10
FOLDER_NAME_ID_LENGTH = 5
FOLDER_NAME_FALLBACK = "game"

_NON_ALNUM = re.compile(r'[^A-Za-z0-9]+')


def derive_identifier(url: str) -> str:
    """Compute the stable identifier for a game URL.

    Args:
        url: Game URL, used byte-for-byte (no normalization)

    Returns:
        64-character lowercase hex SHA-256 digest of the UTF-8 encoded URL

    Raises:
        EmptyInputError: If url is empty
    """
    if not url:
        raise EmptyInputError("Cannot derive an identifier from an empty URL")
    return hashlib.sha256(url.encode('utf-8')).hexdigest()


def derive_profile_folder_name(game: WebGame) -> str:
    """Build a readable, filesystem-safe profile folder name for a game.

    Examples:
        WebGame("Cool Game!!", url) -> "CoolGame-1a2b3"
        WebGame("!!!", url)         -> "game-1a2b3"
    """
    prefix = _NON_ALNUM.sub('', game.display_name or '')[:FOLDER_NAME_PREFIX_LENGTH]
    suffix = derive_identifier(game.url)[:FOLDER_NAME_ID_LENGTH]
    return f"{prefix or FOLDER_NAME_FALLBACK}-{suffix}"
