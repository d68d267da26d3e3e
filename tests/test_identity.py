from __future__ import annotations

import hashlib
import re

import pytest

from webgamedeck.errors import EmptyInputError
from webgamedeck.models import WebGame
from webgamedeck.utils.identity import derive_identifier, derive_profile_folder_name

URLS = [
    "https://cool.example/play",
    "https://cool.example/play/",
    "http://cool.example/play",
    "https://COOL.example/play",
    "https://cool.example/play?level=2",
    "https://games.example.org/",
    "https://例え.jp/ゲーム",
]


def test_identifier_is_sha256_hex() -> None:
    url = "https://cool.example/play"
    assert derive_identifier(url) == hashlib.sha256(url.encode("utf-8")).hexdigest()


def test_identifier_is_deterministic() -> None:
    for url in URLS:
        assert derive_identifier(url) == derive_identifier(url)


def test_identifier_format() -> None:
    for url in URLS:
        assert re.fullmatch(r"[0-9a-f]{64}", derive_identifier(url))


def test_distinct_urls_get_distinct_identifiers() -> None:
    identifiers = {derive_identifier(url) for url in URLS}
    assert len(identifiers) == len(URLS)


def test_empty_url_raises() -> None:
    with pytest.raises(EmptyInputError):
        derive_identifier("")


def test_folder_name_strips_non_alphanumerics() -> None:
    game = WebGame("Cool Game!!", "https://cool.example/play")
    expected = "CoolGame-" + derive_identifier(game.url)[:5]
    assert derive_profile_folder_name(game) == expected


def test_folder_name_truncates_prefix_to_ten_chars() -> None:
    game = WebGame("The Extremely Long Title", "https://long.example/")
    assert derive_profile_folder_name(game).split("-")[0] == "TheExtreme"


def test_folder_name_falls_back_when_name_has_no_alphanumerics() -> None:
    game = WebGame("!!! ★★★ ???", "https://stars.example/")
    assert derive_profile_folder_name(game) == "game-" + derive_identifier(game.url)[:5]


def test_folder_name_ignores_display_name_for_suffix() -> None:
    url = "https://cool.example/play"
    first = derive_profile_folder_name(WebGame("Before", url))
    second = derive_profile_folder_name(WebGame("After", url))
    assert first.split("-")[1] == second.split("-")[1]


def test_same_name_different_urls_get_different_folders() -> None:
    a = WebGame("Chess", "https://chess.example/a")
    b = WebGame("Chess", "https://chess.example/b")
    assert derive_profile_folder_name(a) != derive_profile_folder_name(b)
