"""
Tests for ArtifactCache fetch-or-return-cached behaviour.
"""
import asyncio
import errno

import pytest
from unittest.mock import AsyncMock, patch

from webgamedeck.cache.artifacts import ArtifactCache
from webgamedeck.errors import FailureReason, FetchFailure
from webgamedeck.models import ArtifactKind

IDENTIFIER = "a" * 64


class DiskFullFile:
    """File stand-in that writes two bytes and then runs out of space."""

    def __init__(self, path):
        self._f = open(path, 'wb')

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self._f.close()
        return False

    def write(self, data):
        self._f.write(data[:2])
        self._f.flush()
        raise OSError(errno.ENOSPC, "No space left on device")


@pytest.fixture
def cache(tmp_path):
    """Create an ArtifactCache under a not-yet-existing directory."""
    return ArtifactCache(tmp_path / "Browser" / "Icons")


def test_path_for_uses_fixed_extensions(cache):
    """Test favicons use <id>.png and backgrounds use <id>_bg.jpg."""
    assert cache.path_for(IDENTIFIER, ArtifactKind.FAVICON).name == f"{IDENTIFIER}.png"
    assert cache.path_for(IDENTIFIER, ArtifactKind.BACKGROUND).name == f"{IDENTIFIER}_bg.jpg"


@pytest.mark.asyncio
async def test_miss_fetches_and_writes(cache):
    """Test a cache miss awaits the fetch and stores its bytes."""
    fetch = AsyncMock(return_value=b"icon-bytes")

    result = await cache.get_or_fetch(IDENTIFIER, ArtifactKind.FAVICON, fetch)

    assert result.success
    assert not result.cached
    assert result.path == cache.path_for(IDENTIFIER, ArtifactKind.FAVICON)
    assert result.path.read_bytes() == b"icon-bytes"
    fetch.assert_awaited_once()


@pytest.mark.asyncio
async def test_creates_cache_dir_on_first_use(cache):
    """Test the cache directory is created on the first write."""
    assert not cache.cache_dir.exists()
    await cache.get_or_fetch(IDENTIFIER, ArtifactKind.FAVICON, AsyncMock(return_value=b"x"))
    assert cache.cache_dir.is_dir()


@pytest.mark.asyncio
async def test_hit_is_idempotent(cache):
    """Test a cached file is returned without calling fetch again."""
    first = await cache.get_or_fetch(IDENTIFIER, ArtifactKind.FAVICON, AsyncMock(return_value=b"original"))

    failing = AsyncMock(side_effect=FetchFailure("https://x", "HTTP 500"))
    different = AsyncMock(return_value=b"different")
    second = await cache.get_or_fetch(IDENTIFIER, ArtifactKind.FAVICON, failing)
    third = await cache.get_or_fetch(IDENTIFIER, ArtifactKind.FAVICON, different)

    assert second.path == first.path and third.path == first.path
    assert second.cached and third.cached
    failing.assert_not_awaited()
    different.assert_not_awaited()
    assert first.path.read_bytes() == b"original"


@pytest.mark.asyncio
async def test_kinds_are_cached_separately(cache):
    """Test a cached favicon does not satisfy a background lookup."""
    await cache.get_or_fetch(IDENTIFIER, ArtifactKind.FAVICON, AsyncMock(return_value=b"icon"))
    fetch_bg = AsyncMock(return_value=b"bg")

    result = await cache.get_or_fetch(IDENTIFIER, ArtifactKind.BACKGROUND, fetch_bg)

    fetch_bg.assert_awaited_once()
    assert result.path.read_bytes() == b"bg"


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [b"", None])
async def test_empty_response_writes_nothing(cache, payload):
    """Test an empty body is reported and leaves no file behind."""
    result = await cache.get_or_fetch(IDENTIFIER, ArtifactKind.BACKGROUND, AsyncMock(return_value=payload))

    assert result.path is None
    assert result.reason == FailureReason.EMPTY_RESPONSE
    assert not cache.path_for(IDENTIFIER, ArtifactKind.BACKGROUND).exists()


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [
    FetchFailure("https://x", "HTTP 404"),
    asyncio.TimeoutError(),
    RuntimeError("boom"),
])
async def test_fetch_errors_do_not_raise(cache, error):
    """Test fetch errors become a FETCH result instead of an exception."""
    result = await cache.get_or_fetch(IDENTIFIER, ArtifactKind.FAVICON, AsyncMock(side_effect=error))

    assert not result.success
    assert result.reason == FailureReason.FETCH
    assert not cache.path_for(IDENTIFIER, ArtifactKind.FAVICON).exists()


@pytest.mark.asyncio
async def test_write_failure_is_reported(cache):
    """Test an unwritable cache path gives a CACHE_WRITE result."""
    with patch("webgamedeck.cache.artifacts.open", side_effect=PermissionError("read-only"), create=True):
        result = await cache.get_or_fetch(IDENTIFIER, ArtifactKind.FAVICON, AsyncMock(return_value=b"x"))

    assert result.path is None
    assert result.reason == FailureReason.CACHE_WRITE


@pytest.mark.asyncio
async def test_partial_write_is_removed_and_refetched(cache):
    """Test a write that fails midway leaves no file, so the next pass fetches again."""
    with patch("webgamedeck.cache.artifacts.open", lambda path, mode: DiskFullFile(path), create=True):
        first = await cache.get_or_fetch(IDENTIFIER, ArtifactKind.FAVICON, AsyncMock(return_value=b"\x89PNG-data"))

    assert first.reason == FailureReason.CACHE_WRITE
    assert not cache.path_for(IDENTIFIER, ArtifactKind.FAVICON).exists()

    fetch = AsyncMock(return_value=b"\x89PNG-data")
    second = await cache.get_or_fetch(IDENTIFIER, ArtifactKind.FAVICON, fetch)

    fetch.assert_awaited_once()
    assert not second.cached
    assert second.path.read_bytes() == b"\x89PNG-data"


@pytest.mark.asyncio
async def test_delete_allows_refetch(cache):
    """Test deleting a cached artifact makes the next call fetch again."""
    await cache.get_or_fetch(IDENTIFIER, ArtifactKind.FAVICON, AsyncMock(return_value=b"old"))
    assert cache.get_cached(IDENTIFIER, ArtifactKind.FAVICON) is not None

    assert cache.delete(IDENTIFIER, ArtifactKind.FAVICON) is True
    assert cache.get_cached(IDENTIFIER, ArtifactKind.FAVICON) is None

    result = await cache.get_or_fetch(IDENTIFIER, ArtifactKind.FAVICON, AsyncMock(return_value=b"new"))
    assert result.path.read_bytes() == b"new"


def test_delete_missing_returns_false(cache):
    """Test delete returns False when nothing is cached."""
    assert cache.delete(IDENTIFIER, ArtifactKind.BACKGROUND) is False
