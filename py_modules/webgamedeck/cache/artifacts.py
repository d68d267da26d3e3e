"""On-disk cache for per-game binary artifacts (favicons, background images).

Files are keyed by game identifier and never re-validated: once a file
exists it is returned as-is until something deletes it.

NOTE: file extensions are fixed per kind regardless of the real image
format, matching caches written by earlier versions.
"""

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, Dict, Optional, Union

from ..errors import ArtifactResult, CacheWriteFailure, FailureReason, FetchFailure
from ..models import ArtifactKind, CachedArtifact

logger = logging.getLogger(__name__)

FetchFn = Callable[[], Awaitable[Optional[bytes]]]

# Filename templates per artifact kind
ARTIFACT_FILENAMES: Dict[ArtifactKind, str] = {
    ArtifactKind.FAVICON: "{identifier}.png",
    ArtifactKind.BACKGROUND: "{identifier}_bg.jpg",
}


class ArtifactCache:
    """Fetch-or-return-cached store for one artifact directory."""

    def __init__(self, cache_dir: Union[str, Path]):
        self.cache_dir = Path(cache_dir)

    def path_for(self, identifier: str, kind: ArtifactKind) -> Path:
        """Get the deterministic cache path for an identifier and kind."""
        return self.cache_dir / ARTIFACT_FILENAMES[ArtifactKind(kind)].format(identifier=identifier)

    def get_cached(self, identifier: str, kind: ArtifactKind) -> Optional[CachedArtifact]:
        """Get the cached artifact if its file exists, without fetching."""
        path = self.path_for(identifier, kind)
        if path.exists():
            return CachedArtifact(identifier=identifier, kind=ArtifactKind(kind), path=path)
        return None

    async def get_or_fetch(self, identifier: str, kind: ArtifactKind, fetch_fn: FetchFn) -> ArtifactResult:
        """Return the cached file, fetching and storing it on a miss.

        Args:
            identifier: Game identifier the artifact belongs to
            kind: Artifact kind (decides the filename)
            fetch_fn: Coroutine function returning the raw bytes; only
                awaited on a cache miss

        Returns:
            ArtifactResult with the file path, or with a FailureReason when
            the fetch failed, returned nothing, or could not be written.
            Never raises for fetch or write errors.
        """
        kind = ArtifactKind(kind)
        cached = self.get_cached(identifier, kind)
        if cached is not None:
            logger.debug(f"[Cache] Hit for {kind.value} {identifier[:12]}: {cached.path.name}")
            return ArtifactResult.hit(cached.path)

        try:
            data = await fetch_fn()
        except FetchFailure as e:
            logger.warning(f"[Cache] Fetch failed for {kind.value} {identifier[:12]}: {e}")
            return ArtifactResult.failed(FailureReason.FETCH, str(e))
        except asyncio.TimeoutError:
            logger.warning(f"[Cache] Fetch timed out for {kind.value} {identifier[:12]}")
            return ArtifactResult.failed(FailureReason.FETCH, "timeout")
        except Exception as e:
            logger.error(f"[Cache] Unexpected error fetching {kind.value} {identifier[:12]}: {e}")
            return ArtifactResult.failed(FailureReason.FETCH, str(e))

        if not data:
            logger.warning(f"[Cache] Empty response for {kind.value} {identifier[:12]}, nothing cached")
            return ArtifactResult.failed(FailureReason.EMPTY_RESPONSE, "empty response")

        path = self.path_for(identifier, kind)
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            with open(path, 'wb') as f:
                f.write(data)
        except OSError as e:
            failure = CacheWriteFailure(f"Cannot write {path}: {e}")
            logger.error(f"[Cache] {failure}")
            # No partial file may remain at the cache path
            self.delete(identifier, kind)
            return ArtifactResult.failed(FailureReason.CACHE_WRITE, str(failure))

        logger.info(f"[Cache] Stored {kind.value} for {identifier[:12]} ({len(data)} bytes): {path.name}")
        return ArtifactResult.stored(path)

    def delete(self, identifier: str, kind: ArtifactKind) -> bool:
        """Delete a cached artifact so the next pass fetches it again.

        Returns:
            True if a file was deleted
        """
        path = self.path_for(identifier, kind)
        try:
            if path.exists():
                path.unlink()
                logger.debug(f"[Cache] Deleted {path.name}")
                return True
        except OSError as e:
            logger.error(f"[Cache] Error deleting {path.name}: {e}")
        return False
