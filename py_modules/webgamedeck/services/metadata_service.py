"""
MetadataService - Fetches page metadata and artwork for web games.

Responsibilities:
- Download a game's page and extract its description and og:image
- Resolve favicons through Google's favicon service
- Resolve og:image backgrounds, including relative image URLs
- Store both through ArtifactCache so each is fetched at most once

Every network failure is logged and turned into empty metadata or a failed
ArtifactResult; nothing here raises to the caller.
"""

import asyncio
import logging
import ssl
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple, Union
from urllib.parse import urlencode, urljoin, urlparse

import aiohttp
import certifi

from ..cache.artifacts import ArtifactCache
from ..errors import ArtifactResult, FailureReason, FetchFailure
from ..models import ArtifactKind, PageMetadata
from ..utils.html_meta import extract_page_metadata

logger = logging.getLogger(__name__)

# Some sites reject default client user agents
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

FAVICON_SERVICE_URL = "https://www.google.com/s2/favicons"
FAVICON_SIZE = 128

# Request timeouts (seconds)
PAGE_TIMEOUT = 10.0
FAVICON_TIMEOUT = 10.0
BACKGROUND_TIMEOUT = 15.0


def favicon_service_url(url: str) -> Optional[str]:
    """Build the favicon service URL for a game URL.

    Returns:
        Service URL parameterized by the game's host, or None if the URL has
        no host
    """
    try:
        host = urlparse(url).hostname
    except ValueError:
        return None
    if not host:
        return None
    return f"{FAVICON_SERVICE_URL}?{urlencode({'domain': host, 'sz': FAVICON_SIZE})}"


def normalize_image_url(image_url: str, base_url: str) -> str:
    """Make a possibly-relative og:image URL absolute.

    Examples (base "https://example.com/page"):
        "img.jpg"                   -> "https://example.com/img.jpg"
        "/img.jpg"                  -> "https://example.com/img.jpg"
        "//cdn.example.com/img.jpg" -> "https://cdn.example.com/img.jpg"
        "https://other.com/img.jpg" -> unchanged
    """
    if image_url.lower().startswith(("http://", "https://")):
        return image_url

    base = urlparse(base_url)
    if image_url.startswith("//"):
        return f"{base.scheme}:{image_url}"
    if image_url.startswith("/"):
        return f"{base.scheme}://{base.netloc}{image_url}"
    return urljoin(base_url, image_url)


@dataclass
class PageEnrichment:
    """Everything fetched for one game page in a single pass."""
    description: str = ""
    og_image_url: str = ""
    icon: ArtifactResult = field(default_factory=ArtifactResult)
    background: ArtifactResult = field(default_factory=ArtifactResult)


class MetadataService:
    """Service for fetching page metadata, favicons and background images."""

    def __init__(
        self,
        page_timeout: float = PAGE_TIMEOUT,
        favicon_timeout: float = FAVICON_TIMEOUT,
        background_timeout: float = BACKGROUND_TIMEOUT,
        user_agent: str = USER_AGENT,
    ):
        self.page_timeout = page_timeout
        self.favicon_timeout = favicon_timeout
        self.background_timeout = background_timeout
        self.user_agent = user_agent
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "MetadataService":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self.session is None or self.session.closed:
            ssl_context = ssl.create_default_context(cafile=certifi.where())
            connector = aiohttp.TCPConnector(ssl=ssl_context, limit_per_host=5)
            self.session = aiohttp.ClientSession(
                connector=connector,
                headers={"User-Agent": self.user_agent}
            )
        return self.session

    async def close(self) -> None:
        if self.session is not None and not self.session.closed:
            await self.session.close()
        self.session = None

    async def _request(self, url: str, timeout: float, text: bool = False) -> Union[bytes, str]:
        """GET url and return the body.

        Raises:
            FetchFailure: On timeout, transport error or non-2xx status
        """
        session = await self._get_session()
        try:
            async with session.get(url, timeout=aiohttp.ClientTimeout(total=timeout)) as resp:
                if not 200 <= resp.status < 300:
                    raise FetchFailure(url, f"HTTP {resp.status}")
                if text:
                    return await resp.text(errors='replace')
                return await resp.read()
        except asyncio.TimeoutError as e:
            raise FetchFailure(url, f"Timed out after {timeout:g}s") from e
        except (aiohttp.ClientError, ValueError) as e:
            raise FetchFailure(url, f"{type(e).__name__}: {e}") from e

    async def fetch_page_metadata(self, url: str) -> Tuple[str, PageMetadata]:
        """Download a game's page and extract its metadata.

        Args:
            url: Game URL

        Returns:
            (html, PageMetadata); ("", PageMetadata()) on any failure
        """
        try:
            page = await self._request(url, self.page_timeout, text=True)
        except FetchFailure as e:
            logger.error(f"[Metadata] Failed to fetch metadata for {url}: {e}")
            return "", PageMetadata()

        metadata = extract_page_metadata(page)
        logger.debug(
            f"[Metadata] {url}: description={len(metadata.description)} chars, "
            f"og:image={'yes' if metadata.og_image_url else 'no'}"
        )
        return page, metadata

    async def resolve_favicon_result(self, url: str, identifier: str, icons_dir: Union[str, Path]) -> ArtifactResult:
        service_url = favicon_service_url(url)
        if not service_url:
            logger.warning(f"[Favicon] No host in {url!r}, skipping favicon")
            return ArtifactResult.failed(FailureReason.INVALID_URL, f"no host in {url!r}")

        cache = ArtifactCache(icons_dir)
        result = await cache.get_or_fetch(
            identifier,
            ArtifactKind.FAVICON,
            lambda: self._request(service_url, self.favicon_timeout),
        )
        if not result.success:
            logger.error(f"[Favicon] Failed to download favicon for {url}: {result.error}")
        return result

    async def resolve_favicon(self, url: str, identifier: str, icons_dir: Union[str, Path]) -> Optional[Path]:
        """Get the cached favicon path for a game, downloading it on a miss.

        Returns:
            Path to <icons_dir>/<identifier>.png, or None on failure
        """
        return (await self.resolve_favicon_result(url, identifier, icons_dir)).path

    async def resolve_background_result(
        self,
        og_image_url: str,
        base_url: str,
        identifier: str,
        backgrounds_dir: Union[str, Path],
    ) -> ArtifactResult:
        if not og_image_url:
            return ArtifactResult.failed(FailureReason.MISSING, "no og:image")

        try:
            image_url = normalize_image_url(og_image_url, base_url)
        except ValueError as e:
            logger.warning(f"[Background] Cannot resolve image URL {og_image_url!r} against {base_url!r}: {e}")
            return ArtifactResult.failed(FailureReason.INVALID_URL, f"malformed URL: {e}")
        if not image_url.lower().startswith(("http://", "https://")):
            logger.warning(f"[Background] Unusable image URL {og_image_url!r} on {base_url}")
            return ArtifactResult.failed(FailureReason.INVALID_URL, f"unusable image URL {image_url!r}")

        cache = ArtifactCache(backgrounds_dir)
        result = await cache.get_or_fetch(
            identifier,
            ArtifactKind.BACKGROUND,
            lambda: self._request(image_url, self.background_timeout),
        )
        if not result.success:
            logger.error(f"[Background] Failed to download background image from {image_url}: {result.error}")
        return result

    async def resolve_background_image(
        self,
        og_image_url: str,
        base_url: str,
        identifier: str,
        backgrounds_dir: Union[str, Path],
    ) -> Optional[Path]:
        """Get the cached background image for a game, downloading it on a miss.

        Args:
            og_image_url: og:image value from the page, possibly relative or empty
            base_url: URL of the page the og:image came from
            identifier: Game identifier
            backgrounds_dir: Directory holding <identifier>_bg.jpg files

        Returns:
            Path to the cached image, or None when there is no og:image or
            the download failed
        """
        result = await self.resolve_background_result(og_image_url, base_url, identifier, backgrounds_dir)
        return result.path

    async def enrich_page(
        self,
        url: str,
        identifier: str,
        icons_dir: Union[str, Path],
        backgrounds_dir: Union[str, Path],
    ) -> PageEnrichment:
        """Fetch description, favicon and background for one game.

        The favicon only needs the URL, so it is fetched alongside the page;
        the background waits for the page's og:image.
        """
        (_, metadata), icon = await asyncio.gather(
            self.fetch_page_metadata(url),
            self.resolve_favicon_result(url, identifier, icons_dir),
        )
        background = await self.resolve_background_result(
            metadata.og_image_url, url, identifier, backgrounds_dir
        )
        return PageEnrichment(
            description=metadata.description,
            og_image_url=metadata.og_image_url,
            icon=icon,
            background=background,
        )
