"""
Meta-tag extraction from raw page HTML.

Only two tag shapes are recognized, in either attribute order:

    <meta name|property="description|og:description" content="...">
    <meta property="og:image" content="...">

This is a pattern search over text, not an HTML parser. Anything it cannot
match yields an empty string.
"""

import html
import logging
import re

from ..errors import ParseFailure
from ..models import PageMetadata

logger = logging.getLogger(__name__)

_DESCRIPTION_PATTERNS = (
    re.compile(
        r'<meta\s+(?:name|property)=["\'](?:description|og:description)["\']'
        r'\s+content=["\']([^"\']*)["\']',
        re.IGNORECASE,
    ),
    re.compile(
        r'<meta\s+content=["\']([^"\']*)["\']'
        r'\s+(?:name|property)=["\'](?:description|og:description)["\']',
        re.IGNORECASE,
    ),
)

_OG_IMAGE_PATTERNS = (
    re.compile(
        r'<meta\s+property=["\']og:image["\']\s+content=["\']([^"\']*)["\']',
        re.IGNORECASE,
    ),
    re.compile(
        r'<meta\s+content=["\']([^"\']*)["\']\s+property=["\']og:image["\']',
        re.IGNORECASE,
    ),
)


def _first_match(page: str, patterns) -> str:
    if not isinstance(page, str):
        raise ParseFailure(f"Expected HTML text, got {type(page).__name__}")
    for pattern in patterns:
        match = pattern.search(page)
        if match:
            return html.unescape(match.group(1))
    return ""


def extract_description(page: str) -> str:
    """Get the page description, or "" if there is none."""
    try:
        return _first_match(page, _DESCRIPTION_PATTERNS)
    except Exception as e:
        logger.error(f"[Metadata] Failed to parse description from HTML: {e}")
        return ""


def extract_og_image(page: str) -> str:
    """Get the og:image URL exactly as declared (possibly relative), or ""."""
    try:
        return _first_match(page, _OG_IMAGE_PATTERNS)
    except Exception as e:
        logger.error(f"[Metadata] Failed to parse og:image from HTML: {e}")
        return ""


def extract_page_metadata(page: str) -> PageMetadata:
    return PageMetadata(
        description=extract_description(page),
        og_image_url=extract_og_image(page),
    )
