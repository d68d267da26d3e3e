"""
Error taxonomy for WebGameDeck.

EmptyInputError and SettingsError are raised to the caller. The other
failures are recoverable: they are caught where they happen, logged, and
reported through ArtifactResult.reason so one broken site never stops the
rest of an enrichment pass.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class WebGameDeckError(Exception):
    """Base class for all WebGameDeck exceptions."""


class EmptyInputError(WebGameDeckError, ValueError):
    """Raised when an identifier is requested for an empty URL."""


class FetchFailure(WebGameDeckError):
    """Raised on timeouts, DNS errors, non-2xx responses and transport errors."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(f"{message} ({url})")


class ParseFailure(WebGameDeckError):
    """Raised when HTML meta-tag extraction hits malformed input."""


class CacheWriteFailure(WebGameDeckError):
    """Raised when a cache file cannot be written (disk full, permissions)."""


class SettingsError(WebGameDeckError):
    """Raised when the settings file exists but cannot be parsed."""


class FailureReason(str, Enum):
    MISSING = "missing"
    FETCH = "fetch"
    EMPTY_RESPONSE = "empty_response"
    CACHE_WRITE = "cache_write"
    INVALID_URL = "invalid_url"


@dataclass(frozen=True)
class ArtifactResult:
    """Outcome of materializing one cached artifact.

    Attributes
    ----------
    path    : Cache file path on success, None on failure.
    reason  : Why no path was produced; None on success.
    cached  : True when the file already existed and no fetch happened.
    error   : Human-readable detail for logs.
    """

    path: Optional[Path] = None
    reason: Optional[FailureReason] = None
    cached: bool = False
    error: str = ""

    @property
    def success(self) -> bool:
        return self.path is not None

    @classmethod
    def hit(cls, path: Path) -> "ArtifactResult":
        return cls(path=path, cached=True)

    @classmethod
    def stored(cls, path: Path) -> "ArtifactResult":
        return cls(path=path)

    @classmethod
    def failed(cls, reason: FailureReason, error: str = "") -> "ArtifactResult":
        return cls(reason=reason, error=error)
