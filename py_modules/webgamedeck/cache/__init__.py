"""Artifact cache utilities."""

from .artifacts import ARTIFACT_FILENAMES, ArtifactCache

__all__ = [
    "ARTIFACT_FILENAMES",
    "ArtifactCache",
]
