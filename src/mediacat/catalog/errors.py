"""Catalog errors."""

from __future__ import annotations

from pathlib import Path


class CatalogError(Exception):
    """Base exception for catalog operations."""


class DirectoryReadError(CatalogError):
    """Raised when the media directory cannot be listed.

    Attributes:
        path: Directory that was being scanned.
        reason: Short description of the underlying failure.
    """

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Unable to read media directory {path}: {reason}")
        self.path = path
        self.reason = reason
