"""Data models for catalog listings."""

from __future__ import annotations

from typing import List, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field

MediaType = Literal["image", "video", "doc", "other"]
MEDIA_TYPES: Tuple[MediaType, ...] = ("image", "video", "doc", "other")


class CatalogEntry(BaseModel):
    """A single file in the media directory.

    Attributes:
        name: Filename exactly as stored on disk.
        url: Published address of the file (prefix plus percent-encoded name).
        type: Media type derived from the file extension.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    type: MediaType


class CatalogResponse(BaseModel):
    """Successful payload returned by the catalog endpoint."""

    files: List[CatalogEntry] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Failure payload returned by the catalog endpoint."""

    error: str


__all__ = ["MediaType", "MEDIA_TYPES", "CatalogEntry", "CatalogResponse", "ErrorResponse"]
