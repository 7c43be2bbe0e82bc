"""View-state models for browsing a catalog."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Literal, Tuple

from pydantic import BaseModel, ConfigDict, model_validator

from mediacat.catalog.models import MediaType

CategoryFilter = Literal["all", "image", "video", "doc", "other"]

FILTER_OPTIONS: List[Tuple[str, CategoryFilter]] = [
    ("All Files", "all"),
    ("Images", "image"),
    ("Videos", "video"),
    ("Documents", "doc"),
    ("Other", "other"),
]

TYPE_LABELS: Dict[MediaType, str] = {
    "image": "Image",
    "video": "Video",
    "doc": "Document",
    "other": "Other",
}


class ViewPhase(str, Enum):
    """Lifecycle phase of a catalog view."""

    LOADING = "loading"
    READY = "ready"
    EMPTY = "empty"
    ERROR_NOTIFIED = "error_notified"


class FilterState(BaseModel):
    """Category selector plus free-text search; replaced rather than mutated."""

    model_config = ConfigDict(frozen=True)

    category: CategoryFilter = "all"
    search: str = ""

    @property
    def needle(self) -> str:
        """Return the normalized search text used for matching."""
        return self.search.strip().lower()


class Stats(BaseModel):
    """Counts over a full catalog.

    Attributes:
        total: Number of entries.
        image: Number of image entries.
        video: Number of video entries.
        doc: Number of document entries.
        other: Number of remaining entries.
    """

    model_config = ConfigDict(frozen=True)

    total: int = 0
    image: int = 0
    video: int = 0
    doc: int = 0
    other: int = 0

    @model_validator(mode="after")
    def _check_total(self) -> "Stats":
        if self.total != self.image + self.video + self.doc + self.other:
            raise ValueError("total must equal the sum of per-type counts")
        return self

    @property
    def docs_and_other(self) -> int:
        """Return the combined document and other count shown on the dashboard."""
        return self.doc + self.other


__all__ = [
    "CategoryFilter",
    "FILTER_OPTIONS",
    "TYPE_LABELS",
    "ViewPhase",
    "FilterState",
    "Stats",
]
