"""Extension-based media classification."""

from __future__ import annotations

from typing import Dict, FrozenSet

from .models import MediaType

IMAGE_EXTENSIONS: FrozenSet[str] = frozenset({"jpg", "jpeg", "png", "gif", "bmp", "webp"})
VIDEO_EXTENSIONS: FrozenSet[str] = frozenset({"mp4", "webm", "mov", "avi", "mkv"})
DOCUMENT_EXTENSIONS: FrozenSet[str] = frozenset(
    {"pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "txt"}
)

_EXTENSION_TYPES: Dict[str, MediaType] = {
    **{ext: "image" for ext in IMAGE_EXTENSIONS},
    **{ext: "video" for ext in VIDEO_EXTENSIONS},
    **{ext: "doc" for ext in DOCUMENT_EXTENSIONS},
}


def extension_of(name: str) -> str:
    """Return the lowercased text after the final dot of ``name``.

    A single leading dot does not start an extension, so ``.png`` has none
    while ``..png`` and ``photo.png`` both end in ``png``.
    """
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return ""
    return ext.lower()


def classify(name: str) -> MediaType:
    """Map a filename to its media type; unknown or missing extensions are ``other``."""
    return _EXTENSION_TYPES.get(extension_of(name), "other")


__all__ = [
    "IMAGE_EXTENSIONS",
    "VIDEO_EXTENSIONS",
    "DOCUMENT_EXTENSIONS",
    "extension_of",
    "classify",
]
