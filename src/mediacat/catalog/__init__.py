"""Catalog scanning and classification for a flat media directory."""

from .classifier import (
    DOCUMENT_EXTENSIONS,
    IMAGE_EXTENSIONS,
    VIDEO_EXTENSIONS,
    classify,
    extension_of,
)
from .errors import CatalogError, DirectoryReadError
from .models import MEDIA_TYPES, CatalogEntry, CatalogResponse, ErrorResponse, MediaType
from .scanner import (
    CatalogScanner,
    DirectoryItem,
    decode_address,
    encode_address,
    list_directory,
    natural_sort_key,
    scan,
)

__all__ = [
    "CatalogEntry",
    "CatalogError",
    "CatalogResponse",
    "CatalogScanner",
    "DirectoryItem",
    "DirectoryReadError",
    "DOCUMENT_EXTENSIONS",
    "ErrorResponse",
    "IMAGE_EXTENSIONS",
    "MEDIA_TYPES",
    "MediaType",
    "VIDEO_EXTENSIONS",
    "classify",
    "decode_address",
    "encode_address",
    "extension_of",
    "list_directory",
    "natural_sort_key",
    "scan",
]
