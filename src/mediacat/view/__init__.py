"""Client-side catalog browsing."""

from .client import DEFAULT_ENDPOINT_PATH, CatalogClient
from .clipboard import Clipboard, MemoryClipboard, SystemClipboard
from .derive import compute_stats, filter_entries, matches
from .errors import ClipboardError, FetchError, ViewError
from .models import FILTER_OPTIONS, TYPE_LABELS, CategoryFilter, FilterState, Stats, ViewPhase
from .notifications import DEFAULT_DURATION_SECONDS, Notification, Notifier
from .view import FETCH_FAILED_MESSAGE, LINK_COPIED_MESSAGE, CatalogView

__all__ = [
    "CatalogClient",
    "CatalogView",
    "CategoryFilter",
    "Clipboard",
    "ClipboardError",
    "DEFAULT_DURATION_SECONDS",
    "DEFAULT_ENDPOINT_PATH",
    "FETCH_FAILED_MESSAGE",
    "FILTER_OPTIONS",
    "FetchError",
    "FilterState",
    "LINK_COPIED_MESSAGE",
    "MemoryClipboard",
    "Notification",
    "Notifier",
    "Stats",
    "SystemClipboard",
    "TYPE_LABELS",
    "ViewError",
    "ViewPhase",
    "compute_stats",
    "filter_entries",
    "matches",
]
