"""Client-side catalog view: loading, filtering, stats, and link sharing."""

from __future__ import annotations

import logging
from typing import List, Optional

from mediacat.catalog.models import CatalogEntry

from .client import CatalogClient
from .clipboard import Clipboard, SystemClipboard
from .derive import compute_stats, filter_entries
from .errors import ViewError
from .models import CategoryFilter, FilterState, Stats, ViewPhase
from .notifications import Notification, Notifier

LOGGER = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Unable to fetch media files"
LINK_COPIED_MESSAGE = "Link copied to clipboard"


class CatalogView:
    """Browse a catalog fetched once from the endpoint.

    The catalog and the filter state are the only inputs; stats and the
    filtered view are derived from them on demand. Stats always describe the
    full catalog regardless of the active filter.
    """

    def __init__(
        self,
        client: CatalogClient,
        *,
        notifier: Notifier | None = None,
        clipboard: Clipboard | None = None,
        origin: str | None = None,
    ) -> None:
        self.client = client
        self.notifier = notifier or Notifier()
        self.clipboard: Clipboard = clipboard or SystemClipboard()
        self.origin = (origin or client.origin).rstrip("/")
        self.filters = FilterState()
        self._entries: List[CatalogEntry] = []
        self._stats = Stats()
        self._phase = ViewPhase.LOADING
        self._load_started = False

    @property
    def phase(self) -> ViewPhase:
        """Return the current lifecycle phase."""
        return self._phase

    @property
    def is_loading(self) -> bool:
        return self._phase is ViewPhase.LOADING

    @property
    def entries(self) -> List[CatalogEntry]:
        """Return the full catalog."""
        return list(self._entries)

    @property
    def stats(self) -> Stats:
        return self._stats

    @property
    def filtered(self) -> List[CatalogEntry]:
        """Return catalog entries matching the current filter state."""
        return filter_entries(self._entries, self.filters)

    @property
    def show_empty_state(self) -> bool:
        """True once loading finished with nothing to show, including after a failed fetch."""
        return not self.is_loading and not self._entries

    @property
    def show_no_results(self) -> bool:
        """True when the catalog has entries but none match the filters."""
        return not self.is_loading and bool(self._entries) and not self.filtered

    @property
    def notification(self) -> Optional[Notification]:
        return self.notifier.current

    async def load(self) -> ViewPhase:
        """Fetch the catalog; only the first call issues a request.

        A failed fetch leaves the catalog empty and raises a notification.
        Nothing is retried.
        """
        if self._load_started:
            return self._phase
        self._load_started = True

        try:
            entries = await self.client.fetch()
        except ViewError as exc:
            LOGGER.warning("Catalog fetch failed: %s", exc)
            self._phase = ViewPhase.ERROR_NOTIFIED
            self.notifier.show(FETCH_FAILED_MESSAGE)
            return self._phase

        self._set_entries(entries)
        self._phase = ViewPhase.READY if entries else ViewPhase.EMPTY
        return self._phase

    def select_category(self, category: CategoryFilter) -> List[CatalogEntry]:
        """Switch the category selector and return the new filtered view."""
        self.filters = FilterState(category=category, search=self.filters.search)
        return self.filtered

    def search(self, text: str) -> List[CatalogEntry]:
        """Replace the search text and return the new filtered view."""
        self.filters = FilterState(category=self.filters.category, search=text)
        return self.filtered

    def link_for(self, address: str) -> str:
        """Return the absolute link for an entry address."""
        return self.origin + address

    def copy_link(self, address: str) -> str:
        """Copy the absolute link for ``address`` and notify.

        Clipboard failures are logged and never propagate; the notification
        is shown either way.
        """
        link = self.link_for(address)
        try:
            self.clipboard.write(link)
        except Exception as exc:  # noqa: BLE001
            LOGGER.warning("Clipboard write failed for %s: %s", link, exc)
        self.notifier.show(LINK_COPIED_MESSAGE)
        return link

    def _set_entries(self, entries: List[CatalogEntry]) -> None:
        self._entries = list(entries)
        self._stats = compute_stats(self._entries)


__all__ = ["FETCH_FAILED_MESSAGE", "LINK_COPIED_MESSAGE", "CatalogView"]
