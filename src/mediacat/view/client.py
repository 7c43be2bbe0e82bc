"""HTTP client for the catalog endpoint."""

from __future__ import annotations

import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from mediacat.catalog.models import CatalogEntry, CatalogResponse

from .errors import FetchError

LOGGER = logging.getLogger(__name__)

DEFAULT_ENDPOINT_PATH = "/api/media"


class CatalogClient:
    """Fetch catalog listings from a running Mediacat server.

    Requests carry no timeout and are never retried.
    """

    def __init__(
        self,
        base_url: str,
        *,
        endpoint_path: str = DEFAULT_ENDPOINT_PATH,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.endpoint_path = endpoint_path
        self._transport = transport

    @property
    def origin(self) -> str:
        """Return the scheme, host, and port of the server."""
        url = httpx.URL(self.base_url)
        return f"{url.scheme}://{url.netloc.decode('ascii')}"

    async def fetch(self) -> List[CatalogEntry]:
        """Request the catalog once.

        Returns:
            List[CatalogEntry]: Entries in server order.

        Raises:
            FetchError: On transport failure, non-success status, or a malformed body.
        """
        async with httpx.AsyncClient(
            base_url=self.base_url, transport=self._transport, timeout=None
        ) as client:
            try:
                response = await client.get(self.endpoint_path)
            except httpx.HTTPError as exc:
                raise FetchError(f"Unable to reach catalog endpoint: {exc}") from exc

        if response.is_error:
            raise FetchError(
                f"Catalog endpoint returned {response.status_code}: {_error_message(response)}"
            )

        try:
            payload = CatalogResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise FetchError(f"Malformed catalog payload: {exc}") from exc
        LOGGER.debug("Fetched %d catalog entries from %s", len(payload.files), self.base_url)
        return payload.files


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return response.reason_phrase


__all__ = ["DEFAULT_ENDPOINT_PATH", "CatalogClient"]
