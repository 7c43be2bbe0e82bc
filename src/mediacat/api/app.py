"""FastAPI application exposing the media catalog over HTTP."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException

from mediacat.catalog import CatalogResponse, CatalogScanner, DirectoryReadError, ErrorResponse
from mediacat.config.models import MediacatConfig

LOGGER = logging.getLogger(__name__)

CATALOG_ERROR_MESSAGE = "Unable to fetch media files."


def create_app(
    config: MediacatConfig | None = None,
    *,
    scanner: CatalogScanner | None = None,
) -> FastAPI:
    """Create a FastAPI application bound to the given configuration.

    Args:
        config: Effective configuration; defaults are used when omitted.
        scanner: Scanner override, mainly for tests injecting a fake lister.

    Returns:
        FastAPI: Application serving the catalog endpoint and, optionally, the files.
    """
    config = config or MediacatConfig()
    media_dir = Path(config.media.directory).expanduser()
    catalog_scanner = scanner or CatalogScanner.from_settings(config.media)

    app = FastAPI(title="Mediacat", docs_url=None, redoc_url=None)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):  # type: ignore[override]
        start = time.perf_counter()
        response: Optional[Response] = None
        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            status_code = response.status_code if response is not None else 500
            LOGGER.info(
                "%s %s -> %s (%.1f ms)",
                request.method,
                request.url.path,
                status_code,
                duration_ms,
            )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(_request: Request, exc: HTTPException):
        detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": detail})

    # Sync handler: each request scans in its own worker thread.
    @app.get(
        config.server.endpoint_path,
        response_model=CatalogResponse,
        responses={500: {"model": ErrorResponse}},
    )
    def list_media():
        try:
            files = catalog_scanner.scan(media_dir)
        except DirectoryReadError:
            LOGGER.exception("Error reading media directory %s", media_dir)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=ErrorResponse(error=CATALOG_ERROR_MESSAGE).model_dump(),
            )
        return CatalogResponse(files=files)

    if config.server.serve_files:
        app.mount(
            config.media.url_prefix,
            StaticFiles(directory=media_dir, check_dir=False),
            name="media",
        )

    return app


__all__ = ["CATALOG_ERROR_MESSAGE", "create_app"]
