"""HTTP surface for the media catalog."""

from .app import CATALOG_ERROR_MESSAGE, create_app

__all__ = ["CATALOG_ERROR_MESSAGE", "create_app"]
