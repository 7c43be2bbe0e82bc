"""Client-side view errors."""


class ViewError(Exception):
    """Base exception for catalog view operations."""


class FetchError(ViewError):
    """Raised when the catalog endpoint cannot be reached or answers with a failure."""


class ClipboardError(ViewError):
    """Raised when a link cannot be written to the system clipboard."""
