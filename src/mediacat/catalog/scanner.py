"""Directory scanning that produces ordered catalog listings.

Every call to :meth:`CatalogScanner.scan` re-reads the directory; nothing is
cached between calls, so concurrent scans share no mutable state. Entries are
ordered with :func:`natural_sort_key` and published under a fixed URL prefix.
"""

from __future__ import annotations

import logging
import os
import re
import unicodedata
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Tuple
from urllib.parse import quote, unquote

from mediacat.config.models import MediaSettings

from .classifier import classify
from .errors import DirectoryReadError
from .models import CatalogEntry

LOGGER = logging.getLogger(__name__)

# Characters JavaScript's encodeURIComponent leaves untouched besides the
# unreserved set that ``quote`` always keeps.
_URI_COMPONENT_SAFE = "!'()*"
_DIGITS = re.compile(r"(\d+)")


@dataclass(frozen=True, slots=True)
class DirectoryItem:
    """Raw directory entry returned by a lister."""

    name: str
    is_dir: bool = False


DirectoryLister = Callable[[Path], List[DirectoryItem]]


def list_directory(path: Path) -> List[DirectoryItem]:
    """List the immediate children of ``path``; the handle is closed on every exit."""
    with os.scandir(path) as iterator:
        return [DirectoryItem(entry.name, entry.is_dir()) for entry in iterator]


def _char_rank(char: str) -> int:
    category = unicodedata.category(char)
    if category[0] in "ZC":
        return 0
    if category[0] == "P":
        return 1
    if category[0] == "S":
        return 2
    return 4


def natural_sort_key(name: str) -> Tuple[Tuple[Tuple[int, object], ...], str]:
    """Sort key ordering numeric runs by value and text case- and accent-insensitively.

    Characters rank as whitespace, then punctuation, then symbols, then digit
    runs (by value), then letters, so ``img.png`` precedes ``img1.png`` which
    precedes ``img10.png``. The raw name is the final tie-breaker so names that
    only differ in case or zero padding still have a stable order.
    """
    folded = "".join(
        char for char in unicodedata.normalize("NFKD", name) if not unicodedata.combining(char)
    ).casefold()
    parts: List[Tuple[int, object]] = []
    for token in _DIGITS.split(folded):
        if token.isdecimal():
            parts.append((3, int(token)))
        else:
            parts.extend((_char_rank(char), char) for char in token)
    return tuple(parts), name


def encode_address(prefix: str, name: str) -> str:
    """Join ``prefix`` with the percent-encoded ``name``."""
    return f"{prefix.rstrip('/')}/{quote(name, safe=_URI_COMPONENT_SAFE)}"


def decode_address(prefix: str, address: str) -> str:
    """Recover the filename from an address built by :func:`encode_address`.

    Raises:
        ValueError: If ``address`` is not under ``prefix``.
    """
    head = prefix.rstrip("/") + "/"
    if not address.startswith(head):
        raise ValueError(f"Address {address!r} is not under {head!r}")
    return unquote(address[len(head) :])


class CatalogScanner:
    """Build catalog listings for a single flat directory.

    Subdirectories are skipped unless ``include_directories`` is set, in which
    case they are listed with type ``other``.
    """

    def __init__(
        self,
        *,
        url_prefix: str = "/Media",
        include_directories: bool = False,
        include_hidden: bool = True,
        lister: DirectoryLister = list_directory,
    ) -> None:
        self.url_prefix = url_prefix
        self.include_directories = include_directories
        self.include_hidden = include_hidden
        self.lister = lister

    @classmethod
    def from_settings(
        cls, settings: MediaSettings, *, lister: DirectoryLister = list_directory
    ) -> "CatalogScanner":
        """Create a scanner configured from ``media`` settings."""
        return cls(
            url_prefix=settings.url_prefix,
            include_directories=settings.include_directories,
            include_hidden=settings.include_hidden,
            lister=lister,
        )

    def scan(self, directory: Path) -> List[CatalogEntry]:
        """Return the ordered catalog for ``directory``.

        Args:
            directory: Directory to list (not recursed).

        Returns:
            List[CatalogEntry]: Entries in natural name order.

        Raises:
            DirectoryReadError: If the directory is missing, unreadable, or not a directory.
        """
        try:
            items = self.lister(directory)
        except OSError as exc:
            raise DirectoryReadError(directory, exc.strerror or type(exc).__name__) from exc

        entries: List[CatalogEntry] = []
        for item in sorted(items, key=lambda candidate: natural_sort_key(candidate.name)):
            if item.is_dir and not self.include_directories:
                continue
            if not self.include_hidden and item.name.startswith("."):
                continue
            try:
                url = encode_address(self.url_prefix, item.name)
            except UnicodeEncodeError:
                LOGGER.warning("Skipping %r: filename is not valid UTF-8.", item.name)
                continue
            entries.append(
                CatalogEntry(
                    name=item.name,
                    url=url,
                    type="other" if item.is_dir else classify(item.name),
                )
            )

        LOGGER.debug("Scanned %s: %d entries", directory, len(entries))
        return entries


def scan(
    directory: Path,
    *,
    url_prefix: str = "/Media",
    include_directories: bool = False,
    include_hidden: bool = True,
    lister: DirectoryLister = list_directory,
) -> List[CatalogEntry]:
    """Scan ``directory`` with a one-off :class:`CatalogScanner`."""
    scanner = CatalogScanner(
        url_prefix=url_prefix,
        include_directories=include_directories,
        include_hidden=include_hidden,
        lister=lister,
    )
    return scanner.scan(directory)


__all__ = [
    "DirectoryItem",
    "DirectoryLister",
    "list_directory",
    "natural_sort_key",
    "encode_address",
    "decode_address",
    "CatalogScanner",
    "scan",
]
