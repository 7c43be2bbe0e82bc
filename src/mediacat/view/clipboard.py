"""Clipboard collaborators for copying share links."""

from __future__ import annotations

import shutil
import subprocess
import sys
from typing import List, Optional, Protocol, Sequence

from .errors import ClipboardError

_COMMANDS: Sequence[Sequence[str]] = (
    ("pbcopy",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
    ("clip",),
)


class Clipboard(Protocol):
    """Anything that can place text on a clipboard."""

    def write(self, text: str) -> None:
        """Write ``text`` or raise :class:`ClipboardError`."""


class SystemClipboard:
    """Copy text through the first clipboard utility found on ``PATH``."""

    def __init__(self, commands: Sequence[Sequence[str]] = _COMMANDS) -> None:
        self._commands = commands

    def _resolve(self) -> Optional[List[str]]:
        for command in self._commands:
            executable = shutil.which(command[0])
            if executable:
                return [executable, *command[1:]]
        return None

    def write(self, text: str) -> None:
        command = self._resolve()
        if command is None:
            raise ClipboardError("No clipboard utility available on this system.")
        encoding = "utf-16le" if sys.platform == "win32" else "utf-8"
        try:
            subprocess.run(command, input=text.encode(encoding), check=True, timeout=5)
        except (OSError, subprocess.SubprocessError) as exc:
            raise ClipboardError(f"Clipboard write failed: {exc}") from exc


class MemoryClipboard:
    """In-process clipboard that keeps the last written text."""

    def __init__(self) -> None:
        self.text: Optional[str] = None

    def write(self, text: str) -> None:
        self.text = text


__all__ = ["Clipboard", "SystemClipboard", "MemoryClipboard"]
