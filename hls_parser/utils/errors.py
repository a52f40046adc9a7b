"""Error types raised while parsing playlists and querying tracks."""

from __future__ import annotations

from typing import Optional


class PlaylistError(Exception):
    """Base class for every playlist failure."""


class StructuralError(PlaylistError):
    """Raised when the playlist cannot be parsed into a usable structure."""

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class PlaylistAttributeError(PlaylistError, ValueError):
    """Raised for a malformed attribute list or scalar inside a single tag."""


class OutOfRangeError(PlaylistError, IndexError):
    """Raised when an item or alternate index is out of bounds."""


class NotFoundError(PlaylistError, LookupError):
    """Raised when a media group or alternate does not exist."""
