"""HLS (M3U8) playlist parsing and alternate rendition selection."""

from .models import Alternate, Item, ParserOptions, RenditionType, TrackInfo, TrackKind
from .playlist import M3UPlaylist
from .utils.errors import (
    NotFoundError,
    OutOfRangeError,
    PlaylistAttributeError,
    PlaylistError,
    StructuralError,
)

__all__ = [
    "M3UPlaylist",
    "ParserOptions",
    "Item",
    "Alternate",
    "RenditionType",
    "TrackInfo",
    "TrackKind",
    "PlaylistError",
    "StructuralError",
    "PlaylistAttributeError",
    "OutOfRangeError",
    "NotFoundError",
]
