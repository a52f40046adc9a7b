"""Data models for playlist items, renditions, track records and parser options."""

from .options_models import ParserOptions
from .playlist_models import ByteRange, CipherContext, CipherMethod, Item
from .rendition_models import Alternate, RenditionType
from .track_models import RenditionTrackInfo, TrackInfo, TrackKind

__all__ = [
    "ParserOptions",
    "ByteRange",
    "CipherContext",
    "CipherMethod",
    "Item",
    "Alternate",
    "RenditionType",
    "RenditionTrackInfo",
    "TrackInfo",
    "TrackKind",
]
