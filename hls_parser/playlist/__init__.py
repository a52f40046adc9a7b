"""Parsed playlist handle and track selection."""

from .m3u_playlist import M3UPlaylist
from .track_selector import TrackSelector, classify_item

__all__ = ["M3UPlaylist", "TrackSelector", "classify_item"]
