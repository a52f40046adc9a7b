"""Line scanning, tag grammar and the playlist-building state machine."""

from .byte_range import ByteRangeCursor
from .cipher import CipherContextTracker
from .line_scanner import Line, scan_lines
from .media_groups import MediaGroup, MediaGroupRegistry, MediaGroupRegistryView, MediaGroupView
from .playlist_builder import ParsedPlaylist, ParserState, PlaylistBuilder
from .tag_parser import Tag, parse_attribute_list, split_tag

__all__ = [
    "ByteRangeCursor",
    "CipherContextTracker",
    "Line",
    "scan_lines",
    "MediaGroup",
    "MediaGroupRegistry",
    "MediaGroupRegistryView",
    "MediaGroupView",
    "ParsedPlaylist",
    "ParserState",
    "PlaylistBuilder",
    "Tag",
    "parse_attribute_list",
    "split_tag",
]
