"""Public handle for one parsed HLS playlist."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..models import Item, ParserOptions, RenditionTrackInfo, RenditionType, TrackInfo
from ..parser.line_scanner import PlaylistData
from ..parser.media_groups import MediaGroupRegistryView
from ..parser.playlist_builder import ParsedPlaylist, PlaylistBuilder
from ..utils.errors import OutOfRangeError, StructuralError
from .track_selector import TrackSelector


class M3UPlaylist:
    """Parses ``data`` at construction and answers structure and selection queries.

    A structural failure does not raise: ``init_check()`` returns ``False`` and
    ``error`` holds the :class:`StructuralError`. Use :meth:`parse` to get the
    exception instead.

    Index arguments are checked: ``item_at``, ``select_track`` and
    ``select_rendition`` raise :class:`OutOfRangeError` (an ``IndexError``)
    instead of returning a failure flag. Lookups that can simply miss, such
    as ``get_audio_uri``, return ``None``.

    The parsed structure is read-only: items come back as copies and
    ``media_groups`` is a lookup-only view. ``select_track``, ``select_rendition``
    and ``pick_random_media_items`` mutate selection state and must not run
    concurrently with each other or with readers; no lock is taken here.
    """

    def __init__(self, base_uri: str, data: PlaylistData, options: Optional[ParserOptions] = None) -> None:
        self._base_uri = base_uri
        self._options = options or ParserOptions()
        self._error: Optional[StructuralError] = None
        try:
            self._parsed = PlaylistBuilder(base_uri, self._options).build(data)
        except StructuralError as exc:
            logging.error("Playlist %s is malformed: %s", base_uri, exc)
            self._error = exc
            self._parsed = ParsedPlaylist()
        self._selector = TrackSelector(self._parsed.items, self._parsed.media_groups, self._options)

    @classmethod
    def parse(cls, base_uri: str, data: PlaylistData, options: Optional[ParserOptions] = None) -> "M3UPlaylist":
        playlist = cls(base_uri, data, options)
        if playlist.error is not None:
            raise playlist.error
        return playlist

    def init_check(self) -> bool:
        return self._error is None

    @property
    def error(self) -> Optional[StructuralError]:
        return self._error

    @property
    def base_uri(self) -> str:
        return self._base_uri

    @property
    def media_groups(self) -> MediaGroupRegistryView:
        return MediaGroupRegistryView(self._parsed.media_groups)

    def is_extension_format(self) -> bool:
        return self._parsed.is_extension_format

    def is_variant(self) -> bool:
        return self._parsed.is_variant

    def is_complete(self) -> bool:
        return self._parsed.is_complete

    def is_event(self) -> bool:
        return self._parsed.is_event

    def playlist_meta(self) -> Dict[str, Any]:
        return dict(self._parsed.meta)

    def size(self) -> int:
        return len(self._parsed.items)

    def __len__(self) -> int:
        return self.size()

    def items(self) -> Tuple[Item, ...]:
        return tuple(item.model_copy(deep=True) for item in self._parsed.items)

    def item_at(self, index: int) -> Item:
        """Returns a copy of item ``index``; edits to it do not reach the playlist."""

        if not 0 <= index < self.size():
            raise OutOfRangeError(f"item {index} out of range (size {self.size()})")
        return self._parsed.items[index].model_copy(deep=True)

    def get_selected_index(self) -> int:
        return self._selector.selected_index

    def select_track(self, index: int, select: bool = True) -> None:
        self._selector.select_track(index, select)

    def select_rendition(self, rendition_type: RenditionType, group_id: str, index: int, select: bool = True) -> None:
        self._selector.select_rendition(rendition_type, group_id, index, select)

    def pick_random_media_items(self) -> None:
        self._selector.pick_random_media_items()

    def get_track_info(self) -> List[TrackInfo]:
        return self._selector.get_track_info()

    def get_rendition_track_info(self) -> List[RenditionTrackInfo]:
        return self._selector.get_rendition_track_info()

    def get_audio_uri(self, index: int) -> Optional[str]:
        return self._selector.get_audio_uri(index)

    def get_video_uri(self, index: int) -> Optional[str]:
        return self._selector.get_video_uri(index)

    def get_subtitle_uri(self, index: int) -> Optional[str]:
        return self._selector.get_subtitle_uri(index)
