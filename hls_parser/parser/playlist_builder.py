"""Line-oriented state machine that turns M3U8 text into a parsed playlist."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models import Alternate, Item, ParserOptions, RenditionType
from ..utils.errors import PlaylistAttributeError, StructuralError
from ..utils.uri_resolver import resolve_uri
from .byte_range import ByteRangeCursor
from .cipher import CipherContextTracker
from .line_scanner import Line, PlaylistData, scan_lines
from .media_groups import MediaGroupRegistry
from .tag_parser import (
    parse_attribute_list,
    parse_bool,
    parse_decimal_integer,
    parse_extinf,
    parse_float,
    parse_resolution,
    split_tag,
)

EXTENSION_MARKER = "#EXTM3U"

STREAM_INF_GROUP_TYPES = (
    RenditionType.AUDIO,
    RenditionType.VIDEO,
    RenditionType.SUBTITLES,
    RenditionType.CLOSED_CAPTIONS,
)


class ParserState(Enum):
    INIT = "init"
    EXPECTING_EXTENSION_MARKER = "expecting-extension-marker"
    SCANNING = "scanning"
    DONE = "done"
    ERROR = "error"


class ParsedPlaylist(BaseModel):
    """Structural result of one parse."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    is_extension_format: bool = False
    is_variant: bool = False
    is_complete: bool = False
    is_event: bool = False
    meta: Dict[str, Any] = Field(default_factory=dict)
    items: List[Item] = Field(default_factory=list)
    media_groups: MediaGroupRegistry = Field(default_factory=MediaGroupRegistry)


TagHandler = Callable[[Optional[str], Line], None]


class PlaylistBuilder:
    """Drives the scanner and tag grammar over a playlist buffer.

    Tags that describe the next item accumulate in ``_pending_meta`` and are
    flushed into an :class:`Item` by the following URI line. The cipher
    context and byte-range cursor survive that flush; everything else resets.
    """

    def __init__(self, base_uri: str, options: Optional[ParserOptions] = None) -> None:
        self.base_uri = base_uri
        self.options = options or ParserOptions()
        self.state = ParserState.INIT
        self._handlers: Dict[str, TagHandler] = {
            "#EXT-X-STREAM-INF": self._handle_stream_inf,
            "#EXT-X-MEDIA": self._handle_media,
            "#EXT-X-KEY": self._handle_key,
            "#EXT-X-BYTERANGE": self._handle_byte_range,
            "#EXTINF": self._handle_extinf,
            "#EXT-X-DISCONTINUITY": self._handle_discontinuity,
            "#EXT-X-PROGRAM-DATE-TIME": self._handle_program_date_time,
            "#EXT-X-TARGETDURATION": self._playlist_integer("target-duration"),
            "#EXT-X-MEDIA-SEQUENCE": self._playlist_integer("media-sequence"),
            "#EXT-X-DISCONTINUITY-SEQUENCE": self._playlist_integer("discontinuity-sequence"),
            "#EXT-X-VERSION": self._playlist_integer("version"),
            "#EXT-X-PLAYLIST-TYPE": self._handle_playlist_type,
            "#EXT-X-INDEPENDENT-SEGMENTS": self._playlist_flag("independent-segments"),
            "#EXT-X-I-FRAMES-ONLY": self._playlist_flag("i-frames-only"),
            "#EXT-X-ENDLIST": self._handle_endlist,
        }
        self._reset()

    def _reset(self) -> None:
        self._is_extension_format = False
        self._is_variant = False
        self._is_complete = False
        self._is_event = False
        self._meta: Dict[str, Any] = {}
        self._items: List[Item] = []
        self._media_groups = MediaGroupRegistry()
        self._pending_meta: Dict[str, Any] = {}
        self._stream_inf_line: Optional[int] = None
        self._cipher = CipherContextTracker()
        self._byte_range = ByteRangeCursor()

    def build(self, data: PlaylistData) -> ParsedPlaylist:
        """Parses ``data`` completely; raises :class:`StructuralError` on failure."""

        self._reset()
        self.state = ParserState.EXPECTING_EXTENSION_MARKER
        try:
            raw_lines = scan_lines(data, keep_comments=True)
            lines = [line for line in raw_lines if not line.is_comment]
            if not lines:
                raise StructuralError("playlist is empty")

            first = raw_lines[0]
            if first.text == EXTENSION_MARKER:
                self._is_extension_format = True
                lines = lines[1:]
            elif self.options.require_extm3u:
                raise StructuralError(f"playlist does not start with {EXTENSION_MARKER}", first.number)
            else:
                logging.warning("Playlist %s has no %s header; parsing anyway", self.base_uri, EXTENSION_MARKER)

            self.state = ParserState.SCANNING
            for line in lines:
                self._process_line(line)
            self._finish()
        except StructuralError:
            self.state = ParserState.ERROR
            raise

        self.state = ParserState.DONE
        return ParsedPlaylist(
            is_extension_format=self._is_extension_format,
            is_variant=self._is_variant,
            is_complete=self._is_complete,
            is_event=self._is_event,
            meta=self._meta,
            items=self._items,
            media_groups=self._media_groups,
        )

    def _process_line(self, line: Line) -> None:
        if not line.is_tag:
            self._append_item(line)
            return

        tag = split_tag(line.text)
        handler = self._handlers.get(tag.name)
        if handler is None:
            logging.debug("Ignoring tag %s on line %s", tag.name, line.number)
            return
        handler(tag.value, line)

    def _append_item(self, line: Line) -> None:
        if self._stream_inf_line is None and not self._is_variant and "duration" not in self._pending_meta:
            logging.warning("Segment on line %s has no EXTINF duration", line.number)

        meta = dict(self._pending_meta)
        meta.update(self._cipher.snapshot())
        self._items.append(Item(uri=resolve_uri(self.base_uri, line.text), meta=meta))

        self._pending_meta = {}
        self._stream_inf_line = None

    def _finish(self) -> None:
        if self._stream_inf_line is not None:
            raise StructuralError("EXT-X-STREAM-INF is not followed by a URI", self._stream_inf_line)
        if self._pending_meta:
            logging.debug("Discarding trailing item tags without a URI: %s", sorted(self._pending_meta))

    # Item tags

    def _handle_stream_inf(self, value: Optional[str], line: Line) -> None:
        try:
            attributes = parse_attribute_list(value)
        except PlaylistAttributeError as exc:
            logging.warning("Ignoring attributes of EXT-X-STREAM-INF on line %s: %s", line.number, exc)
            attributes = {}

        if self._stream_inf_line is not None:
            logging.warning(
                "EXT-X-STREAM-INF on line %s replaces the one on line %s, which had no URI",
                line.number,
                self._stream_inf_line,
            )

        meta: Dict[str, Any] = {}
        bandwidth = self._optional_attribute(attributes, "BANDWIDTH", parse_decimal_integer, line)
        if bandwidth is not None:
            meta["bandwidth"] = bandwidth
        else:
            logging.warning("EXT-X-STREAM-INF on line %s has no usable BANDWIDTH", line.number)
        average = self._optional_attribute(attributes, "AVERAGE-BANDWIDTH", parse_decimal_integer, line)
        if average is not None:
            meta["average-bandwidth"] = average
        program_id = self._optional_attribute(attributes, "PROGRAM-ID", parse_decimal_integer, line)
        if program_id is not None:
            meta["program-id"] = program_id
        if "CODECS" in attributes:
            meta["codecs"] = attributes["CODECS"]
        resolution = self._optional_attribute(attributes, "RESOLUTION", parse_resolution, line)
        if resolution is not None:
            meta["resolution"] = attributes["RESOLUTION"]
            meta["width"], meta["height"] = resolution
        frame_rate = self._optional_attribute(attributes, "FRAME-RATE", parse_float, line)
        if frame_rate is not None:
            meta["frame-rate"] = frame_rate

        for rendition_type in STREAM_INF_GROUP_TYPES:
            group_id = attributes.get(rendition_type.value)
            if group_id is None:
                continue
            if rendition_type is RenditionType.CLOSED_CAPTIONS and group_id.upper() == "NONE":
                continue
            meta[rendition_type.meta_key] = group_id

        self._pending_meta.update(meta)
        self._is_variant = True
        self._stream_inf_line = line.number

    def _handle_extinf(self, value: Optional[str], line: Line) -> None:
        try:
            duration, title = parse_extinf(value)
        except PlaylistAttributeError as exc:
            logging.warning("Ignoring EXTINF on line %s: %s", line.number, exc)
            return
        self._pending_meta["duration"] = duration
        if title is not None:
            self._pending_meta["title"] = title

    def _handle_key(self, value: Optional[str], line: Line) -> None:
        self._cipher.apply_key_tag(value, self.base_uri, line.number)

    def _handle_byte_range(self, value: Optional[str], line: Line) -> None:
        byte_range = self._byte_range.resolve(value, line.number)
        self._pending_meta["range-offset"] = byte_range.offset
        self._pending_meta["range-length"] = byte_range.length

    def _handle_discontinuity(self, value: Optional[str], line: Line) -> None:
        self._pending_meta["discontinuity"] = True

    def _handle_program_date_time(self, value: Optional[str], line: Line) -> None:
        if not value:
            logging.warning("Ignoring empty EXT-X-PROGRAM-DATE-TIME on line %s", line.number)
            return
        self._pending_meta["program-date-time"] = value

    # Media groups

    def _handle_media(self, value: Optional[str], line: Line) -> None:
        try:
            attributes = parse_attribute_list(value)
        except PlaylistAttributeError as exc:
            logging.warning("Ignoring EXT-X-MEDIA on line %s: %s", line.number, exc)
            return

        raw_type = attributes.get("TYPE", "")
        try:
            rendition_type = RenditionType(raw_type.upper())
        except ValueError:
            logging.warning("Ignoring EXT-X-MEDIA on line %s: unknown TYPE %r", line.number, raw_type)
            return

        group_id = attributes.get("GROUP-ID")
        if not group_id:
            logging.warning("Ignoring EXT-X-MEDIA on line %s: GROUP-ID is required", line.number)
            return
        name = attributes.get("NAME", "")

        uri = attributes.get("URI")
        if uri is not None and rendition_type is RenditionType.CLOSED_CAPTIONS:
            logging.warning("Dropping URI of CLOSED-CAPTIONS rendition on line %s", line.number)
            uri = None

        alternate = Alternate(
            name=name,
            uri=resolve_uri(self.base_uri, uri) if uri else None,
            language=attributes.get("LANGUAGE"),
            assoc_language=attributes.get("ASSOC-LANGUAGE"),
            is_default=self._flag_attribute(attributes, "DEFAULT", line),
            is_autoselect=self._flag_attribute(attributes, "AUTOSELECT", line),
            is_forced=self._flag_attribute(attributes, "FORCED", line),
            instream_id=attributes.get("INSTREAM-ID"),
            characteristics=attributes.get("CHARACTERISTICS"),
            channels=attributes.get("CHANNELS"),
        )
        self._media_groups.append(rendition_type, group_id, alternate)

    # Playlist tags

    def _playlist_integer(self, key: str) -> TagHandler:
        def handler(value: Optional[str], line: Line) -> None:
            try:
                self._meta[key] = parse_decimal_integer(value)
            except PlaylistAttributeError as exc:
                logging.warning("Ignoring %s on line %s: %s", key, line.number, exc)

        return handler

    def _playlist_flag(self, key: str) -> TagHandler:
        def handler(value: Optional[str], line: Line) -> None:
            self._meta[key] = True

        return handler

    def _handle_playlist_type(self, value: Optional[str], line: Line) -> None:
        playlist_type = (value or "").upper()
        if playlist_type not in {"EVENT", "VOD"}:
            logging.warning("Ignoring unknown EXT-X-PLAYLIST-TYPE %r on line %s", value, line.number)
            return
        self._meta["playlist-type"] = playlist_type
        if playlist_type == "EVENT":
            self._is_event = True

    def _handle_endlist(self, value: Optional[str], line: Line) -> None:
        self._is_complete = True

    # Helpers

    @staticmethod
    def _optional_attribute(attributes: Dict[str, str], key: str, parser: Callable[[str], Any], line: Line) -> Any:
        raw = attributes.get(key)
        if raw is None:
            return None
        try:
            return parser(raw)
        except PlaylistAttributeError as exc:
            logging.warning("Dropping %s on line %s: %s", key, line.number, exc)
            return None

    @staticmethod
    def _flag_attribute(attributes: Dict[str, str], key: str, line: Line) -> bool:
        try:
            return parse_bool(attributes.get(key))
        except PlaylistAttributeError as exc:
            logging.warning("Dropping %s on line %s: %s", key, line.number, exc)
            return False
