"""Track selection and rendition URI lookups over a parsed playlist."""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

from ..models import Item, ParserOptions, RenditionTrackInfo, RenditionType, TrackInfo, TrackKind
from ..parser.media_groups import MediaGroup, MediaGroupRegistry
from ..utils.errors import OutOfRangeError

VIDEO_CODEC_PREFIXES = ("avc1", "avc3", "hvc1", "hev1", "dvh1", "dvhe", "vp08", "vp09", "av01", "mp4v")
AUDIO_CODEC_PREFIXES = ("mp4a", "ac-3", "ec-3", "ac-4", "opus", "flac", "alac")
SUBTITLE_CODEC_PREFIXES = ("wvtt", "stpp")

SUBTITLE_MIME = "text/vtt"


def classify_item(item: Item) -> TrackKind:
    """Guesses what a top-level item carries from its CODECS and group references."""

    codecs = [codec.strip().lower() for codec in (item.meta.get("codecs") or "").split(",") if codec.strip()]
    if any(codec.startswith(VIDEO_CODEC_PREFIXES) for codec in codecs):
        return TrackKind.VIDEO
    if any(codec.startswith(AUDIO_CODEC_PREFIXES) for codec in codecs):
        return TrackKind.AUDIO
    if any(codec.startswith(SUBTITLE_CODEC_PREFIXES) for codec in codecs):
        return TrackKind.SUBTITLE
    if "resolution" in item.meta or "video" in item.meta:
        return TrackKind.VIDEO
    return TrackKind.UNKNOWN


class TrackSelector:
    """Owns the mutable selection state of one parsed playlist.

    Not thread-safe: ``select_track``, ``select_rendition`` and
    ``pick_random_media_items`` must be serialized by the caller.
    """

    def __init__(
        self,
        items: Sequence[Item],
        media_groups: MediaGroupRegistry,
        options: Optional[ParserOptions] = None,
    ) -> None:
        self._items = items
        self._media_groups = media_groups
        self._options = options or ParserOptions()
        self._random = random.Random(self._options.random_seed) if self._options.random_seed is not None else None
        self._selected_index = -1

    @property
    def selected_index(self) -> int:
        return self._selected_index

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._items):
            raise OutOfRangeError(f"item {index} out of range (size {len(self._items)})")

    def select_track(self, index: int, select: bool) -> None:
        self._check_index(index)
        if select:
            self._selected_index = index
        elif self._selected_index == index:
            self._selected_index = -1

    def select_rendition(self, rendition_type: RenditionType, group_id: str, index: int, select: bool = True) -> None:
        self._media_groups.require(rendition_type, group_id).select(index, select)

    def pick_random_media_items(self) -> None:
        """Gives every group without a DEFAULT=YES alternate an effective default.

        Autoselect alternates are preferred, then the configured language.
        With a random seed the pick among candidates is pseudo-random,
        otherwise the first candidate wins. Groups that already have a
        default or a pick are left alone.
        """

        for group in self._media_groups:
            if not len(group) or group.default_index() >= 0 or group.selected_index >= 0:
                continue
            index = self._pick_index(group)
            group.select(index)
            logging.debug(
                "Picked %s alternate %r for group %s",
                group.rendition_type.value,
                group.alternates[index].name,
                group.group_id,
            )

    def _pick_index(self, group: MediaGroup) -> int:
        alternates = group.alternates
        candidates = [i for i, alternate in enumerate(alternates) if alternate.is_autoselect]
        if not candidates:
            candidates = list(range(len(alternates)))

        language = self._options.preferred_language
        if language:
            matching = [i for i in candidates if (alternates[i].language or "").lower() == language.lower()]
            if matching:
                candidates = matching

        if self._random is not None:
            return self._random.choice(candidates)
        return candidates[0]

    def _group_for(self, item: Item, rendition_type: RenditionType) -> Optional[MediaGroup]:
        return self._media_groups.lookup(rendition_type, item.meta.get(rendition_type.meta_key))

    def get_uri(self, index: int, rendition_type: RenditionType) -> Optional[str]:
        """URI of the effective alternate the item references, or ``None``."""

        self._check_index(index)
        item = self._items[index]
        group_id = item.meta.get(rendition_type.meta_key)
        if group_id is None:
            return None
        group = self._media_groups.lookup(rendition_type, group_id)
        if group is None:
            logging.debug("Item %s references undeclared %s group %r", index, rendition_type.value, group_id)
            return None
        alternate = group.effective_alternate()
        if alternate is None:
            return None
        return alternate.uri

    def get_audio_uri(self, index: int) -> Optional[str]:
        return self.get_uri(index, RenditionType.AUDIO)

    def get_video_uri(self, index: int) -> Optional[str]:
        return self.get_uri(index, RenditionType.VIDEO)

    def get_subtitle_uri(self, index: int) -> Optional[str]:
        return self.get_uri(index, RenditionType.SUBTITLES)

    def _language_for(self, item: Item, kind: TrackKind) -> Optional[str]:
        if kind is TrackKind.SUBTITLE:
            lookup_order = (RenditionType.SUBTITLES,)
        else:
            lookup_order = (RenditionType.AUDIO, RenditionType.SUBTITLES)
        for rendition_type in lookup_order:
            group = self._group_for(item, rendition_type)
            alternate = group.effective_alternate() if group else None
            if alternate is not None and alternate.language:
                return alternate.language
        return None

    def get_track_info(self) -> List[TrackInfo]:
        tracks: List[TrackInfo] = []
        for index, item in enumerate(self._items):
            kind = classify_item(item)
            tracks.append(
                TrackInfo(
                    index=index,
                    uri=item.uri,
                    kind=kind,
                    language=self._language_for(item, kind),
                    selected=index == self._selected_index,
                    bandwidth=item.meta.get("bandwidth"),
                    audio_group=item.meta.get(RenditionType.AUDIO.meta_key),
                    video_group=item.meta.get(RenditionType.VIDEO.meta_key),
                    subtitle_group=item.meta.get(RenditionType.SUBTITLES.meta_key),
                )
            )
        return tracks

    def get_rendition_track_info(self) -> List[RenditionTrackInfo]:
        tracks: List[RenditionTrackInfo] = []
        for group in self._media_groups:
            effective = group.effective_index()
            for index, alternate in enumerate(group.alternates):
                tracks.append(
                    RenditionTrackInfo(
                        rendition_type=group.rendition_type,
                        group_id=group.group_id,
                        index=index,
                        name=alternate.name,
                        language=alternate.language or "und",
                        uri=alternate.uri,
                        mime=SUBTITLE_MIME if group.rendition_type is RenditionType.SUBTITLES else None,
                        is_default=alternate.is_default,
                        is_autoselect=alternate.is_autoselect,
                        is_forced=alternate.is_forced,
                        selected=index == effective,
                    )
                )
        return tracks
