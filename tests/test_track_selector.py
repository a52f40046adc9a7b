"""Tests for track selection, default picking and rendition URI lookups."""

from __future__ import annotations

import pytest

from hls_parser import M3UPlaylist, NotFoundError, OutOfRangeError, ParserOptions, RenditionType, TrackKind
from hls_parser.models import Item
from hls_parser.playlist import classify_item

BASE_URI = "http://h/a/b.m3u8"

SUBTITLE_CHOICES = """#EXTM3U
#EXT-X-MEDIA:TYPE=SUBTITLES,GROUP-ID="subs",NAME="Francais",LANGUAGE="fr",AUTOSELECT=YES,URI="fr.m3u8"
#EXT-X-MEDIA:TYPE=SUBTITLES,GROUP-ID="subs",NAME="Espanol",LANGUAGE="es",AUTOSELECT=YES,URI="es.m3u8"
#EXT-X-MEDIA:TYPE=SUBTITLES,GROUP-ID="subs",NAME="Italiano",LANGUAGE="it",AUTOSELECT=YES,URI="it.m3u8"
#EXT-X-STREAM-INF:BANDWIDTH=100,SUBTITLES="subs"
v.m3u8
"""


def test_select_and_deselect_track(master_playlist: str) -> None:
    playlist = M3UPlaylist(BASE_URI, master_playlist)
    assert playlist.get_selected_index() == -1

    playlist.select_track(1, True)
    assert playlist.get_selected_index() == 1

    playlist.select_track(0, False)
    assert playlist.get_selected_index() == 1

    playlist.select_track(1, False)
    assert playlist.get_selected_index() == -1


@pytest.mark.parametrize("index", [3, 99, -1])
def test_select_track_out_of_range_keeps_selection(master_playlist: str, index: int) -> None:
    playlist = M3UPlaylist(BASE_URI, master_playlist)
    playlist.select_track(2, True)

    with pytest.raises(OutOfRangeError):
        playlist.select_track(index, True)
    assert playlist.get_selected_index() == 2


def test_item_lookups_out_of_range(master_playlist: str) -> None:
    playlist = M3UPlaylist(BASE_URI, master_playlist)
    with pytest.raises(OutOfRangeError):
        playlist.item_at(3)
    with pytest.raises(OutOfRangeError):
        playlist.get_audio_uri(3)
    with pytest.raises(IndexError):
        playlist.get_subtitle_uri(-1)


def test_audio_uri_uses_default_alternate(master_playlist: str) -> None:
    playlist = M3UPlaylist(BASE_URI, master_playlist)
    assert playlist.get_audio_uri(0) == "http://h/a/audio/en.m3u8"
    assert playlist.get_audio_uri(2) == "http://h/a/audio/en.m3u8"


def test_group_without_default_needs_a_pick(master_playlist: str) -> None:
    playlist = M3UPlaylist(BASE_URI, master_playlist)
    assert playlist.get_subtitle_uri(0) is None

    playlist.pick_random_media_items()
    assert playlist.get_subtitle_uri(0) == "http://h/a/subs/es.m3u8"
    assert playlist.get_subtitle_uri(1) is None


def test_pick_is_idempotent_and_leaves_defaults_alone(master_playlist: str) -> None:
    playlist = M3UPlaylist(BASE_URI, master_playlist)
    playlist.pick_random_media_items()
    audio = playlist.media_groups.lookup(RenditionType.AUDIO, "aac")
    subs = playlist.media_groups.lookup(RenditionType.SUBTITLES, "subs")
    assert audio.selected_index == -1
    assert subs.selected_index == 1

    playlist.select_rendition(RenditionType.SUBTITLES, "subs", 0)
    playlist.pick_random_media_items()
    assert subs.selected_index == 0


def test_pick_prefers_configured_language() -> None:
    playlist = M3UPlaylist(BASE_URI, SUBTITLE_CHOICES, ParserOptions(preferred_language="ES"))
    playlist.pick_random_media_items()
    assert playlist.get_subtitle_uri(0) == "http://h/a/es.m3u8"


def test_pick_without_preferences_takes_first_candidate() -> None:
    playlist = M3UPlaylist(BASE_URI, SUBTITLE_CHOICES)
    playlist.pick_random_media_items()
    assert playlist.get_subtitle_uri(0) == "http://h/a/fr.m3u8"


def test_seeded_pick_is_reproducible() -> None:
    picks = set()
    for _ in range(3):
        playlist = M3UPlaylist(BASE_URI, SUBTITLE_CHOICES, ParserOptions(random_seed=1234))
        playlist.pick_random_media_items()
        picks.add(playlist.get_subtitle_uri(0))
    assert len(picks) == 1
    assert picks.pop() in {"http://h/a/fr.m3u8", "http://h/a/es.m3u8", "http://h/a/it.m3u8"}


def test_select_rendition_overrides_default(master_playlist: str) -> None:
    playlist = M3UPlaylist(BASE_URI, master_playlist)

    playlist.select_rendition(RenditionType.AUDIO, "aac", 1)
    assert playlist.get_audio_uri(0) == "http://h/a/audio/de.m3u8"

    playlist.select_rendition(RenditionType.AUDIO, "aac", 1, select=False)
    assert playlist.get_audio_uri(0) == "http://h/a/audio/en.m3u8"

    with pytest.raises(NotFoundError):
        playlist.select_rendition(RenditionType.AUDIO, "nope", 0)
    with pytest.raises(OutOfRangeError):
        playlist.select_rendition(RenditionType.AUDIO, "aac", 2)


def test_video_group_uri() -> None:
    data = (
        "#EXTM3U\n"
        '#EXT-X-MEDIA:TYPE=VIDEO,GROUP-ID="cams",NAME="Wide",DEFAULT=YES,URI="wide.m3u8"\n'
        '#EXT-X-MEDIA:TYPE=VIDEO,GROUP-ID="cams",NAME="Close",URI="close.m3u8"\n'
        '#EXT-X-STREAM-INF:BANDWIDTH=500,VIDEO="cams"\n'
        "main.m3u8\n"
    )
    playlist = M3UPlaylist(BASE_URI, data)
    assert playlist.get_video_uri(0) == "http://h/a/wide.m3u8"
    assert playlist.get_track_info()[0].kind is TrackKind.VIDEO


def test_group_alternate_without_uri_is_not_found() -> None:
    data = (
        "#EXTM3U\n"
        '#EXT-X-MEDIA:TYPE=AUDIO,GROUP-ID="muxed",NAME="Main",DEFAULT=YES\n'
        '#EXT-X-STREAM-INF:BANDWIDTH=500,AUDIO="muxed"\n'
        "main.m3u8\n"
    )
    assert M3UPlaylist(BASE_URI, data).get_audio_uri(0) is None


def test_track_info_records(master_playlist: str) -> None:
    playlist = M3UPlaylist(BASE_URI, master_playlist)
    playlist.select_track(2, True)
    tracks = playlist.get_track_info()

    assert [track.index for track in tracks] == [0, 1, 2]
    assert [track.kind for track in tracks] == [TrackKind.VIDEO, TrackKind.VIDEO, TrackKind.AUDIO]
    assert [track.language for track in tracks] == ["en", "en", "en"]
    assert [track.selected for track in tracks] == [False, False, True]
    assert tracks[0].bandwidth == 1280000
    assert tracks[0].audio_group == "aac"
    assert tracks[0].subtitle_group == "subs"
    assert tracks[1].subtitle_group is None


def test_track_info_for_media_playlist() -> None:
    playlist = M3UPlaylist(BASE_URI, "#EXTM3U\n#EXTINF:4,\na.ts\n#EXTINF:4,\nb.ts\n")
    tracks = playlist.get_track_info()
    assert [track.kind for track in tracks] == [TrackKind.UNKNOWN, TrackKind.UNKNOWN]
    assert all(track.language is None for track in tracks)
    assert tracks[1].uri == "http://h/a/b.ts"


def test_subtitle_language_in_track_info() -> None:
    playlist = M3UPlaylist(BASE_URI, SUBTITLE_CHOICES, ParserOptions(preferred_language="it"))
    assert playlist.get_track_info()[0].language is None

    playlist.pick_random_media_items()
    assert playlist.get_track_info()[0].language == "it"


def test_rendition_track_info(master_playlist: str) -> None:
    playlist = M3UPlaylist(BASE_URI, master_playlist)
    renditions = playlist.get_rendition_track_info()

    assert [(r.rendition_type, r.group_id, r.name) for r in renditions] == [
        (RenditionType.AUDIO, "aac", "English"),
        (RenditionType.AUDIO, "aac", "Deutsch"),
        (RenditionType.SUBTITLES, "subs", "Francais"),
        (RenditionType.SUBTITLES, "subs", "Espanol"),
        (RenditionType.CLOSED_CAPTIONS, "cc", "CC1"),
    ]
    assert [r.selected for r in renditions] == [True, False, False, False, True]
    assert renditions[2].mime == "text/vtt"
    assert renditions[0].mime is None
    assert renditions[4].language == "und"
    assert renditions[4].uri is None


@pytest.mark.parametrize(
    "meta, expected",
    [
        ({"codecs": "avc1.64001f,mp4a.40.2"}, TrackKind.VIDEO),
        ({"codecs": "hvc1.1.6.L93.B0"}, TrackKind.VIDEO),
        ({"codecs": "mp4a.40.5"}, TrackKind.AUDIO),
        ({"codecs": "ec-3"}, TrackKind.AUDIO),
        ({"codecs": "wvtt"}, TrackKind.SUBTITLE),
        ({"resolution": "640x360"}, TrackKind.VIDEO),
        ({"bandwidth": 100}, TrackKind.UNKNOWN),
        ({}, TrackKind.UNKNOWN),
    ],
)
def test_classify_item(meta, expected) -> None:
    assert classify_item(Item(uri="x.m3u8", meta=meta)) is expected
