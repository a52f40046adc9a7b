from __future__ import annotations

import argparse
import logging
import os
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from .models import ParserOptions, RenditionTrackInfo, TrackInfo
from .playlist import M3UPlaylist
from .utils.errors import OutOfRangeError
from .utils.file_utils import file_uri, read_playlist_file, write_json_report
from .utils.http_client import HttpClient

load_dotenv()


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value


def _env_int(name: str) -> int | None:
    value = _env_str(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _env_bool(name: str) -> bool:
    value = _env_str(name)
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _is_remote(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Inspect an HLS (m3u8) playlist.")
    parser.add_argument("source", help="Local playlist path or http(s) URL")
    parser.add_argument("--base-uri", default=_env_str("HLS_BASE_URI"), help="URI relative references resolve against")
    parser.add_argument(
        "--require-extm3u",
        action="store_true",
        default=_env_bool("HLS_REQUIRE_EXTM3U"),
        help="Reject playlists that do not start with #EXTM3U",
    )
    parser.add_argument(
        "--preferred-language",
        default=_env_str("HLS_PREFERRED_LANGUAGE"),
        help="Language preferred when picking default renditions",
    )
    parser.add_argument(
        "--random-seed",
        type=int,
        default=_env_int("HLS_RANDOM_SEED"),
        help="Seed for pseudo-random default rendition picks",
    )
    parser.add_argument("--pick-defaults", action="store_true", help="Pick a default alternate for every media group")
    parser.add_argument("--select", type=int, default=None, help="Index of the item to mark as selected")
    parser.add_argument("--json", dest="json_path", default=None, help="Write track info records to this file")
    parser.add_argument("--timeout", type=int, default=_env_int("HLS_HTTP_TIMEOUT") or 10, help="HTTP timeout in seconds")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def load_source(args: argparse.Namespace) -> tuple[str, bytes]:
    """Returns ``(base_uri, data)`` for the requested playlist."""

    if _is_remote(args.source):
        with HttpClient(timeout=args.timeout) as client:
            final_url, data = client.fetch_playlist(args.source)
        return args.base_uri or final_url, data
    return args.base_uri or file_uri(args.source), read_playlist_file(args.source)


def build_options(args: argparse.Namespace) -> ParserOptions:
    return ParserOptions(
        require_extm3u=args.require_extm3u,
        preferred_language=args.preferred_language,
        random_seed=args.random_seed,
    )


def print_summary(playlist: M3UPlaylist) -> None:
    logging.info(
        "extm3u=%s variant=%s complete=%s event=%s items=%s groups=%s",
        playlist.is_extension_format(),
        playlist.is_variant(),
        playlist.is_complete(),
        playlist.is_event(),
        playlist.size(),
        len(playlist.media_groups),
    )
    for key, value in playlist.playlist_meta().items():
        logging.info("  %s: %s", key, value)


def print_tracks(tracks: List[TrackInfo]) -> None:
    if not tracks:
        logging.info("Playlist has no items.")
        return
    logging.info("%-5s | %-8s | %-4s | %-10s | %s", "Index", "Kind", "Lang", "Bandwidth", "URI")
    logging.info("%s", "-" * 80)
    for track in tracks:
        marker = "*" if track.selected else " "
        logging.info(
            "%s%-4s | %-8s | %-4s | %-10s | %s",
            marker,
            track.index,
            track.kind.value,
            track.language or "-",
            track.bandwidth if track.bandwidth is not None else "-",
            track.uri,
        )


def print_renditions(renditions: List[RenditionTrackInfo]) -> None:
    if not renditions:
        return
    logging.info("%-15s | %-12s | %-20s | %-4s | %s", "Type", "Group", "Name", "Lang", "URI")
    logging.info("%s", "-" * 80)
    for rendition in renditions:
        marker = "*" if rendition.selected else " "
        logging.info(
            "%s%-14s | %-12s | %-20s | %-4s | %s",
            marker,
            rendition.rendition_type.value,
            rendition.group_id,
            rendition.name,
            rendition.language,
            rendition.uri or "-",
        )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        base_uri, data = load_source(args)
    except Exception as exc:
        logging.error("Unable to load %s: %s", args.source, exc)
        return 1

    playlist = M3UPlaylist(base_uri, data, build_options(args))
    if not playlist.init_check():
        return 2

    if args.pick_defaults:
        playlist.pick_random_media_items()
    if args.select is not None:
        try:
            playlist.select_track(args.select, True)
        except OutOfRangeError as exc:
            logging.error("%s", exc)
            return 1

    tracks = playlist.get_track_info()
    renditions = playlist.get_rendition_track_info()
    print_summary(playlist)
    print_tracks(tracks)
    print_renditions(renditions)

    if args.json_path:
        write_json_report(
            args.json_path,
            {
                "base_uri": playlist.base_uri,
                "tracks": [track.model_dump(mode="json") for track in tracks],
                "renditions": [rendition.model_dump(mode="json") for rendition in renditions],
            },
        )
        logging.info("Wrote track info to %s", args.json_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
