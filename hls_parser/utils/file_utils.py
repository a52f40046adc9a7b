"""Filesystem helpers for reading playlists and writing track reports."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any


def ensure_directory(path: str) -> str:
    """Creates a directory (and its parents) if needed."""

    Path(path).mkdir(parents=True, exist_ok=True)
    return path


def read_playlist_file(path: str) -> bytes:
    with open(path, "rb") as handle:
        return handle.read()


def file_uri(path: str) -> str:
    """Returns a ``file://`` URI usable as the base for a local playlist."""

    return Path(os.path.abspath(path)).as_uri()


def write_json_report(path: str, payload: Any) -> None:
    ensure_directory(os.path.dirname(os.path.abspath(path)) or ".")
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(payload, handle, ensure_ascii=False, indent=2)
