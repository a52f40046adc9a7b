"""HTTP helper that fetches playlist bytes for the command-line inspector."""

from __future__ import annotations

import logging
from typing import Dict, Tuple

import requests

USER_AGENT = "hls-playlist-parser/0.1"

PLAYLIST_HEADERS: Dict[str, str] = {
    "user-agent": USER_AGENT,
    "accept": "application/vnd.apple.mpegurl, application/x-mpegurl, */*",
}


class HttpClient:
    """Downloads playlists with shared headers and a per-request timeout."""

    def __init__(self, timeout: int = 10) -> None:
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update(PLAYLIST_HEADERS)

    def fetch_playlist(self, url: str) -> Tuple[str, bytes]:
        """Returns the final URL after redirects and the raw playlist bytes."""

        try:
            response = self._session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:  # pragma: no cover - network errors
            logging.error("Playlist download from %s failed: %s", url, exc)
            raise
        logging.debug("Fetched %s bytes from %s", len(response.content), response.url)
        return response.url or url, response.content

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
