"""Utility helpers for URI resolution, errors, HTTP and filesystem access."""

from .file_utils import ensure_directory, read_playlist_file, write_json_report
from .http_client import HttpClient
from .uri_resolver import resolve_uri

__all__ = ["HttpClient", "ensure_directory", "read_playlist_file", "write_json_report", "resolve_uri"]
