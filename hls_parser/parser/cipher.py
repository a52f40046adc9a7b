"""Tracks the EXT-X-KEY encryption context across segments."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from ..models import CipherContext, CipherMethod
from ..utils.errors import PlaylistAttributeError, StructuralError
from ..utils.uri_resolver import resolve_uri
from .tag_parser import parse_attribute_list, parse_hex


class CipherContextTracker:
    """Holds the active cipher until a new key tag replaces or clears it."""

    def __init__(self) -> None:
        self.current: Optional[CipherContext] = None

    def apply_key_tag(self, value: Optional[str], base_uri: str, line_number: int) -> Optional[CipherContext]:
        """Parses an EXT-X-KEY value and makes it the active context.

        Any violation of the key contract is structural: segments after a
        broken key tag cannot be decrypted correctly.
        """

        try:
            attributes = parse_attribute_list(value)
        except PlaylistAttributeError as exc:
            raise StructuralError(f"malformed EXT-X-KEY: {exc}", line_number) from exc

        raw_method = attributes.get("METHOD")
        if not raw_method:
            raise StructuralError("EXT-X-KEY without METHOD", line_number)
        try:
            method = CipherMethod(raw_method.upper())
        except ValueError as exc:
            raise StructuralError(f"unsupported cipher method {raw_method!r}", line_number) from exc

        if method is CipherMethod.NONE:
            if self.current is not None:
                logging.debug("Cipher context cleared on line %s", line_number)
            self.current = None
            return None

        uri = attributes.get("URI")
        if not uri:
            raise StructuralError(f"EXT-X-KEY METHOD={method.value} without URI", line_number)

        iv = attributes.get("IV")
        if iv is not None:
            try:
                iv = parse_hex(iv)
            except PlaylistAttributeError as exc:
                raise StructuralError(f"malformed EXT-X-KEY IV: {exc}", line_number) from exc

        self.current = CipherContext(method=method, uri=resolve_uri(base_uri, uri), iv=iv)
        return self.current

    def snapshot(self) -> Dict[str, str]:
        """Returns the metadata to stamp onto the next item."""

        if self.current is None:
            return {}
        return self.current.as_meta()
