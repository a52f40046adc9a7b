"""Grammar helpers for a single M3U8 tag line.

Every helper raises :class:`PlaylistAttributeError` on malformed input so the
builder can decide whether the failure drops one attribute, drops the whole
tag, or becomes a structural error.
"""

from __future__ import annotations

import re
from typing import Dict, NamedTuple, Optional, Tuple

from ..utils.errors import PlaylistAttributeError

_KEY_RE = re.compile(r"[A-Za-z0-9\-]+")
_BARE_VALUE_RE = re.compile(r"[^\",\s]+")
_INTEGER_RE = re.compile(r"\d+")
_FLOAT_RE = re.compile(r"-?\d+(\.\d*)?|-?\.\d+")
_HEX_RE = re.compile(r"0[xX][0-9A-Fa-f]+")
_RESOLUTION_RE = re.compile(r"(\d+)[xX](\d+)")


class Tag(NamedTuple):
    name: str
    value: Optional[str]


def split_tag(line: str) -> Tag:
    """Splits ``#NAME:VALUE`` into its name and optional value."""

    name, sep, value = line.partition(":")
    return Tag(name.strip().upper(), value.strip() if sep else None)


def parse_attribute_list(value: Optional[str]) -> Dict[str, str]:
    """Parses ``KEY=VALUE,KEY="quoted, value"`` into an ordered mapping.

    Keys are upper-cased; the first occurrence of a duplicate key wins.
    Quoted values are returned without their quotes.
    """

    attributes: Dict[str, str] = {}
    if not value:
        return attributes

    pos = 0
    length = len(value)
    while pos < length:
        eq = value.find("=", pos)
        if eq < 0:
            raise PlaylistAttributeError(f"missing '=' in attribute list {value!r}")
        key = value[pos:eq].strip()
        if not _KEY_RE.fullmatch(key):
            raise PlaylistAttributeError(f"invalid attribute name {key!r}")

        pos = eq + 1
        while pos < length and value[pos] in " \t":
            pos += 1
        if value.startswith('"', pos):
            end = value.find('"', pos + 1)
            if end < 0:
                raise PlaylistAttributeError(f"unterminated quoted string for {key}")
            attr_value = value[pos + 1 : end]
            pos = end + 1
        else:
            end = value.find(",", pos)
            if end < 0:
                end = length
            attr_value = value[pos:end].strip()
            if not _BARE_VALUE_RE.fullmatch(attr_value):
                raise PlaylistAttributeError(f"invalid value {attr_value!r} for {key}")
            pos = end

        while pos < length and value[pos] in " \t":
            pos += 1
        if pos < length:
            if value[pos] != ",":
                raise PlaylistAttributeError(f"expected ',' after {key} at offset {pos}")
            pos += 1

        attributes.setdefault(key.upper(), attr_value)
    return attributes


def parse_decimal_integer(value: Optional[str]) -> int:
    if value is None or not _INTEGER_RE.fullmatch(value.strip()):
        raise PlaylistAttributeError(f"not a decimal integer: {value!r}")
    return int(value)


def parse_float(value: Optional[str]) -> float:
    if value is None or not _FLOAT_RE.fullmatch(value.strip()):
        raise PlaylistAttributeError(f"not a decimal number: {value!r}")
    return float(value)


def parse_bool(value: Optional[str], default: bool = False) -> bool:
    """Parses the ``YES``/``NO`` enumerated string."""

    if value is None:
        return default
    upper = value.upper()
    if upper == "YES":
        return True
    if upper == "NO":
        return False
    raise PlaylistAttributeError(f"expected YES or NO, got {value!r}")


def parse_hex(value: Optional[str]) -> str:
    """Validates a ``0x`` hexadecimal literal and returns it normalized."""

    if value is None or not _HEX_RE.fullmatch(value):
        raise PlaylistAttributeError(f"not a hexadecimal sequence: {value!r}")
    return "0x" + value[2:].lower()


def parse_resolution(value: Optional[str]) -> Tuple[int, int]:
    match = _RESOLUTION_RE.fullmatch(value or "")
    if match is None:
        raise PlaylistAttributeError(f"not a resolution: {value!r}")
    return int(match.group(1)), int(match.group(2))


def parse_extinf(value: Optional[str]) -> Tuple[float, Optional[str]]:
    """Parses ``<duration>,[<title>]`` from an EXTINF tag."""

    duration_text, _, title = (value or "").partition(",")
    duration = parse_float(duration_text)
    if duration < 0:
        raise PlaylistAttributeError(f"negative duration {duration_text!r}")
    title = title.strip()
    return duration, title or None
