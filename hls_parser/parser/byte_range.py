"""Resolves EXT-X-BYTERANGE values into absolute offsets."""

from __future__ import annotations

import re
from typing import Optional, Tuple

from ..models import ByteRange
from ..utils.errors import StructuralError

_BYTE_RANGE_RE = re.compile(r"(\d+)(?:@(\d+))?")


def parse_byte_range(value: Optional[str]) -> Tuple[int, Optional[int]]:
    """Splits ``length[@offset]``; returns ``None`` for an omitted offset."""

    match = _BYTE_RANGE_RE.fullmatch((value or "").strip())
    if match is None:
        raise ValueError(f"malformed byte range {value!r}")
    offset = match.group(2)
    return int(match.group(1)), int(offset) if offset is not None else None


class ByteRangeCursor:
    """Running byte offset used when a range omits its ``@offset``."""

    def __init__(self) -> None:
        self.offset = 0

    def resolve(self, value: Optional[str], line_number: int) -> ByteRange:
        try:
            length, offset = parse_byte_range(value)
        except ValueError as exc:
            raise StructuralError(str(exc), line_number) from exc

        if offset is None:
            offset = self.offset
        byte_range = ByteRange(offset=offset, length=length)
        self.offset = byte_range.end
        return byte_range
