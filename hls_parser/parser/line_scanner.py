"""Split raw playlist bytes into the lines the tag parser consumes."""

from __future__ import annotations

from typing import List, NamedTuple, Union

TAG_PREFIX = "#EXT"
COMMENT_PREFIX = "#"

PlaylistData = Union[bytes, bytearray, memoryview, str]


class Line(NamedTuple):
    number: int
    text: str

    @property
    def is_tag(self) -> bool:
        return self.text.startswith(TAG_PREFIX)

    @property
    def is_comment(self) -> bool:
        return self.text.startswith(COMMENT_PREFIX) and not self.is_tag


def decode_playlist(data: PlaylistData) -> str:
    """Decodes playlist bytes as UTF-8, dropping a leading byte-order mark."""

    if isinstance(data, str):
        text = data
    else:
        text = bytes(data).decode("utf-8", errors="replace")
    return text.lstrip("\ufeff")


def scan_lines(data: PlaylistData, keep_comments: bool = False) -> List[Line]:
    """Returns trimmed, non-empty lines in source order.

    Plain comments are dropped unless ``keep_comments`` is set; tag lines
    (``#EXT...``) are always kept. Line numbers are 1-based positions in the
    original buffer.
    """

    lines: List[Line] = []
    for number, raw_line in enumerate(decode_playlist(data).splitlines(), start=1):
        text = raw_line.strip()
        if not text:
            continue
        line = Line(number, text)
        if line.is_comment and not keep_comments:
            continue
        lines.append(line)
    return lines
