"""Models describing alternate renditions declared by EXT-X-MEDIA."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class RenditionType(str, Enum):
    AUDIO = "AUDIO"
    VIDEO = "VIDEO"
    SUBTITLES = "SUBTITLES"
    CLOSED_CAPTIONS = "CLOSED-CAPTIONS"

    @property
    def meta_key(self) -> str:
        """Item metadata key holding a variant's reference to this group type."""

        return self.value.lower()


class Alternate(BaseModel):
    """One rendition inside a media group, in source order."""

    model_config = ConfigDict(frozen=True)

    name: str
    uri: Optional[str] = None
    language: Optional[str] = None
    assoc_language: Optional[str] = None
    is_default: bool = False
    is_autoselect: bool = False
    is_forced: bool = False
    instream_id: Optional[str] = None
    characteristics: Optional[str] = None
    channels: Optional[str] = None
