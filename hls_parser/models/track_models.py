"""Track description records handed to the player's track-info protocol."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from .rendition_models import RenditionType


class TrackKind(str, Enum):
    AUDIO = "audio"
    VIDEO = "video"
    SUBTITLE = "subtitle"
    UNKNOWN = "unknown"


class TrackInfo(BaseModel):
    """Display attributes of a top-level playlist item."""

    index: int
    uri: str
    kind: TrackKind
    language: Optional[str] = None
    selected: bool = False
    bandwidth: Optional[int] = None
    audio_group: Optional[str] = None
    video_group: Optional[str] = None
    subtitle_group: Optional[str] = None


class RenditionTrackInfo(BaseModel):
    """Display attributes of one alternate rendition inside a media group."""

    rendition_type: RenditionType
    group_id: str
    index: int
    name: str
    language: str = "und"
    uri: Optional[str] = None
    mime: Optional[str] = None
    is_default: bool = False
    is_autoselect: bool = False
    is_forced: bool = False
    selected: bool = False
