"""Pydantic models for playlist items and the per-segment context they carry."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class CipherMethod(str, Enum):
    NONE = "NONE"
    AES_128 = "AES-128"
    SAMPLE_AES = "SAMPLE-AES"
    SAMPLE_AES_CTR = "SAMPLE-AES-CTR"

    @property
    def is_whole_segment(self) -> bool:
        return self is CipherMethod.AES_128

    @property
    def is_sample_level(self) -> bool:
        return self in (CipherMethod.SAMPLE_AES, CipherMethod.SAMPLE_AES_CTR)


class CipherContext(BaseModel):
    """Encryption parameters applied to every following segment until redefined."""

    model_config = ConfigDict(frozen=True)

    method: CipherMethod
    uri: Optional[str] = None
    iv: Optional[str] = None

    def as_meta(self) -> Dict[str, str]:
        meta = {"cipher-method": self.method.value}
        if self.uri is not None:
            meta["cipher-uri"] = self.uri
        if self.iv is not None:
            meta["cipher-iv"] = self.iv
        return meta


class ByteRange(BaseModel):
    """An absolute ``(offset, length)`` slice of a segment resource."""

    model_config = ConfigDict(frozen=True)

    offset: int = Field(ge=0)
    length: int = Field(ge=0)

    @property
    def end(self) -> int:
        return self.offset + self.length


class Item(BaseModel):
    """A top-level playlist entry: a media segment or a variant stream."""

    model_config = ConfigDict(frozen=True)

    uri: str
    meta: Dict[str, Any] = Field(default_factory=dict)

    @property
    def duration(self) -> Optional[float]:
        return self.meta.get("duration")

    @property
    def bandwidth(self) -> Optional[int]:
        return self.meta.get("bandwidth")

    @property
    def byte_range(self) -> Optional[ByteRange]:
        if "range-offset" not in self.meta:
            return None
        return ByteRange(offset=self.meta["range-offset"], length=self.meta["range-length"])
