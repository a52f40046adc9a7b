"""Parser and selection settings."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class ParserOptions(BaseModel):
    """Knobs for parse strictness and default rendition picking."""

    require_extm3u: bool = False
    preferred_language: Optional[str] = None
    random_seed: Optional[int] = None
