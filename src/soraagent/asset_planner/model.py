from __future__ import annotations

from typing import Literal

from pydantic import Field

from soraagent.wire import WireModel

AssetType = Literal["voiceover", "b-roll", "music", "caption"]


class AssetBrief(WireModel):
    id: str
    type: AssetType
    owner: str
    description: str
    notes: str
    scene_id: str = Field(description="Beat the brief was generated for")
