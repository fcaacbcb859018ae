from __future__ import annotations

from pydantic import Field

from soraagent.wire import WireModel


class SceneBeat(WireModel):
    """One narrative beat of the script, mapped to one scene."""

    id: str
    title: str
    summary: str
    visuals: str
    estimated_duration: int = Field(gt=0, description="Reading-pace estimate in whole seconds")
    location: str
