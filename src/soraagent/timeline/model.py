from __future__ import annotations

from pydantic import BaseModel, Field

from soraagent.wire import WireModel


class TimelineShot(WireModel):
    """Render directive for one scene, in narrative order."""

    id: str
    label: str
    duration: int = Field(gt=0)
    goal: str
    prompt: str
    camera: str
    motion: str
    audio: str
    scene_id: str
    start: int = Field(default=0, ge=0, description="Offset from the start of the cut in seconds")


class DurationRange(BaseModel):
    min_seconds: int = Field(gt=0)
    max_seconds: int = Field(gt=0)

    @property
    def target_seconds(self) -> int:
        return round((self.min_seconds + self.max_seconds) / 2)

    def contains(self, seconds: float, tolerance: float = 0.0) -> bool:
        return self.min_seconds - tolerance <= seconds <= self.max_seconds + tolerance
