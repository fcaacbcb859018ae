from __future__ import annotations

from typing import List, Optional

from soraagent.pipeline import ProductionPlan
from soraagent.request import PlanRequest
from soraagent.timeline.model import TimelineShot
from soraagent.wire import WireModel


class StoryboardEntry(WireModel):
    id: str
    title: str
    description: str
    visuals: str
    duration: int


class RenderConfig(WireModel):
    voice: str
    tone: str
    ratio: str
    target_duration: str


class RenderRequest(WireModel):
    """Body posted to the Sora² render endpoint."""

    storyboard: List[StoryboardEntry]
    timeline: List[TimelineShot]
    config: RenderConfig

    @classmethod
    def from_plan(cls, plan: ProductionPlan, request: PlanRequest) -> "RenderRequest":
        return cls(
            storyboard=[
                StoryboardEntry(
                    id=scene.id,
                    title=scene.title,
                    description=scene.summary,
                    visuals=scene.visuals,
                    duration=scene.estimated_duration,
                )
                for scene in plan.scenes
            ],
            timeline=plan.timeline,
            config=RenderConfig(
                voice=request.voice,
                tone=request.tone,
                ratio=request.ratio,
                target_duration=request.duration,
            ),
        )


class RenderJob(WireModel):
    job_id: Optional[str] = None
    preview_url: Optional[str] = None
    status: Optional[str] = None
