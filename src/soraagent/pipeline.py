from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from soraagent.asset_planner.model import AssetBrief
from soraagent.asset_planner.planner import AssetPlanner, plan_assets
from soraagent.segmenter.model import SceneBeat
from soraagent.segmenter.segmenter import SceneSegmenter, segment
from soraagent.timeline.builder import TimelineBuilder, build_timeline
from soraagent.timeline.model import TimelineShot
from soraagent.wire import WireModel

__all__ = ["PlanningPipeline", "ProductionPlan", "build_plan", "build_timeline", "plan_assets", "segment"]

logger = logging.getLogger(__name__)


class ProductionPlan(WireModel):
    scenes: List[SceneBeat]
    assets: List[AssetBrief]
    timeline: List[TimelineShot]


@dataclass
class PlanningPipeline:
    """Segmenter feeding the asset planner and the timeline builder.

    Holds configuration only; ``plan`` can be called from many threads at once.
    """

    segmenter: SceneSegmenter = field(default_factory=SceneSegmenter)
    asset_planner: AssetPlanner = field(default_factory=AssetPlanner)
    timeline_builder: TimelineBuilder = field(default_factory=TimelineBuilder)

    def plan(self, script: str, tone: str, voice: str, target_duration: str) -> ProductionPlan:
        scenes = self.segmenter.segment(script, tone)
        assets = self.asset_planner.plan(scenes, voice)
        timeline = self.timeline_builder.build(scenes, target_duration)
        logger.debug(
            "Plan ready: %s scenes, %s assets, %s shots", len(scenes), len(assets), len(timeline)
        )
        return ProductionPlan(scenes=scenes, assets=assets, timeline=timeline)


def build_plan(script: str, tone: str, voice: str, target_duration: str) -> ProductionPlan:
    return PlanningPipeline().plan(script, tone, voice, target_duration)
