from __future__ import annotations

import json
import logging
import os
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import requests
from pydantic import BaseModel

from soraagent.asset_planner.model import AssetBrief
from soraagent.asset_planner.planner import AssetPlanner
from soraagent.pipeline import PlanningPipeline, ProductionPlan
from soraagent.render_dispatch.model import RenderRequest
from soraagent.render_dispatch.sora_client import DEFAULT_API_URL, RenderDispatchError, SoraRenderClient
from soraagent.request import (
    DEFAULT_DURATION,
    DEFAULT_RATIO,
    DEFAULT_TONE,
    DEFAULT_VOICE,
    PlanRequest,
)
from soraagent.segmenter.model import SceneBeat
from soraagent.segmenter.segmenter import MAX_CLUSTER_WORDS, MIN_BEAT_SECONDS, WORDS_PER_SECOND, SceneSegmenter
from soraagent.timeline.builder import TimelineBuilder
from soraagent.timeline.model import TimelineShot
from soraagent.wire import WireModel

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW = "https://storage.googleapis.com/coverr-main/mp4/Mt_Baker.mp4"

MESSAGE_DISPATCHED = "Sora² render job dispatched successfully."
MESSAGE_UNREACHABLE = "Sora² API unreachable. Returning local preview with orchestration data."
MESSAGE_SKIPPED = "Render dispatch skipped. Returning local orchestration preview."


class PipelineConfig(BaseModel):
    default_tone: str = DEFAULT_TONE
    default_duration: str = DEFAULT_DURATION
    default_ratio: str = DEFAULT_RATIO
    default_voice: str = DEFAULT_VOICE
    # Segmentation heuristics
    words_per_second: float = WORDS_PER_SECOND
    min_beat_seconds: int = MIN_BEAT_SECONDS
    max_cluster_words: int = MAX_CLUSTER_WORDS
    # Sora² dispatch
    sora_api_key_env: str = "SORA2_API_KEY"
    sora_api_url_env: str = "SORA2_API_URL"
    sora_api_url: str = DEFAULT_API_URL
    sora_request_timeout: float = 12.0
    preview_url: str = DEFAULT_PREVIEW

    @classmethod
    def from_file(cls, path: Path) -> "PipelineConfig":
        text = path.read_text(encoding="utf-8")
        try:
            payload = json.loads(text)
        except json.JSONDecodeError:
            import yaml

            payload = yaml.safe_load(text)
        return cls.model_validate(payload or {})

    @property
    def request_defaults(self) -> dict[str, str]:
        return {
            "tone": self.default_tone,
            "duration": self.default_duration,
            "ratio": self.default_ratio,
            "voice": self.default_voice,
        }

    def not_configured_message(self) -> str:
        return (
            f"{self.sora_api_key_env} not configured. Returning local orchestration preview. "
            "Add the key to enable live renders."
        )

    def build_render_client(self) -> SoraRenderClient | None:
        api_key = os.getenv(self.sora_api_key_env)
        if not api_key:
            logger.info("No Sora² API key in %s; renders will be mocked", self.sora_api_key_env)
            return None
        return SoraRenderClient(
            api_key=api_key,
            api_url=os.getenv(self.sora_api_url_env) or self.sora_api_url,
            request_timeout=self.sora_request_timeout,
        )


class AgentResponse(WireModel):
    request_id: str
    job_id: Optional[str] = None
    scenes: List[SceneBeat]
    assets: List[AssetBrief]
    timeline: List[TimelineShot]
    preview_url: Optional[str] = None
    mock: bool
    message: str


@dataclass
class AgentOrchestrator:
    config: PipelineConfig
    pipeline: PlanningPipeline
    render_client: SoraRenderClient | None = None

    @classmethod
    def from_file(cls, path: Path) -> "AgentOrchestrator":
        return cls.default(PipelineConfig.from_file(path))

    @classmethod
    def default(cls, config: PipelineConfig | None = None) -> "AgentOrchestrator":
        config = config or PipelineConfig()
        pipeline = PlanningPipeline(
            segmenter=SceneSegmenter(
                words_per_second=config.words_per_second,
                min_beat_seconds=config.min_beat_seconds,
                max_cluster_words=config.max_cluster_words,
            ),
            asset_planner=AssetPlanner(),
            timeline_builder=TimelineBuilder(),
        )
        return cls(config=config, pipeline=pipeline, render_client=config.build_render_client())

    def parse_request(self, payload: dict) -> PlanRequest:
        return PlanRequest.from_payload(payload, defaults=self.config.request_defaults)

    def run(self, request: PlanRequest, dispatch: bool = True) -> AgentResponse:
        request_id = str(uuid.uuid4())
        logger.info("Planning request %s (tone=%r, duration=%r)", request_id, request.tone, request.duration)
        plan = self.pipeline.plan(
            script=request.script,
            tone=request.tone,
            voice=request.voice,
            target_duration=request.duration,
        )

        if not dispatch:
            return self._respond(request_id, plan, preview_url=self.config.preview_url, message=MESSAGE_SKIPPED)
        if self.render_client is None:
            return self._respond(
                request_id,
                plan,
                preview_url=self.config.preview_url,
                message=self.config.not_configured_message(),
            )

        job_id: str | None = None
        preview_url: str | None = None
        try:
            job = self.render_client.dispatch(RenderRequest.from_plan(plan, request))
            job_id = job.job_id
            preview_url = job.preview_url
        except (RenderDispatchError, requests.RequestException) as exc:
            logger.warning("Sora² API request failed, falling back to mock preview: %s", exc)
            preview_url = self.config.preview_url

        return self._respond(
            request_id,
            plan,
            job_id=job_id,
            preview_url=preview_url,
            message=MESSAGE_DISPATCHED if job_id else MESSAGE_UNREACHABLE,
        )

    @staticmethod
    def _respond(
        request_id: str,
        plan: ProductionPlan,
        message: str,
        job_id: str | None = None,
        preview_url: str | None = None,
    ) -> AgentResponse:
        return AgentResponse(
            request_id=request_id,
            job_id=job_id,
            scenes=plan.scenes,
            assets=plan.assets,
            timeline=plan.timeline,
            preview_url=preview_url,
            mock=not job_id,
            message=message,
        )
