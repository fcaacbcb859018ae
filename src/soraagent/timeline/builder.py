from __future__ import annotations

import logging
import math
from typing import Sequence

from soraagent.ids import IdFactory
from soraagent.segmenter.model import SceneBeat
from soraagent.vocabulary import (
    AUDIO_TREATMENTS,
    CAMERA_MOVES,
    DEFAULT_AUDIO,
    DEFAULT_CAMERA,
    DEFAULT_MOTION,
    MOTIONS,
    classify,
)

from .duration import parse_duration_range
from .model import TimelineShot

logger = logging.getLogger(__name__)

SHOT_GOALS: dict[str, str] = {
    "single": "Deliver the complete story in one movement",
    "opening": "Hook the audience and establish the world",
    "middle": "Advance the story and build momentum",
    "closing": "Land the payoff and resolve the narrative",
}


class TimelineBuilder:
    """Turn scene beats into a timed shot list with render directives."""

    def build(self, scenes: Sequence[SceneBeat], target_duration: str) -> list[TimelineShot]:
        if not scenes:
            return []

        budget = self.resolve_budget(scenes, target_duration)
        durations = allocate_durations([scene.estimated_duration for scene in scenes], budget)
        ids = IdFactory("shot")
        shots: list[TimelineShot] = []
        start = 0

        for index, (scene, duration) in enumerate(zip(scenes, durations)):
            cue_text = f"{scene.summary} {scene.visuals}"
            camera = classify(cue_text, CAMERA_MOVES, DEFAULT_CAMERA)
            motion = classify(cue_text, MOTIONS, DEFAULT_MOTION)
            audio = classify(cue_text, AUDIO_TREATMENTS, DEFAULT_AUDIO)
            shots.append(
                TimelineShot(
                    id=ids.next(),
                    label=f"Shot {index + 1}: {scene.title}",
                    duration=duration,
                    goal=f"{SHOT_GOALS[_position(index, len(scenes))]}: {scene.title}",
                    prompt=_compose_prompt(scene, duration, camera, motion, audio),
                    camera=camera,
                    motion=motion,
                    audio=audio,
                    scene_id=scene.id,
                    start=start,
                )
            )
            start += duration

        logger.info("Built timeline of %s shots totalling %ss (budget %ss)", len(shots), start, budget)
        return shots

    @staticmethod
    def resolve_budget(scenes: Sequence[SceneBeat], target_duration: str) -> int:
        parsed = parse_duration_range(target_duration)
        if parsed is not None:
            return parsed.target_seconds
        fallback = sum(scene.estimated_duration for scene in scenes)
        logger.warning(
            "Could not parse target duration %r; budgeting %ss from scene estimates",
            target_duration,
            fallback,
        )
        return fallback


def allocate_durations(weights: Sequence[int], budget: int) -> list[int]:
    """Split ``budget`` seconds proportionally to ``weights``.

    Uses largest-remainder rounding so the parts add up to ``budget``; every
    part is at least one second, which can push the total above a budget
    smaller than the number of parts.
    """
    if not weights:
        return []
    clean = [max(weight, 0) for weight in weights]
    total = sum(clean)
    if total == 0:
        clean = [1] * len(weights)
        total = len(weights)

    raw = [budget * weight / total for weight in clean]
    parts = [math.floor(value) for value in raw]
    remaining = budget - sum(parts)
    by_remainder = sorted(range(len(raw)), key=lambda i: (parts[i] - raw[i], i))
    for i in by_remainder[: max(remaining, 0)]:
        parts[i] += 1
    return [max(part, 1) for part in parts]


def _position(index: int, count: int) -> str:
    if count == 1:
        return "single"
    if index == 0:
        return "opening"
    if index == count - 1:
        return "closing"
    return "middle"


def _compose_prompt(scene: SceneBeat, duration: int, camera: str, motion: str, audio: str) -> str:
    summary = scene.summary.rstrip()
    if summary and summary[-1] not in ".!?":
        summary += "."
    parts = [
        summary,
        f"Visual direction: {scene.visuals}.",
        f"Setting: {scene.location}.",
        f"Camera: {camera}. Motion: {motion}. Audio: {audio}.",
        f"Duration: {duration} seconds.",
    ]
    return " ".join(part for part in parts if part)


def build_timeline(scenes: Sequence[SceneBeat], target_duration: str) -> list[TimelineShot]:
    return TimelineBuilder().build(scenes, target_duration)
