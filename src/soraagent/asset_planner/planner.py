from __future__ import annotations

import logging
from typing import Sequence

from soraagent.ids import IdFactory
from soraagent.segmenter.model import SceneBeat
from soraagent.vocabulary import (
    DEFAULT_MOOD,
    DEFAULT_VOICE_DELIVERY,
    MOODS,
    VOICE_DELIVERIES,
    classify,
    join_phrases,
    salient_keywords,
)

from .model import AssetBrief

logger = logging.getLogger(__name__)

ASSET_OWNERS: dict[str, str] = {
    "voiceover": "Narration Team",
    "b-roll": "Visual Research",
    "music": "Audio Post",
    "caption": "Post-production Editor",
}
FALLBACK_VOICE = "Default narrator"
CAPTION_LINE_CHARS = 42


class AssetPlanner:
    """Derive the supporting material every scene needs before render."""

    def plan(self, scenes: Sequence[SceneBeat], voice: str) -> list[AssetBrief]:
        if not scenes:
            return []

        ids = IdFactory("asset")
        voice = (voice or "").strip() or FALLBACK_VOICE
        delivery = classify(voice, VOICE_DELIVERIES, DEFAULT_VOICE_DELIVERY)
        briefs: list[AssetBrief] = []
        previous_mood: str | None = None

        for scene in scenes:
            briefs.append(self._voiceover(ids.next(), scene, voice, delivery))
            briefs.append(self._b_roll(ids.next(), scene))
            mood = classify(f"{scene.summary} {scene.visuals}", MOODS, DEFAULT_MOOD)
            if mood != previous_mood:
                briefs.append(self._music(ids.next(), scene, mood, opening=previous_mood is None))
                previous_mood = mood
            briefs.append(self._caption(ids.next(), scene))

        logger.info("Planned %s asset briefs across %s scenes", len(briefs), len(scenes))
        return briefs

    @staticmethod
    def _brief(brief_id: str, brief_type: str, scene: SceneBeat, description: str, notes: str) -> AssetBrief:
        return AssetBrief(
            id=brief_id,
            type=brief_type,
            owner=ASSET_OWNERS[brief_type],
            description=description,
            notes=notes,
            scene_id=scene.id,
        )

    def _voiceover(self, brief_id: str, scene: SceneBeat, voice: str, delivery: str) -> AssetBrief:
        return self._brief(
            brief_id,
            "voiceover",
            scene,
            f'{voice} voiceover for "{scene.title}"',
            f"{delivery}. Aim for about {scene.estimated_duration}s. Script: {scene.summary}",
        )

    def _b_roll(self, brief_id: str, scene: SceneBeat) -> AssetBrief:
        terms = salient_keywords(scene.summary, limit=5) or [scene.location.lower()]
        return self._brief(
            brief_id,
            "b-roll",
            scene,
            f"B-roll set in {scene.location.lower()}: {scene.visuals}",
            f"Cover {scene.estimated_duration}s of footage. Search terms: {join_phrases(terms)}.",
        )

    def _music(self, brief_id: str, scene: SceneBeat, mood: str, opening: bool) -> AssetBrief:
        entry = "Opening score" if opening else "Score change"
        return self._brief(
            brief_id,
            "music",
            scene,
            f'{entry}: {mood.lower()} cue entering on "{scene.title}"',
            "Instrumental only; duck under the voiceover and hold until the next cue.",
        )

    def _caption(self, brief_id: str, scene: SceneBeat) -> AssetBrief:
        words = len(scene.summary.split())
        return self._brief(
            brief_id,
            "caption",
            scene,
            f'Captions for "{scene.title}"',
            f"{words} words over {scene.estimated_duration}s; keep lines under {CAPTION_LINE_CHARS} characters.",
        )


def plan_assets(scenes: Sequence[SceneBeat], voice: str) -> list[AssetBrief]:
    return AssetPlanner().plan(scenes, voice)
