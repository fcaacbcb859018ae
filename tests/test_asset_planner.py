from __future__ import annotations

from soraagent.asset_planner.planner import ASSET_OWNERS, AssetPlanner, plan_assets
from soraagent.segmenter.model import SceneBeat
from soraagent.segmenter.segmenter import segment


def _scene(scene_id: str, summary: str, visuals: str = "Balanced cinematic lighting", duration: int = 8) -> SceneBeat:
    return SceneBeat(
        id=scene_id,
        title=summary.split(".")[0],
        summary=summary,
        visuals=visuals,
        estimated_duration=duration,
        location="Unspecified setting",
    )


def test_empty_scene_list_returns_no_briefs():
    assert plan_assets([], "Warm female narrator") == []


def test_every_scene_gets_core_briefs(village_script):
    scenes = segment(village_script, "Inspirational documentary")

    briefs = plan_assets(scenes, "Warm female narrator")

    for scene in scenes:
        types = [brief.type for brief in briefs if brief.scene_id == scene.id]
        assert {"voiceover", "b-roll", "caption"} <= set(types)
    assert 3 * len(scenes) <= len(briefs) <= 4 * len(scenes)


def test_brief_ids_are_unique_and_owners_follow_the_table(village_script):
    scenes = segment(village_script, "Inspirational documentary")
    scenes = scenes + segment(village_script, "Neo-noir thriller")

    briefs = plan_assets(scenes, "Calm male documentary")

    assert len({brief.id for brief in briefs}) == len(briefs)
    assert all(brief.owner == ASSET_OWNERS[brief.type] for brief in briefs)


def test_briefs_follow_scene_order():
    scenes = [_scene(f"scene-{index}", f"Beat number {index}.") for index in range(5)]

    briefs = plan_assets(scenes, "Warm female narrator")

    order = [scene.id for scene in scenes]
    positions = [order.index(brief.scene_id) for brief in briefs]
    assert positions == sorted(positions)


def test_voiceover_is_keyed_to_voice():
    scenes = [_scene("scene-1", "The host walks the audience through the results.")]

    briefs = plan_assets(scenes, "Conversational podcast duo")

    voiceover = next(brief for brief in briefs if brief.type == "voiceover")
    assert "Conversational podcast duo" in voiceover.description
    assert "two hosts" in voiceover.notes
    assert "The host walks the audience" in voiceover.notes


def test_blank_voice_uses_fallback_narrator():
    briefs = AssetPlanner().plan([_scene("scene-1", "A calm morning.")], "  ")

    assert briefs[0].description.startswith("Default narrator")


def test_music_cue_only_when_mood_changes():
    scenes = [
        _scene("scene-1", "A quiet morning by the lake."),
        _scene("scene-2", "The calm water barely moves."),
        _scene("scene-3", "A mysterious figure steps out of the shadows."),
    ]

    briefs = plan_assets(scenes, "Warm female narrator")

    music = [brief for brief in briefs if brief.type == "music"]
    assert [brief.scene_id for brief in music] == ["scene-1", "scene-3"]
    assert music[0].description.startswith("Opening score: gentle ambient")
    assert music[1].description.startswith("Score change: brooding suspense")


def test_b_roll_carries_visuals_and_search_terms():
    scene = _scene(
        "scene-1",
        "Farmers harvest golden wheat under a wide sky.",
        visuals="Warm natural light; focus on farmers, harvest, golden",
        duration=12,
    )

    b_roll = next(brief for brief in plan_assets([scene], "Warm female narrator") if brief.type == "b-roll")

    assert "Warm natural light" in b_roll.description
    assert "Cover 12s" in b_roll.notes
    assert "farmers" in b_roll.notes
