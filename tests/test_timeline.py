from __future__ import annotations

import pytest

from soraagent.segmenter.model import SceneBeat
from soraagent.segmenter.segmenter import segment
from soraagent.timeline.builder import TimelineBuilder, allocate_durations, build_timeline
from soraagent.timeline.duration import parse_duration_range


def _scenes(*durations: int) -> list[SceneBeat]:
    return [
        SceneBeat(
            id=f"scene-{index}",
            title=f"Beat {index}",
            summary=f"Beat {index} of the story.",
            visuals="Balanced cinematic lighting",
            estimated_duration=duration,
            location="Unspecified setting",
        )
        for index, duration in enumerate(durations, start=1)
    ]


def test_empty_scene_list_returns_no_shots():
    assert build_timeline([], "3-5 minutes") == []


def test_allocation_follows_scene_weights():
    shots = build_timeline(_scenes(10, 20, 10), "30-60 seconds")

    durations = [shot.duration for shot in shots]
    assert 28 <= sum(durations) <= 62
    assert durations == [11, 23, 11]
    assert durations[1] / durations[0] == pytest.approx(2, rel=0.1)


def test_one_shot_per_scene_in_order():
    scenes = _scenes(4, 9, 6, 12)

    shots = build_timeline(scenes, "2-3 minutes")

    assert [shot.scene_id for shot in shots] == [scene.id for scene in scenes]
    assert [shot.label for shot in shots] == [f"Shot {i}: Beat {i}" for i in range(1, 5)]
    assert len({shot.id for shot in shots}) == len(shots)


@pytest.mark.parametrize("label", ["30-60 seconds", "90 seconds", "2-3 minutes", "3-5 minutes", "8-10 minutes"])
def test_total_stays_within_one_second_per_shot_of_budget(label):
    scenes = _scenes(5, 7, 3, 11, 4, 9, 6)

    shots = build_timeline(scenes, label)

    target = parse_duration_range(label).target_seconds
    assert abs(sum(shot.duration for shot in shots) - target) <= len(shots)
    assert all(shot.duration > 0 for shot in shots)


def test_start_offsets_are_cumulative():
    shots = build_timeline(_scenes(10, 20, 10), "30-60 seconds")

    assert [shot.start for shot in shots] == [0, 11, 34]


def test_unparseable_duration_falls_back_to_scene_estimates():
    scenes = _scenes(10, 20, 10)

    shots = build_timeline(scenes, "whenever it feels right")

    assert [shot.duration for shot in shots] == [10, 20, 10]
    assert TimelineBuilder.resolve_budget(scenes, "") == 40


def test_budget_smaller_than_shot_count_keeps_every_shot_positive():
    shots = build_timeline(_scenes(5, 5, 5), "1 second")

    assert [shot.duration for shot in shots] == [1, 1, 1]


def test_directives_are_keyed_on_scene_content(village_script):
    scenes = segment(village_script, "Inspirational documentary")

    opening, discovery = build_timeline(scenes, "30-60 seconds")

    assert opening.camera == "Slow aerial push-in"
    assert opening.audio == "Soft ambience under narration"
    assert discovery.camera == "Slow dolly-in"
    assert discovery.audio == "Low drone with tension swells"
    assert discovery.motion == "Light bloom and particle drift"


def test_prompt_combines_summary_visuals_and_tags(village_script):
    scenes = segment(village_script, "Inspirational documentary")

    shot = build_timeline(scenes, "30-60 seconds")[0]

    assert shot.prompt.startswith(scenes[0].summary)
    assert scenes[0].visuals in shot.prompt
    for tag in (shot.camera, shot.motion, shot.audio):
        assert tag in shot.prompt
    assert f"Duration: {shot.duration} seconds." in shot.prompt


def test_goals_follow_narrative_position():
    shots = build_timeline(_scenes(4, 4, 4), "30-60 seconds")

    assert shots[0].goal.startswith("Hook the audience")
    assert shots[1].goal.startswith("Advance the story")
    assert shots[2].goal.startswith("Land the payoff")
    assert build_timeline(_scenes(4), "90 seconds")[0].goal.startswith("Deliver the complete story")


def test_allocate_durations_uses_largest_remainder():
    assert allocate_durations([1, 1, 1], 10) == [4, 3, 3]
    assert sum(allocate_durations([3, 7, 2, 9], 100)) == 100
    assert allocate_durations([0, 0], 10) == [5, 5]
    assert allocate_durations([], 10) == []


def test_overflowing_duration_label_falls_back_to_scene_estimates():
    shots = build_timeline(_scenes(10, 20, 10), "9" * 400 + " seconds")

    assert [shot.duration for shot in shots] == [10, 20, 10]
