"""Keyword tables behind every heuristic classification in the planner.

Each table is an ordered tuple of ``(keywords, tag)`` rows. ``classify`` walks
the rows in order and returns the tag of the first row with a keyword present
in the text, so earlier rows take precedence. Tables can be extended without
touching the stages that consume them.
"""

from __future__ import annotations

import re
from typing import Iterable, Sequence, Tuple

KeywordTable = Tuple[Tuple[frozenset, str], ...]

TOKEN_PATTERN = re.compile(r"[a-z0-9]+(?:['-][a-z0-9]+)*")
_SUFFIXES = ("", "s", "es", "d", "ed", "ing")


def _table(*rows: tuple[Iterable[str], str]) -> KeywordTable:
    return tuple((frozenset(keywords), tag) for keywords, tag in rows)


TONE_STYLES = _table(
    (("documentary", "inspirational", "inspiring", "nature"), "Warm natural light with sweeping establishing frames"),
    (("noir", "neo-noir", "thriller", "crime", "mystery"), "High-contrast low-key lighting with deep shadows"),
    (("trailer", "high-energy", "energetic", "action", "hype"), "Punchy fast cuts with bold saturated color"),
    (("vlog", "personal", "diary", "travelogue"), "Handheld intimate framing with natural color"),
    (("explainer", "educational", "tutorial", "lesson"), "Clean well-lit compositions with room for graphics"),
)
DEFAULT_TONE_STYLE = "Balanced cinematic lighting with clear composition"

LOCATIONS = _table(
    (("office", "boardroom", "desk", "cubicle", "workplace"), "Office interior"),
    (("studio", "stage", "soundstage"), "Studio"),
    (("lab", "laboratory", "workshop"), "Laboratory"),
    (("kitchen", "bedroom", "home", "house", "apartment"), "Home interior"),
    (("village", "town", "street", "city", "market", "square", "downtown"), "Town exterior"),
    (
        (
            "forest", "mountain", "field", "outdoors", "outside", "beach", "river",
            "lake", "desert", "meadow", "sky", "ocean", "sea", "park",
        ),
        "Outdoors",
    ),
)
DEFAULT_LOCATION = "Unspecified setting"

MOODS = _table(
    (("mysterious", "secret", "shadow", "dark", "tense", "noir", "danger", "threat"), "Brooding suspense"),
    (("sad", "loss", "grief", "alone", "lonely", "farewell"), "Melancholic strings"),
    (("celebrate", "triumph", "victory", "energy", "punchy", "bold", "win"), "Driving uplift"),
    (("quiet", "calm", "dawn", "peaceful", "gentle", "warm", "hope"), "Gentle ambient"),
)
DEFAULT_MOOD = "Neutral underscore"

CAMERA_MOVES = _table(
    (("chase", "run", "race", "fight", "escape", "action", "fast"), "Handheld tracking"),
    (("discover", "reveal", "mysterious", "secret", "find", "glow"), "Slow dolly-in"),
    (("interview", "explain", "talk", "speak", "presenter", "host"), "Locked-off medium shot"),
    (("dawn", "landscape", "village", "city", "skyline", "opening", "establishing", "sweeping"), "Slow aerial push-in"),
    (("shadow", "noir", "low-key", "alley"), "Low-angle creep"),
)
DEFAULT_CAMERA = "Gentle glide"

MOTIONS = _table(
    (("run", "walk", "journey", "travel", "move", "dance", "drive", "climb"), "Subject moving through frame"),
    (("glow", "light", "sun", "fire", "spark", "flicker", "shine"), "Light bloom and particle drift"),
    (("wind", "water", "river", "rain", "ocean", "wave", "sea", "storm"), "Natural elements in motion"),
    (("crowd", "people", "market", "busy", "traffic"), "Background crowd activity"),
)
DEFAULT_MOTION = "Subtle parallax drift"

AUDIO_TREATMENTS = _table(
    (("mysterious", "secret", "shadow", "dark", "tense", "danger"), "Low drone with tension swells"),
    (("celebrate", "triumph", "victory", "energy", "punchy"), "Driving percussion bed"),
    (("quiet", "calm", "dawn", "peaceful", "gentle"), "Soft ambience under narration"),
    (("crowd", "market", "city", "street", "traffic"), "Layered ambient crowd sound"),
)
DEFAULT_AUDIO = "Narration-forward mix with light score"

VOICE_DELIVERIES = _table(
    (("duo", "podcast", "conversational"), "Split lines between two hosts in a relaxed back-and-forth"),
    (("energetic", "sports", "hype"), "Upbeat delivery that punches the key phrases"),
    (("dramatic", "cinematic"), "Measured dramatic pacing with deliberate pauses"),
    (("calm", "documentary"), "Even, unhurried documentary read"),
    (("warm", "friendly"), "Warm, inviting delivery"),
)
DEFAULT_VOICE_DELIVERY = "Clear, natural delivery"

STOPWORDS = frozenset(
    """
    a about above after again against all also an and any are around as at away back be
    because been before being below between both but by can could did does doing down
    during each even every few for from further had has have having he her here hers him
    his how into its itself just like more most much near only other our ours out over
    own same she should some such than that the their theirs them then there these they
    this those through under until very was were what when where which while who whom
    why will with within without would you your yours onto upon across toward towards
    shot shots scene scenes opening closing camera frame frames cut cuts fade begins
    """.split()
)


def tokenize(text: str) -> list[str]:
    return TOKEN_PATTERN.findall(text.lower())


def _matches(keyword: str, tokens: set[str]) -> bool:
    return any(keyword + suffix in tokens for suffix in _SUFFIXES)


def classify(text: str, table: KeywordTable, default: str) -> str:
    """Return the tag of the first table row whose keywords occur in ``text``."""
    tokens = set(tokenize(text))
    for keywords, tag in table:
        if any(_matches(keyword, tokens) for keyword in keywords):
            return tag
    return default


def salient_keywords(text: str, limit: int = 3, min_length: int = 4) -> list[str]:
    """Pick the first distinct content words of ``text``, in reading order."""
    picked: list[str] = []
    for token in tokenize(text):
        if len(token) < min_length or token in STOPWORDS or token.isdigit():
            continue
        if token in picked:
            continue
        picked.append(token)
        if len(picked) >= limit:
            break
    return picked


def join_phrases(parts: Sequence[str]) -> str:
    return ", ".join(part for part in parts if part)
