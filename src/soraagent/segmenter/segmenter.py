from __future__ import annotations

import logging
import math
import re

from soraagent.ids import IdFactory
from soraagent.vocabulary import (
    DEFAULT_LOCATION,
    DEFAULT_TONE_STYLE,
    LOCATIONS,
    TONE_STYLES,
    classify,
    join_phrases,
    salient_keywords,
)

from .model import SceneBeat

logger = logging.getLogger(__name__)

BLANK_LINE_PATTERN = re.compile(r"\n\s*\n")
SENTENCE_PATTERN = re.compile(r"(?<=[.!?])\s+|\n")
CLAUSE_PATTERN = re.compile(r"[.,;:!?()]|\s[-–—]\s")

WORDS_PER_SECOND = 2.5
MIN_BEAT_SECONDS = 4
MAX_CLUSTER_WORDS = 60
TITLE_MAX_WORDS = 6


class SceneSegmenter:
    """Split a narrative script into ordered scene beats."""

    def __init__(
        self,
        words_per_second: float = WORDS_PER_SECOND,
        min_beat_seconds: int = MIN_BEAT_SECONDS,
        max_cluster_words: int = MAX_CLUSTER_WORDS,
    ) -> None:
        if words_per_second <= 0:
            raise ValueError("words_per_second must be positive")
        if min_beat_seconds < 1:
            raise ValueError("min_beat_seconds must be at least 1")
        if max_cluster_words < 1:
            raise ValueError("max_cluster_words must be at least 1")
        self.words_per_second = words_per_second
        self.min_beat_seconds = min_beat_seconds
        self.max_cluster_words = max_cluster_words

    def segment(self, script: str, tone: str) -> list[SceneBeat]:
        blocks = self.split_blocks(script)
        if not blocks:
            logger.debug("Script is empty after trimming; no beats produced")
            return []

        ids = IdFactory("scene")
        style = classify(tone or "", TONE_STYLES, DEFAULT_TONE_STYLE)
        beats = [
            self._build_beat(ids.next(), index, block, style)
            for index, block in enumerate(blocks, start=1)
        ]
        logger.info("Segmented script into %s beats (tone=%r)", len(beats), tone)
        return beats

    def split_blocks(self, script: str) -> list[str]:
        """Return the non-empty text blocks that become beats, in script order.

        Blank lines delimit beats. A script without any blank line is split on
        sentence boundaries and the sentences are regrouped so that no beat
        exceeds ``max_cluster_words`` words unless a single sentence does.
        """
        text = script.replace("\r\n", "\n").replace("\r", "\n").strip()
        if not text:
            return []
        paragraphs = [block.strip() for block in BLANK_LINE_PATTERN.split(text)]
        paragraphs = [block for block in paragraphs if block]
        if len(paragraphs) > 1:
            return paragraphs
        return self._cluster_sentences(paragraphs[0])

    def estimate_duration(self, text: str) -> int:
        words = len(text.split())
        return max(self.min_beat_seconds, math.ceil(words / self.words_per_second))

    # Beat construction --------------------------------------------------

    def _cluster_sentences(self, paragraph: str) -> list[str]:
        sentences = [part.strip() for part in SENTENCE_PATTERN.split(paragraph)]
        clusters: list[str] = []
        current: list[str] = []
        current_words = 0
        for sentence in sentences:
            if not sentence:
                continue
            words = len(sentence.split())
            if current and current_words + words > self.max_cluster_words:
                clusters.append(" ".join(current))
                current = []
                current_words = 0
            current.append(sentence)
            current_words += words
        if current:
            clusters.append(" ".join(current))
        return clusters

    def _build_beat(self, beat_id: str, index: int, block: str, style: str) -> SceneBeat:
        summary = " ".join(block.split())
        beat = SceneBeat(
            id=beat_id,
            title=self._title(summary, index),
            summary=summary,
            visuals=self._visuals(summary, style),
            estimated_duration=self.estimate_duration(summary),
            location=classify(summary, LOCATIONS, DEFAULT_LOCATION),
        )
        logger.debug("Beat %s: %r (%ss, %s)", beat.id, beat.title, beat.estimated_duration, beat.location)
        return beat

    @staticmethod
    def _title(summary: str, index: int) -> str:
        clauses = CLAUSE_PATTERN.split(summary)
        clause = next((part for part in clauses if part.strip()), "")
        title = " ".join(clause.split()[:TITLE_MAX_WORDS]).strip(" '\"-")
        if not title:
            return f"Scene {index}"
        return title[0].upper() + title[1:]

    @staticmethod
    def _visuals(summary: str, style: str) -> str:
        keywords = salient_keywords(summary)
        if not keywords:
            return style
        return f"{style}; focus on {join_phrases(keywords)}"


def segment(script: str, tone: str) -> list[SceneBeat]:
    return SceneSegmenter().segment(script, tone)
