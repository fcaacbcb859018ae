"""Parse coarse running-time labels such as ``"3-5 minutes"``.

Labels offered by the web client resolve through ``KNOWN_RANGES``. Anything
else goes through ``RANGE_PATTERN`` (``N``, ``N-M`` or ``N to M`` followed by a
seconds, minutes or hours unit). Text that matches neither yields ``None`` and
the caller decides the fallback budget.
"""

from __future__ import annotations

import logging
import math
import re

from .model import DurationRange

logger = logging.getLogger(__name__)

KNOWN_RANGES: dict[str, tuple[int, int]] = {
    "30-60 seconds": (30, 60),
    "90 seconds": (90, 90),
    "2-3 minutes": (120, 180),
    "3-5 minutes": (180, 300),
    "8-10 minutes": (480, 600),
}

UNIT_SECONDS: dict[str, int] = {"s": 1, "m": 60, "h": 3600}

RANGE_PATTERN = re.compile(
    r"(?P<low>\d+(?:\.\d+)?)\s*(?:(?:-|–|—|to)\s*(?P<high>\d+(?:\.\d+)?)\s*)?"
    r"(?P<unit>s|secs?|seconds?|m|mins?|minutes?|h|hrs?|hours?)\b",
    re.IGNORECASE,
)


def parse_duration_range(text: str | None) -> DurationRange | None:
    if not text:
        return None
    normalized = " ".join(text.lower().split())
    known = KNOWN_RANGES.get(normalized)
    if known:
        return DurationRange(min_seconds=known[0], max_seconds=known[1])

    match = RANGE_PATTERN.search(normalized)
    if not match:
        logger.debug("Unrecognised duration label %r", text)
        return None
    scale = UNIT_SECONDS[match.group("unit")[0].lower()]
    low = float(match.group("low")) * scale
    high = float(match.group("high")) * scale if match.group("high") else low
    low, high = sorted((low, high))
    if high <= 0 or not math.isfinite(high):
        logger.debug("Duration label %r is out of range", text)
        return None
    return DurationRange(min_seconds=max(1, round(low)), max_seconds=max(1, round(high)))
