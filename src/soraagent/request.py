from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

DEFAULT_TONE = "Inspirational documentary"
DEFAULT_DURATION = "3-5 minutes"
DEFAULT_RATIO = "16:9"
DEFAULT_VOICE = "Warm female narrator"


class ValidationError(ValueError):
    """Raised when the request payload cannot be processed."""


@dataclass(frozen=True)
class PlanRequest:
    script: str
    tone: str = DEFAULT_TONE
    duration: str = DEFAULT_DURATION
    ratio: str = DEFAULT_RATIO
    voice: str = DEFAULT_VOICE

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        defaults: Mapping[str, str] | None = None,
    ) -> "PlanRequest":
        if not isinstance(payload, Mapping):
            raise ValidationError("Request body must be an object")
        fallback = {
            "tone": DEFAULT_TONE,
            "duration": DEFAULT_DURATION,
            "ratio": DEFAULT_RATIO,
            "voice": DEFAULT_VOICE,
            **(defaults or {}),
        }

        script = payload.get("script")
        if not isinstance(script, str) or not script.strip():
            raise ValidationError("Script is required")

        def text(name: str) -> str:
            value = payload.get(name)
            return value if isinstance(value, str) else fallback[name]

        return cls(
            script=script,
            tone=text("tone"),
            duration=text("duration"),
            ratio=text("ratio"),
            voice=text("voice"),
        )
