from __future__ import annotations

import logging

import requests
from pydantic import ValidationError

from .model import RenderJob, RenderRequest

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.sora2.openai.com/v1/videos"


class RenderDispatchError(RuntimeError):
    """Raised when the Sora² API rejects or mangles a render request."""


class SoraRenderClient:
    """Posts a finished production plan to the Sora² render endpoint."""

    def __init__(
        self,
        api_key: str,
        api_url: str = DEFAULT_API_URL,
        request_timeout: float = 12.0,
        session: requests.Session | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("Sora² API key is required")
        self.api_key = api_key
        self.api_url = api_url
        self.request_timeout = request_timeout
        self._http = session or requests

    def dispatch(self, render_request: RenderRequest) -> RenderJob:
        logger.info(
            "Dispatching %s shots to %s", len(render_request.timeline), self.api_url
        )
        response = self._http.post(
            self.api_url,
            headers=self._headers(),
            json=render_request.to_wire(),
            timeout=self.request_timeout,
        )
        if response.status_code >= 400:
            logger.error("Sora² render request failed (%s): %s", response.status_code, response.text)
            raise RenderDispatchError(f"Sora² API error ({response.status_code}): {response.text}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise RenderDispatchError("Sora² API returned a non-JSON body") from exc
        if not isinstance(payload, dict):
            raise RenderDispatchError(f"Unexpected Sora² response: {payload!r}")
        try:
            job = RenderJob.model_validate(payload)
        except ValidationError as exc:
            raise RenderDispatchError(f"Malformed Sora² response: {payload!r}") from exc
        logger.info("Sora² accepted render job %s (status=%s)", job.job_id, job.status)
        return job

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
