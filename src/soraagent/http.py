from __future__ import annotations

import base64
import binascii
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict

from soraagent.orchestrator import AgentOrchestrator
from soraagent.request import ValidationError

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
}

FAILURE_MESSAGE = "Unable to orchestrate Sora² pipeline. Please retry later."


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    body: Dict[str, Any] | None = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            "statusCode": self.status_code,
            "headers": {**_CORS_HEADERS, "Content-Type": "application/json"},
            "body": json.dumps(self.body or {}, ensure_ascii=False),
        }


class HttpRequestParser:
    """Extracts the JSON payload from API Gateway proxy events."""

    def parse(self, event: Dict[str, Any]) -> Dict[str, Any]:
        if "body" not in event or event["body"] is None:
            raise ValidationError("Missing request body")

        body = event["body"]
        if event.get("isBase64Encoded"):
            try:
                body = base64.b64decode(body, validate=True).decode("utf-8")
            except (binascii.Error, UnicodeDecodeError) as exc:
                raise ValidationError("Body must be valid base64-encoded UTF-8") from exc

        if isinstance(body, str):
            try:
                payload = json.loads(body)
            except json.JSONDecodeError as exc:
                raise ValidationError("Body must be valid JSON") from exc
        else:
            payload = body

        if not isinstance(payload, dict):
            raise ValidationError("Body must be a JSON object")
        return payload


def cors_preflight_response() -> Dict[str, Any]:
    return {
        "statusCode": 204,
        "headers": {
            **_CORS_HEADERS,
            "Access-Control-Allow-Methods": "POST,OPTIONS",
        },
        "body": "",
    }


def bad_request(message: str) -> Dict[str, Any]:
    return HttpResponse(status_code=400, body={"error": message}).to_payload()


def ok(body: Dict[str, Any]) -> Dict[str, Any]:
    return HttpResponse(status_code=200, body=body).to_payload()


def server_error(message: str) -> Dict[str, Any]:
    return HttpResponse(status_code=500, body={"error": message}).to_payload()


class AgentApplication:
    """Validates a plan request, runs the orchestrator and shapes the reply."""

    def __init__(
        self,
        orchestrator: AgentOrchestrator | None = None,
        request_parser: HttpRequestParser | None = None,
    ) -> None:
        self._orchestrator = orchestrator or AgentOrchestrator.default()
        self._parser = request_parser or HttpRequestParser()

    def handle_event(self, event: Dict[str, Any]) -> Dict[str, Any]:
        logger.info("Sora² agent request received")
        if event.get("httpMethod") == "OPTIONS":
            return cors_preflight_response()

        try:
            payload = self._parser.parse(event)
            request = self._orchestrator.parse_request(payload)
        except ValidationError as exc:
            return bad_request(str(exc))

        try:
            response = self._orchestrator.run(request)
        except Exception:
            logger.exception("Sora² agent failure")
            return server_error(FAILURE_MESSAGE)

        return ok(response.to_wire())


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:  # pragma: no cover - AWS entry
    return AgentApplication().handle_event(event)
