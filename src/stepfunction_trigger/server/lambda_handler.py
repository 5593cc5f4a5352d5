"""AWS Lambda entrypoint for API Gateway proxy integrations.

The service (and with it the execution registry) is built once per container
and reused across warm invocations, so a GET served by the same container sees
the execution started by an earlier POST.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any

from stepfunction_trigger.trigger.config import TriggerSettings
from stepfunction_trigger.trigger.errors import InvalidMarks
from stepfunction_trigger.trigger.logging import configure_logging
from stepfunction_trigger.trigger.registry import DEFAULT_SESSION, ExecutionRegistry
from stepfunction_trigger.trigger.service import TriggerResponse, TriggerService, build_engine

logger = logging.getLogger(__name__)

_SESSION_HEADER = "x-trigger-session"

_service: TriggerService | None = None


def _get_service() -> TriggerService:
    global _service
    if _service is None:
        settings = TriggerSettings()
        configure_logging(settings.log_level)
        _service = TriggerService(
            engine=build_engine(settings),
            registry=ExecutionRegistry(),
            state_machine_arn=settings.state_machine_arn,
        )
    return _service


def _event_body(event: dict[str, Any]) -> str | bytes | None:
    body = event.get("body")
    if not isinstance(body, str):
        return None
    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except binascii.Error as e:
            raise InvalidMarks() from e
    return body


def _event_session(event: dict[str, Any]) -> str:
    headers = event.get("headers")
    if not isinstance(headers, dict):
        return DEFAULT_SESSION
    for key, value in headers.items():
        if isinstance(key, str) and key.lower() == _SESSION_HEADER and isinstance(value, str):
            return value.strip() or DEFAULT_SESSION
    return DEFAULT_SESSION


def handle_event(service: TriggerService, event: dict[str, Any]) -> dict[str, Any]:
    method = event.get("httpMethod")
    if not isinstance(method, str):
        # HTTP API (payload format 2.0) nests the method under requestContext.http.
        context = event.get("requestContext")
        http = context.get("http") if isinstance(context, dict) else None
        method = http.get("method") if isinstance(http, dict) else None

    verb = method.strip().upper() if isinstance(method, str) else ""
    try:
        # Only a POST reads its body; a GET polls regardless of what it carries.
        body = _event_body(event) if verb == "POST" else None
    except InvalidMarks as e:
        response = TriggerResponse(e.status_code, str(e))
    else:
        response = service.handle(
            verb,
            body,
            session=_event_session(event),
        )
    logger.info(
        "Handled trigger request",
        extra={"method": method, "status_code": response.status_code},
    )
    return {"statusCode": response.status_code, "body": response.body}


def lambda_handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    return handle_event(_get_service(), event)
