"""Start/poll operations shared by every transport.

`TriggerService.handle` implements the method-dispatched contract of the root
endpoint (POST starts, GET polls, anything else is rejected) and returns a
plain status/body pair, so the FastAPI app and the API Gateway handler answer
identically.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from stepfunction_trigger.trigger.config import TriggerSettings
from stepfunction_trigger.trigger.engine.client import StepFunctionsClient
from stepfunction_trigger.trigger.errors import (
    ConfigurationError,
    InvalidMarks,
    MissingExecution,
    TriggerError,
)
from stepfunction_trigger.trigger.projector import (
    ExecutionProjector,
    ProgressSummary,
    render_summary,
)
from stepfunction_trigger.trigger.registry import DEFAULT_SESSION, ExecutionRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TriggerResponse:
    status_code: int
    body: str


def build_engine(settings: TriggerSettings) -> StepFunctionsClient:
    return StepFunctionsClient(
        region=settings.aws_region,
        endpoint_url=settings.endpoint_url,
        connect_timeout_seconds=settings.connect_timeout_seconds,
        read_timeout_seconds=settings.read_timeout_seconds,
    )


def build_execution_input(marks_body: str | bytes | None) -> str:
    """Wrap the raw request body as the execution input ``{"marks": <body>}``.

    An empty body becomes ``{"marks": null}``. Raw bytes must be UTF-8.

    Raises:
        InvalidMarks: if the body is not a UTF-8 JSON document.
    """

    if isinstance(marks_body, bytes):
        try:
            marks_body = marks_body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidMarks() from e

    if marks_body is None or not marks_body.strip():
        marks: object = None
    else:
        try:
            marks = json.loads(marks_body)
        except json.JSONDecodeError as e:
            raise InvalidMarks() from e
    return json.dumps({"marks": marks}, ensure_ascii=False)


class TriggerService:
    def __init__(
        self,
        *,
        engine: StepFunctionsClient,
        registry: ExecutionRegistry,
        state_machine_arn: str,
    ) -> None:
        self._engine = engine
        self._registry = registry
        self._state_machine_arn = state_machine_arn
        self._projector = ExecutionProjector(engine)

    @property
    def registry(self) -> ExecutionRegistry:
        return self._registry

    def start(self, marks_body: str | bytes | None, *, session: str = DEFAULT_SESSION) -> str:
        """Start an execution with the given marks and record it as the latest one."""

        if not self._state_machine_arn.strip():
            raise ConfigurationError("TRIGGER_STATE_MACHINE_ARN is required to start executions")

        execution_input = build_execution_input(marks_body)
        started = self._engine.start_execution(
            state_machine_arn=self._state_machine_arn,
            input_json=execution_input,
        )
        self._registry.record(started.execution_arn, session=session)
        return started.execution_arn

    def poll(self, *, session: str = DEFAULT_SESSION) -> ProgressSummary:
        """Project the progress of the latest execution recorded for ``session``."""

        execution_arn = self._registry.current(session=session)
        if execution_arn is None:
            raise MissingExecution()
        return self._projector.project(execution_arn)

    def describe(self, execution_arn: str) -> ProgressSummary:
        """Project an explicitly named execution, bypassing the registry."""

        if not execution_arn.strip():
            raise MissingExecution()
        return self._projector.project(execution_arn)

    def handle(
        self,
        method: str,
        body: str | bytes | None = None,
        *,
        session: str = DEFAULT_SESSION,
    ) -> TriggerResponse:
        verb = (method or "").strip().upper()
        try:
            if verb == "GET":
                return TriggerResponse(200, render_summary(self.poll(session=session)))
            if verb == "POST":
                return TriggerResponse(200, self.start(body, session=session))
        except TriggerError as e:
            if e.status_code >= 500:
                logger.error(
                    "Trigger request failed",
                    extra={"method": verb, "session": session, "error": str(e)},
                )
            return TriggerResponse(e.status_code, str(e))
        return TriggerResponse(400, "Invalid HTTP method")
