"""Typed views over the Step Functions responses we consume."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class EventType(str, Enum):
    """History event kinds that the projection reacts to by name.

    Values are the engine's own ``type`` strings; they are also used verbatim as
    markers in the passed-states trail.
    """

    EXECUTION_STARTED = "ExecutionStarted"
    EXECUTION_SUCCEEDED = "ExecutionSucceeded"
    EXECUTION_FAILED = "ExecutionFailed"


@dataclass(frozen=True, slots=True)
class HistoryEvent:
    """One entry of an execution's append-only event log."""

    type: str
    id: int | None = None

    # Set only for events that carry ``stateEnteredEventDetails``.
    state_name: str | None = None

    # Set only for ``ExecutionFailed`` events.
    failure_error: str | None = None
    failure_cause: str | None = None

    @property
    def is_state_entry(self) -> bool:
        return self.state_name is not None

    @staticmethod
    def from_api(raw: dict[str, Any]) -> HistoryEvent:
        event_type = raw.get("type")
        if not isinstance(event_type, str):
            event_type = ""

        event_id = raw.get("id")

        state_name: str | None = None
        entered = raw.get("stateEnteredEventDetails")
        if isinstance(entered, dict):
            name = entered.get("name")
            state_name = name if isinstance(name, str) else ""

        failure_error: str | None = None
        failure_cause: str | None = None
        failed = raw.get("executionFailedEventDetails")
        if isinstance(failed, dict):
            error = failed.get("error")
            cause = failed.get("cause")
            failure_error = error if isinstance(error, str) else None
            failure_cause = cause if isinstance(cause, str) else None

        return HistoryEvent(
            type=event_type,
            id=event_id if isinstance(event_id, int) else None,
            state_name=state_name,
            failure_error=failure_error,
            failure_cause=failure_cause,
        )


@dataclass(frozen=True, slots=True)
class StartedExecution:
    """Minimal metadata returned when an execution is started."""

    execution_arn: str


@dataclass(frozen=True, slots=True)
class ExecutionDescription:
    """Status snapshot of an execution.

    ``status`` is passed through as the engine reports it (RUNNING, SUCCEEDED,
    FAILED, TIMED_OUT, ABORTED, ...). ``output`` is absent until the execution
    has produced one.
    """

    execution_arn: str
    status: str
    output: str | None = None
