"""Progress projection: engine history + status -> human-readable summary.

The passed-states trail and the failure cause are derived by two separate scans
of the same history. The trail stops at the first terminal event; the cause
scan always covers the whole history and must not depend on where the trail
stops.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from stepfunction_trigger.trigger.engine.client import StepFunctionsClient
from stepfunction_trigger.trigger.engine.models import EventType, HistoryEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProgressSummary:
    """Snapshot of where an execution stands. Recomputed on every poll."""

    status: str
    passed_states: list[str] = field(default_factory=list)
    result: str | None = None
    failure_cause: str | None = None
    failure_error: str | None = None

    @property
    def current_state(self) -> str | None:
        return self.passed_states[-1] if self.passed_states else None


def passed_states(events: Iterable[HistoryEvent]) -> list[str]:
    """Build the ordered trail of states entered, up to the first terminal event.

    Execution start/success/failure appear as their event-type markers; state
    entries appear as the state name. Events after a terminal event are not
    inspected.
    """

    trail: list[str] = []
    for event in events:
        if event.type == EventType.EXECUTION_STARTED:
            trail.append(EventType.EXECUTION_STARTED.value)
        elif event.type == EventType.EXECUTION_SUCCEEDED:
            trail.append(EventType.EXECUTION_SUCCEEDED.value)
            break
        elif event.type == EventType.EXECUTION_FAILED:
            trail.append(EventType.EXECUTION_FAILED.value)
            break
        elif event.is_state_entry:
            trail.append(event.state_name or "")
    return trail


def first_failure(events: Iterable[HistoryEvent]) -> HistoryEvent | None:
    """Return the first ``ExecutionFailed`` event in the full history, if any."""

    for event in events:
        if event.type == EventType.EXECUTION_FAILED:
            return event
    return None


def failure_cause(events: Iterable[HistoryEvent]) -> str | None:
    failure = first_failure(events)
    return failure.failure_cause if failure is not None else None


def summarize(
    events: Sequence[HistoryEvent],
    *,
    status: str,
    result: str | None,
) -> ProgressSummary:
    failure = first_failure(events)
    return ProgressSummary(
        status=status,
        passed_states=passed_states(events),
        result=result,
        failure_cause=failure.failure_cause if failure is not None else None,
        failure_error=failure.failure_error if failure is not None else None,
    )


class ExecutionProjector:
    """Derives a :class:`ProgressSummary` from live engine reads."""

    def __init__(self, engine: StepFunctionsClient) -> None:
        self._engine = engine

    def project(self, execution_arn: str) -> ProgressSummary:
        events = self._engine.get_execution_history(execution_arn)
        description = self._engine.describe_execution(execution_arn)
        summary = summarize(events, status=description.status, result=description.output)
        logger.debug(
            "Projected execution progress",
            extra={
                "execution_arn": execution_arn,
                "events": len(events),
                "last_event_id": events[-1].id if events else None,
                "status": summary.status,
                "current_state": summary.current_state,
            },
        )
        return summary


def render_summary(summary: ProgressSummary) -> str:
    """Render the plain-text poll response body.

    Absent values render as ``None``.
    """

    body = (
        f"Passed States: {', '.join(summary.passed_states)}"
        f"\nCurrent State: {summary.current_state}"
        f"\nExecution Status: {summary.status}"
        f"\nExecution Result: {summary.result}"
    )
    if summary.failure_cause is not None:
        return f"Execution Error: {summary.failure_cause}\n\n{body}"
    return body
