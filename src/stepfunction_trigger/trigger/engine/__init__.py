"""Step Functions integration: the boto3 wrapper and typed response views."""

from stepfunction_trigger.trigger.engine.client import StepFunctionsClient
from stepfunction_trigger.trigger.engine.models import (
    EventType,
    ExecutionDescription,
    HistoryEvent,
    StartedExecution,
)

__all__ = [
    "EventType",
    "ExecutionDescription",
    "HistoryEvent",
    "StartedExecution",
    "StepFunctionsClient",
]
