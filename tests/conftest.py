"""Test configuration and fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime
from typing import Any

import pytest

from stepfunction_trigger.server.config import ServerSettings
from stepfunction_trigger.trigger.engine.client import StepFunctionsClient
from stepfunction_trigger.trigger.registry import ExecutionRegistry

STATE_MACHINE_ARN = "arn:aws:states:us-east-1:123456789012:stateMachine:Grades"
EXECUTION_ARN = "arn:aws:states:us-east-1:123456789012:execution:Grades:run-1"

_ENV_VARS = (
    "TRIGGER_STATE_MACHINE_ARN",
    "AWS_REGION",
    "TRIGGER_SFN_ENDPOINT_URL",
    "TRIGGER_CONNECT_TIMEOUT_SECONDS",
    "TRIGGER_READ_TIMEOUT_SECONDS",
    "TRIGGER_HOST",
    "TRIGGER_PORT",
    "TRIGGER_CORS_ORIGINS",
    "LOG_LEVEL",
)


class FakePaginator:
    """Stands in for the boto3 ``get_execution_history`` paginator."""

    def __init__(self, owner: FakeSfn) -> None:
        self._owner = owner

    def paginate(self, **kwargs: Any) -> Iterator[dict[str, Any]]:
        self._owner.history_calls.append(kwargs)
        error = self._owner.errors.get("get_execution_history")
        if error is not None:
            raise error
        yield from self._owner.history_pages


class FakeSfn:
    """Minimal stand-in for ``boto3.client("stepfunctions")``."""

    def __init__(self) -> None:
        self.history_pages: list[dict[str, Any]] = [{"events": []}]
        self.description: dict[str, Any] = {"executionArn": EXECUTION_ARN, "status": "RUNNING"}
        self.next_execution_arns: list[str] = [EXECUTION_ARN]
        self.errors: dict[str, Exception] = {}

        self.start_calls: list[dict[str, Any]] = []
        self.history_calls: list[dict[str, Any]] = []
        self.describe_calls: list[dict[str, Any]] = []

    def set_history(self, *pages: list[dict[str, Any]]) -> None:
        self.history_pages = [{"events": list(events)} for events in pages]

    def get_paginator(self, operation_name: str) -> FakePaginator:
        assert operation_name == "get_execution_history"
        return FakePaginator(self)

    def start_execution(self, **kwargs: Any) -> dict[str, Any]:
        self.start_calls.append(kwargs)
        error = self.errors.get("start_execution")
        if error is not None:
            raise error
        arn = self.next_execution_arns.pop(0) if self.next_execution_arns else EXECUTION_ARN
        return {"executionArn": arn, "startDate": datetime(2025, 1, 1, tzinfo=UTC)}

    def describe_execution(self, **kwargs: Any) -> dict[str, Any]:
        self.describe_calls.append(kwargs)
        error = self.errors.get("describe_execution")
        if error is not None:
            raise error
        return dict(self.description)


def started(event_id: int = 1) -> dict[str, Any]:
    return {
        "timestamp": datetime(2025, 1, 1, tzinfo=UTC),
        "type": "ExecutionStarted",
        "id": event_id,
        "previousEventId": 0,
        "executionStartedEventDetails": {"input": "{}", "roleArn": "arn:aws:iam::1:role/sfn"},
    }


def entered(name: str, event_id: int = 2, kind: str = "TaskStateEntered") -> dict[str, Any]:
    return {
        "timestamp": datetime(2025, 1, 1, tzinfo=UTC),
        "type": kind,
        "id": event_id,
        "previousEventId": event_id - 1,
        "stateEnteredEventDetails": {"name": name, "input": "{}"},
    }


def exited(name: str, event_id: int = 3) -> dict[str, Any]:
    return {
        "timestamp": datetime(2025, 1, 1, tzinfo=UTC),
        "type": "TaskStateExited",
        "id": event_id,
        "previousEventId": event_id - 1,
        "stateExitedEventDetails": {"name": name, "output": "{}"},
    }


def succeeded(output: str = '{"grade": "A"}', event_id: int = 9) -> dict[str, Any]:
    return {
        "timestamp": datetime(2025, 1, 1, tzinfo=UTC),
        "type": "ExecutionSucceeded",
        "id": event_id,
        "previousEventId": event_id - 1,
        "executionSucceededEventDetails": {"output": output},
    }


def failed(cause: str = "boom", event_id: int = 9) -> dict[str, Any]:
    return {
        "timestamp": datetime(2025, 1, 1, tzinfo=UTC),
        "type": "ExecutionFailed",
        "id": event_id,
        "previousEventId": event_id - 1,
        "executionFailedEventDetails": {"error": "States.TaskFailed", "cause": cause},
    }


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep a developer's shell env or `.env` from leaking into settings."""

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def fake_sfn() -> FakeSfn:
    return FakeSfn()


@pytest.fixture
def engine(fake_sfn: FakeSfn) -> StepFunctionsClient:
    return StepFunctionsClient(sfn=fake_sfn)


@pytest.fixture
def registry() -> ExecutionRegistry:
    return ExecutionRegistry()


@pytest.fixture
def server_settings() -> ServerSettings:
    return ServerSettings(TRIGGER_STATE_MACHINE_ARN=STATE_MACHINE_ARN)
