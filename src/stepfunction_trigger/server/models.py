"""Pydantic models for the JSON endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stepfunction_trigger.trigger.projector import ProgressSummary


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiProgressSummary(_CamelModel):
    execution_arn: str
    passed_states: list[str] = Field(default_factory=list)
    current_state: str | None = None
    status: str
    result: str | None = None
    failure_cause: str | None = None
    failure_error: str | None = None

    @classmethod
    def from_summary(cls, execution_arn: str, summary: ProgressSummary) -> ApiProgressSummary:
        return cls(
            execution_arn=execution_arn,
            passed_states=list(summary.passed_states),
            current_state=summary.current_state,
            status=summary.status,
            result=summary.result,
            failure_cause=summary.failure_cause,
            failure_error=summary.failure_error,
        )


class StartedExecutionResponse(_CamelModel):
    execution_arn: str
