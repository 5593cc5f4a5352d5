"""Step Functions client wrapper.

This intentionally wraps boto3 to keep engine calls out of request handlers and
make tests easy: pass ``sfn=`` to inject a stand-in for the boto3 client.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError, HTTPClientError
from botocore.exceptions import ConnectionError as BotoConnectionError

from stepfunction_trigger.trigger.engine.models import (
    ExecutionDescription,
    HistoryEvent,
    StartedExecution,
)
from stepfunction_trigger.trigger.errors import EngineError, EngineUnavailable, UnknownExecution

logger = logging.getLogger(__name__)

_UNKNOWN_EXECUTION_CODES: frozenset[str] = frozenset({"ExecutionDoesNotExist", "InvalidArn"})


@contextmanager
def _engine_call(operation: str, *, execution_arn: str = "") -> Iterator[None]:
    """Translate botocore failures into the trigger error taxonomy."""

    try:
        yield
    except ClientError as e:
        error = e.response.get("Error", {})
        code = str(error.get("Code", ""))
        message = str(error.get("Message", "")) or str(e)
        status = e.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        logger.warning(
            "Step Functions rejected call",
            extra={"operation": operation, "code": code, "status": status},
        )
        if code in _UNKNOWN_EXECUTION_CODES and execution_arn:
            raise UnknownExecution(
                execution_arn, message, operation=operation, code=code
            ) from e
        if isinstance(status, int) and status >= 500:
            raise EngineUnavailable(message, operation=operation, code=code) from e
        raise EngineError(
            message,
            operation=operation,
            code=code,
            engine_status=status if isinstance(status, int) else None,
        ) from e
    except (BotoConnectionError, HTTPClientError) as e:
        logger.warning(
            "Step Functions unreachable", extra={"operation": operation, "error": str(e)}
        )
        raise EngineUnavailable(str(e), operation=operation) from e
    except BotoCoreError as e:
        raise EngineError(str(e), operation=operation) from e


class StepFunctionsClient:
    """Small wrapper around the boto3 ``stepfunctions`` client.

    Only the three calls the trigger needs are exposed. Calls are bounded by the
    configured connect/read timeouts and are attempted exactly once; retrying is
    left to whoever issued the triggering request.
    """

    def __init__(
        self,
        *,
        region: str = "us-east-1",
        endpoint_url: str = "",
        connect_timeout_seconds: float = 5.0,
        read_timeout_seconds: float = 30.0,
        sfn: Any | None = None,
    ) -> None:
        if sfn is not None:
            self._sfn = sfn
            logger.debug("Using injected Step Functions client")
            return

        config = Config(
            region_name=region,
            connect_timeout=connect_timeout_seconds,
            read_timeout=read_timeout_seconds,
            retries={"mode": "standard", "total_max_attempts": 1},
        )
        self._sfn = boto3.client(
            "stepfunctions",
            config=config,
            endpoint_url=endpoint_url.strip() or None,
        )
        logger.info(
            "Step Functions client ready",
            extra={"region": region, "endpoint_url": endpoint_url or None},
        )

    def start_execution(
        self,
        *,
        state_machine_arn: str,
        input_json: str,
    ) -> StartedExecution:
        if not state_machine_arn.strip():
            raise ValueError("state_machine_arn is required")

        with _engine_call("StartExecution"):
            data: dict[str, Any] = self._sfn.start_execution(
                stateMachineArn=state_machine_arn, input=input_json
            )

        execution_arn = data.get("executionArn")
        if not isinstance(execution_arn, str) or not execution_arn.strip():
            raise EngineError(
                "Unexpected StartExecution response: missing executionArn",
                operation="StartExecution",
            )
        logger.info("Execution started", extra={"execution_arn": execution_arn})
        return StartedExecution(execution_arn=execution_arn)

    def iter_history_events(self, execution_arn: str) -> Iterator[HistoryEvent]:
        """Yield every history event in order, following ``nextToken`` across pages."""

        if not execution_arn.strip():
            raise ValueError("execution_arn is required")

        paginator = self._sfn.get_paginator("get_execution_history")
        with _engine_call("GetExecutionHistory", execution_arn=execution_arn):
            pages = 0
            for page in paginator.paginate(executionArn=execution_arn, reverseOrder=False):
                pages += 1
                for raw in page.get("events", []):
                    if isinstance(raw, dict):
                        yield HistoryEvent.from_api(raw)
            logger.debug(
                "Fetched execution history",
                extra={"execution_arn": execution_arn, "pages": pages},
            )

    def get_execution_history(self, execution_arn: str) -> list[HistoryEvent]:
        return list(self.iter_history_events(execution_arn))

    def describe_execution(self, execution_arn: str) -> ExecutionDescription:
        if not execution_arn.strip():
            raise ValueError("execution_arn is required")

        with _engine_call("DescribeExecution", execution_arn=execution_arn):
            data: dict[str, Any] = self._sfn.describe_execution(executionArn=execution_arn)

        status = data.get("status")
        if not isinstance(status, str) or not status.strip():
            raise EngineError(
                "Unexpected DescribeExecution response: missing status",
                operation="DescribeExecution",
            )
        output = data.get("output")
        return ExecutionDescription(
            execution_arn=execution_arn,
            status=status,
            output=output if isinstance(output, str) else None,
        )
