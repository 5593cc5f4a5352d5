"""Error taxonomy for the trigger surface.

Each error carries the HTTP status code the transport layer should answer with,
so the FastAPI app and the API Gateway handler map failures the same way.
"""

from __future__ import annotations


class TriggerError(Exception):
    """Base class for failures surfaced to the caller."""

    status_code: int = 500


class MissingExecution(TriggerError):
    """Raised when a poll arrives before any execution was recorded."""

    status_code = 400

    def __str__(self) -> str:
        return "Missing executionArn"


class InvalidMarks(TriggerError):
    """Raised when the start request body is not a JSON document."""

    status_code = 400

    def __str__(self) -> str:
        return "Invalid marks payload"


class ConfigurationError(TriggerError):
    """Raised when a request needs settings that were not provided."""

    status_code = 409


class EngineError(TriggerError):
    """The engine rejected a call.

    ``engine_status`` is the HTTP status reported by the engine, when known.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        code: str = "",
        engine_status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.code = code
        self.engine_status = engine_status
        if engine_status is not None and 400 <= engine_status < 600:
            self.status_code = engine_status
        else:
            self.status_code = 502

    def __str__(self) -> str:
        message = super().__str__()
        if self.code:
            return f"{self.operation} failed ({self.code}): {message}"
        return f"{self.operation} failed: {message}"


class UnknownExecution(EngineError):
    """The engine does not know the execution identifier."""

    def __init__(self, execution_arn: str, message: str, *, operation: str, code: str) -> None:
        super().__init__(message, operation=operation, code=code, engine_status=404)
        self.execution_arn = execution_arn


class EngineUnavailable(EngineError):
    """Transport failure, timeout or server-side error while talking to the engine."""

    def __init__(self, message: str, *, operation: str, code: str = "") -> None:
        super().__init__(message, operation=operation, code=code, engine_status=503)
