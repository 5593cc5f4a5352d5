"""FastAPI app factory.

Endpoints are intentionally thin wrappers over `TriggerService`.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import Body, FastAPI, Header, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from stepfunction_trigger import __version__
from stepfunction_trigger.server.config import ServerSettings
from stepfunction_trigger.server.models import ApiProgressSummary, StartedExecutionResponse
from stepfunction_trigger.trigger.engine.client import StepFunctionsClient
from stepfunction_trigger.trigger.errors import MissingExecution, TriggerError
from stepfunction_trigger.trigger.registry import DEFAULT_SESSION, ExecutionRegistry
from stepfunction_trigger.trigger.service import TriggerService, build_engine

logger = logging.getLogger(__name__)

SESSION_HEADER = "X-Trigger-Session"

# Every verb is routed to the root handler so unsupported ones get the
# service's own "Invalid HTTP method" answer instead of a framework 405.
_ROOT_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def session_from_header(value: str | None) -> str:
    return (value or "").strip() or DEFAULT_SESSION


def create_app(
    *,
    settings: ServerSettings | None = None,
    engine: StepFunctionsClient | None = None,
    registry: ExecutionRegistry | None = None,
) -> FastAPI:
    settings = settings or ServerSettings()

    app = FastAPI(
        title="Step Functions Trigger",
        version=__version__,
        description="Start a Step Functions execution and poll its progress.",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    service = TriggerService(
        engine=engine or build_engine(settings),
        registry=registry or ExecutionRegistry(),
        state_machine_arn=settings.state_machine_arn,
    )

    app.state.settings = settings
    app.state.service = service

    origins = settings.parsed_cors_origins()
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.api_route("/", methods=_ROOT_METHODS, response_class=PlainTextResponse)
    async def trigger(request: Request) -> PlainTextResponse:
        raw = await request.body()
        session = session_from_header(request.headers.get(SESSION_HEADER))
        # The service blocks on engine round-trips; keep them off the event loop.
        response = await run_in_threadpool(
            service.handle,
            request.method,
            raw or None,
            session=session,
        )
        return PlainTextResponse(response.body, status_code=response.status_code)

    @app.get("/api/v1/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/v1/progress", response_model=ApiProgressSummary)
    def progress(
        x_trigger_session: str | None = Header(default=None),
    ) -> ApiProgressSummary:
        session = session_from_header(x_trigger_session)
        execution_arn = service.registry.current(session=session)
        try:
            if execution_arn is None:
                raise MissingExecution()
            summary = service.describe(execution_arn)
        except TriggerError as e:
            raise HTTPException(status_code=e.status_code, detail=str(e)) from e
        return ApiProgressSummary.from_summary(execution_arn, summary)

    @app.post("/api/v1/executions", response_model=StartedExecutionResponse)
    def start_execution(
        marks: Any = Body(default=None),
        x_trigger_session: str | None = Header(default=None),
    ) -> StartedExecutionResponse:
        session = session_from_header(x_trigger_session)
        try:
            execution_arn = service.start(json.dumps(marks), session=session)
        except TriggerError as e:
            raise HTTPException(status_code=e.status_code, detail=str(e)) from e
        return StartedExecutionResponse(execution_arn=execution_arn)

    return app
