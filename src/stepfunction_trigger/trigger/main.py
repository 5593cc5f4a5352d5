"""CLI entrypoint for the trigger."""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from stepfunction_trigger import __version__
from stepfunction_trigger.trigger.config import TriggerSettings
from stepfunction_trigger.trigger.errors import TriggerError
from stepfunction_trigger.trigger.logging import configure_logging
from stepfunction_trigger.trigger.projector import render_summary
from stepfunction_trigger.trigger.registry import ExecutionRegistry
from stepfunction_trigger.trigger.service import TriggerService, build_engine

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stepfunction-trigger",
        description="Start a Step Functions execution and report its progress",
    )
    parser.add_argument(
        "--version", action="version", version=f"stepfunction-trigger {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP trigger server")
    serve.add_argument("--host", default=None, help="Bind address (defaults to TRIGGER_HOST)")
    serve.add_argument(
        "--port", type=int, default=None, help="Bind port (defaults to TRIGGER_PORT)"
    )

    start = subparsers.add_parser("start", help="Start an execution and print its ARN")
    start.add_argument(
        "--marks",
        default="",
        help="JSON document passed to the state machine as the 'marks' input",
    )

    status = subparsers.add_parser(
        "status", help="Print the progress summary of an execution"
    )
    status.add_argument(
        "--execution-arn",
        required=True,
        help="ARN of the execution to summarize",
    )

    return parser


def _serve(host: str | None, port: int | None) -> int:
    import uvicorn

    from stepfunction_trigger.server.app import create_app
    from stepfunction_trigger.server.config import ServerSettings

    settings = ServerSettings()
    configure_logging(settings.log_level)

    app = create_app(settings=settings)
    uvicorn.run(
        app,
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = TriggerSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    if args.command == "serve":
        return _serve(args.host, args.port)

    configure_logging(settings.log_level)

    service = TriggerService(
        engine=build_engine(settings),
        registry=ExecutionRegistry(),
        state_machine_arn=settings.state_machine_arn,
    )

    try:
        if args.command == "start":
            execution_arn = service.start(args.marks)
            print(execution_arn)
            return 0

        if args.command == "status":
            print(render_summary(service.describe(args.execution_arn)))
            return 0

    except TriggerError as e:
        logger.error("Command failed", extra={"command": args.command, "error": str(e)})
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 2  # pragma: no cover
