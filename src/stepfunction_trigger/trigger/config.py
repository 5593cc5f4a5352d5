"""Configuration for the trigger.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The state machine ARN is not validated at startup: the server can start and
answer polls without it, and only a start request fails when it is missing.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TriggerSettings(BaseSettings):
    """Settings shared by the HTTP app, the API Gateway handler and the CLI.

    Environment variables:
    - TRIGGER_STATE_MACHINE_ARN
    - AWS_REGION                       (optional)
    - TRIGGER_SFN_ENDPOINT_URL         (optional, e.g. Step Functions Local)
    - TRIGGER_CONNECT_TIMEOUT_SECONDS  (optional)
    - TRIGGER_READ_TIMEOUT_SECONDS     (optional)
    - LOG_LEVEL                        (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `TriggerSettings(_env_file=path_to_env)`.
    """

    state_machine_arn: str = Field(
        default="",
        validation_alias="TRIGGER_STATE_MACHINE_ARN",
        description="ARN of the state machine started by POST requests",
    )
    aws_region: str = Field(
        default="us-east-1",
        validation_alias="AWS_REGION",
        description="AWS region of the Step Functions endpoint",
    )
    endpoint_url: str = Field(
        default="",
        validation_alias="TRIGGER_SFN_ENDPOINT_URL",
        description="Override the Step Functions endpoint (useful for Step Functions Local)",
    )

    connect_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        validation_alias="TRIGGER_CONNECT_TIMEOUT_SECONDS",
        description="Connect timeout for each Step Functions call",
    )
    read_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        validation_alias="TRIGGER_READ_TIMEOUT_SECONDS",
        description="Read timeout for each Step Functions call",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )
