from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Publisher settings loaded from PUBLISHER_* environment variables.

    AWS credentials are not configured here; boto3 resolves them through
    its default chain (env vars, shared config, instance roles). Only the
    region, profile and an optional endpoint override are exposed so the
    tool can target LocalStack.

    Timeouts
    ────────
    • fetch_timeout_seconds   GetFunctionConfiguration read timeout
    • update_timeout_seconds  UpdateFunctionCode read timeout (uploads)
    • connect_timeout_seconds TCP connect timeout for both calls

    botocore has no whole-call deadline, so a fetch is bounded by
    connect_timeout_seconds + fetch_timeout_seconds (40s by default).
    """

    model_config = SettingsConfigDict(
        env_prefix="PUBLISHER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Toolchain
    go_binary: str = "go"

    # Lambda API
    aws_region: Optional[str] = None
    aws_profile: Optional[str] = None
    endpoint_url: Optional[str] = None
    fetch_timeout_seconds: float = 30.0
    update_timeout_seconds: float = 300.0
    connect_timeout_seconds: float = 10.0

    # Logging
    log_json: bool = False
    debug: bool = False

    @field_validator(
        "fetch_timeout_seconds",
        "update_timeout_seconds",
        "connect_timeout_seconds",
    )
    @classmethod
    def timeout_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v


def get_settings() -> Settings:
    return Settings()
