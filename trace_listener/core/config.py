"""Application configuration."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "structlog-trace-listener"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "DEBUG"

    # Self-log（适配器自身的诊断日志，走 loguru）
    SELF_LOG_ENABLED: bool = False

    # Listener
    DEFAULT_SOURCE_CONTEXT: str = "trace_listener.StructuredTraceListener"

    # Sink
    DUPLICATE_PROPERTY_POLICY: Literal["last_wins", "first_wins"] = "last_wins"
    MAX_DESTRUCTURE_DEPTH: int = Field(default=10, ge=1)
    TEMPLATE_CACHE_SIZE: int = Field(default=1000, ge=0)


settings = Settings()
