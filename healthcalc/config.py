"""
Configuration management with environment variable support and validation.

Values come from the process environment (optionally a .env file) and are
validated into pydantic models once, at first use.
"""

import os
from functools import lru_cache
from typing import Literal, cast

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_EMAIL_API_URL = "https://api.resend.com/emails"


class EmailProviderConfig(BaseModel):
    """Transactional email provider used by the contact form."""

    api_key: str | None = Field(default=None, description="Provider API key (bearer token)")
    api_url: str = Field(default=DEFAULT_EMAIL_API_URL, description="Send endpoint URL")
    from_address: str = Field(
        default="Health Calculators <onboarding@resend.dev>", description="Sender address"
    )
    to_address: str = Field(default="contact@example.com", description="Inbox for submissions")
    timeout_seconds: float = Field(default=10.0, gt=0.0, description="HTTP timeout")

    @field_validator("api_key")
    @classmethod
    def blank_key_is_missing(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def is_configured(self) -> bool:
        return self.api_key is not None


class APIConfig(BaseModel):
    """API server configuration."""

    host: str = Field(default="0.0.0.0", description="API server host")
    port: int = Field(default=8000, gt=0, lt=65536, description="API server port")
    reload: bool = Field(default=False, description="Enable auto-reload for development")

    # Security settings
    allowed_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"], description="Allowed origins for CORS"
    )

    # Performance settings
    worker_count: int = Field(default=1, gt=0, description="Number of worker processes")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    format: Literal["json", "console"] = Field(default="json", description="Logging format")


class AppConfig(BaseModel):
    """Main application configuration combining all subsystems."""

    # Environment
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    # Component configs
    email: EmailProviderConfig
    api: APIConfig
    logging: LoggingConfig

    @model_validator(mode="after")
    def debug_only_in_dev(self) -> "AppConfig":
        """Ensure debug mode is only allowed in development environment."""
        if self.debug and self.environment != "development":
            raise ValueError("debug mode is only allowed in development environment")
        return self


def _env_to_literal(val: str) -> Literal["development", "staging", "production"]:
    v = val.strip().lower()
    if v in {"dev", "development"}:
        return "development"
    if v in {"stage", "staging"}:
        return "staging"
    return "production"


def _level_to_literal(val: str) -> Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
    v = val.strip().upper()
    return cast(
        Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        v if v in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} else "INFO",
    )


def _parse_bool(val: str | None, default: bool) -> bool:
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


def load_config_from_env() -> AppConfig:
    """Load configuration from environment variables with validation."""

    # Detect environment
    environment = _env_to_literal(os.getenv("ENVIRONMENT", "development"))
    debug = environment == "development"

    email_config = EmailProviderConfig(
        api_key=os.getenv("EMAIL_API_KEY"),
        api_url=os.getenv("EMAIL_API_URL", DEFAULT_EMAIL_API_URL),
        from_address=os.getenv(
            "EMAIL_FROM_ADDRESS", "Health Calculators <onboarding@resend.dev>"
        ),
        to_address=os.getenv("EMAIL_TO_ADDRESS", "contact@example.com"),
        timeout_seconds=float(os.getenv("EMAIL_TIMEOUT_SECONDS", "10.0")),
    )

    api_config = APIConfig(
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", "8000")),
        reload=_parse_bool(os.getenv("API_RELOAD"), debug),
        allowed_origins=[
            origin.strip()
            for origin in os.getenv("API_ALLOWED_ORIGINS", "http://localhost:3000").split(",")
            if origin.strip()
        ],
        worker_count=int(os.getenv("API_WORKER_COUNT", "1")),
    )

    logging_config = LoggingConfig(
        level=_level_to_literal(os.getenv("LOG_LEVEL", "INFO")),
        format="console" if debug else "json",
    )

    return AppConfig(
        environment=environment,
        debug=debug,
        email=email_config,
        api=api_config,
        logging=logging_config,
    )


@lru_cache
def get_config() -> AppConfig:
    """Get cached application configuration."""
    return load_config_from_env()
