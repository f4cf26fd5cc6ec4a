"""
Configuration management with environment variable support and validation.

Design principles:
- Environment-specific configs (dev, staging, prod)
- Validation at startup (fail fast)
- Type safety with Pydantic
"""

import os
from functools import lru_cache
from typing import Literal, cast

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

# Load environment variables from .env file
load_dotenv()

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
Environment = Literal["development", "staging", "production"]


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default="INFO", description="Logging level")
    format: Literal["json", "console"] = Field(default="json", description="Logging format")


class IoTConfig(BaseModel):
    """How sensor documents are turned into snapshots."""

    source_tag: str = Field(
        default="iot_device", description="Source recorded on snapshots built from sensor data"
    )

    @field_validator("source_tag")
    def validate_source_tag(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("IoT source tag must not be blank")
        return v.strip()


class AppConfig(BaseModel):
    """Main application configuration combining all subsystems."""

    environment: Environment = Field(default="development", description="Environment")
    debug: bool = Field(default=False, description="Enable debug mode")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    iot: IoTConfig = Field(default_factory=IoTConfig)

    @model_validator(mode="after")
    def debug_only_in_dev(self) -> "AppConfig":
        """Ensure debug mode is only allowed in development environment."""
        if self.debug and self.environment != "development":
            raise ValueError("debug mode is only allowed in development environment")
        return self


def load_config_from_env() -> AppConfig:
    """Load configuration from environment variables with validation."""

    def _env_to_literal(val: str) -> Environment:
        v = val.strip().lower()
        if v in {"dev", "development"}:
            return "development"
        if v in {"stage", "staging"}:
            return "staging"
        return "production"

    def _level_to_literal(val: str) -> LogLevel:
        v = val.strip().upper()
        return cast(
            LogLevel,
            v if v in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} else "INFO",
        )

    def _parse_bool(val: str | None, default: bool) -> bool:
        if val is None:
            return default
        return val.strip().lower() in {"1", "true", "yes", "on"}

    environment = _env_to_literal(os.getenv("ENVIRONMENT", "development"))
    debug = _parse_bool(os.getenv("DEBUG"), environment == "development")

    log_format = os.getenv("LOG_FORMAT", "").strip().lower()
    logging_config = LoggingConfig(
        level=_level_to_literal(os.getenv("LOG_LEVEL", "INFO")),
        format=cast(
            Literal["json", "console"],
            log_format if log_format in {"json", "console"} else ("console" if debug else "json"),
        ),
    )

    iot_config = IoTConfig(source_tag=os.getenv("IOT_SOURCE_TAG", "iot_device"))

    return AppConfig(
        environment=environment,
        debug=debug,
        logging=logging_config,
        iot=iot_config,
    )


@lru_cache
def get_config() -> AppConfig:
    """Get cached application configuration."""
    return load_config_from_env()


def validate_config() -> None:
    """Validate configuration at startup."""
    try:
        config = get_config()
        print(f"Configuration loaded for {config.environment} environment")
    except Exception as e:
        print(f"Configuration validation failed: {e}")
        raise


def print_config_summary() -> None:
    """Print configuration summary for debugging."""
    config = get_config()

    print("\nCONFIGURATION SUMMARY")
    print(f"Environment: {config.environment}")
    print(f"Debug Mode: {config.debug}")
    print(f"Log Level: {config.logging.level}")
    print(f"Log Format: {config.logging.format}")
    print(f"IoT Source Tag: {config.iot.source_tag}")


if __name__ == "__main__":
    validate_config()
    print_config_summary()
