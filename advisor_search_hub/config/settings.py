"""Application settings with modern Pydantic v2 patterns."""

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MonitoringConfig(BaseModel):
    """Document-store operation monitoring settings."""

    enabled: bool = Field(
        default=True, description="Record timings and cost estimates"
    )
    max_history: int = Field(
        default=1000, ge=1, description="Maximum operations kept in history"
    )


class AppSettings(BaseSettings):
    """Main application settings with modern Pydantic v2 patterns."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
        validate_default=True,
    )

    # Application metadata
    app_name: str = Field(default="Advisor Search Hub", description="Application name")
    environment: str = Field(default="development", description="Runtime environment")
    log_level: str = Field(default="INFO", description="Logging level")

    # Filter rules
    rules_file: Path | None = Field(
        default=None,
        description="JSON rule document; the bundled rules are used when unset",
    )
    enforce_required: bool = Field(
        default=False,
        description="Report REQUIRED_FIELD for required filters left empty",
    )

    # Nested configurations
    monitoring: MonitoringConfig = Field(
        default_factory=MonitoringConfig, description="Monitoring settings"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_envs = {"development", "staging", "production", "test"}
        if v.lower() not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of {valid_envs}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()
