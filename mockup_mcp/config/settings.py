"""
Application Settings
===================

Process-wide settings loaded once from the environment using Pydantic Settings.
The instance is frozen: configuration is immutable for the process lifetime.
"""

from typing import Annotated, Optional, List, Union
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
import json

DEFAULT_API_BASE_URL = "https://app.dynamicmockups.com/api/v1"


class Settings(BaseSettings):
    """Main application settings with environment variable support."""

    # Application Configuration
    app_name: str = Field(default="dynamic-mockups-mcp", description="MCP server name")
    app_version: str = Field(default="1.0.0", description="MCP server version")
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Upstream API Configuration
    api_key: Optional[str] = Field(
        default=None,
        description="Fallback Dynamic Mockups API key, used when a request carries none",
    )
    api_base_url: str = Field(default=DEFAULT_API_BASE_URL, description="Upstream API base URL")
    request_timeout: float = Field(
        default=60.0, gt=0, description="Upstream request timeout in seconds"
    )
    dashboard_url: str = Field(
        default="https://app.dynamicmockups.com/dashboard-api",
        description="Where users obtain an API key",
    )

    # Usage Tracking Configuration
    tracking_enabled: bool = Field(default=True, description="Report tool usage upstream")
    tracking_timeout: float = Field(
        default=5.0, gt=0, description="Usage tracking request timeout in seconds"
    )

    # Transport Configuration
    transport: str = Field(
        default="stdio",
        validation_alias=AliasChoices("DYNAMIC_MOCKUPS_TRANSPORT", "MCP_TRANSPORT"),
        description="Transport: stdio or http",
    )
    host: str = Field(
        default="0.0.0.0",
        validation_alias=AliasChoices("DYNAMIC_MOCKUPS_HOST", "HOST"),
        description="HTTP server host",
    )
    port: int = Field(
        default=3000,
        validation_alias=AliasChoices("DYNAMIC_MOCKUPS_PORT", "PORT"),
        description="HTTP server port",
    )
    json_response: bool = Field(
        default=False, description="Answer MCP POSTs with JSON instead of SSE streams"
    )

    # Security Configuration
    cors_origins: Annotated[List[str], NoDecode] = Field(
        default=["*"],
        validation_alias=AliasChoices("DYNAMIC_MOCKUPS_CORS_ORIGINS", "CORS_ORIGIN"),
        description="Allowed cross-origin sources",
    )

    # Monitoring Configuration
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("transport")
    @classmethod
    def validate_transport(cls, v: str) -> str:
        """Validate transport value."""
        allowed = {"stdio", "http"}
        if v.lower() not in allowed:
            raise ValueError(f"Transport must be one of: {allowed}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("api_key", mode="before")
    @classmethod
    def blank_api_key_is_unset(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse allowed origins from string or list."""
        if isinstance(v, str):
            # Handle JSON-like string: ["*"] or ["https://a", "https://b"]
            v = v.strip()
            if v.startswith("[") and v.endswith("]"):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            # Handle comma-separated string: "*" or "https://a,https://b"
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="DYNAMIC_MOCKUPS_",
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


# Global settings instance - will be initialized when needed
settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
