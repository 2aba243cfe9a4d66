"""
Configuration management for the MCP server generator.
Loads and validates environment variables using Pydantic Settings.
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # AI Services
    openai_api_key: str = Field(
        default="",
        description="OpenAI API key; leave empty to resolve with the local keyword analyzer only"
    )
    openai_model: str = Field(
        default="gpt-4.1",
        description="OpenAI model used for requirement analysis and tool synthesis"
    )
    analysis_timeout: float = Field(
        default=60.0,
        description="Deadline in seconds for the requirement analysis call"
    )
    synthesis_timeout: float = Field(
        default=90.0,
        description="Deadline in seconds for each per-pattern tool synthesis call"
    )

    # Server Configuration
    host: str = Field(
        default="0.0.0.0",
        description="Server host address"
    )
    port: int = Field(
        default=8000,
        description="Server port number"
    )
    cors_origins: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    def get_cors_origins_list(self) -> List[str]:
        """Parse CORS origins string into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # Environment
    environment: str = Field(
        default="development",
        description="Application environment: development, production, test"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )

    # Generation Paths
    output_root: str = Field(
        default="generated",
        description="Directory under which generated server projects are written"
    )
    logs_dir: str = Field(
        default="logs",
        description="Directory for per-run generation logs"
    )

    @property
    def remote_analysis_enabled(self) -> bool:
        """Whether the OpenAI-backed analysis and synthesis agents can be used."""
        return bool(self.openai_api_key)

    def validate_configuration(self) -> None:
        """Validate required configuration settings."""
        errors = []

        valid_environments = {"development", "production", "test"}
        if self.environment not in valid_environments:
            errors.append(
                f"ENVIRONMENT must be one of {valid_environments}, "
                f"got: {self.environment}"
            )

        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level.upper() not in valid_log_levels:
            errors.append(
                f"LOG_LEVEL must be one of {valid_log_levels}, "
                f"got: {self.log_level}"
            )

        if self.analysis_timeout <= 0:
            errors.append(f"ANALYSIS_TIMEOUT must be positive, got: {self.analysis_timeout}")

        if self.synthesis_timeout <= 0:
            errors.append(f"SYNTHESIS_TIMEOUT must be positive, got: {self.synthesis_timeout}")

        if not self.output_root:
            errors.append("OUTPUT_ROOT must not be empty")

        if errors:
            raise ValueError(
                "Configuration validation failed:\n" +
                "\n".join(f"  - {error}" for error in errors)
            )


@lru_cache()
def get_settings() -> Settings:
    """Get application settings (cached)."""
    settings = Settings()
    settings.validate_configuration()
    return settings
