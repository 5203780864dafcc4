"""Configuration management for the profiling server.

This module handles all configuration loading, validation, and management
using Pydantic Settings for type safety and environment variable support.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.utils.logger import setup_logging


class Settings(BaseSettings):
    """Application settings with validation and type hints."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application Settings
    APP_NAME: str = Field(default="Profiling Server", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    APP_ENV: str = Field(
        default="development",
        description="Application environment",
        pattern="^(development|test|staging|production)$",
    )
    APP_DEBUG: bool = Field(default=True, description="Debug mode")
    APP_HOST: str = Field(default="0.0.0.0", description="Application host")
    APP_PORT: int = Field(default=8080, description="Application port", ge=1, le=65535)

    # API Settings
    API_V1_PREFIX: str = Field(default="/api/v1", description="API v1 prefix")
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="Allowed CORS origins",
    )

    # Security Settings
    JWT_SECRET_KEY: str = Field(
        default="your-jwt-secret-key-here-change-in-production",
        description="JWT secret key",
        min_length=32,
    )
    JWT_ALGORITHM: str = Field(default="HS256", description="JWT algorithm")
    JWT_EXPIRATION_MINUTES: int = Field(
        default=1440, description="Token expiration in minutes", ge=1
    )

    # Database Configuration
    MONGODB_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URL",
    )
    MONGODB_DB_NAME: str = Field(
        default="profiling", description="MongoDB database name"
    )
    MONGODB_MAX_POOL_SIZE: int = Field(
        default=50, description="MongoDB max connection pool size", ge=1
    )
    MONGODB_MIN_POOL_SIZE: int = Field(
        default=5, description="MongoDB min connection pool size", ge=0
    )
    MONGODB_CONNECT_TIMEOUT_MS: int = Field(
        default=10000, description="MongoDB connection timeout in milliseconds", ge=1000
    )
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = Field(
        default=5000, description="MongoDB server selection timeout in milliseconds", ge=100
    )
    TEST_DATABASE_URL: str = Field(
        default="mongodb://localhost:27017",
        description="Test database URL",
    )

    # LLM Configuration
    OPENAI_API_KEY: Optional[str] = Field(default=None, description="OpenAI API key")
    OPENAI_BASE_URL: str = Field(
        default="https://api.openai.com/v1", description="OpenAI API base URL"
    )
    OPENAI_MODEL: str = Field(default="gpt-4o-mini", description="OpenAI model name")
    OPENAI_TEMPERATURE: float = Field(
        default=0.3, description="OpenAI temperature", ge=0.0, le=2.0
    )
    OPENAI_TIMEOUT: int = Field(
        default=60, description="OpenAI request timeout in seconds", ge=1
    )

    # Feature Flags
    ENABLE_API_DOCS: bool = Field(default=True, description="Enable API documentation")
    ENABLE_METRICS: bool = Field(default=True, description="Enable metrics collection")

    # Logging Configuration
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Log level",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    LOG_FORMAT: str = Field(
        default="text", description="Log format", pattern="^(json|text)$"
    )
    LOG_DIR: Optional[str] = Field(default="logs", description="Log file directory")

    @field_validator("JWT_SECRET_KEY")
    def validate_secret_keys(cls, v: str, info) -> str:
        """Validate secret keys are changed in production."""
        if info.data.get("APP_ENV") == "production" and "change-in-production" in v:
            raise ValueError(
                f"{info.field_name} must be changed from default in production"
            )
        return v

    @field_validator("MONGODB_URL", "TEST_DATABASE_URL")
    def validate_mongodb_url(cls, v: str) -> str:
        """Validate MongoDB URL format."""
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError("MongoDB URL must start with mongodb:// or mongodb+srv://")
        return v

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings after all fields are set."""
        if self.APP_ENV == "test":
            self.MONGODB_URL = self.TEST_DATABASE_URL
            self.ENABLE_METRICS = False

        if self.APP_ENV == "production":
            self.APP_DEBUG = False
            self.LOG_LEVEL = "INFO" if self.LOG_LEVEL == "DEBUG" else self.LOG_LEVEL
            self.LOG_FORMAT = "json"

        return self

    def get_database_url(self) -> str:
        """Get the appropriate database URL based on environment."""
        if self.APP_ENV == "test":
            return self.TEST_DATABASE_URL
        return self.MONGODB_URL

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.APP_ENV == "test"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Application settings instance
    """
    settings = Settings()

    setup_logging(
        environment=settings.APP_ENV,
        log_level=settings.LOG_LEVEL,
        log_format=settings.LOG_FORMAT,
        log_dir=settings.LOG_DIR,
    )

    return settings
