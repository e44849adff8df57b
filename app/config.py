"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="FoodPlanner", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3000, ge=1, le=65535, description="Server port")

    # Database settings - Postgres when DATABASE_URL is set, SQLite file otherwise
    database_url: Optional[str] = Field(
        default=None,
        description="PostgreSQL connection URL, e.g. postgresql+psycopg2://user:pw@host/foodplanner",
    )
    db_path: str = Field(
        default="data/foodplanner.db", description="SQLite database file path"
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_pool_size: int = Field(default=20, ge=1, description="Postgres pool size")
    db_max_overflow: int = Field(default=10, ge=0, description="Postgres pool overflow")
    db_pool_timeout_sec: float = Field(
        default=2.0, ge=0, description="Seconds to wait for a pooled connection"
    )
    db_pool_recycle_sec: int = Field(
        default=1800, ge=-1, description="Recycle pooled connections after N seconds"
    )
    db_init_attempts: int = Field(
        default=5, ge=1, description="Database initialization retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB init attempts"
    )

    # Generative AI (Gemini)
    gemini_api_key: str = Field(default="", description="Gemini API key")
    gemini_model: str = Field(
        default="gemini-2.5-flash", description="Gemini model name"
    )

    # Recipe URL import
    recipe_url_allowlist: list[str] = Field(
        default=[
            "chefkoch.de",
            "eatsmarter.de",
            "lecker.de",
            "essen-und-trinken.de",
            "kitchenstories.com",
            "einfachbacken.de",
            "gutekueche.at",
            "ichkoche.at",
            "springlane.de",
            "emmikochteinfach.de",
            "allrecipes.com",
            "bbcgoodfood.com",
            "seriouseats.com",
            "food.com",
        ],
        description="Domains recipe pages may be fetched from (subdomains included)",
    )
    recipe_fetch_timeout_sec: float = Field(
        default=10.0, gt=0, description="Timeout for fetching recipe pages"
    )
    recipe_fetch_max_redirects: int = Field(
        default=3, ge=0, description="Maximum redirects followed when fetching"
    )
    recipe_fetch_max_bytes: int = Field(
        default=2_000_000, gt=0, description="Maximum page size fetched"
    )
    recipe_prompt_max_chars: int = Field(
        default=15000, gt=0, description="Maximum page text passed to the model"
    )

    # Rate limiting (limits library notation)
    rate_limit_enabled: bool = Field(default=True, description="Enable rate limiting")
    rate_limit_general: str = Field(
        default="100 per 15 minutes", description="Limit for general routes"
    )
    rate_limit_ai: str = Field(
        default="20 per 15 minutes", description="Limit for AI routes"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="", description="API route prefix")
    api_title: str = Field(
        default="FoodPlanner API", description="API documentation title"
    )
    api_description: str = Field(
        default="REST API for the FoodPlanner weekly meal planner",
        description="API documentation description",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @property
    def sqlalchemy_url(self) -> str:
        """Connection URL actually used by the engine."""
        if self.database_url:
            url = self.database_url
            # Heroku-style URLs
            if url.startswith("postgres://"):
                url = "postgresql://" + url[len("postgres://"):]
            return url
        return f"sqlite:///{Path(self.db_path)}"

    def uses_sqlite(self) -> bool:
        return self.sqlalchemy_url.startswith("sqlite")

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT


# Global settings instance
settings = Settings()
