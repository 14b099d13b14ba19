"""
Application configuration with Pydantic Settings for validation and type safety.
Values come from environment variables or a .env file.
"""

from enum import Enum
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
    app_name: str = Field(default="FitnessHub", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # Hosted Postgres
    database_url: str = Field(
        default="postgresql+psycopg2://postgres@localhost:5432/postgres",
        description="SQLAlchemy URL of the hosted Postgres database",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_init_attempts: int = Field(
        default=8, ge=1, description="Database initialization retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB init attempts"
    )

    # Hosted auth
    supabase_url: str = Field(
        default="http://localhost:54321", description="Supabase project URL"
    )
    supabase_key: str = Field(default="", description="Supabase anon or service key")
    password_reset_redirect_url: Optional[str] = Field(
        default=None, description="Redirect URL embedded in password reset emails"
    )

    # USDA FoodData Central
    usda_api_key: str = Field(default="DEMO_KEY", description="FoodData Central API key")
    usda_base_url: str = Field(
        default="https://api.nal.usda.gov/fdc/v1",
        description="FoodData Central base URL",
    )
    usda_timeout_sec: float = Field(
        default=10.0, gt=0, description="Timeout for FoodData Central requests"
    )
    usda_page_size: int = Field(
        default=25, ge=1, le=200, description="Foods requested per search"
    )

    # Feature tuning
    recent_foods_limit: int = Field(
        default=5, ge=1, description="Number of recent foods returned"
    )
    moment_caption_max_length: int = Field(
        default=250, ge=1, description="Maximum caption length of a moment"
    )
    challenge_participants_preview: int = Field(
        default=3, ge=0, description="Participants shown on a challenge detail"
    )
    leaderboard_preview: int = Field(
        default=3, ge=1, description="Leaderboard entries shown with progress"
    )

    # Subscription pricing (minor units)
    subscription_monthly_amount: int = Field(default=4990, ge=0)
    subscription_yearly_amount: int = Field(default=47990, ge=0)
    subscription_currency: str = Field(default="myr")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:8081", "http://localhost:19006"],
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
        default="FitnessHub API", description="API documentation title"
    )
    api_description: str = Field(
        default="Fitness, nutrition and community backend for the FitnessHub app",
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

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        """Check if running in testing environment"""
        return self.environment == Environment.TESTING


# Global settings instance
settings = Settings()
