"""
Application configuration using Pydantic settings.
"""
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Document Store Configuration
    document_store_base_url: str = Field(
        default="https://store.example.com/v1",
        description="Base URL for the document store REST API"
    )
    document_store_api_key: str = Field(
        default="",
        description="Bearer token for the document store"
    )

    # Weather API Configuration
    weather_api_base_url: str = Field(
        default="https://api.openweathermap.org",
        description="Base URL for the OpenWeatherMap API"
    )
    weather_api_key: str = Field(
        default="",
        description="OpenWeatherMap application key"
    )

    # Retry Configuration
    max_retry_attempts: int = Field(
        default=3,
        description="Maximum number of retry attempts for API calls"
    )
    retry_backoff_multiplier: int = Field(
        default=1,
        description="Multiplier for exponential backoff"
    )
    retry_min_wait: int = Field(
        default=4,
        description="Minimum wait time in seconds between retries"
    )
    retry_max_wait: int = Field(
        default=10,
        description="Maximum wait time in seconds between retries"
    )
    request_timeout: float = Field(
        default=30.0,
        description="Timeout in seconds for outgoing HTTP requests"
    )

    # Harvest Advisory Parameters
    harvest_maturity_age: int = Field(
        default=3,
        description="Minimum tree age in years before a harvest can be forecast"
    )
    harvest_months_to_flowering: int = Field(
        default=1,
        description="Months from the reference care date to flowering"
    )
    harvest_months_fast_variety: int = Field(
        default=8,
        description="Months from flowering to harvest for fast varieties"
    )
    harvest_months_default: int = Field(
        default=10,
        description="Months from flowering to harvest for other varieties"
    )
    harvest_fast_varieties: list[str] = Field(
        default=["Fuerte", "Mexicola"],
        description="Varieties that ripen on the shorter schedule"
    )

    # Animal Health Parameters
    animal_min_weight_kg: float = Field(
        default=10.0,
        description="Weight below which an animal is flagged as underweight"
    )
    animal_vaccination_max_age_months: int = Field(
        default=6,
        description="Months after which a vaccination is considered stale"
    )
    animal_min_production: float = Field(
        default=1.0,
        description="Production figure below which an animal is flagged"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (use specific origins in production)"
    )

    # Rate Limiting
    rate_limit_requests: int = Field(
        default=100,
        description="Maximum requests per minute per client"
    )

    # Application Settings
    app_name: str = Field(
        default="AgriTag Field Tagging Service",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode"
    )

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
