"""Configuration settings loaded from environment variables."""

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict

from messmate.models.discovery import FilterCriteria


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Telegram Bot
    bot_token: str

    # Database
    database_url: str

    # Discovery defaults (match the filter panel's reset state)
    default_price_min: Decimal = Decimal("1000")
    default_price_max: Decimal = Decimal("10000")
    default_max_distance_km: float = 50.0
    default_minimum_rating: float = 1.0
    default_listing_rating: float = 4.5
    results_per_page: int = 5

    # Logging
    log_level: str = "INFO"

    # Application
    app_name: str = "messmate"
    environment: str = "development"

    def default_criteria(self) -> FilterCriteria:
        """Build the filter criteria a fresh discovery session starts with."""
        return FilterCriteria(
            price_min=self.default_price_min,
            price_max=self.default_price_max,
            max_distance_km=self.default_max_distance_km,
            minimum_rating=self.default_minimum_rating,
        )


def load_settings() -> Settings:
    """Load and validate settings from environment."""
    return Settings()  # type: ignore[call-arg]
