"""Core application configuration and settings.

Handles environment variables and the catalog's tunable presentation rules.
"""
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Load environment variables
ROOT = Path(__file__).resolve().parents[2]
load_dotenv(dotenv_path=ROOT / ".env", override=False)

SORT_ORDERINGS = ("lexicographic", "semantic")
VISIBILITY_CONTEXTS = ("visitor", "admin")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        populate_by_name=True,
        extra="ignore",
    )

    # Application Settings
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    json_logs: bool = Field(default=False, alias="JSON_LOGS")

    # Storage
    data_dir: str = Field(default="data/games", alias="CATALOG_DATA_DIR")

    # Presentation rules
    player_count_top_bucket: Optional[int] = Field(
        default=6,
        alias="CATALOG_PLAYER_COUNT_TOP_BUCKET",
        description="Largest player-count option offered by the UI; rendered with a '+' suffix",
    )
    sort_ordering: str = Field(default="lexicographic", alias="CATALOG_SORT_ORDERING")
    default_context: str = Field(default="visitor", alias="CATALOG_DEFAULT_CONTEXT")

    def validate_required_settings(self):
        """Validate that settings hold usable values."""
        if self.sort_ordering not in SORT_ORDERINGS:
            raise ValueError(
                f"CATALOG_SORT_ORDERING must be one of {', '.join(SORT_ORDERINGS)} "
                f"(got {self.sort_ordering!r})."
            )
        if self.player_count_top_bucket is not None and self.player_count_top_bucket < 1:
            raise ValueError(
                "CATALOG_PLAYER_COUNT_TOP_BUCKET must be a positive player count."
            )
        if self.default_context not in VISIBILITY_CONTEXTS:
            raise ValueError(
                f"CATALOG_DEFAULT_CONTEXT must be one of {', '.join(VISIBILITY_CONTEXTS)}."
            )


# Global settings instance
settings = Settings()


# Validate settings on module import (only in non-test environments)
if settings.environment != "test":
    try:
        settings.validate_required_settings()
    except ValueError as e:
        print(f"Configuration Error: {e}")
        # Don't raise in development to allow partial setup
        if settings.environment == "production":
            raise
