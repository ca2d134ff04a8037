"""Configuration management for Spice Route.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os
from typing import Optional

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()


DEFAULT_THUMBNAIL_URL = (
    "https://images.stockcake.com/public/3/c/5/3c5ad8bc-f75a-4747-a7b8-232e8cb54f84_large/"
    "chef-preparing-ingredients-stockcake.jpg"
)
CARD_FALLBACK_THUMBNAIL_URL = (
    "https://www.maggi.in/sites/default/files/styles/home_stage_944_531/public/srh_recipes/"
    "e209fda9ec6fc987724b115c15060551.jpg?h=88ac1a36&itok=jQwgnyxn"
)


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    return float(value) if value else None


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    return int(value) if value else None


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
        # Same model serves recipe search and recipe chat
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
        # Sampling parameters are only sent when set; otherwise the model defaults apply
        self.TEMPERATURE: Optional[float] = _optional_float("TEMPERATURE")
        self.MAX_OUTPUT_TOKENS: Optional[int] = _optional_int("MAX_OUTPUT_TOKENS")
        # HTTP timeout for a single model call, in seconds
        self.REQUEST_TIMEOUT_S: int = int(os.getenv("REQUEST_TIMEOUT_S", "60"))
        # Number of suggestions asked for by both search prompts
        self.RECIPE_SUGGESTIONS: int = int(os.getenv("RECIPE_SUGGESTIONS", "6"))
        # Thumbnail embedded in prompts and used for records without one
        self.DEFAULT_THUMBNAIL_URL: str = os.getenv("DEFAULT_THUMBNAIL_URL", DEFAULT_THUMBNAIL_URL)
        # Thumbnail shown on result cards for records without one
        self.CARD_FALLBACK_THUMBNAIL_URL: str = os.getenv(
            "CARD_FALLBACK_THUMBNAIL_URL", CARD_FALLBACK_THUMBNAIL_URL
        )
        self.APP_TITLE: str = os.getenv("APP_TITLE", "Spice Route")

    def validate(self) -> None:
        """Validate required configuration.

        Raises:
            ValueError: If the API key is missing or invalid values provided.
        """
        if not self.GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY environment variable is required")
        if self.TEMPERATURE is not None and not (0.0 <= self.TEMPERATURE <= 2.0):
            raise ValueError(
                f"TEMPERATURE must be between 0.0 and 2.0, got: {self.TEMPERATURE}"
            )
        if self.MAX_OUTPUT_TOKENS is not None and self.MAX_OUTPUT_TOKENS < 256:
            raise ValueError(
                f"MAX_OUTPUT_TOKENS must be at least 256, got: {self.MAX_OUTPUT_TOKENS}"
            )
        if self.REQUEST_TIMEOUT_S < 1:
            raise ValueError(
                f"REQUEST_TIMEOUT_S must be at least 1 second, got: {self.REQUEST_TIMEOUT_S}"
            )
        if not (1 <= self.RECIPE_SUGGESTIONS <= 10):
            raise ValueError(
                f"RECIPE_SUGGESTIONS must be between 1 and 10, got: {self.RECIPE_SUGGESTIONS}"
            )


# Module-level config instance; validated when a model client is built
config = Config()
