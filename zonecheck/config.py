"""
ZONECHECK Configuration Module.

Engine settings read from environment variables.
Supports .env files for local development.

Usage:
    from zonecheck.config import settings

    settings.configure_logging()
    print(settings.check_all_parts)
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if present
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


def get_bool(key: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    value = os.getenv(key, str(default)).lower()
    return value in ("true", "1", "yes", "on")


@dataclass
class Settings:
    """Engine settings loaded from environment."""

    # Overlap checking: test every MultiPolygon part, not only the first ring
    check_all_parts: bool = field(default_factory=lambda: get_bool("ZONE_CHECK_ALL_PARTS", False))

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_format: str = field(
        default_factory=lambda: os.getenv(
            "LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )

    def __post_init__(self):
        """Validate settings after initialization."""
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            logging.warning(f"Unknown LOG_LEVEL {self.log_level!r}, using INFO")
            self.log_level = "INFO"

    def configure_logging(self):
        """Configure logging based on settings."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        logging.basicConfig(level=level, format=self.log_format)


# Singleton instance
settings = Settings()


# Convenience function for testing
def get_settings() -> Settings:
    """Get the settings instance (useful for dependency injection)."""
    return settings
