"""Configuration management for the restaurant directory using Pydantic."""

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database Configuration
    database_url: str = Field(
        default="sqlite+aiosqlite:///restaurants.db",
        description="SQLAlchemy async database URL",
    )
    database_echo: bool = Field(
        default=False, description="Echo SQL statements to the log"
    )
    normalize_bookmarks_on_startup: bool = Field(
        default=True,
        description="Backfill missing bookmark counts when the database is initialized",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")

    def is_in_memory(self) -> bool:
        """Check if the database only lives for the lifetime of the process."""
        return self.database_url.startswith("sqlite") and (
            ":memory:" in self.database_url or self.database_url.rstrip("/").endswith(":")
        )

    def model_post_init(self, __context) -> None:
        """Validate configuration after initialization."""
        if self.is_in_memory():
            logger.warning(
                "DATABASE_URL points to an in-memory database - data will not persist"
            )


# Global config instance
config: Config | None = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global config
    if config is None:
        config = Config()
    return config


def setup_logging(cfg: Config | None = None) -> None:
    """Configure logging for the application."""
    if cfg is None:
        cfg = get_config()

    log_level = getattr(logging, cfg.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from external libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
