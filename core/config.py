# core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class NavQueryConfig(BaseSettings):
    """Configuration for navquery spatial queries."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="NAVQUERY_")

    # Path queries
    default_area_mask: int = -1  # every navigable area
    nearest_point_radius: float = float("inf")
    corner_capacity: int = 100  # Initial route corner buffer size

    # Logging
    log_level: str = "INFO"


# Global config instance
config = NavQueryConfig()
