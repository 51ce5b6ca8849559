"""Application settings and configuration management."""

import os
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, ConfigDict
from pydantic_settings import BaseSettings

PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application
    app_name: str = Field(default="Law Search")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    workers: int = Field(default=1)

    # Collection
    law_data_source: str = Field(
        default=os.path.join(PACKAGE_DIR, "data", "law.json"),
        description="Path or http(s) URL of the article collection"
    )

    # Search Configuration
    browse_size: int = Field(default=4)
    fuzzy_threshold: float = Field(default=0.6)
    fuzzy_min_match_length: int = Field(default=2)
    max_query_length: int = Field(default=200)
    max_suggestions: int = Field(default=5)
    normalize_cache_size: int = Field(default=10000)  # 0 = unbounded
    proximity_window: Optional[int] = Field(default=None)  # chars, None = disabled

    # Search history
    history_path: str = Field(default=".law_search_history.json")
    history_size: int = Field(default=5)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")

    # CORS
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080", "http://localhost:8000"]
    )

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LAW_SEARCH_",
        case_sensitive=False,
        extra="ignore"  # Ignore extra environment variables
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
