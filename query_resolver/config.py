"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for all configuration:
search defaults, knowledge base location, the plan file used by the
JSON planner, and logging.

Configuration can be overridden via environment variables:
- QR_SEARCH_DB_ID=movies
- QR_SEARCH_ALLOW_PIVOTLESS_SEARCH=false
- QR_KB_DATA_DIR=/path/to/data
- QR_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SearchConfig(BaseSettings):
    """Search and ranking configuration.

    Environment variables prefixed with QR_SEARCH_.
    """

    model_config = SettingsConfigDict(env_prefix="QR_SEARCH_")

    db_id: str = "default"
    max_results: int = Field(default=10, ge=1)
    # Similarity floor applied when a lexical search asks for the automatic threshold
    auto_threshold: float = Field(default=0.6, ge=0.0, le=1.0)
    lexical_threshold: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    semantic_threshold: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    allow_pivotless_search: bool = True


class KnowledgeBaseConfig(BaseSettings):
    """Knowledge base data configuration.

    Environment variables prefixed with QR_KB_.
    """

    model_config = SettingsConfigDict(env_prefix="QR_KB_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    entities_file: str = "entities.csv"
    triples_file: str = "triples.csv"

    @property
    def entities_path(self) -> Path:
        """Full path to entities CSV file."""
        return self.data_dir / self.entities_file

    @property
    def triples_path(self) -> Path:
        """Full path to triples CSV file."""
        return self.data_dir / self.triples_file


class PlannerConfig(BaseSettings):
    """Query planner configuration.

    Environment variables prefixed with QR_PLANNER_.
    """

    model_config = SettingsConfigDict(env_prefix="QR_PLANNER_")

    plans_file: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent
        / "data"
        / "plans.json"
    )


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with QR_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="QR_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.search.db_id)
        print(config.knowledge_base.entities_path)

    Environment variables prefixed with QR_.
    """

    model_config = SettingsConfigDict(env_prefix="QR_")

    search: SearchConfig = Field(default_factory=SearchConfig)
    knowledge_base: KnowledgeBaseConfig = Field(default_factory=KnowledgeBaseConfig)
    planner: PlannerConfig = Field(default_factory=PlannerConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
