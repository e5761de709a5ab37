"""
Policy Topics Configuration Package.

This module uses Pydantic Settings to:
1. Define the schema for all configuration
2. Load defaults from configs/config.yaml and configs/features/*.yaml
3. Automatically override with environment variables from .env

Usage:
    from policy_topics.config import settings

    # Access paths
    raw_dir = settings.paths.raw_data_dir

    # Access LDA settings
    k = settings.topic_modeling.model.num_topics
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Core configs
from policy_topics.config.paths import PathsConfig
from policy_topics.config.preprocessing import PreprocessingConfig
from policy_topics.config.reproducibility import ReproducibilityConfig
from policy_topics.config._loader import clear_config_cache
from policy_topics.config.run_context import RunContext

# Feature configs
from policy_topics.config.features import (
    SentimentConfig,
    TopicModelingConfig,
    LexicalConfig,
)


class Settings(BaseSettings):
    """
    Main settings class that combines all configuration sections.

    Usage:
        from policy_topics.config import settings

        settings.paths.raw_data_dir
        settings.topic_modeling.model.sweeps
        settings.lexical.watch_terms
    """
    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    paths: PathsConfig = Field(default_factory=PathsConfig)
    preprocessing: PreprocessingConfig = Field(default_factory=PreprocessingConfig)
    reproducibility: ReproducibilityConfig = Field(default_factory=ReproducibilityConfig)
    sentiment: SentimentConfig = Field(default_factory=SentimentConfig)
    topic_modeling: TopicModelingConfig = Field(default_factory=TopicModelingConfig)
    lexical: LexicalConfig = Field(default_factory=LexicalConfig)


# ===========================
# Global Settings Instance
# ===========================

settings = Settings()


# ===========================
# Public API
# ===========================

__all__ = [
    # Main settings
    "settings",
    "Settings",
    # Utility
    "clear_config_cache",
    "RunContext",
    # Core configs (for direct access if needed)
    "PathsConfig",
    "PreprocessingConfig",
    "ReproducibilityConfig",
    # Feature configs
    "SentimentConfig",
    "TopicModelingConfig",
    "LexicalConfig",
]
