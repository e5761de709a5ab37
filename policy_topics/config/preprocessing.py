"""Tokenizer / stop-word configuration."""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from policy_topics.config._loader import load_yaml_section


def _get_config() -> dict:
    return load_yaml_section("config.yaml").get("preprocessing", {})


class PreprocessingConfig(BaseSettings):
    """Text preprocessing configuration settings."""
    model_config = SettingsConfigDict(
        env_prefix='PREPROCESSING_',
        case_sensitive=False
    )

    use_nltk_stopwords: bool = Field(
        default_factory=lambda: _get_config().get('use_nltk_stopwords', True)
    )
    use_policy_stopwords: bool = Field(
        default_factory=lambda: _get_config().get('use_policy_stopwords', False)
    )
    custom_stopwords: List[str] = Field(
        default_factory=lambda: _get_config().get('custom_stopwords', [])
    )
    text_encoding: str = Field(
        default_factory=lambda: _get_config().get('text_encoding', 'utf-8')
    )
