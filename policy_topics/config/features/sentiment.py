"""Sentiment lexicon configuration."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from policy_topics.config._loader import load_yaml_section


def _get_config() -> dict:
    return load_yaml_section("features/sentiment.yaml", "sentiment")


class SentimentLexiconConfig(BaseSettings):
    """How the lexicon CSV is laid out."""
    model_config = SettingsConfigDict(
        env_prefix='SENTIMENT_LEXICON_',
        case_sensitive=False
    )

    word_column: str = Field(
        default_factory=lambda: _get_config().get('lexicon', {}).get('word_column', 'word')
    )
    sentiment_column: str = Field(
        default_factory=lambda: _get_config().get('lexicon', {}).get('sentiment_column', 'sentiment')
    )
    positive_label: str = Field(
        default_factory=lambda: _get_config().get('lexicon', {}).get('positive_label', 'positive')
    )
    negative_label: str = Field(
        default_factory=lambda: _get_config().get('lexicon', {}).get('negative_label', 'negative')
    )
    encoding: str = Field(
        default_factory=lambda: _get_config().get('lexicon', {}).get('encoding', 'utf-8')
    )
    on_unknown_label: Literal["error", "skip"] = Field(
        default_factory=lambda: _get_config().get('lexicon', {}).get('on_unknown_label', 'skip')
    )


class SentimentOutputConfig(BaseSettings):
    """Output format settings."""
    model_config = SettingsConfigDict(
        env_prefix='SENTIMENT_OUT_',
        case_sensitive=False
    )

    precision: int = Field(
        default_factory=lambda: _get_config().get('output', {}).get('precision', 4)
    )


class SentimentConfig(BaseSettings):
    """
    Sentiment analysis configuration.
    Loads from configs/features/sentiment.yaml with environment variable overrides.
    """
    model_config = SettingsConfigDict(
        env_prefix='SENTIMENT_',
        env_nested_delimiter='__',
        case_sensitive=False
    )

    lexicon: SentimentLexiconConfig = Field(
        default_factory=SentimentLexiconConfig
    )
    output: SentimentOutputConfig = Field(
        default_factory=SentimentOutputConfig
    )
