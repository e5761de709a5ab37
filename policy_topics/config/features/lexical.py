"""Frequency ranking and term tracking configuration."""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from policy_topics.config._loader import load_yaml_section


def _get_config() -> dict:
    return load_yaml_section("features/lexical.yaml", "lexical")


class LexicalConfig(BaseSettings):
    """
    Lexical analytics configuration.
    Loads from configs/features/lexical.yaml with environment variable overrides.
    """
    model_config = SettingsConfigDict(
        env_prefix='LEXICAL_',
        case_sensitive=False
    )

    watch_terms: List[str] = Field(
        default_factory=lambda: _get_config().get('watch_terms', [])
    )
    top_n: Optional[int] = Field(
        default_factory=lambda: _get_config().get('top_n', 25)
    )
    cumulative: bool = Field(
        default_factory=lambda: _get_config().get('cumulative', True)
    )

    @field_validator('watch_terms')
    @classmethod
    def normalize_watch_terms(cls, v: List[str]) -> List[str]:
        """Lowercase and de-duplicate while keeping the given order."""
        seen = []
        for term in v:
            term = term.strip().lower()
            if term and term not in seen:
                seen.append(term)
        return seen
