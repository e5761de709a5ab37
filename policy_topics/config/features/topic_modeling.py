"""Topic modeling configuration."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from policy_topics.config._loader import load_yaml_section


def _get_config() -> dict:
    return load_yaml_section("features/topic_modeling.yaml", "topic_modeling")


def _default_random_state() -> int:
    """model.random_state, falling back to reproducibility.random_seed."""
    seed = _get_config().get('model', {}).get('random_state')
    if seed is None:
        from policy_topics.config.reproducibility import ReproducibilityConfig
        seed = ReproducibilityConfig().random_seed
    return seed


class TopicModelingModelConfig(BaseSettings):
    """Gibbs-sampled LDA settings."""
    model_config = SettingsConfigDict(
        env_prefix='TOPIC_MODELING_MODEL_',
        case_sensitive=False
    )

    num_topics: int = Field(
        default_factory=lambda: _get_config().get('model', {}).get('num_topics', 2)
    )
    alpha: float = Field(
        default_factory=lambda: _get_config().get('model', {}).get('alpha', 0.1)
    )
    beta: float = Field(
        default_factory=lambda: _get_config().get('model', {}).get('beta', 0.1)
    )
    sweeps: int = Field(
        default_factory=lambda: _get_config().get('model', {}).get('sweeps', 1000)
    )
    random_state: int = Field(default_factory=_default_random_state)
    convergence_tolerance: Optional[float] = Field(
        default_factory=lambda: _get_config().get('model', {}).get('convergence_tolerance')
    )
    eval_every: int = Field(
        default_factory=lambda: _get_config().get('model', {}).get('eval_every', 10)
    )


class TopicModelingFeaturesConfig(BaseSettings):
    """Per-document topic feature settings."""
    model_config = SettingsConfigDict(
        env_prefix='TOPIC_MODELING_FEATURES_',
        case_sensitive=False
    )

    dominant_threshold: float = Field(
        default_factory=lambda: _get_config().get('features', {}).get('dominant_threshold', 0.25)
    )


class TopicModelingOutputConfig(BaseSettings):
    """Output settings for topic modeling."""
    model_config = SettingsConfigDict(
        env_prefix='TOPIC_MODELING_OUT_',
        case_sensitive=False
    )

    num_topic_words: int = Field(
        default_factory=lambda: _get_config().get('output', {}).get('num_topic_words', 10)
    )
    min_beta: float = Field(
        default_factory=lambda: _get_config().get('output', {}).get('min_beta', 0.001)
    )
    precision: int = Field(
        default_factory=lambda: _get_config().get('output', {}).get('precision', 4)
    )
    compute_coherence: bool = Field(
        default_factory=lambda: _get_config().get('output', {}).get('compute_coherence', True)
    )


class TopicModelingConfig(BaseSettings):
    """
    Topic modeling configuration.
    Loads from configs/features/topic_modeling.yaml with environment variable overrides.
    """
    model_config = SettingsConfigDict(
        env_prefix='TOPIC_MODELING_',
        env_nested_delimiter='__',
        case_sensitive=False
    )

    model: TopicModelingModelConfig = Field(
        default_factory=TopicModelingModelConfig
    )
    features: TopicModelingFeaturesConfig = Field(
        default_factory=TopicModelingFeaturesConfig
    )
    output: TopicModelingOutputConfig = Field(
        default_factory=TopicModelingOutputConfig
    )
