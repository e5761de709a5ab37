"""
Seed configuration shared by every sampled stage.

The LDA trainer falls back to random_seed when
topic_modeling.model.random_state is left unset, so one value in
configs/config.yaml (or REPRODUCIBILITY_RANDOM_SEED) pins a whole run.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from policy_topics.config._loader import load_yaml_section


def _get_config() -> dict:
    return load_yaml_section("config.yaml", "reproducibility")


class ReproducibilityConfig(BaseSettings):
    """Seed for numpy.random.default_rng in sampled stages."""
    model_config = SettingsConfigDict(
        env_prefix='REPRODUCIBILITY_',
        case_sensitive=False
    )

    random_seed: int = Field(
        default_factory=lambda: _get_config().get('random_seed', 42),
        ge=0,
        lt=2 ** 64,
        description="Default Gibbs sampler seed",
    )
