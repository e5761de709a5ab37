"""
Unit tests for the settings layer.

YAML defaults come from configs/; environment variables override them.
"""

import yaml

from policy_topics.config import RunContext
from policy_topics.config._loader import load_yaml_section
from policy_topics.config.features.lexical import LexicalConfig
from policy_topics.config.features.sentiment import SentimentConfig
from policy_topics.config.features.topic_modeling import (
    TopicModelingConfig,
    TopicModelingModelConfig,
)
from policy_topics.config.reproducibility import ReproducibilityConfig


class TestYamlDefaults:
    """Values shipped in configs/*.yaml."""

    def test_topic_modeling_defaults(self, fresh_config):
        config = TopicModelingConfig()

        assert config.model.num_topics == 2
        assert config.model.alpha == 0.1
        assert config.model.beta == 0.1
        assert config.model.sweeps == 1000
        assert config.model.convergence_tolerance is None
        assert config.output.compute_coherence is True

    def test_lexicon_columns(self, fresh_config):
        lexicon = SentimentConfig().lexicon

        assert (lexicon.word_column, lexicon.sentiment_column) == ("word", "sentiment")
        assert lexicon.on_unknown_label == "skip"

    def test_missing_yaml_is_empty(self, fresh_config):
        assert load_yaml_section("features/does_not_exist.yaml", "anything") == {}

    def test_config_dir_override(self, fresh_config, tmp_path, monkeypatch):
        features = tmp_path / "features"
        features.mkdir()
        (features / "topic_modeling.yaml").write_text(
            "topic_modeling:\n  model:\n    num_topics: 6\n    sweeps: 50\n",
            encoding="utf-8",
        )
        (tmp_path / "config.yaml").write_text("reproducibility:\n", encoding="utf-8")
        monkeypatch.setenv("POLICY_TOPICS_CONFIG_DIR", str(tmp_path))

        model = TopicModelingModelConfig()

        assert (model.num_topics, model.sweeps) == (6, 50)
        # missing keys fall back to code defaults
        assert model.alpha == 0.1
        assert model.random_state == 42


class TestEnvironmentOverrides:
    """pydantic-settings environment variable handling."""

    def test_model_override(self, fresh_config, monkeypatch):
        monkeypatch.setenv("TOPIC_MODELING_MODEL_NUM_TOPICS", "5")
        monkeypatch.setenv("TOPIC_MODELING_MODEL_CONVERGENCE_TOLERANCE", "0.001")

        config = TopicModelingModelConfig()

        assert config.num_topics == 5
        assert config.convergence_tolerance == 0.001

    def test_watch_terms_from_json(self, fresh_config, monkeypatch):
        monkeypatch.setenv("LEXICAL_WATCH_TERMS", '["Inflation", "jobs", "inflation"]')
        assert LexicalConfig().watch_terms == ["inflation", "jobs"]

    def test_unknown_label_mode(self, fresh_config, monkeypatch):
        monkeypatch.setenv("SENTIMENT_LEXICON_ON_UNKNOWN_LABEL", "error")
        assert SentimentConfig().lexicon.on_unknown_label == "error"


class TestSeedFallback:
    """An unset model.random_state falls back to reproducibility.random_seed."""

    def test_matches_reproducibility_seed(self, fresh_config):
        assert TopicModelingModelConfig().random_state == ReproducibilityConfig().random_seed

    def test_follows_reproducibility_override(self, fresh_config, monkeypatch):
        monkeypatch.setenv("REPRODUCIBILITY_RANDOM_SEED", "7")
        assert TopicModelingModelConfig().random_state == 7

    def test_explicit_model_seed_wins(self, fresh_config, monkeypatch):
        monkeypatch.setenv("REPRODUCIBILITY_RANDOM_SEED", "7")
        monkeypatch.setenv("TOPIC_MODELING_MODEL_RANDOM_STATE", "11")
        assert TopicModelingModelConfig().random_state == 11


class TestRunContext:
    """Per-run output directories."""

    def test_output_dir_layout(self, tmp_path):
        run = RunContext(name="lda_k2", base_dir=tmp_path).create()

        assert run.output_dir.is_dir()
        assert run.output_dir.parent == tmp_path
        assert run.output_dir.name == f"{run.run_id}_lda_k2"

    def test_save_config(self, tmp_path):
        run = RunContext(name="lda_k3", base_dir=tmp_path)
        path = run.save_config({"num_topics": 3, "watch_terms": ["inflation"]})

        with open(path, encoding="utf-8") as f:
            assert yaml.safe_load(f) == {"num_topics": 3, "watch_terms": ["inflation"]}
