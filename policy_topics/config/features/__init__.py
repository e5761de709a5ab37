"""Feature extraction configuration modules."""

from policy_topics.config.features.sentiment import SentimentConfig
from policy_topics.config.features.topic_modeling import TopicModelingConfig
from policy_topics.config.features.lexical import LexicalConfig

__all__ = [
    "SentimentConfig",
    "TopicModelingConfig",
    "LexicalConfig",
]
