"""
Topic Modeling Schemas

Pydantic models for per-document topic features and fitted model summaries.
"""

from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel, Field, field_validator


class TopicDistribution(BaseModel):
    """
    Probability of one topic within a single document.

    Attributes:
        topic_id: Integer topic ID (0 to num_topics - 1)
        probability: Probability of this topic in the document (0.0 to 1.0)
        top_words: Top N most representative words for this topic
    """
    topic_id: int = Field(..., ge=0, description="Topic ID")
    probability: float = Field(..., ge=0.0, le=1.0, description="Topic probability")
    top_words: Optional[List[str]] = Field(default=None, description="Top representative words")


class TopicModelingFeatures(BaseModel):
    """
    Topic exposure of a single document, derived from its gamma row.

    Attributes:
        document: Document identifier
        topic_probabilities: Dict mapping topic_id -> probability
        dominant_topic_id: ID of the most prominent topic
        dominant_topic_probability: Probability of the dominant topic
        topic_entropy: Shannon entropy of topic distribution (higher = more diverse)
        num_topics: Total number of topics in the model
        num_significant_topics: Number of topics with probability >= threshold
    """
    document: str = Field(..., description="Document identifier")
    topic_probabilities: Dict[int, float] = Field(
        default_factory=dict,
        description="Topic ID -> probability mapping"
    )
    dominant_topic_id: Optional[int] = Field(
        default=None,
        description="Most prominent topic ID"
    )
    dominant_topic_probability: Optional[float] = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Probability of dominant topic"
    )
    topic_entropy: float = Field(
        default=0.0,
        ge=0.0,
        description="Shannon entropy of topic distribution"
    )
    num_topics: int = Field(
        default=0,
        ge=0,
        description="Total number of topics in model"
    )
    num_significant_topics: int = Field(
        default=0,
        ge=0,
        description="Number of topics above significance threshold"
    )

    @field_validator('topic_probabilities')
    @classmethod
    def validate_probabilities_sum(cls, v: Dict[int, float]) -> Dict[int, float]:
        """Validate that probabilities sum to approximately 1.0."""
        if v:
            total = sum(v.values())
            if not (0.99 <= total <= 1.01):  # Allow rounding in stored values
                raise ValueError(
                    f"Topic probabilities must sum to ~1.0, got {total:.4f}"
                )
        return v

    def to_feature_vector(self, num_topics: int) -> List[float]:
        """
        Convert to dense feature vector.

        Args:
            num_topics: Number of topics in the model

        Returns:
            List of probabilities ordered by topic ID
        """
        return [
            self.topic_probabilities.get(i, 0.0)
            for i in range(num_topics)
        ]

    def get_top_k_topics(self, k: int = 5) -> List[TopicDistribution]:
        """
        Get top K most prominent topics.

        Args:
            k: Number of top topics to return

        Returns:
            List of TopicDistribution objects sorted by probability (descending)
        """
        sorted_topics = sorted(
            self.topic_probabilities.items(),
            key=lambda x: x[1],
            reverse=True
        )
        return [
            TopicDistribution(topic_id=topic_id, probability=prob)
            for topic_id, prob in sorted_topics[:k]
        ]


class LDAModelInfo(BaseModel):
    """
    Summary of a fitted LDA run.

    Attributes:
        num_topics: Number of topics
        num_documents: Number of documents in the matrix
        vocabulary_size: Size of vocabulary
        num_tokens: Token occurrences sampled
        sweeps: Configured sweep count
        sweeps_completed: Sweeps actually run (fewer on convergence or stop)
        alpha: Document-topic smoothing
        beta: Topic-term smoothing
        random_state: Seed of the run
        log_likelihood: Final joint log-likelihood
        perplexity: Model perplexity on the corpus
        coherence_score: Mean UMass coherence across topics
        topic_labels: Human-assigned labels for topics
        topic_top_words: Top words for each topic with probabilities
    """
    num_topics: int = Field(..., ge=2)
    num_documents: int = Field(..., ge=0)
    vocabulary_size: int = Field(..., ge=0)
    num_tokens: int = Field(..., ge=0)
    sweeps: int = Field(..., ge=1)
    sweeps_completed: int = Field(..., ge=0)
    alpha: float = Field(..., gt=0, description="Alpha hyperparameter")
    beta: float = Field(..., gt=0, description="Beta hyperparameter")
    random_state: int = Field(..., ge=0)
    log_likelihood: Optional[float] = Field(default=None)
    perplexity: Optional[float] = Field(default=None)
    coherence_score: Optional[float] = Field(default=None)
    converged: bool = Field(default=False)
    stopped_early: bool = Field(default=False)
    topic_labels: Optional[Dict[int, str]] = Field(
        default=None,
        description="Human-readable topic labels"
    )
    topic_top_words: Optional[Dict[int, List[Tuple[str, float]]]] = Field(
        default=None,
        description="Top words for each topic with probabilities"
    )

    def get_topic_description(self, topic_id: int, num_words: int = 10) -> str:
        """
        Get human-readable description of a topic.

        Args:
            topic_id: Topic ID
            num_words: Number of top words to include

        Returns:
            String description of the topic
        """
        label = self.topic_labels.get(topic_id, f"Topic {topic_id}") if self.topic_labels else f"Topic {topic_id}"

        if self.topic_top_words and topic_id in self.topic_top_words:
            words = self.topic_top_words[topic_id][:num_words]
            word_str = ", ".join([w[0] for w in words])
            return f"{label}: {word_str}"

        return label
