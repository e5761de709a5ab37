"""
Fitted LDA output: topic-term (beta) and document-topic (gamma) distributions.

log2_ratio sentinels
--------------------
Comparing two topics' beta for a term divides by the denominator topic's
beta. Zero values follow IEEE floating point log rules instead of raising:

    numerator > 0, denominator == 0  ->  +inf
    numerator == 0, denominator > 0  ->  -inf
    numerator == 0, denominator == 0 ->  nan

Negative inputs are not probabilities and raise ValueError. Smoothed beta
values from LDATrainer are always > 0, so the sentinels only appear for
hand-built or externally loaded distributions.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from policy_topics.features.vocabulary import DocumentTermMatrix, Vocabulary
from .metrics import umass_coherence
from .schemas import LDAModelInfo


def log2_ratio(numerator: float, denominator: float) -> float:
    """
    log2(numerator / denominator) with defined zero sentinels.

    Raises:
        ValueError: If either value is negative or NaN
    """
    if math.isnan(numerator) or math.isnan(denominator):
        raise ValueError("log2_ratio is undefined for NaN inputs")
    if numerator < 0 or denominator < 0:
        raise ValueError(
            f"log2_ratio expects non-negative values, got {numerator} / {denominator}"
        )
    if denominator == 0:
        return math.inf if numerator > 0 else math.nan
    if numerator == 0:
        return -math.inf
    return math.log2(numerator) - math.log2(denominator)


@dataclass
class LDAResult:
    """
    Result of one LDATrainer.fit call.

    Attributes:
        beta: (num_topics, vocabulary_size) per-topic term distribution
        gamma: (num_documents, num_topics) per-document topic distribution
        doc_ids: Document identifier of each gamma row
        vocabulary: Frozen vocabulary indexing beta columns
        alpha: Document-topic smoothing used
        beta_prior: Topic-term smoothing used
        random_state: Seed used
        sweeps: Configured sweep count
        sweeps_completed: Sweeps actually run
        num_tokens: Token occurrences sampled
        log_likelihood_trace: (sweep, joint log-likelihood) evaluations
        converged: Stopped because the log-likelihood plateaued
        stopped_early: Stopped by a cooperative stop request
        perplexity: Per-token perplexity on the fitted corpus
        coherence_scores: UMass coherence per topic
    """
    beta: np.ndarray
    gamma: np.ndarray
    doc_ids: List[str]
    vocabulary: Vocabulary
    alpha: float
    beta_prior: float
    random_state: int
    sweeps: int
    sweeps_completed: int
    num_tokens: int
    log_likelihood_trace: List[Tuple[int, float]] = field(default_factory=list)
    converged: bool = False
    stopped_early: bool = False
    perplexity: Optional[float] = None
    coherence_scores: Optional[List[float]] = None

    @property
    def num_topics(self) -> int:
        return int(self.beta.shape[0])

    @property
    def num_documents(self) -> int:
        return int(self.gamma.shape[0])

    @property
    def log_likelihood(self) -> Optional[float]:
        """Most recent joint log-likelihood evaluation."""
        return self.log_likelihood_trace[-1][1] if self.log_likelihood_trace else None

    def _check_topic(self, topic_id: int) -> None:
        if not 0 <= topic_id < self.num_topics:
            raise IndexError(f"Topic {topic_id} outside 0..{self.num_topics - 1}")

    # ===========================
    # Topic-term views
    # ===========================

    def top_term_indices(self, topic_id: int, n: int = 10) -> List[int]:
        """Term indices by beta descending; ties keep vocabulary order."""
        self._check_topic(topic_id)
        order = np.argsort(-self.beta[topic_id], kind="stable")
        return [int(i) for i in order[:n]]

    def top_terms(self, topic_id: int, n: int = 10) -> List[Tuple[str, float]]:
        """
        Top n terms of a topic.

        Args:
            topic_id: Topic index
            n: Number of terms

        Returns:
            (term, beta) pairs by beta descending, ties by first-seen order
        """
        return [
            (self.vocabulary.term_at(i), float(self.beta[topic_id, i]))
            for i in self.top_term_indices(topic_id, n)
        ]

    def top_terms_table(self, n: int = 10) -> pd.DataFrame:
        """Tidy (topic, rank, term, beta) table of every topic's top n terms."""
        records = [
            {"topic": topic_id, "rank": rank, "term": term, "beta": weight}
            for topic_id in range(self.num_topics)
            for rank, (term, weight) in enumerate(self.top_terms(topic_id, n), start=1)
        ]
        return pd.DataFrame.from_records(records, columns=["topic", "rank", "term", "beta"])

    def term_beta(self, term: str, topic_id: int) -> float:
        self._check_topic(topic_id)
        index = self.vocabulary.index_of(term)
        if index is None:
            raise KeyError(f"Unknown term: {term!r}")
        return float(self.beta[topic_id, index])

    def log_ratio(self, term: str, topic_a: int = 0, topic_b: int = 1) -> float:
        """log2(beta[topic_b, term] / beta[topic_a, term]); see log2_ratio sentinels."""
        return log2_ratio(self.term_beta(term, topic_b), self.term_beta(term, topic_a))

    def beta_spread(
        self,
        topic_a: int = 0,
        topic_b: int = 1,
        min_beta: float = 0.001,
    ) -> pd.DataFrame:
        """
        Terms with the greatest difference between two topics.

        Keeps terms whose beta exceeds min_beta in either topic and reports
        log2(beta_b / beta_a), sorted ascending (terms favouring topic_a
        first).

        Returns:
            DataFrame with columns term, beta_a, beta_b, log_ratio
        """
        self._check_topic(topic_a)
        self._check_topic(topic_b)
        records = []
        for index, term in enumerate(self.vocabulary):
            beta_a = float(self.beta[topic_a, index])
            beta_b = float(self.beta[topic_b, index])
            if beta_a > min_beta or beta_b > min_beta:
                records.append({
                    "term": term,
                    "beta_a": beta_a,
                    "beta_b": beta_b,
                    "log_ratio": log2_ratio(beta_b, beta_a),
                })
        frame = pd.DataFrame.from_records(records, columns=["term", "beta_a", "beta_b", "log_ratio"])
        return frame.sort_values("log_ratio", kind="stable").reset_index(drop=True)

    def coherence(self, matrix: DocumentTermMatrix, n: int = 10) -> List[float]:
        """UMass coherence of every topic's top n terms over matrix."""
        return umass_coherence(
            matrix,
            [self.top_term_indices(topic_id, n) for topic_id in range(self.num_topics)],
        )

    # ===========================
    # Document-topic views
    # ===========================

    def document_topics(self, doc_id: str) -> np.ndarray:
        """Gamma row of a document."""
        try:
            row = self.doc_ids.index(doc_id)
        except ValueError:
            raise KeyError(f"Unknown document: {doc_id!r}") from None
        return self.gamma[row]

    def to_frames(self) -> Dict[str, pd.DataFrame]:
        """
        Tidy tables for export.

        Returns:
            {"beta": (topic, term, beta), "gamma": (document, topic, gamma)}
        """
        terms = self.vocabulary.terms
        beta_frame = pd.DataFrame({
            "topic": np.repeat(np.arange(self.num_topics), len(terms)),
            "term": terms * self.num_topics,
            "beta": self.beta.reshape(-1),
        })
        gamma_frame = pd.DataFrame({
            "document": np.repeat(np.asarray(self.doc_ids, dtype=object), self.num_topics),
            "topic": np.tile(np.arange(self.num_topics), self.num_documents),
            "gamma": self.gamma.reshape(-1),
        })
        return {"beta": beta_frame, "gamma": gamma_frame}

    def model_info(
        self,
        num_words: int = 10,
        topic_labels: Optional[Dict[int, str]] = None,
    ) -> LDAModelInfo:
        """Summarize the run as an LDAModelInfo record."""
        coherence = (
            float(np.mean(self.coherence_scores)) if self.coherence_scores else None
        )
        return LDAModelInfo(
            num_topics=self.num_topics,
            num_documents=self.num_documents,
            vocabulary_size=len(self.vocabulary),
            num_tokens=self.num_tokens,
            sweeps=self.sweeps,
            sweeps_completed=self.sweeps_completed,
            alpha=self.alpha,
            beta=self.beta_prior,
            random_state=self.random_state,
            log_likelihood=self.log_likelihood,
            perplexity=self.perplexity,
            coherence_score=coherence,
            converged=self.converged,
            stopped_early=self.stopped_early,
            topic_labels=topic_labels,
            topic_top_words={
                topic_id: self.top_terms(topic_id, num_words)
                for topic_id in range(self.num_topics)
            },
        )
