"""
Collapsed Gibbs sampler state and sweep.

The three count tables (document-topic, topic-term, topic totals) live in
a GibbsState owned by a single LDATrainer.fit call. They are mutated in
place by sweep() and must not be read by anyone else while a run is in
progress.
"""

import logging
import math
from dataclasses import dataclass

import numpy as np

from policy_topics.errors import InvalidHyperparameterError
from policy_topics.features.vocabulary import DocumentTermMatrix

logger = logging.getLogger(__name__)

_lgamma = np.vectorize(math.lgamma, otypes=[float])


@dataclass
class GibbsState:
    """
    Token-level topic assignments plus the count tables derived from them.

    Attributes:
        token_docs: Document index of every token occurrence
        token_terms: Term index of every token occurrence
        assignments: Current topic of every token occurrence
        doc_topic: (D, K) counts of tokens per document and topic
        topic_term: (K, V) counts of tokens per topic and term
        topic_totals: (K,) tokens per topic
        doc_lengths: (D,) tokens per document
    """
    token_docs: np.ndarray
    token_terms: np.ndarray
    assignments: np.ndarray
    doc_topic: np.ndarray
    topic_term: np.ndarray
    topic_totals: np.ndarray
    doc_lengths: np.ndarray

    @property
    def num_tokens(self) -> int:
        return int(self.assignments.shape[0])

    @property
    def num_topics(self) -> int:
        return int(self.topic_totals.shape[0])

    @property
    def vocabulary_size(self) -> int:
        return int(self.topic_term.shape[1])

    @classmethod
    def initialize(
        cls,
        matrix: DocumentTermMatrix,
        num_topics: int,
        rng: np.random.Generator,
    ) -> "GibbsState":
        """
        Expand counts into token occurrences and assign topics uniformly.

        Occurrences are laid out document by document, term indices ascending
        within a document, each term repeated by its count.
        """
        token_docs = []
        token_terms = []
        for doc_index, row in enumerate(matrix.rows):
            for term_index in sorted(row):
                count = row[term_index]
                token_docs.extend([doc_index] * count)
                token_terms.extend([term_index] * count)

        docs = np.asarray(token_docs, dtype=np.int64)
        terms = np.asarray(token_terms, dtype=np.int64)
        assignments = rng.integers(0, num_topics, size=docs.shape[0], dtype=np.int64)

        doc_topic = np.zeros((matrix.n_documents, num_topics), dtype=np.int64)
        topic_term = np.zeros((num_topics, matrix.n_terms), dtype=np.int64)
        np.add.at(doc_topic, (docs, assignments), 1)
        np.add.at(topic_term, (assignments, terms), 1)

        return cls(
            token_docs=docs,
            token_terms=terms,
            assignments=assignments,
            doc_topic=doc_topic,
            topic_term=topic_term,
            topic_totals=topic_term.sum(axis=1),
            doc_lengths=doc_topic.sum(axis=1),
        )


def sweep(state: GibbsState, alpha: float, beta: float, rng: np.random.Generator) -> None:
    """
    Resample the topic of every token occurrence once, in order.

    For each occurrence the current assignment is removed from the count
    tables, a new topic is drawn with probability proportional to

        (n_dz + alpha) * (n_zw + beta) / (n_z + beta * V)

    and the counts are re-added under the new topic.

    Raises:
        InvalidHyperparameterError: If the unnormalized distribution is not
            finite and positive (never silently renormalized)
    """
    num_topics = state.num_topics
    vbeta = beta * state.vocabulary_size
    doc_topic = state.doc_topic
    topic_term = state.topic_term
    topic_totals = state.topic_totals
    assignments = state.assignments

    # one uniform draw per occurrence keeps the stream of random numbers
    # independent of the sampled values
    uniforms = rng.random(state.num_tokens)
    docs = state.token_docs.tolist()
    terms = state.token_terms.tolist()

    for i in range(state.num_tokens):
        d = docs[i]
        w = terms[i]
        z = assignments[i]

        doc_topic[d, z] -= 1
        topic_term[z, w] -= 1
        topic_totals[z] -= 1

        weights = (doc_topic[d] + alpha) * (topic_term[:, w] + beta) / (topic_totals + vbeta)
        cumulative = np.cumsum(weights)
        total = cumulative[-1]
        if not np.isfinite(total) or total <= 0.0 or weights.min() < 0.0:
            raise InvalidHyperparameterError(
                f"Degenerate topic distribution (sum={total}) with "
                f"alpha={alpha}, beta={beta}"
            )

        z = int(np.searchsorted(cumulative, uniforms[i] * total, side="right"))
        if z >= num_topics:
            z = num_topics - 1

        assignments[i] = z
        doc_topic[d, z] += 1
        topic_term[z, w] += 1
        topic_totals[z] += 1


def log_likelihood(state: GibbsState, alpha: float, beta: float) -> float:
    """
    Joint log-likelihood log p(w, z) of the current assignments.

    Sum of the Dirichlet-multinomial terms for topics over words and for
    documents over topics (Griffiths & Steyvers, 2004).
    """
    num_topics = state.num_topics
    vocab_size = state.vocabulary_size
    num_docs = state.doc_topic.shape[0]

    word_part = num_topics * (math.lgamma(vocab_size * beta) - vocab_size * math.lgamma(beta))
    word_part += float(_lgamma(state.topic_term + beta).sum())
    word_part -= float(_lgamma(state.topic_totals + vocab_size * beta).sum())

    topic_part = num_docs * (math.lgamma(num_topics * alpha) - num_topics * math.lgamma(alpha))
    topic_part += float(_lgamma(state.doc_topic + alpha).sum())
    topic_part -= float(_lgamma(state.doc_lengths + num_topics * alpha).sum())

    return word_part + topic_part


def topic_term_distribution(state: GibbsState, beta: float) -> np.ndarray:
    """Smoothed per-topic term distribution, shape (K, V)."""
    numerator = state.topic_term + beta
    return numerator / numerator.sum(axis=1, keepdims=True)


def document_topic_distribution(state: GibbsState, alpha: float) -> np.ndarray:
    """Smoothed per-document topic distribution, shape (D, K)."""
    numerator = state.doc_topic + alpha
    return numerator / numerator.sum(axis=1, keepdims=True)
