"""
LDA Model Training

Collapsed Gibbs sampling estimator for Latent Dirichlet Allocation over a
frozen document-term matrix.

Usage:
    from policy_topics.features.topic_modeling import LDATrainer

    trainer = LDATrainer(num_topics=2, sweeps=500, random_state=7)
    result = trainer.fit(corpus.matrix, corpus.vocabulary)

    result.top_terms(0, n=10)
    result.gamma          # (documents, topics)

Running fit twice with the same seed and inputs gives identical beta and
gamma. A long run can be cut short after the current sweep with
trainer.request_stop() (from another thread) or a threading.Event passed
to fit().
"""

import logging
import math
import threading
from numbers import Integral, Real
from typing import Optional

import numpy as np

from policy_topics.errors import (
    EmptyCorpusError,
    EmptyVocabularyError,
    InvalidHyperparameterError,
    InvalidTopicCountError,
    MismatchedDimensionsError,
)
from policy_topics.features.vocabulary import DocumentTermMatrix, Vocabulary
from .constants import (
    DEFAULT_ALPHA,
    DEFAULT_BETA,
    DEFAULT_EVAL_EVERY,
    DEFAULT_NUM_TOPICS,
    DEFAULT_RANDOM_STATE,
    DEFAULT_SWEEPS,
    DEFAULT_TOP_N,
    MAX_SEED,
    MIN_TOPICS,
    RECOMMENDED_MIN_CORPUS_SIZE,
)
from .gibbs import (
    GibbsState,
    document_topic_distribution,
    log_likelihood,
    sweep,
    topic_term_distribution,
)
from .metrics import perplexity
from .results import LDAResult

logger = logging.getLogger(__name__)


def _validate_hyperparameter(name: str, value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidHyperparameterError(f"{name} must be a number, got {value!r}")
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise InvalidHyperparameterError(f"{name} must be finite and > 0, got {value}")
    return value


class LDATrainer:
    """
    LDA topic model estimator (collapsed Gibbs sampling).

    This class handles:
    1. Validating topic count, hyperparameters and the input matrix
    2. Initializing a seeded GibbsState for the run
    3. Sweeping until the sweep budget, convergence or a stop request
    4. Normalizing counts into beta and gamma
    5. Evaluating log-likelihood, perplexity and coherence

    Attributes:
        num_topics: Number of topics k (>= 2)
        alpha: Document-topic smoothing (> 0)
        beta: Topic-term smoothing (> 0)
        sweeps: Maximum number of sweeps (>= 1)
        random_state: Seed for numpy.random.default_rng
        convergence_tolerance: Relative log-likelihood change that ends
            sampling early; None runs every sweep
        eval_every: Sweeps between log-likelihood evaluations
    """

    def __init__(
        self,
        num_topics: int = DEFAULT_NUM_TOPICS,
        alpha: float = DEFAULT_ALPHA,
        beta: float = DEFAULT_BETA,
        sweeps: int = DEFAULT_SWEEPS,
        random_state: int = DEFAULT_RANDOM_STATE,
        convergence_tolerance: Optional[float] = None,
        eval_every: int = DEFAULT_EVAL_EVERY,
        compute_coherence: bool = True,
        coherence_top_n: int = DEFAULT_TOP_N,
    ):
        """
        Initialize LDA trainer.

        Raises:
            InvalidTopicCountError: If num_topics < 2
            InvalidHyperparameterError: If alpha or beta is not finite and > 0
            ValueError: If sweeps, random_state, eval_every or
                convergence_tolerance are out of range
        """
        if isinstance(num_topics, bool) or not isinstance(num_topics, Integral):
            raise InvalidTopicCountError(f"num_topics must be an integer, got {num_topics!r}")
        if num_topics < MIN_TOPICS:
            raise InvalidTopicCountError(
                f"num_topics must be >= {MIN_TOPICS}, got {num_topics}"
            )
        if isinstance(sweeps, bool) or not isinstance(sweeps, Integral) or sweeps < 1:
            raise ValueError(f"sweeps must be an integer >= 1, got {sweeps!r}")
        if (
            isinstance(random_state, bool)
            or not isinstance(random_state, Integral)
            or not 0 <= random_state < MAX_SEED
        ):
            raise ValueError(f"random_state must be an unsigned 64-bit integer, got {random_state!r}")
        if isinstance(eval_every, bool) or not isinstance(eval_every, Integral) or eval_every < 1:
            raise ValueError(f"eval_every must be an integer >= 1, got {eval_every!r}")
        if convergence_tolerance is not None and not convergence_tolerance > 0:
            raise ValueError(
                f"convergence_tolerance must be > 0 or None, got {convergence_tolerance!r}"
            )

        self.num_topics = int(num_topics)
        self.alpha = _validate_hyperparameter("alpha", alpha)
        self.beta = _validate_hyperparameter("beta", beta)
        self.sweeps = int(sweeps)
        self.random_state = int(random_state)
        self.convergence_tolerance = convergence_tolerance
        self.eval_every = int(eval_every)
        self.compute_coherence = compute_coherence
        self.coherence_top_n = coherence_top_n

        self._stop_event = threading.Event()

        logger.info(
            f"Initialized LDATrainer with {self.num_topics} topics, "
            f"alpha={self.alpha}, beta={self.beta}, {self.sweeps} sweeps"
        )

    @classmethod
    def from_settings(cls, config: Optional[object] = None) -> "LDATrainer":
        """
        Build a trainer from TopicModelingConfig.

        Args:
            config: Optional TopicModelingConfig. If None, loads from settings.
        """
        if config is None:
            from policy_topics.config import settings
            config = settings.topic_modeling

        model = config.model
        return cls(
            num_topics=model.num_topics,
            alpha=model.alpha,
            beta=model.beta,
            sweeps=model.sweeps,
            random_state=model.random_state,
            convergence_tolerance=model.convergence_tolerance,
            eval_every=model.eval_every,
            compute_coherence=config.output.compute_coherence,
            coherence_top_n=config.output.num_topic_words,
        )

    def request_stop(self) -> None:
        """Ask a running fit() to finish after its current sweep."""
        self._stop_event.set()

    def _validate_inputs(self, matrix: DocumentTermMatrix, vocabulary: Vocabulary) -> None:
        if matrix.n_terms == 0 or len(vocabulary) == 0:
            raise EmptyVocabularyError("Document-term matrix has no term columns")
        if matrix.n_terms != len(vocabulary):
            raise MismatchedDimensionsError(
                f"Matrix has {matrix.n_terms} term columns but vocabulary has "
                f"{len(vocabulary)} terms"
            )
        if matrix.n_documents == 0 or matrix.total_count == 0:
            raise EmptyCorpusError("Document-term matrix has no token occurrences")

    def fit(
        self,
        matrix: DocumentTermMatrix,
        vocabulary: Vocabulary,
        stop_event: Optional[threading.Event] = None,
    ) -> LDAResult:
        """
        Fit LDA on a frozen document-term matrix.

        Args:
            matrix: Document-term matrix (read-only during the run)
            vocabulary: Vocabulary the matrix was built with
            stop_event: Optional external stop signal, checked after each sweep

        Returns:
            LDAResult with beta, gamma and run diagnostics

        Raises:
            EmptyVocabularyError: If the matrix has zero columns
            EmptyCorpusError: If the matrix has no token occurrences
            MismatchedDimensionsError: If matrix and vocabulary disagree
            InvalidHyperparameterError: If sampling hits a degenerate distribution
        """
        self._validate_inputs(matrix, vocabulary)

        if matrix.n_documents < RECOMMENDED_MIN_CORPUS_SIZE:
            logger.warning(
                f"Corpus size ({matrix.n_documents}) is below recommended minimum "
                f"({RECOMMENDED_MIN_CORPUS_SIZE}). Results may be unreliable."
            )

        self._stop_event.clear()
        rng = np.random.default_rng(self.random_state)
        state = GibbsState.initialize(matrix, self.num_topics, rng)

        logger.info(
            f"Training LDA with {self.num_topics} topics on {matrix.n_documents} "
            f"documents, {len(vocabulary)} terms, {state.num_tokens} tokens..."
        )

        trace = []
        converged = False
        stopped_early = False
        completed = 0

        for sweep_number in range(1, self.sweeps + 1):
            sweep(state, self.alpha, self.beta, rng)
            completed = sweep_number

            if sweep_number % self.eval_every == 0:
                current = log_likelihood(state, self.alpha, self.beta)
                logger.debug(f"Sweep {sweep_number}: log-likelihood {current:.4f}")
                if self.convergence_tolerance is not None and trace:
                    previous = trace[-1][1]
                    change = abs((current - previous) / previous)
                    trace.append((sweep_number, current))
                    if change < self.convergence_tolerance:
                        converged = True
                        logger.info(
                            f"Log-likelihood converged after {sweep_number} sweeps "
                            f"(relative change {change:.2e})"
                        )
                        break
                else:
                    trace.append((sweep_number, current))

            if self._stop_event.is_set() or (stop_event is not None and stop_event.is_set()):
                stopped_early = sweep_number < self.sweeps
                logger.info(f"Stop requested; finished after sweep {sweep_number}")
                break

        if not trace or trace[-1][0] != completed:
            trace.append((completed, log_likelihood(state, self.alpha, self.beta)))

        beta = topic_term_distribution(state, self.beta)
        gamma = document_topic_distribution(state, self.alpha)

        result = LDAResult(
            beta=beta,
            gamma=gamma,
            doc_ids=list(matrix.doc_ids),
            vocabulary=vocabulary,
            alpha=self.alpha,
            beta_prior=self.beta,
            random_state=self.random_state,
            sweeps=self.sweeps,
            sweeps_completed=completed,
            num_tokens=state.num_tokens,
            log_likelihood_trace=trace,
            converged=converged,
            stopped_early=stopped_early,
        )

        result.perplexity = perplexity(matrix, beta, gamma)
        logger.info(f"Model perplexity: {result.perplexity:.4f}")

        if self.compute_coherence:
            result.coherence_scores = result.coherence(matrix, self.coherence_top_n)
            logger.info(
                f"Mean UMass coherence: {float(np.mean(result.coherence_scores)):.4f}"
            )

        logger.info("LDA training complete!")
        return result
