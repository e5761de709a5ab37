"""
Topic Modeling Module

Collapsed Gibbs sampling LDA for policy statement corpora. Discovers latent
topics over a frozen document-term matrix and reports each document's
exposure to them.

Key Components:
- LDATrainer: Estimator (validation, seeded sampling, convergence, stop)
- LDAResult: beta / gamma distributions, top terms, log ratios, tidy frames
- TopicModelingAnalyzer: Per-document features from gamma
- GibbsState: Count tables of one sampling run
- LDAModelInfo: Run summary

Workflow:
    ```python
    from policy_topics.features.vocabulary import FrequencyMatrixBuilder
    from policy_topics.features.topic_modeling import LDATrainer, TopicModelingAnalyzer

    corpus = FrequencyMatrixBuilder(tokenizer).build(documents)

    trainer = LDATrainer(num_topics=2, sweeps=500, random_state=1234)
    result = trainer.fit(corpus.matrix, corpus.vocabulary)

    result.top_terms(0, n=10)
    result.beta_spread(0, 1, min_beta=0.001)

    analyzer = TopicModelingAnalyzer(result)
    analyzer.to_frame()
    ```

Features Produced:
- topic_probabilities: Dict[int, float] - gamma row of the document
- dominant_topic_id: int - Most prominent topic
- dominant_topic_probability: float - Probability of dominant topic
- topic_entropy: float - Shannon entropy (topic diversity measure)
- num_significant_topics: int - Number of topics above threshold
"""

from .analyzer import TopicModelingAnalyzer
from .lda_trainer import LDATrainer
from .gibbs import GibbsState
from .results import LDAResult, log2_ratio
from .metrics import perplexity, umass_coherence
from .schemas import (
    TopicModelingFeatures,
    TopicDistribution,
    LDAModelInfo,
)
from .constants import (
    TOPIC_MODELING_MODULE_VERSION,
    DEFAULT_NUM_TOPICS,
    DEFAULT_ALPHA,
    DEFAULT_BETA,
    DEFAULT_SWEEPS,
    DISTRIBUTION_TOLERANCE,
)

__all__ = [
    # Main classes
    "TopicModelingAnalyzer",
    "LDATrainer",
    "LDAResult",
    "GibbsState",
    # Functions
    "log2_ratio",
    "perplexity",
    "umass_coherence",
    # Schemas
    "TopicModelingFeatures",
    "TopicDistribution",
    "LDAModelInfo",
    # Constants
    "TOPIC_MODELING_MODULE_VERSION",
    "DEFAULT_NUM_TOPICS",
    "DEFAULT_ALPHA",
    "DEFAULT_BETA",
    "DEFAULT_SWEEPS",
    "DISTRIBUTION_TOLERANCE",
]

__version__ = TOPIC_MODELING_MODULE_VERSION
