"""
Topic Modeling Constants and Configuration

This module defines defaults for the collapsed Gibbs LDA estimator
run over policy statement corpora.
"""

# ===========================
# Module Version
# ===========================
TOPIC_MODELING_MODULE_VERSION = "0.2.0"

# ===========================
# Default LDA Parameters
# ===========================
DEFAULT_NUM_TOPICS = 2
"""Default number of topics to discover"""

DEFAULT_ALPHA = 0.1
"""Document-topic smoothing (symmetric Dirichlet prior)"""

DEFAULT_BETA = 0.1
"""Topic-term smoothing (symmetric Dirichlet prior)"""

DEFAULT_SWEEPS = 1000
"""Number of full Gibbs sweeps over every token occurrence"""

DEFAULT_RANDOM_STATE = 42
"""Random seed for reproducibility"""

DEFAULT_EVAL_EVERY = 10
"""Sweeps between log-likelihood evaluations"""

MIN_TOPICS = 2
"""Smallest topic count the estimator accepts"""

MAX_SEED = 2 ** 64
"""Seeds must lie in [0, MAX_SEED)"""

DISTRIBUTION_TOLERANCE = 1e-6
"""Allowed deviation of a beta/gamma row sum from 1.0"""

# ===========================
# Output Parameters
# ===========================
DEFAULT_TOP_N = 10
"""Top terms reported per topic"""

DEFAULT_MIN_BETA = 0.001
"""Terms below this beta in both topics are left out of beta spread tables"""

DOMINANT_TOPIC_THRESHOLD = 0.25
"""Minimum probability to consider a topic significant for a document"""

TOPIC_FEATURE_PREFIX = "topic_"
"""Prefix for topic exposure features (e.g., topic_0, topic_1, ...)"""

# ===========================
# Training Recommendations
# ===========================
RECOMMENDED_MIN_CORPUS_SIZE = 20
"""Minimum number of documents recommended for training LDA"""
