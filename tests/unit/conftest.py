"""
Lightweight fixtures for unit tests - NO real data dependencies.
All fixtures use synthetic corpora that run in well under a second.
"""

import numpy as np
import pytest

from policy_topics.features.topic_modeling import LDAResult
from policy_topics.features.vocabulary import DocumentTermMatrix, Vocabulary


# =============================================================================
# Matrix Fixtures
# =============================================================================

@pytest.fixture
def separable_matrix():
    """Two documents with disjoint vocabularies, 40 tokens each."""
    vocabulary = Vocabulary(["inflation", "prices", "employment", "jobs"]).freeze()
    matrix = DocumentTermMatrix(
        doc_ids=["prices_doc", "labor_doc"],
        rows=[{0: 20, 1: 20}, {2: 20, 3: 20}],
        n_terms=4,
    )
    return matrix, vocabulary


@pytest.fixture
def grouped_matrix():
    """Four documents in two clearly separated groups."""
    vocabulary = Vocabulary(
        ["inflation", "prices", "energy", "employment", "jobs", "wages"]
    ).freeze()
    matrix = DocumentTermMatrix(
        doc_ids=["p1", "l1", "p2", "l2"],
        rows=[
            {0: 12, 1: 10, 2: 8},
            {3: 12, 4: 10, 5: 8},
            {0: 9, 1: 12, 2: 9},
            {3: 9, 4: 12, 5: 9},
        ],
        n_terms=6,
    )
    return matrix, vocabulary


# =============================================================================
# Result Fixtures
# =============================================================================

@pytest.fixture
def handmade_result() -> LDAResult:
    """LDAResult with known beta/gamma for view and export tests."""
    vocabulary = Vocabulary(["rate", "inflation", "jobs", "growth"]).freeze()
    beta = np.array([
        [0.4, 0.4, 0.1, 0.1],
        [0.1, 0.2, 0.5, 0.2],
    ])
    gamma = np.array([
        [0.7, 0.3],
        [0.5, 0.5],
        [0.1, 0.9],
    ])
    return LDAResult(
        beta=beta,
        gamma=gamma,
        doc_ids=["d1", "d2", "d3"],
        vocabulary=vocabulary,
        alpha=0.1,
        beta_prior=0.1,
        random_state=0,
        sweeps=10,
        sweeps_completed=10,
        num_tokens=30,
        log_likelihood_trace=[(10, -120.5)],
    )
