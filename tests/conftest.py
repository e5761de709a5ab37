"""
Shared pytest fixtures for the policy topics test suite.

This module provides common fixtures used across test modules:
- Tokenizer with a small, fixed stop-word set (no NLTK download needed)
- Synthetic dated policy statements
- Built corpus (frozen vocabulary + document-term matrix)
- In-memory sentiment lexicon

Usage:
    Fixtures are automatically discovered by pytest.
    Import them directly in test files - no explicit import needed.
"""

from datetime import date
from pathlib import Path
from typing import List

import pytest

from policy_topics.config import clear_config_cache
from policy_topics.features.dictionaries import SentimentLexicon
from policy_topics.features.vocabulary import CorpusMatrix, FrequencyMatrixBuilder
from policy_topics.preprocessing import Document, Tokenizer


TEST_STOPWORDS = frozenset([
    "the", "is", "and", "of", "a", "to", "in", "at", "its", "as", "that",
])


# ===========================
# Path Fixtures
# ===========================

@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


# ===========================
# Text Fixtures
# ===========================

@pytest.fixture
def tokenizer() -> Tokenizer:
    """Tokenizer with a fixed stop-word list."""
    return Tokenizer(TEST_STOPWORDS)


@pytest.fixture
def policy_documents() -> List[Document]:
    """Four short statements, two about prices and two about the labor market."""
    return [
        Document(
            doc_id="2021-03-17",
            text="Inflation is rising. Inflation expectations and prices rose in 2021.",
            published=date(2021, 3, 17),
        ),
        Document(
            doc_id="2021-01-27",
            text="The labor market is strong; unemployment fell and employment growth is solid.",
            published=date(2021, 1, 27),
        ),
        Document(
            doc_id="2021-06-16",
            text="Prices and inflation remain elevated. Inflation risks persist.",
            published=date(2021, 6, 16),
        ),
        Document(
            doc_id="2021-04-28",
            text="Employment gains continued as unemployment declined; labor market recovery.",
            published=date(2021, 4, 28),
        ),
    ]


@pytest.fixture
def corpus(tokenizer: Tokenizer, policy_documents: List[Document]) -> CorpusMatrix:
    """Frozen vocabulary and document-term matrix of policy_documents."""
    return FrequencyMatrixBuilder(tokenizer).build(policy_documents)


@pytest.fixture
def lexicon() -> SentimentLexicon:
    """Small positive/negative lexicon."""
    return SentimentLexicon.from_mapping({
        "strong": "positive",
        "growth": "positive",
        "gains": "positive",
        "solid": "positive",
        "recovery": "positive",
        "risks": "negative",
        "fell": "negative",
        "declined": "negative",
        "recession": "negative",
    })


# ===========================
# Configuration Fixtures
# ===========================

@pytest.fixture
def fresh_config():
    """Clear cached YAML sections before and after a test."""
    clear_config_cache()
    yield
    clear_config_cache()


# ===========================
# Skip Condition Markers
# ===========================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )
