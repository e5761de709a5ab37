"""
Sentiment Lexicon Management

This package handles loading and accessing the term -> polarity lexicon
used for signed sentiment scoring.

Key components:
- constants: Polarity labels and default CSV columns
- schemas: Pydantic models for the lexicon and its metadata
- lexicon: CSV loader driven by SentimentConfig

Usage:
    from policy_topics.features.dictionaries import load_lexicon

    lexicon = load_lexicon("data/dictionary/sentiment_lexicon.csv")
    if lexicon.is_negative("recession"):
        print("'recession' is a negative word")
"""

from .constants import (
    POSITIVE,
    NEGATIVE,
    POLARITIES,
    LEXICON_WORD_COLUMN,
    LEXICON_SENTIMENT_COLUMN,
    LEXICON_FILENAME,
)

from .schemas import (
    SentimentLexicon,
    SentimentLexiconMetadata,
)

from .lexicon import load_lexicon, lexicon_from_frame

__all__ = [
    # Constants
    "POSITIVE",
    "NEGATIVE",
    "POLARITIES",
    "LEXICON_WORD_COLUMN",
    "LEXICON_SENTIMENT_COLUMN",
    "LEXICON_FILENAME",
    # Schemas
    "SentimentLexicon",
    "SentimentLexiconMetadata",
    # Loader
    "load_lexicon",
    "lexicon_from_frame",
]
