"""
Immutable constants for the sentiment lexicon.

These values define WHAT a lexicon is: its polarity labels and the CSV
columns it needs. For runtime configuration (column names, label spelling,
unknown-label handling), see configs/features/sentiment.yaml
"""

from typing import Final

# ===========================
# Polarity Schema
# ===========================

POSITIVE: Final[str] = "positive"
NEGATIVE: Final[str] = "negative"

POLARITIES: Final[tuple[str, ...]] = (POSITIVE, NEGATIVE)
"""Every polarity a lexicon term can carry."""

# ===========================
# CSV Schema Definition
# ===========================

LEXICON_WORD_COLUMN: Final[str] = "word"
"""Default column holding the term."""

LEXICON_SENTIMENT_COLUMN: Final[str] = "sentiment"
"""Default column holding the polarity label."""

LEXICON_FILENAME: Final[str] = "sentiment_lexicon.csv"
"""Default lexicon file name under data/dictionary/."""
