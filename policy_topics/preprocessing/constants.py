"""
Tokenizer constants.

Patterns and word lists used to turn raw statement text into normalized
tokens. For runtime switches (which stop-word sources to use) see
configs/config.yaml.
"""

import re
from typing import Final, FrozenSet

# ===========================
# Patterns
# ===========================

WORD_PATTERN: Final[re.Pattern] = re.compile(r"\w+")
"""Word-boundary token: a run of alphanumeric (or underscore) characters."""

# ===========================
# Domain Stopwords
# ===========================

POLICY_STOPWORDS: Final[FrozenSet[str]] = frozenset([
    # Institutional boilerplate
    "federal", "reserve", "committee", "fomc", "board", "governors",
    "statement", "release", "press", "meeting", "members", "voting",
    # Calendar words
    "january", "february", "march", "april", "may", "june", "july",
    "august", "september", "october", "november", "december",
    # Filler
    "also", "would", "could", "percent", "year", "years",
])
"""Stop words specific to monetary policy statements (beyond standard English)."""
