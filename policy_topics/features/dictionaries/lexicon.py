"""
Sentiment lexicon loading.

Reads a two-column CSV (term, polarity label) with pandas and builds a
SentimentLexicon. Column names, label spelling and the handling of rows
with an unrecognized label come from SentimentConfig.

Usage:
    from policy_topics.features.dictionaries import load_lexicon

    lexicon = load_lexicon("data/dictionary/sentiment_lexicon.csv")
"""

import logging
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from .constants import NEGATIVE, POSITIVE
from .schemas import SentimentLexicon, SentimentLexiconMetadata

logger = logging.getLogger(__name__)


def lexicon_from_frame(
    df: pd.DataFrame,
    config: Optional[object] = None,
    source_file: Optional[str] = None,
) -> SentimentLexicon:
    """
    Build a lexicon from a DataFrame of (term, label) rows.

    Args:
        df: Frame holding the configured word and sentiment columns
        config: Optional SentimentLexiconConfig. If None, loads from settings.
        source_file: Recorded in the lexicon metadata

    Returns:
        SentimentLexicon with lowercased terms

    Raises:
        ValueError: If required columns are missing, or a label is
            unrecognized and on_unknown_label is 'error'
    """
    if config is None:
        from policy_topics.config import settings
        config = settings.sentiment.lexicon

    required = {config.word_column, config.sentiment_column}
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"Missing required columns: {sorted(missing)}")

    labels = {
        config.positive_label.strip().lower(): POSITIVE,
        config.negative_label.strip().lower(): NEGATIVE,
    }

    words = {}
    skipped = 0
    for word, label in zip(df[config.word_column], df[config.sentiment_column]):
        if pd.isna(word) or not str(word).strip():
            skipped += 1
            continue
        term = str(word).strip().lower()
        polarity = labels.get(str(label).strip().lower()) if not pd.isna(label) else None

        if polarity is None:
            if config.on_unknown_label == "error":
                raise ValueError(
                    f"Unknown sentiment label {label!r} for term {term!r}. "
                    f"Expected {config.positive_label!r} or {config.negative_label!r}"
                )
            skipped += 1
            continue

        if term in words and words[term] != polarity:
            logger.warning(
                f"Term {term!r} listed as both {words[term]} and {polarity}; "
                f"keeping {words[term]}"
            )
            continue
        words.setdefault(term, polarity)

    if skipped:
        logger.warning(f"Skipped {skipped} lexicon rows with empty terms or unknown labels")

    values = list(words.values())
    return SentimentLexicon(
        words=words,
        metadata=SentimentLexiconMetadata(
            total_words=len(values),
            positive_count=values.count(POSITIVE),
            negative_count=values.count(NEGATIVE),
            skipped_rows=skipped,
            source_file=source_file,
        ),
    )


def load_lexicon(
    path: Optional[Union[Path, str]] = None,
    config: Optional[object] = None,
) -> SentimentLexicon:
    """
    Load a sentiment lexicon CSV.

    Args:
        path: CSV path. If None, uses settings.paths.lexicon_path.
        config: Optional SentimentLexiconConfig. If None, loads from settings.

    Returns:
        SentimentLexicon

    Raises:
        FileNotFoundError: If the CSV doesn't exist
        ValueError: If required columns are missing or labels are invalid
    """
    if path is None or config is None:
        from policy_topics.config import settings
        path = path if path is not None else settings.paths.lexicon_path
        config = config if config is not None else settings.sentiment.lexicon

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(
            f"Sentiment lexicon not found at {path}. "
            f"Provide a CSV with '{config.word_column}' and "
            f"'{config.sentiment_column}' columns."
        )

    logger.info(f"Loading sentiment lexicon from {path}")
    df = pd.read_csv(path, encoding=config.encoding, dtype=str, keep_default_na=False)

    lexicon = lexicon_from_frame(df, config=config, source_file=str(path))
    logger.info(
        f"Lexicon loaded: {len(lexicon)} words "
        f"({lexicon.metadata.positive_count} positive, "
        f"{lexicon.metadata.negative_count} negative)"
    )
    return lexicon
