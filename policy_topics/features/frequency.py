"""
Term frequency ranking over a document-term matrix.

Ranks terms by count, highest first. Ties keep vocabulary (first-seen)
order, so equal counts never reorder between runs.

Usage:
    from policy_topics.features.frequency import rank_frequencies

    top = rank_frequencies(corpus.matrix, corpus.vocabulary, top_n=25)
    per_doc = rank_frequencies(corpus.matrix, corpus.vocabulary, by_document=True)
"""

import logging
from dataclasses import asdict, dataclass
from typing import List, Optional

import numpy as np
import pandas as pd

from policy_topics.features.vocabulary import DocumentTermMatrix, Vocabulary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TermFrequency:
    """
    Count of one term, corpus-wide or within one document.

    Attributes:
        term: The term
        count: Occurrences
        proportion: count / total tokens of the corpus (or document)
        rank: 1-based position in the ranking
        document: Document identifier for per-document rankings, else None
    """
    term: str
    count: int
    proportion: float
    rank: int
    document: Optional[str] = None


def _rank(
    term_indices: np.ndarray,
    counts: np.ndarray,
    vocabulary: Vocabulary,
    top_n: Optional[int],
    document: Optional[str],
) -> List[TermFrequency]:
    total = int(counts.sum())
    # term_indices are ascending, so a stable sort keeps first-seen order on ties
    order = np.argsort(-counts, kind="stable")
    if top_n is not None:
        order = order[:top_n]
    return [
        TermFrequency(
            term=vocabulary.term_at(int(term_indices[i])),
            count=int(counts[i]),
            proportion=float(counts[i]) / total if total else 0.0,
            rank=rank,
            document=document,
        )
        for rank, i in enumerate(order, start=1)
    ]


def rank_frequencies(
    matrix: DocumentTermMatrix,
    vocabulary: Vocabulary,
    by_document: bool = False,
    top_n: Optional[int] = None,
) -> List[TermFrequency]:
    """
    Rank terms by frequency.

    Args:
        matrix: Document-term matrix
        vocabulary: Vocabulary the matrix was built with
        by_document: Rank within each document instead of corpus-wide
        top_n: Keep only the first top_n terms (per document when by_document)

    Returns:
        TermFrequency records; corpus-wide rankings omit zero-count terms

    Raises:
        MismatchedDimensionsError: If matrix and vocabulary disagree
        ValueError: If top_n is negative
    """
    matrix.validate(vocabulary)
    if top_n is not None and top_n < 0:
        raise ValueError(f"top_n must be >= 0, got {top_n}")

    if not by_document:
        totals = matrix.column_totals()
        present = np.flatnonzero(totals)
        ranked = _rank(present, totals[present], vocabulary, top_n, None)
        logger.debug(f"Ranked {len(ranked)} of {len(vocabulary)} terms corpus-wide")
        return ranked

    ranked = []
    for doc_index, doc_id in enumerate(matrix.doc_ids):
        row = matrix.row(doc_index)
        term_indices = np.array(sorted(row), dtype=np.int64)
        counts = np.array([row[i] for i in term_indices], dtype=np.int64)
        ranked.extend(_rank(term_indices, counts, vocabulary, top_n, doc_id))
    return ranked


def frequencies_to_frame(frequencies: List[TermFrequency]) -> pd.DataFrame:
    """Tidy table with columns document, rank, term, count, proportion."""
    return pd.DataFrame.from_records(
        [asdict(freq) for freq in frequencies],
        columns=["document", "rank", "term", "count", "proportion"],
    )
