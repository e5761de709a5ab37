"""
Watch-term tracking over time.

Reports how often each watched term occurs in each dated document, in
chronological order, optionally with running totals per term.

Usage:
    from policy_topics.features.term_tracking import track_terms

    observations = track_terms(
        corpus.matrix,
        corpus.vocabulary,
        timestamps={"2021-03-17": date(2021, 3, 17), ...},
        watch_terms=["inflation", "unemployment"],
        cumulative=True,
    )
"""

import logging
from dataclasses import asdict, dataclass
from datetime import date
from typing import Dict, List, Mapping, Optional, Sequence

import pandas as pd

from policy_topics.features.vocabulary import DocumentTermMatrix, Vocabulary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TermObservation:
    """
    Count of one watch term in one dated document.

    Attributes:
        timestamp: Publication date of the document
        document: Document identifier
        term: Watch term
        count: Occurrences of term in the document (0 when absent)
        cumulative: Running total of term up to and including this
            document, when cumulative tracking was requested
    """
    timestamp: date
    document: str
    term: str
    count: int
    cumulative: Optional[int] = None


def track_terms(
    matrix: DocumentTermMatrix,
    vocabulary: Vocabulary,
    timestamps: Mapping[str, Optional[date]],
    watch_terms: Sequence[str],
    cumulative: bool = False,
) -> List[TermObservation]:
    """
    Count watch terms per dated document.

    Args:
        matrix: Document-term matrix
        vocabulary: Vocabulary the matrix was built with
        timestamps: doc_id -> publication date; documents missing here or
            mapped to None are left out
        watch_terms: Terms to report, in reporting order; repeats are
            reported once, at their first position
        cumulative: Also report running totals per term

    Returns:
        Observations sorted by timestamp, then document order, then
        watch-term order. Terms not in the vocabulary report count 0.

    Raises:
        MismatchedDimensionsError: If matrix and vocabulary disagree
    """
    matrix.validate(vocabulary)
    # repeated terms would share one running total
    watch_terms = list(dict.fromkeys(watch_terms))

    unknown = [term for term in watch_terms if term not in vocabulary]
    if unknown:
        logger.info(f"Watch terms not in vocabulary (reported as 0): {unknown}")

    dated = [
        (timestamps[doc_id], doc_index, doc_id)
        for doc_index, doc_id in enumerate(matrix.doc_ids)
        if timestamps.get(doc_id) is not None
    ]
    skipped = matrix.n_documents - len(dated)
    if skipped:
        logger.warning(f"{skipped} documents have no timestamp and are not tracked")

    # sorting on (timestamp, doc_index) keeps document order for equal dates
    dated.sort(key=lambda item: (item[0], item[1]))

    term_indices = [vocabulary.index_of(term) for term in watch_terms]
    running: Dict[str, int] = {term: 0 for term in watch_terms}

    observations = []
    for timestamp, doc_index, doc_id in dated:
        for term, term_index in zip(watch_terms, term_indices):
            count = matrix.count(doc_index, term_index) if term_index is not None else 0
            total = None
            if cumulative:
                running[term] += count
                total = running[term]
            observations.append(
                TermObservation(
                    timestamp=timestamp,
                    document=doc_id,
                    term=term,
                    count=count,
                    cumulative=total,
                )
            )
    return observations


def observations_to_frame(observations: List[TermObservation]) -> pd.DataFrame:
    """Tidy table with columns timestamp, document, term, count, cumulative."""
    return pd.DataFrame.from_records(
        [asdict(observation) for observation in observations],
        columns=["timestamp", "document", "term", "count", "cumulative"],
    )
