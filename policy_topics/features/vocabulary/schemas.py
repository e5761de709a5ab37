"""
Vocabulary and document-term matrix structures.

The vocabulary is a bijection between term strings and dense integer
indices in first-seen order. The document-term matrix (DTM) is a list of
sparse rows, one per kept document, mapping term index -> count.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

import numpy as np
import pandas as pd

from policy_topics.errors import MismatchedDimensionsError, VocabularyFrozenError


class Vocabulary:
    """
    Insertion-ordered term <-> index mapping.

    Grows monotonically while unfrozen; once frozen, lookups still work but
    adding an unseen term raises VocabularyFrozenError.

    Usage:
        vocab = Vocabulary()
        vocab.add("inflation")   # 0
        vocab.add("rising")      # 1
        vocab.add("inflation")   # 0 (already known)
        vocab.freeze()
    """

    def __init__(self, terms: Optional[Iterable[str]] = None):
        self._index: Dict[str, int] = {}
        self._terms: List[str] = []
        self._frozen = False
        for term in terms or ():
            self.add(term)

    def add(self, term: str) -> int:
        """Return the index of term, assigning the next free index if new."""
        index = self._index.get(term)
        if index is not None:
            return index
        if self._frozen:
            raise VocabularyFrozenError(f"Cannot add {term!r}: vocabulary is frozen")
        index = len(self._terms)
        self._index[term] = index
        self._terms.append(term)
        return index

    def freeze(self) -> "Vocabulary":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def terms(self) -> List[str]:
        """Terms in index order (a copy)."""
        return list(self._terms)

    def index_of(self, term: str) -> Optional[int]:
        """Index of term, or None when unknown."""
        return self._index.get(term)

    def term_at(self, index: int) -> str:
        return self._terms[index]

    def __len__(self) -> int:
        return len(self._terms)

    def __contains__(self, term: object) -> bool:
        return term in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._terms)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vocabulary):
            return NotImplemented
        return self._terms == other._terms

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"<Vocabulary ({len(self)} terms, {state})>"


@dataclass(frozen=True)
class DocumentTermMatrix:
    """
    Sparse document-term counts.

    Attributes:
        doc_ids: Document identifiers, one per row
        rows: Per-document mapping term index -> positive count
        n_terms: Number of columns (vocabulary size at freeze time)
    """
    doc_ids: List[str]
    rows: List[Dict[int, int]]
    n_terms: int

    def __post_init__(self):
        if len(self.doc_ids) != len(self.rows):
            raise MismatchedDimensionsError(
                f"{len(self.doc_ids)} document ids for {len(self.rows)} rows"
            )
        for doc_id, row in zip(self.doc_ids, self.rows):
            for term_index, count in row.items():
                if count < 0:
                    raise ValueError(
                        f"Negative count {count} for term {term_index} in {doc_id!r}"
                    )
                if not 0 <= term_index < self.n_terms:
                    raise MismatchedDimensionsError(
                        f"Term index {term_index} in {doc_id!r} outside "
                        f"0..{self.n_terms - 1}"
                    )

    @property
    def n_documents(self) -> int:
        return len(self.rows)

    @property
    def shape(self) -> tuple:
        return (self.n_documents, self.n_terms)

    @property
    def total_count(self) -> int:
        return sum(self.row_total(i) for i in range(self.n_documents))

    def row(self, doc_index: int) -> Dict[int, int]:
        return self.rows[doc_index]

    def row_total(self, doc_index: int) -> int:
        return sum(self.rows[doc_index].values())

    def count(self, doc_index: int, term_index: int) -> int:
        return self.rows[doc_index].get(term_index, 0)

    def column_totals(self) -> np.ndarray:
        """Corpus-wide count per term index."""
        totals = np.zeros(self.n_terms, dtype=np.int64)
        for row in self.rows:
            for term_index, count in row.items():
                totals[term_index] += count
        return totals

    def to_dense(self) -> np.ndarray:
        """Dense (n_documents, n_terms) integer array."""
        dense = np.zeros(self.shape, dtype=np.int64)
        for doc_index, row in enumerate(self.rows):
            for term_index, count in row.items():
                dense[doc_index, term_index] = count
        return dense

    def to_frame(self, vocabulary: Vocabulary) -> pd.DataFrame:
        """Tidy (document, term, count) table, one row per non-zero cell."""
        self.validate(vocabulary)
        records = [
            {"document": doc_id, "term": vocabulary.term_at(term_index), "count": count}
            for doc_id, row in zip(self.doc_ids, self.rows)
            for term_index, count in row.items()
        ]
        return pd.DataFrame.from_records(records, columns=["document", "term", "count"])

    def validate(self, vocabulary: Vocabulary) -> None:
        """
        Check the matrix matches the vocabulary it was built with.

        Raises:
            MismatchedDimensionsError: If column count differs from vocabulary size
        """
        if self.n_terms != len(vocabulary):
            raise MismatchedDimensionsError(
                f"Matrix has {self.n_terms} term columns but vocabulary has "
                f"{len(vocabulary)} terms"
            )


@dataclass(frozen=True)
class CorpusMatrix:
    """
    Output of FrequencyMatrixBuilder.build.

    Attributes:
        vocabulary: Frozen vocabulary
        matrix: Document-term matrix over kept documents
        dropped_documents: Ids of documents with zero tokens after cleaning
        out_of_vocabulary_tokens: Tokens skipped because a frozen vocabulary
            did not know them
    """
    vocabulary: Vocabulary
    matrix: DocumentTermMatrix
    dropped_documents: List[str] = field(default_factory=list)
    out_of_vocabulary_tokens: int = 0

    @property
    def num_dropped(self) -> int:
        return len(self.dropped_documents)
