"""
Frequency matrix builder.

Consumes token streams for an ordered collection of documents and
accumulates a frozen Vocabulary plus a sparse document-term matrix.

Usage:
    from policy_topics.preprocessing import Document, Tokenizer
    from policy_topics.features.vocabulary import FrequencyMatrixBuilder

    builder = FrequencyMatrixBuilder(Tokenizer({"is"}))
    corpus = builder.build([
        Document(doc_id="a", text="inflation is rising"),
        Document(doc_id="b", text="unemployment is falling"),
    ])
    len(corpus.vocabulary)   # 4
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple, Union

from policy_topics.errors import DuplicateDocumentError, EmptyCorpusError
from policy_topics.preprocessing import Document, Tokenizer
from .schemas import CorpusMatrix, DocumentTermMatrix, Vocabulary

logger = logging.getLogger(__name__)

DocumentLike = Union[Document, Tuple[str, str]]


def as_document(item: DocumentLike) -> Document:
    if isinstance(item, Document):
        return item
    doc_id, text = item
    return Document(doc_id=doc_id, text=text)


class FrequencyMatrixBuilder:
    """
    Builds (Vocabulary, DocumentTermMatrix) from documents.

    Vocabulary indices follow first-seen order across documents in the
    order given, so the same documents and tokenizer always reproduce the
    same indices and counts.
    """

    def __init__(self, tokenizer: Tokenizer):
        self.tokenizer = tokenizer

    def count_document(
        self,
        text: str,
        vocabulary: Vocabulary,
    ) -> Tuple[Dict[int, int], int]:
        """
        Count tokens of one document into a sparse row.

        Args:
            text: Raw document text
            vocabulary: Vocabulary to index into (extended if not frozen)

        Returns:
            (row mapping term index -> count, number of out-of-vocabulary tokens)
        """
        row: Dict[int, int] = {}
        oov = 0
        for token in self.tokenizer.tokenize(text):
            if vocabulary.frozen:
                index = vocabulary.index_of(token)
                if index is None:
                    oov += 1
                    continue
            else:
                index = vocabulary.add(token)
            row[index] = row.get(index, 0) + 1
        return row, oov

    def build(
        self,
        documents: Iterable[DocumentLike],
        vocabulary: Optional[Vocabulary] = None,
    ) -> CorpusMatrix:
        """
        Build the document-term matrix.

        Args:
            documents: Ordered Documents or (doc_id, text) pairs
            vocabulary: Optional vocabulary to reuse. A frozen vocabulary is
                used read-only; tokens it does not know are skipped.

        Returns:
            CorpusMatrix with a frozen vocabulary

        Raises:
            DuplicateDocumentError: If two documents share an id
            EmptyCorpusError: If no document yields a token
        """
        vocabulary = vocabulary if vocabulary is not None else Vocabulary()

        doc_ids: List[str] = []
        rows: List[Dict[int, int]] = []
        dropped: List[str] = []
        seen = set()
        oov_total = 0
        total_docs = 0

        for item in documents:
            document = as_document(item)
            total_docs += 1
            if document.doc_id in seen:
                raise DuplicateDocumentError(f"Duplicate document id: {document.doc_id!r}")
            seen.add(document.doc_id)

            row, oov = self.count_document(document.text, vocabulary)
            oov_total += oov
            if not row:
                logger.debug(f"Dropping {document.doc_id!r}: no tokens after cleaning")
                dropped.append(document.doc_id)
                continue
            doc_ids.append(document.doc_id)
            rows.append(row)

        if not rows:
            raise EmptyCorpusError(
                f"No tokens in corpus ({total_docs} documents given, "
                f"{len(dropped)} dropped as empty)"
            )

        vocabulary.freeze()

        if dropped:
            logger.warning(f"Dropped {len(dropped)} of {total_docs} documents with no tokens")
        if oov_total:
            logger.warning(f"Skipped {oov_total} tokens not in the frozen vocabulary")
        logger.info(
            f"Built document-term matrix: {len(rows)} documents x "
            f"{len(vocabulary)} terms"
        )

        matrix = DocumentTermMatrix(doc_ids=doc_ids, rows=rows, n_terms=len(vocabulary))
        return CorpusMatrix(
            vocabulary=vocabulary,
            matrix=matrix,
            dropped_documents=dropped,
            out_of_vocabulary_tokens=oov_total,
        )
