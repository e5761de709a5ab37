"""
Unit tests for policy_topics/features/vocabulary

Tests Vocabulary growth and freezing, DocumentTermMatrix invariants and
FrequencyMatrixBuilder behavior on small corpora.
"""

import numpy as np
import pytest

from policy_topics.errors import (
    DuplicateDocumentError,
    EmptyCorpusError,
    MismatchedDimensionsError,
    PolicyTopicsError,
    VocabularyFrozenError,
)
from policy_topics.features.vocabulary import (
    DocumentTermMatrix,
    FrequencyMatrixBuilder,
    Vocabulary,
)
from policy_topics.preprocessing import Document, Tokenizer


class TestVocabulary:
    """Tests for the term <-> index bijection."""

    def test_first_seen_order(self):
        vocab = Vocabulary()
        assert vocab.add("inflation") == 0
        assert vocab.add("rising") == 1
        assert vocab.add("inflation") == 0
        assert vocab.terms == ["inflation", "rising"]

    def test_lookup_both_ways(self):
        vocab = Vocabulary(["a", "b"])
        assert vocab.index_of("b") == 1
        assert vocab.term_at(1) == "b"
        assert vocab.index_of("zzz") is None

    def test_frozen_rejects_new_terms(self):
        vocab = Vocabulary(["a"]).freeze()
        assert vocab.add("a") == 0
        with pytest.raises(VocabularyFrozenError):
            vocab.add("b")

    def test_frozen_error_is_value_error(self):
        assert issubclass(VocabularyFrozenError, PolicyTopicsError)
        assert issubclass(VocabularyFrozenError, ValueError)


class TestDocumentTermMatrix:
    """Tests for sparse matrix invariants and views."""

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            DocumentTermMatrix(doc_ids=["a"], rows=[{0: -1}], n_terms=1)

    def test_index_out_of_range_rejected(self):
        with pytest.raises(MismatchedDimensionsError):
            DocumentTermMatrix(doc_ids=["a"], rows=[{3: 1}], n_terms=2)

    def test_ids_and_rows_must_align(self):
        with pytest.raises(MismatchedDimensionsError):
            DocumentTermMatrix(doc_ids=["a", "b"], rows=[{0: 1}], n_terms=1)

    def test_totals_and_dense(self):
        matrix = DocumentTermMatrix(doc_ids=["a", "b"], rows=[{0: 2, 1: 1}, {1: 3}], n_terms=2)
        assert matrix.shape == (2, 2)
        assert matrix.total_count == 6
        assert matrix.row_total(1) == 3
        assert matrix.count(1, 0) == 0
        np.testing.assert_array_equal(matrix.column_totals(), [2, 4])
        np.testing.assert_array_equal(matrix.to_dense(), [[2, 1], [0, 3]])

    def test_to_frame(self):
        vocab = Vocabulary(["x", "y"]).freeze()
        matrix = DocumentTermMatrix(doc_ids=["a"], rows=[{0: 2, 1: 1}], n_terms=2)
        frame = matrix.to_frame(vocab)
        assert list(frame.columns) == ["document", "term", "count"]
        assert frame["count"].sum() == 3

    def test_validate_against_vocabulary(self):
        matrix = DocumentTermMatrix(doc_ids=["a"], rows=[{0: 1}], n_terms=2)
        with pytest.raises(MismatchedDimensionsError):
            matrix.validate(Vocabulary(["x", "y", "z"]))


class TestFrequencyMatrixBuilder:
    """Tests for building vocabulary + DTM from documents."""

    @pytest.fixture
    def builder(self) -> FrequencyMatrixBuilder:
        return FrequencyMatrixBuilder(Tokenizer({"is"}))

    def test_two_statement_scenario(self, builder: FrequencyMatrixBuilder):
        """Two statements give four terms, each counted once."""
        corpus = builder.build([
            ("a", "inflation is rising"),
            ("b", "unemployment is falling"),
        ])
        assert corpus.vocabulary.terms == ["inflation", "rising", "unemployment", "falling"]
        assert corpus.matrix.to_dense().tolist() == [[1, 1, 0, 0], [0, 0, 1, 1]]
        assert corpus.vocabulary.frozen

    def test_row_sums_equal_token_counts(self, tokenizer, policy_documents, corpus):
        for doc_index, doc in enumerate(policy_documents):
            assert corpus.matrix.row_total(doc_index) == len(tokenizer.tokens(doc.text))

    def test_columns_match_vocabulary(self, corpus):
        assert corpus.matrix.n_terms == len(corpus.vocabulary)
        assert (corpus.matrix.column_totals() > 0).all()

    def test_frozen_vocabulary_is_idempotent(self, tokenizer, policy_documents, corpus):
        """Rebuilding with the frozen vocabulary reproduces the same matrix."""
        again = FrequencyMatrixBuilder(tokenizer).build(policy_documents, corpus.vocabulary)
        assert again.matrix == corpus.matrix
        assert again.vocabulary is corpus.vocabulary
        assert again.out_of_vocabulary_tokens == 0

    def test_frozen_vocabulary_skips_unknown_tokens(self, builder: FrequencyMatrixBuilder):
        vocab = Vocabulary(["inflation", "rising"]).freeze()
        corpus = builder.build([("a", "inflation is rising sharply")], vocab)
        assert len(corpus.vocabulary) == 2
        assert corpus.out_of_vocabulary_tokens == 1
        assert corpus.matrix.row(0) == {0: 1, 1: 1}

    def test_empty_documents_dropped(self, builder: FrequencyMatrixBuilder):
        corpus = builder.build([
            Document(doc_id="a", text="inflation"),
            Document(doc_id="b", text="is 2021"),
        ])
        assert corpus.matrix.doc_ids == ["a"]
        assert corpus.dropped_documents == ["b"]
        assert corpus.num_dropped == 1

    def test_duplicate_ids_rejected(self, builder: FrequencyMatrixBuilder):
        with pytest.raises(DuplicateDocumentError):
            builder.build([("a", "inflation"), ("a", "prices")])

    @pytest.mark.parametrize("documents", [
        [],
        [("a", "is is"), ("b", "")],
    ])
    def test_empty_corpus(self, builder: FrequencyMatrixBuilder, documents):
        with pytest.raises(EmptyCorpusError):
            builder.build(documents)
