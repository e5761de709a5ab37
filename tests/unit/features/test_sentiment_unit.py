"""Unit tests for signed lexicon sentiment scoring."""

import json

import pytest

from policy_topics.errors import MismatchedDimensionsError
from policy_topics.features.sentiment import DocumentSentiment, SentimentAnalyzer
from policy_topics.features.vocabulary import DocumentTermMatrix, Vocabulary


@pytest.fixture
def analyzer(lexicon):
    return SentimentAnalyzer(lexicon)


class TestScoreCounts:
    """Scoring a single bag of words."""

    def test_net_sentiment(self, analyzer):
        score = analyzer.score_counts({"growth": 3, "recession": 1, "rate": 5}, document="d1")

        assert score.document == "d1"
        assert score.positive_count == 3
        assert score.negative_count == 1
        assert score.net_sentiment == 2
        assert score.total_tokens == 9
        assert score.matched_terms == {"growth": 3, "recession": 1}

    def test_no_lexicon_terms(self, analyzer):
        score = analyzer.score_counts({"rate": 2, "policy": 1})

        assert score.net_sentiment == 0
        assert score.sentiment_word_ratio == 0.0

    def test_empty_document(self, analyzer):
        score = analyzer.score_counts({})
        assert score.total_tokens == 0
        assert score.sentiment_word_ratio == 0.0


class TestScoreMatrix:
    """Scoring every row of a document-term matrix."""

    def test_corpus_scores(self, analyzer, corpus):
        scores = {s.document: s for s in analyzer.score_matrix(corpus.matrix, corpus.vocabulary)}

        # strong, growth, solid vs fell
        assert scores["2021-01-27"].net_sentiment == 2
        # risks
        assert scores["2021-06-16"].net_sentiment == -1
        # gains, recovery vs declined
        assert scores["2021-04-28"].net_sentiment == 1
        assert scores["2021-03-17"].net_sentiment == 0

    def test_row_order_kept(self, analyzer, corpus):
        scores = analyzer.score_matrix(corpus.matrix, corpus.vocabulary)
        assert [s.document for s in scores] == corpus.matrix.doc_ids

    def test_mismatched_vocabulary(self, analyzer):
        matrix = DocumentTermMatrix(doc_ids=["a"], rows=[{0: 1}], n_terms=2)
        with pytest.raises(MismatchedDimensionsError):
            analyzer.score_matrix(matrix, Vocabulary(["growth"]).freeze())

    def test_to_frame(self, analyzer, corpus):
        frame = analyzer.to_frame(analyzer.score_matrix(corpus.matrix, corpus.vocabulary))

        assert list(frame.columns) == [
            "document",
            "positive",
            "negative",
            "net_sentiment",
            "total_tokens",
            "sentiment_word_ratio",
        ]
        assert len(frame) == 4


class TestDocumentSentiment:
    """Serialization of a single score."""

    def test_save_to_json(self, tmp_path):
        score = DocumentSentiment(document="d1", positive_count=2, negative_count=5, total_tokens=20)
        path = tmp_path / "nested" / "d1.json"

        score.save_to_json(path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["net_sentiment"] == -3
        assert data["document"] == "d1"
