"""Unit tests for watch-term tracking over time."""

from datetime import date

import pytest

from policy_topics.features.term_tracking import observations_to_frame, track_terms


@pytest.fixture
def dates(policy_documents):
    return {doc.doc_id: doc.published for doc in policy_documents}


class TestTrackTerms:
    """Chronological watch-term counts."""

    def test_chronological_order(self, corpus, dates):
        observations = track_terms(corpus.matrix, corpus.vocabulary, dates, ["inflation"])

        assert [o.document for o in observations] == [
            "2021-01-27",
            "2021-03-17",
            "2021-04-28",
            "2021-06-16",
        ]
        assert [o.count for o in observations] == [0, 2, 0, 2]

    def test_watch_order_within_document(self, corpus, dates):
        observations = track_terms(
            corpus.matrix, corpus.vocabulary, dates, ["unemployment", "inflation"]
        )
        assert [o.term for o in observations[:2]] == ["unemployment", "inflation"]

    def test_unknown_term_counts_zero(self, corpus, dates):
        observations = track_terms(corpus.matrix, corpus.vocabulary, dates, ["deflation"])

        assert len(observations) == 4
        assert all(o.count == 0 for o in observations)

    def test_undated_documents_excluded(self, corpus, dates):
        dates["2021-03-17"] = None
        del dates["2021-06-16"]

        observations = track_terms(corpus.matrix, corpus.vocabulary, dates, ["inflation"])

        assert [o.document for o in observations] == ["2021-01-27", "2021-04-28"]

    def test_equal_dates_keep_document_order(self, corpus):
        same_day = {doc_id: date(2021, 1, 1) for doc_id in corpus.matrix.doc_ids}
        observations = track_terms(corpus.matrix, corpus.vocabulary, same_day, ["labor"])

        assert [o.document for o in observations] == corpus.matrix.doc_ids

    def test_cumulative_totals(self, corpus, dates):
        observations = track_terms(
            corpus.matrix, corpus.vocabulary, dates, ["inflation"], cumulative=True
        )
        assert [o.cumulative for o in observations] == [0, 2, 2, 4]

    def test_cumulative_off_by_default(self, corpus, dates):
        observations = track_terms(corpus.matrix, corpus.vocabulary, dates, ["inflation"])
        assert all(o.cumulative is None for o in observations)

    def test_to_frame(self, corpus, dates):
        frame = observations_to_frame(
            track_terms(corpus.matrix, corpus.vocabulary, dates, ["inflation", "labor"])
        )
        assert list(frame.columns) == ["timestamp", "document", "term", "count", "cumulative"]
        assert len(frame) == 8

    def test_repeated_watch_term_reported_once(self, corpus, dates):
        observations = track_terms(
            corpus.matrix, corpus.vocabulary, dates,
            ["inflation", "labor", "inflation"], cumulative=True,
        )

        assert len(observations) == 8
        inflation = [o for o in observations if o.term == "inflation"]
        assert [o.cumulative for o in inflation] == [0, 2, 2, 4]
