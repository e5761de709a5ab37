"""Unit tests for TopicModelingAnalyzer per-document features."""

import math

import numpy as np
import pytest

from policy_topics.features.topic_modeling import LDAResult, TopicModelingAnalyzer
from policy_topics.features.vocabulary import Vocabulary


@pytest.fixture
def analyzer(handmade_result):
    return TopicModelingAnalyzer(handmade_result, dominant_threshold=0.25)


class TestExtractFeatures:
    """Dominant topic, entropy and significant-topic counts."""

    def test_dominant_topic(self, analyzer):
        features = analyzer.extract_features("d3")

        assert features.dominant_topic_id == 1
        assert features.dominant_topic_probability == pytest.approx(0.9)

    def test_entropy_in_bits(self, analyzer):
        features = analyzer.extract_features("d1")
        expected = -(0.7 * math.log2(0.7) + 0.3 * math.log2(0.3))

        assert features.topic_entropy == pytest.approx(expected, abs=1e-4)

    def test_tie_goes_to_first_topic(self, analyzer):
        features = analyzer.extract_features("d2")

        assert features.dominant_topic_id == 0
        assert features.topic_entropy == pytest.approx(1.0)

    @pytest.mark.parametrize("doc_id,expected", [("d1", 2), ("d2", 2), ("d3", 1)])
    def test_significant_topics(self, analyzer, doc_id, expected):
        assert analyzer.extract_features(doc_id).num_significant_topics == expected

    def test_threshold_changes_significance(self, handmade_result):
        strict = TopicModelingAnalyzer(handmade_result, dominant_threshold=0.6)
        assert strict.extract_features("d2").num_significant_topics == 0

    def test_unknown_document(self, analyzer):
        with pytest.raises(KeyError):
            analyzer.extract_features("missing")

    def test_batch_keeps_requested_order(self, analyzer):
        batch = analyzer.extract_features_batch(["d3", "d1"])
        assert [features.document for features in batch] == ["d3", "d1"]


class TestViews:
    """Descriptions, distributions and the exposure table."""

    def test_topic_description(self, analyzer):
        assert analyzer.get_topic_description(1, num_words=2) == "Topic 1: jobs, inflation"

    def test_topic_distributions_sorted(self, analyzer):
        distributions = analyzer.get_topic_distributions("d3", num_words=1)

        assert [d.topic_id for d in distributions] == [1, 0]
        assert distributions[0].top_words == ["jobs"]

    def test_to_frame_columns(self, analyzer):
        frame = analyzer.to_frame()

        assert list(frame.columns) == [
            "document",
            "topic_0",
            "topic_1",
            "dominant_topic",
            "dominant_probability",
            "topic_entropy",
            "num_significant_topics",
        ]
        assert frame["document"].tolist() == ["d1", "d2", "d3"]
        assert frame["dominant_topic"].tolist() == [0, 0, 1]


class TestPrecision:
    """Rounding applies to the exported table only."""

    @pytest.fixture
    def uniform_seven_topics(self):
        vocabulary = Vocabulary(["rate", "jobs"]).freeze()
        return LDAResult(
            beta=np.full((7, 2), 0.5),
            gamma=np.full((2, 7), 1 / 7),
            doc_ids=["d1", "d2"],
            vocabulary=vocabulary,
            alpha=0.1,
            beta_prior=0.1,
            random_state=0,
            sweeps=10,
            sweeps_completed=10,
            num_tokens=20,
        )

    def test_low_precision_frame(self, uniform_seven_topics):
        frame = TopicModelingAnalyzer(uniform_seven_topics, precision=2).to_frame()

        assert frame.loc[0, "topic_0"] == 0.14
        assert frame.loc[0, "topic_entropy"] == pytest.approx(2.81)
        assert frame["dominant_topic"].tolist() == [0, 0]

    def test_features_keep_exact_values(self, uniform_seven_topics):
        features = TopicModelingAnalyzer(uniform_seven_topics, precision=0).extract_features("d1")

        assert sum(features.topic_probabilities.values()) == pytest.approx(1.0)
        assert features.topic_entropy == pytest.approx(math.log2(7))
