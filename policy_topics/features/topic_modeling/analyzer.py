"""
Topic Modeling Feature Analyzer

Turns a fitted LDAResult into per-document topic exposure features.

Usage:
    from policy_topics.features.topic_modeling import LDATrainer, TopicModelingAnalyzer

    result = LDATrainer(num_topics=3).fit(corpus.matrix, corpus.vocabulary)
    analyzer = TopicModelingAnalyzer(result)

    features = analyzer.extract_features("2023-06-14")
    print(f"Dominant topic: {features.dominant_topic_id}")
    print(f"Topic probabilities: {features.topic_probabilities}")
"""

import logging
import math
from typing import Dict, List, Optional

import pandas as pd

from .constants import DEFAULT_TOP_N, DOMINANT_TOPIC_THRESHOLD, TOPIC_FEATURE_PREFIX
from .results import LDAResult
from .schemas import LDAModelInfo, TopicDistribution, TopicModelingFeatures

logger = logging.getLogger(__name__)


class TopicModelingAnalyzer:
    """
    Topic exposure features for the documents of a fitted model.

    This class:
    1. Reads each document's gamma row from an LDAResult
    2. Derives dominant topic, entropy and significant-topic counts
    3. Returns features suitable for downstream comparison over time

    Usage:
        analyzer = TopicModelingAnalyzer(result, dominant_threshold=0.3)
        frame = analyzer.to_frame()
    """

    def __init__(
        self,
        result: LDAResult,
        dominant_threshold: float = DOMINANT_TOPIC_THRESHOLD,
        precision: int = 4,
    ):
        """
        Args:
            result: Fitted LDAResult
            dominant_threshold: Minimum probability for a significant topic
            precision: Decimal places kept in the to_frame table
        """
        self.result = result
        self.dominant_threshold = dominant_threshold
        self.precision = precision
        self.num_topics = result.num_topics
        self._model_info: Optional[LDAModelInfo] = None

        logger.info(
            f"Initialized TopicModelingAnalyzer with {self.num_topics} topics "
            f"over {result.num_documents} documents"
        )

    @property
    def model_info(self) -> LDAModelInfo:
        if self._model_info is None:
            self._model_info = self.result.model_info(num_words=DEFAULT_TOP_N)
        return self._model_info

    def extract_features(self, doc_id: str) -> TopicModelingFeatures:
        """
        Extract topic modeling features for one document.

        Args:
            doc_id: Identifier of a document the model was fit on

        Returns:
            TopicModelingFeatures

        Raises:
            KeyError: If doc_id is not part of the fitted corpus
        """
        row = self.result.document_topics(doc_id)
        exact = {topic_id: float(prob) for topic_id, prob in enumerate(row)}

        # first topic wins ties
        dominant_topic_id = max(exact, key=lambda topic_id: (exact[topic_id], -topic_id))

        num_significant_topics = sum(
            1 for prob in exact.values() if prob >= self.dominant_threshold
        )

        return TopicModelingFeatures(
            document=doc_id,
            topic_probabilities=exact,
            dominant_topic_id=dominant_topic_id,
            dominant_topic_probability=exact[dominant_topic_id],
            topic_entropy=self._calculate_entropy(exact),
            num_topics=self.num_topics,
            num_significant_topics=num_significant_topics,
        )

    def extract_features_batch(
        self,
        doc_ids: Optional[List[str]] = None,
    ) -> List[TopicModelingFeatures]:
        """
        Extract features for several documents.

        Args:
            doc_ids: Documents to describe; all fitted documents when None

        Returns:
            List of TopicModelingFeatures in the requested order
        """
        if doc_ids is None:
            doc_ids = self.result.doc_ids
        return [self.extract_features(doc_id) for doc_id in doc_ids]

    def get_topic_description(self, topic_id: int, num_words: int = 10) -> str:
        """Human-readable description of a topic, e.g. 'Topic 0: rate, inflation'."""
        return self.model_info.get_topic_description(topic_id, num_words)

    def get_topic_distributions(self, doc_id: str, num_words: int = 10) -> List[TopicDistribution]:
        """Topics of a document by probability descending, with their top words."""
        features = self.extract_features(doc_id)
        return [
            TopicDistribution(
                topic_id=topic.topic_id,
                probability=topic.probability,
                top_words=[term for term, _ in self.result.top_terms(topic.topic_id, num_words)],
            )
            for topic in features.get_top_k_topics(self.num_topics)
        ]

    def to_frame(self) -> pd.DataFrame:
        """
        One row per document with topic_<k> exposure columns.

        Columns: document, topic_0..topic_{k-1}, dominant_topic,
        dominant_probability, topic_entropy, num_significant_topics.
        Probabilities and entropy are rounded to self.precision here only;
        extract_features keeps the exact values.
        """
        records = []
        for features in self.extract_features_batch():
            record = {"document": features.document}
            for topic_id, prob in enumerate(features.to_feature_vector(self.num_topics)):
                record[f"{TOPIC_FEATURE_PREFIX}{topic_id}"] = round(prob, self.precision)
            record["dominant_topic"] = features.dominant_topic_id
            record["dominant_probability"] = round(features.dominant_topic_probability, self.precision)
            record["topic_entropy"] = round(features.topic_entropy, self.precision)
            record["num_significant_topics"] = features.num_significant_topics
            records.append(record)
        return pd.DataFrame.from_records(records)

    # ===========================
    # Private Helper Methods
    # ===========================

    def _calculate_entropy(self, topic_probabilities: Dict[int, float]) -> float:
        """
        Calculate Shannon entropy (bits) of a topic distribution.

        - Low entropy: Document focused on few topics
        - High entropy: Document covers many topics equally
        """
        entropy = 0.0
        for prob in topic_probabilities.values():
            if prob > 0:
                entropy -= prob * math.log2(prob)
        return max(entropy, 0.0)
