"""
Sentiment Analysis Feature Extractor

Signed lexicon sentiment per document: positive matches minus negative
matches, counted over the document-term matrix.

The analyzer:
1. Maps each vocabulary term to its lexicon polarity (once per vocabulary)
2. Sums the counts of positive and negative terms in each row
3. Returns one DocumentSentiment dataclass per document

Terms absent from the lexicon contribute nothing.

Usage:
    from policy_topics.features import SentimentAnalyzer
    from policy_topics.features.dictionaries import load_lexicon

    analyzer = SentimentAnalyzer(load_lexicon())
    scores = analyzer.score_matrix(corpus.matrix, corpus.vocabulary)

    print(f"Net sentiment: {scores[0].net_sentiment}")
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

import pandas as pd

from policy_topics.features.dictionaries import NEGATIVE, POSITIVE, SentimentLexicon
from policy_topics.features.vocabulary import DocumentTermMatrix, Vocabulary

logger = logging.getLogger(__name__)


@dataclass
class DocumentSentiment:
    """
    Lexicon sentiment of one document.

    Attributes:
        document: Document identifier
        positive_count: Occurrences of positive lexicon terms
        negative_count: Occurrences of negative lexicon terms
        total_tokens: Tokens in the document
        matched_terms: Lexicon term -> occurrences in the document
    """
    document: str
    positive_count: int = 0
    negative_count: int = 0
    total_tokens: int = 0
    matched_terms: Dict[str, int] = field(default_factory=dict)

    @property
    def net_sentiment(self) -> int:
        """positive_count - negative_count"""
        return self.positive_count - self.negative_count

    @property
    def sentiment_word_ratio(self) -> float:
        """Share of tokens matched by the lexicon."""
        if self.total_tokens == 0:
            return 0.0
        return (self.positive_count + self.negative_count) / self.total_tokens

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["net_sentiment"] = self.net_sentiment
        return data

    def save_to_json(self, output_path: Path) -> None:
        """
        Save scores to JSON file.

        Args:
            output_path: Path to output JSON file
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved sentiment scores to {output_path}")


class SentimentAnalyzer:
    """
    Signed sentiment scorer over a SentimentLexicon.

    Usage:
        analyzer = SentimentAnalyzer(lexicon)
        analyzer.score_counts({"growth": 3, "recession": 1}).net_sentiment  # 2
    """

    def __init__(self, lexicon: SentimentLexicon, precision: int = 4):
        """
        Args:
            lexicon: Read-only term -> polarity lexicon
            precision: Decimal places kept for ratios in to_frame
        """
        self.lexicon = lexicon
        self.precision = precision
        logger.info(f"Initialized SentimentAnalyzer with {len(lexicon)} lexicon terms")

    @classmethod
    def from_settings(cls, lexicon: Optional[SentimentLexicon] = None) -> "SentimentAnalyzer":
        """Load the configured lexicon and output precision from settings."""
        from policy_topics.config import settings
        from policy_topics.features.dictionaries import load_lexicon

        return cls(
            lexicon if lexicon is not None else load_lexicon(),
            precision=settings.sentiment.output.precision,
        )

    def score_counts(self, counts: Mapping[str, int], document: str = "") -> DocumentSentiment:
        """
        Score a single bag of words.

        Args:
            counts: term -> occurrences
            document: Identifier stored on the result

        Returns:
            DocumentSentiment
        """
        result = DocumentSentiment(document=document)
        for term, count in counts.items():
            result.total_tokens += count
            polarity = self.lexicon.polarity(term)
            if polarity is None or count == 0:
                continue
            if polarity == POSITIVE:
                result.positive_count += count
            elif polarity == NEGATIVE:
                result.negative_count += count
            result.matched_terms[term] = result.matched_terms.get(term, 0) + count
        return result

    def score_matrix(
        self,
        matrix: DocumentTermMatrix,
        vocabulary: Vocabulary,
    ) -> List[DocumentSentiment]:
        """
        Score every document of a document-term matrix.

        Returns:
            One DocumentSentiment per row, in row order

        Raises:
            MismatchedDimensionsError: If matrix and vocabulary disagree
        """
        matrix.validate(vocabulary)
        polarities = {
            index: self.lexicon.polarity(term)
            for index, term in enumerate(vocabulary)
            if term in self.lexicon
        }
        logger.info(
            f"Scoring {matrix.n_documents} documents; "
            f"{len(polarities)} of {len(vocabulary)} vocabulary terms are in the lexicon"
        )

        results = []
        for doc_index, doc_id in enumerate(matrix.doc_ids):
            row = matrix.row(doc_index)
            result = DocumentSentiment(document=doc_id, total_tokens=sum(row.values()))
            for term_index in sorted(row):
                polarity = polarities.get(term_index)
                if polarity is None:
                    continue
                count = row[term_index]
                if polarity == POSITIVE:
                    result.positive_count += count
                else:
                    result.negative_count += count
                result.matched_terms[vocabulary.term_at(term_index)] = count
            results.append(result)
        return results

    def to_frame(self, scores: List[DocumentSentiment]) -> pd.DataFrame:
        return sentiment_to_frame(scores, precision=self.precision)


def sentiment_to_frame(scores: List[DocumentSentiment], precision: int = 4) -> pd.DataFrame:
    """
    One row per document.

    Columns: document, positive, negative, net_sentiment, total_tokens,
    sentiment_word_ratio
    """
    return pd.DataFrame.from_records(
        [
            {
                "document": score.document,
                "positive": score.positive_count,
                "negative": score.negative_count,
                "net_sentiment": score.net_sentiment,
                "total_tokens": score.total_tokens,
                "sentiment_word_ratio": round(score.sentiment_word_ratio, precision),
            }
            for score in scores
        ],
        columns=[
            "document",
            "positive",
            "negative",
            "net_sentiment",
            "total_tokens",
            "sentiment_word_ratio",
        ],
    )
