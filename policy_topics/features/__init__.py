"""
Feature Engineering Module

Analytics computed over a frozen document-term matrix.

Available features:
- Topic modeling using collapsed Gibbs sampling LDA
- Signed sentiment against a positive/negative lexicon
- Term frequency ranking (corpus-wide and per document)
- Watch-term tracking over time

Usage:
    from policy_topics.features import LDATrainer, SentimentAnalyzer, rank_frequencies

    result = LDATrainer(num_topics=2).fit(corpus.matrix, corpus.vocabulary)
    scores = SentimentAnalyzer(lexicon).score_matrix(corpus.matrix, corpus.vocabulary)
    top = rank_frequencies(corpus.matrix, corpus.vocabulary, top_n=25)
"""

# Lazy imports to avoid circular dependency
# Use explicit imports: from policy_topics.features.sentiment import SentimentAnalyzer

__all__ = [
    # Sentiment
    "SentimentAnalyzer",
    "DocumentSentiment",
    # Frequency
    "rank_frequencies",
    "TermFrequency",
    # Term tracking
    "track_terms",
    "TermObservation",
    # Topic Modeling
    "TopicModelingAnalyzer",
    "TopicModelingFeatures",
    "LDATrainer",
    "LDAResult",
]


def __getattr__(name):
    """Lazy import to avoid circular dependencies."""
    # Sentiment
    if name == "SentimentAnalyzer":
        from .sentiment import SentimentAnalyzer
        return SentimentAnalyzer
    elif name == "DocumentSentiment":
        from .sentiment import DocumentSentiment
        return DocumentSentiment
    # Frequency
    elif name == "rank_frequencies":
        from .frequency import rank_frequencies
        return rank_frequencies
    elif name == "TermFrequency":
        from .frequency import TermFrequency
        return TermFrequency
    # Term tracking
    elif name == "track_terms":
        from .term_tracking import track_terms
        return track_terms
    elif name == "TermObservation":
        from .term_tracking import TermObservation
        return TermObservation
    # Topic Modeling
    elif name == "TopicModelingAnalyzer":
        from .topic_modeling import TopicModelingAnalyzer
        return TopicModelingAnalyzer
    elif name == "TopicModelingFeatures":
        from .topic_modeling import TopicModelingFeatures
        return TopicModelingFeatures
    elif name == "LDATrainer":
        from .topic_modeling import LDATrainer
        return LDATrainer
    elif name == "LDAResult":
        from .topic_modeling import LDAResult
        return LDAResult
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
