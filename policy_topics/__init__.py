"""
Topic and lexical analysis of policy statements.

Subpackages:
- preprocessing: Document records and tokenization
- features: Vocabulary, LDA, sentiment, frequency ranking and term tracking
- config: YAML + environment settings

Usage:
    from policy_topics.pipeline import CorpusAnalysisPipeline

    pipeline = CorpusAnalysisPipeline.from_settings()
    result = pipeline.run(documents)
"""

__version__ = "0.2.0"
