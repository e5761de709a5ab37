"""
Corpus Analysis Pipeline for Policy Statements

Orchestrates the complete analysis flow:
1. Build - Tokenize documents into a frozen vocabulary and document-term matrix
2. Rank - Corpus-wide and per-document term frequencies
3. Score - Lexicon sentiment per document (when a lexicon is supplied)
4. Track - Watch-term counts over time (when timestamps are known)
5. Model - Collapsed Gibbs LDA and per-document topic features

Every stage reads the same frozen matrix; nothing downstream mutates it.
"""

import json
import logging
import threading
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator

from policy_topics.features.dictionaries import SentimentLexicon
from policy_topics.features.frequency import (
    TermFrequency,
    frequencies_to_frame,
    rank_frequencies,
)
from policy_topics.features.sentiment import (
    DocumentSentiment,
    SentimentAnalyzer,
    sentiment_to_frame,
)
from policy_topics.features.term_tracking import (
    TermObservation,
    observations_to_frame,
    track_terms,
)
from policy_topics.features.topic_modeling import (
    LDAModelInfo,
    LDAResult,
    LDATrainer,
    TopicModelingAnalyzer,
)
from policy_topics.features.vocabulary import CorpusMatrix, FrequencyMatrixBuilder
from policy_topics.features.vocabulary.builder import DocumentLike, as_document
from policy_topics.preprocessing import Tokenizer

logger = logging.getLogger(__name__)


class PipelineConfig(BaseModel):
    """
    Configuration for the lexical analytics stages (Pydantic V2)

    Attributes:
        watch_terms: Terms tracked over time, in reporting order
        top_n: Terms kept per frequency ranking (None = all)
        cumulative: Report running totals for watch terms
        dominant_threshold: Minimum probability of a significant topic
        num_topic_words: Top terms reported per topic
        min_beta: Beta cut-off for the beta spread table
        precision: Decimal places kept for exported ratios
    """
    model_config = ConfigDict(
        validate_assignment=True,
        extra='forbid',
    )

    watch_terms: List[str] = Field(default_factory=list, description="Terms tracked over time")
    top_n: Optional[int] = Field(default=25, ge=0, description="Terms per frequency ranking")
    cumulative: bool = Field(default=True, description="Running totals for watch terms")
    dominant_threshold: float = Field(default=0.25, ge=0.0, le=1.0)
    num_topic_words: int = Field(default=10, ge=1)
    min_beta: float = Field(default=0.001, ge=0.0)
    precision: int = Field(default=4, ge=0)

    @field_validator('watch_terms')
    @classmethod
    def normalize_watch_terms(cls, v: List[str]) -> List[str]:
        """Lowercase to match tokenizer output; keep first occurrence."""
        terms = []
        for term in v:
            term = term.strip().lower()
            if term and term not in terms:
                terms.append(term)
        return terms

    @classmethod
    def from_settings(cls) -> "PipelineConfig":
        from policy_topics.config import settings

        return cls(
            watch_terms=settings.lexical.watch_terms,
            top_n=settings.lexical.top_n,
            cumulative=settings.lexical.cumulative,
            dominant_threshold=settings.topic_modeling.features.dominant_threshold,
            num_topic_words=settings.topic_modeling.output.num_topic_words,
            min_beta=settings.topic_modeling.output.min_beta,
            precision=settings.topic_modeling.output.precision,
        )


@dataclass
class CorpusAnalysisResult:
    """
    Every output of one pipeline run.

    Attributes:
        corpus: Frozen vocabulary, document-term matrix and dropped ids
        frequencies: Corpus-wide frequency ranking
        document_frequencies: Per-document frequency rankings
        lda: Fitted topic model
        topic_features: Per-document topic exposure table
        sentiment: Per-document sentiment (empty without a lexicon)
        observations: Watch-term observations (empty without timestamps)
    """
    corpus: CorpusMatrix
    frequencies: List[TermFrequency]
    document_frequencies: List[TermFrequency]
    lda: LDAResult
    topic_features: pd.DataFrame
    sentiment: List[DocumentSentiment] = field(default_factory=list)
    observations: List[TermObservation] = field(default_factory=list)
    config: Optional[PipelineConfig] = None

    @property
    def model_info(self) -> LDAModelInfo:
        num_words = self.config.num_topic_words if self.config else 10
        return self.lda.model_info(num_words=num_words)


class CorpusAnalysisPipeline:
    """
    Complete analysis pipeline for a corpus of policy statements

    Flow: Build → Rank → Score → Track → Model

    Example:
        >>> pipeline = CorpusAnalysisPipeline(tokenizer, LDATrainer(num_topics=2))
        >>> result = pipeline.run(documents)
        >>> paths = pipeline.export(result, "data/processed/run_1")
    """

    def __init__(
        self,
        tokenizer: Tokenizer,
        trainer: LDATrainer,
        lexicon: Optional[SentimentLexicon] = None,
        config: Optional[PipelineConfig] = None,
    ):
        """
        Initialize the analysis pipeline

        Args:
            tokenizer: Tokenizer shared by every stage
            trainer: Configured LDA trainer
            lexicon: Optional sentiment lexicon; sentiment is skipped without one
            config: Lexical stage configuration. Uses defaults if not provided.
        """
        self.config = config or PipelineConfig()
        self.builder = FrequencyMatrixBuilder(tokenizer)
        self.trainer = trainer
        self.sentiment_analyzer = (
            SentimentAnalyzer(lexicon, precision=self.config.precision)
            if lexicon is not None else None
        )

    @classmethod
    def from_settings(cls, lexicon: Optional[SentimentLexicon] = None) -> "CorpusAnalysisPipeline":
        """Build every component from policy_topics.config.settings."""
        from policy_topics.preprocessing import tokenizer_from_settings

        return cls(
            tokenizer=tokenizer_from_settings(),
            trainer=LDATrainer.from_settings(),
            lexicon=lexicon,
            config=PipelineConfig.from_settings(),
        )

    def run(
        self,
        documents: Iterable[DocumentLike],
        timestamps: Optional[Mapping[str, Optional[date]]] = None,
        stop_event: Optional[threading.Event] = None,
    ) -> CorpusAnalysisResult:
        """
        Run every stage over an ordered document collection.

        Args:
            documents: Ordered Documents or (doc_id, text) pairs
            timestamps: doc_id -> date; overrides Document.published
            stop_event: Optional cooperative stop signal for LDA sampling

        Returns:
            CorpusAnalysisResult

        Raises:
            DuplicateDocumentError, EmptyCorpusError: From matrix building
            PolicyTopicsError: From LDA validation
        """
        documents = [as_document(item) for item in documents]
        dates: Dict[str, Optional[date]] = {doc.doc_id: doc.published for doc in documents}
        if timestamps:
            dates.update(timestamps)

        logger.info(f"Step 1/5: Building document-term matrix for {len(documents)} documents")
        corpus = self.builder.build(documents)
        matrix, vocabulary = corpus.matrix, corpus.vocabulary

        logger.info("Step 2/5: Ranking term frequencies")
        frequencies = rank_frequencies(matrix, vocabulary, top_n=self.config.top_n)
        document_frequencies = rank_frequencies(
            matrix, vocabulary, by_document=True, top_n=self.config.top_n
        )

        sentiment: List[DocumentSentiment] = []
        if self.sentiment_analyzer is not None:
            logger.info("Step 3/5: Scoring lexicon sentiment")
            sentiment = self.sentiment_analyzer.score_matrix(matrix, vocabulary)
        else:
            logger.info("Step 3/5: No lexicon supplied, skipping sentiment")

        observations: List[TermObservation] = []
        if self.config.watch_terms and any(dates.get(doc_id) for doc_id in matrix.doc_ids):
            logger.info(f"Step 4/5: Tracking {len(self.config.watch_terms)} watch terms")
            observations = track_terms(
                matrix,
                vocabulary,
                dates,
                self.config.watch_terms,
                cumulative=self.config.cumulative,
            )
        else:
            logger.info("Step 4/5: No watch terms or timestamps, skipping tracking")

        logger.info("Step 5/5: Fitting topic model")
        lda = self.trainer.fit(matrix, vocabulary, stop_event=stop_event)
        analyzer = TopicModelingAnalyzer(
            lda,
            dominant_threshold=self.config.dominant_threshold,
            precision=self.config.precision,
        )

        return CorpusAnalysisResult(
            corpus=corpus,
            frequencies=frequencies,
            document_frequencies=document_frequencies,
            lda=lda,
            topic_features=analyzer.to_frame(),
            sentiment=sentiment,
            observations=observations,
            config=self.config,
        )

    def export(
        self,
        result: CorpusAnalysisResult,
        output_dir: Union[str, Path],
    ) -> Dict[str, Path]:
        """
        Write every table of a run as CSV plus the model summary as JSON.

        Args:
            result: Output of run()
            output_dir: Directory to write into (created if missing)

        Returns:
            Artifact name -> written path
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        corpus = result.corpus
        frames = result.lda.to_frames()
        tables = {
            "document_term_matrix": corpus.matrix.to_frame(corpus.vocabulary),
            "term_frequencies": frequencies_to_frame(result.frequencies),
            "document_term_frequencies": frequencies_to_frame(result.document_frequencies),
            "topic_terms": frames["beta"],
            "document_topics": frames["gamma"],
            "top_terms": result.lda.top_terms_table(self.config.num_topic_words),
            "beta_spread": result.lda.beta_spread(0, 1, min_beta=self.config.min_beta),
            "topic_features": result.topic_features,
        }
        if result.sentiment:
            tables["sentiment"] = sentiment_to_frame(result.sentiment, self.config.precision)
        if result.observations:
            tables["term_tracking"] = observations_to_frame(result.observations)

        paths = {}
        for name, frame in tables.items():
            path = output_dir / f"{name}.csv"
            frame.to_csv(path, index=False)
            paths[name] = path

        info_path = output_dir / "model_info.json"
        info = result.model_info.model_dump(mode="json")
        info["dropped_documents"] = corpus.dropped_documents
        info["out_of_vocabulary_tokens"] = corpus.out_of_vocabulary_tokens
        info["log_likelihood_trace"] = [
            {"sweep": sweep, "log_likelihood": value}
            for sweep, value in result.lda.log_likelihood_trace
        ]
        with open(info_path, 'w', encoding='utf-8') as f:
            json.dump(info, f, indent=2)
        paths["model_info"] = info_path

        logger.info(f"Exported {len(paths)} artifacts to {output_dir}")
        return paths
