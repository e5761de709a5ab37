"""
Data structures for the sentiment lexicon.

A lexicon is a read-only mapping term -> polarity. Terms are stored
lowercased so they match tokenizer output directly.
"""

from datetime import datetime
from typing import Dict, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import NEGATIVE, POLARITIES, POSITIVE


class SentimentLexiconMetadata(BaseModel):
    """Where a lexicon came from and what it holds."""
    total_words: int = Field(..., ge=0)
    positive_count: int = Field(..., ge=0)
    negative_count: int = Field(..., ge=0)
    skipped_rows: int = Field(default=0, ge=0)
    source_file: Optional[str] = Field(default=None, description="Path to source file")
    loaded_at: datetime = Field(default_factory=datetime.now)

    def get_summary(self) -> str:
        """Return human-readable summary of the lexicon."""
        return (
            f"Sentiment lexicon: {self.total_words:,} words "
            f"({self.positive_count:,} positive, {self.negative_count:,} negative)\n"
            f"Loaded from: {self.source_file or '<in memory>'}"
        )


class SentimentLexicon(BaseModel):
    """
    Read-only term -> polarity lexicon.

    Usage:
        lexicon = SentimentLexicon.from_mapping({"growth": "positive", "risk": "negative"})
        lexicon.polarity("Growth")   # "positive"
        lexicon.is_negative("risk")  # True
    """
    model_config = ConfigDict(frozen=True)

    words: Dict[str, str] = Field(
        ...,
        description="Mapping of lowercased terms to 'positive' or 'negative'"
    )
    metadata: Optional[SentimentLexiconMetadata] = Field(default=None)

    @field_validator('words')
    @classmethod
    def validate_words(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Lowercase terms and reject unknown polarities."""
        normalized = {}
        for word, polarity in v.items():
            term = word.strip().lower()
            if not term:
                raise ValueError("Lexicon terms cannot be empty")
            label = polarity.strip().lower()
            if label not in POLARITIES:
                raise ValueError(
                    f"Invalid polarity {polarity!r} for {word!r}. Must be one of {POLARITIES}"
                )
            normalized[term] = label
        return normalized

    @classmethod
    def from_mapping(cls, mapping: Dict[str, str]) -> "SentimentLexicon":
        lexicon = cls(words=dict(mapping))
        values = list(lexicon.words.values())
        metadata = SentimentLexiconMetadata(
            total_words=len(values),
            positive_count=values.count(POSITIVE),
            negative_count=values.count(NEGATIVE),
        )
        return lexicon.model_copy(update={"metadata": metadata})

    def polarity(self, word: str) -> Optional[str]:
        """Polarity of word, or None when it is not in the lexicon."""
        return self.words.get(word.lower())

    def is_positive(self, word: str) -> bool:
        return self.polarity(word) == POSITIVE

    def is_negative(self, word: str) -> bool:
        return self.polarity(word) == NEGATIVE

    def get_polarity_words(self, polarity: str) -> Set[str]:
        """
        All terms carrying a polarity.

        Raises:
            ValueError: If polarity is not 'positive' or 'negative'
        """
        if polarity not in POLARITIES:
            raise ValueError(f"Invalid polarity: {polarity}. Must be one of {POLARITIES}")
        return {word for word, label in self.words.items() if label == polarity}

    def __len__(self) -> int:
        return len(self.words)

    def __contains__(self, word: str) -> bool:
        return word.lower() in self.words
