"""
Vocabulary and document-term matrix construction.

Key components:
- Vocabulary: insertion-ordered term <-> index bijection
- DocumentTermMatrix: sparse per-document term counts
- FrequencyMatrixBuilder: builds both from tokenized documents
"""

from .schemas import CorpusMatrix, DocumentTermMatrix, Vocabulary
from .builder import FrequencyMatrixBuilder

__all__ = [
    "Vocabulary",
    "DocumentTermMatrix",
    "CorpusMatrix",
    "FrequencyMatrixBuilder",
]
