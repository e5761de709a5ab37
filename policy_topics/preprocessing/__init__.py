"""
Preprocessing package: document records and tokenization.

Usage:
    from policy_topics.preprocessing import Document, Tokenizer

    doc = Document(doc_id="2021-03-17", text="Inflation is rising")
    tokens = list(Tokenizer({"is"}).tokenize(doc.text))
"""

from .models import Document
from .tokenizer import Tokenizer, TokenStream, load_stopwords, tokenizer_from_settings
from .constants import POLICY_STOPWORDS

__all__ = [
    "Document",
    "Tokenizer",
    "TokenStream",
    "load_stopwords",
    "tokenizer_from_settings",
    "POLICY_STOPWORDS",
]
