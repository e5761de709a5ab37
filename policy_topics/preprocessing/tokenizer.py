"""
Tokenizer / normalizer for policy statement text.

Turns raw document text into a lazy, restartable stream of normalized
tokens. Cleaning runs in a fixed order, which matters for mixed
alphanumeric tokens ("cpi2021" -> "cpi"):

    1. lowercase the whole text
    2. extract word-boundary tokens (runs of \\w)
    3. drop tokens found in the stop-word set
    4. strip every non-letter character (digits of any script, superscripts,
       fractions, punctuation, underscores)
    5. drop tokens that are now empty
    6. drop stripped tokens that are stop words ("is2" -> "is" -> dropped)

Usage:
    from policy_topics.preprocessing import Tokenizer

    tokenizer = Tokenizer(stopwords={"is"})
    list(tokenizer.tokenize("Inflation is rising"))
    # ['inflation', 'rising']
"""

import logging
from typing import FrozenSet, Iterable, Iterator, List, Optional

from .constants import POLICY_STOPWORDS, WORD_PATTERN

logger = logging.getLogger(__name__)


class TokenStream:
    """
    Restartable token sequence for one text.

    Each call to iter() re-tokenizes the text from the start, so the stream
    can be consumed more than once without holding the tokens in memory.
    """

    __slots__ = ("_tokenizer", "_text")

    def __init__(self, tokenizer: "Tokenizer", text: str):
        self._tokenizer = tokenizer
        self._text = text

    def __iter__(self) -> Iterator[str]:
        return self._tokenizer._iter_tokens(self._text)

    def __repr__(self) -> str:
        preview = self._text[:30].replace("\n", " ")
        return f"<TokenStream {preview!r}...>"


class Tokenizer:
    """
    Pure tokenizer parametrized by a stop-word set.

    Attributes:
        stopwords: Frozen set of lowercase stop words
    """

    def __init__(self, stopwords: Optional[Iterable[str]] = None):
        """
        Initialize tokenizer.

        Args:
            stopwords: Words to drop. Matched after lowercasing, so entries
                are lowercased here as well.
        """
        self.stopwords: FrozenSet[str] = frozenset(
            word.lower() for word in (stopwords or ())
        )

    def tokenize(self, text: str) -> TokenStream:
        """Return a lazy, restartable stream of normalized tokens."""
        return TokenStream(self, text or "")

    def tokens(self, text: str) -> List[str]:
        """Materialize the token stream for text."""
        return list(self._iter_tokens(text or ""))

    def _iter_tokens(self, text: str) -> Iterator[str]:
        stopwords = self.stopwords
        for match in WORD_PATTERN.finditer(text.lower()):
            token = match.group(0)
            if token in stopwords:
                continue
            token = "".join(filter(str.isalpha, token))
            if not token or token in stopwords:
                continue
            yield token

    def __repr__(self) -> str:
        return f"<Tokenizer ({len(self.stopwords)} stopwords)>"


def load_stopwords(
    use_nltk: bool = True,
    custom_stopwords: Optional[Iterable[str]] = None,
    use_policy_stopwords: bool = False,
) -> FrozenSet[str]:
    """
    Load stopword list (NLTK + optional policy-statement terms + custom).

    Args:
        use_nltk: Include NLTK English stopwords when the corpus is available
        custom_stopwords: Additional user-provided stopwords
        use_policy_stopwords: Include POLICY_STOPWORDS

    Returns:
        Frozen set of lowercase stopwords
    """
    stopwords_set = set()

    if use_nltk:
        try:
            from nltk.corpus import stopwords

            stopwords_set.update(stopwords.words('english'))
        except LookupError:
            logger.warning(
                "NLTK stopwords not downloaded. "
                "Run: python -m nltk.downloader stopwords"
            )

    if use_policy_stopwords:
        stopwords_set.update(POLICY_STOPWORDS)

    if custom_stopwords:
        stopwords_set.update(custom_stopwords)

    logger.info(f"Loaded {len(stopwords_set)} stopwords")
    return frozenset(word.lower() for word in stopwords_set)


def tokenizer_from_settings(config: Optional[object] = None) -> Tokenizer:
    """
    Build a Tokenizer from PreprocessingConfig.

    Args:
        config: Optional PreprocessingConfig. If None, loads from settings.
    """
    if config is None:
        from policy_topics.config import settings
        config = settings.preprocessing

    return Tokenizer(
        load_stopwords(
            use_nltk=config.use_nltk_stopwords,
            custom_stopwords=config.custom_stopwords,
            use_policy_stopwords=config.use_policy_stopwords,
        )
    )
