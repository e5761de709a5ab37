"""
Typed failures raised by the corpus analysis pipeline.

Every error derives from ``PolicyTopicsError``, which is itself a
``ValueError`` so callers that already guard bad input with
``except ValueError`` keep working.

Usage:
    from policy_topics.errors import InvalidTopicCountError

    try:
        trainer = LDATrainer(num_topics=1)
    except InvalidTopicCountError as exc:
        print(exc)
"""


class PolicyTopicsError(ValueError):
    """Base class for all pipeline failures."""


class EmptyCorpusError(PolicyTopicsError):
    """No document produced a single token (or no documents were given)."""


class EmptyVocabularyError(PolicyTopicsError):
    """The document-term matrix has zero columns."""


class InvalidTopicCountError(PolicyTopicsError):
    """Topic count below 2."""


class InvalidHyperparameterError(PolicyTopicsError):
    """Alpha or beta is not a finite positive number, or the sampler hit a degenerate distribution."""


class MismatchedDimensionsError(PolicyTopicsError):
    """Document-term matrix shape disagrees with the vocabulary or document list."""


class VocabularyFrozenError(PolicyTopicsError):
    """Attempt to add a new term to a frozen vocabulary."""


class DuplicateDocumentError(PolicyTopicsError):
    """Two documents share the same identifier."""
