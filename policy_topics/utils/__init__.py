"""Shared utilities for exported runs."""

from policy_topics.utils.metadata import RunMetadata

__all__ = [
    'RunMetadata',
]
