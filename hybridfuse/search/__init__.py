"""Concurrent upstream search execution."""

from hybridfuse.search.executor import CallableSearchSource, HybridSearchExecutor

__all__ = [
    "CallableSearchSource",
    "HybridSearchExecutor",
]
