"""Core interfaces for fusion strategies and search sources."""

from __future__ import annotations

import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from hybridfuse.core.models import FusionAlgorithm, HybridHit, ResultSet


class FusionStrategy(ABC):
    """
    Abstract interface for score fusion algorithms.

    A strategy maps each result set onto a comparable scale and merges the
    two normalized score streams with a weight. Strategies are stateless
    with respect to queries and safe to share between threads.
    """

    algorithm: Union[FusionAlgorithm, str]
    requires_over_search: bool = False

    @abstractmethod
    def normalize(self, result_set: ResultSet) -> List[float]:
        """Normalized scores for the hits of a result set, in rank order."""
        pass

    @abstractmethod
    def fuse(
        self,
        vector_results: ResultSet,
        keyword_results: ResultSet,
        alpha: float,
    ) -> List[HybridHit]:
        """Merge two result sets into hits sorted by fused score."""
        pass


@dataclass
class SearchRequest:
    """A query handed to one upstream search source."""

    query: Any
    limit: int
    source: str
    deadline: Optional[float] = None  # time.monotonic() value
    cancel_event: threading.Event = field(default_factory=threading.Event)

    @property
    def cancelled(self) -> bool:
        """Whether the overall hybrid query was abandoned."""
        return self.cancel_event.is_set()

    def remaining_seconds(self) -> Optional[float]:
        """Seconds left before the deadline, or None without a deadline."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())


class SearchSource(ABC):
    """
    Abstract interface for an upstream search collaborator.

    Long-running sources should poll ``request.cancelled`` and stop early
    once it is set.
    """

    name: str = "source"

    @abstractmethod
    def search(self, request: SearchRequest) -> ResultSet:
        """Return up to ``request.limit`` hits, best first."""
        pass
