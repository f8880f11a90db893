"""Over-search policy: how many candidates to request from each source."""

from __future__ import annotations

import logging
import math
from typing import Optional

from hybridfuse.core.config import OverSearchConfig
from hybridfuse.core.interfaces import FusionStrategy

logger = logging.getLogger(__name__)


class OverSearchPolicy:
    """
    Decide the per-source retrieval size for a query.

    Min-max normalization over a small sample can turn near-identical
    objects into a hard 0/1 split, so strategies that declare
    ``requires_over_search`` get ``ceil(limit * factor)`` candidates from
    each source. The fused list is trimmed back to ``limit`` afterwards.
    """

    def __init__(self, config: Optional[OverSearchConfig] = None) -> None:
        self.config = config or OverSearchConfig()

    def applies_to(self, strategy: FusionStrategy) -> bool:
        """Whether over-search is used for a strategy."""
        return self.config.enabled and strategy.requires_over_search

    def retrieval_limit(self, limit: int, strategy: FusionStrategy) -> int:
        """
        Compute the number of candidates to request from each source.

        Args:
            limit: Final number of fused results wanted
            strategy: Strategy that will fuse the candidates

        Returns:
            Retrieval size, never below ``limit``
        """
        if not self.applies_to(strategy):
            return limit

        size = math.ceil(limit * self.config.factor)
        cap = self.config.max_retrieval_limit
        if cap is not None:
            size = min(size, max(cap, limit))

        logger.debug(f"Over-search: limit {limit} -> {size} candidates per source")
        return max(size, limit)
