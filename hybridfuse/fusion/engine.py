"""Fusion engine: validates a query's parameters and dispatches to a strategy."""

from __future__ import annotations

import logging
import numbers
from typing import Any, Iterable, Optional, Union

from hybridfuse.core.config import FusionConfig
from hybridfuse.core.exceptions import InvalidLimitError, InvalidWeightError
from hybridfuse.core.interfaces import FusionStrategy
from hybridfuse.core.models import (
    FusedResultList,
    FusionAlgorithm,
    HitLike,
    ResultSet,
    SearchSourceKind,
)
from hybridfuse.fusion.base import deduplicate_result_set
from hybridfuse.fusion.oversearch import OverSearchPolicy
from hybridfuse.fusion.registry import create_fusion_strategy

logger = logging.getLogger(__name__)

ResultSetLike = Union[ResultSet, Iterable[HitLike]]


def validate_alpha(alpha: Any) -> float:
    """
    Check a fusion weight.

    Raises:
        InvalidWeightError: If alpha is not a real number in [0, 1]
    """
    if isinstance(alpha, bool) or not isinstance(alpha, numbers.Real):
        raise InvalidWeightError(alpha)
    value = float(alpha)
    # NaN fails both comparisons
    if not 0.0 <= value <= 1.0:
        raise InvalidWeightError(alpha)
    return value


def validate_limit(limit: Any) -> int:
    """
    Check a result limit.

    Raises:
        InvalidLimitError: If limit is not a positive integer
    """
    if isinstance(limit, bool) or not isinstance(limit, numbers.Integral):
        raise InvalidLimitError(limit)
    if limit <= 0:
        raise InvalidLimitError(limit)
    return int(limit)


class FusionEngine:
    """
    Orchestrates hybrid score fusion.

    Each call carries its own algorithm, weight and limit; the engine holds
    only read-only configuration, so one instance can serve concurrent
    queries with different settings.
    """

    def __init__(self, config: Optional[FusionConfig] = None) -> None:
        """
        Initialize the fusion engine.

        Args:
            config: Fusion configuration
        """
        self.config = config or FusionConfig()
        self.over_search = OverSearchPolicy(self.config.over_search)

    def get_strategy(self, algorithm: Optional[Union[FusionAlgorithm, str]] = None) -> FusionStrategy:
        """Build the strategy for an algorithm, defaulting to the configured one."""
        if algorithm is None:
            algorithm = self.config.default_algorithm
        return create_fusion_strategy(algorithm, self.config)

    def retrieval_limit(
        self,
        limit: Optional[int] = None,
        algorithm: Optional[Union[FusionAlgorithm, str]] = None,
    ) -> int:
        """
        Number of candidates to request from each search source.

        Args:
            limit: Final number of fused results wanted
            algorithm: Fusion algorithm that will be used

        Returns:
            Over-searched size for strategies that need it, else ``limit``
        """
        limit = validate_limit(self.config.default_limit if limit is None else limit)
        return self.over_search.retrieval_limit(limit, self.get_strategy(algorithm))

    def fuse(
        self,
        vector_results: ResultSetLike,
        keyword_results: ResultSetLike,
        alpha: Optional[float] = None,
        limit: Optional[int] = None,
        algorithm: Optional[Union[FusionAlgorithm, str]] = None,
    ) -> FusedResultList:
        """
        Fuse vector and keyword results into one ranked list.

        Args:
            vector_results: Hits from the vector search, best first
            keyword_results: Hits from the keyword search, best first
            alpha: Weight of the vector component (1 - alpha for keyword)
            limit: Maximum number of fused results
            algorithm: Fusion algorithm to use for this call

        Returns:
            Fused results sorted by fused score, at most ``limit`` long

        Raises:
            InvalidWeightError: If alpha is outside [0, 1]
            InvalidLimitError: If limit is not a positive integer
            ConfigurationError: If the algorithm is unknown
            MalformedResultSetError: On an unusable hit, or on duplicate ids
                when strict mode is on
        """
        alpha = validate_alpha(self.config.default_alpha if alpha is None else alpha)
        limit = validate_limit(self.config.default_limit if limit is None else limit)
        strategy = self.get_strategy(algorithm)

        strict = self.config.strict_result_sets
        vector = deduplicate_result_set(
            _as_result_set(vector_results, SearchSourceKind.VECTOR), strict
        )
        keyword = deduplicate_result_set(
            _as_result_set(keyword_results, SearchSourceKind.KEYWORD), strict
        )

        hits = strategy.fuse(vector, keyword, alpha)
        logger.debug(
            f"Fused {len(vector)} vector and {len(keyword)} keyword hits into "
            f"{len(hits)} objects with {strategy.algorithm} (alpha={alpha}, limit={limit})"
        )

        return FusedResultList(
            hits=tuple(hits[:limit]),
            algorithm=strategy.algorithm,
            alpha=alpha,
            limit=limit,
        )


def _as_result_set(results: ResultSetLike, source: SearchSourceKind) -> ResultSet:
    if isinstance(results, ResultSet):
        return results
    return ResultSet.from_pairs(results, source=source)


# Convenience function for one-shot fusion
def fuse_results(
    vector_results: ResultSetLike,
    keyword_results: ResultSetLike,
    alpha: float = 0.5,
    limit: int = 10,
    algorithm: Union[FusionAlgorithm, str] = FusionAlgorithm.RANKED,
) -> FusedResultList:
    """
    Fuse two result sets with default configuration.

    Args:
        vector_results: Hits from the vector search
        keyword_results: Hits from the keyword search
        alpha: Weight for the vector component (1-alpha for keyword)
        limit: Number of results to return
        algorithm: Fusion algorithm

    Returns:
        Fused results
    """
    return FusionEngine().fuse(vector_results, keyword_results, alpha, limit, algorithm)
