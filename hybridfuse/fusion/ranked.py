"""Rank-based fusion: scores come from position, raw magnitudes are ignored."""

from __future__ import annotations

from typing import List, Optional

from hybridfuse.core.config import RankedFusionConfig
from hybridfuse.core.models import FusionAlgorithm, ResultSet, SearchHit
from hybridfuse.fusion.base import WeightedSumFusion
from hybridfuse.fusion.normalize import rank_scores


class RankedFusion(WeightedSumFusion):
    """
    Weighted reciprocal rank fusion.

    Each hit scores 1 / (k + rank + 1), so two result sets with the same
    ordering fuse identically whatever their raw score magnitudes.
    """

    algorithm = FusionAlgorithm.RANKED
    requires_over_search = False

    def __init__(self, config: Optional[RankedFusionConfig] = None) -> None:
        self.config = config or RankedFusionConfig()

    def normalize(self, result_set: ResultSet) -> List[float]:
        return rank_scores(len(result_set), self.config.rank_constant)

    def describe(self, hit: SearchHit, value: float) -> str:
        return f"original score {hit.raw_score:.6g}, rank {hit.source_rank}, rank score {value:.6g}"
