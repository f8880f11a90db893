"""Relative score fusion: min-max normalized scores, weighted and summed."""

from __future__ import annotations

from typing import List, Optional

from hybridfuse.core.config import RelativeScoreFusionConfig
from hybridfuse.core.models import FusionAlgorithm, ResultSet
from hybridfuse.fusion.base import WeightedSumFusion
from hybridfuse.fusion.normalize import min_max_normalize


class RelativeScoreFusion(WeightedSumFusion):
    """
    Weighted fusion of min-max normalized scores.

    Unlike rank fusion, distances between raw scores survive: two nearly
    equal scores stay nearly equal, a large gap stays large. The best hit of
    each non-degenerate source normalizes to 1 and the worst to 0, which makes
    the result sensitive to how many candidates were sampled, hence the
    over-search requirement.
    """

    algorithm = FusionAlgorithm.RELATIVE_SCORE
    requires_over_search = True

    def __init__(self, config: Optional[RelativeScoreFusionConfig] = None) -> None:
        self.config = config or RelativeScoreFusionConfig()

    def normalize(self, result_set: ResultSet) -> List[float]:
        return min_max_normalize(result_set.scores(), self.config.equal_score_value)
