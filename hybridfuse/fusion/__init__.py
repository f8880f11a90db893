"""Score fusion strategies and the fusion engine."""

from hybridfuse.fusion.base import WeightedSumFusion, deduplicate_result_set
from hybridfuse.fusion.engine import (
    FusionEngine,
    fuse_results,
    validate_alpha,
    validate_limit,
)
from hybridfuse.fusion.normalize import min_max_normalize, rank_score, rank_scores
from hybridfuse.fusion.oversearch import OverSearchPolicy
from hybridfuse.fusion.ranked import RankedFusion
from hybridfuse.fusion.registry import (
    available_algorithms,
    create_fusion_strategy,
    register_fusion_strategy,
    resolve_algorithm,
    unregister_fusion_strategy,
)
from hybridfuse.fusion.relative import RelativeScoreFusion

__all__ = [
    # Engine
    "FusionEngine",
    "fuse_results",
    "validate_alpha",
    "validate_limit",
    # Strategies
    "WeightedSumFusion",
    "RankedFusion",
    "RelativeScoreFusion",
    "OverSearchPolicy",
    # Registry
    "available_algorithms",
    "create_fusion_strategy",
    "register_fusion_strategy",
    "resolve_algorithm",
    "unregister_fusion_strategy",
    # Normalizers
    "rank_score",
    "rank_scores",
    "min_max_normalize",
    "deduplicate_result_set",
]
