"""
hybridfuse: hybrid search score fusion

Combines a dense vector result set and a sparse keyword (BM25) result set
into one ranking, with the fusion algorithm selected per query.

Example usage:

    from hybridfuse import FusionEngine, ResultSet

    vector = ResultSet.from_pairs([("a", 0.92), ("b", 0.91), ("c", 0.40)], source="vector")
    keyword = ResultSet.from_pairs([("c", 12.1), ("a", 3.4)], source="keyword")

    engine = FusionEngine()

    # Rank-based fusion (default)
    fused = engine.fuse(vector, keyword, alpha=0.5, limit=10)

    # Score-preserving fusion
    fused = engine.fuse(vector, keyword, alpha=0.75, limit=10, algorithm="relativeScoreFusion")

    for hit in fused.hits:
        print(hit.object_id, hit.fused_score)

    # Run both searches concurrently and fuse
    from hybridfuse import CallableSearchSource, HybridSearchExecutor

    with HybridSearchExecutor(
        CallableSearchSource("vector", my_vector_search),
        CallableSearchSource("keyword", my_bm25_search),
        engine=engine,
    ) as executor:
        fused = executor.search("jwt token refresh", alpha=0.6, limit=5)
"""

__version__ = "0.1.0"

from hybridfuse.core.config import HybridFuseConfig, load_config
from hybridfuse.core.exceptions import (
    ConfigurationError,
    HybridFuseError,
    InvalidLimitError,
    InvalidWeightError,
    MalformedResultSetError,
    UpstreamFailureError,
    ValidationError,
)
from hybridfuse.core.interfaces import FusionStrategy, SearchRequest, SearchSource
from hybridfuse.core.models import (
    FusedResultList,
    FusionAlgorithm,
    HybridHit,
    ResultSet,
    SearchHit,
    SearchSourceKind,
)
from hybridfuse.fusion import (
    FusionEngine,
    OverSearchPolicy,
    RankedFusion,
    RelativeScoreFusion,
    create_fusion_strategy,
    fuse_results,
    register_fusion_strategy,
)
from hybridfuse.search import CallableSearchSource, HybridSearchExecutor

__all__ = [
    # Version
    "__version__",
    # Engine
    "FusionEngine",
    "fuse_results",
    "HybridSearchExecutor",
    # Models
    "SearchHit",
    "ResultSet",
    "HybridHit",
    "FusedResultList",
    "FusionAlgorithm",
    "SearchSourceKind",
    # Interfaces
    "FusionStrategy",
    "SearchSource",
    "SearchRequest",
    "CallableSearchSource",
    # Strategies
    "RankedFusion",
    "RelativeScoreFusion",
    "OverSearchPolicy",
    "create_fusion_strategy",
    "register_fusion_strategy",
    # Config
    "HybridFuseConfig",
    "load_config",
    # Exceptions
    "HybridFuseError",
    "ConfigurationError",
    "ValidationError",
    "InvalidWeightError",
    "InvalidLimitError",
    "MalformedResultSetError",
    "UpstreamFailureError",
]
