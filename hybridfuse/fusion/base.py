"""Shared merge-by-identifier bookkeeping for weighted fusion strategies."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

from hybridfuse.core.exceptions import MalformedResultSetError
from hybridfuse.core.interfaces import FusionStrategy
from hybridfuse.core.models import HybridHit, ResultSet, SearchHit

logger = logging.getLogger(__name__)


def deduplicate_result_set(result_set: ResultSet, strict: bool = False) -> ResultSet:
    """
    Drop repeated object ids, keeping the first (highest-ranked) occurrence.

    Args:
        result_set: Result set as received from a search source
        strict: Raise instead of repairing the result set

    Returns:
        The same result set when it has no duplicates, otherwise a re-ranked copy

    Raises:
        MalformedResultSetError: If duplicates are found and strict is set
    """
    seen: Set[str] = set()
    kept: List[SearchHit] = []
    duplicates: List[str] = []

    for hit in result_set.hits:
        if hit.object_id in seen:
            duplicates.append(hit.object_id)
            continue
        seen.add(hit.object_id)
        kept.append(hit)

    if not duplicates:
        return result_set

    if strict:
        raise MalformedResultSetError(
            f"Duplicate object ids in {result_set.source} results",
            source=result_set.source,
            details={"duplicates": sorted(set(duplicates))},
        )

    logger.warning(
        f"Search source '{result_set.source}' returned {len(duplicates)} duplicate "
        f"hit(s); keeping first occurrence of {sorted(set(duplicates))}"
    )
    return ResultSet.from_pairs(kept, source=result_set.source)


@dataclass
class _Components:
    """Per-object accumulator while merging two result sets."""

    vector: Optional[Tuple[SearchHit, float]] = None
    keyword: Optional[Tuple[SearchHit, float]] = None


class WeightedSumFusion(FusionStrategy):
    """
    Base class for strategies of the form alpha * vector + (1 - alpha) * keyword.

    Subclasses only provide ``normalize``. Objects are merged by id in
    insertion order (vector hits first, then keyword-only hits), and the
    final sort is stable, so ties keep that order.
    """

    def fuse(
        self,
        vector_results: ResultSet,
        keyword_results: ResultSet,
        alpha: float,
    ) -> List[HybridHit]:
        merged: Dict[str, _Components] = {}

        for hit, value in zip(vector_results.hits, self.normalize(vector_results)):
            entry = merged.setdefault(hit.object_id, _Components())
            if entry.vector is None:
                entry.vector = (hit, value)

        for hit, value in zip(keyword_results.hits, self.normalize(keyword_results)):
            entry = merged.setdefault(hit.object_id, _Components())
            if entry.keyword is None:
                entry.keyword = (hit, value)

        hits = [
            self._build_hit(object_id, components, alpha)
            for object_id, components in merged.items()
        ]
        hits.sort(key=lambda h: h.fused_score, reverse=True)
        return hits

    def _build_hit(self, object_id: str, components: _Components, alpha: float) -> HybridHit:
        vector_component = components.vector[1] if components.vector else 0.0
        keyword_component = components.keyword[1] if components.keyword else 0.0
        fused_score = alpha * vector_component + (1 - alpha) * keyword_component

        explain = "; ".join(
            [
                self._explain("vector", components.vector, alpha),
                self._explain("keyword", components.keyword, 1 - alpha),
            ]
        )

        return HybridHit(
            object_id=object_id,
            vector_component=vector_component,
            keyword_component=keyword_component,
            fused_score=fused_score,
            vector_score=components.vector[0].raw_score if components.vector else None,
            keyword_score=components.keyword[0].raw_score if components.keyword else None,
            explain_score=f"({self.algorithm_name}) {explain}",
        )

    def _explain(
        self,
        source: str,
        entry: Optional[Tuple[SearchHit, float]],
        weight: float,
    ) -> str:
        if entry is None:
            return f"{source}: absent"
        hit, value = entry
        return f"{source}: {self.describe(hit, value)}, weight {weight:.6g}"

    def describe(self, hit: SearchHit, value: float) -> str:
        """Explain how a hit's normalized value was derived."""
        return f"original score {hit.raw_score:.6g}, normalized score {value:.6g}"

    @property
    def algorithm_name(self) -> str:
        """String form of the algorithm identifier."""
        return getattr(self.algorithm, "value", str(self.algorithm))
