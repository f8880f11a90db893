"""Core data models for hybrid score fusion."""

from __future__ import annotations

import math
import numbers
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field, field_validator

from hybridfuse.core.exceptions import MalformedResultSetError


class FusionAlgorithm(str, Enum):
    """Available score fusion algorithms."""

    RANKED = "rankedFusion"
    RELATIVE_SCORE = "relativeScoreFusion"


class SearchSourceKind(str, Enum):
    """The two upstream search channels."""

    VECTOR = "vector"
    KEYWORD = "keyword"


class SearchHit(BaseModel):
    """A single scored object from one search source."""

    object_id: str
    raw_score: float
    source_rank: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @field_validator("raw_score")
    @classmethod
    def validate_raw_score(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"raw_score must be finite, got {v}")
        return v


HitLike = Union[SearchHit, Sequence[Any], Mapping[str, Any]]


def _coerce_hit(item: HitLike, rank: int) -> SearchHit:
    if isinstance(item, SearchHit):
        if item.source_rank == rank:
            return item
        return item.model_copy(update={"source_rank": rank})
    if isinstance(item, Mapping):
        object_id = item.get("object_id", item.get("id"))
        score = item.get("raw_score", item.get("score"))
    elif isinstance(item, (str, bytes)):
        raise TypeError(f"expected an (id, score) pair, got {item!r}")
    else:
        object_id, score = item

    if object_id is None or score is None:
        raise ValueError(f"hit at rank {rank} has no id or score: {item!r}")
    # Ids are opaque strings and are never converted
    if not isinstance(object_id, str):
        raise TypeError(f"object id must be a string, got {type(object_id).__name__} {object_id!r}")
    if isinstance(score, bool) or not isinstance(score, numbers.Real):
        raise TypeError(f"score must be a number, got {score!r}")
    return SearchHit(object_id=object_id, raw_score=float(score), source_rank=rank)


class ResultSet(BaseModel):
    """
    Ordered hits from one search source.

    Hits are ordered by decreasing raw score; a hit's rank is its position.
    """

    source: str = SearchSourceKind.VECTOR.value
    hits: Tuple[SearchHit, ...] = ()

    model_config = {"frozen": True}

    @classmethod
    def from_pairs(
        cls,
        items: Iterable[HitLike],
        source: Union[SearchSourceKind, str] = SearchSourceKind.VECTOR,
    ) -> "ResultSet":
        """
        Build a result set from hits, ``(id, score)`` pairs or ``{"id", "score"}`` records.

        Args:
            items: Hits in source order (best first)
            source: Name of the producing search source

        Returns:
            ResultSet with ranks assigned by position

        Raises:
            MalformedResultSetError: If an item has no string id or no finite numeric score
        """
        source_name = source.value if isinstance(source, SearchSourceKind) else source
        try:
            hits = tuple(_coerce_hit(item, rank) for rank, item in enumerate(items))
        except (ValueError, TypeError) as e:
            raise MalformedResultSetError(
                f"Invalid hit in {source_name} results: {e}",
                source=source_name,
            ) from e
        return cls(source=source_name, hits=hits)

    @classmethod
    def empty(cls, source: Union[SearchSourceKind, str] = SearchSourceKind.VECTOR) -> "ResultSet":
        """Create an empty result set for a source."""
        return cls.from_pairs([], source=source)

    def __len__(self) -> int:
        return len(self.hits)

    def object_ids(self) -> List[str]:
        """Object ids in rank order."""
        return [hit.object_id for hit in self.hits]

    def scores(self) -> List[float]:
        """Raw scores in rank order."""
        return [hit.raw_score for hit in self.hits]


class HybridHit(BaseModel):
    """An object after fusion, with the per-source components it was built from."""

    object_id: str
    vector_component: float = 0.0
    keyword_component: float = 0.0
    fused_score: float = 0.0

    # Raw scores as received, None when the object was absent from a source
    vector_score: Optional[float] = None
    keyword_score: Optional[float] = None
    explain_score: str = ""

    model_config = {"frozen": True}


class FusedResultList(BaseModel):
    """Fused hits sorted by fused score, descending."""

    hits: Tuple[HybridHit, ...] = ()
    algorithm: Union[FusionAlgorithm, str] = FusionAlgorithm.RANKED
    alpha: float = 0.5
    limit: int = 10
    degraded_sources: Tuple[str, ...] = ()

    model_config = {"frozen": True}

    def __len__(self) -> int:
        return len(self.hits)

    def __getitem__(self, index: int) -> HybridHit:
        return self.hits[index]

    @property
    def is_degraded(self) -> bool:
        """Whether a failed source was replaced by an empty result set."""
        return bool(self.degraded_sources)

    def object_ids(self) -> List[str]:
        """Object ids in fused order."""
        return [hit.object_id for hit in self.hits]

    def to_records(self) -> List[Dict[str, Any]]:
        """Plain dictionaries for serialization."""
        return [hit.model_dump() for hit in self.hits]
