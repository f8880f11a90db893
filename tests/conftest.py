"""Shared test fixtures for hybridfuse."""

import pytest

from hybridfuse import FusionEngine, ResultSet
from hybridfuse.core.config import FusionConfig, OverSearchConfig


@pytest.fixture
def fusion_config() -> FusionConfig:
    """Create fusion configuration with default constants."""
    return FusionConfig(
        default_limit=10,
        over_search=OverSearchConfig(enabled=True, factor=3.0, max_retrieval_limit=1000),
    )


@pytest.fixture
def engine(fusion_config: FusionConfig) -> FusionEngine:
    """Create a fusion engine."""
    return FusionEngine(fusion_config)


@pytest.fixture
def vector_results() -> ResultSet:
    """Vector hits with a clear score gradient."""
    return ResultSet.from_pairs(
        [("doc1", 0.92), ("doc3", 0.85), ("doc5", 0.80), ("doc2", 0.41)],
        source="vector",
    )


@pytest.fixture
def keyword_results() -> ResultSet:
    """BM25 hits partially overlapping the vector hits."""
    return ResultSet.from_pairs(
        [("doc5", 11.2), ("doc4", 7.9), ("doc1", 3.1)],
        source="keyword",
    )


@pytest.fixture
def near_tie_vector() -> ResultSet:
    """Vector side of the near-tie scenario: A and B almost equal."""
    return ResultSet.from_pairs([("A", 5.0), ("B", 4.99), ("C", 0.0)], source="vector")


@pytest.fixture
def near_tie_keyword() -> ResultSet:
    """Keyword side of the near-tie scenario: B almost as low as C."""
    return ResultSet.from_pairs([("A", 5.0), ("B", 0.01), ("C", 0.0)], source="keyword")
