"""End-to-end hybrid search over small in-memory search sources."""

import math
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Tuple

import pytest

from hybridfuse import (
    CallableSearchSource,
    FusionAlgorithm,
    FusionEngine,
    HybridSearchExecutor,
)
from hybridfuse.core.config import FusionConfig

DOCUMENTS: Dict[str, str] = {
    "doc1": "The user service handles authentication and user management.",
    "doc2": "The order service processes orders and manages inventory.",
    "doc3": "The authentication module provides JWT token management.",
    "doc4": "Database connections are managed by the connection pool.",
    "doc5": "User authentication requires valid credentials and tokens.",
}

# Toy embeddings: (auth, orders, storage)
EMBEDDINGS: Dict[str, Tuple[float, float, float]] = {
    "doc1": (0.9, 0.1, 0.1),
    "doc2": (0.1, 0.9, 0.2),
    "doc3": (0.8, 0.0, 0.1),
    "doc4": (0.1, 0.1, 0.9),
    "doc5": (0.7, 0.1, 0.0),
}


def _cosine(a, b) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    return dot / (math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b)))


def vector_search(query: Tuple[float, float, float], limit: int) -> List[Tuple[str, float]]:
    scored = [(doc_id, _cosine(query, emb)) for doc_id, emb in EMBEDDINGS.items()]
    scored.sort(key=lambda x: x[1], reverse=True)
    return scored[:limit]


def keyword_search(terms: List[str], limit: int) -> List[Tuple[str, float]]:
    scored = []
    for doc_id, text in DOCUMENTS.items():
        words = text.lower().replace(".", "").split()
        score = float(sum(words.count(term) for term in terms))
        if score > 0:
            scored.append((doc_id, score))
    scored.sort(key=lambda x: x[1], reverse=True)
    return scored[:limit]


@pytest.fixture
def executor():
    vector = CallableSearchSource("vector", lambda q, limit: vector_search(q["vector"], limit))
    keyword = CallableSearchSource("keyword", lambda q, limit: keyword_search(q["terms"], limit))
    engine = FusionEngine(FusionConfig(default_limit=3))
    with HybridSearchExecutor(vector, keyword, engine=engine) as hybrid:
        yield hybrid


QUERY = {"vector": (1.0, 0.0, 0.0), "terms": ["user", "authentication"]}


class TestHybridSearchEndToEnd:
    """Hybrid queries against both toy sources."""

    @pytest.mark.parametrize("algorithm", list(FusionAlgorithm))
    def test_auth_query(self, executor: HybridSearchExecutor, algorithm) -> None:
        """Authentication documents fill the top three under both algorithms."""
        fused = executor.search(QUERY, alpha=0.5, algorithm=algorithm)

        assert len(fused) == 3
        assert set(fused.object_ids()) == {"doc1", "doc3", "doc5"}

    def test_relative_fusion_rewards_keyword_gap(self, executor: HybridSearchExecutor) -> None:
        """doc1 wins once its large keyword lead is not flattened to a rank."""
        ranked = executor.search(QUERY, alpha=0.5, algorithm=FusionAlgorithm.RANKED)
        relative = executor.search(QUERY, alpha=0.5, algorithm=FusionAlgorithm.RELATIVE_SCORE)

        # doc3 and doc1 tie on rank; vector order breaks the tie
        assert ranked.object_ids()[0] == "doc3"
        assert relative.object_ids() == ["doc1", "doc5", "doc3"]

    def test_alpha_one_is_vector_order(self, executor: HybridSearchExecutor) -> None:
        """Pure vector weight reproduces vector search."""
        fused = executor.search(QUERY, alpha=1.0, limit=5)
        expected = [doc_id for doc_id, _ in vector_search(QUERY["vector"], 5)]
        assert fused.object_ids() == expected

    def test_alpha_zero_is_keyword_order(self, executor: HybridSearchExecutor) -> None:
        """Pure keyword weight puts keyword hits first in keyword order."""
        fused = executor.search(QUERY, alpha=0.0, limit=5)
        expected = [doc_id for doc_id, _ in keyword_search(QUERY["terms"], 5)]
        assert fused.object_ids()[: len(expected)] == expected

    def test_concurrent_queries(self, executor: HybridSearchExecutor) -> None:
        """Queries with different settings can share one executor."""
        settings = [
            (0.2, FusionAlgorithm.RANKED),
            (0.8, FusionAlgorithm.RELATIVE_SCORE),
        ] * 4
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(
                pool.map(lambda s: executor.search(QUERY, alpha=s[0], algorithm=s[1]), settings)
            )

        for (alpha, algorithm), fused in zip(settings, results):
            assert fused.alpha == alpha
            assert fused.algorithm == algorithm
        assert results[0].model_dump_json() == results[2].model_dump_json()
