"""Concurrent execution of the vector and keyword searches behind one hybrid query."""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Any, Callable, Dict, Iterable, Optional, Union

from hybridfuse.core.config import ExecutionConfig
from hybridfuse.core.exceptions import MalformedResultSetError, UpstreamFailureError
from hybridfuse.core.interfaces import SearchRequest, SearchSource
from hybridfuse.core.models import (
    FusedResultList,
    FusionAlgorithm,
    HitLike,
    ResultSet,
    SearchSourceKind,
)
from hybridfuse.fusion.engine import FusionEngine, validate_alpha, validate_limit

logger = logging.getLogger(__name__)


class CallableSearchSource(SearchSource):
    """Adapt a plain ``func(query, limit)`` to the SearchSource interface."""

    def __init__(
        self,
        name: str,
        func: Callable[[Any, int], Union[ResultSet, Iterable[HitLike]]],
    ) -> None:
        self.name = name
        self._func = func

    def search(self, request: SearchRequest) -> ResultSet:
        result = self._func(request.query, request.limit)
        if isinstance(result, ResultSet):
            return result
        return ResultSet.from_pairs(result, source=self.name)


class HybridSearchExecutor:
    """
    Run both upstream searches in parallel and fuse their results.

    The fusion step waits for both result sets. If either search raises or
    the deadline passes, the other search is cancelled and the query fails
    with UpstreamFailureError, unless ``allow_single_source`` is configured,
    in which case the failed side is fused as an empty result set and
    reported in ``degraded_sources``.
    """

    def __init__(
        self,
        vector_source: SearchSource,
        keyword_source: SearchSource,
        engine: Optional[FusionEngine] = None,
        config: Optional[ExecutionConfig] = None,
    ) -> None:
        """
        Initialize the executor.

        Args:
            vector_source: Dense vector search collaborator
            keyword_source: Keyword (BM25) search collaborator
            engine: Fusion engine, default configuration if omitted
            config: Execution configuration
        """
        self.config = config or ExecutionConfig()
        self.engine = engine or FusionEngine()
        self._sources: Dict[SearchSourceKind, SearchSource] = {
            SearchSourceKind.VECTOR: vector_source,
            SearchSourceKind.KEYWORD: keyword_source,
        }
        self._pool = ThreadPoolExecutor(
            max_workers=self.config.max_workers,
            thread_name_prefix="hybridfuse-search",
        )

    def __enter__(self) -> "HybridSearchExecutor":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Shut down the worker pool without waiting for abandoned searches."""
        self._pool.shutdown(wait=False, cancel_futures=True)

    def search(
        self,
        query: Any,
        alpha: Optional[float] = None,
        limit: Optional[int] = None,
        algorithm: Optional[Union[FusionAlgorithm, str]] = None,
        timeout: Optional[float] = None,
    ) -> FusedResultList:
        """
        Perform a hybrid search.

        Args:
            query: Query passed unchanged to both sources
            alpha: Weight of the vector component
            limit: Number of fused results to return
            algorithm: Fusion algorithm for this query
            timeout: Seconds to wait for both sources

        Returns:
            Fused results

        Raises:
            UpstreamFailureError: If a source fails or times out
        """
        fusion_config = self.engine.config
        alpha = validate_alpha(fusion_config.default_alpha if alpha is None else alpha)
        limit = validate_limit(fusion_config.default_limit if limit is None else limit)
        if algorithm is None:
            algorithm = fusion_config.default_algorithm
        retrieval_limit = self.engine.retrieval_limit(limit, algorithm)

        timeout = self.config.timeout_seconds if timeout is None else timeout
        deadline = time.monotonic() + timeout
        cancel_event = threading.Event()

        futures: Dict[Future, SearchSourceKind] = {}
        for kind, source in self._sources.items():
            request = SearchRequest(
                query=query,
                limit=retrieval_limit,
                source=kind.value,
                deadline=deadline,
                cancel_event=cancel_event,
            )
            futures[self._pool.submit(_run_source, source, request)] = kind

        results, failures = self._join(futures, deadline, cancel_event, timeout)

        # Vector first, whatever order the futures completed in
        failed = [kind for kind in SearchSourceKind if kind in failures]

        if failed:
            if not self.config.allow_single_source or len(failed) == len(futures):
                kind = failed[0]
                error = failures[kind]
                logger.error(f"{kind.value} search failed: {error}")
                raise UpstreamFailureError(
                    kind.value,
                    f"Upstream {kind.value} search failed: {error}",
                    details={"failed_sources": [k.value for k in failed]},
                ) from error

            for kind in failed:
                logger.warning(
                    f"{kind.value} search failed, fusing without it (single-source mode): "
                    f"{failures[kind]}"
                )
                results[kind] = ResultSet.empty(kind)

        fused = self.engine.fuse(
            results[SearchSourceKind.VECTOR],
            results[SearchSourceKind.KEYWORD],
            alpha=alpha,
            limit=limit,
            algorithm=algorithm,
        )
        if failed:
            fused = fused.model_copy(
                update={"degraded_sources": tuple(kind.value for kind in failed)}
            )
        return fused

    def _join(
        self,
        futures: Dict[Future, SearchSourceKind],
        deadline: float,
        cancel_event: threading.Event,
        timeout: float,
    ) -> tuple[Dict[SearchSourceKind, ResultSet], Dict[SearchSourceKind, BaseException]]:
        results: Dict[SearchSourceKind, ResultSet] = {}
        failures: Dict[SearchSourceKind, BaseException] = {}
        pending = set(futures)

        while pending:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            done, pending = wait(pending, timeout=remaining, return_when=FIRST_COMPLETED)
            for future in done:
                kind = futures[future]
                try:
                    results[kind] = future.result()
                except Exception as exc:
                    failures[kind] = exc
            if failures and not self.config.allow_single_source:
                break

        if pending:
            cancel_event.set()
            for future in pending:
                if not future.cancel():
                    logger.warning(
                        f"{futures[future].value} search still running after cancellation; "
                        "its worker stays busy until the source returns"
                    )
            if not failures or self.config.allow_single_source:
                for future in pending:
                    failures[futures[future]] = TimeoutError(
                        f"no response within {timeout:g}s"
                    )

        return results, failures


def _run_source(source: SearchSource, request: SearchRequest) -> ResultSet:
    result = source.search(request)
    if not isinstance(result, ResultSet):
        raise MalformedResultSetError(
            f"Search source returned {type(result).__name__}, expected ResultSet",
            source=request.source,
        )
    return result
