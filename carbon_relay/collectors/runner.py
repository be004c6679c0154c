"""Headline collection runner with parallel execution and failure isolation."""

import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

import structlog

from carbon_relay.collectors.base import HeadlineSource, SourceResult
from carbon_relay.collectors.errors import SourceError, SourceErrorClass
from carbon_relay.collectors.registry import SourceRegistry
from carbon_relay.config.constants import COMPONENT_COLLECTORS
from carbon_relay.data_model import Headline


logger = structlog.get_logger()


@dataclass
class SourceRunResult:
    """Result of collecting from a single source."""

    source_key: str
    result: SourceResult
    duration_ms: float = 0.0


@dataclass
class CollectionResult:
    """Result of collecting from several sources.

    Attributes:
        headlines: Headlines in requested source order.
        source_results: Per-source results keyed by source key.
    """

    headlines: list[Headline] = field(default_factory=list)
    source_results: dict[str, SourceRunResult] = field(default_factory=dict)

    @property
    def sources_succeeded(self) -> int:
        """Number of sources that collected without error."""
        return sum(1 for r in self.source_results.values() if r.result.success)

    @property
    def sources_failed(self) -> int:
        """Number of sources that reported an error."""
        return sum(1 for r in self.source_results.values() if not r.result.success)


class CollectionRunner:
    """Collects headlines from registered sources concurrently.

    Provides:
    - Parallel source processing with configurable concurrency
    - Failure isolation (one source failing doesn't stop others)
    - Deterministic output order (requested key order)
    """

    def __init__(
        self,
        registry: SourceRegistry,
        run_id: str,
        max_workers: int = 4,
    ) -> None:
        """Initialize the runner.

        Args:
            registry: Populated source registry.
            run_id: Unique run identifier.
            max_workers: Maximum parallel workers.
        """
        self._registry = registry
        self._max_workers = max_workers
        self._log = logger.bind(component=COMPONENT_COLLECTORS, run_id=run_id)

    def run(self, keys: list[str], per_source: int) -> CollectionResult:
        """Collect from every requested source.

        Args:
            keys: Source keys in output order.
            per_source: Maximum headlines per source.

        Returns:
            CollectionResult with concatenated headlines.

        Raises:
            UnknownSourceError: If any key is not registered. Raised before
                any source is collected.
        """
        sources = {key: self._registry.get(key) for key in keys}
        self._log.info(
            "collection_started",
            source_count=len(sources),
            max_workers=self._max_workers,
        )

        results: dict[str, SourceRunResult] = {}
        if self._max_workers <= 1:
            for key, source in sources.items():
                results[key] = self._run_single_source(key, source, per_source)
        else:
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                future_to_key = {
                    executor.submit(
                        self._run_single_source, key, source, per_source
                    ): key
                    for key, source in sources.items()
                }
                for future in as_completed(future_to_key):
                    key = future_to_key[future]
                    try:
                        results[key] = future.result()
                    except Exception as e:  # noqa: BLE001
                        self._log.error(
                            "source_execution_error", source_key=key, error=str(e)
                        )
                        error = SourceError(
                            SourceErrorClass.FETCH,
                            f"Execution error: {e}",
                            source_key=key,
                        )
                        results[key] = SourceRunResult(
                            source_key=key,
                            result=SourceResult(items=[], error=error),
                        )

        ordered = {key: results[key] for key in sources}
        headlines = [h for r in ordered.values() for h in r.result.items]
        collection = CollectionResult(headlines=headlines, source_results=ordered)

        self._log.info(
            "collection_complete",
            total_headlines=len(headlines),
            sources_succeeded=collection.sources_succeeded,
            sources_failed=collection.sources_failed,
        )
        return collection

    def _run_single_source(
        self, key: str, source: HeadlineSource, per_source: int
    ) -> SourceRunResult:
        start = time.perf_counter()
        result = source.collect(per_source)
        duration_ms = (time.perf_counter() - start) * 1000

        log = self._log.bind(source_key=key)
        if result.error is not None:
            log.warning("source_failed", **result.error.to_dict())
        else:
            log.info(
                "source_complete",
                items=result.items_count,
                parse_warnings=len(result.parse_warnings),
                duration_ms=round(duration_ms, 2),
            )
        return SourceRunResult(source_key=key, result=result, duration_ms=duration_ms)
