"""Batch matching with a bounded worker pool."""

import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

import structlog

from carbon_relay.collectors.base import CandidateSearcher
from carbon_relay.config.constants import COMPONENT_MATCHER
from carbon_relay.config.schemas.relay import RecallConfig
from carbon_relay.data_model import Candidate, Headline
from carbon_relay.matcher.matcher import HeadlineMatcher
from carbon_relay.matcher.metrics import MatcherMetrics
from carbon_relay.matcher.models import MatchResult


logger = structlog.get_logger()


@dataclass
class _HeadlineOutcome:
    result: MatchResult
    pool: list[Candidate]
    search_failed: bool = False


@dataclass
class MatchRunResult:
    """Result of matching a batch of headlines.

    Attributes:
        results: One MatchResult per input headline, in input order.
        pool: Distinct candidates across all pools, first occurrence order.
        search_failures: Headlines whose search stage raised.
        duration_ms: Wall-clock duration of the batch.
    """

    results: list[MatchResult] = field(default_factory=list)
    pool: list[Candidate] = field(default_factory=list)
    search_failures: int = 0
    duration_ms: float = 0.0

    @property
    def related_total(self) -> int:
        """Total related candidates across all headlines."""
        return sum(len(r.related) for r in self.results)


class MatchRunner:
    """Searches and matches many headlines concurrently.

    Each headline owns its candidate pool and IDF model, so headlines
    run in parallel with no shared mutable state. A search failure for
    one headline yields an empty pool for that headline only.
    """

    def __init__(
        self,
        matcher: HeadlineMatcher,
        searcher: CandidateSearcher,
        recall: RecallConfig,
        run_id: str,
        max_workers: int = 4,
        metrics: MatcherMetrics | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            matcher: Configured headline matcher.
            searcher: Candidate search stage.
            recall: Recall knobs passed to the searcher.
            run_id: Unique run identifier.
            max_workers: Maximum parallel workers (sequential when <= 1).
            metrics: Optional metrics instance.
        """
        self._matcher = matcher
        self._searcher = searcher
        self._recall = recall
        self._max_workers = max_workers
        self._metrics = metrics or MatcherMetrics.get_instance()
        self._log = logger.bind(component=COMPONENT_MATCHER, run_id=run_id)

    def run(self, headlines: list[Headline]) -> MatchRunResult:
        """Match every headline against its own candidate pool.

        Args:
            headlines: Headlines to match.

        Returns:
            MatchRunResult with results in input order.
        """
        start = time.perf_counter()
        self._log.info(
            "match_started",
            headline_count=len(headlines),
            max_workers=self._max_workers,
            min_score=self._matcher.config.min_score,
            top_k=self._matcher.config.top_k,
            strict_market=self._matcher.config.strict_market,
        )

        outcomes: dict[int, _HeadlineOutcome] = {}
        if self._max_workers <= 1:
            for index, headline in enumerate(headlines):
                outcomes[index] = self._match_single(headline)
                self._record(outcomes[index])
        else:
            with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                future_to_index = {
                    executor.submit(self._match_single, headline): index
                    for index, headline in enumerate(headlines)
                }
                for future in as_completed(future_to_index):
                    index = future_to_index[future]
                    outcomes[index] = future.result()
                    self._record(outcomes[index])

        ordered = [outcomes[index] for index in range(len(headlines))]
        seen: set[str] = set()
        pool: list[Candidate] = []
        for outcome in ordered:
            for candidate in outcome.pool:
                if candidate.url and candidate.url not in seen:
                    seen.add(candidate.url)
                    pool.append(candidate)

        duration_ms = (time.perf_counter() - start) * 1000
        self._metrics.record_matching_duration(duration_ms)
        run_result = MatchRunResult(
            results=[o.result for o in ordered],
            pool=pool,
            search_failures=sum(1 for o in ordered if o.search_failed),
            duration_ms=duration_ms,
        )

        self._log.info(
            "match_complete",
            headline_count=len(headlines),
            related_total=run_result.related_total,
            search_failures=run_result.search_failures,
            duration_ms=round(duration_ms, 2),
        )
        return run_result

    def _match_single(self, headline: Headline) -> _HeadlineOutcome:
        """Search and match one headline."""
        search_failed = False
        try:
            pool = list(self._searcher.search(headline, self._recall))
        except Exception as e:  # noqa: BLE001
            self._log.warning(
                "candidate_search_failed",
                headline_url=headline.url,
                error=str(e),
            )
            pool = []
            search_failed = True

        result = self._matcher.match(headline, pool)
        return _HeadlineOutcome(result=result, pool=pool, search_failed=search_failed)

    def _record(self, outcome: _HeadlineOutcome) -> None:
        self._metrics.record_result(outcome.result)
        if outcome.search_failed:
            self._metrics.record_search_failure()
