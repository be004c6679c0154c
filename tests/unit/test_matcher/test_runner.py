"""Unit tests for MatchRunner."""

import threading
import time

import pytest

from carbon_relay.config.schemas.matcher import MatcherConfig
from carbon_relay.config.schemas.relay import RecallConfig
from carbon_relay.data_model import Candidate, Headline
from carbon_relay.matcher.matcher import HeadlineMatcher
from carbon_relay.matcher.metrics import MatcherMetrics
from carbon_relay.matcher.runner import MatchRunner
from tests.helpers.factories import make_candidate, make_headline


class _DictSearcher:
    """Searcher returning fixed pools, optionally failing or sleeping."""

    def __init__(
        self,
        pools: dict[str, list[Candidate]],
        failing: set[str] | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self._pools = pools
        self._failing = failing or set()
        self._delays = delays or {}
        self.threads: set[str] = set()

    def search(self, headline: Headline, recall: RecallConfig) -> list[Candidate]:
        self.threads.add(threading.current_thread().name)
        time.sleep(self._delays.get(headline.url, 0.0))
        if headline.url in self._failing:
            msg = "search backend unavailable"
            raise RuntimeError(msg)
        return list(self._pools.get(headline.url, []))


def _make_headlines() -> list[Headline]:
    return [
        make_headline("Biochar credits issued", url=f"https://paywalled.example/{i}")
        for i in range(4)
    ]


def _make_pools(headlines: list[Headline]) -> dict[str, list[Candidate]]:
    return {
        h.url: [make_candidate("Biochar credits issued", f"{h.url}/free")]
        for h in headlines
    }


def _make_runner(searcher: _DictSearcher, max_workers: int) -> MatchRunner:
    return MatchRunner(
        matcher=HeadlineMatcher(MatcherConfig()),
        searcher=searcher,
        recall=RecallConfig(),
        run_id="test-run",
        max_workers=max_workers,
        metrics=MatcherMetrics(),
    )


@pytest.mark.unit
class TestMatchRunner:
    """Tests for MatchRunner."""

    @pytest.mark.parametrize("max_workers", [1, 4])
    def test_results_in_input_order(self, max_workers: int) -> None:
        """Results follow input order regardless of completion order."""
        headlines = _make_headlines()
        delays = {headlines[0].url: 0.05, headlines[1].url: 0.02}
        searcher = _DictSearcher(_make_pools(headlines), delays=delays)
        result = _make_runner(searcher, max_workers).run(headlines)

        assert [r.headline.url for r in result.results] == [h.url for h in headlines]
        assert all(len(r.related) == 1 for r in result.results)
        assert result.related_total == 4

    def test_search_failure_is_isolated(self) -> None:
        """A failing search yields an empty result for that headline only."""
        headlines = _make_headlines()
        searcher = _DictSearcher(_make_pools(headlines), failing={headlines[2].url})
        metrics = MatcherMetrics()
        runner = MatchRunner(
            matcher=HeadlineMatcher(MatcherConfig()),
            searcher=searcher,
            recall=RecallConfig(),
            run_id="test-run",
            max_workers=2,
            metrics=metrics,
        )
        result = runner.run(headlines)

        assert result.search_failures == 1
        assert result.results[2].related == ()
        assert all(result.results[i].related for i in (0, 1, 3))
        assert metrics.search_failures == 1
        assert metrics.headlines_in == 4

    def test_distinct_pool(self) -> None:
        """The run pool holds each candidate URL once, in first-seen order."""
        headlines = _make_headlines()[:2]
        shared = make_candidate("Shared report", "https://free.example/shared")
        pools = {h.url: [shared] for h in headlines}
        result = _make_runner(_DictSearcher(pools), 1).run(headlines)
        assert [c.url for c in result.pool] == ["https://free.example/shared"]

    def test_empty_batch(self) -> None:
        """No headlines yields no results."""
        result = _make_runner(_DictSearcher({}), 4).run([])
        assert result.results == []
        assert result.search_failures == 0

    def test_sequential_uses_calling_thread(self) -> None:
        """max_workers=1 runs without a worker pool."""
        headlines = _make_headlines()
        searcher = _DictSearcher(_make_pools(headlines))
        _make_runner(searcher, 1).run(headlines)
        assert searcher.threads == {threading.current_thread().name}
