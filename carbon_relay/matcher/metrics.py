"""Metrics collection for the matcher module."""

from dataclasses import dataclass, field
from typing import ClassVar

from carbon_relay.matcher.models import MatchResult


@dataclass
class MatcherMetrics:
    """Metrics for matching runs.

    Attributes:
        headlines_in: Number of headlines matched.
        headlines_with_related: Headlines that kept at least one candidate.
        candidates_in: Candidates received across all pools.
        related_out: Related candidates emitted.
        dropped_by_reason: Dropped count per drop reason.
        search_failures: Headlines whose search stage raised.
        score_values: Scores of emitted candidates for percentile calculation.
        matching_duration_ms: Time spent matching.
    """

    headlines_in: int = 0
    headlines_with_related: int = 0
    candidates_in: int = 0
    related_out: int = 0
    dropped_by_reason: dict[str, int] = field(default_factory=dict)
    search_failures: int = 0
    score_values: list[float] = field(default_factory=list)
    matching_duration_ms: float = 0.0

    _instance: ClassVar["MatcherMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "MatcherMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_result(self, result: MatchResult) -> None:
        """Record one headline's match result.

        Args:
            result: Completed match result.
        """
        self.headlines_in += 1
        self.candidates_in += result.candidates_in
        self.related_out += len(result.related)
        if result.related:
            self.headlines_with_related += 1
        for reason, count in result.drops.to_dict().items():
            if count:
                self.dropped_by_reason[reason] = (
                    self.dropped_by_reason.get(reason, 0) + count
                )
        self.score_values.extend(r.score for r in result.related)

    def record_search_failure(self) -> None:
        """Record a headline whose candidate search failed."""
        self.search_failures += 1

    def record_matching_duration(self, duration_ms: float) -> None:
        """Record matching duration.

        Args:
            duration_ms: Duration in milliseconds.
        """
        self.matching_duration_ms = duration_ms

    @property
    def dropped_total(self) -> int:
        """Total candidates dropped across all reasons."""
        return sum(self.dropped_by_reason.values())

    def get_score_percentiles(self) -> dict[str, float]:
        """Calculate score percentiles (p50/p90/p99).

        Returns:
            Dictionary with p50, p90, p99 values.
        """
        if not self.score_values:
            return {"p50": 0.0, "p90": 0.0, "p99": 0.0}

        sorted_scores = sorted(self.score_values)
        n = len(sorted_scores)

        def percentile(p: float) -> float:
            idx = int(p * n / 100)
            return sorted_scores[min(idx, n - 1)]

        return {
            "p50": percentile(50),
            "p90": percentile(90),
            "p99": percentile(99),
        }

    def to_dict(self) -> dict[str, object]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "headlines_in": self.headlines_in,
            "headlines_with_related": self.headlines_with_related,
            "candidates_in": self.candidates_in,
            "related_out": self.related_out,
            "dropped_total": self.dropped_total,
            "dropped_by_reason": dict(sorted(self.dropped_by_reason.items())),
            "search_failures": self.search_failures,
            "matching_duration_ms": self.matching_duration_ms,
            "score_percentiles": self.get_score_percentiles(),
        }
