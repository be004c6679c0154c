"""Unit tests for matcher data models."""

import pytest

from carbon_relay.config.schemas.matcher import ScoringWeights
from carbon_relay.matcher.constants import REASON_FIELDS
from carbon_relay.matcher.models import (
    DropCounts,
    MatchResult,
    RelatedCandidate,
    ScoreBreakdown,
    ScoredCandidate,
    SignalSet,
)
from tests.helpers.factories import make_candidate, make_headline
from tests.helpers.time import FIXED_NOW


def _make_breakdown() -> ScoreBreakdown:
    return ScoreBreakdown(
        overlap=1.0,
        title_sim=0.8333,
        recency=0.0,
        market=0.0,
        topic=1.0,
        geo=0.0,
        quality=0.3,
        shared_tokens=4,
    )


@pytest.mark.unit
class TestScoreBreakdown:
    """Tests for ScoreBreakdown."""

    def test_reason_string(self) -> None:
        """The reason lists every component with two decimals."""
        assert _make_breakdown().reason() == (
            "overlap=1.00 titleSim=0.83 recency=0.00 market=0.00 "
            "topic=1.00 geo=0.00 quality=0.30 sharedTokens=4"
        )

    def test_reason_follows_field_order(self) -> None:
        """Reason components appear in REASON_FIELDS order."""
        names = [part.split("=")[0] for part in _make_breakdown().reason().split()]
        assert names == [*REASON_FIELDS, "sharedTokens"]

    def test_weighted_total(self) -> None:
        """The aggregate is the weighted sum of components."""
        weights = ScoringWeights()
        expected = 0.56 * 1.0 + 0.28 * 0.8333 + 0.04 * 1.0 + 1.0 * 0.3
        assert _make_breakdown().weighted_total(weights) == pytest.approx(expected)

    def test_to_dict(self) -> None:
        """to_dict uses the reason field names."""
        data = _make_breakdown().to_dict()
        assert list(data) == [
            "overlap",
            "titleSim",
            "recency",
            "market",
            "topic",
            "geo",
            "quality",
            "sharedTokens",
        ]


@pytest.mark.unit
class TestRelatedCandidate:
    """Tests for RelatedCandidate serialization."""

    def test_from_scored(self) -> None:
        """Optional fields are emitted only when present."""
        candidate = make_candidate(
            "Report",
            "https://a.example/r.pdf",
            snippet="Summary",
            published_at=FIXED_NOW,
        )
        scored = ScoredCandidate(
            candidate=candidate,
            signals=SignalSet(),
            breakdown=_make_breakdown(),
            score=0.5,
        )
        data = RelatedCandidate.from_scored(scored).to_json_dict()
        assert data == {
            "source": "example.org",
            "title": "Report",
            "url": "https://a.example/r.pdf",
            "score": 0.5,
            "reason": _make_breakdown().reason(),
            "publishedAt": "2025-06-13T09:00:00+00:00",
            "snippet": "Summary",
        }

    def test_minimal_record(self) -> None:
        """Without snippet or time only the core fields are emitted."""
        scored = ScoredCandidate(
            candidate=make_candidate("Report", "https://a.example/r"),
            signals=SignalSet(),
            breakdown=ScoreBreakdown(),
            score=0.0,
        )
        data = RelatedCandidate.from_scored(scored).to_json_dict()
        assert set(data) == {"source", "title", "url", "score", "reason"}


@pytest.mark.unit
class TestMatchResult:
    """Tests for MatchResult serialization."""

    def test_to_json_dict(self) -> None:
        """Headline fields come first, followed by relatedCandidates."""
        result = MatchResult(headline=make_headline("Carbon price rises"))
        data = result.to_json_dict()
        assert data["title"] == "Carbon price rises"
        assert data["relatedCandidates"] == []
        assert "dropCounts" not in data

    def test_include_drops(self) -> None:
        """Drop counts are emitted on request."""
        result = MatchResult(
            headline=make_headline("Carbon price rises"),
            drops=DropCounts(malformed=2),
        )
        data = result.to_json_dict(include_drops=True)
        assert data["dropCounts"]["malformed"] == 2

    def test_drop_counts_total(self) -> None:
        """total sums every stage."""
        assert DropCounts(malformed=1, duplicate=2, over_top_k=3).total == 6
