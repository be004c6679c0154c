"""Relevance matching and ranking of candidate documents against headlines."""

from carbon_relay.matcher.matcher import HeadlineMatcher, match_headline
from carbon_relay.matcher.metrics import MatcherMetrics
from carbon_relay.matcher.models import (
    DropCounts,
    DroppedCandidate,
    MatchResult,
    RelatedCandidate,
    ScoreBreakdown,
    ScoredCandidate,
    SignalSet,
)
from carbon_relay.matcher.runner import MatchRunner, MatchRunResult


__all__ = [
    "DropCounts",
    "DroppedCandidate",
    "HeadlineMatcher",
    "MatchResult",
    "MatchRunResult",
    "MatchRunner",
    "MatcherMetrics",
    "RelatedCandidate",
    "ScoreBreakdown",
    "ScoredCandidate",
    "SignalSet",
    "match_headline",
]
