"""Data models for the relevance matcher."""

from dataclasses import dataclass, field
from typing import Any

from carbon_relay.config.schemas.matcher import ScoringWeights
from carbon_relay.data_model import Candidate, Headline
from carbon_relay.matcher.constants import REASON_FIELDS


@dataclass(frozen=True)
class SignalSet:
    """Canonical signal codes detected in a headline or candidate.

    Attributes:
        markets: Market codes (e.g. "eua", "accu").
        topics: Topic codes (e.g. "forest_carbon").
        geos: Geo codes (e.g. "japan", "united_kingdom").
    """

    markets: frozenset[str] = frozenset()
    topics: frozenset[str] = frozenset()
    geos: frozenset[str] = frozenset()

    @property
    def is_empty(self) -> bool:
        """Whether no signal was detected."""
        return not (self.markets or self.topics or self.geos)


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-candidate score components, each normalized to [0, 1].

    Attributes:
        overlap: Idf-weighted overlap of headline title tokens.
        title_sim: Token-order similarity of the two titles.
        recency: Publication-time proximity.
        market: 1.0 when market signals intersect, else 0.0.
        topic: 1.0 when topic signals intersect, else 0.0.
        geo: 1.0 when geo signals intersect, else 0.0.
        quality: Clipped domain quality boost.
        shared_tokens: Distinct headline title tokens found in the candidate.
    """

    overlap: float = 0.0
    title_sim: float = 0.0
    recency: float = 0.0
    market: float = 0.0
    topic: float = 0.0
    geo: float = 0.0
    quality: float = 0.0
    shared_tokens: int = 0

    def weighted_total(self, weights: ScoringWeights) -> float:
        """Compute the aggregate score under weights."""
        return (
            weights.overlap * self.overlap
            + weights.title_sim * self.title_sim
            + weights.recency * self.recency
            + weights.market * self.market
            + weights.topic * self.topic
            + weights.geo * self.geo
            + weights.quality * self.quality
        )

    def reason(self) -> str:
        """Render the audit string listing every component.

        Returns:
            String such as
            "overlap=1.00 titleSim=0.83 recency=0.00 market=0.00 topic=1.00
            geo=0.00 quality=0.00 sharedTokens=4".
        """
        values = self.to_dict()
        parts = [f"{name}={values[name]:.2f}" for name in REASON_FIELDS]
        parts.append(f"sharedTokens={self.shared_tokens}")
        return " ".join(parts)

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary for serialization.

        Returns:
            Dictionary of component name to value.
        """
        return {
            "overlap": self.overlap,
            "titleSim": self.title_sim,
            "recency": self.recency,
            "market": self.market,
            "topic": self.topic,
            "geo": self.geo,
            "quality": self.quality,
            "sharedTokens": float(self.shared_tokens),
        }


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate with its computed score.

    Attributes:
        candidate: The scored candidate.
        signals: Signals detected in the candidate.
        breakdown: Component values.
        score: Weighted aggregate of the breakdown.
    """

    candidate: Candidate
    signals: SignalSet
    breakdown: ScoreBreakdown
    score: float

    @property
    def sort_key(self) -> tuple[float, str, str]:
        """Total order: score descending, then url, then title ascending."""
        return (-self.score, self.candidate.url, self.candidate.title)


@dataclass(frozen=True)
class RelatedCandidate:
    """A candidate accepted as related to a headline.

    Attributes:
        source: Candidate source label.
        title: Candidate title.
        url: Candidate URL.
        score: Aggregate score.
        reason: Audit string from the score breakdown.
        breakdown: Component values behind the score.
        snippet: Candidate snippet, if any.
        published_at: Candidate publication time as ISO 8601, if known.
    """

    source: str
    title: str
    url: str
    score: float
    reason: str
    breakdown: ScoreBreakdown
    snippet: str = ""
    published_at: str | None = None

    @classmethod
    def from_scored(cls, scored: ScoredCandidate) -> "RelatedCandidate":
        """Build from a scored candidate."""
        candidate = scored.candidate
        published = candidate.published_at
        return cls(
            source=candidate.source,
            title=candidate.title,
            url=candidate.url,
            score=scored.score,
            reason=scored.breakdown.reason(),
            breakdown=scored.breakdown,
            snippet=candidate.snippet,
            published_at=published.isoformat() if published is not None else None,
        )

    def to_json_dict(self) -> dict[str, Any]:
        """Convert to the camelCase record used in output files."""
        data: dict[str, Any] = {
            "source": self.source,
            "title": self.title,
            "url": self.url,
            "score": self.score,
            "reason": self.reason,
        }
        if self.published_at is not None:
            data["publishedAt"] = self.published_at
        if self.snippet:
            data["snippet"] = self.snippet
        return data


@dataclass(frozen=True)
class DroppedCandidate:
    """Record of a candidate removed from a headline's ranking.

    Attributes:
        url: Candidate URL (may be empty for malformed candidates).
        title: Candidate title (may be empty for malformed candidates).
        drop_reason: One of the DropCounts field names.
        score: Aggregate score when the candidate was scored before dropping.
    """

    url: str
    title: str
    drop_reason: str
    score: float | None = None


@dataclass(frozen=True)
class DropCounts:
    """Number of candidates dropped at each stage.

    Attributes:
        malformed: Missing title or url.
        duplicate: Repeated url within the pool.
        market_gate: No market intersection under strict_market.
        geo_gate: Missed a specific headline geography.
        weak_lexical: Too little lexical evidence.
        below_min_score: Scored under min_score.
        over_top_k: Cut by the top_k cap.
    """

    malformed: int = 0
    duplicate: int = 0
    market_gate: int = 0
    geo_gate: int = 0
    weak_lexical: int = 0
    below_min_score: int = 0
    over_top_k: int = 0

    @property
    def total(self) -> int:
        """Total number of dropped candidates."""
        return sum(self.to_dict().values())

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary for serialization."""
        return {
            "malformed": self.malformed,
            "duplicate": self.duplicate,
            "market_gate": self.market_gate,
            "geo_gate": self.geo_gate,
            "weak_lexical": self.weak_lexical,
            "below_min_score": self.below_min_score,
            "over_top_k": self.over_top_k,
        }


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching one headline against its candidate pool.

    Attributes:
        headline: The headline that was matched.
        related: Accepted candidates in total order, at most top_k.
        candidates_in: Size of the pool as received.
        drops: Drop counts per stage.
        dropped: Audit entries for every dropped candidate.
        headline_signals: Signals detected in the headline.
    """

    headline: Headline
    related: tuple[RelatedCandidate, ...] = ()
    candidates_in: int = 0
    drops: DropCounts = field(default_factory=DropCounts)
    dropped: tuple[DroppedCandidate, ...] = ()
    headline_signals: SignalSet = field(default_factory=SignalSet)

    def to_json_dict(self, include_drops: bool = False) -> dict[str, Any]:
        """Convert to the output record.

        Args:
            include_drops: Also emit per-stage drop counts.

        Returns:
            Headline fields plus the ordered ``relatedCandidates`` list.
        """
        data = self.headline.to_json_dict()
        data["relatedCandidates"] = [r.to_json_dict() for r in self.related]
        if include_drops:
            data["dropCounts"] = self.drops.to_dict()
        return data
