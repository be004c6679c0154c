"""Headline matcher: gates, filters and ranks a candidate pool."""

from collections import Counter
from collections.abc import Iterable

import structlog

from carbon_relay.config.constants import COMPONENT_MATCHER
from carbon_relay.config.schemas.matcher import MatcherConfig
from carbon_relay.data_model import Candidate, Headline
from carbon_relay.matcher.models import (
    DropCounts,
    DroppedCandidate,
    MatchResult,
    RelatedCandidate,
    ScoredCandidate,
    SignalSet,
)
from carbon_relay.matcher.quality import DomainQualityScorer
from carbon_relay.matcher.scorer import CandidateScorer
from carbon_relay.matcher.signals import SignalExtractor


logger = structlog.get_logger()


class HeadlineMatcher:
    """Ranks candidate pools against headlines under one MatcherConfig.

    Processing order per headline:
        1. Drop malformed candidates and repeated URLs
        2. Build the pool IDF model and score every candidate
        3. strict_market gate
        4. Specific-geo gate
        5. Weak-lexical gates
        6. min_score filter (scores equal to min_score are kept)
        7. Sort by score descending, url ascending, title ascending
        8. Truncate to top_k

    The matcher holds only compiled lookup tables; every call builds its
    own IDF model, so one instance may serve many threads.
    """

    def __init__(self, config: MatcherConfig, run_id: str | None = None) -> None:
        """Initialize the matcher.

        Args:
            config: Validated matcher configuration.
            run_id: Optional run identifier for logging.
        """
        self._config = config
        self._extractor = SignalExtractor(config.signals)
        self._quality_scorer = DomainQualityScorer(config.signals.quality_rules)
        self._broad_geos = frozenset(config.gates.broad_geos)
        self._log = logger.bind(component=COMPONENT_MATCHER, run_id=run_id)

    @property
    def config(self) -> MatcherConfig:
        """Get the matcher configuration."""
        return self._config

    def match(self, headline: Headline, pool: Iterable[Candidate]) -> MatchResult:
        """Match one headline against its candidate pool.

        Args:
            headline: Headline to match.
            pool: Candidates gathered for this headline only.

        Returns:
            MatchResult with at most top_k related candidates.
        """
        candidates = list(pool)
        drops: Counter[str] = Counter()
        dropped: list[DroppedCandidate] = []

        def drop(
            candidate: Candidate, reason: str, score: float | None = None
        ) -> None:
            drops[reason] += 1
            dropped.append(
                DroppedCandidate(
                    url=candidate.url,
                    title=candidate.title,
                    drop_reason=reason,
                    score=score,
                )
            )

        usable: list[Candidate] = []
        seen_urls: set[str] = set()
        for candidate in candidates:
            if not candidate.is_well_formed:
                drop(candidate, "malformed")
                continue
            url_key = candidate.url.strip()
            if url_key in seen_urls:
                drop(candidate, "duplicate")
                continue
            seen_urls.add(url_key)
            usable.append(candidate)

        if drops["malformed"]:
            self._log.info(
                "malformed_candidates_dropped",
                headline_url=headline.url,
                count=drops["malformed"],
            )

        scorer = CandidateScorer(
            headline, usable, self._config, self._extractor, self._quality_scorer
        )
        headline_signals = scorer.headline_signals

        survivors: list[ScoredCandidate] = []
        for scored in scorer.score_all(usable):
            reason = self._gate(headline_signals, scored)
            if reason is not None:
                drop(scored.candidate, reason, scored.score)
            elif scored.score < self._config.min_score:
                drop(scored.candidate, "below_min_score", scored.score)
            else:
                survivors.append(scored)

        survivors.sort(key=lambda s: s.sort_key)
        kept = survivors[: self._config.top_k]
        for scored in survivors[self._config.top_k :]:
            drop(scored.candidate, "over_top_k", scored.score)

        result = MatchResult(
            headline=headline,
            related=tuple(RelatedCandidate.from_scored(s) for s in kept),
            candidates_in=len(candidates),
            drops=DropCounts(**drops),
            dropped=tuple(dropped),
            headline_signals=headline_signals,
        )

        self._log.debug(
            "headline_matched",
            headline_url=headline.url,
            candidates_in=len(candidates),
            related=len(result.related),
            dropped=result.drops.total,
            markets=sorted(headline_signals.markets),
            topics=sorted(headline_signals.topics),
            geos=sorted(headline_signals.geos),
        )
        return result

    def _gate(
        self, headline_signals: SignalSet, scored: ScoredCandidate
    ) -> str | None:
        """Return the drop reason for a gated candidate, or None to keep it."""
        breakdown = scored.breakdown
        gates = self._config.gates

        if (
            self._config.strict_market
            and headline_signals.markets
            and not headline_signals.markets & scored.signals.markets
        ):
            return "market_gate"

        if gates.require_specific_geo and breakdown.geo == 0.0:
            if headline_signals.geos - self._broad_geos:
                return "geo_gate"

        if gates.enabled:
            only_geo = (
                breakdown.market == 0.0
                and breakdown.topic == 0.0
                and breakdown.geo > 0.0
            )
            if (
                only_geo
                and breakdown.overlap < gates.broad_geo_min_overlap
                and breakdown.title_sim < gates.broad_geo_min_title_sim
            ):
                return "weak_lexical"
            if (
                breakdown.shared_tokens < gates.min_shared_tokens
                and breakdown.title_sim < gates.title_sim_bypass
            ):
                return "weak_lexical"

        return None


def match_headline(
    headline: Headline,
    pool: Iterable[Candidate],
    config: MatcherConfig | None = None,
) -> MatchResult:
    """Match one headline against its pool with a fresh matcher.

    Args:
        headline: Headline to match.
        pool: Candidate pool for this headline.
        config: Matcher configuration (defaults when None).

    Returns:
        MatchResult.
    """
    return HeadlineMatcher(config or MatcherConfig()).match(headline, pool)
