"""Per-pool candidate scoring."""

from collections.abc import Sequence

from carbon_relay.config.schemas.matcher import MatcherConfig
from carbon_relay.data_model import Candidate, Headline
from carbon_relay.matcher.lexical import idf_overlap, title_similarity
from carbon_relay.matcher.models import ScoreBreakdown, ScoredCandidate, SignalSet
from carbon_relay.matcher.quality import DomainQualityScorer
from carbon_relay.matcher.recency import recency_score
from carbon_relay.matcher.signals import SignalExtractor
from carbon_relay.matcher.tokenizer import tokenize, unique_tokens
from carbon_relay.matcher.vocabulary import IdfModel


def _intersects(
    headline_codes: frozenset[str], candidate_codes: frozenset[str]
) -> float:
    """1.0 when the headline has codes and shares one with the candidate."""
    return 1.0 if headline_codes & candidate_codes else 0.0


class CandidateScorer:
    """Computes score breakdowns for one headline's candidate pool.

    Scoring formula:
        score = w_overlap * overlap + w_title_sim * title_sim
              + w_recency * recency + w_market * market
              + w_topic * topic + w_geo * geo + w_quality * quality

    Where:
        - overlap: idf-weighted share of headline title tokens in the candidate
        - title_sim: longest-common-subsequence ratio of title tokens
        - recency: exponential decay of the publication gap
        - market/topic/geo: 1.0 when the headline's signals intersect
        - quality: clipped sum of matching domain quality boosts

    The IDF model is built on construction from this pool only, so a
    scorer must not be reused across headlines.
    """

    def __init__(
        self,
        headline: Headline,
        pool: Sequence[Candidate],
        config: MatcherConfig,
        extractor: SignalExtractor,
        quality_scorer: DomainQualityScorer,
    ) -> None:
        """Initialize the scorer.

        Args:
            headline: Headline being matched.
            pool: Well-formed candidates of this headline's pool.
            config: Matcher configuration.
            extractor: Compiled signal extractor.
            quality_scorer: Compiled domain quality scorer.
        """
        self._headline = headline
        self._config = config
        self._extractor = extractor
        self._quality_scorer = quality_scorer

        self._idf = IdfModel([headline.text, *(c.text for c in pool)])
        self._headline_title_tokens = tokenize(headline.title)
        self._headline_signals = extractor.extract(headline.text)

    @property
    def idf_model(self) -> IdfModel:
        """Get the pool-local IDF model."""
        return self._idf

    @property
    def headline_signals(self) -> SignalSet:
        """Get the signals detected in the headline."""
        return self._headline_signals

    def score(self, candidate: Candidate) -> ScoredCandidate:
        """Score a single candidate.

        Args:
            candidate: Well-formed candidate from this pool.

        Returns:
            ScoredCandidate with breakdown and aggregate score.
        """
        overlap = idf_overlap(
            self._headline_title_tokens,
            unique_tokens(candidate.text),
            self._idf,
        )
        title_sim = title_similarity(
            self._headline_title_tokens, tokenize(candidate.title)
        )
        signals = self._extractor.extract(candidate.text, url=candidate.url)
        headline_signals = self._headline_signals

        breakdown = ScoreBreakdown(
            overlap=overlap.score,
            title_sim=title_sim,
            recency=recency_score(
                self._headline.published_at,
                candidate.published_at,
                self._config.recency,
            ),
            market=_intersects(headline_signals.markets, signals.markets),
            topic=_intersects(headline_signals.topics, signals.topics),
            geo=_intersects(headline_signals.geos, signals.geos),
            quality=self._quality_scorer.score(candidate.url),
            shared_tokens=overlap.shared_tokens,
        )

        return ScoredCandidate(
            candidate=candidate,
            signals=signals,
            breakdown=breakdown,
            score=breakdown.weighted_total(self._config.weights),
        )

    def score_all(self, candidates: Sequence[Candidate]) -> list[ScoredCandidate]:
        """Score multiple candidates, preserving input order."""
        return [self.score(candidate) for candidate in candidates]
