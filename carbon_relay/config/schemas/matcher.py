"""Matcher configuration schema."""

from typing import Annotated

from pydantic import Field, model_validator

from carbon_relay.config.constants import (
    BROAD_GEO_MIN_OVERLAP,
    BROAD_GEO_MIN_TITLE_SIM,
    BROAD_GEOS,
    DEFAULT_MIN_SCORE,
    DEFAULT_TOP_K,
    DEFAULT_WEIGHTS,
    MIN_SHARED_TOKENS,
    RECENCY_DECAY_DAYS,
    RECENCY_WINDOW_DAYS,
    TITLE_SIM_BYPASS,
)
from carbon_relay.config.schemas.signals import SignalTablesConfig
from carbon_relay.data_model import StrictBaseModel


_Weight = Annotated[float, Field(ge=0.0, le=5.0)]
_Ratio = Annotated[float, Field(ge=0.0, le=1.0)]


class ScoringWeights(StrictBaseModel):
    """Weights of the linear score combination.

    Every component is normalized to [0, 1] before weighting, so the
    largest reachable score is the sum of the weights.

    Attributes:
        overlap: Weight for idf-weighted token overlap.
        title_sim: Weight for title token-order similarity.
        recency: Weight for publication-time proximity.
        market: Weight for a market signal match.
        topic: Weight for a topic signal match.
        geo: Weight for a geo signal match.
        quality: Weight for the domain quality boost.
    """

    overlap: _Weight = DEFAULT_WEIGHTS["overlap"]
    title_sim: _Weight = DEFAULT_WEIGHTS["title_sim"]
    recency: _Weight = DEFAULT_WEIGHTS["recency"]
    market: _Weight = DEFAULT_WEIGHTS["market"]
    topic: _Weight = DEFAULT_WEIGHTS["topic"]
    geo: _Weight = DEFAULT_WEIGHTS["geo"]
    quality: _Weight = DEFAULT_WEIGHTS["quality"]

    @property
    def max_possible_score(self) -> float:
        """Score of a candidate that maxes out every component."""
        return (
            self.overlap
            + self.title_sim
            + self.recency
            + self.market
            + self.topic
            + self.geo
            + self.quality
        )


class RecencyConfig(StrictBaseModel):
    """Recency decay configuration.

    Attributes:
        decay_days: Time constant of the exponential decay, in days.
        window_days: Gap beyond which recency is 0 (0 disables the window).
    """

    decay_days: Annotated[float, Field(gt=0.0, le=365.0)] = RECENCY_DECAY_DAYS
    window_days: Annotated[int, Field(ge=0, le=3650)] = RECENCY_WINDOW_DAYS


class GateConfig(StrictBaseModel):
    """Candidate gates applied before the minimum score filter.

    Attributes:
        enabled: Apply the weak-lexical-evidence gates.
        require_specific_geo: Drop candidates that miss a specific headline geo.
        broad_geos: Geo codes too broad to count as specific.
        min_shared_tokens: Fewer shared tokens than this needs title_sim_bypass.
        title_sim_bypass: Title similarity that rescues a low shared-token count.
        broad_geo_min_overlap: Overlap needed when only a geo signal matched.
        broad_geo_min_title_sim: Title similarity alternative to the above.
    """

    enabled: bool = True
    require_specific_geo: bool = True
    broad_geos: list[str] = Field(default_factory=lambda: sorted(BROAD_GEOS))
    min_shared_tokens: Annotated[int, Field(ge=0, le=50)] = MIN_SHARED_TOKENS
    title_sim_bypass: _Ratio = TITLE_SIM_BYPASS
    broad_geo_min_overlap: _Ratio = BROAD_GEO_MIN_OVERLAP
    broad_geo_min_title_sim: _Ratio = BROAD_GEO_MIN_TITLE_SIM


class MatcherConfig(StrictBaseModel):
    """Policy knobs interpreted by the matching engine.

    Attributes:
        min_score: Candidates scoring below this are dropped (inclusive keep).
        top_k: Maximum related candidates per headline.
        strict_market: Require a market match when the headline has one.
        weights: Linear combination weights.
        recency: Recency decay settings.
        gates: Candidate gate settings.
        signals: Keyword tables and domain quality rules.
    """

    min_score: Annotated[float, Field(ge=0.0)] = DEFAULT_MIN_SCORE
    top_k: Annotated[int, Field(gt=0, le=100)] = DEFAULT_TOP_K
    strict_market: bool = True
    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    recency: RecencyConfig = Field(default_factory=RecencyConfig)
    gates: GateConfig = Field(default_factory=GateConfig)
    signals: SignalTablesConfig = Field(default_factory=SignalTablesConfig)

    @model_validator(mode="after")
    def validate_min_score_reachable(self) -> "MatcherConfig":
        """Reject a threshold no candidate could ever reach."""
        max_score = self.weights.max_possible_score
        if self.min_score > max_score:
            msg = (
                f"min_score {self.min_score} exceeds the maximum possible "
                f"score {max_score:.2f}"
            )
            raise ValueError(msg)
        return self
