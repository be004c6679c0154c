"""Unit tests for configuration schemas."""

import pytest
from pydantic import ValidationError

from carbon_relay.config.schemas.matcher import (
    GateConfig,
    MatcherConfig,
    RecencyConfig,
    ScoringWeights,
)
from carbon_relay.config.schemas.relay import RecallConfig, RelayConfig
from carbon_relay.config.schemas.signals import QualityRuleConfig, SignalTablesConfig


@pytest.mark.unit
class TestMatcherConfig:
    """Tests for MatcherConfig validation."""

    def test_defaults(self) -> None:
        """Defaults match the documented policy."""
        config = MatcherConfig()
        assert config.min_score == pytest.approx(0.32)
        assert config.top_k == 3
        assert config.strict_market is True

    @pytest.mark.parametrize("top_k", [0, -1])
    def test_top_k_must_be_positive(self, top_k: int) -> None:
        """top_k <= 0 is rejected."""
        with pytest.raises(ValidationError):
            MatcherConfig(top_k=top_k)

    def test_negative_min_score_rejected(self) -> None:
        """min_score below 0 is rejected."""
        with pytest.raises(ValidationError):
            MatcherConfig(min_score=-0.01)

    def test_unreachable_min_score_rejected(self) -> None:
        """min_score above the sum of weights is rejected."""
        with pytest.raises(ValidationError, match="maximum possible score"):
            MatcherConfig(min_score=2.01)

    def test_min_score_at_maximum_accepted(self) -> None:
        """min_score equal to the maximum possible score is allowed."""
        config = MatcherConfig(min_score=2.0)
        assert config.min_score == 2.0

    def test_max_possible_follows_weights(self) -> None:
        """The reachable maximum is recomputed from custom weights."""
        weights = ScoringWeights(overlap=0.5, title_sim=0.5, quality=0.0)
        assert weights.max_possible_score == pytest.approx(1.16)
        with pytest.raises(ValidationError):
            MatcherConfig(min_score=1.2, weights=weights)

    def test_negative_weight_rejected(self) -> None:
        """Weights must be non-negative."""
        with pytest.raises(ValidationError):
            ScoringWeights(overlap=-0.1)

    def test_unknown_key_rejected(self) -> None:
        """Unknown keys are a configuration mistake."""
        with pytest.raises(ValidationError):
            MatcherConfig.model_validate({"minScore": 0.3})

    def test_frozen(self) -> None:
        """Configurations are immutable."""
        config = MatcherConfig()
        with pytest.raises(ValidationError):
            config.top_k = 5  # type: ignore[misc]


@pytest.mark.unit
class TestNestedSchemas:
    """Tests for recency, gate, recall and root schemas."""

    def test_recency_decay_must_be_positive(self) -> None:
        """decay_days must be > 0."""
        with pytest.raises(ValidationError):
            RecencyConfig(decay_days=0)

    def test_gate_defaults(self) -> None:
        """Broad geos default to the sorted built-in set."""
        assert GateConfig().broad_geos == [
            "eu",
            "europe",
            "united_kingdom",
            "united_states",
        ]

    def test_recall_allows_disabled_search(self) -> None:
        """queries_per_headline of 0 disables search."""
        assert RecallConfig(queries_per_headline=0).queries_per_headline == 0

    def test_relay_version_pattern(self) -> None:
        """version must look like major.minor."""
        with pytest.raises(ValidationError):
            RelayConfig(version="one")

    def test_relay_nested_from_dict(self) -> None:
        """Nested sections validate from plain mappings."""
        config = RelayConfig.model_validate(
            {"matcher": {"top_k": 5}, "recall": {"search_per_headline": 10}}
        )
        assert config.matcher.top_k == 5
        assert config.recall.search_per_headline == 10


@pytest.mark.unit
class TestSignalTablesConfig:
    """Tests for signal table validation."""

    def test_defaults_include_quality_rules(self) -> None:
        """Default tables carry the ordered quality rules."""
        names = [rule.name for rule in SignalTablesConfig().quality_rules]
        assert names[0] == "pdf_document"
        assert "academic" in names

    def test_blank_keyword_rejected(self) -> None:
        """Blank keywords are rejected."""
        with pytest.raises(ValidationError):
            SignalTablesConfig(markets={"eua": ["eua", " "]})

    def test_invalid_geo_pattern_rejected(self) -> None:
        """Geo patterns must compile."""
        with pytest.raises(ValidationError, match="Invalid pattern"):
            SignalTablesConfig(geo_patterns={"us": [r"\bUS("]})

    def test_rule_without_pattern_rejected(self) -> None:
        """A quality rule must have at least one pattern."""
        with pytest.raises(ValidationError, match="has no patterns"):
            QualityRuleConfig(name="empty", boost=0.1)

    def test_rule_boost_bounds(self) -> None:
        """Boosts are limited to [0, 1]."""
        with pytest.raises(ValidationError):
            QualityRuleConfig(name="big", path_suffixes=[".pdf"], boost=1.5)

    def test_default_tables_are_copies(self) -> None:
        """Each config gets its own table copies."""
        first = SignalTablesConfig()
        first.markets["eua"].append("custom")
        assert "custom" not in SignalTablesConfig().markets["eua"]
