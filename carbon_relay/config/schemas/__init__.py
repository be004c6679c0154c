"""Configuration schema definitions."""

from carbon_relay.config.schemas.matcher import (
    GateConfig,
    MatcherConfig,
    RecencyConfig,
    ScoringWeights,
)
from carbon_relay.config.schemas.relay import RecallConfig, RelayConfig
from carbon_relay.config.schemas.signals import QualityRuleConfig, SignalTablesConfig


__all__ = [
    "GateConfig",
    "MatcherConfig",
    "QualityRuleConfig",
    "RecallConfig",
    "RecencyConfig",
    "RelayConfig",
    "ScoringWeights",
    "SignalTablesConfig",
]
