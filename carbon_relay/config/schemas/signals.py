"""Signal keyword tables and domain quality rules schema."""

import re
from typing import Annotated

from pydantic import Field, field_validator, model_validator

from carbon_relay.config.constants import (
    DOMAIN_GEOS,
    GEO_KEYWORDS,
    GEO_PATTERNS,
    MARKET_KEYWORDS,
    QUALITY_RULES,
    TOPIC_KEYWORDS,
)
from carbon_relay.data_model import StrictBaseModel


def _copy_table(table: dict[str, list[str]]) -> dict[str, list[str]]:
    return {code: list(keywords) for code, keywords in table.items()}


def _check_table(table: dict[str, list[str]]) -> dict[str, list[str]]:
    """Reject empty codes and blank keywords in a keyword table."""
    for code, keywords in table.items():
        if not code.strip():
            msg = "Signal codes must be non-empty strings"
            raise ValueError(msg)
        for keyword in keywords:
            if not keyword.strip():
                msg = f"Keywords for '{code}' must be non-empty strings"
                raise ValueError(msg)
    return table


class QualityRuleConfig(StrictBaseModel):
    """A single URL-pattern rule contributing a domain quality boost.

    A rule matches when any of its patterns matches the candidate URL.
    Host patterns are compared against the lowercased host, path patterns
    against the lowercased path.

    Attributes:
        name: Rule name, used in debug logging.
        host_suffixes: Host equals the suffix or ends with ".<suffix>".
        host_substrings: Host contains the substring.
        path_suffixes: Path ends with the suffix.
        path_substrings: Path contains the substring.
        boost: Additive boost when the rule matches.
    """

    name: Annotated[str, Field(min_length=1, max_length=100)]
    host_suffixes: list[str] = Field(default_factory=list)
    host_substrings: list[str] = Field(default_factory=list)
    path_suffixes: list[str] = Field(default_factory=list)
    path_substrings: list[str] = Field(default_factory=list)
    boost: Annotated[float, Field(ge=0.0, le=1.0)]

    @model_validator(mode="after")
    def validate_has_pattern(self) -> "QualityRuleConfig":
        """Ensure the rule can match something."""
        if not (
            self.host_suffixes
            or self.host_substrings
            or self.path_suffixes
            or self.path_substrings
        ):
            msg = f"Quality rule '{self.name}' has no patterns"
            raise ValueError(msg)
        return self


def _default_quality_rules() -> list[QualityRuleConfig]:
    return [QualityRuleConfig.model_validate(rule) for rule in QUALITY_RULES]


class SignalTablesConfig(StrictBaseModel):
    """Declarative lookup tables used by signal extraction and quality scoring.

    Attributes:
        markets: Market code -> keywords.
        topics: Topic code -> keywords.
        geos: Geo code -> case-insensitive keywords.
        geo_patterns: Geo code -> regex patterns (for acronyms like "US").
        domain_geos: Geo code -> government/regional host suffixes.
        quality_rules: Ordered domain quality rules.
    """

    markets: dict[str, list[str]] = Field(
        default_factory=lambda: _copy_table(MARKET_KEYWORDS)
    )
    topics: dict[str, list[str]] = Field(
        default_factory=lambda: _copy_table(TOPIC_KEYWORDS)
    )
    geos: dict[str, list[str]] = Field(
        default_factory=lambda: _copy_table(GEO_KEYWORDS)
    )
    geo_patterns: dict[str, list[str]] = Field(
        default_factory=lambda: _copy_table(GEO_PATTERNS)
    )
    domain_geos: dict[str, list[str]] = Field(
        default_factory=lambda: _copy_table(DOMAIN_GEOS)
    )
    quality_rules: list[QualityRuleConfig] = Field(
        default_factory=_default_quality_rules
    )

    @field_validator("markets", "topics", "geos", "domain_geos")
    @classmethod
    def validate_keywords_non_empty(
        cls, table: dict[str, list[str]]
    ) -> dict[str, list[str]]:
        """Ensure tables contain no blank codes or keywords."""
        return _check_table(table)

    @field_validator("geo_patterns")
    @classmethod
    def validate_patterns_compile(
        cls, table: dict[str, list[str]]
    ) -> dict[str, list[str]]:
        """Ensure every geo pattern is a valid regular expression."""
        _check_table(table)
        for code, patterns in table.items():
            for pattern in patterns:
                try:
                    re.compile(pattern)
                except re.error as e:
                    msg = f"Invalid pattern for '{code}': {pattern!r} ({e})"
                    raise ValueError(msg) from e
        return table
