"""Root configuration schema for relay.yaml."""

from typing import Annotated

from pydantic import Field

from carbon_relay.config.constants import (
    DEFAULT_QUERIES_PER_HEADLINE,
    DEFAULT_RESULTS_PER_QUERY,
    DEFAULT_SEARCH_PER_HEADLINE,
)
from carbon_relay.config.schemas.matcher import MatcherConfig
from carbon_relay.data_model import StrictBaseModel


class RecallConfig(StrictBaseModel):
    """Recall knobs handed to the candidate search stage.

    The matcher never reads these; they bound how many candidates the
    search collaborator gathers per headline.

    Attributes:
        queries_per_headline: Maximum search queries issued per headline.
        results_per_query: Results requested per query.
        search_per_headline: Maximum candidates kept per headline.
    """

    queries_per_headline: Annotated[int, Field(ge=0, le=20)] = (
        DEFAULT_QUERIES_PER_HEADLINE
    )
    results_per_query: Annotated[int, Field(ge=1, le=100)] = DEFAULT_RESULTS_PER_QUERY
    search_per_headline: Annotated[int, Field(ge=1, le=500)] = (
        DEFAULT_SEARCH_PER_HEADLINE
    )


class RelayConfig(StrictBaseModel):
    """Root configuration for relay.yaml.

    Attributes:
        version: Schema version.
        matcher: Matching engine policy.
        recall: Search stage recall knobs.
        max_workers: Headlines matched concurrently.
        per_source: Maximum headlines collected per source.
    """

    version: Annotated[str, Field(pattern=r"^\d+\.\d+$")] = "1.0"
    matcher: MatcherConfig = Field(default_factory=MatcherConfig)
    recall: RecallConfig = Field(default_factory=RecallConfig)
    max_workers: Annotated[int, Field(ge=1, le=64)] = 4
    per_source: Annotated[int, Field(ge=1, le=1000)] = 30
