"""Headline sources, candidate searchers and the collection runner."""

from carbon_relay.collectors.base import CandidateSearcher, HeadlineSource, SourceResult
from carbon_relay.collectors.errors import (
    SourceError,
    SourceErrorClass,
    SourceFetchError,
    SourceParseError,
    UnknownSourceError,
)
from carbon_relay.collectors.file_source import (
    JsonHeadlineSource,
    JsonPoolSearcher,
    load_pools,
)
from carbon_relay.collectors.registry import SourceRegistry
from carbon_relay.collectors.runner import CollectionResult, CollectionRunner


__all__ = [
    "CandidateSearcher",
    "CollectionResult",
    "CollectionRunner",
    "HeadlineSource",
    "JsonHeadlineSource",
    "JsonPoolSearcher",
    "SourceError",
    "SourceErrorClass",
    "SourceFetchError",
    "SourceParseError",
    "SourceRegistry",
    "SourceResult",
    "UnknownSourceError",
    "load_pools",
]
