"""Interfaces for headline collection and candidate search."""

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from carbon_relay.collectors.errors import SourceError
from carbon_relay.config.schemas.relay import RecallConfig
from carbon_relay.data_model import Candidate, Headline


@dataclass(frozen=True)
class SourceResult:
    """Result of collecting from one source.

    Attributes:
        items: Collected headlines.
        error: Error that stopped collection, if any.
        parse_warnings: Records skipped because they could not be parsed.
    """

    items: list[Headline]
    error: SourceError | None = None
    parse_warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Check if collection succeeded."""
        return self.error is None

    @property
    def items_count(self) -> int:
        """Get number of items collected."""
        return len(self.items)


@runtime_checkable
class HeadlineSource(Protocol):
    """Protocol for headline sources.

    A source never raises for content problems; it reports them through
    SourceResult.error so that one failing source cannot block others.
    """

    def collect(self, max_items: int) -> SourceResult:
        """Collect up to max_items headlines.

        Args:
            max_items: Maximum number of headlines to return.

        Returns:
            SourceResult with items or an error.
        """
        ...


@runtime_checkable
class CandidateSearcher(Protocol):
    """Protocol for the candidate search stage.

    Implementations return one independent pool per headline. The matcher
    performs its own malformed-entry and duplicate handling, so searchers
    may return raw hits.
    """

    def search(self, headline: Headline, recall: RecallConfig) -> list[Candidate]:
        """Find candidates possibly related to headline.

        Args:
            headline: Headline to search for.
            recall: Recall knobs bounding the search.

        Returns:
            Candidate pool for this headline (possibly empty).
        """
        ...
