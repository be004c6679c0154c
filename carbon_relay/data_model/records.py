"""Headline and candidate records exchanged with collection and search stages."""

from datetime import UTC, datetime
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from carbon_relay.data_model.base import IngestModel


def _coerce_timestamp(value: Any) -> datetime | None:
    """Parse an optional RFC 3339 timestamp.

    Collected items frequently carry no date or a date in a format we do
    not understand. Both cases map to None instead of failing validation.

    Args:
        value: Raw value from upstream JSON or a datetime.

    Returns:
        Timezone-aware datetime, or None when absent/unparseable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


class Headline(IngestModel):
    """A short news item of interest, possibly from a restricted-access outlet.

    Attributes:
        source: Source label (e.g. "Carbon Pulse").
        title: Headline title.
        url: Link to the original item.
        excerpt: Optional preview text.
        published_at: Optional publication time.
    """

    source: str = ""
    title: str = ""
    url: str = ""
    excerpt: str = ""
    published_at: datetime | None = Field(default=None, alias="publishedAt")

    @field_validator("published_at", mode="before")
    @classmethod
    def parse_published_at(cls, value: Any) -> datetime | None:
        return _coerce_timestamp(value)

    @field_validator("source", "title", "url", "excerpt", mode="before")
    @classmethod
    def none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def text(self) -> str:
        """Title and excerpt joined for signal extraction."""
        return f"{self.title} {self.excerpt}".strip()

    def to_json_dict(self) -> dict[str, Any]:
        """Convert to the camelCase record used in output files."""
        data: dict[str, Any] = {
            "source": self.source,
            "title": self.title,
            "url": self.url,
        }
        if self.published_at is not None:
            data["publishedAt"] = self.published_at.isoformat()
        if self.excerpt:
            data["excerpt"] = self.excerpt
        return data


class Candidate(IngestModel):
    """A freely accessible document proposed by the search stage.

    Title and url are allowed to be empty so that malformed search hits
    can be counted and dropped by the matcher instead of failing ingestion.

    Attributes:
        source: Source label (usually the publishing site).
        title: Document title.
        url: Document URL.
        snippet: Optional snippet text returned with the search hit.
        published_at: Optional publication time.
    """

    source: str = ""
    title: str = ""
    url: str = ""
    snippet: str = Field(
        default="", validation_alias=AliasChoices("snippet", "excerpt")
    )
    published_at: datetime | None = Field(default=None, alias="publishedAt")

    @field_validator("published_at", mode="before")
    @classmethod
    def parse_published_at(cls, value: Any) -> datetime | None:
        return _coerce_timestamp(value)

    @field_validator("source", "title", "url", "snippet", mode="before")
    @classmethod
    def none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def is_well_formed(self) -> bool:
        """Whether the candidate has both a title and a url."""
        return bool(self.title.strip()) and bool(self.url.strip())

    @property
    def text(self) -> str:
        """Title and snippet joined for tokenization and signal extraction."""
        return f"{self.title} {self.snippet}".strip()
