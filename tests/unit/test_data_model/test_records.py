"""Unit tests for Headline and Candidate records."""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from carbon_relay.data_model import Candidate, Headline


@pytest.mark.unit
class TestTimestampParsing:
    """Tests for publishedAt parsing."""

    def test_zulu_suffix(self) -> None:
        """RFC 3339 'Z' timestamps parse to UTC."""
        headline = Headline.model_validate(
            {"title": "t", "url": "u", "publishedAt": "2025-06-13T09:00:00Z"}
        )
        assert headline.published_at == datetime(2025, 6, 13, 9, tzinfo=UTC)

    def test_offset_preserved(self) -> None:
        """Explicit offsets are kept."""
        candidate = Candidate.model_validate(
            {"publishedAt": "2025-06-13T18:00:00+09:00"}
        )
        assert candidate.published_at is not None
        assert candidate.published_at.utcoffset() == timedelta(hours=9)
        assert candidate.published_at == datetime(2025, 6, 13, 9, tzinfo=UTC)

    def test_naive_assumed_utc(self) -> None:
        """Naive timestamps are treated as UTC."""
        headline = Headline.model_validate({"publishedAt": "2025-06-13T09:00:00"})
        assert headline.published_at is not None
        assert headline.published_at.tzinfo is UTC

    @pytest.mark.parametrize("value", ["", "   ", "yesterday", "13/06/2025", 42, None])
    def test_unusable_values_become_none(self, value: object) -> None:
        """Missing or unparseable timestamps map to None."""
        candidate = Candidate.model_validate({"publishedAt": value})
        assert candidate.published_at is None

    def test_datetime_instance(self) -> None:
        """datetime values are accepted by field name."""
        when = datetime(2025, 1, 1, tzinfo=timezone(timedelta(hours=-5)))
        assert Candidate(published_at=when).published_at == when


@pytest.mark.unit
class TestHeadline:
    """Tests for Headline."""

    def test_extra_keys_ignored(self) -> None:
        """Upstream keys such as isHeadline are ignored."""
        headline = Headline.model_validate(
            {"title": "Title", "url": "https://x", "isHeadline": True}
        )
        assert headline.title == "Title"

    def test_null_strings_become_empty(self) -> None:
        """null text fields are treated as empty strings."""
        headline = Headline.model_validate({"title": None, "excerpt": None})
        assert headline.title == ""
        assert headline.excerpt == ""

    def test_text_joins_title_and_excerpt(self) -> None:
        """text is title plus excerpt."""
        headline = Headline(title="EU ETS", excerpt="Prices rally")
        assert headline.text == "EU ETS Prices rally"
        assert Headline(title="EU ETS").text == "EU ETS"

    def test_to_json_dict_optional_fields(self) -> None:
        """publishedAt and excerpt appear only when present."""
        bare = Headline(source="S", title="T", url="U")
        assert bare.to_json_dict() == {"source": "S", "title": "T", "url": "U"}

        full = Headline(
            source="S",
            title="T",
            url="U",
            excerpt="E",
            published_at=datetime(2025, 6, 13, 9, tzinfo=UTC),
        )
        assert full.to_json_dict() == {
            "source": "S",
            "title": "T",
            "url": "U",
            "publishedAt": "2025-06-13T09:00:00+00:00",
            "excerpt": "E",
        }

    def test_frozen(self) -> None:
        """Records are immutable."""
        headline = Headline(title="T")
        with pytest.raises(ValidationError):
            headline.title = "changed"  # type: ignore[misc]


@pytest.mark.unit
class TestCandidate:
    """Tests for Candidate."""

    def test_excerpt_alias_for_snippet(self) -> None:
        """Candidates serialized with 'excerpt' load it as the snippet."""
        candidate = Candidate.model_validate(
            {"title": "T", "url": "U", "excerpt": "preview"}
        )
        assert candidate.snippet == "preview"

    def test_snippet_key(self) -> None:
        """The 'snippet' key is read directly."""
        candidate = Candidate.model_validate({"snippet": "hit text"})
        assert candidate.snippet == "hit text"

    @pytest.mark.parametrize(
        ("title", "url", "expected"),
        [
            ("Title", "https://x", True),
            ("", "https://x", False),
            ("Title", "", False),
            ("   ", "https://x", False),
        ],
    )
    def test_is_well_formed(self, title: str, url: str, expected: bool) -> None:
        """Both title and url must be non-blank."""
        assert Candidate(title=title, url=url).is_well_formed is expected

    def test_missing_fields_allowed(self) -> None:
        """Malformed search hits still construct."""
        candidate = Candidate.model_validate({})
        assert candidate.title == ""
        assert not candidate.is_well_formed
