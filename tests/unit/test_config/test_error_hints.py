"""Unit tests for configuration error hints."""

import pytest

from carbon_relay.config.error_hints import (
    ERROR_HINTS,
    format_validation_error,
    get_error_hint,
)


@pytest.mark.unit
class TestGetErrorHint:
    """Tests for get_error_hint."""

    def test_field_hint_takes_precedence(self) -> None:
        """A known field name wins over the error type."""
        hint = get_error_hint("greater_than", "matcher.top_k")
        assert "positive integer" in hint

    def test_error_type_hint(self) -> None:
        """Unknown fields fall back to the error type hint."""
        assert get_error_hint("missing", "matcher.unknown") == ERROR_HINTS["missing"]

    def test_unknown_type(self) -> None:
        """Unknown types get a generic hint."""
        assert "documentation" in get_error_hint("weird_error")


@pytest.mark.unit
class TestFormatValidationError:
    """Tests for format_validation_error."""

    def test_with_hint(self) -> None:
        """The hint follows on an indented line."""
        formatted = format_validation_error(
            location="matcher.min_score",
            message="Input should be greater than or equal to 0",
            error_type="greater_than_equal",
        )
        first, second = formatted.split("\n")
        assert first == (
            "matcher.min_score: Input should be greater than or equal to 0"
        )
        assert second.startswith("    Hint: Must be between 0.0")

    def test_without_hint(self) -> None:
        """include_hint=False returns only location and message."""
        formatted = format_validation_error(
            location="yaml",
            message="bad indent",
            error_type="yaml_parse_error",
            include_hint=False,
        )
        assert formatted == "yaml: bad indent"
