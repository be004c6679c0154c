"""Error hints for configuration validation errors.

Provides user-friendly hints with actionable remediation steps
for common validation errors in relay.yaml.
"""

from typing import Final


# Mapping of error types to user-friendly hints
ERROR_HINTS: Final[dict[str, str]] = {
    "missing": "This field is required. Please add it to your configuration.",
    "extra_forbidden": "Unknown key. Check the spelling against the documented fields.",
    "int_type": "This field must be an integer (whole number).",
    "int_parsing": "This field must be an integer (whole number).",
    "float_type": "This field must be a number.",
    "float_parsing": "This field must be a number.",
    "string_type": "This field must be a text string.",
    "bool_type": "This field must be true or false.",
    "bool_parsing": "This field must be true or false.",
    "list_type": "This field must be a list/array.",
    "dict_type": "This field must be an object/mapping.",
    "greater_than": "The value is too small. It must be strictly positive.",
    "greater_than_equal": "The value is too small. Check the minimum allowed.",
    "less_than_equal": "The value is too large. Check the maximum allowed.",
    "string_too_short": "The text is too short. Check minimum length requirement.",
    "string_pattern_mismatch": "The format is invalid. Check the expected pattern.",
    "value_error": "Check the value against the documented constraints.",
    "file_not_found": "The file does not exist. Check the file path.",
    "yaml_parse_error": "Invalid YAML syntax. Check for proper indentation and formatting.",
}

# Field-specific hints for more context
FIELD_HINTS: Final[dict[str, str]] = {
    "min_score": "Must be between 0.0 and the sum of the scoring weights (default 0.32).",
    "top_k": "Must be a positive integer, at most 100 (default 3).",
    "strict_market": "Must be true or false.",
    "max_workers": "Must be between 1 and 64.",
    "decay_days": "Must be a positive number of days.",
    "window_days": "Must be 0 (no window) or a positive number of days.",
    "boost": "Must be between 0.0 and 1.0.",
    "version": "Use a 'major.minor' string such as '1.0'.",
}


def get_error_hint(error_type: str, field_name: str | None = None) -> str:
    """Get a user-friendly hint for a validation error.

    Args:
        error_type: The Pydantic error type (e.g., 'missing', 'greater_than').
        field_name: Optional dotted field path for field-specific hints.

    Returns:
        A user-friendly hint string.
    """
    if field_name:
        # 'matcher.weights.overlap' -> 'overlap'
        simple_field = field_name.split(".")[-1]
        if simple_field in FIELD_HINTS:
            return FIELD_HINTS[simple_field]

    return ERROR_HINTS.get(
        error_type, "Check the configuration documentation for valid values."
    )


def format_validation_error(
    location: str,
    message: str,
    error_type: str,
    *,
    include_hint: bool = True,
) -> str:
    """Format a validation error with optional hint.

    Args:
        location: The error location (e.g., 'matcher.top_k').
        message: The original error message.
        error_type: The error type.
        include_hint: Whether to include a hint.

    Returns:
        Formatted error string.
    """
    base = f"{location}: {message}"
    if include_hint:
        hint = get_error_hint(error_type, location)
        return f"{base}\n    Hint: {hint}"
    return base
