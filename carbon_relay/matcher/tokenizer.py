"""Tokenization shared by the IDF model, lexical scoring and signal extraction."""

import re

from carbon_relay.matcher.constants import (
    MIN_TOKEN_LENGTH,
    STOPWORDS,
    TOKEN_NORMALIZATION,
)


# Runs of ASCII alphanumerics, optionally joined by single hyphens (I-REC, k-ets)
_TOKEN_PATTERN = re.compile(r"[A-Za-z0-9]+(?:-[A-Za-z0-9]+)*")


def normalize_token(token: str) -> str:
    """Lowercase a token and fold known plural/variant spellings."""
    lowered = token.lower()
    return TOKEN_NORMALIZATION.get(lowered, lowered)


def raw_tokens(text: str) -> list[str]:
    """Split text into normalized tokens, keeping stopwords and short tokens.

    Used for signal extraction, where "EU" or "US"-style codes must survive.

    Args:
        text: Input text.

    Returns:
        Normalized tokens in text order.
    """
    return [normalize_token(match) for match in _TOKEN_PATTERN.findall(text)]


def tokenize(text: str) -> list[str]:
    """Split text into informative tokens.

    Order and duplicates are preserved so that title similarity can
    compare token sequences.

    Args:
        text: Input text.

    Returns:
        Normalized tokens without stopwords or tokens shorter than
        MIN_TOKEN_LENGTH.
    """
    return [
        token
        for token in raw_tokens(text)
        if len(token) >= MIN_TOKEN_LENGTH and token not in STOPWORDS
    ]


def unique_tokens(text: str) -> list[str]:
    """Informative tokens of text, deduplicated in first-occurrence order."""
    return list(dict.fromkeys(tokenize(text)))
