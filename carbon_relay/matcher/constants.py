"""Tokenization constants for the matcher module."""

from typing import Final


# Tokens shorter than this are discarded
MIN_TOKEN_LENGTH: Final[int] = 2

# Common words that carry no matching signal
STOPWORDS: Final[frozenset[str]] = frozenset(
    {
        # articles
        "the",
        "a",
        "an",
        # prepositions
        "to",
        "of",
        "in",
        "on",
        "for",
        "with",
        "by",
        "at",
        "from",
        "into",
        "over",
        "under",
        "out",
        "up",
        "down",
        "after",
        "before",
        "amid",
        # conjunctions
        "and",
        "or",
        "as",
        # auxiliaries
        "is",
        "are",
        "be",
        "its",
        "it",
        # generic headline filler
        "new",
        "fresh",
        "year",
        "yr",
    }
)

# Plural / variant spellings folded into one canonical token
TOKEN_NORMALIZATION: Final[dict[str, str]] = {
    "euas": "eua",
    "ukas": "uka",
    "ccas": "cca",
    "accus": "accu",
    "nzus": "nzu",
    "kaus": "kau",
    "i-rec": "irec",
    "i-recs": "irec",
    "irecs": "irec",
    "ccers": "ccer",
    "credits": "credit",
    "offsets": "offset",
    "forests": "forest",
    "lawsuits": "lawsuit",
    "removals": "removal",
}

# Reason string component order
REASON_FIELDS: Final[tuple[str, ...]] = (
    "overlap",
    "titleSim",
    "recency",
    "market",
    "topic",
    "geo",
    "quality",
)
