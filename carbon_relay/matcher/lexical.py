"""Lexical similarity between a headline and a candidate."""

from collections.abc import Sequence
from dataclasses import dataclass

from rapidfuzz.distance import Indel

from carbon_relay.matcher.vocabulary import IdfModel


@dataclass(frozen=True)
class LexicalOverlap:
    """Result of an idf-weighted overlap computation.

    Attributes:
        score: Shared idf weight over the headline's total idf weight, in [0, 1].
        shared_tokens: Number of distinct headline title tokens found in the candidate.
    """

    score: float
    shared_tokens: int


def idf_overlap(
    headline_tokens: Sequence[str],
    candidate_tokens: Sequence[str],
    model: IdfModel,
) -> LexicalOverlap:
    """Compute idf-weighted token overlap.

    A candidate containing every headline token scores 1.0 regardless of
    how much additional text it carries.

    Args:
        headline_tokens: Headline title tokens.
        candidate_tokens: Candidate title and snippet tokens.
        model: IDF model of the headline's pool.

    Returns:
        LexicalOverlap; 0.0 with no shared tokens when the headline has
        no informative tokens.
    """
    distinct = list(dict.fromkeys(headline_tokens))
    if not distinct:
        return LexicalOverlap(score=0.0, shared_tokens=0)

    available = set(candidate_tokens)
    total = 0.0
    shared_weight = 0.0
    shared = 0
    for token in distinct:
        weight = model.idf(token)
        total += weight
        if token in available:
            shared_weight += weight
            shared += 1

    if total <= 0.0:
        return LexicalOverlap(score=0.0, shared_tokens=shared)

    score = min(max(shared_weight / total, 0.0), 1.0)
    return LexicalOverlap(score=score, shared_tokens=shared)


def title_similarity(a: Sequence[str], b: Sequence[str]) -> float:
    """Token-order-sensitive similarity of two titles.

    Computed as 2 * LCS / (len(a) + len(b)) over title tokens, so two
    titles with the same words in the same order score 1.0 and reordered
    phrasing scores lower.

    Args:
        a: First title's tokens.
        b: Second title's tokens.

    Returns:
        Similarity in [0, 1]; 0.0 when either title has no tokens.
    """
    if not a or not b:
        return 0.0
    return Indel.normalized_similarity(list(a), list(b))
