"""Unit tests for lexical similarity."""

import pytest

from carbon_relay.matcher.lexical import idf_overlap, title_similarity
from carbon_relay.matcher.tokenizer import tokenize, unique_tokens
from carbon_relay.matcher.vocabulary import IdfModel


_HEADLINE = "Japan GX-ETS auction results published"


def _overlap(candidate_text: str, pool: list[str] | None = None) -> float:
    texts = [_HEADLINE, candidate_text, *(pool or [])]
    model = IdfModel(texts)
    return idf_overlap(
        tokenize(_HEADLINE), unique_tokens(candidate_text), model
    ).score


@pytest.mark.unit
class TestIdfOverlap:
    """Tests for idf_overlap."""

    def test_all_tokens_present_scores_one(self) -> None:
        """A candidate containing every headline token scores 1.0."""
        text = "Results of the Japan GX-ETS auction published today with much detail"
        assert _overlap(text) == pytest.approx(1.0)

    def test_no_shared_tokens_scores_zero(self) -> None:
        """Disjoint text scores 0.0 with no shared tokens."""
        model = IdfModel([_HEADLINE, "forest carbon"])
        result = idf_overlap(tokenize(_HEADLINE), ["forest", "carbon"], model)
        assert result.score == 0.0
        assert result.shared_tokens == 0

    def test_shared_token_count(self) -> None:
        """Shared tokens are counted once each."""
        model = IdfModel([_HEADLINE, "japan auction japan"])
        result = idf_overlap(
            tokenize(_HEADLINE), unique_tokens("japan auction japan"), model
        )
        assert result.shared_tokens == 2

    def test_monotonic_as_tokens_are_added(self) -> None:
        """Adding headline tokens to a candidate never lowers overlap."""
        steps = [
            "japan",
            "japan gx-ets",
            "japan gx-ets auction",
            "japan gx-ets auction results",
            "japan gx-ets auction results published",
        ]
        pool = list(steps)
        model = IdfModel([_HEADLINE, *pool])
        scores = [
            idf_overlap(tokenize(_HEADLINE), unique_tokens(text), model).score
            for text in steps
        ]
        assert scores == sorted(scores)
        assert scores[-1] == pytest.approx(1.0)

    def test_rare_tokens_weigh_more(self) -> None:
        """Sharing a pool-rare token beats sharing a pool-common one."""
        pool = ["auction news", "auction update", "auction data"]
        model = IdfModel([_HEADLINE, *pool])
        common = idf_overlap(tokenize(_HEADLINE), ["auction"], model).score
        rare = idf_overlap(tokenize(_HEADLINE), ["gx-ets"], model).score
        assert rare > common

    def test_degenerate_headline(self) -> None:
        """A headline without informative tokens scores 0.0."""
        model = IdfModel(["", "carbon"])
        result = idf_overlap([], ["carbon"], model)
        assert result.score == 0.0
        assert result.shared_tokens == 0


@pytest.mark.unit
class TestTitleSimilarity:
    """Tests for title_similarity."""

    def test_identical_titles(self) -> None:
        """Identical token sequences score 1.0."""
        tokens = tokenize(_HEADLINE)
        assert title_similarity(tokens, tokens) == pytest.approx(1.0)

    def test_reordering_lowers_similarity(self) -> None:
        """Same words in a different order score below 1.0."""
        a = ["japan", "auction", "results"]
        b = ["results", "auction", "japan"]
        assert title_similarity(a, b) == pytest.approx(2 * 1 / 6)

    def test_lcs_ratio(self) -> None:
        """Similarity is 2 * LCS / (len(a) + len(b))."""
        a = ["climate", "litigation", "marks", "turning", "point", "2025"]
        b = ["global", "trends", "climate", "litigation", "2025", "snapshot"]
        assert title_similarity(a, b) == pytest.approx(0.5)

    def test_empty_titles(self) -> None:
        """Empty inputs score 0.0."""
        assert title_similarity([], ["carbon"]) == 0.0
        assert title_similarity(["carbon"], []) == 0.0
        assert title_similarity([], []) == 0.0
