"""Pool-local inverse document frequency model."""

import math
from collections.abc import Iterable

import numpy as np
from sklearn.feature_extraction.text import CountVectorizer, TfidfTransformer

from carbon_relay.matcher.tokenizer import unique_tokens


def _passthrough(tokens: list[str]) -> list[str]:
    return tokens


class IdfModel:
    """Smoothed IDF weights over one headline's document pool.

    The pool is the headline (title + excerpt) plus each candidate
    (title + snippet). A model must never be reused for another
    headline's pool.

    idf(term) = log((N + 1) / (df(term) + 1)) + 1

    where N is the number of documents and df the number of documents
    containing the term at least once. Unseen terms use df = 0, so every
    weight is positive.
    """

    def __init__(self, documents: Iterable[str]) -> None:
        """Build the model.

        Args:
            documents: Raw document texts; each is counted once per term.
        """
        tokenized = [unique_tokens(text) for text in documents]
        self._document_count = len(tokenized)
        self._df: dict[str, int] = {}
        self._idf: dict[str, float] = {}
        self._unseen_idf = math.log(self._document_count + 1) + 1.0

        # CountVectorizer rejects a pool without a single token.
        if not any(tokenized):
            return

        vectorizer = CountVectorizer(analyzer=_passthrough, binary=True)
        counts = vectorizer.fit_transform(tokenized)
        transformer = TfidfTransformer(smooth_idf=True).fit(counts)
        frequencies = np.asarray(counts.sum(axis=0)).ravel()
        for term, column in vectorizer.vocabulary_.items():
            self._df[term] = int(frequencies[column])
            self._idf[term] = float(transformer.idf_[column])

    @property
    def document_count(self) -> int:
        """Number of documents in the pool."""
        return self._document_count

    @property
    def vocabulary_size(self) -> int:
        """Number of distinct terms seen in the pool."""
        return len(self._df)

    def document_frequency(self, term: str) -> int:
        """Number of documents that contain term."""
        return self._df.get(term, 0)

    def idf(self, term: str) -> float:
        """Get the smoothed idf weight of a normalized term."""
        return self._idf.get(term, self._unseen_idf)
