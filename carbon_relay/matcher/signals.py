"""Market, topic and geo signal extraction.

Keyword tables are compiled once per extractor. Single-word keywords
match normalized tokens exactly; multi-word keywords match as whole
phrases. Geo detection additionally reads raw regex patterns for
case-sensitive acronyms and the host of a candidate URL.
"""

import re
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from carbon_relay.config.schemas.signals import SignalTablesConfig
from carbon_relay.matcher.models import SignalSet
from carbon_relay.matcher.tokenizer import normalize_token, raw_tokens


def _compile_phrase_pattern(phrase: str) -> re.Pattern[str]:
    """Compile a multi-word keyword into a word-bounded, case-insensitive pattern."""
    return re.compile(rf"\b{re.escape(phrase.strip())}\b", re.IGNORECASE)


@dataclass
class CompiledSignal:
    """A signal code with its pre-processed keywords.

    Attributes:
        code: Canonical signal code.
        tokens: Normalized single-word keywords.
        patterns: Compiled phrase and raw regex patterns.
    """

    code: str
    tokens: frozenset[str] = frozenset()
    patterns: list[re.Pattern[str]] = field(default_factory=list)

    def matches(self, text: str, text_tokens: set[str]) -> bool:
        if not self.tokens.isdisjoint(text_tokens):
            return True
        return any(pattern.search(text) for pattern in self.patterns)


def _compile_table(table: dict[str, list[str]]) -> list[CompiledSignal]:
    compiled: list[CompiledSignal] = []
    for code in sorted(table):
        tokens: set[str] = set()
        patterns: list[re.Pattern[str]] = []
        for keyword in table[code]:
            if " " in keyword.strip():
                patterns.append(_compile_phrase_pattern(keyword))
            else:
                tokens.add(normalize_token(keyword.strip()))
        compiled.append(
            CompiledSignal(code=code, tokens=frozenset(tokens), patterns=patterns)
        )
    return compiled


def _host_matches_suffix(host: str, suffix: str) -> bool:
    """Whether host equals suffix or is a subdomain of it."""
    bare = suffix.lower().lstrip(".")
    return host == bare or host.endswith("." + bare)


def url_host(url: str) -> str:
    """Lowercased host of url, or "" if it has none."""
    try:
        return urlsplit(url.strip()).hostname or ""
    except ValueError:
        return ""


class SignalExtractor:
    """Derives SignalSets from text and URLs using declarative tables."""

    def __init__(self, tables: SignalTablesConfig) -> None:
        """Initialize the extractor.

        Args:
            tables: Keyword tables and domain geo suffixes.
        """
        self._markets = _compile_table(tables.markets)
        self._topics = _compile_table(tables.topics)
        self._geos = _compile_table(tables.geos)
        for compiled in self._geos:
            raw_patterns = tables.geo_patterns.get(compiled.code, [])
            compiled.patterns.extend(re.compile(p) for p in raw_patterns)
        known_geos = {compiled.code for compiled in self._geos}
        for code in sorted(set(tables.geo_patterns) - known_geos):
            self._geos.append(
                CompiledSignal(
                    code=code,
                    patterns=[re.compile(p) for p in tables.geo_patterns[code]],
                )
            )
        self._domain_geos = {
            code: list(suffixes) for code, suffixes in tables.domain_geos.items()
        }

    def extract(self, text: str, url: str | None = None) -> SignalSet:
        """Detect signals in text and, optionally, in a URL host.

        Args:
            text: Title plus excerpt or snippet.
            url: Candidate URL for domain-based geo hints.

        Returns:
            SignalSet; empty when nothing is detected.
        """
        text_tokens = set(raw_tokens(text))
        markets = {c.code for c in self._markets if c.matches(text, text_tokens)}
        topics = {c.code for c in self._topics if c.matches(text, text_tokens)}
        geos = {c.code for c in self._geos if c.matches(text, text_tokens)}
        if url:
            geos |= self.domain_geos(url)
        return SignalSet(
            markets=frozenset(markets),
            topics=frozenset(topics),
            geos=frozenset(geos),
        )

    def domain_geos(self, url: str) -> set[str]:
        """Geo codes implied by government or regional host suffixes.

        Args:
            url: Candidate URL.

        Returns:
            Set of geo codes (possibly empty).
        """
        host = url_host(url)
        if not host:
            return set()
        return {
            code
            for code, suffixes in self._domain_geos.items()
            if any(_host_matches_suffix(host, suffix) for suffix in suffixes)
        }
