"""Unit tests for market/topic/geo signal extraction."""

import pytest

from carbon_relay.config.schemas.signals import SignalTablesConfig
from carbon_relay.matcher.signals import SignalExtractor, url_host


def _make_extractor(**tables: dict[str, list[str]]) -> SignalExtractor:
    return SignalExtractor(SignalTablesConfig(**tables))


@pytest.mark.unit
class TestMarketSignals:
    """Tests for market detection."""

    def test_token_keyword(self) -> None:
        """Single-word keywords match normalized tokens."""
        signals = _make_extractor().extract("EUAs rally as gas prices climb")
        assert signals.markets == frozenset({"eua"})

    def test_phrase_keyword(self) -> None:
        """Multi-word keywords match whole phrases, case-insensitively."""
        signals = _make_extractor().extract("UK ETS auction clears lower")
        assert "uka" in signals.markets

    def test_phrase_synonym_maps_to_market(self) -> None:
        """Scheme names expand to their market code."""
        signals = _make_extractor().extract("Safeguard Mechanism baselines tighten")
        assert signals.markets == frozenset({"accu"})

    def test_token_keyword_requires_whole_token(self) -> None:
        """Keywords do not match inside longer words."""
        signals = _make_extractor().extract("Evacuation plans published")
        assert signals.markets == frozenset()

    def test_no_signal_is_empty(self) -> None:
        """Text without keywords yields an empty set."""
        signals = _make_extractor().extract("Quarterly results beat estimates")
        assert signals.is_empty


@pytest.mark.unit
class TestTopicSignals:
    """Tests for topic detection."""

    def test_multiple_topics(self) -> None:
        """Several topics can match one text."""
        signals = _make_extractor().extract(
            "Lawsuit targets forest offsets developer"
        )
        assert {"litigation", "forest_carbon", "offset"} <= signals.topics

    def test_hyphenated_keyword(self) -> None:
        """Hyphenated keywords match hyphenated tokens."""
        signals = _make_extractor().extract("Washington cap-and-trade review")
        assert "ets" in signals.topics


@pytest.mark.unit
class TestGeoSignals:
    """Tests for geo detection."""

    def test_keyword_geo(self) -> None:
        """Country names map to geo codes."""
        signals = _make_extractor().extract("Japanese utilities buy credits")
        assert signals.geos == frozenset({"japan"})

    def test_acronym_is_case_sensitive(self) -> None:
        """Upper-case US is a geo; the pronoun us is not."""
        extractor = _make_extractor()
        assert "united_states" in extractor.extract("US EPA finalizes rule").geos
        assert "united_states" not in extractor.extract("Tell us more").geos

    def test_dotted_acronym(self) -> None:
        """Dotted forms match regardless of case."""
        signals = _make_extractor().extract("The U.K. sets a new target")
        assert "united_kingdom" in signals.geos

    def test_eu_acronym(self) -> None:
        """EU and European Union map to eu."""
        extractor = _make_extractor()
        assert "eu" in extractor.extract("EU agrees 2040 target").geos
        assert "eu" in extractor.extract("the European Union agrees").geos

    def test_domain_geo(self) -> None:
        """Government host suffixes imply a geo without keywords."""
        signals = _make_extractor().extract(
            "Auction results", url="https://www.env.go.jp/press/123.html"
        )
        assert signals.geos == frozenset({"japan"})

    def test_domain_geo_requires_label_boundary(self) -> None:
        """Suffix matching respects domain label boundaries."""
        extractor = _make_extractor()
        assert extractor.domain_geos("https://notgov.example.com/x") == set()
        assert extractor.domain_geos("https://www.epa.gov/ghg") == {"united_states"}
        assert extractor.domain_geos("https://ec.europa.eu/clima") == {"eu"}

    def test_domain_geo_ignores_bad_url(self) -> None:
        """Unparseable or host-less URLs contribute nothing."""
        extractor = _make_extractor()
        assert extractor.domain_geos("not a url") == set()
        assert extractor.domain_geos("") == set()


@pytest.mark.unit
class TestCustomTables:
    """Tests for configuration-supplied tables."""

    def test_custom_market_table(self) -> None:
        """Overriding a table changes detection without code changes."""
        extractor = _make_extractor(markets={"wci": ["wci", "western climate"]})
        signals = extractor.extract("Western Climate Initiative auction")
        assert signals.markets == frozenset({"wci"})

    def test_pattern_only_geo(self) -> None:
        """Geo codes may be defined only through regex patterns."""
        extractor = _make_extractor(geos={}, geo_patterns={"uae": [r"\bUAE\b"]})
        assert extractor.extract("UAE launches registry").geos == frozenset({"uae"})


@pytest.mark.unit
class TestUrlHost:
    """Tests for url_host."""

    def test_lowercases_host(self) -> None:
        """Hosts are lowercased."""
        assert url_host("https://WWW.Example.ORG/path") == "www.example.org"

    def test_missing_host(self) -> None:
        """Relative or empty URLs have no host."""
        assert url_host("/relative/path") == ""
