"""Domain and document quality boosts."""

from dataclasses import dataclass
from urllib.parse import urlsplit

from carbon_relay.config.schemas.signals import QualityRuleConfig


@dataclass(frozen=True)
class QualityMatch:
    """A quality rule that matched a URL.

    Attributes:
        rule_name: Name of the matched rule.
        boost: Boost contributed by the rule.
    """

    rule_name: str
    boost: float


def _rule_matches(rule: QualityRuleConfig, host: str, path: str) -> bool:
    for suffix in rule.host_suffixes:
        bare = suffix.lower().lstrip(".")
        if host == bare or host.endswith("." + bare):
            return True
    if any(sub.lower() in host for sub in rule.host_substrings):
        return True
    if any(path.endswith(suffix.lower()) for suffix in rule.path_suffixes):
        return True
    return any(sub.lower() in path for sub in rule.path_substrings)


class DomainQualityScorer:
    """Applies an ordered table of URL-pattern rules to candidate URLs.

    Each matching rule adds its boost once. The total is clipped to
    [0, 1].
    """

    def __init__(self, rules: list[QualityRuleConfig]) -> None:
        """Initialize the scorer.

        Args:
            rules: Quality rules in evaluation order.
        """
        self._rules = list(rules)

    @property
    def rule_count(self) -> int:
        """Get number of configured rules."""
        return len(self._rules)

    def match_url(self, url: str) -> list[QualityMatch]:
        """Find every rule matching url.

        Args:
            url: Candidate URL.

        Returns:
            Matches in rule order.
        """
        try:
            parts = urlsplit(url.strip())
            host = (parts.hostname or "").lower()
        except ValueError:
            return []
        path = parts.path.lower()

        return [
            QualityMatch(rule_name=rule.name, boost=rule.boost)
            for rule in self._rules
            if _rule_matches(rule, host, path)
        ]

    def score(self, url: str) -> float:
        """Compute the clipped quality component for url."""
        total = sum(match.boost for match in self.match_url(url))
        return min(max(total, 0.0), 1.0)
