"""Publication-time proximity scoring."""

import math
from datetime import datetime

from carbon_relay.config.schemas.matcher import RecencyConfig


_SECONDS_PER_DAY = 24 * 60 * 60


def recency_score(
    headline_time: datetime | None,
    candidate_time: datetime | None,
    config: RecencyConfig,
) -> float:
    """Score how close a candidate was published to its headline.

    Uses exponential decay: e^(-days_apart / decay_days). Same-instant
    publication scores 1.0.

    Args:
        headline_time: Headline publication time, if known.
        candidate_time: Candidate publication time, if known.
        config: Decay settings.

    Returns:
        Recency in [0, 1]. 0.0 when either time is missing or the gap
        exceeds the configured window.
    """
    if headline_time is None or candidate_time is None:
        return 0.0

    gap = abs((headline_time - candidate_time).total_seconds())
    days_apart = gap / _SECONDS_PER_DAY
    if config.window_days > 0 and days_apart > config.window_days:
        return 0.0

    return math.exp(-days_apart / config.decay_days)
