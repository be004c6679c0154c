"""JSON file-backed headline source and candidate searcher.

Headline files hold a list of headline records (or an object with a
``headlines`` list). Pool files hold an object mapping headline URL to
a list of candidate records; alternatively each headline record may
carry its own ``candidates`` list.
"""

import json
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from carbon_relay.collectors.base import SourceResult
from carbon_relay.collectors.errors import SourceFetchError, SourceParseError
from carbon_relay.config.constants import COMPONENT_COLLECTORS
from carbon_relay.config.schemas.relay import RecallConfig
from carbon_relay.data_model import Candidate, Headline


logger = structlog.get_logger()


def _read_json(path: Path, source_key: str | None) -> Any:
    """Read and decode a JSON file.

    Raises:
        SourceFetchError: If the file cannot be read.
        SourceParseError: If the content is not valid JSON.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SourceFetchError(str(e), source_key=source_key, path=str(path)) from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise SourceParseError(
            e.msg, source_key=source_key, line=e.lineno, column=e.colno
        ) from e


def _headline_records(data: Any, source_key: str | None) -> list[Any]:
    if isinstance(data, dict):
        data = data.get("headlines")
    if not isinstance(data, list):
        msg = "Expected a list of headline records"
        raise SourceParseError(msg, source_key=source_key)
    return data


class JsonHeadlineSource:
    """Reads previously collected headlines from a JSON file."""

    def __init__(self, path: Path, source_key: str = "file") -> None:
        """Initialize the source.

        Args:
            path: Path to the headlines JSON file.
            source_key: Registry key, used in errors and logs.
        """
        self._path = path
        self._source_key = source_key
        self._log = logger.bind(component=COMPONENT_COLLECTORS, source_key=source_key)

    @property
    def path(self) -> Path:
        """Get the headlines file path."""
        return self._path

    def collect(self, max_items: int) -> SourceResult:
        """Read up to max_items headlines.

        Records that are not objects or fail validation are skipped and
        reported as parse warnings.

        Args:
            max_items: Maximum number of headlines to return.

        Returns:
            SourceResult with headlines, or an error for unreadable files.
        """
        try:
            records = _headline_records(
                _read_json(self._path, self._source_key), self._source_key
            )
        except (SourceFetchError, SourceParseError) as e:
            self._log.warning("headline_file_unreadable", **e.to_dict())
            return SourceResult(items=[], error=e)

        items: list[Headline] = []
        warnings: list[str] = []
        for index, record in enumerate(records):
            if len(items) >= max_items:
                break
            if not isinstance(record, dict):
                warnings.append(f"record {index}: not an object")
                continue
            try:
                items.append(Headline.model_validate(record))
            except ValidationError as e:
                warnings.append(f"record {index}: {e.error_count()} validation errors")

        if warnings:
            self._log.info("headline_records_skipped", count=len(warnings))
        return SourceResult(items=items, parse_warnings=warnings)


def load_pools(path: Path) -> dict[str, list[Candidate]]:
    """Load candidate pools keyed by headline URL.

    Accepts either an object mapping headline URL to candidate records or
    a list of headline records carrying inline ``candidates``. Candidate
    records that are not objects are ignored and records failing validation
    are skipped and logged with a count; records missing a title or url
    are kept so the matcher can count them.

    Args:
        path: Path to the pools or headlines JSON file.

    Returns:
        Mapping of headline URL to candidate pool.

    Raises:
        SourceFetchError: If the file cannot be read.
        SourceParseError: If the file has an unexpected shape.
    """
    data = _read_json(path, None)

    if isinstance(data, dict) and "headlines" not in data:
        entries = list(data.items())
    else:
        entries = [
            (record.get("url", ""), record.get("candidates") or [])
            for record in _headline_records(data, None)
            if isinstance(record, dict)
        ]

    pools: dict[str, list[Candidate]] = {}
    warnings: list[str] = []
    for headline_url, records in entries:
        if not isinstance(records, list):
            msg = f"Pool for '{headline_url}' must be a list"
            raise SourceParseError(msg)
        pool = pools.setdefault(str(headline_url), [])
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                continue
            try:
                pool.append(Candidate.model_validate(record))
            except ValidationError as e:
                warnings.append(
                    f"{headline_url} record {index}: "
                    f"{e.error_count()} validation errors"
                )

    if warnings:
        logger.info(
            "candidate_records_skipped",
            component=COMPONENT_COLLECTORS,
            path=str(path),
            count=len(warnings),
            records=warnings,
        )
    return pools


class JsonPoolSearcher:
    """Serves pre-gathered candidate pools as the search stage.

    A search with ``queries_per_headline`` of 0 is disabled and returns
    an empty pool. Pools are capped at ``search_per_headline``.
    """

    def __init__(self, pools: dict[str, list[Candidate]]) -> None:
        """Initialize the searcher.

        Args:
            pools: Mapping of headline URL to candidate pool.
        """
        self._pools = pools

    @classmethod
    def from_file(cls, path: Path) -> "JsonPoolSearcher":
        """Create a searcher from a pools or headlines file."""
        return cls(load_pools(path))

    @property
    def pool_count(self) -> int:
        """Get number of headline pools."""
        return len(self._pools)

    def search(self, headline: Headline, recall: RecallConfig) -> list[Candidate]:
        """Return the stored pool for headline.

        Args:
            headline: Headline to search for.
            recall: Recall knobs.

        Returns:
            Copy of the stored pool, capped at search_per_headline.
        """
        if recall.queries_per_headline == 0:
            return []
        pool = self._pools.get(headline.url, [])
        return list(pool[: recall.search_per_headline])
