"""JSON renderer for match results."""

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import structlog

from carbon_relay.data_model import Candidate
from carbon_relay.matcher.models import MatchResult
from carbon_relay.renderer.io import AtomicWriter, GeneratedFile


logger = structlog.get_logger()


def _dumps(payload: Any) -> str:
    return json.dumps(payload, sort_keys=True, indent=2, ensure_ascii=False) + "\n"


class JsonResultRenderer:
    """Renders match results as deterministic JSON.

    Output is a list of headline records, each with an ordered
    ``relatedCandidates`` list. Identical results always render to
    identical bytes.
    """

    def __init__(self, run_id: str, include_drops: bool = False) -> None:
        """Initialize the renderer.

        Args:
            run_id: Unique run identifier.
            include_drops: Emit per-headline drop counts alongside results.
        """
        self._include_drops = include_drops
        self._log = logger.bind(run_id=run_id, component="renderer")
        self._writer = AtomicWriter(run_id)

    def render(self, results: Sequence[MatchResult]) -> str:
        """Serialize results to a JSON string.

        Args:
            results: Match results in headline order.

        Returns:
            JSON text ending with a newline.
        """
        payload = [r.to_json_dict(include_drops=self._include_drops) for r in results]
        return _dumps(payload)

    def write(self, results: Sequence[MatchResult], path: Path) -> GeneratedFile:
        """Render results and write them atomically to path."""
        generated = self._writer.write(path, self.render(results))
        self._log.info(
            "results_written",
            path=generated.path,
            headlines=len(results),
            sha256=generated.sha256[:12],
        )
        return generated

    def write_pool(self, pool: Sequence[Candidate], path: Path) -> GeneratedFile:
        """Write the distinct candidate pool gathered during a run.

        Args:
            pool: Distinct candidates in first-occurrence order.
            path: Target file path.

        Returns:
            GeneratedFile for the pool file.
        """
        payload = [
            candidate.model_dump(mode="json", by_alias=True, exclude_defaults=True)
            for candidate in pool
        ]
        generated = self._writer.write(path, _dumps(payload))
        self._log.info("pool_written", path=generated.path, candidates=len(pool))
        return generated
