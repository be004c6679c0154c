"""CLI commands for the relay matcher."""

import logging
import sys
import uuid
from dataclasses import dataclass
from pathlib import Path

import click
import structlog

from carbon_relay import __version__
from carbon_relay.collectors import (
    CollectionRunner,
    JsonHeadlineSource,
    JsonPoolSearcher,
    SourceError,
    SourceRegistry,
    load_pools,
)
from carbon_relay.config.constants import COMPONENT_CLI
from carbon_relay.config.error_hints import format_validation_error
from carbon_relay.config.loader import ConfigLoader, ConfigValidationError
from carbon_relay.config.schemas.relay import RelayConfig
from carbon_relay.data_model import Candidate
from carbon_relay.matcher import HeadlineMatcher, MatcherMetrics, MatchRunner
from carbon_relay.observability.logging import bind_run_context, configure_logging
from carbon_relay.renderer import JsonResultRenderer
from carbon_relay.settings import get_settings


logger = structlog.get_logger()


@dataclass
class MatchOptions:
    """Options for the match command."""

    headline_paths: tuple[Path, ...]
    pools_path: Path | None
    config_path: Path | None
    output_path: Path | None
    save_pool_path: Path | None
    min_score: float | None
    top_k: int | None
    strict_market: bool | None
    workers: int | None
    per_source: int | None
    include_drops: bool
    json_logs: bool
    verbose: bool


def _echo_validation_errors(loader: ConfigLoader) -> None:
    click.echo("Configuration validation failed:", err=True)
    for error in loader.validation_errors:
        formatted = format_validation_error(
            location=error["loc"],
            message=error["msg"],
            error_type=error.get("type", "unknown"),
            include_hint=True,
        )
        click.echo(f"  - {formatted}", err=True)


def _build_registry(paths: tuple[Path, ...]) -> tuple[SourceRegistry, list[str]]:
    """Register one JSON headline source per file.

    Keys are file stems, suffixed with a counter when two files share one.

    Args:
        paths: Headline files in command-line order.

    Returns:
        Tuple of (registry, keys in command-line order).
    """
    registry = SourceRegistry()
    keys: list[str] = []
    for path in paths:
        key = path.stem
        suffix = 2
        while key in registry:
            key = f"{path.stem}-{suffix}"
            suffix += 1
        registry.register(key, JsonHeadlineSource(path, source_key=key))
        keys.append(key)
    return registry, keys


def _load_pools(options: MatchOptions) -> dict[str, list[Candidate]]:
    """Load candidate pools from --pools, or inline from the headline files."""
    if options.pools_path is not None:
        return load_pools(options.pools_path)
    pools: dict[str, list[Candidate]] = {}
    for path in options.headline_paths:
        for url, pool in load_pools(path).items():
            pools.setdefault(url, []).extend(pool)
    return pools


def _load_config(
    options: MatchOptions, loader: ConfigLoader, default_path: Path | None
) -> RelayConfig:
    config = loader.load(options.config_path or default_path)
    return loader.apply_overrides(
        config,
        min_score=options.min_score,
        top_k=options.top_k,
        strict_market=options.strict_market,
        max_workers=options.workers,
        per_source=options.per_source,
    )


def _execute_match(options: MatchOptions) -> None:
    """Run collection, matching and rendering for the match command."""
    run_id = str(uuid.uuid4())
    settings = get_settings()
    configure_logging(
        level=logging.DEBUG if options.verbose else logging.INFO,
        json_format=options.json_logs,
    )
    bind_run_context(run_id)
    log = logger.bind(run_id=run_id, component=COMPONENT_CLI, command="match")

    if options.workers is None and settings.max_workers is not None:
        options.workers = settings.max_workers

    loader = ConfigLoader(run_id=run_id)
    try:
        config = _load_config(options, loader, settings.config_path)
    except ConfigValidationError:
        _echo_validation_errors(loader)
        sys.exit(1)

    registry, keys = _build_registry(options.headline_paths)
    collection = CollectionRunner(registry, run_id, config.max_workers).run(
        keys, per_source=config.per_source
    )
    if not collection.headlines:
        log.error("no_headlines_collected", sources_failed=collection.sources_failed)
        click.echo("Error: no headlines collected", err=True)
        sys.exit(1)

    try:
        searcher = JsonPoolSearcher(_load_pools(options))
    except SourceError as e:
        log.error("candidate_pools_unreadable", **e.to_dict())
        click.echo(f"Error: could not read candidate pools: {e.message}", err=True)
        sys.exit(1)

    MatcherMetrics.reset()
    metrics = MatcherMetrics.get_instance()
    runner = MatchRunner(
        matcher=HeadlineMatcher(config.matcher, run_id=run_id),
        searcher=searcher,
        recall=config.recall,
        run_id=run_id,
        max_workers=config.max_workers,
        metrics=metrics,
    )
    run_result = runner.run(collection.headlines)

    renderer = JsonResultRenderer(run_id, include_drops=options.include_drops)
    if options.output_path is not None:
        renderer.write(run_result.results, options.output_path)
    else:
        click.echo(renderer.render(run_result.results), nl=False)

    if options.save_pool_path is not None:
        renderer.write_pool(run_result.pool, options.save_pool_path)

    log.info("match_metrics", **metrics.to_dict())


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Carbon relay: match headlines to freely accessible related documents."""


@cli.command()
@click.option(
    "--headlines",
    "headline_paths",
    required=True,
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a headlines JSON file (repeatable).",
)
@click.option(
    "--pools",
    "pools_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Candidate pools JSON keyed by headline URL. "
    "Defaults to inline 'candidates' in the headline files.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to relay.yaml (default: $RELAY_CONFIG or built-in defaults).",
)
@click.option(
    "--out",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write results here instead of stdout.",
)
@click.option(
    "--save-pool",
    "save_pool_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write the distinct candidate pool to this file.",
)
@click.option("--min-score", type=float, help="Override matcher.min_score.")
@click.option("--top-k", type=int, help="Override matcher.top_k.")
@click.option(
    "--strict-market/--no-strict-market",
    default=None,
    help="Override matcher.strict_market.",
)
@click.option(
    "--workers",
    type=int,
    help="Headlines matched concurrently (default: $RELAY_MAX_WORKERS or config).",
)
@click.option("--per-source", type=int, help="Maximum headlines per file.")
@click.option(
    "--include-drops",
    is_flag=True,
    help="Emit per-headline drop counts in the output.",
)
@click.option(
    "--json-logs/--no-json-logs",
    default=None,
    help="Use JSON format for logs (default: $RELAY_JSON_LOGS or true).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging.",
)
def match(  # noqa: PLR0913
    headline_paths: tuple[Path, ...],
    pools_path: Path | None,
    config_path: Path | None,
    output_path: Path | None,
    save_pool_path: Path | None,
    min_score: float | None,
    top_k: int | None,
    strict_market: bool | None,
    workers: int | None,
    per_source: int | None,
    include_drops: bool,
    json_logs: bool | None,
    verbose: bool,
) -> None:
    """Match headlines against their candidate pools and emit ranked JSON."""
    if json_logs is None:
        json_logs = get_settings().json_logs

    options = MatchOptions(
        headline_paths=headline_paths,
        pools_path=pools_path,
        config_path=config_path,
        output_path=output_path,
        save_pool_path=save_pool_path,
        min_score=min_score,
        top_k=top_k,
        strict_market=strict_market,
        workers=workers,
        per_source=per_source,
        include_drops=include_drops,
        json_logs=json_logs,
        verbose=verbose,
    )
    _execute_match(options)


@cli.command()
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to relay.yaml configuration file.",
)
def validate(config_path: Path) -> None:
    """Validate a configuration file without matching anything."""
    run_id = str(uuid.uuid4())
    configure_logging(json_format=False)
    bind_run_context(run_id)

    loader = ConfigLoader(run_id=run_id)
    try:
        config = loader.load(config_path)
    except ConfigValidationError:
        _echo_validation_errors(loader)
        sys.exit(1)

    matcher_config = config.matcher
    checksum = next(iter(loader.file_checksums.values()), "")
    click.echo("Configuration is valid!")
    click.echo(f"  min_score: {matcher_config.min_score}")
    click.echo(f"  top_k: {matcher_config.top_k}")
    click.echo(f"  strict_market: {str(matcher_config.strict_market).lower()}")
    click.echo(
        f"  Max possible score: {matcher_config.weights.max_possible_score:.2f}"
    )
    click.echo(f"  Quality rules: {len(matcher_config.signals.quality_rules)}")
    click.echo(f"  Checksum: {checksum}")


@cli.command()
@click.option(
    "--headlines",
    "headline_paths",
    required=True,
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a headlines JSON file (repeatable).",
)
def sources(headline_paths: tuple[Path, ...]) -> None:
    """List the source keys a match run would register."""
    configure_logging(level=logging.WARNING, json_format=False)
    registry, keys = _build_registry(headline_paths)
    for key in keys:
        source = registry.get(key)
        result = source.collect(sys.maxsize)
        status = "ok" if result.success else "error"
        click.echo(f"{key}\t{result.items_count}\t{status}")
