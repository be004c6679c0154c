"""Configuration loader with validation."""

import hashlib
import json
import time
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from carbon_relay.config.constants import COMPONENT_CONFIG
from carbon_relay.config.schemas.relay import RelayConfig


logger = structlog.get_logger()


class ConfigValidationError(Exception):
    """Raised when a configuration is rejected.

    Raised before any headline is processed, so a bad threshold or cap
    never yields a partially matched run.
    """

    def __init__(self, errors: list[dict[str, str]], file_path: str) -> None:
        """Initialize the error.

        Args:
            errors: List of validation error details ({loc, msg, type}).
            file_path: Path to the file that failed validation ("<overrides>"
                for command-line overrides).
        """
        self.errors = errors
        self.file_path = file_path
        super().__init__(f"Validation failed for {file_path}: {len(errors)} errors")


def _errors_from_validation(error: ValidationError) -> list[dict[str, str]]:
    return [
        {
            "loc": ".".join(str(loc) for loc in err["loc"]) or "<root>",
            "msg": err["msg"],
            "type": err["type"],
        }
        for err in error.errors()
    ]


class ConfigLoader:
    """Loads and validates relay.yaml.

    A missing path yields the built-in defaults. The loaded configuration
    is immutable; command-line overrides produce a new validated copy.
    """

    def __init__(self, run_id: str) -> None:
        """Initialize the loader.

        Args:
            run_id: Unique identifier for the current run.
        """
        self._run_id = run_id
        self._file_checksums: dict[str, str] = {}
        self._validation_errors: list[dict[str, str]] = []
        self._validation_duration_ms: float = 0
        self._log = logger.bind(run_id=run_id, component=COMPONENT_CONFIG)

    @property
    def file_checksums(self) -> dict[str, str]:
        """Get SHA-256 checksums of loaded files."""
        return self._file_checksums.copy()

    @property
    def validation_errors(self) -> list[dict[str, str]]:
        """Get validation errors if any."""
        return self._validation_errors.copy()

    def load(self, config_path: Path | None = None) -> RelayConfig:
        """Load and validate the relay configuration.

        Args:
            config_path: Path to relay.yaml, or None for defaults.

        Returns:
            Validated RelayConfig.

        Raises:
            ConfigValidationError: If the file is missing, unparseable, or invalid.
        """
        start_time = time.perf_counter()

        if config_path is None:
            self._log.info("config_defaults_used")
            return RelayConfig()

        file_label = str(config_path)
        self._log.info("loading_config_file", file_path=file_label)

        try:
            content_bytes = config_path.read_bytes()
        except FileNotFoundError as e:
            self._record_error("file", str(e), "file_not_found")
            self._log.error("config_file_not_found", file_path=file_label)
            raise ConfigValidationError(self.validation_errors, file_label) from e

        checksum = hashlib.sha256(content_bytes).hexdigest()
        self._file_checksums[str(config_path.resolve())] = checksum

        try:
            data: dict[str, Any] = yaml.safe_load(content_bytes.decode("utf-8")) or {}
        except yaml.YAMLError as e:
            self._record_error("yaml", str(e), "yaml_parse_error")
            self._log.error("config_yaml_parse_error", error=str(e))
            raise ConfigValidationError(self.validation_errors, file_label) from e

        try:
            config = RelayConfig.model_validate(data)
        except ValidationError as e:
            self._validation_errors.extend(_errors_from_validation(e))
            self._log.error(
                "config_validation_failed",
                validation_error_count=len(self._validation_errors),
                errors=self._validation_errors,
            )
            raise ConfigValidationError(self.validation_errors, file_label) from e

        self._validation_duration_ms = (time.perf_counter() - start_time) * 1000
        self._log.info(
            "config_file_loaded",
            file_path=file_label,
            file_sha256=checksum,
            min_score=config.matcher.min_score,
            top_k=config.matcher.top_k,
            strict_market=config.matcher.strict_market,
            config_validation_duration_ms=round(self._validation_duration_ms, 2),
        )
        return config

    def apply_overrides(self, config: RelayConfig, **overrides: Any) -> RelayConfig:
        """Return a copy of config with matcher/runner overrides re-validated.

        Overrides with value None are ignored. Keys ``min_score``, ``top_k``
        and ``strict_market`` go to the matcher section; ``max_workers`` to
        the root.

        Args:
            config: Base configuration.
            **overrides: Override values from the command line.

        Returns:
            New validated RelayConfig.

        Raises:
            ConfigValidationError: If an override is rejected.
        """
        data = config.model_dump()
        applied: dict[str, Any] = {}
        for key, value in overrides.items():
            if value is None:
                continue
            if key in {"min_score", "top_k", "strict_market"}:
                data["matcher"][key] = value
            else:
                data[key] = value
            applied[key] = value

        if not applied:
            return config

        try:
            updated = RelayConfig.model_validate(data)
        except ValidationError as e:
            self._validation_errors.extend(_errors_from_validation(e))
            self._log.error(
                "config_override_rejected",
                overrides=applied,
                errors=self._validation_errors,
            )
            raise ConfigValidationError(self.validation_errors, "<overrides>") from e

        self._log.info("config_overrides_applied", overrides=applied)
        return updated

    def get_validation_summary_json(self) -> str:
        """Get validation summary as JSON string with stable ordering."""
        summary = {
            "run_id": self._run_id,
            "file_checksums": self._file_checksums,
            "validation_error_count": len(self._validation_errors),
            "validation_errors": self._validation_errors,
            "validation_duration_ms": self._validation_duration_ms,
        }
        return json.dumps(summary, sort_keys=True, indent=2)

    def _record_error(self, loc: str, msg: str, error_type: str) -> None:
        self._validation_errors.append({"loc": loc, "msg": msg, "type": error_type})
