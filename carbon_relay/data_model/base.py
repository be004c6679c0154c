"""Shared Pydantic base models."""

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """Base model with strict, immutable defaults.

    Used for configuration schemas where unknown keys are a mistake.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")


class IngestModel(BaseModel):
    """Immutable base model for records produced by external collaborators.

    Upstream JSON carries fields we do not consume (e.g. ``isHeadline``,
    ``searchQueries``), so extra keys are ignored rather than rejected.
    Fields may be populated by their Python name or their JSON alias.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)
