"""Shared data models."""

from carbon_relay.data_model.base import IngestModel, StrictBaseModel
from carbon_relay.data_model.records import Candidate, Headline


__all__ = [
    "Candidate",
    "Headline",
    "IngestModel",
    "StrictBaseModel",
]
