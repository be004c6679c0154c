"""Output rendering for match results."""

from carbon_relay.renderer.io import AtomicWriter, GeneratedFile
from carbon_relay.renderer.json_renderer import JsonResultRenderer


__all__ = ["AtomicWriter", "GeneratedFile", "JsonResultRenderer"]
