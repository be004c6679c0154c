"""Configuration loading and validation module."""

from carbon_relay.config.loader import ConfigLoader, ConfigValidationError


__all__ = [
    "ConfigLoader",
    "ConfigValidationError",
]
