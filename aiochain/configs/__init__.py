"""Configs for aiochain."""

from aiochain.configs.observability import ObservabilityConfig

__all__ = ["ObservabilityConfig"]
