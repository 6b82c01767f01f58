"""Pydantic models for sweep configuration files."""

from .sweep import (
    SweepConfig,
    load_sweep_config,
    parse_sweep_config,
)

__all__ = [
    'SweepConfig',
    'load_sweep_config',
    'parse_sweep_config',
]
