"""Layout functionality: field widths, presets, and their resolution."""

from shardflake.core.layout.models import (
    DEFAULT_EPOCH,
    PRESET_WIDTHS,
    CustomPreset,
    IdConfig,
    Preset,
    PresetLike,
)
from shardflake.core.layout.operations import custom, preset, resolve_config

__all__ = [
    # Models
    "DEFAULT_EPOCH",
    "PRESET_WIDTHS",
    "IdConfig",
    "Preset",
    "CustomPreset",
    "PresetLike",
    # Operations
    "preset",
    "custom",
    "resolve_config",
]
