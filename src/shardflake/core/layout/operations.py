"""Layout construction: presets, custom widths, and variant resolution."""

from __future__ import annotations

from shardflake.core.errors import LayoutError
from shardflake.core.layout.models import (
    PRESET_WIDTHS,
    CustomPreset,
    IdConfig,
    Preset,
    PresetLike,
)


def preset(name: Preset | str, epoch: int) -> IdConfig:
    """Build the config for a named built-in layout.

    Args:
        name: Preset member or its string value (e.g. "sharded").
        epoch: Time zero in milliseconds since the Unix epoch.

    Returns:
        Immutable IdConfig for that preset.

    Raises:
        LayoutError: If the name is not a known preset.
    """
    if isinstance(name, str):
        try:
            name = Preset(name)
        except ValueError:
            known = ", ".join(p.value for p in Preset)
            raise LayoutError(f"Unknown preset {name!r}, expected one of: {known}") from None
    time_bits, node_bits, shard_bits, config_tag = PRESET_WIDTHS[name]
    return IdConfig(
        epoch=epoch,
        time_bits=time_bits,
        node_bits=node_bits,
        shard_bits=shard_bits,
        config_tag=config_tag,
    )


def custom(
    epoch: int, time_bits: int, node_bits: int, shard_bits: int, config_tag: int
) -> IdConfig:
    """Build a config from explicit widths. ``max_nodes`` is derived as 2**node_bits."""
    return IdConfig(
        epoch=epoch,
        time_bits=time_bits,
        node_bits=node_bits,
        shard_bits=shard_bits,
        config_tag=config_tag,
    )


def resolve_config(spec: PresetLike, epoch: int | None = None) -> IdConfig:
    """Convert any supported layout specification to an IdConfig.

    Handles:
    - IdConfig -> passthrough (epoch argument ignored)
    - CustomPreset -> its own widths and epoch (epoch argument ignored)
    - Preset or preset name -> built-in widths with the given epoch

    Args:
        spec: Layout specification.
        epoch: Epoch used for built-in presets; required for them.

    Returns:
        Resolved IdConfig.

    Raises:
        LayoutError: If the spec is invalid, names an unknown preset, or is a
            built-in preset given without an epoch.
        TypeError: If spec is not a recognized layout specification.
    """
    match spec:
        case IdConfig():
            return spec
        case CustomPreset(epoch=own_epoch, time_bits=t, node_bits=n, shard_bits=s, config_tag=c):
            return custom(own_epoch, t, n, s, c)
        case Preset() | str():
            if epoch is None:
                raise LayoutError(f"Preset {spec!r} needs an explicit epoch")
            return preset(spec, epoch)
    raise TypeError(f"Invalid layout specification: {spec!r}")
