"""Configuration settings using Pydantic Settings.

Provides a typed generator layout with environment variable support.

Usage:
    from shardflake.config import GeneratorSettings

    # Load from environment variables (SHARDFLAKE_*; SHARDFLAKE_EPOCH is required)
    settings = GeneratorSettings()
    generator = settings.build_generator()

    # Or override with explicit values
    settings = GeneratorSettings(preset="sharded", epoch=1700000000000)
"""

from __future__ import annotations

from shardflake.core.errors import LayoutError
from shardflake.core.layout import IdConfig, Preset, custom
from shardflake.core.layout import preset as preset_config
from shardflake.generator import Clock, Generator

try:
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for config module. "
        "Install with: pip install shardflake[config]"
    ) from e

CUSTOM_PRESET = "custom"
WIDTH_FIELDS = ("time_bits", "node_bits", "shard_bits", "config_tag")


class GeneratorSettings(BaseSettings):  # type: ignore[misc]
    """Layout configuration for a Generator.

    Attributes:
        preset: Built-in preset name, or "custom" to use the explicit widths.
        epoch: Time zero in milliseconds since the Unix epoch. Required.
        time_bits: Time field width (custom only).
        node_bits: Node field width (custom only).
        shard_bits: Shard field width (custom only, default 0).
        config_tag: Layout tag 0-7 (custom only).

    Environment Variables:
        SHARDFLAKE_PRESET
        SHARDFLAKE_EPOCH
        SHARDFLAKE_TIME_BITS
        SHARDFLAKE_NODE_BITS
        SHARDFLAKE_SHARD_BITS
        SHARDFLAKE_CONFIG_TAG
    """

    model_config = SettingsConfigDict(
        env_prefix="SHARDFLAKE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    preset: str = Preset.SHORT_EPOCH_MAX_NODES.value
    epoch: int
    time_bits: int | None = None
    node_bits: int | None = None
    shard_bits: int | None = None
    config_tag: int | None = None

    def to_config(self) -> IdConfig:
        """Resolve these settings to an IdConfig.

        Raises:
            LayoutError: If the preset is unknown, custom widths are missing,
                widths are set alongside a built-in preset, or the resulting
                layout is invalid.
        """
        if self.preset != CUSTOM_PRESET:
            explicit = [name for name in WIDTH_FIELDS if getattr(self, name) is not None]
            if explicit:
                raise LayoutError(
                    f"Preset {self.preset!r} has fixed widths; "
                    f"unset {', '.join(explicit)} or use preset='custom'"
                )
            return preset_config(self.preset, self.epoch)

        time_bits, node_bits, config_tag = self.time_bits, self.node_bits, self.config_tag
        if time_bits is None or node_bits is None or config_tag is None:
            missing = [
                name
                for name in ("time_bits", "node_bits", "config_tag")
                if getattr(self, name) is None
            ]
            raise LayoutError(f"Custom preset requires: {', '.join(missing)}")
        shard_bits = self.shard_bits if self.shard_bits is not None else 0
        return custom(self.epoch, time_bits, node_bits, shard_bits, config_tag)

    def build_generator(self, clock: Clock | None = None) -> Generator:
        """Create a Generator for these settings."""
        return Generator(self.to_config(), clock=clock)
