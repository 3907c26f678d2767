"""shardflake: time-ordered 64-bit identifiers with node, shard and layout tag.

Usage:
    from shardflake import Preset, new_generator

    generator = new_generator(Preset.SHARDED, epoch=1_700_000_000_000)
    identifier = generator.next_id(node_id=7)

    decoded = generator.decode_id(identifier)
    decoded.node_id     # 7
    decoded.config_tag  # 1

    routed = generator.derive_sharded_id(identifier, shard=3)
    generator.decode_id(routed).shard_id  # 3

Layout (LSB -> MSB):
    config_tag[3] | sequence[10] | shard[shard_bits] | node[node_bits] | time[time_bits]
"""

__version__ = "0.1.0"

# Core primitives
from shardflake.core import (
    DEFAULT_EPOCH,
    ClockBeforeEpochError,
    CustomPreset,
    DecodedId,
    IdConfig,
    LayoutError,
    Preset,
    PresetLike,
    ShardflakeError,
    ShardingUnsupportedError,
    ShardOutOfRangeError,
    custom,
    decode_id,
    encode_decoded,
    encode_id,
    preset,
    replace_shard,
    resolve_config,
)

# Generator
from shardflake.generator import (
    Clock,
    Generator,
    SequenceCounter,
    SystemClock,
    new_generator,
)

__all__ = [
    # Version
    "__version__",
    # Layout
    "DEFAULT_EPOCH",
    "IdConfig",
    "Preset",
    "CustomPreset",
    "PresetLike",
    "preset",
    "custom",
    "resolve_config",
    # Codec
    "DecodedId",
    "encode_id",
    "decode_id",
    "encode_decoded",
    "replace_shard",
    # Generator
    "Generator",
    "new_generator",
    "SequenceCounter",
    "Clock",
    "SystemClock",
    # Errors
    "ShardflakeError",
    "LayoutError",
    "ClockBeforeEpochError",
    "ShardingUnsupportedError",
    "ShardOutOfRangeError",
]
