"""Core functionalities: stateless layout and codec primitives.

Architecture Note:
    core/ contains pure, stateless functions over an immutable IdConfig.
    The stateful generator (clock + sequence counter) lives in generator/.
"""

from shardflake.core.codec import (
    DecodedId,
    decode_id,
    encode_decoded,
    encode_id,
    replace_shard,
)
from shardflake.core.errors import (
    ClockBeforeEpochError,
    LayoutError,
    ShardflakeError,
    ShardingUnsupportedError,
    ShardOutOfRangeError,
)
from shardflake.core.layout import (
    DEFAULT_EPOCH,
    CustomPreset,
    IdConfig,
    Preset,
    PresetLike,
    custom,
    preset,
    resolve_config,
)

__all__ = [
    # Errors
    "ShardflakeError",
    "LayoutError",
    "ClockBeforeEpochError",
    "ShardingUnsupportedError",
    "ShardOutOfRangeError",
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
]
