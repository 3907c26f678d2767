"""Error taxonomy for identifier generation and decoding.

Every failure is local and synchronous: it surfaces to the immediate caller
and nothing is retried internally.
"""

from __future__ import annotations


class ShardflakeError(Exception):
    """Base class for all shardflake errors."""

    pass


class LayoutError(ShardflakeError, ValueError):
    """Raised when a bit layout cannot be built (bad widths, tag, epoch or preset name)."""

    pass


class ClockBeforeEpochError(ShardflakeError):
    """Raised when the wall clock reads earlier than the configured epoch.

    A negative elapsed time has no representation in the unsigned time field,
    so the mint is aborted instead of clamped.

    Attributes:
        now_ms: Wall-clock reading in milliseconds since the Unix epoch.
        epoch: Configured epoch in milliseconds since the Unix epoch.
    """

    def __init__(self, now_ms: int, epoch: int):
        self.now_ms = now_ms
        self.epoch = epoch
        super().__init__(f"clock before epoch: now={now_ms}ms, epoch={epoch}ms")


class ShardingUnsupportedError(ShardflakeError):
    """Raised when deriving a sharded id under a layout with no shard bits."""

    def __init__(self) -> None:
        super().__init__("sharding unsupported: layout has shard_bits=0")


class ShardOutOfRangeError(ShardflakeError, ValueError):
    """Raised when a shard number does not fit in the layout's shard window.

    Attributes:
        shard: Requested shard number.
        max_shards: Number of representable shards (2**shard_bits).
    """

    def __init__(self, shard: int, max_shards: int):
        self.shard = shard
        self.max_shards = max_shards
        super().__init__(f"shard out of range: {shard} not in [0, {max_shards})")
