"""Bit layout models: the immutable configuration and its preset variants.

Usage:
    config = IdConfig(epoch=DEFAULT_EPOCH, time_bits=37, node_bits=14, shard_bits=0, config_tag=3)
    config.max_nodes  # 16384

    Preset.SHARDED                  # built-in variant
    CustomPreset(epoch, 36, 13, 2, 1)  # explicit widths

Layout (LSB -> MSB):
    config_tag[3] | sequence[10] | shard[shard_bits] | node[node_bits] | time[time_bits]
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, TypeAlias

from shardflake.core.errors import LayoutError

DEFAULT_EPOCH = 1609459200000
"""2021-01-01T00:00:00Z in milliseconds since the Unix epoch.

Reference value only; no factory applies it implicitly. Pick an epoch recent
enough that now - epoch fits in the layout's time field.
"""


@dataclass(frozen=True, slots=True)
class IdConfig:
    """Immutable set of field widths and the tag stamped into every id.

    Widths are validated at construction so a misconfigured layout fails once,
    up front, instead of silently truncating the time field on every mint.

    Attributes:
        epoch: Time zero in milliseconds since the Unix epoch.
        time_bits: Width of the elapsed-time field.
        node_bits: Width of the node id field.
        shard_bits: Width of the shard field (0 disables sharding).
        config_tag: Layout tag in [0, 8).

    Raises:
        LayoutError: If any width is negative, the total exceeds 64 bits,
            the tag does not fit in 3 bits, or the epoch is negative.
    """

    SEQUENCE_BITS: ClassVar[int] = 10
    CONFIG_TAG_BITS: ClassVar[int] = 3
    ID_BITS: ClassVar[int] = 64

    epoch: int
    time_bits: int
    node_bits: int
    shard_bits: int
    config_tag: int

    def __post_init__(self) -> None:
        for name in ("time_bits", "node_bits", "shard_bits"):
            if getattr(self, name) < 0:
                raise LayoutError(f"{name} must be non-negative, got {getattr(self, name)}")
        if self.epoch < 0:
            raise LayoutError(f"epoch must be non-negative, got {self.epoch}")
        if not 0 <= self.config_tag < 1 << self.CONFIG_TAG_BITS:
            raise LayoutError(
                f"config_tag must fit in {self.CONFIG_TAG_BITS} bits, got {self.config_tag}"
            )
        if self.total_bits > self.ID_BITS:
            raise LayoutError(
                f"Layout needs {self.total_bits} bits, exceeds {self.ID_BITS}: "
                f"time={self.time_bits} node={self.node_bits} shard={self.shard_bits} "
                f"sequence={self.SEQUENCE_BITS} tag={self.CONFIG_TAG_BITS}"
            )

    @property
    def total_bits(self) -> int:
        return (
            self.time_bits
            + self.node_bits
            + self.shard_bits
            + self.SEQUENCE_BITS
            + self.CONFIG_TAG_BITS
        )

    @property
    def max_nodes(self) -> int:
        """Number of distinct node ids (informational, enforced only by masking)."""
        return 1 << self.node_bits

    @property
    def max_shards(self) -> int:
        """Number of distinct shard values; 1 when sharding is disabled."""
        return 1 << self.shard_bits

    @property
    def sharded(self) -> bool:
        return self.shard_bits > 0

    @property
    def sequence_shift(self) -> int:
        return self.CONFIG_TAG_BITS

    @property
    def shard_shift(self) -> int:
        return self.CONFIG_TAG_BITS + self.SEQUENCE_BITS

    @property
    def node_shift(self) -> int:
        return self.shard_shift + self.shard_bits

    @property
    def time_shift(self) -> int:
        return self.node_shift + self.node_bits

    @property
    def max_elapsed_ms(self) -> int:
        """Largest elapsed time the time field holds before wrapping."""
        return (1 << self.time_bits) - 1

    @property
    def rollover_at_ms(self) -> int:
        """Unix-ms wall-clock time at which the time field wraps back to zero."""
        return self.epoch + (1 << self.time_bits)

    def describe(self) -> str:
        """One-line layout summary for logs."""
        return (
            f"tag={self.config_tag} time={self.time_bits} node={self.node_bits} "
            f"shard={self.shard_bits} seq={self.SEQUENCE_BITS} epoch={self.epoch}"
        )


class Preset(Enum):
    """Built-in layouts. Values are the names accepted by ``preset()``."""

    SHORT_EPOCH_MAX_NODES = "short-epoch-max-nodes"
    """37 time bits, 14 node bits, no shard, tag 3."""

    SHARDED = "sharded"
    """32 time bits, 14 node bits, 5 shard bits (32 shards), tag 1."""


@dataclass(frozen=True, slots=True)
class CustomPreset:
    """Explicit-width variant of the preset type.

    Carries its own epoch, which takes precedence over any epoch passed
    alongside it when resolving.
    """

    epoch: int
    time_bits: int
    node_bits: int
    shard_bits: int
    config_tag: int


# (time_bits, node_bits, shard_bits, config_tag)
PRESET_WIDTHS: dict[Preset, tuple[int, int, int, int]] = {
    Preset.SHORT_EPOCH_MAX_NODES: (37, 14, 0, 3),
    Preset.SHARDED: (32, 14, 5, 1),
}

PresetLike: TypeAlias = Preset | str | CustomPreset | IdConfig
"""Anything ``resolve_config`` accepts: a preset, its name, explicit widths, or a ready config."""
