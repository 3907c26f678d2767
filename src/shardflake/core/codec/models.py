"""Decoded identifier model."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class DecodedId:
    """Fields recovered from a packed identifier.

    Attributes:
        time: Milliseconds elapsed since the layout's epoch (masked to time_bits).
        node_id: Node that minted the id.
        shard_id: Shard window contents; 0 when the layout has no shard bits.
        sequence: Per-generator sequence value in [0, 1024).
        config_tag: Layout tag found in the low 3 bits. Not checked against
            the decoding layout; callers compare it with the tag they expect.

    Example:
        decoded = generator.decode_id(identifier)
        if decoded.config_tag != generator.config.config_tag:
            ...  # minted under another layout
    """

    time: int
    node_id: int
    shard_id: int
    sequence: int
    config_tag: int

    def timestamp_ms(self, epoch: int) -> int:
        """Absolute mint time in milliseconds since the Unix epoch."""
        return epoch + self.time

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return asdict(self)
