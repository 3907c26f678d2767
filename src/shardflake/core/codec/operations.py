"""Bit-layout codec: pack fields into a 64-bit id and recover them.

All functions are pure functions of their arguments and the IdConfig.
Each field is masked to its width before packing, so out-of-range inputs are
truncated rather than bleeding into neighbouring fields.
"""

from __future__ import annotations

from shardflake.core.codec.models import DecodedId
from shardflake.core.errors import ShardingUnsupportedError, ShardOutOfRangeError
from shardflake.core.layout import IdConfig


def _mask(bits: int) -> int:
    return (1 << bits) - 1


def encode_id(
    config: IdConfig,
    elapsed: int,
    node_id: int,
    sequence: int,
    shard_id: int = 0,
) -> int:
    """Pack fields into an identifier.

    Args:
        config: Layout to pack with.
        elapsed: Milliseconds since config.epoch; high bits beyond time_bits are dropped.
        node_id: Node id, masked to node_bits.
        sequence: Sequence value, masked to 10 bits.
        shard_id: Shard value, masked to shard_bits (ignored when unsharded).

    Returns:
        Packed unsigned 64-bit identifier.

    Raises:
        ValueError: If elapsed is negative; it has no representation in the time field.
    """
    if elapsed < 0:
        raise ValueError(f"elapsed must be non-negative, got {elapsed}")
    time_part = (elapsed & _mask(config.time_bits)) << config.time_shift
    node_part = (node_id & _mask(config.node_bits)) << config.node_shift
    shard_part = (shard_id & _mask(config.shard_bits)) << config.shard_shift
    seq_part = (sequence & _mask(config.SEQUENCE_BITS)) << config.sequence_shift
    tag_part = config.config_tag & _mask(config.CONFIG_TAG_BITS)
    return time_part | node_part | shard_part | seq_part | tag_part


def decode_id(config: IdConfig, identifier: int) -> DecodedId:
    """Unpack an identifier, lowest field first.

    Decoding with a layout other than the one that minted the id yields
    meaningless fields; compare ``config_tag`` to detect that.
    """
    config_tag = identifier & _mask(config.CONFIG_TAG_BITS)
    sequence = (identifier >> config.sequence_shift) & _mask(config.SEQUENCE_BITS)
    shard_id = (identifier >> config.shard_shift) & _mask(config.shard_bits)
    node_id = (identifier >> config.node_shift) & _mask(config.node_bits)
    time = (identifier >> config.time_shift) & _mask(config.time_bits)
    return DecodedId(
        time=time,
        node_id=node_id,
        shard_id=shard_id,
        sequence=sequence,
        config_tag=config_tag,
    )


def encode_decoded(config: IdConfig, decoded: DecodedId) -> int:
    """Re-pack a DecodedId. Left inverse of ``decode_id`` for ids from this codec."""
    identifier = encode_id(
        config,
        elapsed=decoded.time,
        node_id=decoded.node_id,
        sequence=decoded.sequence,
        shard_id=decoded.shard_id,
    )
    # Tag comes from the decoded value, not the layout.
    tag_mask = _mask(config.CONFIG_TAG_BITS)
    return (identifier & ~tag_mask) | (decoded.config_tag & tag_mask)


def replace_shard(config: IdConfig, identifier: int, shard: int) -> int:
    """Rewrite only the shard window of an identifier.

    Time, node, sequence and tag bits are left untouched. No clock access.

    Args:
        config: Layout the identifier was minted under.
        identifier: Existing identifier.
        shard: New shard value.

    Returns:
        Identifier with the shard window set to ``shard``.

    Raises:
        ShardingUnsupportedError: If the layout has no shard bits.
        ShardOutOfRangeError: If shard is negative or >= 2**shard_bits.
    """
    if not config.sharded:
        raise ShardingUnsupportedError()
    if not 0 <= shard < config.max_shards:
        raise ShardOutOfRangeError(shard, config.max_shards)

    window = _mask(config.shard_bits) << config.shard_shift
    return (identifier & ~window) | (shard << config.shard_shift)
