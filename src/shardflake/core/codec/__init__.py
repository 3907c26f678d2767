"""Codec functionality: packing, unpacking, and shard rewriting."""

from shardflake.core.codec.models import DecodedId
from shardflake.core.codec.operations import (
    decode_id,
    encode_decoded,
    encode_id,
    replace_shard,
)

__all__ = [
    # Models
    "DecodedId",
    # Operations
    "encode_id",
    "decode_id",
    "encode_decoded",
    "replace_shard",
]
