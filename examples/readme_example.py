import logging

from shardflake import Generator, Preset, ShardOutOfRangeError, SystemClock, new_generator

logging.basicConfig(level=logging.DEBUG)

NODE_ID = 7


def route(generator: Generator, identifier: int, shard: int) -> int | None:
    """Relabel an id for a routing table, skipping shards the layout can't hold."""
    try:
        return generator.derive_sharded_id(identifier, shard)
    except ShardOutOfRangeError as e:
        print(f"Skipping shard {e.shard}: layout holds {e.max_shards} shards")
        return None


if __name__ == "__main__":
    # The sharded time field spans ~49 days, so start the epoch now.
    generator = new_generator(Preset.SHARDED, epoch=SystemClock().now_ms())

    ids = [generator.next_id(NODE_ID) for _ in range(3)]
    for identifier in ids:
        print(identifier, generator.decode_id(identifier).to_dict())

    for shard in (0, 5, 31, 32):
        routed = route(generator, ids[0], shard)
        if routed is not None:
            print(f"shard {shard}: {routed} -> {generator.decode_id(routed)}")
