"""Tests for the identifier generator.

Critical Invariants:
- Ids from one node sort by mint order while the sequence has not wrapped
- decode_id recovers node and layout tag for every preset
- A clock before the epoch aborts the mint without consuming a sequence value
- derive_sharded_id relabels the shard and nothing else
"""

import logging
import threading
import time

import pytest

from shardflake import (
    DEFAULT_EPOCH,
    ClockBeforeEpochError,
    CustomPreset,
    Generator,
    LayoutError,
    Preset,
    SequenceCounter,
    ShardingUnsupportedError,
    ShardOutOfRangeError,
    encode_decoded,
    new_generator,
    preset,
)


@pytest.mark.parametrize("name", list(Preset), ids=lambda p: p.value)
def test_decode_recovers_node_and_tag(name, clock) -> None:
    """For every preset, decode(next_id(node)) returns the node and the layout tag."""
    generator = new_generator(name, DEFAULT_EPOCH, clock=clock)

    decoded = generator.decode_id(generator.next_id(42))

    assert decoded.node_id == 42
    assert decoded.config_tag == generator.config.config_tag
    assert decoded.shard_id == 0
    assert decoded.time == clock.now - generator.config.epoch


def test_ids_strictly_increase_on_wall_clock() -> None:
    """CRITICAL: 100 consecutive mints from one node strictly increase.

    Why: Callers rely on numeric order matching mint order.
    """
    recent_epoch = time.time_ns() // 1_000_000 - 60_000
    generator = new_generator(Preset.SHORT_EPOCH_MAX_NODES, epoch=recent_epoch)

    ids = [generator.next_id(1) for _ in range(100)]

    assert all(a < b for a, b in zip(ids, ids[1:]))


def test_ids_increase_within_one_millisecond(short_generator) -> None:
    """Same millisecond: the sequence alone keeps ids ordered."""
    ids = [short_generator.next_id(1) for _ in range(1024)]

    assert all(a < b for a, b in zip(ids, ids[1:]))


def test_later_millisecond_sorts_after(short_generator, clock) -> None:
    first = short_generator.next_id(1)
    clock.advance()
    second = short_generator.next_id(1)

    assert second > first
    assert short_generator.decode_id(second).time == short_generator.decode_id(first).time + 1


def test_decoded_time_not_after_now() -> None:
    epoch = time.time_ns() // 1_000_000 - 60_000
    generator = new_generator(Preset.SHORT_EPOCH_MAX_NODES, epoch)

    decoded = generator.decode_id(generator.next_id(1))

    assert 60_000 <= decoded.time <= time.time_ns() // 1_000_000 - epoch


@pytest.mark.parametrize("name", [Preset.SHARDED, "short-epoch-max-nodes"])
def test_builtin_preset_requires_epoch(name) -> None:
    """CRITICAL: Built-in presets never fall back to an implicit epoch.

    Why: A stale default epoch puts now past the time field, so fresh ids
    would wrap and sort below older ones.
    """
    with pytest.raises(LayoutError, match="needs an explicit epoch"):
        new_generator(name)


def test_recent_epoch_keeps_time_field_in_range(caplog) -> None:
    epoch = time.time_ns() // 1_000_000 - 1_000
    generator = new_generator(Preset.SHARDED, epoch)

    with caplog.at_level(logging.WARNING, logger="shardflake.generator.generator"):
        decoded = generator.decode_id(generator.next_id(1))

    assert decoded.time <= generator.config.max_elapsed_ms
    assert "Time field overflowed" not in caplog.text


@pytest.mark.parametrize("node_id", [0, 1, 2, 3, 4, 5, 6, 8192, 16383])
def test_node_id_round_trips(short_generator, node_id) -> None:
    assert short_generator.decode_id(short_generator.next_id(node_id)).node_id == node_id


def test_max_node_id_round_trips(short_generator) -> None:
    max_node = short_generator.max_nodes - 1

    assert short_generator.decode_id(short_generator.next_id(max_node)).node_id == max_node


def test_sequence_wraps_after_max(short_config, clock) -> None:
    """Sequence 1023 decodes as 1023; the next mint wraps to 0."""
    generator = Generator(short_config, clock=clock, counter=SequenceCounter(start=1023))

    at_max = generator.decode_id(generator.next_id(1))
    wrapped = generator.decode_id(generator.next_id(1))

    assert at_max.sequence == 1023
    assert wrapped.sequence == 0


def test_encode_of_decode_reproduces_minted_id(sharded_generator) -> None:
    identifier = sharded_generator.next_id(77)

    decoded = sharded_generator.decode_id(identifier)

    assert encode_decoded(sharded_generator.config, decoded) == identifier


# Clock before epoch


def test_clock_before_epoch_raises() -> None:
    """CRITICAL: An epoch in the future can never be minted against."""
    generator = new_generator(Preset.SHORT_EPOCH_MAX_NODES, epoch=2**64 - 1)

    with pytest.raises(ClockBeforeEpochError, match="clock before epoch"):
        generator.next_id(1)


def test_clock_before_epoch_does_not_consume_sequence(short_config, make_clock, caplog) -> None:
    counter = SequenceCounter()
    clock = make_clock(short_config.epoch - 1)
    generator = Generator(short_config, clock=clock, counter=counter)

    with caplog.at_level(logging.DEBUG, logger="shardflake.generator.generator"):
        with pytest.raises(ClockBeforeEpochError) as exc_info:
            generator.next_id(1)

    assert exc_info.value.now_ms == short_config.epoch - 1
    assert exc_info.value.epoch == short_config.epoch
    assert counter.peek() == 0
    # Reported through the exception; the log record stays at debug.
    refusals = [r for r in caplog.records if "Refusing to mint" in r.getMessage()]
    assert [r.levelno for r in refusals] == [logging.DEBUG]

    clock.advance()
    assert generator.decode_id(generator.next_id(1)).sequence == 0


def test_time_field_rollover_warns_once(sharded_config, make_clock, caplog) -> None:
    """Past the time field's range, ids wrap and one warning is logged per generator."""
    clock = make_clock(sharded_config.rollover_at_ms + 5)
    generator = Generator(sharded_config, clock=clock)

    with caplog.at_level(logging.WARNING, logger="shardflake.generator.generator"):
        first = generator.next_id(1)
        generator.next_id(1)

    assert generator.decode_id(first).time == 5
    warnings = [r for r in caplog.records if "Time field overflowed" in r.getMessage()]
    assert len(warnings) == 1


# Sharding


def test_derive_sharded_id_all_shards(sharded_generator) -> None:
    """CRITICAL: For shards 0..31, only the shard field changes."""
    original = sharded_generator.next_id(1)
    before = sharded_generator.decode_id(original)

    for shard in range(32):
        decoded = sharded_generator.decode_id(sharded_generator.derive_sharded_id(original, shard))

        assert decoded.time == before.time, "Time component changed after sharding"
        assert decoded.node_id == before.node_id, "Node id changed after sharding"
        assert decoded.sequence == before.sequence, "Sequence changed after sharding"
        assert decoded.config_tag == 1, "Config tag should be 1 for sharded preset"
        assert decoded.shard_id == shard


def test_derive_sharded_id_is_rewritable(sharded_generator) -> None:
    original = sharded_generator.next_id(9)
    before = sharded_generator.decode_id(original)

    twice = sharded_generator.derive_sharded_id(
        sharded_generator.derive_sharded_id(original, 12), 30
    )
    after = sharded_generator.decode_id(twice)

    assert (after.time, after.node_id, after.sequence, after.config_tag) == (
        before.time,
        before.node_id,
        before.sequence,
        before.config_tag,
    )
    assert after.shard_id == 30


def test_derive_sharded_id_unsupported(short_generator) -> None:
    with pytest.raises(ShardingUnsupportedError):
        short_generator.derive_sharded_id(short_generator.next_id(1), 0)


def test_derive_sharded_id_out_of_range(sharded_generator) -> None:
    with pytest.raises(ShardOutOfRangeError):
        sharded_generator.derive_sharded_id(sharded_generator.next_id(1), 32)


def test_derive_sharded_id_does_not_read_clock(sharded_config, clock) -> None:
    generator = Generator(sharded_config, clock=clock)
    original = generator.next_id(1)

    clock.now = 0  # would fail next_id
    assert generator.decode_id(generator.derive_sharded_id(original, 3)).shard_id == 3


# Factory and concurrency


def test_new_generator_with_custom_preset(clock) -> None:
    generator = new_generator(CustomPreset(clock.now - 10, 36, 13, 2, 1), clock=clock)

    decoded = generator.decode_id(generator.next_id(8191))

    assert generator.max_nodes == 8192
    assert decoded.node_id == 8191
    assert decoded.config_tag == 1
    assert decoded.time == 10


def test_new_generator_accepts_config(sharded_config, clock) -> None:
    assert new_generator(sharded_config, clock=clock).config is sharded_config


def test_narrow_counter_rejected(short_config) -> None:
    """A counter narrower than the sequence field would shrink per-ms capacity."""
    with pytest.raises(LayoutError, match="Sequence counter is 8 bits"):
        Generator(short_config, counter=SequenceCounter(bits=8))


def test_construction_logs_layout_at_debug(sharded_config, caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="shardflake.generator.generator"):
        Generator(sharded_config)

    created = [r for r in caplog.records if r.getMessage().startswith("Generator created")]
    assert len(created) == 1
    assert created[0].levelno == logging.DEBUG
    assert sharded_config.describe() in created[0].getMessage()


def test_generators_own_separate_counters(short_config, clock) -> None:
    first = Generator(short_config, clock=clock)
    second = Generator(short_config, clock=clock)
    first.next_id(1)

    assert second.decode_id(second.next_id(1)).sequence == 0


def test_concurrent_mints_are_unique(clock) -> None:
    """Threads sharing one generator never emit the same id within capacity."""
    generator = Generator(preset(Preset.SHORT_EPOCH_MAX_NODES, DEFAULT_EPOCH), clock=clock)
    results: list[list[int]] = [[] for _ in range(8)]

    def mint(slot: int) -> None:
        for _ in range(100):
            results[slot].append(generator.next_id(1))

    threads = [threading.Thread(target=mint, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    ids = [identifier for chunk in results for identifier in chunk]
    assert len(set(ids)) == 800
