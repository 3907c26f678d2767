"""Identifier generator service.

Generator is a stateful service: it owns an immutable IdConfig, a clock and a
sequence counter, and mints identifiers through the pure codec in core/.

Usage:
    generator = new_generator(Preset.SHARDED, epoch=1_700_000_000_000)
    identifier = generator.next_id(node_id=7)
    decoded = generator.decode_id(identifier)
    routed = generator.derive_sharded_id(identifier, shard=3)
"""

from __future__ import annotations

import logging
import threading

from shardflake.core.codec import DecodedId, decode_id, encode_id, replace_shard
from shardflake.core.errors import ClockBeforeEpochError, LayoutError
from shardflake.core.layout import IdConfig, PresetLike, resolve_config
from shardflake.generator.clock import Clock, SystemClock
from shardflake.generator.sequence import SequenceCounter

logger = logging.getLogger(__name__)


class Generator:
    """Mints time-ordered 64-bit identifiers under one layout.

    Safe to share across threads: the counter increment is atomic and the
    config is immutable. Nothing here blocks or sleeps.

    Args:
        config: Layout to mint and decode with.
        clock: Time source (defaults to the wall clock).
        counter: Sequence counter (defaults to a fresh counter starting at 0).

    Raises:
        LayoutError: If the counter width differs from the sequence field.
    """

    def __init__(
        self,
        config: IdConfig,
        *,
        clock: Clock | None = None,
        counter: SequenceCounter | None = None,
    ):
        self._config = config
        self._clock: Clock = clock if clock is not None else SystemClock()
        if counter is None:
            counter = SequenceCounter(IdConfig.SEQUENCE_BITS)
        elif counter.bits != IdConfig.SEQUENCE_BITS:
            raise LayoutError(
                f"Sequence counter is {counter.bits} bits, layout needs {IdConfig.SEQUENCE_BITS}"
            )
        self._counter = counter
        self._rollover_warned = False
        self._warn_lock = threading.Lock()
        logger.debug("Generator created: %s", config.describe())

    @property
    def config(self) -> IdConfig:
        return self._config

    @property
    def max_nodes(self) -> int:
        return self._config.max_nodes

    def next_id(self, node_id: int) -> int:
        """Mint the next identifier for a node.

        The shard window is left at zero; apply ``derive_sharded_id`` to set it.

        Args:
            node_id: Caller's node id, masked to node_bits.

        Returns:
            Packed identifier.

        Raises:
            ClockBeforeEpochError: If the clock reads earlier than the epoch.
                The sequence counter is not advanced in that case.
        """
        now = self._clock.now_ms()
        elapsed = now - self._config.epoch
        if elapsed < 0:
            logger.debug(
                "Refusing to mint: clock %dms is before epoch %dms", now, self._config.epoch
            )
            raise ClockBeforeEpochError(now, self._config.epoch)

        if elapsed > self._config.max_elapsed_ms:
            self._warn_rollover(now)

        sequence = self._counter.next()
        return encode_id(self._config, elapsed=elapsed, node_id=node_id, sequence=sequence)

    def decode_id(self, identifier: int) -> DecodedId:
        """Unpack an identifier minted under this generator's layout."""
        return decode_id(self._config, identifier)

    def derive_sharded_id(self, original: int, shard: int) -> int:
        """Return ``original`` with only its shard field replaced.

        Raises:
            ShardingUnsupportedError: If the layout has no shard bits.
            ShardOutOfRangeError: If shard does not fit in shard_bits.
        """
        return replace_shard(self._config, original, shard)

    def _warn_rollover(self, now: int) -> None:
        with self._warn_lock:
            if self._rollover_warned:
                return
            self._rollover_warned = True
        logger.warning(
            "Time field overflowed (%d bits, rolled over at %dms, now %dms); "
            "ids no longer sort by mint time",
            self._config.time_bits,
            self._config.rollover_at_ms,
            now,
        )


def new_generator(
    spec: PresetLike,
    epoch: int | None = None,
    *,
    clock: Clock | None = None,
) -> Generator:
    """Create a Generator from a preset, preset name, CustomPreset or IdConfig.

    Args:
        spec: Layout specification (see ``resolve_config``).
        epoch: Epoch for built-in presets, where it is required; ignored for
            CustomPreset and IdConfig.
        clock: Optional time source.

    Returns:
        New Generator with its own sequence counter.

    Raises:
        LayoutError: If a built-in preset is given without an epoch.
    """
    return Generator(resolve_config(spec, epoch), clock=clock)
