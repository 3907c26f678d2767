"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from shardflake import DEFAULT_EPOCH, Generator, Preset, preset


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, now_ms: int):
        self.now = now_ms

    def now_ms(self) -> int:
        return self.now

    def advance(self, ms: int = 1) -> None:
        self.now += ms


# One hour after the default epoch: inside every preset's time field.
START_MS = DEFAULT_EPOCH + 3_600_000


@pytest.fixture
def clock():
    """Manual clock parked one hour after the default epoch."""
    return ManualClock(START_MS)


@pytest.fixture
def short_config():
    return preset(Preset.SHORT_EPOCH_MAX_NODES, DEFAULT_EPOCH)


@pytest.fixture
def sharded_config():
    return preset(Preset.SHARDED, DEFAULT_EPOCH)


@pytest.fixture
def short_generator(short_config, clock):
    """Short-epoch generator on the manual clock."""
    return Generator(short_config, clock=clock)


@pytest.fixture
def sharded_generator(sharded_config, clock):
    """Sharded generator on the manual clock."""
    return Generator(sharded_config, clock=clock)


@pytest.fixture
def make_clock():
    """Factory for manual clocks parked at an arbitrary time."""
    return ManualClock
