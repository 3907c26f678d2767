"""Identifier generation: the stateful generator, its clock and sequence counter."""

from shardflake.generator.clock import Clock, SystemClock
from shardflake.generator.generator import Generator, new_generator
from shardflake.generator.sequence import SequenceCounter

__all__ = [
    "Generator",
    "new_generator",
    "SequenceCounter",
    "Clock",
    "SystemClock",
]
