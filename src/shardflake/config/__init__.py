"""Configuration module using Pydantic Settings.

Provides typed generator configuration with environment variable support.

Usage:
    from shardflake.config import GeneratorSettings

    generator = GeneratorSettings(preset="sharded", epoch=1700000000000).build_generator()
"""

from shardflake.config.settings import GeneratorSettings

__all__ = [
    "GeneratorSettings",
]
