"""
Terrain module.

Provides seeded gradient noise, island map generation and the daily
challenge built on it.
"""
from .noise import NoiseField
from .generator import (
    TerrainConfig,
    TerrainMap,
    generate,
    bomb_budget_for,
    build_noise_board,
    random_seed,
)
from .daily import (
    DailyChallenge,
    DailyState,
    SeedStore,
    InMemorySeedStore,
    JsonSeedStore,
    daily_board,
)

__all__ = [
    "NoiseField",
    "TerrainConfig",
    "TerrainMap",
    "generate",
    "bomb_budget_for",
    "build_noise_board",
    "random_seed",
    "DailyChallenge",
    "DailyState",
    "SeedStore",
    "InMemorySeedStore",
    "JsonSeedStore",
    "daily_board",
]
