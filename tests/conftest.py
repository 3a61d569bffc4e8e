"""
Pytest configuration and shared fixtures for bee colony tests.
"""

import pytest
import numpy as np
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bee_colony.config import (ColonyConfig, FoodConfig, SimulationConfig,
                               SourceSpec, WorldConfig)


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests"""
    return np.random.default_rng(42)


@pytest.fixture
def world(rng):
    """Empty 100x100 world with the hive in the centre"""
    from bee_colony.model.world import WorldModel

    model = WorldModel(rng)
    model.initialize(100, 100, 0, (10, 20), (50, 50))
    return model


@pytest.fixture
def small_config():
    """Small seeded configuration that runs quickly"""
    return SimulationConfig(
        world=WorldConfig(width=200, height=150),
        food=FoodConfig(count=6, nectar_min=5, nectar_max=15,
                        sources=[SourceSpec(x=110, y=80, nectar=8)]),
        bee_count=20,
        max_steps=500,
        seed=7,
    )


@pytest.fixture
def lone_source_config():
    """One scout, one onlooker and a 5-nectar source right beside the hive"""
    return SimulationConfig(
        world=WorldConfig(width=100, height=100, hive=(50, 50)),
        food=FoodConfig(count=0, sources=[SourceSpec(x=55, y=50, nectar=5)]),
        colony=ColonyConfig(scout_ratio=0.5),
        bee_count=2,
        max_steps=200,
        seed=3,
    )
