"""Model package for the bee colony simulation."""

from .state import (BeeSnapshot, ColonyStats, FoodSourceSnapshot,
                    SimulationState, WorldSnapshot)
from .world import FoodSource, WorldModel
from .bee import Bee, BeeRole
from .engine import ColonyEngine

__all__ = [
    'BeeSnapshot',
    'ColonyStats',
    'FoodSourceSnapshot',
    'SimulationState',
    'WorldSnapshot',
    'FoodSource',
    'WorldModel',
    'Bee',
    'BeeRole',
    'ColonyEngine',
]
