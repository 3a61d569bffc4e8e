"""State snapshot dataclasses for the bee colony simulation."""

from dataclasses import dataclass, field
from typing import Tuple, Dict, Optional


@dataclass(frozen=True)
class FoodSourceSnapshot:
    """Immutable view of a food source at a given tick."""
    source_id: int
    x: float
    y: float
    nectar: int
    discovered: bool

    @property
    def exhausted(self) -> bool:
        return self.discovered and self.nectar == 0


@dataclass(frozen=True)
class BeeSnapshot:
    """Immutable snapshot of a bee's state at a given tick."""
    bee_id: int
    x: float
    y: float
    role: str  # "scout", "onlooker", "forager"
    target_id: Optional[int]
    returning_to_hive: bool


@dataclass(frozen=True)
class ColonyStats:
    """Aggregates derived from the food source table."""
    discovered_count: int = 0
    total_nectar: int = 0
    exhausted_count: int = 0


@dataclass(frozen=True)
class WorldSnapshot:
    """Sources and hive as seen between ticks."""
    sources: Tuple[FoodSourceSnapshot, ...]
    hive: Tuple[float, float]


@dataclass(frozen=True)
class SimulationState:
    """Complete snapshot of simulation state after a tick."""
    step: int
    bees: Tuple[BeeSnapshot, ...]
    sources: Tuple[FoodSourceSnapshot, ...]
    hive: Tuple[float, float]
    stats: ColonyStats
    metrics: Dict[str, float] = field(default_factory=dict)  # role counts, recruitments, etc.

    def role_counts(self) -> Dict[str, int]:
        counts = {"scout": 0, "onlooker": 0, "forager": 0}
        for bee in self.bees:
            counts[bee.role] += 1
        return counts
