"""World model: food sources and hive for the bee colony simulation."""

from dataclasses import dataclass
from typing import Tuple, List, Optional, Sequence

import numpy as np
from scipy.spatial.distance import cdist

from ..config import ConfigError, DistanceMetric, SourceSpec
from .state import ColonyStats, FoodSourceSnapshot, WorldSnapshot


@dataclass
class FoodSource:
    """A depletable patch of nectar. Mutated only through WorldModel."""
    id: int
    x: float
    y: float
    nectar: int
    discovered: bool = False

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_snapshot(self) -> FoodSourceSnapshot:
        return FoodSourceSnapshot(
            source_id=self.id, x=self.x, y=self.y,
            nectar=self.nectar, discovered=self.discovered
        )


class WorldModel:
    """
    Owns the food source table and the hive location.

    Sources are kept in id order; ids are their index in the table and stay
    stable until the next initialize(). All mutation of a source goes through
    try_discover() and deplete_nectar().
    """

    def __init__(self, rng: np.random.Generator,
                 metric: DistanceMetric = DistanceMetric.CHEBYSHEV):
        self.rng = rng
        self.metric = metric
        self.width = 0.0
        self.height = 0.0
        self.hive: Tuple[float, float] = (0.0, 0.0)
        self.sources: List[FoodSource] = []

    def initialize(self, width: float, height: float,
                   num_sources: int,
                   nectar_range: Tuple[int, int],
                   hive_position: Tuple[float, float],
                   fixed_sources: Sequence[SourceSpec] = ()) -> None:
        """
        Replace the source table and hive.

        Fixed sources are placed first, then num_sources at uniformly random
        positions with nectar drawn uniformly from the inclusive nectar_range.
        """
        if width <= 0 or height <= 0:
            raise ConfigError(f"World dimensions must be positive, got {width}x{height}")
        if num_sources < 0:
            raise ConfigError(f"Number of food sources must not be negative, got {num_sources}")
        low, high = nectar_range
        if low < 0 or low > high:
            raise ConfigError(f"Invalid nectar range [{low}, {high}]")
        hx, hy = hive_position
        if not (0 <= hx <= width and 0 <= hy <= height):
            raise ConfigError(f"Hive ({hx}, {hy}) lies outside the world")

        self.width = float(width)
        self.height = float(height)
        self.hive = (float(hx), float(hy))
        self.sources = []

        for spec in fixed_sources:
            self.place_source(spec.x, spec.y, spec.nectar)

        if num_sources > 0:
            xs = self.rng.uniform(0, self.width, size=num_sources)
            ys = self.rng.uniform(0, self.height, size=num_sources)
            nectars = self.rng.integers(low, high + 1, size=num_sources)
            for x, y, nectar in zip(xs, ys, nectars):
                self.place_source(float(x), float(y), int(nectar))

    def place_source(self, x: float, y: float, nectar: int) -> FoodSource:
        """Append an undiscovered source at (x, y), clamped into the world."""
        if nectar < 0:
            raise ValueError(f"Nectar must not be negative, got {nectar}")
        x, y = self.clamp(x, y)
        source = FoodSource(id=len(self.sources), x=x, y=y, nectar=int(nectar))
        self.sources.append(source)
        return source

    def clamp(self, x: float, y: float) -> Tuple[float, float]:
        """Clamp a point to [0, width] x [0, height]."""
        return (float(np.clip(x, 0.0, self.width)),
                float(np.clip(y, 0.0, self.height)))

    def contains(self, x: float, y: float) -> bool:
        """Check if point is within world bounds."""
        return 0.0 <= x <= self.width and 0.0 <= y <= self.height

    def get_source(self, source_id: Optional[int]) -> Optional[FoodSource]:
        """Look up a source by id; None for unknown ids."""
        if source_id is None or not 0 <= source_id < len(self.sources):
            return None
        return self.sources[source_id]

    def has_nectar(self, source_id: Optional[int]) -> bool:
        """True if the id names an existing source that still holds nectar."""
        source = self.get_source(source_id)
        return source is not None and source.nectar > 0

    def distances(self, position: Tuple[float, float]) -> np.ndarray:
        """Distance from position to every source under the world's metric."""
        if not self.sources:
            return np.empty(0)
        points = np.array([s.position for s in self.sources], dtype=np.float64)
        return cdist(np.array([position], dtype=np.float64), points,
                     metric=self.metric.value)[0]

    def try_discover(self, position: Tuple[float, float],
                     radius: float) -> Optional[FoodSource]:
        """
        Discover the first undiscovered source closer than radius.

        Ties go to table order, not to the nearest source. The returned
        source is marked discovered, so it can only be found once.
        """
        if not self.sources:
            return None

        undiscovered = np.array([not s.discovered for s in self.sources])
        hits = np.flatnonzero(undiscovered & (self.distances(position) < radius))
        if hits.size == 0:
            return None

        source = self.sources[int(hits[0])]
        source.discovered = True
        return source

    def deplete_nectar(self, source_id: int, amount: int = 1) -> int:
        """
        Remove up to amount nectar from a source, floored at 0.

        Returns the remaining nectar; callers detect exhaustion from it.
        Unknown ids count as exhausted.
        """
        if amount < 0:
            raise ValueError(f"Depletion amount must not be negative, got {amount}")
        source = self.get_source(source_id)
        if source is None:
            return 0
        source.nectar = max(0, source.nectar - amount)
        return source.nectar

    def eligible_targets(self) -> Tuple[FoodSource, ...]:
        """Discovered sources that still hold nectar, as of now."""
        return tuple(s for s in self.sources if s.discovered and s.nectar > 0)

    def stats(self) -> ColonyStats:
        """Recompute aggregates from the source table."""
        return ColonyStats(
            discovered_count=sum(1 for s in self.sources if s.discovered),
            total_nectar=sum(s.nectar for s in self.sources),
            exhausted_count=sum(1 for s in self.sources
                                if s.discovered and s.nectar == 0)
        )

    def snapshot(self) -> WorldSnapshot:
        """Immutable copy of sources and hive."""
        return WorldSnapshot(
            sources=tuple(s.to_snapshot() for s in self.sources),
            hive=self.hive
        )
