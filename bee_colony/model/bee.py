"""Bee agent with role state and movement primitives."""

from enum import Enum
from typing import Tuple, Optional
import numpy as np

from .state import BeeSnapshot


class BeeRole(Enum):
    """Possible roles for a bee."""
    SCOUT = "scout"
    ONLOOKER = "onlooker"
    FORAGER = "forager"


class Bee:
    """
    Individual member of the colony.

    A bee knows how to move; deciding where to move and when to change role
    is the engine's job, since both depend on shared world state:

    - Scout: random walk until a source is found, then fly home and dance
    - Onlooker: hover around the hive until recruited
    - Forager: fly to the target source and collect one unit of nectar per tick

    The target is a source id, resolved through the world model on use.
    """

    def __init__(self, bee_id: int,
                 position: Tuple[float, float],
                 role: BeeRole = BeeRole.ONLOOKER):
        self.id = bee_id
        self.position = (float(position[0]), float(position[1]))
        self.role = role
        self.target_id: Optional[int] = None
        self.returning_to_hive = False

    @property
    def is_idle_onlooker(self) -> bool:
        return self.role == BeeRole.ONLOOKER and self.target_id is None

    def distance_to(self, point: Tuple[float, float]) -> float:
        """Euclidean distance from the bee to point."""
        return float(np.hypot(point[0] - self.position[0],
                              point[1] - self.position[1]))

    def move_toward(self, point: Tuple[float, float], step: float) -> None:
        """
        Move along the straight line to point by at most step.

        Lands exactly on point when it is closer than step.
        """
        dx = point[0] - self.position[0]
        dy = point[1] - self.position[1]
        distance = float(np.hypot(dx, dy))
        if distance <= step:
            self.position = (float(point[0]), float(point[1]))
            return
        self.position = (self.position[0] + dx / distance * step,
                         self.position[1] + dy / distance * step)

    def wander(self, step: float, rng: np.random.Generator) -> None:
        """Random displacement, uniform in [-step, step] on each axis."""
        dx, dy = rng.uniform(-step, step, size=2)
        self.position = (self.position[0] + float(dx),
                         self.position[1] + float(dy))

    def hover(self, center: Tuple[float, float], jitter: float,
              rng: np.random.Generator) -> None:
        """Jump to a random point in a jitter-wide box around center."""
        half = jitter / 2
        dx, dy = rng.uniform(-half, half, size=2)
        self.position = (center[0] + float(dx), center[1] + float(dy))

    def become(self, role: BeeRole) -> None:
        """Switch role, dropping any state the new role does not use."""
        self.role = role
        if role != BeeRole.SCOUT:
            self.returning_to_hive = False

    def assign_target(self, source_id: int) -> None:
        self.target_id = source_id

    def clear_target(self) -> None:
        self.target_id = None

    def to_snapshot(self) -> BeeSnapshot:
        return BeeSnapshot(
            bee_id=self.id,
            x=self.position[0],
            y=self.position[1],
            role=self.role.value,
            target_id=self.target_id,
            returning_to_hive=self.returning_to_hive
        )

    def __repr__(self) -> str:
        return (f"Bee(id={self.id}, pos=({self.position[0]:.1f}, "
                f"{self.position[1]:.1f}), role={self.role.value}, "
                f"target={self.target_id})")
