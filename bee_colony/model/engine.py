"""Colony engine for the bee colony simulation."""

import numpy as np
from typing import List, Dict, Optional, TYPE_CHECKING

from .world import WorldModel
from .bee import Bee, BeeRole
from .state import SimulationState

from ..config import ForagerFallback, validate_config

if TYPE_CHECKING:
    from ..config import SimulationConfig


class ColonyEngine:
    """
    Orchestrates the discrete-time simulation loop.

    Implements:
    1. World and colony initialization
    2. Sequential per-bee update in ascending id order
    3. Role transitions (discovery, waggle-dance recruitment, exhaustion)
    4. State snapshot generation

    Bees are updated one at a time against the live world, so the first bee
    in id order wins a discovery, and a bee recruited earlier in a tick
    acts in its new role when its own turn comes.
    """

    def __init__(self, config: "SimulationConfig"):
        self.config = config
        self.world: Optional[WorldModel] = None
        self.bees: List[Bee] = []
        self.initialize(config)

    def initialize(self, config: Optional["SimulationConfig"] = None) -> None:
        """Validate config and rebuild world and colony from scratch."""
        if config is not None:
            self.config = config
        validate_config(self.config)

        self.current_step = 0
        self.rng = np.random.default_rng(self.config.seed)

        self.world = WorldModel(self.rng, self.config.movement.distance_metric)
        food = self.config.food
        self.world.initialize(
            self.config.world.width, self.config.world.height,
            food.count, food.nectar_range,
            self.config.world.hive_position(),
            fixed_sources=food.sources
        )

        self.bees = []
        self._spawn_bees()

        # Metrics tracking
        self.recruitment_count = 0
        self.dropped_dances = 0
        self.initial_nectar = self.world.stats().total_nectar

    def _spawn_bees(self) -> None:
        """Create the colony at the hive with roles by the configured ratios."""
        count = self.config.bee_count
        num_scouts = int(count * self.config.colony.scout_ratio)
        num_foragers = int(count * self.config.colony.forager_ratio)

        for bee_id in range(count):
            if bee_id < num_scouts:
                role = BeeRole.SCOUT
            elif bee_id < num_scouts + num_foragers:
                role = BeeRole.FORAGER
            else:
                role = BeeRole.ONLOOKER
            self.bees.append(Bee(bee_id, self.world.hive, role))

    def tick(self) -> SimulationState:
        """
        Execute one discrete time step.

        1. Update every bee in id order by its current role
        2. Release targets exhausted during the pass
        3. Return current state snapshot
        """
        self.current_step += 1

        for bee in self.bees:
            self._release_stale_target(bee)
            if bee.role == BeeRole.SCOUT:
                self._update_scout(bee)
            elif bee.role == BeeRole.ONLOOKER:
                self._update_onlooker(bee)
            elif bee.role == BeeRole.FORAGER:
                self._update_forager(bee)

        # A forager later in order may have emptied a source another bee holds
        for bee in self.bees:
            self._release_stale_target(bee)

        return self.snapshot()

    def _release_stale_target(self, bee: Bee) -> None:
        """Drop a target that is gone or empty; never dereference it."""
        if bee.target_id is not None and not self.world.has_nectar(bee.target_id):
            bee.clear_target()

    def _update_scout(self, bee: Bee) -> None:
        movement = self.config.movement
        if bee.returning_to_hive:
            if bee.distance_to(self.world.hive) < movement.arrival_epsilon:
                bee.returning_to_hive = False
                self._waggle_dance(bee)
                bee.clear_target()
            else:
                bee.move_toward(self.world.hive, movement.return_step)
            return

        bee.wander(movement.scout_step, self.rng)
        bee.position = self.world.clamp(*bee.position)

        source = self.world.try_discover(bee.position, movement.discovery_radius)
        if source is not None:
            bee.assign_target(source.id)
            bee.returning_to_hive = True

    def _waggle_dance(self, scout: Bee) -> Optional[Bee]:
        """
        Recruit one idle onlooker, chosen uniformly, to the scout's source.

        Dropped silently when the source is spent or nobody is idle.
        """
        if not self.world.has_nectar(scout.target_id):
            return None

        idle = [b for b in self.bees if b.is_idle_onlooker]
        if not idle:
            self.dropped_dances += 1
            return None

        recruit = idle[int(self.rng.integers(len(idle)))]
        recruit.become(BeeRole.FORAGER)
        recruit.assign_target(scout.target_id)
        self.recruitment_count += 1
        return recruit

    def _update_onlooker(self, bee: Bee) -> None:
        bee.hover(self.world.hive, self.config.movement.onlooker_jitter, self.rng)
        bee.position = self.world.clamp(*bee.position)

    def _update_forager(self, bee: Bee) -> None:
        movement = self.config.movement
        source = self.world.get_source(bee.target_id)
        if source is None:
            self._apply_fallback(bee)
            return

        if bee.distance_to(source.position) < movement.arrival_epsilon:
            remaining = self.world.deplete_nectar(source.id, 1)
            if remaining == 0:
                bee.clear_target()
                self._apply_fallback(bee)
        else:
            bee.move_toward(source.position, movement.forager_step)
            bee.position = self.world.clamp(*bee.position)

    def _apply_fallback(self, bee: Bee) -> None:
        """Handle a forager left without a usable target."""
        policy = self.config.colony.forager_fallback
        if policy == ForagerFallback.ONLOOKER:
            bee.become(BeeRole.ONLOOKER)
        elif policy == ForagerFallback.SCOUT:
            bee.become(BeeRole.SCOUT)
        elif policy == ForagerFallback.REASSIGN:
            candidates = self.world.eligible_targets()
            if candidates:
                choice = candidates[int(self.rng.integers(len(candidates)))]
                bee.assign_target(choice.id)
            # Otherwise hover in place as a target-less forager

    def snapshot(self) -> SimulationState:
        """Create immutable snapshot of current simulation state."""
        world = self.world.snapshot()
        stats = self.world.stats()
        roles = self._role_counts()

        metrics = {
            'scouts': roles[BeeRole.SCOUT.value],
            'onlookers': roles[BeeRole.ONLOOKER.value],
            'foragers': roles[BeeRole.FORAGER.value],
            'recruitments': self.recruitment_count,
            'dropped_dances': self.dropped_dances,
            'nectar_harvested': self.initial_nectar - stats.total_nectar,
        }

        return SimulationState(
            step=self.current_step,
            bees=tuple(b.to_snapshot() for b in self.bees),
            sources=world.sources,
            hive=world.hive,
            stats=stats,
            metrics=metrics
        )

    def _role_counts(self) -> Dict[str, int]:
        counts = {role.value: 0 for role in BeeRole}
        for bee in self.bees:
            counts[bee.role.value] += 1
        return counts

    def is_finished(self) -> bool:
        """Check if simulation should terminate."""
        if self.current_step >= self.config.max_steps:
            return True
        return bool(self.world.sources) and self.world.stats().total_nectar == 0

    def get_summary(self) -> Dict:
        """Get summary statistics for the simulation."""
        stats = self.world.stats()
        roles = self._role_counts()
        return {
            'total_steps': self.current_step,
            'sources_total': len(self.world.sources),
            'sources_discovered': stats.discovered_count,
            'sources_exhausted': stats.exhausted_count,
            'nectar_remaining': stats.total_nectar,
            'nectar_harvested': self.initial_nectar - stats.total_nectar,
            'recruitments': self.recruitment_count,
            'dropped_dances': self.dropped_dances,
            'scouts': roles['scout'],
            'onlookers': roles['onlooker'],
            'foragers': roles['forager'],
        }
