"""Summary report generation for the bee colony simulation."""

from typing import Optional, TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from ..model.state import SimulationState


class Reporter:
    """Generates summary statistics and formatted text report."""

    def __init__(self, config_path: Optional[str], seed: Optional[int]):
        self.config_path = config_path
        self.seed = seed
        self.initial_nectar: Optional[int] = None
        self.first_discovery_step: Optional[int] = None
        self.depleted_step: Optional[int] = None
        self.peak_foragers = 0
        self.peak_forager_step = 0

    def update(self, state: "SimulationState") -> None:
        """Accumulate stats per tick."""
        stats = state.stats

        if self.initial_nectar is None:
            self.initial_nectar = stats.total_nectar + int(
                state.metrics.get('nectar_harvested', 0))

        if self.first_discovery_step is None and stats.discovered_count > 0:
            self.first_discovery_step = state.step

        if (self.depleted_step is None and state.sources
                and stats.total_nectar == 0):
            self.depleted_step = state.step

        foragers = state.role_counts()['forager']
        if foragers > self.peak_foragers:
            self.peak_foragers = foragers
            self.peak_forager_step = state.step

    def generate_summary(self, final_state: "SimulationState",
                         output_dir: Path,
                         snapshot_enabled: bool,
                         gif_enabled: bool) -> str:
        """Returns formatted text report."""
        stats = final_state.stats
        metrics = final_state.metrics
        total_sources = len(final_state.sources)
        initial_nectar = self.initial_nectar or 0
        harvested = initial_nectar - stats.total_nectar

        discovered_pct = (stats.discovered_count / total_sources * 100
                          if total_sources > 0 else 0)
        harvested_pct = (harvested / initial_nectar * 100
                         if initial_nectar > 0 else 0)
        roles = final_state.role_counts()

        # Build report
        lines = [
            "",
            "=" * 80,
            "                    BEE COLONY SIMULATION REPORT",
            "=" * 80,
            f"Configuration: {self.config_path or '(defaults)'}",
            f"Random Seed: {self.seed if self.seed is not None else 'None (random)'}",
            "",
            "COLONY METRICS",
            "-" * 40,
            f"Total Steps:           {final_state.step}",
            f"Sources Discovered:    {stats.discovered_count} / {total_sources} ({discovered_pct:.1f}%)",
            f"Sources Exhausted:     {stats.exhausted_count}",
            f"Nectar Harvested:      {harvested} / {initial_nectar} ({harvested_pct:.1f}%)",
            f"Recruitments:          {int(metrics.get('recruitments', 0))}",
            f"Dropped Dances:        {int(metrics.get('dropped_dances', 0))}",
            f"Final Roles:           {roles['scout']} scouts, "
            f"{roles['onlooker']} onlookers, {roles['forager']} foragers",
            "",
            "MILESTONES",
            "-" * 40,
            f"First Discovery:       {self._format_step(self.first_discovery_step)}",
            f"Peak Foragers:         {self.peak_foragers} (step {self.peak_forager_step})",
            f"All Nectar Collected:  {self._format_step(self.depleted_step)}",
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]

        if snapshot_enabled:
            lines.append(f"Snapshot:   {output_dir / 'final_state.png'}")
        else:
            lines.append("Snapshot:   (disabled)")

        if gif_enabled:
            lines.append(f"Animation:  {output_dir / 'simulation.gif'}")
        else:
            lines.append("Animation:  (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)

    @staticmethod
    def _format_step(step: Optional[int]) -> str:
        return f"step {step}" if step is not None else "(not reached)"
