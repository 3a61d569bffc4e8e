"""Visualization and export for the bee colony simulation."""

import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from pathlib import Path
from typing import List, TYPE_CHECKING
from PIL import Image
import io

if TYPE_CHECKING:
    from ..model.state import SimulationState


class Visualizer:
    """
    Generates visual outputs using matplotlib.

    Each figure has the world on the left (hive, food sources, bees by
    role) and the discovered-sources / total-nectar bar chart on the right.

    Supports:
    - Single PNG snapshots
    - Animated GIF compilation
    """

    # Color scheme
    COLORS = {
        'field': '#F4F9E9',       # Pale green
        'hive': '#8E5B1A',        # Brown
        'undiscovered': '#B0B7BB',
        'discovered': '#27AE60',  # Green
        'exhausted': '#7F8C8D',   # Gray
        'scout': '#E67E22',       # Orange
        'onlooker': '#F1C40F',    # Yellow
        'forager': '#2980B9',     # Blue
        'bar': '#8884D8',
    }

    def __init__(self, world_width: float, world_height: float):
        self.width = world_width
        self.height = world_height
        self.frames: List[Image.Image] = []

    def _source_size(self, nectar: int, max_nectar: int) -> float:
        """Marker size scaled by remaining nectar."""
        if max_nectar <= 0:
            return 6.0
        return 6.0 + 10.0 * nectar / max_nectar

    def _create_figure(self, state: "SimulationState") -> plt.Figure:
        """Create matplotlib figure for state visualization."""
        aspect = self.width / self.height
        fig_height = 6
        fig_width = fig_height * aspect + 4
        fig, (ax, ax_chart) = plt.subplots(
            1, 2, figsize=(fig_width, fig_height),
            gridspec_kw={'width_ratios': [max(aspect, 0.5) * 3, 1]}
        )

        ax.set_facecolor(self.COLORS['field'])

        # Draw food sources
        max_nectar = max((s.nectar for s in state.sources), default=0)
        for source in state.sources:
            if source.exhausted:
                color = self.COLORS['exhausted']
            elif source.discovered:
                color = self.COLORS['discovered']
            else:
                color = self.COLORS['undiscovered']
            ax.plot(source.x, source.y, 's', color=color,
                    markersize=self._source_size(source.nectar, max_nectar),
                    markeredgecolor='black', markeredgewidth=0.5, alpha=0.8)

        # Draw hive
        ax.plot(state.hive[0], state.hive[1], 'H', color=self.COLORS['hive'],
                markersize=22, markeredgecolor='black', markeredgewidth=1.0)

        # Draw bees
        for bee in state.bees:
            ax.plot(bee.x, bee.y, 'o', color=self.COLORS[bee.role],
                    markersize=4, markeredgecolor='black', markeredgewidth=0.3)

        roles = state.role_counts()
        ax.set_title(f"Step {state.step} | Scouts: {roles['scout']} | "
                     f"Onlookers: {roles['onlooker']} | Foragers: {roles['forager']}")
        ax.set_xlabel('X')
        ax.set_ylabel('Y')
        ax.set_xlim(0, self.width)
        ax.set_ylim(0, self.height)
        ax.set_aspect('equal')

        # Legend
        legend_elements = [
            plt.Line2D([0], [0], marker='o', color='w', label='Scout',
                       markerfacecolor=self.COLORS['scout'], markersize=8),
            plt.Line2D([0], [0], marker='o', color='w', label='Onlooker',
                       markerfacecolor=self.COLORS['onlooker'], markersize=8),
            plt.Line2D([0], [0], marker='o', color='w', label='Forager',
                       markerfacecolor=self.COLORS['forager'], markersize=8),
            plt.Line2D([0], [0], marker='s', color='w', label='Discovered source',
                       markerfacecolor=self.COLORS['discovered'], markersize=8),
        ]
        ax.legend(handles=legend_elements, loc='upper right', fontsize=8)

        # Statistics chart
        labels = ['Discovered\nSources', 'Total\nNectar']
        values = [state.stats.discovered_count, state.stats.total_nectar]
        bars = ax_chart.bar(labels, values, color=self.COLORS['bar'])
        for bar, value in zip(bars, values):
            ax_chart.annotate(str(value),
                              (bar.get_x() + bar.get_width() / 2, bar.get_height()),
                              ha='center', va='bottom', fontsize=8)
        ax_chart.set_title('Colony Statistics')

        plt.tight_layout()
        return fig

    def buffer_frame(self, state: "SimulationState") -> None:
        """Store frame for GIF generation."""
        fig = self._create_figure(state)

        # Convert to PIL Image
        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=80)
        buf.seek(0)
        img = Image.open(buf).copy()
        self.frames.append(img)
        buf.close()
        plt.close(fig)

    def save_snapshot(self, state: "SimulationState", output_path: Path) -> None:
        """Save single PNG image of current state."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self._create_figure(state)
        fig.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

    def generate_gif(self, output_path: Path, fps: int = 10) -> None:
        """Compile buffered frames into animated GIF."""
        if not self.frames:
            return

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        duration = int(1000 / fps)  # milliseconds per frame

        self.frames[0].save(
            output_path,
            save_all=True,
            append_images=self.frames[1:],
            duration=duration,
            loop=0
        )

    def clear_frames(self) -> None:
        """Clear buffered frames."""
        self.frames.clear()
