"""Configuration dataclasses and YAML loader for the bee colony simulation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Dict, Any, Optional
from pathlib import Path
import numbers
import yaml


class ConfigError(ValueError):
    """Raised when a configuration would produce a degenerate simulation."""


class DistanceMetric(Enum):
    """Proximity test used for source discovery."""
    CHEBYSHEV = "chebyshev"  # axis-aligned box
    EUCLIDEAN = "euclidean"


class ForagerFallback(Enum):
    """What a forager does once it has no usable target."""
    ONLOOKER = "onlooker"
    SCOUT = "scout"
    REASSIGN = "reassign"


@dataclass
class WorldConfig:
    width: float = 800.0
    height: float = 600.0
    hive: Optional[Tuple[float, float]] = None  # None = world centre

    def hive_position(self) -> Tuple[float, float]:
        if self.hive is None:
            return (self.width / 2, self.height / 2)
        return (float(self.hive[0]), float(self.hive[1]))


@dataclass
class SourceSpec:
    x: float
    y: float
    nectar: int


@dataclass
class FoodConfig:
    count: int = 10
    nectar_min: int = 50
    nectar_max: int = 149   # inclusive
    sources: List[SourceSpec] = field(default_factory=list)

    @property
    def nectar_range(self) -> Tuple[int, int]:
        return (self.nectar_min, self.nectar_max)


@dataclass
class ColonyConfig:
    scout_ratio: float = 0.2
    forager_ratio: float = 0.0
    forager_fallback: ForagerFallback = ForagerFallback.ONLOOKER


@dataclass
class MovementConfig:
    scout_step: float = 5.0        # max displacement per axis while exploring
    return_step: float = 5.0       # scout speed on the way home
    forager_step: float = 3.0
    onlooker_jitter: float = 20.0  # full width of the jitter box around the hive
    discovery_radius: float = 20.0
    arrival_epsilon: float = 5.0
    distance_metric: DistanceMetric = DistanceMetric.CHEBYSHEV


@dataclass
class SimulationConfig:
    world: WorldConfig = field(default_factory=WorldConfig)
    food: FoodConfig = field(default_factory=FoodConfig)
    colony: ColonyConfig = field(default_factory=ColonyConfig)
    movement: MovementConfig = field(default_factory=MovementConfig)
    max_steps: int = 2000
    bee_count: int = 50
    tick_rate: Optional[float] = None  # ticks/second, None = unpaced

    # Export flags (can be overridden by CLI)
    snapshot_enabled: bool = True
    gif_enabled: bool = False
    quiet: bool = False
    seed: Optional[int] = None
    out_dir: Path = field(default_factory=lambda: Path("./output"))


def validate_config(config: SimulationConfig) -> None:
    """Reject configurations that would lead to degenerate behaviour."""
    for name, value in (("bee_count", config.bee_count),
                        ("max_steps", config.max_steps),
                        ("food.count", config.food.count),
                        ("food.nectar_min", config.food.nectar_min),
                        ("food.nectar_max", config.food.nectar_max)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise ConfigError(f"{name} must be an integer, got {value!r}")

    world = config.world
    if world.width <= 0 or world.height <= 0:
        raise ConfigError(
            f"World dimensions must be positive, got {world.width}x{world.height}")
    hx, hy = world.hive_position()
    if not (0 <= hx <= world.width and 0 <= hy <= world.height):
        raise ConfigError(f"Hive ({hx}, {hy}) lies outside the world")

    if config.bee_count <= 0:
        raise ConfigError(f"bee_count must be positive, got {config.bee_count}")
    if config.max_steps <= 0:
        raise ConfigError(f"max_steps must be positive, got {config.max_steps}")
    if config.tick_rate is not None and not (1 <= config.tick_rate <= 100):
        raise ConfigError(
            f"tick_rate must be between 1 and 100 ticks/s, got {config.tick_rate}")

    food = config.food
    if food.count < 0:
        raise ConfigError(f"food.count must not be negative, got {food.count}")
    if food.nectar_min < 0 or food.nectar_min > food.nectar_max:
        raise ConfigError(
            f"Invalid nectar range [{food.nectar_min}, {food.nectar_max}]")
    for spec in food.sources:
        if not (0 <= spec.x <= world.width and 0 <= spec.y <= world.height):
            raise ConfigError(f"Food source ({spec.x}, {spec.y}) lies outside the world")
        if spec.nectar < 0:
            raise ConfigError(f"Food source nectar must not be negative, got {spec.nectar}")

    colony = config.colony
    for name in ('scout_ratio', 'forager_ratio'):
        value = getattr(colony, name)
        if not 0.0 <= value <= 1.0:
            raise ConfigError(f"colony.{name} must be in [0, 1], got {value}")
    if colony.scout_ratio + colony.forager_ratio > 1.0:
        raise ConfigError("colony.scout_ratio + colony.forager_ratio exceeds 1")

    movement = config.movement
    for name in ('scout_step', 'return_step', 'forager_step',
                 'discovery_radius', 'arrival_epsilon'):
        value = getattr(movement, name)
        if value <= 0:
            raise ConfigError(f"movement.{name} must be positive, got {value}")
    if movement.onlooker_jitter < 0:
        raise ConfigError(
            f"movement.onlooker_jitter must not be negative, got {movement.onlooker_jitter}")


def _parse_enum(enum_cls, value: Any, key: str):
    """Map a YAML string onto an enum member."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise ConfigError(f"Unknown {key}: {value!r} (expected one of: {choices})")


def _section(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Fetch a YAML section; an empty section counts as all defaults."""
    section = raw.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"Section '{key}' must be a mapping, got {type(section).__name__}")
    return section


def _parse_sources(sources_raw: List[Dict]) -> List[SourceSpec]:
    """Parse fixed food source placements from raw YAML data."""
    return [
        SourceSpec(x=float(s['x']), y=float(s['y']), nectar=int(s['nectar']))
        for s in sources_raw
    ]


def config_from_dict(raw: Dict[str, Any]) -> SimulationConfig:
    """Build a configuration from a parsed YAML mapping; missing keys use defaults."""
    defaults = SimulationConfig()
    raw = raw or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Configuration must be a mapping, got {type(raw).__name__}")

    world_raw = _section(raw, 'world')
    hive = world_raw.get('hive')
    world = WorldConfig(
        width=world_raw.get('width', defaults.world.width),
        height=world_raw.get('height', defaults.world.height),
        hive=tuple(hive) if hive is not None else None
    )

    food_raw = _section(raw, 'food')
    food = FoodConfig(
        count=food_raw.get('count', defaults.food.count),
        nectar_min=food_raw.get('nectar_min', defaults.food.nectar_min),
        nectar_max=food_raw.get('nectar_max', defaults.food.nectar_max),
        sources=_parse_sources(food_raw.get('sources') or [])
    )

    colony_raw = _section(raw, 'colony')
    colony = ColonyConfig(
        scout_ratio=colony_raw.get('scout_ratio', defaults.colony.scout_ratio),
        forager_ratio=colony_raw.get('forager_ratio', defaults.colony.forager_ratio),
        forager_fallback=_parse_enum(
            ForagerFallback,
            colony_raw.get('forager_fallback', defaults.colony.forager_fallback),
            'forager_fallback')
    )

    mv_raw = _section(raw, 'movement')
    mv_defaults = defaults.movement
    movement = MovementConfig(
        scout_step=mv_raw.get('scout_step', mv_defaults.scout_step),
        return_step=mv_raw.get('return_step', mv_defaults.return_step),
        forager_step=mv_raw.get('forager_step', mv_defaults.forager_step),
        onlooker_jitter=mv_raw.get('onlooker_jitter', mv_defaults.onlooker_jitter),
        discovery_radius=mv_raw.get('discovery_radius', mv_defaults.discovery_radius),
        arrival_epsilon=mv_raw.get('arrival_epsilon', mv_defaults.arrival_epsilon),
        distance_metric=_parse_enum(
            DistanceMetric,
            mv_raw.get('distance_metric', mv_defaults.distance_metric),
            'distance_metric')
    )

    sim_raw = _section(raw, 'simulation')

    # Parse export config (optional)
    export_raw = _section(raw, 'export')

    config = SimulationConfig(
        world=world,
        food=food,
        colony=colony,
        movement=movement,
        max_steps=sim_raw.get('max_steps', defaults.max_steps),
        bee_count=sim_raw.get('bee_count', defaults.bee_count),
        tick_rate=sim_raw.get('tick_rate', defaults.tick_rate),
        snapshot_enabled=export_raw.get('snapshot', True),
        gif_enabled=export_raw.get('gif', False),
        seed=sim_raw.get('seed')
    )
    validate_config(config)
    return config


def load_config(config_path: Path) -> SimulationConfig:
    """Load and validate YAML configuration file."""
    with open(config_path) as f:
        raw = yaml.safe_load(f)
    return config_from_dict(raw)
