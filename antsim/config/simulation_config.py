"""Simulation configuration dataclasses.

The constant modules in this package hold the tuned defaults; the
dataclasses below bundle them so a run can override any value without
touching module globals. ``SimulationConfig.validate()`` is called by the
engine before setup.
"""

from dataclasses import MISSING, dataclass, field, fields, replace
from typing import Any, Dict, Optional, Tuple

from antsim.config import ants, colony, food, hazards, pheromones, termites, world
from antsim.exceptions import ConfigurationError

_FOOD_TRAIL_CURVES = ("linear", "exponential")


@dataclass
class PheromoneConfig:
    """Pheromone field tuning."""

    cell_size: float = pheromones.PHEROMONE_GRID_CELL_SIZE
    max_deposits: int = pheromones.MAX_PHEROMONE_DEPOSITS
    decay_rate: float = pheromones.DEFAULT_DECAY_RATE
    min_decay_rate: float = pheromones.MIN_DECAY_RATE
    max_decay_rate: float = pheromones.MAX_DECAY_RATE
    removal_threshold: float = pheromones.REMOVAL_THRESHOLD
    food_trail_max_age_ms: float = pheromones.FOOD_TRAIL_MAX_AGE_MS
    food_trail_decay: str = pheromones.FOOD_TRAIL_DECAY_CURVE
    danger_multiplier: float = pheromones.DANGER_DEPOSIT_MULTIPLIER
    danger_max_base: float = pheromones.DANGER_MAX_BASE
    food_trail_multiplier: float = pheromones.FOOD_TRAIL_DEPOSIT_MULTIPLIER
    food_trail_max_base: float = pheromones.FOOD_TRAIL_MAX_BASE
    follower_bonus: float = pheromones.FOLLOWER_BONUS_PER_FOLLOWER
    follower_bonus_cap: float = pheromones.FOLLOWER_BONUS_CAP
    food_trail_cap: float = pheromones.FOOD_TRAIL_INTENSITY_CAP
    danger_cap: float = pheromones.DANGER_INTENSITY_CAP
    exploration_cap: float = pheromones.EXPLORATION_INTENSITY_CAP


@dataclass
class AntConfig:
    """Per-ant physiology, sensing and behaviour tuning."""

    max_energy: float = ants.ANT_MAX_ENERGY
    energy_drain_per_second: float = ants.ANT_ENERGY_DRAIN_PER_SECOND
    base_speed_min: float = ants.ANT_BASE_SPEED_MIN
    base_speed_range: float = ants.ANT_BASE_SPEED_RANGE
    max_speed: float = ants.ANT_MAX_SPEED
    max_food_carry: float = ants.ANT_MAX_FOOD_CARRY
    speed_variation: Tuple[float, float] = (ants.SPEED_VARIATION_MIN, ants.SPEED_VARIATION_MAX)
    wander_jitter: float = ants.WANDER_JITTER
    wander_distance: float = ants.WANDER_DISTANCE
    direction_noise: float = ants.DIRECTION_NOISE

    termite_sense_radius: float = ants.TERMITE_SENSE_RADIUS
    corpse_sense_radius: float = ants.CORPSE_SENSE_RADIUS
    danger_sense_radius: float = ants.DANGER_SENSE_RADIUS
    trail_sense_radius: float = ants.TRAIL_SENSE_RADIUS
    food_sense_radius: float = ants.FOOD_SENSE_RADIUS
    next_trail_point_radius: float = ants.NEXT_TRAIL_POINT_RADIUS

    food_reach: float = ants.FOOD_REACH
    home_reach: float = ants.HOME_REACH
    trail_point_reach: float = ants.TRAIL_POINT_REACH
    attack_reach: float = ants.ATTACK_REACH
    corpse_reach: float = ants.CORPSE_REACH
    hide_stop_radius: float = ants.HIDE_STOP_RADIUS

    attack_damage: float = ants.ATTACK_DAMAGE
    attack_energy_cost: float = ants.ATTACK_ENERGY_COST
    attack_cooldown_ms: float = ants.ATTACK_COOLDOWN_MS
    brood_feed_energy_cost: float = ants.BROOD_FEED_ENERGY_COST
    non_nurse_brood_success: float = ants.NON_NURSE_BROOD_SUCCESS
    home_energy_restore: float = ants.HOME_ENERGY_RESTORE
    rest_ms: Tuple[float, float] = (ants.REST_MIN_MS, ants.REST_MAX_MS)
    brood_rest_ms: Tuple[float, float] = (ants.BROOD_REST_MIN_MS, ants.BROOD_REST_MAX_MS)
    danger_speed_boost: float = ants.DANGER_SPEED_BOOST
    danger_heading_jitter: float = ants.DANGER_HEADING_JITTER
    carry_on_first_bite: bool = ants.CARRY_ON_FIRST_BITE

    hazard_penalty_ms: float = ants.HAZARD_PENALTY_MS
    hazard_penalty_fraction: float = ants.HAZARD_PENALTY_FRACTION
    hazard_lethal_ms: float = ants.HAZARD_LETHAL_MS

    pheromone_drop_interval_ms: float = ants.PHEROMONE_DROP_INTERVAL_MS
    food_trail_strength: float = ants.FOOD_TRAIL_BASE_STRENGTH
    exploration_strength: float = ants.EXPLORATION_STRENGTH
    near_full_fraction: float = ants.NEAR_FULL_FRACTION
    near_full_extra_deposits: int = ants.NEAR_FULL_EXTRA_DEPOSITS
    near_full_extra_scale: float = ants.NEAR_FULL_EXTRA_SCALE
    near_full_extra_jitter: float = ants.NEAR_FULL_EXTRA_JITTER
    trail_memory_size: int = ants.TRAIL_MEMORY_SIZE


@dataclass
class ColonyConfig:
    """Colony storage, spawning, reproduction and evolution tuning."""

    initial_food_storage: float = colony.INITIAL_FOOD_STORAGE
    max_population: int = colony.MAX_POPULATION
    max_population_ceiling: int = colony.MAX_POPULATION_CEILING
    spawn_interval_ms: float = colony.SPAWN_INTERVAL_MS
    spawn_cost: float = colony.SPAWN_COST
    min_spawn_cost: float = colony.MIN_SPAWN_COST
    spawn_jitter: float = colony.SPAWN_JITTER
    roles: Tuple[str, ...] = colony.ANT_ROLES
    queen_spawn_chance: float = colony.QUEEN_SPAWN_CHANCE

    nuptial_flight_interval_ms: float = colony.NUPTIAL_FLIGHT_INTERVAL_MS
    nuptial_flight_cost: float = colony.NUPTIAL_FLIGHT_COST
    nuptial_flight_duration_ms: float = colony.NUPTIAL_FLIGHT_DURATION_MS
    post_flight_duration_ms: float = colony.POST_FLIGHT_DURATION_MS
    eggs_per_clutch: Tuple[int, int] = (colony.EGGS_PER_CLUTCH_MIN, colony.EGGS_PER_CLUTCH_MAX)

    egg_hatch_window_ms: float = colony.EGG_HATCH_WINDOW_MS
    larva_window_ms: float = colony.LARVA_WINDOW_MS
    larva_food_cost: float = colony.LARVA_FOOD_COST
    pupa_window_ms: float = colony.PUPA_WINDOW_MS
    pupa_food_cost: float = colony.PUPA_FOOD_COST
    max_adults_per_tick: int = colony.MAX_ADULTS_EMERGING_PER_TICK

    evolution_storage_threshold: float = colony.EVOLUTION_STORAGE_THRESHOLD
    evolution_rate_per_second: float = colony.EVOLUTION_RATE_PER_SECOND
    evolution_population_step: int = colony.EVOLUTION_POPULATION_STEP

    emergency_storage_threshold: float = colony.EMERGENCY_STORAGE_THRESHOLD
    emergency_energy_boost: float = colony.EMERGENCY_ENERGY_BOOST
    emergency_cooldown_ms: float = colony.EMERGENCY_COOLDOWN_MS

    status_sick_below: float = colony.STATUS_SICK_BELOW
    status_needs_food_below: float = colony.STATUS_NEEDS_FOOD_BELOW
    status_weak_below: float = colony.STATUS_WEAK_BELOW


@dataclass
class FoodConfig:
    """Food source placement and depletion tuning."""

    initial_sources: int = food.INITIAL_FOOD_SOURCES
    default_amount: float = food.DEFAULT_FOOD_AMOUNT
    random_amount: Tuple[float, float] = (food.RANDOM_FOOD_MIN, food.RANDOM_FOOD_MAX)
    colony_clearance: float = food.FOOD_COLONY_CLEARANCE
    placement_attempts: int = food.FOOD_PLACEMENT_ATTEMPTS
    grace_threshold: float = food.DEPLETION_GRACE_THRESHOLD
    grace_ms: float = food.DEPLETION_GRACE_MS
    nearest_search_radius: float = food.NEAREST_FOOD_SEARCH_RADIUS
    drop_count: Tuple[int, int] = (food.RANDOM_DROP_COUNT_MIN, food.RANDOM_DROP_COUNT_MAX)
    drop_amount: Tuple[float, float] = (food.RANDOM_DROP_AMOUNT_MIN, food.RANDOM_DROP_AMOUNT_MAX)
    drop_margin: float = food.RANDOM_DROP_MARGIN


@dataclass
class HazardConfig:
    """Puddle placement and danger-burst tuning."""

    max_puddles: int = hazards.MAX_PUDDLES
    initial_puddles: int = hazards.INITIAL_PUDDLES
    spawn_rate_per_second: float = hazards.PUDDLE_SPAWN_RATE_PER_SECOND
    radius: Tuple[float, float] = (hazards.PUDDLE_RADIUS_MIN, hazards.PUDDLE_RADIUS_MAX)
    colony_clearance: float = hazards.PUDDLE_COLONY_CLEARANCE
    placement_attempts: int = hazards.PUDDLE_PLACEMENT_ATTEMPTS
    burst_radius: float = hazards.DANGER_BURST_RADIUS
    base_strength: float = hazards.DANGER_BASE_STRENGTH
    deposits_per_death: int = hazards.DANGER_DEPOSITS_PER_DEATH
    max_deposits: int = hazards.DANGER_MAX_DEPOSITS
    max_strength: float = hazards.DANGER_MAX_STRENGTH
    death_marker_strength: float = hazards.DEATH_MARKER_STRENGTH
    warning_exposure_fraction: float = hazards.WARNING_EXPOSURE_FRACTION


@dataclass
class TermiteConfig:
    """Termite combat and raid tuning."""

    speed_min: float = termites.TERMITE_SPEED_MIN
    speed_range: float = termites.TERMITE_SPEED_RANGE
    health: float = termites.TERMITE_HEALTH
    damage: float = termites.TERMITE_DAMAGE
    attack_range: float = termites.TERMITE_ATTACK_RANGE
    colony_range_bonus: float = termites.TERMITE_COLONY_RANGE_BONUS
    attack_cooldown_ms: float = termites.TERMITE_ATTACK_COOLDOWN_MS
    food_sense_radius: float = termites.TERMITE_FOOD_SENSE_RADIUS
    colony_sense_radius: float = termites.TERMITE_COLONY_SENSE_RADIUS
    ant_sense_radius_guarded: float = termites.TERMITE_ANT_SENSE_RADIUS_GUARDED
    ant_sense_radius_unguarded: float = termites.TERMITE_ANT_SENSE_RADIUS_UNGUARDED
    colony_approach: float = termites.TERMITE_COLONY_APPROACH
    seek_jitter: float = termites.TERMITE_SEEK_JITTER
    wander_jitter: float = termites.TERMITE_WANDER_JITTER
    wander_distance: float = termites.TERMITE_WANDER_DISTANCE
    colony_damage: float = termites.TERMITE_COLONY_DAMAGE
    spawn_edge_margin: float = termites.TERMITE_SPAWN_EDGE_MARGIN
    min_raid_size: int = termites.MIN_RAID_SIZE
    ants_per_raider: int = termites.ANTS_PER_RAIDER


@dataclass
class WorldEventConfig:
    """Random world event tuning (rain and termite raids)."""

    check_interval_ms: float = world.EVENT_CHECK_INTERVAL_MS
    termite_raid_chance: float = world.TERMITE_RAID_CHANCE
    rain_chance: float = world.RAIN_CHANCE
    rain_duration_ms: Tuple[float, float] = (world.RAIN_DURATION_MIN_MS, world.RAIN_DURATION_MAX_MS)


@dataclass
class WorldConfig:
    """World geometry and terrain."""

    width: float = world.WORLD_WIDTH
    height: float = world.WORLD_HEIGHT
    colony_x: Optional[float] = None  # Defaults to the world centre
    colony_y: Optional[float] = None
    terrain_cell_size: float = world.TERRAIN_CELL_SIZE
    terrain_types: Dict[str, Dict[str, float]] = field(default_factory=lambda: dict(world.TERRAIN_TYPES))
    rain_speed_modifier: float = world.RAIN_SPEED_MODIFIER

    @property
    def colony_position(self) -> Tuple[float, float]:
        x = self.colony_x if self.colony_x is not None else self.width / 2
        y = self.colony_y if self.colony_y is not None else self.height / 2
        return (x, y)


@dataclass
class SimulationConfig:
    """Top-level configuration for one simulation run.

    Attributes:
        seed: Seed for the run's single RNG; ``None`` picks one at random.
        ant_count: Founding population created at setup and on reset.
        simulation_speed: Multiplier applied to every tick's delta.
    """

    seed: Optional[int] = None
    ant_count: int = world.DEFAULT_ANT_COUNT
    simulation_speed: float = 1.0
    world: WorldConfig = field(default_factory=WorldConfig)
    pheromones: PheromoneConfig = field(default_factory=PheromoneConfig)
    ants: AntConfig = field(default_factory=AntConfig)
    colony: ColonyConfig = field(default_factory=ColonyConfig)
    food: FoodConfig = field(default_factory=FoodConfig)
    hazards: HazardConfig = field(default_factory=HazardConfig)
    termites: TermiteConfig = field(default_factory=TermiteConfig)
    events: WorldEventConfig = field(default_factory=WorldEventConfig)

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ConfigurationError: If any parameters are invalid
        """
        if self.world.width <= 0 or self.world.height <= 0:
            raise ConfigurationError("World dimensions must be positive")

        colony_x, colony_y = self.world.colony_position
        if not (0 <= colony_x <= self.world.width and 0 <= colony_y <= self.world.height):
            raise ConfigurationError(f"Colony position {(colony_x, colony_y)} lies outside the world")

        if self.ant_count < 0:
            raise ConfigurationError(f"ant_count must be non-negative, got {self.ant_count}")

        if not world.SIMULATION_SPEED_MIN <= self.simulation_speed <= world.SIMULATION_SPEED_MAX:
            raise ConfigurationError(
                f"simulation_speed must be in [{world.SIMULATION_SPEED_MIN}, "
                f"{world.SIMULATION_SPEED_MAX}], got {self.simulation_speed}"
            )

        p = self.pheromones
        if p.cell_size <= 0:
            raise ConfigurationError("Pheromone cell_size must be positive")
        if p.max_deposits < 1:
            raise ConfigurationError(f"max_deposits must be at least 1, got {p.max_deposits}")
        if not p.min_decay_rate <= p.decay_rate <= p.max_decay_rate:
            raise ConfigurationError(
                f"decay_rate must be in [{p.min_decay_rate}, {p.max_decay_rate}], got {p.decay_rate}"
            )
        if p.food_trail_max_age_ms <= 0:
            raise ConfigurationError("food_trail_max_age_ms must be positive")
        if p.food_trail_decay not in _FOOD_TRAIL_CURVES:
            raise ConfigurationError(
                f"food_trail_decay must be one of {_FOOD_TRAIL_CURVES}, got {p.food_trail_decay!r}"
            )

        a = self.ants
        if a.max_energy <= 0 or a.max_food_carry <= 0:
            raise ConfigurationError("Ant max_energy and max_food_carry must be positive")
        if a.hazard_penalty_ms >= a.hazard_lethal_ms:
            raise ConfigurationError("hazard_penalty_ms must be shorter than hazard_lethal_ms")
        if not 0 <= a.non_nurse_brood_success <= 1:
            raise ConfigurationError("non_nurse_brood_success must be in [0, 1]")

        c = self.colony
        if c.max_population < 1:
            raise ConfigurationError(f"max_population must be at least 1, got {c.max_population}")
        if c.spawn_cost < 0 or c.min_spawn_cost < 0:
            raise ConfigurationError("Spawn costs must be non-negative")
        if not c.roles:
            raise ConfigurationError("At least one ant role is required")
        low, high = c.eggs_per_clutch
        if low < 0 or high < low:
            raise ConfigurationError(f"eggs_per_clutch must be a non-negative range, got {c.eggs_per_clutch}")

        h = self.hazards
        if h.radius[0] <= 0 or h.radius[1] < h.radius[0]:
            raise ConfigurationError(f"Puddle radius range is invalid: {h.radius}")

        weights = sum(spec["weight"] for spec in self.world.terrain_types.values())
        if abs(weights - 1.0) > 1e-6:
            raise ConfigurationError(f"Terrain weights must sum to 1.0, got {weights}")

    def with_overrides(self, **overrides: Any) -> "SimulationConfig":
        """Return a copy with top-level fields replaced."""
        return replace(self, **overrides)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationConfig":
        """Build a config from a nested dict, ignoring unknown keys."""
        nested = {f.name: f for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in nested:
                continue
            section = nested[key]
            if isinstance(value, dict) and section.default_factory is not MISSING:
                section_cls = type(section.default_factory())
                known = {f.name for f in fields(section_cls)}
                kwargs[key] = section_cls(**{k: v for k, v in value.items() if k in known})
            else:
                kwargs[key] = value
        return cls(**kwargs)


