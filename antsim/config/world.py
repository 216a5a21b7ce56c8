"""World geometry, terrain and random event configuration constants."""

# =============================================================================
# GEOMETRY
# =============================================================================
WORLD_WIDTH = 1800.0
WORLD_HEIGHT = 1350.0

DEFAULT_ANT_COUNT = 50
DEFAULT_TICK_MS = 1000.0 / 60.0

SIMULATION_SPEED_MIN = 0.1
SIMULATION_SPEED_MAX = 10.0

# =============================================================================
# TERRAIN
# =============================================================================
# Each terrain cell is drawn once at setup; the weights must sum to 1.0.
TERRAIN_CELL_SIZE = 100.0
TERRAIN_TYPES = {
    "grass": {"weight": 0.4, "speed": 0.8},
    "dry_soil": {"weight": 0.3, "speed": 1.0},
    "mud": {"weight": 0.3, "speed": 0.6},
}
RAIN_SPEED_MODIFIER = 0.7

# =============================================================================
# RANDOM WORLD EVENTS
# =============================================================================
EVENT_CHECK_INTERVAL_MS = 30000.0
TERMITE_RAID_CHANCE = 0.004
RAIN_CHANCE = 0.1  # Rolled after the raid band: [0.004, 0.104)
RAIN_DURATION_MIN_MS = 10000.0
RAIN_DURATION_MAX_MS = 25000.0
