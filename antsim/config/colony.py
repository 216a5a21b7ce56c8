"""Colony lifecycle configuration constants.

Food storage pays for everything: new workers, nuptial flights and the
growth of brood. The reproduction cycle is deliberately slow so that a
well-fed colony grows in visible waves rather than continuously.
"""

# =============================================================================
# STORAGE AND POPULATION
# =============================================================================
INITIAL_FOOD_STORAGE = 500.0
MAX_POPULATION = 200
MAX_POPULATION_CEILING = 300  # Evolution never raises the cap past this
SPAWN_INTERVAL_MS = 5000.0
SPAWN_COST = 10.0
MIN_SPAWN_COST = 5.0
SPAWN_JITTER = 20.0  # New ants appear within +/- this of the nest

ANT_ROLES = ("worker", "soldier", "scout", "forager", "nurse")
QUEEN_SPAWN_CHANCE = 0.05  # Only while the colony has no queen

# =============================================================================
# QUEEN NUPTIAL FLIGHT
# =============================================================================
NUPTIAL_FLIGHT_INTERVAL_MS = 60000.0
NUPTIAL_FLIGHT_COST = 300.0  # Also the storage threshold for starting a flight
NUPTIAL_FLIGHT_DURATION_MS = 10000.0
POST_FLIGHT_DURATION_MS = 5000.0
EGGS_PER_CLUTCH_MIN = 20
EGGS_PER_CLUTCH_MAX = 50

# =============================================================================
# BROOD DEVELOPMENT
# =============================================================================
# Each stage advances at most one individual per tick with probability
# delta / window * count, so larger cohorts drain faster.
EGG_HATCH_WINDOW_MS = 45000.0
LARVA_WINDOW_MS = 30000.0
LARVA_FOOD_COST = 100.0
PUPA_WINDOW_MS = 30000.0
PUPA_FOOD_COST = 150.0
MAX_ADULTS_EMERGING_PER_TICK = 2

# =============================================================================
# EVOLUTION AND RELIEF
# =============================================================================
EVOLUTION_STORAGE_THRESHOLD = 200.0
EVOLUTION_RATE_PER_SECOND = 0.06
EVOLUTION_POPULATION_STEP = 5

EMERGENCY_STORAGE_THRESHOLD = 10.0
EMERGENCY_ENERGY_BOOST = 10.0
EMERGENCY_COOLDOWN_MS = 1000.0

# Health labels reported in ant stats, keyed by colony storage.
STATUS_SICK_BELOW = 20.0
STATUS_NEEDS_FOOD_BELOW = 50.0
STATUS_WEAK_BELOW = 100.0
