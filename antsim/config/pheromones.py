"""Pheromone field configuration constants.

Pheromones are the colony's only shared memory. Food trails must outlive
a round trip between nest and food, exploration markers should fade
quickly so scouts spread out, and danger markers are permanent warnings
around places where ants have drowned.
"""

# =============================================================================
# SPATIAL INDEX
# =============================================================================
PHEROMONE_GRID_CELL_SIZE = 20.0  # World units per bucket. Roughly the ant sensing step.
MAX_PHEROMONE_DEPOSITS = 2000  # Oldest deposits are evicted past this count

# =============================================================================
# DECAY
# =============================================================================
# Exploration markers decay exponentially: intensity = base * e^(-age * rate).
# The rate is per millisecond and the host may tune it within these bounds.
DEFAULT_DECAY_RATE = 0.001
MIN_DECAY_RATE = 0.001
MAX_DECAY_RATE = 0.1

# Deposits weaker than this are removed (danger deposits are never removed).
REMOVAL_THRESHOLD = 0.01

# Food trails fade over a fixed lifetime and are hard-deleted when it ends,
# whatever their intensity. "linear" or "exponential".
FOOD_TRAIL_MAX_AGE_MS = 15000.0
FOOD_TRAIL_DECAY_CURVE = "linear"

# =============================================================================
# DEPOSIT STRENGTH
# =============================================================================
# Danger is amplified so a single drowning is noticed from afar.
DANGER_DEPOSIT_MULTIPLIER = 3.0
DANGER_MAX_BASE = 5.0

# Food trails are amplified but capped so followers (below) can still matter.
FOOD_TRAIL_DEPOSIT_MULTIPLIER = 2.5
FOOD_TRAIL_MAX_BASE = 3.0

# Each ant currently following a trail deposit reinforces it.
FOLLOWER_BONUS_PER_FOLLOWER = 0.5
FOLLOWER_BONUS_CAP = 2.0

# Hard per-type intensity ceilings.
FOOD_TRAIL_INTENSITY_CAP = 5.0
DANGER_INTENSITY_CAP = 5.0
EXPLORATION_INTENSITY_CAP = 1.0
