"""Ant behaviour configuration constants.

Distances are world units, speeds are world units per second and all
durations are simulated milliseconds.
"""

# =============================================================================
# BODY
# =============================================================================
ANT_MAX_ENERGY = 100.0
ANT_ENERGY_DRAIN_PER_SECOND = 0.1  # Slow drain; the nest and relief keep ants alive
ANT_BASE_SPEED_MIN = 80.0
ANT_BASE_SPEED_RANGE = 40.0  # Base speed is uniform in [80, 120)
ANT_MAX_SPEED = 200.0  # Ceiling for boosted (fleeing) ants
ANT_MAX_FOOD_CARRY = 10.0

# Per-tick speed noise makes columns of ants look less mechanical.
SPEED_VARIATION_MIN = 0.8
SPEED_VARIATION_MAX = 1.2

# =============================================================================
# WANDERING
# =============================================================================
WANDER_JITTER = 0.3  # Radians of random turn per tick while exploring
WANDER_DISTANCE = 50.0  # Distance of the virtual wander target ahead of the ant
DIRECTION_NOISE = 0.1  # Radians of noise added when heading for a target

# =============================================================================
# SENSING RADII
# =============================================================================
TERMITE_SENSE_RADIUS = 150.0
CORPSE_SENSE_RADIUS = 100.0
DANGER_SENSE_RADIUS = 80.0
TRAIL_SENSE_RADIUS = 50.0
FOOD_SENSE_RADIUS = 150.0
NEXT_TRAIL_POINT_RADIUS = 30.0

# =============================================================================
# REACH (arrival distances)
# =============================================================================
FOOD_REACH = 20.0
HOME_REACH = 30.0
TRAIL_POINT_REACH = 15.0
ATTACK_REACH = 20.0
CORPSE_REACH = 15.0
HIDE_STOP_RADIUS = 50.0  # Hiding ants stop once this close to the nest

# =============================================================================
# ACTIONS
# =============================================================================
ATTACK_DAMAGE = 15.0
ATTACK_ENERGY_COST = 5.0
ATTACK_COOLDOWN_MS = 1000.0  # Soldiers strike at most once per second
BROOD_FEED_ENERGY_COST = 5.0
NON_NURSE_BROOD_SUCCESS = 0.3  # Nurses always succeed
HOME_ENERGY_RESTORE = 20.0  # Energy regained when delivering food

REST_MIN_MS = 3000.0
REST_MAX_MS = 5000.0
BROOD_REST_MIN_MS = 4000.0  # Nurses rest longer after feeding brood
BROOD_REST_MAX_MS = 7000.0

# Fleeing from danger
DANGER_SPEED_BOOST = 1.8
DANGER_HEADING_JITTER = 0.7853981633974483  # pi / 4, uniform +/- jitter

# Whether an ant counts as carrying as soon as it holds any food (True) or
# only once its carry capacity is full (False).
CARRY_ON_FIRST_BITE = True

# =============================================================================
# HAZARD EXPOSURE
# =============================================================================
HAZARD_PENALTY_MS = 2000.0  # Continuous time in a puddle before the energy penalty
HAZARD_PENALTY_FRACTION = 0.5
HAZARD_LETHAL_MS = 4000.0  # Continuous time in a puddle before drowning

# =============================================================================
# PHEROMONE EMISSION
# =============================================================================
PHEROMONE_DROP_INTERVAL_MS = 100.0
FOOD_TRAIL_BASE_STRENGTH = 1.0  # Scaled by how full the ant is
EXPLORATION_STRENGTH = 0.3
NEAR_FULL_FRACTION = 0.8  # Fuller carriers lay a wider trail
NEAR_FULL_EXTRA_DEPOSITS = 2
NEAR_FULL_EXTRA_SCALE = 0.5
NEAR_FULL_EXTRA_JITTER = 6.0

# Recently visited trail deposits are skipped when choosing the next point.
TRAIL_MEMORY_SIZE = 20
