"""Puddle hazard configuration constants.

Puddles drown ants that linger in them. Every drowning makes the puddle
shout louder: its danger burst grows with the recorded death count.
"""

MAX_PUDDLES = 10
INITIAL_PUDDLES = 3
PUDDLE_SPAWN_RATE_PER_SECOND = 0.06
PUDDLE_RADIUS_MIN = 30.0
PUDDLE_RADIUS_MAX = 50.0
PUDDLE_COLONY_CLEARANCE = 150.0
PUDDLE_PLACEMENT_ATTEMPTS = 50

# =============================================================================
# DANGER BURST
# =============================================================================
# count = min(death_count * 8, 30); strength = min(2.0 * death_count / 3, 4.0)
DANGER_BURST_RADIUS = 80.0
DANGER_BASE_STRENGTH = 2.0
DANGER_DEPOSITS_PER_DEATH = 8
DANGER_MAX_DEPOSITS = 30
DANGER_MAX_STRENGTH = 4.0
DEATH_MARKER_STRENGTH = 4.0  # Extra deposit at the exact spot an ant drowned

# Ants this far through the lethal exposure time trigger one warning burst.
WARNING_EXPOSURE_FRACTION = 0.75
