"""Termite raid configuration constants."""

TERMITE_SPEED_MIN = 60.0
TERMITE_SPEED_RANGE = 20.0
TERMITE_HEALTH = 50.0
TERMITE_DAMAGE = 10.0
TERMITE_ATTACK_RANGE = 15.0
TERMITE_COLONY_RANGE_BONUS = 30.0  # The nest is a bigger target than an ant
TERMITE_ATTACK_COOLDOWN_MS = 1000.0

# Target selection
TERMITE_FOOD_SENSE_RADIUS = 200.0
TERMITE_COLONY_SENSE_RADIUS = 150.0
TERMITE_ANT_SENSE_RADIUS_GUARDED = 50.0  # While soldiers live, only nearby non-soldiers
TERMITE_ANT_SENSE_RADIUS_UNGUARDED = 100.0

# Seeking
TERMITE_COLONY_APPROACH = 50.0  # Wander instead of beelining once this close
TERMITE_SEEK_JITTER = 0.25
TERMITE_WANDER_JITTER = 0.4
TERMITE_WANDER_DISTANCE = 40.0

TERMITE_COLONY_DAMAGE = 10.0  # Food storage stolen per hit

# Raids
TERMITE_SPAWN_EDGE_MARGIN = 20.0
MIN_RAID_SIZE = 3
ANTS_PER_RAIDER = 3  # Raid size is max(3, population // 3)
