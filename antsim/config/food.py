"""Food source configuration constants."""

DEFAULT_FOOD_AMOUNT = 100.0
RANDOM_FOOD_MIN = 50.0
RANDOM_FOOD_MAX = 200.0
FOOD_COLONY_CLEARANCE = 100.0  # Random sources never spawn this close to the nest
FOOD_PLACEMENT_ATTEMPTS = 50
INITIAL_FOOD_SOURCES = 8

# A nearly empty source stays visible for a short grace window and is then
# force-depleted, so ants do not queue for crumbs.
DEPLETION_GRACE_THRESHOLD = 1.0
DEPLETION_GRACE_MS = 5000.0

NEAREST_FOOD_SEARCH_RADIUS = 300.0

# Host "add random food" action
RANDOM_DROP_COUNT_MIN = 1
RANDOM_DROP_COUNT_MAX = 3
RANDOM_DROP_AMOUNT_MIN = 50.0
RANDOM_DROP_AMOUNT_MAX = 150.0
RANDOM_DROP_MARGIN = 50.0
