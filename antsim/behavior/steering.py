"""Heading helpers shared by ants and termites.

Headings are radians. Every helper takes the RNG explicitly so behaviour
stays reproducible for a given seed.
"""

import math
import random
from typing import Tuple

from antsim.math_utils import Vector2, bearing

# Radius of the wander circle as a fraction of the wander distance.
WANDER_CIRCLE_RATIO = 0.5


def wander(
    heading: float, wander_angle: float, rng: random.Random, jitter: float, distance: float
) -> Tuple[float, float]:
    """Reynolds-style wander step.

    A point on a circle projected ``distance`` ahead of the agent drifts
    by up to ``jitter`` radians per call; the agent turns towards it.

    Returns:
        (new_heading, new_wander_angle)
    """
    wander_angle += rng.uniform(-jitter, jitter)
    ahead = Vector2.from_angle(heading, distance)
    offset = Vector2.from_angle(heading + wander_angle, distance * WANDER_CIRCLE_RATIO)
    return (ahead + offset).angle(), wander_angle


def towards(
    x: float, y: float, tx: float, ty: float, rng: random.Random, noise: float, fallback: float
) -> float:
    """Heading towards (tx, ty) with a little uniform noise."""
    return bearing(x, y, tx, ty, fallback) + rng.uniform(-noise, noise)


def away_from(
    x: float, y: float, fx: float, fy: float, rng: random.Random, jitter: float, fallback: float
) -> float:
    """Heading directly away from (fx, fy), jittered by up to ``jitter`` radians.

    When the agent sits exactly on the repelling point the current heading
    is kept, so the result is never NaN.
    """
    return bearing(fx, fy, x, y, fallback) + rng.uniform(-jitter, jitter)


def reflect(heading: float, hit_vertical_wall: bool, hit_horizontal_wall: bool) -> float:
    """Bounce a heading off the world edges it just hit."""
    direction = Vector2.from_angle(heading)
    if hit_vertical_wall:
        direction.x = -direction.x
    if hit_horizontal_wall:
        direction.y = -direction.y
    return math.atan2(direction.y, direction.x)
