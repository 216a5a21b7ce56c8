"""Spatial helpers: world bounds and bucketed proximity indexes."""

from antsim.spatial.bounds import WorldBounds
from antsim.spatial.grid import SpatialHash

__all__ = ["SpatialHash", "WorldBounds"]
