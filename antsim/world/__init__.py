"""Host-facing world collaborators (terrain speed queries and weather)."""

from antsim.world.terrain import TerrainMap, Weather, WorldQuery

__all__ = ["TerrainMap", "Weather", "WorldQuery"]
