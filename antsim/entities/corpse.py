"""Dead ant remains."""

import math
from dataclasses import dataclass
from typing import Iterator, List, Optional


@dataclass(eq=False)
class Corpse:
    """Left behind when an ant dies; workers carry corpses back to the nest."""

    corpse_id: int
    x: float
    y: float
    ant_id: int
    cause: str
    collected: bool = False


class CorpseRegistry:
    """Every uncollected corpse in the world."""

    def __init__(self) -> None:
        self._corpses: List[Corpse] = []
        self._next_id = 1
        self.total_created = 0
        self.total_collected = 0

    def add(self, x: float, y: float, ant_id: int, cause: str) -> Corpse:
        corpse = Corpse(corpse_id=self._next_id, x=x, y=y, ant_id=ant_id, cause=cause)
        self._next_id += 1
        self._corpses.append(corpse)
        self.total_created += 1
        return corpse

    def collect(self, corpse: Corpse) -> bool:
        """Mark a corpse as picked up and remove it.

        Returns:
            False if another ant got there first
        """
        if corpse.collected:
            return False
        corpse.collected = True
        self._corpses.remove(corpse)
        self.total_collected += 1
        return True

    def nearest(self, x: float, y: float, radius: float) -> Optional[Corpse]:
        best: Optional[Corpse] = None
        best_dist = radius
        for corpse in self._corpses:
            dist = math.hypot(corpse.x - x, corpse.y - y)
            if dist <= best_dist:
                best = corpse
                best_dist = dist
        return best

    def clear(self) -> None:
        for corpse in self._corpses:
            corpse.collected = True
        self._corpses.clear()

    def __len__(self) -> int:
        return len(self._corpses)

    def __iter__(self) -> Iterator[Corpse]:
        return iter(list(self._corpses))
