"""Pheromone field: deposits, decay and gradient queries.

The field owns every pheromone deposit. Deposits live in an
insertion-ordered dict (oldest first, since all deposits age at the same
rate) and in a spatial hash for radius queries. Both structures are
updated together on every insertion and removal.

Decay rules per type:
- Danger deposits never decay and are never removed by age.
- Food trails fade over a fixed lifetime, are reinforced by followers
  and are hard-deleted when the lifetime ends.
- Exploration markers decay exponentially at the host-tunable rate.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from antsim.config import PheromoneConfig
from antsim.entities.pheromone import PheromoneDeposit, PheromoneType
from antsim.math_utils import clamp
from antsim.spatial.grid import SpatialHash
from antsim.systems.base import BaseSystem, SystemResult
from antsim.update_phases import UpdatePhase, runs_in_phase

logger = logging.getLogger(__name__)

DepositFilter = Callable[[PheromoneDeposit], bool]


@runs_in_phase(UpdatePhase.PHEROMONES)
class PheromoneField(BaseSystem):
    """Owns, ages and answers spatial queries about pheromone deposits."""

    def __init__(self, config: Optional[PheromoneConfig] = None) -> None:
        super().__init__("PheromoneField")
        self.config = config or PheromoneConfig()
        self._deposits: Dict[int, PheromoneDeposit] = {}
        self._grid: SpatialHash[PheromoneDeposit] = SpatialHash(self.config.cell_size)
        self._next_id = 1
        self._decay_rate = clamp(
            self.config.decay_rate, self.config.min_decay_rate, self.config.max_decay_rate
        )
        self._caps = {
            PheromoneType.FOOD_TRAIL: self.config.food_trail_cap,
            PheromoneType.DANGER: self.config.danger_cap,
            PheromoneType.EXPLORATION: self.config.exploration_cap,
        }
        self.total_deposited = 0
        self.total_evicted = 0

    # ------------------------------------------------------------------
    # Host knobs
    # ------------------------------------------------------------------

    @property
    def decay_rate(self) -> float:
        """Exploration decay rate per millisecond."""
        return self._decay_rate

    def set_decay_rate(self, rate: float) -> float:
        """Set the decay rate, clamped to the configured bounds.

        Returns:
            The rate actually applied
        """
        self._decay_rate = clamp(rate, self.config.min_decay_rate, self.config.max_decay_rate)
        return self._decay_rate

    def intensity_cap(self, kind: PheromoneType) -> float:
        return self._caps[kind]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def deposit(self, x: float, y: float, kind: PheromoneType, base_intensity: float) -> PheromoneDeposit:
        """Add a deposit at (x, y).

        Danger and food-trail strengths are amplified and capped before
        storing; exploration strength is stored as given. The new deposit
        may push the field over capacity, in which case the oldest
        deposits are evicted (non-danger first).
        """
        base = self._scaled_base(kind, max(0.0, base_intensity))
        deposit = PheromoneDeposit(
            deposit_id=self._next_id,
            x=x,
            y=y,
            kind=kind,
            base_intensity=base,
            intensity=min(base, self._caps[kind]),
        )
        self._next_id += 1
        self._deposits[deposit.deposit_id] = deposit
        self._grid.insert(deposit, x, y)
        self.total_deposited += 1
        self._enforce_capacity()
        return deposit

    def _scaled_base(self, kind: PheromoneType, strength: float) -> float:
        cfg = self.config
        if kind is PheromoneType.DANGER:
            return min(strength * cfg.danger_multiplier, cfg.danger_max_base)
        if kind is PheromoneType.FOOD_TRAIL:
            return min(strength * cfg.food_trail_multiplier, cfg.food_trail_max_base)
        return strength

    def remove(self, deposit: PheromoneDeposit) -> bool:
        """Remove a deposit from the field.

        Returns:
            True if the deposit was present
        """
        if self._deposits.pop(deposit.deposit_id, None) is None:
            return False
        self._grid.remove(deposit, deposit.x, deposit.y)
        deposit.active = False
        return True

    def _enforce_capacity(self) -> None:
        overflow = len(self._deposits) - self.config.max_deposits
        if overflow <= 0:
            return
        victims: List[PheromoneDeposit] = []
        for deposit in self._deposits.values():
            if deposit.kind is not PheromoneType.DANGER:
                victims.append(deposit)
                if len(victims) == overflow:
                    break
        if len(victims) < overflow:
            for deposit in self._deposits.values():
                if deposit.kind is PheromoneType.DANGER:
                    victims.append(deposit)
                    if len(victims) == overflow:
                        break
        for deposit in victims:
            self.remove(deposit)
        self.total_evicted += len(victims)
        logger.debug(f"Evicted {len(victims)} pheromone deposits at capacity")

    def add_follower(self, deposit: PheromoneDeposit) -> None:
        if deposit.active and deposit.kind is PheromoneType.FOOD_TRAIL:
            deposit.followers += 1

    def remove_follower(self, deposit: PheromoneDeposit) -> None:
        if deposit.followers > 0:
            deposit.followers -= 1

    def clear(self) -> None:
        for deposit in self._deposits.values():
            deposit.active = False
        self._deposits.clear()
        self._grid.clear()

    # ------------------------------------------------------------------
    # Decay
    # ------------------------------------------------------------------

    def _do_update(self, delta_ms: float) -> SystemResult:
        cfg = self.config
        threshold = cfg.removal_threshold
        expired: List[PheromoneDeposit] = []
        decayed = 0

        for deposit in self._deposits.values():
            deposit.age += delta_ms
            kind = deposit.kind
            if kind is PheromoneType.DANGER:
                continue
            if kind is PheromoneType.FOOD_TRAIL:
                if deposit.age >= cfg.food_trail_max_age_ms:
                    expired.append(deposit)
                    continue
                intensity = self._food_trail_intensity(deposit)
            else:
                intensity = deposit.base_intensity * math.exp(-deposit.age * self._decay_rate)
            deposit.intensity = min(intensity, self._caps[kind])
            decayed += 1
            if deposit.intensity < threshold:
                expired.append(deposit)

        for deposit in expired:
            self.remove(deposit)

        return SystemResult(
            entities_affected=decayed,
            entities_removed=len(expired),
            details={"deposits": len(self._deposits)},
        )

    def _food_trail_intensity(self, deposit: PheromoneDeposit) -> float:
        cfg = self.config
        if cfg.food_trail_decay == "exponential":
            faded = deposit.base_intensity * math.exp(-deposit.age * self._decay_rate)
        else:
            faded = deposit.base_intensity * max(0.0, 1.0 - deposit.age / cfg.food_trail_max_age_ms)
        bonus = min(deposit.followers * cfg.follower_bonus, cfg.follower_bonus_cap)
        return faded + bonus

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _candidates(
        self, x: float, y: float, radius: float, kind: Optional[PheromoneType]
    ) -> Iterator[Tuple[PheromoneDeposit, float]]:
        """Deposits within ``radius`` of (x, y) paired with their distance."""
        if radius <= 0:
            return
        radius_sq = radius * radius
        for deposit in self._grid.query(x, y, radius):
            if kind is not None and deposit.kind is not kind:
                continue
            dx = deposit.x - x
            dy = deposit.y - y
            dist_sq = dx * dx + dy * dy
            if dist_sq <= radius_sq:
                yield deposit, math.sqrt(dist_sq)

    def find_strongest(
        self,
        x: float,
        y: float,
        radius: float,
        kind: Optional[PheromoneType] = None,
        exclude: Optional[set] = None,
        predicate: Optional[DepositFilter] = None,
    ) -> Optional[PheromoneDeposit]:
        """Deposit with the highest distance-weighted intensity.

        Weight is ``intensity * (1 - distance / radius)``, so nearer
        deposits win ties. Only deposits within ``radius`` are considered.

        Args:
            exclude: Deposit IDs to skip
            predicate: Extra filter applied to each candidate
        """
        best: Optional[PheromoneDeposit] = None
        best_weight = -1.0
        for deposit, dist in self._candidates(x, y, radius, kind):
            if exclude and deposit.deposit_id in exclude:
                continue
            if predicate is not None and not predicate(deposit):
                continue
            weight = deposit.intensity * (1.0 - dist / radius)
            if weight > best_weight:
                best = deposit
                best_weight = weight
        return best

    def find_in_radius(
        self, x: float, y: float, radius: float, kind: Optional[PheromoneType] = None
    ) -> List[Tuple[PheromoneDeposit, float]]:
        """All deposits within ``radius`` as (deposit, distance), nearest first."""
        found = list(self._candidates(x, y, radius, kind))
        found.sort(key=lambda pair: pair[1])
        return found

    def density_at(self, x: float, y: float, radius: float, kind: Optional[PheromoneType] = None) -> float:
        """Sum of distance-weighted intensities around (x, y)."""
        return sum(
            deposit.intensity * (1.0 - dist / radius)
            for deposit, dist in self._candidates(x, y, radius, kind)
        )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._deposits)

    def __iter__(self) -> Iterator[PheromoneDeposit]:
        return iter(list(self._deposits.values()))

    def counts_by_type(self) -> Dict[PheromoneType, int]:
        counts = {kind: 0 for kind in PheromoneType}
        for deposit in self._deposits.values():
            counts[deposit.kind] += 1
        return counts

    def get_stats(self) -> Dict[str, Any]:
        return {
            "total": len(self._deposits),
            "by_type": {kind.value: count for kind, count in self.counts_by_type().items()},
            "decay_rate": self._decay_rate,
        }

    def check_integrity(self) -> bool:
        """Verify the flat store and the spatial hash hold the same deposits.

        Also checks that no empty bucket is left behind.
        """
        indexed = 0
        for cell, bucket in self._grid.items():
            if not bucket:
                return False
            for deposit in bucket:
                if self._deposits.get(deposit.deposit_id) is not deposit:
                    return False
                if self._grid.cell_of(deposit.x, deposit.y) != cell:
                    return False
            indexed += len(bucket)
        return indexed == len(self._deposits)

    def get_debug_info(self) -> Dict[str, Any]:
        info = super().get_debug_info()
        info.update(self.get_stats())
        info["buckets"] = self._grid.bucket_count
        info["evicted"] = self.total_evicted
        return info
