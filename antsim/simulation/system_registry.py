"""System registration and management.

Keeps the engine's systems in execution order, lets a host toggle them
at runtime and aggregates their debug information.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional

from antsim.update_phases import get_system_phase

if TYPE_CHECKING:
    from antsim.systems.base import BaseSystem

logger = logging.getLogger(__name__)


class SystemRegistry:
    """Registers and manages simulation systems.

    Example:
        registry = SystemRegistry()
        registry.register(pheromone_field)
        registry.register(colony)

        registry.set_enabled("HazardField", False)  # No new puddles
    """

    def __init__(self) -> None:
        self._systems: List["BaseSystem"] = []

    def register(self, system: "BaseSystem") -> None:
        """Register a system; systems are kept in registration order."""
        self._systems.append(system)
        logger.debug(f"Registered system: {system.name}")

    def unregister(self, system: "BaseSystem") -> bool:
        if system in self._systems:
            self._systems.remove(system)
            logger.debug(f"Unregistered system: {system.name}")
            return True
        return False

    def get(self, name: str) -> Optional["BaseSystem"]:
        for system in self._systems:
            if system.name == name:
                return system
        return None

    def get_all(self) -> List["BaseSystem"]:
        """All registered systems in execution order (a copy)."""
        return self._systems.copy()

    def set_enabled(self, name: str, enabled: bool) -> bool:
        """Enable or disable a system by name.

        Returns:
            True if system was found and updated, False otherwise
        """
        system = self.get(name)
        if system is not None:
            system.enabled = enabled
            logger.debug(f"System {name} enabled={enabled}")
            return True
        return False

    def phase_order_is_valid(self) -> bool:
        """Check that registration order never goes backwards in phase."""
        last = 0
        for system in self._systems:
            phase = get_system_phase(system)
            if phase is None:
                continue
            if phase.value < last:
                return False
            last = phase.value
        return True

    def get_debug_info(self) -> Dict[str, Any]:
        return {system.name: system.get_debug_info() for system in self._systems}

    def clear(self) -> None:
        self._systems.clear()

    def __len__(self) -> int:
        return len(self._systems)

    def __iter__(self) -> Iterator["BaseSystem"]:
        return iter(self._systems)

    def __repr__(self) -> str:
        system_names = [s.name for s in self._systems]
        return f"SystemRegistry(systems={system_names})"
