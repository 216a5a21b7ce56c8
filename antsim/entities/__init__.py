"""Simulation entities: ants, termites, food, puddles, corpses, pheromones."""
