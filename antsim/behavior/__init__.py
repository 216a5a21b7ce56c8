"""Ant decision rules, senses, steering and per-state behaviours."""
