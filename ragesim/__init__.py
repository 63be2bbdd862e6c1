"""Stats, items, characters, cooldown scheduling, buff tracking, combat formulas and reporting for a melee warrior damage simulator."""

__version__ = "0.1.0"

__all__ = [
    "stats",
    "items",
    "character",
    "schedule",
    "buffs",
    "mechanics",
    "reporting",
]