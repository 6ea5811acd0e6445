"""
Maximum hit points from class hit dice.

The first level of the first class takes the full hit die; every other
level takes the fixed average (hit_die // 2 + 1). The constitution modifier
applies once per character level, whichever class the level belongs to.
"""

from typing import Sequence

from charforge.core.models import ClassLevel

DEFAULT_HIT_DIE = 8


def average_per_level(hit_die: int) -> int:
    """
    Fixed hit point gain per level after the first.

    Examples:
        average_per_level(6) -> 4
        average_per_level(12) -> 7
    """
    return hit_die // 2 + 1


def calculate_max_hp(classes: Sequence[ClassLevel], con_modifier: int) -> int:
    """
    Maximum hit points for a character's classes.

    Args:
        classes: Normalized classes; the first one is the starting class
        con_modifier: Constitution modifier

    Returns:
        Maximum HP, never below 1

    Examples:
        calculate_max_hp([ClassLevel('Fighter', 1, hit_die=10)], 2) -> 12
        calculate_max_hp([ClassLevel('Wizard', 3, hit_die=6)], 1) -> 17
    """
    if not classes:
        return max(1 + con_modifier, 1)

    first, rest = classes[0], classes[1:]
    first_die = first.hit_die or DEFAULT_HIT_DIE

    total = first_die + con_modifier
    total += max(first.level - 1, 0) * (average_per_level(first_die) + con_modifier)
    for cls in rest:
        hit_die = cls.hit_die or DEFAULT_HIT_DIE
        total += max(cls.level, 0) * (average_per_level(hit_die) + con_modifier)

    return max(total, 1)
