"""
Level-indexed tables shared by both editions.

Proficiency bonus, the multiclass spell slot table (indexed by effective
caster level) and the pact magic table (indexed by pact class level).
"""

from typing import Dict, Tuple

from charforge.core.models import PactMagicSlots

PROFICIENCY_BONUS: Dict[int, int] = {
    1: 2, 2: 2, 3: 2, 4: 2,
    5: 3, 6: 3, 7: 3, 8: 3,
    9: 4, 10: 4, 11: 4, 12: 4,
    13: 5, 14: 5, 15: 5, 16: 5,
    17: 6, 18: 6, 19: 6, 20: 6,
}

# Effective caster level -> slots per spell level (index 0 = 1st level)
MULTICLASS_SPELL_SLOTS: Dict[int, Tuple[int, ...]] = {
    1: (2,),
    2: (3,),
    3: (4, 2),
    4: (4, 3),
    5: (4, 3, 2),
    6: (4, 3, 3),
    7: (4, 3, 3, 1),
    8: (4, 3, 3, 2),
    9: (4, 3, 3, 3, 1),
    10: (4, 3, 3, 3, 2),
    11: (4, 3, 3, 3, 2, 1),
    12: (4, 3, 3, 3, 2, 1),
    13: (4, 3, 3, 3, 2, 1, 1),
    14: (4, 3, 3, 3, 2, 1, 1),
    15: (4, 3, 3, 3, 2, 1, 1, 1),
    16: (4, 3, 3, 3, 2, 1, 1, 1),
    17: (4, 3, 3, 3, 2, 1, 1, 1, 1),
    18: (4, 3, 3, 3, 3, 1, 1, 1, 1),
    19: (4, 3, 3, 3, 3, 2, 1, 1, 1),
    20: (4, 3, 3, 3, 3, 2, 2, 1, 1),
}

PACT_MAGIC_SLOTS: Dict[int, PactMagicSlots] = {
    1: PactMagicSlots(slots=1, slot_level=1),
    2: PactMagicSlots(slots=2, slot_level=1),
    3: PactMagicSlots(slots=2, slot_level=2),
    4: PactMagicSlots(slots=2, slot_level=2),
    5: PactMagicSlots(slots=2, slot_level=3),
    6: PactMagicSlots(slots=2, slot_level=3),
    7: PactMagicSlots(slots=2, slot_level=4),
    8: PactMagicSlots(slots=2, slot_level=4),
    9: PactMagicSlots(slots=2, slot_level=5),
    10: PactMagicSlots(slots=2, slot_level=5),
    11: PactMagicSlots(slots=3, slot_level=5),
    12: PactMagicSlots(slots=3, slot_level=5),
    13: PactMagicSlots(slots=3, slot_level=5),
    14: PactMagicSlots(slots=3, slot_level=5),
    15: PactMagicSlots(slots=3, slot_level=5),
    16: PactMagicSlots(slots=3, slot_level=5),
    17: PactMagicSlots(slots=4, slot_level=5),
    18: PactMagicSlots(slots=4, slot_level=5),
    19: PactMagicSlots(slots=4, slot_level=5),
    20: PactMagicSlots(slots=4, slot_level=5),
}

MIN_LEVEL = 1
MAX_LEVEL = 20


def clamp_level(level: int) -> int:
    """Clamp a level into the 1-20 table domain."""
    return min(max(level, MIN_LEVEL), MAX_LEVEL)


# Skill menus shared by several classes
ALL_SKILLS: Tuple[str, ...] = (
    'Acrobatics',
    'Animal Handling',
    'Arcana',
    'Athletics',
    'Deception',
    'History',
    'Insight',
    'Intimidation',
    'Investigation',
    'Medicine',
    'Nature',
    'Perception',
    'Performance',
    'Persuasion',
    'Religion',
    'Sleight of Hand',
    'Stealth',
    'Survival',
)

FIGHTER_SKILLS: Tuple[str, ...] = (
    'Acrobatics', 'Animal Handling', 'Athletics', 'History',
    'Insight', 'Intimidation', 'Perception', 'Survival',
)

ROGUE_SKILLS: Tuple[str, ...] = (
    'Acrobatics', 'Athletics', 'Deception', 'Insight', 'Intimidation', 'Investigation',
    'Perception', 'Performance', 'Persuasion', 'Sleight of Hand', 'Stealth',
)

STANDARD_ASI_LEVELS: Tuple[int, ...] = (4, 8, 12, 16, 19)
FIGHTER_ASI_LEVELS: Tuple[int, ...] = (4, 6, 8, 12, 14, 16, 19)
ROGUE_ASI_LEVELS: Tuple[int, ...] = (4, 8, 10, 12, 16, 19)
