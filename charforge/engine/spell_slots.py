"""
Spell slot aggregation.

Two modes share one table:
- calculate_spell_slots(): one class, rows with lock metadata for the slot tracker
- get_spell_slots(): any number of classes, raw counts for the derived stats

Effective caster level sums each class's contribution: full casters count
their whole level, half casters half (rounded down), third casters a third.
Pact casters never feed the shared table; their slots come from the separate
pact magic table, so a Warlock/Wizard holds two independent slot pools.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from charforge.core.models import ClassLevel, EditionRuleSet, PactMagicSlots, SpellSlotInfo
from charforge.rules.editions import get_rules, clamp_level, MAX_LEVEL
from .caster_types import get_caster_type_sync, normalize_caster_type, CasterTypeClassifier

logger = logging.getLogger(__name__)


def caster_level_contribution(level: int, caster_type: Optional[str]) -> int:
    """
    How many effective caster levels a class contributes.

    Examples:
        caster_level_contribution(5, 'full') -> 5
        caster_level_contribution(5, 'half') -> 2
        caster_level_contribution(5, 'third') -> 1
        caster_level_contribution(5, 'pact') -> 0
    """
    caster_type = normalize_caster_type(caster_type)
    if caster_type == 'full':
        return level
    if caster_type == 'half':
        return level // 2
    if caster_type == 'third':
        return level // 3
    return 0


def _class_caster_type(cls: ClassLevel) -> str:
    if cls.spellcasting:
        return normalize_caster_type(cls.spellcasting)
    return get_caster_type_sync(cls.class_id)


def get_caster_level(classes: Iterable[ClassLevel]) -> int:
    """Effective caster level of a class list (levels clamped to 1-20)."""
    return sum(
        caster_level_contribution(clamp_level(cls.level), _class_caster_type(cls))
        for cls in classes
    )


def _slot_row(caster_level: int, rules: EditionRuleSet) -> Tuple[int, ...]:
    # Effective level 0 (e.g. a level 1 half caster) has no slots
    if caster_level < 1:
        return ()
    return rules.multiclass_spell_slots.get(min(caster_level, MAX_LEVEL), ())


def get_pact_magic_slots(level: int, rules: Optional[EditionRuleSet] = None) -> PactMagicSlots:
    """Pact magic pool for a pact class level (clamped to 1-20)."""
    rules = rules or get_rules()
    return rules.pact_magic_slots[clamp_level(level)]


def _pact_rows(level: int, rules: EditionRuleSet) -> List[SpellSlotInfo]:
    pact = get_pact_magic_slots(level, rules)
    return [SpellSlotInfo(level=1, maximum=pact.slots, locked=False, slot_level=pact.slot_level)]


def _rows_for(level: int, caster_type: str, rules: EditionRuleSet) -> List[SpellSlotInfo]:
    if caster_type == 'none':
        return []
    if caster_type == 'pact':
        return _pact_rows(level, rules)

    available = _slot_row(caster_level_contribution(clamp_level(level), caster_type), rules)
    return [
        SpellSlotInfo(level=spell_level, maximum=maximum, locked=maximum == 0)
        for spell_level, maximum in enumerate(available, start=1)
    ]


def calculate_spell_slots(character_level: int, class_name: str,
                          rules: Optional[EditionRuleSet] = None) -> List[SpellSlotInfo]:
    """
    Spell slot rows for a single class, using the built-in caster map.

    Args:
        character_level: Level in the class (clamped to 1-20)
        class_name: Class name, e.g. 'Wizard'
        rules: Edition tables (defaults to 2014)

    Returns:
        One SpellSlotInfo per slot level in the table row. A pact class
        returns a single row carrying `slot_level`.

    Examples:
        calculate_spell_slots(3, 'Wizard') ->
            [SpellSlotInfo(1, 4, False), SpellSlotInfo(2, 2, False)]
        calculate_spell_slots(10, 'Fighter') -> []
    """
    return _rows_for(character_level, get_caster_type_sync(class_name), rules or get_rules())


async def calculate_spell_slots_async(character_level: int, class_name: str,
                                      classifier: CasterTypeClassifier,
                                      rules: Optional[EditionRuleSet] = None) -> List[SpellSlotInfo]:
    """Same as calculate_spell_slots, with the caster tier refined by the rules service."""
    caster_type = await classifier.get_caster_type(class_name)
    return _rows_for(character_level, caster_type, rules or get_rules())


def get_spell_slots(classes: Iterable[ClassLevel], rules: Optional[EditionRuleSet] = None) -> List[int]:
    """
    Shared spell slot counts for a (possibly multiclass) character.

    Index 0 holds 1st-level slots. Pact and non-casting classes contribute
    nothing.

    Examples:
        get_spell_slots([ClassLevel('Wizard', 5)]) -> [4, 3, 2]
        get_spell_slots([ClassLevel('Paladin', 4), ClassLevel('Sorcerer', 3)]) -> [4, 3, 2]
    """
    return list(_slot_row(get_caster_level(classes), rules or get_rules()))


def get_pact_magic_for_classes(classes: Iterable[ClassLevel],
                               rules: Optional[EditionRuleSet] = None) -> Optional[PactMagicSlots]:
    """Pact pool of the first pact-tier class, or None."""
    for cls in classes:
        if _class_caster_type(cls) == 'pact':
            return get_pact_magic_slots(cls.level, rules)
    return None


__all__ = [
    'caster_level_contribution',
    'get_caster_level',
    'calculate_spell_slots',
    'calculate_spell_slots_async',
    'get_spell_slots',
    'get_pact_magic_slots',
    'get_pact_magic_for_classes',
]
