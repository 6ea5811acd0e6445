"""
Spellcasting details: save DC, attack bonus, prepared spells, cantrips.

Only one class supplies these numbers: the first class in the character's
class list whose rules name a spellcasting ability. A character with two
casting classes reports the first one's numbers only.
"""

import logging
from typing import Iterable, Optional, Tuple

from charforge.core.models import (
    AbilityScores,
    ClassLevel,
    ClassRule,
    SpellcastingDetails,
    NOT_A_SPELLCASTER,
)
from charforge.rules.editions import get_rules

logger = logging.getLogger(__name__)

MIN_PREPARED_SPELLS = 1


def prepared_spell_count(rule: ClassRule, ability_mod: int, class_level: int,
                         proficiency_bonus: int) -> int:
    """
    Number of spells the class can prepare, never below 1.

    Formulas:
        'ability+level'     -> modifier + class level (2014 full casters)
        'ability+halfLevel' -> modifier + class level // 2 (2014 half casters)
        'ability+pb'        -> modifier + proficiency bonus (2024)

    Classes without a formula (known-spell casters) prepare 0.
    """
    formula = rule.prepared_formula
    if formula == 'ability+level':
        count = ability_mod + class_level
    elif formula == 'ability+halfLevel':
        count = ability_mod + class_level // 2
    elif formula == 'ability+pb':
        count = ability_mod + proficiency_bonus
    else:
        return 0
    return max(MIN_PREPARED_SPELLS, count)


def cantrips_known(rule: ClassRule, class_level: int) -> int:
    """
    Cantrips known at an exact class level.

    The progression table is sparse and matched exactly: a level between
    breakpoints (e.g. Wizard 2) yields 0 rather than the previous
    breakpoint's count. Casting classes without a table know 2 cantrips,
    3 from level 4.
    """
    if rule.cantrip_progression:
        return rule.cantrip_progression.get(class_level, 0)
    return 3 if class_level >= 4 else 2


def find_primary_caster(classes: Iterable[ClassLevel],
                        edition: Optional[str] = None) -> Optional[Tuple[ClassLevel, ClassRule]]:
    """First class, in list order, whose rule has a spellcasting ability."""
    rules = get_rules(edition)
    for cls in classes:
        rule = rules.get_class(cls.class_id)
        if rule is None:
            logger.debug(f"No {rules.edition} rules for class {cls.class_id}, skipping for spellcasting")
            continue
        if rule.spellcasting_ability:
            return cls, rule
    return None


def calculate_spellcasting_details(classes: Iterable[ClassLevel], abilities: AbilityScores,
                                   proficiency_bonus: int, edition: str = '2014') -> SpellcastingDetails:
    """
    Spellcasting details for a character's classes.

    Args:
        classes: Normalized classes in acquisition order
        abilities: Character ability scores
        proficiency_bonus: Character proficiency bonus
        edition: '2014' or '2024'

    Returns:
        SpellcastingDetails; NOT_A_SPELLCASTER when no class casts

    Examples:
        Wizard 5 with INT 16, PB 3 (2014):
            ability='INT', save_dc=14, attack_bonus=6, prepared_count=8, cantrips_known=0
    """
    primary = find_primary_caster(classes, edition)
    if primary is None:
        return NOT_A_SPELLCASTER

    cls, rule = primary
    ability = rule.spellcasting_ability
    ability_mod = abilities.modifier(ability)

    return SpellcastingDetails(
        ability=ability,
        save_dc=8 + proficiency_bonus + ability_mod,
        attack_bonus=proficiency_bonus + ability_mod,
        prepared_count=prepared_spell_count(rule, ability_mod, cls.level, proficiency_bonus),
        cantrips_known=cantrips_known(rule, cls.level),
    )
