"""
Proficiency bonus, saving throw and skill proficiencies.
"""

import logging
import math
from typing import Iterable, List, Optional, Sequence

from charforge.core.models import ClassLevel, EditionRuleSet
from charforge.rules.backgrounds import get_background
from charforge.rules.editions import get_rules, clamp_level
from charforge.rules.skills import merge_skills

logger = logging.getLogger(__name__)


def get_proficiency_bonus(level: int, edition: Optional[str] = '2014') -> int:
    """
    Proficiency bonus for a character level.

    Looks the clamped level up in the edition table; an incomplete table
    falls back to ceil(1 + level / 4).

    Examples:
        get_proficiency_bonus(1) -> 2
        get_proficiency_bonus(5) -> 3
        get_proficiency_bonus(0) -> 2
        get_proficiency_bonus(17, '2024') -> 6
    """
    table = get_rules(edition).proficiency_bonus_by_level
    bonus = table.get(clamp_level(level))
    if bonus is None:
        return math.ceil(1 + level / 4)
    return bonus


def saving_throw_proficiencies(classes: Sequence[ClassLevel],
                               rules: Optional[EditionRuleSet] = None) -> List[str]:
    """
    Saving throws granted by the first (starting) class only.

    Later classes in a multiclass build add no saving throws.
    """
    if not classes:
        return []
    rules = rules or get_rules()
    rule = rules.get_class(classes[0].class_id)
    if rule is None:
        logger.debug(f"No {rules.edition} rules for class {classes[0].class_id}, no saving throws")
        return []
    return list(rule.saving_throws)


def skill_proficiencies(selected_skills: Iterable[str], background_id: Optional[str]) -> List[str]:
    """
    Class skills the player picked plus skills granted by the background.

    Duplicates are dropped by name; class picks come first.
    """
    background = get_background(background_id)
    if background_id and background is None:
        logger.debug(f"Unknown background {background_id!r}, no background skills")
    background_skills = background.granted_skills if background else ()
    return merge_skills(selected_skills, background_skills)


def expertise_overlay(expertise_skills: Iterable[str], proficient_skills: Iterable[str]) -> List[str]:
    """Expertise skills that are also proficient; expertise means nothing otherwise."""
    proficient = set(proficient_skills)
    return merge_skills(skill for skill in expertise_skills if skill in proficient)
