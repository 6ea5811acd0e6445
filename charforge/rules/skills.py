"""
Skills and saving throws.

Maps each skill to its governing ability and computes check and save
modifiers. Expertise doubles the proficiency bonus on a proficient skill.
"""

from types import MappingProxyType
from typing import Dict, Iterable, List

from charforge.core.models import AbilityScores, ABILITIES

SKILL_ABILITY_MAP = MappingProxyType({
    'Acrobatics': 'DEX',
    'Animal Handling': 'WIS',
    'Arcana': 'INT',
    'Athletics': 'STR',
    'Deception': 'CHA',
    'History': 'INT',
    'Insight': 'WIS',
    'Intimidation': 'CHA',
    'Investigation': 'INT',
    'Medicine': 'WIS',
    'Nature': 'INT',
    'Perception': 'WIS',
    'Performance': 'CHA',
    'Persuasion': 'CHA',
    'Religion': 'INT',
    'Sleight of Hand': 'DEX',
    'Stealth': 'DEX',
    'Survival': 'WIS',
})

SKILLS = tuple(SKILL_ABILITY_MAP.keys())


def get_skill_modifier(skill: str, abilities: AbilityScores, proficiency_bonus: int,
                       is_proficient: bool, has_expertise: bool = False) -> int:
    """
    Modifier for a skill check.

    Args:
        skill: Skill name, e.g. 'Stealth'
        abilities: Character ability scores
        proficiency_bonus: Character proficiency bonus
        is_proficient: Whether the character is proficient in the skill
        has_expertise: Double the proficiency bonus (only counts when proficient)
    """
    ability_mod = abilities.modifier(SKILL_ABILITY_MAP[skill])
    if not is_proficient:
        return ability_mod
    bonus = proficiency_bonus * 2 if has_expertise else proficiency_bonus
    return ability_mod + bonus


def get_save_modifier(ability: str, abilities: AbilityScores, proficiency_bonus: int,
                      is_proficient: bool) -> int:
    """Modifier for a saving throw."""
    ability_mod = abilities.modifier(ability)
    return ability_mod + proficiency_bonus if is_proficient else ability_mod


def merge_skills(*sources: Iterable[str]) -> List[str]:
    """
    Merge skill lists, dropping duplicates by name.

    Order is first appearance across the sources.
    """
    merged: List[str] = []
    for source in sources:
        for skill in source:
            if skill not in merged:
                merged.append(skill)
    return merged


def skill_modifiers(abilities: AbilityScores, proficiency_bonus: int,
                    proficient: Iterable[str], expertise: Iterable[str]) -> Dict[str, int]:
    """Check modifiers for every known skill."""
    proficient = set(proficient)
    expertise = set(expertise)
    return {
        skill: get_skill_modifier(
            skill, abilities, proficiency_bonus,
            is_proficient=skill in proficient,
            has_expertise=skill in expertise,
        )
        for skill in SKILLS
    }


def saving_throw_modifiers(abilities: AbilityScores, proficiency_bonus: int,
                           proficient: Iterable[str]) -> Dict[str, int]:
    """Save modifiers for all six abilities."""
    proficient = set(proficient)
    return {
        ability: get_save_modifier(ability, abilities, proficiency_bonus, ability in proficient)
        for ability in ABILITIES
    }
