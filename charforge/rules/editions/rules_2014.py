"""
Class rules for the 2014 edition.

Prepared spells follow the 2014 formulas: full casters prepare
ability modifier + class level, half casters ability modifier + half level.
"""

from types import MappingProxyType
from typing import Dict

from charforge.core.models import ClassRule, SkillChoices, EditionRuleSet
from .tables import (
    PROFICIENCY_BONUS,
    MULTICLASS_SPELL_SLOTS,
    PACT_MAGIC_SLOTS,
    ALL_SKILLS,
    FIGHTER_SKILLS,
    ROGUE_SKILLS,
    STANDARD_ASI_LEVELS,
    FIGHTER_ASI_LEVELS,
    ROGUE_ASI_LEVELS,
)


def cantrip_table(table: Dict[int, int]):
    """Freeze a sparse level -> cantrips-known table."""
    return MappingProxyType(dict(table))


CLASS_RULES_2014: Dict[str, ClassRule] = {
    'Barbarian': ClassRule(
        hit_die=12,
        spellcasting='none',
        subclass_level=3,
        asi_levels=STANDARD_ASI_LEVELS,
        saving_throws=('STR', 'CON'),
        skill_choices=SkillChoices(2, (
            'Animal Handling', 'Athletics', 'Intimidation', 'Nature', 'Perception', 'Survival',
        )),
    ),
    'Bard': ClassRule(
        hit_die=8,
        spellcasting='full',
        subclass_level=3,
        asi_levels=STANDARD_ASI_LEVELS,
        spellcasting_ability='CHA',
        prepared_formula='ability+level',
        cantrip_progression=cantrip_table({1: 2, 4: 3, 10: 4}),
        saving_throws=('DEX', 'CHA'),
        skill_choices=SkillChoices(3, ALL_SKILLS),
    ),
    'Cleric': ClassRule(
        hit_die=8,
        spellcasting='full',
        subclass_level=1,
        asi_levels=STANDARD_ASI_LEVELS,
        spellcasting_ability='WIS',
        prepared_formula='ability+level',
        cantrip_progression=cantrip_table({1: 3, 10: 4}),
        saving_throws=('WIS', 'CHA'),
        skill_choices=SkillChoices(2, ('History', 'Insight', 'Medicine', 'Persuasion', 'Religion')),
    ),
    'Druid': ClassRule(
        hit_die=8,
        spellcasting='full',
        subclass_level=2,
        asi_levels=STANDARD_ASI_LEVELS,
        spellcasting_ability='WIS',
        prepared_formula='ability+level',
        cantrip_progression=cantrip_table({1: 2, 4: 3, 10: 4}),
        saving_throws=('INT', 'WIS'),
        skill_choices=SkillChoices(2, (
            'Arcana', 'Animal Handling', 'Insight', 'Medicine',
            'Nature', 'Perception', 'Religion', 'Survival',
        )),
    ),
    'Fighter': ClassRule(
        hit_die=10,
        spellcasting='none',
        subclass_level=3,
        asi_levels=FIGHTER_ASI_LEVELS,
        saving_throws=('STR', 'CON'),
        skill_choices=SkillChoices(2, FIGHTER_SKILLS),
    ),
    'Eldritch Knight': ClassRule(
        hit_die=10,
        spellcasting='third',
        subclass_level=3,
        asi_levels=FIGHTER_ASI_LEVELS,
        spellcasting_ability='INT',
        cantrip_progression=cantrip_table({3: 2, 10: 3}),
        saving_throws=('STR', 'CON'),
        skill_choices=SkillChoices(2, FIGHTER_SKILLS),
    ),
    'Monk': ClassRule(
        hit_die=8,
        spellcasting='none',
        subclass_level=3,
        asi_levels=STANDARD_ASI_LEVELS,
        saving_throws=('STR', 'DEX'),
        skill_choices=SkillChoices(2, (
            'Acrobatics', 'Athletics', 'History', 'Insight', 'Religion', 'Stealth',
        )),
    ),
    'Paladin': ClassRule(
        hit_die=10,
        spellcasting='half',
        subclass_level=3,
        asi_levels=STANDARD_ASI_LEVELS,
        spellcasting_ability='CHA',
        prepared_formula='ability+halfLevel',
        saving_throws=('WIS', 'CHA'),
        skill_choices=SkillChoices(2, (
            'Athletics', 'Insight', 'Intimidation', 'Medicine', 'Persuasion', 'Religion',
        )),
    ),
    'Ranger': ClassRule(
        hit_die=10,
        spellcasting='half',
        subclass_level=3,
        asi_levels=STANDARD_ASI_LEVELS,
        spellcasting_ability='WIS',
        prepared_formula='ability+halfLevel',
        saving_throws=('STR', 'DEX'),
        skill_choices=SkillChoices(3, (
            'Animal Handling', 'Athletics', 'Insight', 'Investigation',
            'Nature', 'Perception', 'Stealth', 'Survival',
        )),
    ),
    'Rogue': ClassRule(
        hit_die=8,
        spellcasting='none',
        subclass_level=3,
        asi_levels=ROGUE_ASI_LEVELS,
        saving_throws=('DEX', 'INT'),
        skill_choices=SkillChoices(4, ROGUE_SKILLS),
    ),
    'Arcane Trickster': ClassRule(
        hit_die=8,
        spellcasting='third',
        subclass_level=3,
        asi_levels=ROGUE_ASI_LEVELS,
        spellcasting_ability='INT',
        cantrip_progression=cantrip_table({3: 2, 9: 3}),
        saving_throws=('DEX', 'INT'),
        skill_choices=SkillChoices(4, ROGUE_SKILLS),
    ),
    'Sorcerer': ClassRule(
        hit_die=6,
        spellcasting='full',
        subclass_level=1,
        asi_levels=STANDARD_ASI_LEVELS,
        spellcasting_ability='CHA',
        prepared_formula='ability+level',
        cantrip_progression=cantrip_table({1: 4, 10: 5}),
        saving_throws=('CON', 'CHA'),
        skill_choices=SkillChoices(2, (
            'Arcana', 'Deception', 'Insight', 'Intimidation', 'Persuasion', 'Religion',
        )),
    ),
    'Warlock': ClassRule(
        hit_die=8,
        spellcasting='pact',
        subclass_level=3,
        asi_levels=STANDARD_ASI_LEVELS,
        spellcasting_ability='CHA',
        cantrip_progression=cantrip_table({1: 2, 6: 3, 10: 4, 14: 5, 18: 6}),
        saving_throws=('WIS', 'CHA'),
        skill_choices=SkillChoices(2, (
            'Arcana', 'Deception', 'History', 'Intimidation', 'Investigation', 'Nature', 'Religion',
        )),
    ),
    'Wizard': ClassRule(
        hit_die=6,
        spellcasting='full',
        subclass_level=2,
        asi_levels=STANDARD_ASI_LEVELS,
        spellcasting_ability='INT',
        prepared_formula='ability+level',
        cantrip_progression=cantrip_table({1: 3, 4: 4, 10: 5}),
        saving_throws=('INT', 'WIS'),
        skill_choices=SkillChoices(2, (
            'Arcana', 'History', 'Insight', 'Investigation', 'Medicine', 'Religion',
        )),
    ),
    'Artificer': ClassRule(
        hit_die=8,
        spellcasting='half',
        subclass_level=3,
        asi_levels=STANDARD_ASI_LEVELS,
        spellcasting_ability='INT',
        prepared_formula='ability+halfLevel',
        cantrip_progression=cantrip_table({1: 2, 10: 3}),
        saving_throws=('CON', 'INT'),
        skill_choices=SkillChoices(2, (
            'Arcana', 'History', 'Investigation', 'Medicine', 'Nature', 'Perception', 'Sleight of Hand',
        )),
    ),
}

RULES_2014 = EditionRuleSet.create(
    edition='2014',
    classes=CLASS_RULES_2014,
    proficiency_bonus=PROFICIENCY_BONUS,
    multiclass_spell_slots=MULTICLASS_SPELL_SLOTS,
    pact_magic_slots=PACT_MAGIC_SLOTS,
)
