"""
Character derivation.

Turns a BuildState into DerivedStats in a single synchronous pass:

    build state
      -> normalize classes (clamp levels, attach hit die and caster tier)
      -> proficiency bonus
      -> hit points, spell slots, pact pool, spellcasting, proficiencies
      -> feats and spells the catalogues know
      -> DerivedStats

derive_stats() is pure: the same build state always yields an equal result.
The only async step, refine_caster_tiers(), runs outside this pass and hands
back a new BuildState to derive from.
"""

import logging
from dataclasses import replace
from typing import Optional, Tuple

from charforge.core.models import BuildState, ClassLevel, DerivedStats, EditionRuleSet
from charforge.rules.editions import get_rules, clamp_level
from charforge.rules.feats import known_feat_ids
from charforge.rules.spells import known_spell_ids
from charforge.rules.skills import skill_modifiers, saving_throw_modifiers
from .caster_types import CasterTypeRefinement, get_caster_type_sync, normalize_caster_type
from .hit_points import calculate_max_hp, DEFAULT_HIT_DIE
from .proficiency import (
    get_proficiency_bonus,
    saving_throw_proficiencies,
    skill_proficiencies,
    expertise_overlay,
)
from .spell_slots import get_spell_slots, get_pact_magic_for_classes
from .spellcasting import calculate_spellcasting_details

logger = logging.getLogger(__name__)


def normalize_class(cls: ClassLevel, rules: EditionRuleSet) -> ClassLevel:
    """
    Clamp the level and fill in hit die and caster tier.

    Values already set on the ClassLevel win over the rule table. Classes the
    edition does not know get a d8 and the built-in caster tier.
    """
    rule = rules.get_class(cls.class_id)
    if rule is None:
        logger.debug(f"No {rules.edition} rules for class {cls.class_id}, using defaults")
        hit_die = DEFAULT_HIT_DIE
        spellcasting = get_caster_type_sync(cls.class_id)
    else:
        hit_die = rule.hit_die
        spellcasting = rule.spellcasting

    return ClassLevel(
        class_id=cls.class_id,
        level=clamp_level(cls.level),
        spellcasting=normalize_caster_type(cls.spellcasting or spellcasting),
        hit_die=cls.hit_die or hit_die,
    )


def normalize_classes(state: BuildState, rules: Optional[EditionRuleSet] = None) -> Tuple[ClassLevel, ...]:
    """Normalized class list of a build state, in acquisition order."""
    rules = rules or get_rules(state.edition)
    return tuple(normalize_class(cls, rules) for cls in state.classes)


def derive_stats(state: BuildState) -> DerivedStats:
    """
    Compute every derived statistic for a build state.

    Never raises for a structurally valid build state: unknown classes,
    unknown backgrounds, unknown editions and out-of-range levels all resolve
    to defaults.

    Example:
        state = BuildState.from_classes(AbilityScores(intelligence=16), [ClassLevel('Wizard', 5)])
        derive_stats(state).spell_slots -> (4, 3, 2)
    """
    rules = get_rules(state.edition)
    classes = normalize_classes(state, rules)
    abilities = state.abilities

    total_level = state.total_level
    proficiency_bonus = get_proficiency_bonus(total_level, rules.edition)

    saving_throws = saving_throw_proficiencies(classes, rules)
    skills = skill_proficiencies(state.selected_skills, state.background_id)
    expertise = expertise_overlay(state.expertise_skills, skills)

    stats = DerivedStats(
        total_level=total_level,
        proficiency_bonus=proficiency_bonus,
        max_hp=calculate_max_hp(classes, abilities.modifier('CON')),
        spell_slots=tuple(get_spell_slots(classes, rules)),
        pact_magic_slots=get_pact_magic_for_classes(classes, rules),
        spellcasting=calculate_spellcasting_details(classes, abilities, proficiency_bonus, rules.edition),
        saving_throws=tuple(saving_throws),
        skills=tuple(skills),
        expertise_skills=tuple(expertise),
        ability_modifiers=abilities.modifiers(),
        saving_throw_modifiers=saving_throw_modifiers(abilities, proficiency_bonus, saving_throws),
        skill_modifiers=skill_modifiers(abilities, proficiency_bonus, skills, expertise),
        classes=classes,
        feats=known_feat_ids(state.feat_ids, rules.edition),
        spells=known_spell_ids(state.spell_ids),
    )
    logger.debug(f"Derived stats: level {total_level}, {len(classes)} class(es), max HP {stats.max_hp}")
    return stats


async def refine_caster_tiers(state: BuildState, refinement: CasterTypeRefinement) -> BuildState:
    """
    Ask the rules service for each class's caster tier.

    Each class position is its own refinement slot ('class-0', 'class-1', ...).
    A tier that comes back after the same position was re-requested for a
    different class is dropped and the class keeps its current tier.

    Returns:
        A new BuildState whose classes carry the refined tiers
    """
    refined = []
    for position, cls in enumerate(state.classes):
        tier = await refinement.refine(f"class-{position}", cls.class_id)
        if tier is None:
            refined.append(cls)
        else:
            refined.append(replace(cls, spellcasting=tier))
    return replace(state, classes=tuple(refined))


__all__ = [
    'normalize_class',
    'normalize_classes',
    'derive_stats',
    'refine_caster_tiers',
]
