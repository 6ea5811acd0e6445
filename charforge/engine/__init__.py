"""
Rules derivation engine.

- caster_types: caster tier classification (built-in map and rules service)
- spell_slots: effective caster level, shared slot table, pact pool
- spellcasting: save DC, attack bonus, prepared spells, cantrips
- hit_points / proficiency: max HP, proficiency bonus, saves and skills
- derivation: BuildState -> DerivedStats
"""

from .caster_types import (
    CasterTypeClassifier,
    CasterTypeRefinement,
    RulesContentClient,
    RulesServiceError,
    get_caster_type_sync,
    can_cast_spells,
    make_caster_cache,
)
from .spell_slots import (
    calculate_spell_slots,
    calculate_spell_slots_async,
    get_spell_slots,
    get_pact_magic_slots,
    get_caster_level,
)
from .spellcasting import calculate_spellcasting_details
from .hit_points import calculate_max_hp
from .proficiency import get_proficiency_bonus
from .derivation import derive_stats, normalize_classes, refine_caster_tiers

__all__ = [
    'CasterTypeClassifier',
    'CasterTypeRefinement',
    'RulesContentClient',
    'RulesServiceError',
    'get_caster_type_sync',
    'can_cast_spells',
    'make_caster_cache',
    'calculate_spell_slots',
    'calculate_spell_slots_async',
    'get_spell_slots',
    'get_pact_magic_slots',
    'get_caster_level',
    'calculate_spellcasting_details',
    'calculate_max_hp',
    'get_proficiency_bonus',
    'derive_stats',
    'normalize_classes',
    'refine_caster_tiers',
]
