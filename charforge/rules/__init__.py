"""
Static rule data for charforge.

- editions: per-edition class rules and level tables
- backgrounds: background catalogue and granted skills
- skills: skill/ability map, check and save modifiers
- abilities: ability modifier helpers
- death_saves: death saving throw tallies
- feats, spells: feat and spell catalogues
"""

from .editions import get_rules, list_classes, RULES_2014, RULES_2024
from .backgrounds import BACKGROUNDS, get_background, get_all_background_ids, get_background_options
from .abilities import get_ability_modifier, get_ability_modifiers, format_modifier
from .skills import SKILL_ABILITY_MAP, SKILLS, get_skill_modifier, get_save_modifier
from .death_saves import DeathSaves, is_dead, is_stable
from .feats import FEATS, get_feat, get_all_feat_ids, get_feat_options
from .spells import SPELLS, get_spell, filter_spells, get_spell_schools

__all__ = [
    'get_rules',
    'list_classes',
    'RULES_2014',
    'RULES_2024',
    'BACKGROUNDS',
    'get_background',
    'get_all_background_ids',
    'get_background_options',
    'get_ability_modifier',
    'get_ability_modifiers',
    'format_modifier',
    'SKILL_ABILITY_MAP',
    'SKILLS',
    'get_skill_modifier',
    'get_save_modifier',
    'DeathSaves',
    'is_dead',
    'is_stable',
    'FEATS',
    'get_feat',
    'get_all_feat_ids',
    'get_feat_options',
    'SPELLS',
    'get_spell',
    'filter_spells',
    'get_spell_schools',
]
