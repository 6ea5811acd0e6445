"""
Feats catalogue.

Holds the six plain ability score increases (+2 to one ability) and a set
of classic feats. Feats marked with a single edition are only offered for
that edition.
"""

import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Optional, Tuple

from charforge.core.models import AbilityBonus, Feat, FeatPrerequisites

logger = logging.getLogger(__name__)

FEAT_TYPES = ('ability_bonus', 'feat')

_ABILITY_TITLES = {
    'STR': 'Strength',
    'DEX': 'Dexterity',
    'CON': 'Constitution',
    'INT': 'Intelligence',
    'WIS': 'Wisdom',
    'CHA': 'Charisma',
}


def _ability_score_increase(ability: str) -> Feat:
    title = _ABILITY_TITLES[ability]
    return Feat(
        id=f'asi_{title.lower()}',
        name=f'Ability Score Increase (+2 {ability})',
        description=f'Increase your {title} score by 2, to a maximum of 20.',
        type='ability_bonus',
        ability_bonus=AbilityBonus(ability, 2),
    )


def _requires(**abilities: int) -> FeatPrerequisites:
    return FeatPrerequisites(abilities=MappingProxyType(abilities))


_FEATS = [_ability_score_increase(ability) for ability in _ABILITY_TITLES] + [
    # Classic feats
    Feat(
        id='alert',
        name='Alert',
        description="Always on the lookout for danger, you gain the following benefits: You gain a +5 "
                    "bonus to initiative. You can't be surprised while you are conscious.",
        type='feat',
        benefits=('+5 to initiative', 'Cannot be surprised while conscious'),
    ),
    Feat(
        id='athlete',
        name='Athlete',
        description='You have undergone extensive physical training. You gain the following benefits: '
                    'You can add half your proficiency bonus to any Strength or Dexterity check you '
                    'make. You gain proficiency in acrobatics or athletics (your choice).',
        type='feat',
        benefits=('+1/2 proficiency to STR/DEX checks', 'Proficiency in Acrobatics or Athletics'),
    ),
    Feat(
        id='defensive_duelist',
        name='Defensive Duelist',
        description='When you are wielding a finesse weapon with which you are proficient and another '
                    'creature hits you with a melee attack, you can use your reaction to add your '
                    'proficiency bonus to your AC for that attack, potentially causing the attack to miss.',
        type='feat',
        prerequisites=_requires(DEX=13),
        benefits=('Reaction to add proficiency bonus to AC when hit with melee attack',),
    ),
    Feat(
        id='dual_wielder',
        name='Dual Wielder',
        description="You master fighting with two weapons. You gain the following benefits: You can use "
                    "two-weapon fighting even when the one-handed melee weapons you are wielding aren't "
                    "light. You can draw or stow two one-handed weapons when you would normally be able "
                    "to draw or stow only one.",
        type='feat',
        benefits=('Two-weapon fighting with any one-handed melee weapons', 'Draw/stow two one-handed weapons'),
    ),
    Feat(
        id='great_weapon_master',
        name='Great Weapon Master',
        description="You've learned to put the weight of a weapon to your advantage. You gain the "
                    "following benefits: On your turn, when you score a critical hit or reduce a creature "
                    "to 0 hit points with a melee weapon attack, you can make one melee weapon attack as a "
                    "bonus action. You can use a bonus action to make a melee attack with a heavy weapon "
                    "that has the two-handed property.",
        type='feat',
        prerequisites=_requires(STR=13),
        benefits=('Bonus action attack on critical hit or kill', 'Bonus action attack with heavy two-handed weapon'),
    ),
    Feat(
        id='mobile',
        name='Mobile',
        description="You are exceptionally speedy and agile. You gain the following benefits: Your speed "
                    "increases by 10 feet. When you make a melee attack against a creature, you don't "
                    "provoke opportunity attacks from that creature until the end of your next turn.",
        type='feat',
        benefits=('+10 feet movement speed', 'No opportunity attacks after melee attack'),
    ),
    Feat(
        id='polearm_master',
        name='Polearm Master',
        description='You can keep your enemies at bay with reach weapons. You gain the following benefits: '
                    'When you take the Attack action and attack with only a glaive, halberd, pike, '
                    'quarterstaff, or spear, you can use a bonus action to make a melee attack with the '
                    'opposite end of the weapon. You can attack with a polearm twice, instead of once, '
                    'when you take the Attack action.',
        type='feat',
        benefits=('Bonus action attack with opposite end of polearm', 'Extra polearm attack with Attack action'),
        edition='2014',
    ),
    Feat(
        id='resilient',
        name='Resilient',
        description='Choose one ability score. You gain the following benefits: Increase the chosen '
                    'ability score by 1, to a maximum of 20. You gain proficiency in saving throws using '
                    'the chosen ability.',
        type='feat',
        # The player picks the ability; STR is only the default
        alternative_bonus=AbilityBonus('STR', 1),
        benefits=('Proficiency in saves for chosen ability',),
    ),
    Feat(
        id='savage_attacker',
        name='Savage Attacker',
        description='Once per turn when you roll damage for a weapon attack, you can reroll the damage '
                    'dice and use either total.',
        type='feat',
        benefits=('Reroll weapon damage dice once per turn',),
    ),
    Feat(
        id='sentinel',
        name='Sentinel',
        description="You have mastered melee attacks and can quickly intercept unwary foes. You gain the "
                    "following benefits: When a hostile creature's turn ends, you can use your reaction to "
                    "make a melee weapon attack against it. You can use your reaction to make a melee "
                    "weapon attack when a creature within 5 feet of you uses the Dodge action.",
        type='feat',
        benefits=('Reaction melee attack when enemy turn ends', 'Reaction melee attack when enemy uses Dodge'),
    ),
    Feat(
        id='sharpshooter',
        name='Sharpshooter',
        description="You have mastered ranged weapons and can make shots that others find impossible. You "
                    "gain the following benefits: Attacking at long range doesn't impose disadvantage on "
                    "your ranged weapon attack rolls. Your ranged weapon attacks ignore half and "
                    "three-quarters cover.",
        type='feat',
        prerequisites=_requires(DEX=13),
        benefits=('No disadvantage on long range attacks', 'Ignore half and three-quarters cover'),
    ),
    Feat(
        id='war_caster',
        name='War Caster',
        description='You have practiced casting spells in the midst of combat, learning techniques that '
                    'grant you the following benefits: You have advantage on Constitution saving throws '
                    'that you make to maintain your concentration on a spell when you take damage. You can '
                    'perform the somatic components of spells even when you have weapons or a shield in '
                    'one or both hands.',
        type='feat',
        prerequisites=_requires(INT=13),
        benefits=('Advantage on concentration saves', 'Somatic components with weapons/shield'),
    ),

    # Utility feats
    Feat(
        id='acrobatics_expert',
        name='Acrobatics Expert',
        description='You are an expert at moving acrobatically. You gain proficiency in Acrobatics, and '
                    'your proficiency bonus is doubled for Acrobatics checks.',
        type='feat',
        benefits=('Proficiency in Acrobatics with double bonus',),
    ),
    Feat(
        id='actor',
        name='Actor',
        description="Skilled at mimicry and dramatics, you gain the following benefits: Increase your "
                    "Charisma score by 1, to a maximum of 20. You gain proficiency in the Deception and "
                    "Performance skills. You can mimic the speech of a person you have heard speak for at "
                    "least 1 minute, but must make a Charisma (Deception) check against a listener's "
                    "Wisdom (Insight) check.",
        type='feat',
        alternative_bonus=AbilityBonus('CHA', 1),
        benefits=('Proficiency in Deception and Performance', 'Mimic speech of others'),
    ),
    Feat(
        id='magic_initiate',
        name='Magic Initiate',
        description="Choose a class: bard, cleric, druid, sorcerer, warlock, or wizard. You learn two "
                    "cantrips of your choice from that class's spell list, and you learn one 1st-level "
                    "spell from that list.",
        type='feat',
        benefits=('Two cantrips and one 1st-level spell from chosen class',),
    ),
    Feat(
        id='observant',
        name='Observant',
        description="Quick to notice details of your environment, you gain the following benefits: "
                    "Increase your Wisdom or Intelligence score by 1, to a maximum of 20. If you can see a "
                    "creature's mouth while it is speaking a language you understand, you can interpret "
                    "what it's saying by reading its lips.",
        type='feat',
        alternative_bonus=AbilityBonus('WIS', 1),
        benefits=('Lip reading ability',),
    ),
    Feat(
        id='lucky',
        name='Lucky',
        description='You are blessed with inexplicable luck. You have 3 luck points. Whenever you make an '
                    'attack roll, ability check, or saving throw, you can spend one luck point to roll an '
                    'additional d20 and choose which of the d20s to use.',
        type='feat',
        benefits=('3 luck points per day', 'Reroll attacks/checks/saves'),
    ),
    Feat(
        id='linguist',
        name='Linguist',
        description='You have studied languages and symbols, gaining the following benefits: Increase '
                    'your Intelligence score by 1, to a maximum of 20. You learn three languages of your '
                    'choice. You can identify written languages with a 10-minute examination.',
        type='feat',
        alternative_bonus=AbilityBonus('INT', 1),
        benefits=('Three bonus languages', 'Identify written languages with examination'),
    ),
    Feat(
        id='skilled',
        name='Skilled',
        description='You gain proficiency in any combination of three skills or tools of your choice.',
        type='feat',
        benefits=('Proficiency in three skills or tools',),
    ),
]

FEATS = MappingProxyType({feat.id: feat for feat in _FEATS})


def get_feat(feat_id: Optional[str]) -> Optional[Feat]:
    """Feat by id, or None when unknown."""
    if not feat_id:
        return None
    return FEATS.get(feat_id)


def get_all_feat_ids() -> List[str]:
    return list(FEATS.keys())


def get_feat_options(filter_type: Optional[str] = 'all') -> List[Dict[str, str]]:
    """
    Id/name pairs for a feat picker.

    Args:
        filter_type: 'ability_bonus', 'feat' or 'all' (None means 'all')
    """
    filter_type = filter_type or 'all'
    return [
        {'id': feat.id, 'name': feat.name}
        for feat in FEATS.values()
        if filter_type == 'all' or feat.type == filter_type
    ]


def _is_combat(feat: Feat) -> bool:
    return any('attack' in benefit or 'damage' in benefit for benefit in feat.benefits)


def get_asi_feats() -> List[Feat]:
    return [feat for feat in FEATS.values() if feat.type == 'ability_bonus']


def get_combat_feats() -> List[Feat]:
    """Feats with a benefit that mentions attacks or damage."""
    return [feat for feat in FEATS.values() if feat.type == 'feat' and _is_combat(feat)]


def get_utility_feats() -> List[Feat]:
    return [feat for feat in FEATS.values() if feat.type == 'feat' and not _is_combat(feat)]


def known_feat_ids(feat_ids: Iterable[str], edition: str) -> Tuple[str, ...]:
    """
    Keep the feat ids the catalogue knows and offers for an edition.

    Unknown or unavailable ids are dropped and logged at DEBUG.
    """
    known = []
    for feat_id in feat_ids:
        feat = get_feat(feat_id)
        if feat is None or not feat.available_in(edition):
            logger.debug(f"Ignoring feat {feat_id}: not available for {edition} rules")
            continue
        known.append(feat_id)
    return tuple(known)
