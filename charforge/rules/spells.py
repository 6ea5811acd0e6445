"""
Spells catalogue.

Every entry carries its level (0 for cantrips), school, casting details and
the classes whose spell lists include it. Lookups and filters return spells
in catalogue order.
"""

import logging
from types import MappingProxyType
from typing import Iterable, List, Optional, Tuple

from charforge.core.models import Spell, SpellComponents

logger = logging.getLogger(__name__)

SPELL_SCHOOLS = (
    'Abjuration',
    'Conjuration',
    'Divination',
    'Enchantment',
    'Evocation',
    'Illusion',
    'Necromancy',
    'Transmutation',
)

SPELL_CLASSES = ('Bard', 'Cleric', 'Druid', 'Paladin', 'Ranger', 'Sorcerer', 'Warlock', 'Wizard')

VS = SpellComponents(verbal=True, somatic=True)
V = SpellComponents(verbal=True, somatic=False)
S = SpellComponents(verbal=False, somatic=True)


def _vsm(material: str) -> SpellComponents:
    return SpellComponents(verbal=True, somatic=True, material=material)


def _spell(spell_id, name, level, school, casting_time, spell_range, components, duration,
           description, classes, **flags) -> Spell:
    return Spell(id=spell_id, name=name, level=level, school=school, casting_time=casting_time,
                 range=spell_range, components=components, duration=duration,
                 description=description, classes=tuple(classes), **flags)


_SPELLS = [
    # Cantrips
    _spell('acid_splash', 'Acid Splash', 0, 'Conjuration', '1 action', '60 feet', VS, 'Instantaneous',
           'You hurl a bubble of acid. Choose one creature within range, or choose two creatures within '
           'range that are within 5 feet of each other. A target must succeed on a Dexterity saving throw '
           'or take 1d6 acid damage.',
           ['Sorcerer', 'Wizard']),
    _spell('fire_bolt', 'Fire Bolt', 0, 'Evocation', '1 action', '120 feet', VS, 'Instantaneous',
           'You hurl a mote of fire at a creature or object within range. Make a ranged spell attack '
           'against the target. On a hit, the target takes 1d10 fire damage.',
           ['Sorcerer', 'Wizard']),
    _spell('mage_hand', 'Mage Hand', 0, 'Conjuration', '1 action', '30 feet', VS, '1 minute',
           'A spectral, floating hand appears at a point you choose within range. The hand lasts for the '
           'duration or until you dismiss it as an action. You can use your action to control the hand.',
           ['Bard', 'Sorcerer', 'Warlock', 'Wizard']),
    _spell('prestidigitation', 'Prestidigitation', 0, 'Transmutation', '1 action', '10 feet', VS,
           'Up to 1 hour',
           'This spell is a minor magical trick that novice spellcasters use for practice. You create one '
           'of several minor effects.',
           ['Bard', 'Sorcerer', 'Warlock', 'Wizard']),
    _spell('sacred_flame', 'Sacred Flame', 0, 'Evocation', '1 action', '60 feet', VS, 'Instantaneous',
           'Flame-like radiance descends on a creature that you can see within range. The target must '
           'succeed on a Dexterity saving throw or take 1d8 radiant damage.',
           ['Cleric']),
    _spell('eldritch_blast', 'Eldritch Blast', 0, 'Evocation', '1 action', '120 feet', VS, 'Instantaneous',
           'A beam of crackling energy streaks toward a creature within range. Make a ranged spell attack '
           'against the target. On a hit, the target takes 1d10 force damage.',
           ['Warlock']),

    # 1st level
    _spell('magic_missile', 'Magic Missile', 1, 'Evocation', '1 action', '120 feet', VS, 'Instantaneous',
           'You create three glowing darts of magical force. Each dart hits a creature of your choice that '
           'you can see within range. A dart deals 1d4 + 1 force damage to its target.',
           ['Sorcerer', 'Wizard']),
    _spell('shield', 'Shield', 1, 'Abjuration', '1 reaction', 'Self', VS, '1 round',
           'An invisible barrier of magical force appears and protects you. Until the start of your next '
           'turn, you have a +5 bonus to AC, including against the triggering attack.',
           ['Sorcerer', 'Wizard']),
    _spell('cure_wounds', 'Cure Wounds', 1, 'Evocation', '1 action', 'Touch', VS, 'Instantaneous',
           'A creature you touch regains a number of hit points equal to 1d8 + your spellcasting ability '
           'modifier.',
           ['Bard', 'Cleric', 'Druid', 'Paladin', 'Ranger']),
    _spell('healing_word', 'Healing Word', 1, 'Evocation', '1 bonus action', '60 feet', V, 'Instantaneous',
           'A creature of your choice that you can see within range regains hit points equal to 1d4 + your '
           'spellcasting ability modifier.',
           ['Bard', 'Cleric', 'Druid']),
    _spell('detect_magic', 'Detect Magic', 1, 'Divination', '1 action', 'Self', VS,
           'Concentration, up to 10 minutes',
           'For the duration, you sense the presence of magic within 30 feet of you. If you sense magic in '
           'this way, you can use your action to see a faint aura around any visible creature or object in '
           'the area that bears magic.',
           ['Bard', 'Cleric', 'Druid', 'Paladin', 'Ranger', 'Sorcerer', 'Wizard'],
           ritual=True, concentration=True),
    _spell('burning_hands', 'Burning Hands', 1, 'Evocation', '1 action', 'Self (15-foot cone)', VS,
           'Instantaneous',
           'As you hold your hands with thumbs touching and fingers spread, a thin sheet of flames shoots '
           'forth from your outstretched fingertips. Each creature in a 15-foot cone must make a Dexterity '
           'saving throw. A creature takes 3d6 fire damage on a failed save, or half as much damage on a '
           'successful one.',
           ['Sorcerer', 'Wizard']),

    # 2nd level
    _spell('scorching_ray', 'Scorching Ray', 2, 'Evocation', '1 action', '120 feet', VS, 'Instantaneous',
           'You create three rays of fire and hurl them at targets within range. You can hurl them at one '
           'target or several. Make a ranged spell attack for each ray. On a hit, the target takes 2d6 '
           'fire damage.',
           ['Sorcerer', 'Wizard']),
    _spell('misty_step', 'Misty Step', 2, 'Conjuration', '1 bonus action', 'Self', V, 'Instantaneous',
           'Briefly surrounded by silvery mist, you teleport up to 30 feet to an unoccupied space that you '
           'can see.',
           ['Sorcerer', 'Warlock', 'Wizard']),
    _spell('hold_person', 'Hold Person', 2, 'Enchantment', '1 action', '60 feet',
           _vsm('a small, straight piece of iron'), 'Concentration, up to 1 minute',
           'Choose a humanoid that you can see within range. The target must succeed on a Wisdom saving '
           'throw or be paralyzed for the duration.',
           ['Bard', 'Cleric', 'Druid', 'Sorcerer', 'Warlock', 'Wizard'],
           concentration=True),
    _spell('spiritual_weapon', 'Spiritual Weapon', 2, 'Evocation', '1 bonus action', '60 feet', VS,
           '1 minute',
           'You create a floating, spectral weapon within range that lasts for the duration or until you '
           'cast this spell again. When you cast the spell, you can make a melee spell attack against a '
           'creature within 5 feet of the weapon.',
           ['Cleric']),

    # 3rd level
    _spell('fireball', 'Fireball', 3, 'Evocation', '1 action', '150 feet',
           _vsm('a tiny ball of bat guano and sulfur'), 'Instantaneous',
           'A bright streak flashes from your pointing finger to a point you choose within range and then '
           'blossoms with a low roar into an explosion of flame. Each creature in a 20-foot-radius sphere '
           'centered on that point must make a Dexterity saving throw. A target takes 8d6 fire damage on a '
           'failed save, or half as much damage on a successful one.',
           ['Sorcerer', 'Wizard']),
    _spell('counterspell', 'Counterspell', 3, 'Abjuration', '1 reaction', '60 feet', S, 'Instantaneous',
           'You attempt to interrupt a creature in the process of casting a spell. If the creature is '
           'casting a spell of 3rd level or lower, its spell fails and has no effect.',
           ['Sorcerer', 'Warlock', 'Wizard']),
    _spell('lightning_bolt', 'Lightning Bolt', 3, 'Evocation', '1 action', 'Self (100-foot line)',
           _vsm('a bit of fur and a rod of amber, crystal, or glass'), 'Instantaneous',
           'A stroke of lightning forming a line 100 feet long and 5 feet wide blasts out from you in a '
           'direction you choose. Each creature in the line must make a Dexterity saving throw. A creature '
           'takes 8d6 lightning damage on a failed save, or half as much damage on a successful one.',
           ['Sorcerer', 'Wizard']),
    _spell('revivify', 'Revivify', 3, 'Necromancy', '1 action', 'Touch',
           _vsm('diamonds worth 300 gp, which the spell consumes'), 'Instantaneous',
           "You touch a creature that has died within the last minute. That creature returns to life with "
           "1 hit point. This spell can't return to life a creature that has died of old age, nor can it "
           "restore any missing body parts.",
           ['Cleric', 'Paladin']),

    # 4th level
    _spell('polymorph', 'Polymorph', 4, 'Transmutation', '1 action', '60 feet',
           _vsm('a caterpillar cocoon'), 'Concentration, up to 1 hour',
           'This spell transforms a creature that you can see within range into a new form. An unwilling '
           'creature must make a Wisdom saving throw to avoid the effect. The transformation lasts for the '
           'duration, or until the target drops to 0 hit points or dies.',
           ['Bard', 'Druid', 'Sorcerer', 'Wizard'],
           concentration=True),
    _spell('dimension_door', 'Dimension Door', 4, 'Conjuration', '1 action', '500 feet', V, 'Instantaneous',
           'You teleport yourself from your current location to any other spot within range. You arrive at '
           'exactly the spot desired.',
           ['Bard', 'Sorcerer', 'Warlock', 'Wizard']),

    # 5th level
    _spell('cone_of_cold', 'Cone of Cold', 5, 'Evocation', '1 action', 'Self (60-foot cone)',
           _vsm('a small crystal or glass cone'), 'Instantaneous',
           'A blast of cold air erupts from your hands. Each creature in a 60-foot cone must make a '
           'Constitution saving throw. A creature takes 8d8 cold damage on a failed save, or half as much '
           'damage on a successful one.',
           ['Sorcerer', 'Wizard']),
    _spell('mass_cure_wounds', 'Mass Cure Wounds', 5, 'Evocation', '1 action', '60 feet', VS, 'Instantaneous',
           'A wave of healing energy washes out from a point of your choice within range. Choose up to six '
           'creatures in a 30-foot-radius sphere centered on that point. Each target regains hit points '
           'equal to 3d8 + your spellcasting ability modifier.',
           ['Bard', 'Cleric', 'Druid']),

    # 6th level
    _spell('chain_lightning', 'Chain Lightning', 6, 'Evocation', '1 action', '150 feet',
           _vsm('a bit of fur; a piece of amber, glass, or a crystal rod; and three silver pins'),
           'Instantaneous',
           'You create a bolt of lightning that arcs toward a target of your choice that you can see within '
           'range. Three bolts then leap from that target to as many as three other targets.',
           ['Sorcerer', 'Wizard']),

    # 7th level
    _spell('teleport', 'Teleport', 7, 'Conjuration', '1 action', '10 feet', V, 'Instantaneous',
           'This spell instantly transports you and up to eight willing creatures of your choice that you '
           'can see within range, or a single object that you can see within range, to a destination you '
           'select.',
           ['Bard', 'Sorcerer', 'Wizard']),

    # 8th level
    _spell('sunburst', 'Sunburst', 8, 'Evocation', '1 action', '150 feet',
           _vsm('fire and a piece of sunstone'), 'Instantaneous',
           'Brilliant sunlight flashes in a 60-foot radius centered on a point you choose within range. '
           'Each creature in that light must make a Constitution saving throw.',
           ['Druid', 'Sorcerer', 'Wizard']),

    # 9th level
    _spell('wish', 'Wish', 9, 'Conjuration', '1 action', 'Self', V, 'Instantaneous',
           'Wish is the mightiest spell a mortal creature can cast. By simply speaking aloud, you can alter '
           'the very foundations of reality in accord with your desires.',
           ['Sorcerer', 'Wizard']),
    _spell('meteor_swarm', 'Meteor Swarm', 9, 'Evocation', '1 action', '1 mile', VS, 'Instantaneous',
           'Blazing orbs of fire plummet to the ground at four different points you can see within range. '
           'Each creature in a 40-foot-radius sphere centered on each point you choose must make a '
           'Dexterity saving throw.',
           ['Sorcerer', 'Wizard']),
]

SPELLS = MappingProxyType({spell.id: spell for spell in _SPELLS})


def get_spell(spell_id: Optional[str]) -> Optional[Spell]:
    """Spell by id, or None when unknown."""
    if not spell_id:
        return None
    return SPELLS.get(spell_id)


def get_all_spells() -> List[Spell]:
    return list(SPELLS.values())


def get_spells_by_level(level: int) -> List[Spell]:
    return [spell for spell in SPELLS.values() if spell.level == level]


def get_spells_by_school(school: str) -> List[Spell]:
    return [spell for spell in SPELLS.values() if spell.school == school]


def get_spells_by_class(class_name: str) -> List[Spell]:
    return [spell for spell in SPELLS.values() if class_name in spell.classes]


def search_spells(query: str) -> List[Spell]:
    """Spells whose name contains `query`, ignoring case."""
    query = query.lower()
    return [spell for spell in SPELLS.values() if query in spell.name.lower()]


def filter_spells(level: Optional[int] = None, school: Optional[str] = None,
                  class_name: Optional[str] = None, query: Optional[str] = None) -> List[Spell]:
    """
    Spells matching every given criterion. Criteria left as None (or an
    empty string) do not filter.

    Example:
        filter_spells(level=3, class_name='Wizard') -> Fireball, Counterspell, Lightning Bolt
    """
    results = get_all_spells()
    if level is not None:
        results = [spell for spell in results if spell.level == level]
    if school:
        results = [spell for spell in results if spell.school == school]
    if class_name:
        results = [spell for spell in results if class_name in spell.classes]
    if query:
        lowered = query.lower()
        results = [spell for spell in results if lowered in spell.name.lower()]
    return results


def get_spell_schools() -> List[str]:
    return list(SPELL_SCHOOLS)


def known_spell_ids(spell_ids: Iterable[str]) -> Tuple[str, ...]:
    """Keep the spell ids the catalogue knows; unknown ids are logged at DEBUG and dropped."""
    known = []
    for spell_id in spell_ids:
        if get_spell(spell_id) is None:
            logger.debug(f"Ignoring unknown spell {spell_id}")
            continue
        known.append(spell_id)
    return tuple(known)
