"""
Character backgrounds.

Each background grants skill proficiencies on top of whatever the class
provides, plus tool and language choices and a narrative feature.
"""

from types import MappingProxyType
from typing import Dict, List, Optional

from charforge.core.models import Background, SkillChoices

STANDARD_LANGUAGES = (
    'Abyssal',
    'Celestial',
    'Deep Speech',
    'Draconic',
    'Dwarvish',
    'Elvish',
    'Giant',
    'Gnomish',
    'Goblin',
    'Halfling',
    'Infernal',
    'Orc',
    'Primordial',
    'Sylvan',
    'Undercommon',
)

ARTISAN_TOOLS = (
    "Alchemist's Supplies",
    "Brewer's Supplies",
    "Calligrapher's Supplies",
    "Carpenter's Tools",
    "Cartographer's Tools",
    "Cobbler's Tools",
    "Cook's Utensils",
    "Glassblower's Tools",
    "Jeweler's Tools",
    "Leatherworker's Tools",
    "Mason's Tools",
    "Painter's Supplies",
    "Potter's Tools",
    "Smith's Tools",
    "Tinker's Tools",
    "Weaver's Tools",
    "Woodcarver's Tools",
)


def _skills(*options: str) -> SkillChoices:
    return SkillChoices(count=len(options), options=tuple(options))


def _pick(count: int, options) -> SkillChoices:
    return SkillChoices(count=count, options=tuple(options))


_BACKGROUNDS = [
    Background(
        id='acolyte',
        name='Acolyte',
        description='You have spent your life in the service of a temple to a specific god or gods.',
        skill_choices=_skills('Insight', 'Religion'),
        languages=_pick(2, STANDARD_LANGUAGES),
        feature_name='Shelter of the Faithful',
    ),
    Background(
        id='artisan',
        name='Guild Artisan',
        description='You are a skilled practitioner of your craft and a member of a trade guild.',
        skill_choices=_skills('Insight', 'Persuasion'),
        tools=_pick(1, ARTISAN_TOOLS),
        languages=_pick(1, STANDARD_LANGUAGES),
        feature_name='Guild Membership',
    ),
    Background(
        id='charlatan',
        name='Charlatan',
        description='You are an expert at deception and at reading people.',
        skill_choices=_skills('Deception', 'Sleight of Hand'),
        tools=_pick(2, ('Disguise Kit', 'Forgery Kit')),
        feature_name='False Identity',
    ),
    Background(
        id='criminal',
        name='Criminal',
        description='You are an experienced criminal with a history of breaking the law.',
        skill_choices=_skills('Deception', 'Stealth'),
        tools=_pick(2, ("Thieves' Tools", 'Gaming Set')),
        feature_name='Criminal Contact',
    ),
    Background(
        id='entertainer',
        name='Entertainer',
        description='You thrive in front of an audience. You know how to distract them, '
                    'entertain them, and engage them.',
        skill_choices=_skills('Acrobatics', 'Performance'),
        tools=_pick(1, ('Musical Instrument',)),
        feature_name='By Popular Demand',
    ),
    Background(
        id='folk_hero',
        name='Folk Hero',
        description='You are the champion of the common people, respected and beloved for your deeds.',
        skill_choices=_skills('Animal Handling', 'Survival'),
        tools=_pick(1, ("Artisan's Tools",)),
        feature_name='Rustic Hospitality',
    ),
    Background(
        id='gladiator',
        name='Gladiator',
        description='You have fought in pits, arenas, and on battlefields, always the entertainer, '
                    'sometimes the killer.',
        skill_choices=_skills('Acrobatics', 'Performance'),
        tools=_pick(1, ('Musical Instrument',)),
        feature_name='By Popular Demand',
    ),
    Background(
        id='guard',
        name='Guard',
        description='You have served as a guard for a merchant, noble, or other wealthy individual.',
        skill_choices=_skills('Insight', 'Perception'),
        tools=_pick(1, ('Gaming Set',)),
        feature_name='Wary Eye',
    ),
    Background(
        id='hermit',
        name='Hermit',
        description='You have withdrawn from society into solitude, either out of choice or circumstance.',
        skill_choices=_skills('Medicine', 'Religion'),
        tools=_pick(1, ('Herbalism Kit',)),
        languages=_pick(1, STANDARD_LANGUAGES),
        feature_name='Discovery',
    ),
    Background(
        id='noble',
        name='Noble',
        description='You understand wealth, power, and privilege. You were born into high society.',
        skill_choices=_skills('Insight', 'Persuasion'),
        languages=_pick(1, STANDARD_LANGUAGES),
        feature_name='Position of Privilege',
    ),
    Background(
        id='outlander',
        name='Outlander',
        description='You grew up in the wilds, far from civilization and its comforts.',
        skill_choices=_skills('Athletics', 'Survival'),
        tools=_pick(1, ('Musical Instrument',)),
        languages=_pick(1, STANDARD_LANGUAGES),
        feature_name='Wanderer',
    ),
    Background(
        id='sage',
        name='Sage',
        description='You spent years learning the lore of the multiverse.',
        skill_choices=_skills('Arcana', 'History'),
        languages=_pick(2, STANDARD_LANGUAGES),
        feature_name='Researcher',
    ),
    Background(
        id='sailor',
        name='Sailor',
        description="You sailed on a seagoing vessel for years. You feel more comfortable on a "
                    "ship's deck than on solid ground.",
        skill_choices=_skills('Athletics', 'Perception'),
        tools=_pick(1, ("Navigator's Tools", 'Vehicles (water)')),
        feature_name="Ship's Passage",
    ),
    Background(
        id='soldier',
        name='Soldier',
        description='You fought in a large war as a member of an organized army.',
        skill_choices=_skills('Athletics', 'Intimidation'),
        tools=_pick(1, ('Gaming Set', 'Vehicles (land)')),
        feature_name='Military Rank',
    ),
    Background(
        id='urchin',
        name='Urchin',
        description='You grew up on the streets alone, orphaned, and poor.',
        skill_choices=_skills('Sleight of Hand', 'Stealth'),
        tools=_pick(2, ('Disguise Kit', "Thieves' Tools")),
        feature_name='City Secrets',
    ),
]

BACKGROUNDS = MappingProxyType({background.id: background for background in _BACKGROUNDS})


def get_background(background_id: Optional[str]) -> Optional[Background]:
    """Background by id, or None when unknown."""
    if not background_id:
        return None
    return BACKGROUNDS.get(background_id)


def get_all_background_ids() -> List[str]:
    return list(BACKGROUNDS.keys())


def get_background_options() -> List[Dict[str, str]]:
    """Id/name pairs for a background picker."""
    return [{'id': background.id, 'name': background.name} for background in BACKGROUNDS.values()]
