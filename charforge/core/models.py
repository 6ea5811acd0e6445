"""
Core data models for charforge.

Inputs:
- AbilityScores: the six ability scores
- ClassLevel: one class held by a character and its level
- LevelProgression: one row of a per-level progression log
- BuildState: everything the player edits, normalized once at the boundary

Rule data:
- SkillChoices, ClassRule, EditionRuleSet, Background
- Feat, Spell: catalogue entries picked along a progression log

Outputs:
- SpellSlotInfo, PactMagicSlots, SpellcastingDetails, DerivedStats
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional, Dict, Any, Tuple, Iterable, Mapping, Literal

SpellcastingType = Literal['full', 'half', 'third', 'pact', 'none']
CasterType = Literal['full', 'half', 'third', 'pact', 'none', 'quarter']
PreparedFormula = Literal['ability+level', 'ability+halfLevel', 'ability+pb']

ABILITIES: Tuple[str, ...] = ('STR', 'DEX', 'CON', 'INT', 'WIS', 'CHA')

ABILITY_NAMES: Dict[str, str] = {
    'strength': 'STR',
    'dexterity': 'DEX',
    'constitution': 'CON',
    'intelligence': 'INT',
    'wisdom': 'WIS',
    'charisma': 'CHA',
}

_ABILITY_FIELDS: Dict[str, str] = {code: name for name, code in ABILITY_NAMES.items()}


def normalize_ability(key: str) -> str:
    """
    Normalize an ability key to its three-letter code.

    Examples:
        >>> normalize_ability('wisdom')
        'WIS'
        >>> normalize_ability('cha')
        'CHA'
    """
    lowered = key.strip().lower()
    if lowered in ABILITY_NAMES:
        return ABILITY_NAMES[lowered]
    code = lowered.upper()
    if code not in _ABILITY_FIELDS:
        raise KeyError(f"Unknown ability: {key}")
    return code


@dataclass(frozen=True)
class AbilityScores:
    """
    The six ability scores of a character.

    Scores are not clamped here; a 1-20 range is typical but the engine
    accepts whatever the build state holds.
    """
    strength: int = 10
    dexterity: int = 10
    constitution: int = 10
    intelligence: int = 10
    wisdom: int = 10
    charisma: int = 10

    @staticmethod
    def calculate_modifier(score: int) -> int:
        """
        Calculate ability modifier from score.

        Formula: (score - 10) // 2

        Examples:
            calculate_modifier(10) -> 0
            calculate_modifier(16) -> +3
            calculate_modifier(8) -> -1
        """
        return (score - 10) // 2

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> 'AbilityScores':
        """
        Build scores from a mapping keyed by code ('STR') or name ('strength').

        Missing abilities default to 10.
        """
        values = {}
        for key, value in data.items():
            values[_ABILITY_FIELDS[normalize_ability(key)]] = int(value)
        return AbilityScores(**values)

    def score(self, ability: str) -> int:
        """Score for an ability code or name."""
        return getattr(self, _ABILITY_FIELDS[normalize_ability(ability)])

    def modifier(self, ability: str) -> int:
        """Modifier for an ability code or name."""
        return self.calculate_modifier(self.score(ability))

    def modifiers(self) -> Dict[str, int]:
        """Modifiers for all six abilities keyed by code."""
        return {code: self.modifier(code) for code in ABILITIES}

    def to_dict(self) -> Dict[str, int]:
        """Scores keyed by ability code."""
        return {code: self.score(code) for code in ABILITIES}


@dataclass(frozen=True)
class ClassLevel:
    """
    One class held by a character.

    Attributes:
        class_id: Class name as used by the rule tables (e.g. 'Wizard')
        level: Levels held in this class (1-20)
        spellcasting: Caster tier, filled in during normalization
        hit_die: Hit die size, filled in during normalization
    """
    class_id: str
    level: int
    spellcasting: Optional[str] = None
    hit_die: Optional[int] = None

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> 'ClassLevel':
        """Accepts snake_case or camelCase keys."""
        spellcasting = (
            data.get('spellcasting')
            or data.get('spellcasting_tier')
            or data.get('spellcastingTier')
        )
        hit_die = data.get('hit_die', data.get('hitDie'))
        return ClassLevel(
            class_id=data.get('class_id') or data.get('classId'),
            level=int(data.get('level', 1)),
            spellcasting=spellcasting,
            hit_die=int(hit_die) if hit_die is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'class_id': self.class_id,
            'level': self.level,
            'spellcasting': self.spellcasting,
            'hit_die': self.hit_die,
        }


@dataclass(frozen=True)
class LevelProgression:
    """One row of a per-level progression log: the class taken at a character level."""
    level: int
    class_id: str
    subclass_id: Optional[str] = None
    feat_ids: Tuple[str, ...] = ()
    spell_ids: Tuple[str, ...] = ()

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> 'LevelProgression':
        return LevelProgression(
            level=int(data['level']),
            class_id=data.get('class_id') or data.get('classId'),
            subclass_id=data.get('subclass_id') or data.get('subclassId'),
            feat_ids=tuple(data.get('feat_ids') or data.get('featIds') or ()),
            spell_ids=tuple(data.get('spell_ids') or data.get('spellIds') or ()),
        )


def _ordered_unique(values: Iterable[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(values))


def progression_choices(progression: Iterable[LevelProgression]) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    """
    Feat and spell ids picked along a progression log, in level order.

    Returns:
        (feat_ids, spell_ids), each without duplicates
    """
    rows = sorted(progression, key=lambda row: row.level)
    feat_ids = _ordered_unique(feat_id for row in rows for feat_id in row.feat_ids)
    spell_ids = _ordered_unique(spell_id for row in rows for spell_id in row.spell_ids)
    return feat_ids, spell_ids


def collapse_progression(progression: Iterable[LevelProgression]) -> Tuple[ClassLevel, ...]:
    """
    Collapse a per-level progression log into one ClassLevel per class.

    Each class keeps the highest level recorded for it. Classes stay in the
    order they first appear in the log.

    Examples:
        Wizard@1, Wizard@2, Wizard@3 -> (ClassLevel('Wizard', 3),)
    """
    levels: Dict[str, int] = {}
    for row in progression:
        levels[row.class_id] = max(levels.get(row.class_id, 0), row.level)
    return tuple(ClassLevel(class_id=class_id, level=level) for class_id, level in levels.items())


def merge_class_levels(classes: Iterable[ClassLevel]) -> Tuple[ClassLevel, ...]:
    """
    Enforce one entry per class_id, keeping the first entry's position and the
    highest level seen.
    """
    merged: Dict[str, ClassLevel] = {}
    for cls in classes:
        existing = merged.get(cls.class_id)
        if existing is None or cls.level > existing.level:
            merged[cls.class_id] = cls
    return tuple(merged.values())


@dataclass(frozen=True)
class BuildState:
    """
    The full set of player-editable inputs.

    Always holds a flat, de-duplicated class list; progression logs are
    collapsed by from_progression() before a BuildState exists. Feat and
    spell ids only come from a progression log.
    """
    abilities: AbilityScores
    classes: Tuple[ClassLevel, ...] = ()
    edition: str = '2014'
    background_id: Optional[str] = None
    selected_skills: Tuple[str, ...] = ()
    expertise_skills: Tuple[str, ...] = ()
    level: Optional[int] = None
    feat_ids: Tuple[str, ...] = ()
    spell_ids: Tuple[str, ...] = ()

    @staticmethod
    def from_classes(abilities: AbilityScores, classes: Iterable[ClassLevel], **kwargs) -> 'BuildState':
        """Create a build state from a flat class list."""
        return BuildState(abilities=abilities, classes=merge_class_levels(classes), **_tuple_fields(kwargs))

    @staticmethod
    def from_progression(abilities: AbilityScores, progression: Iterable[LevelProgression],
                         **kwargs) -> 'BuildState':
        """
        Create a build state from a per-level progression log.

        Feats and spells picked along the log are carried on the build state.
        """
        rows = list(progression)
        feat_ids, spell_ids = progression_choices(rows)
        return BuildState(abilities=abilities, classes=collapse_progression(rows),
                          feat_ids=feat_ids, spell_ids=spell_ids, **_tuple_fields(kwargs))

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> 'BuildState':
        """
        Create a build state from a JSON-style payload.

        A non-empty 'classProgression' (or 'class_progression') log takes the
        place of 'classes'.
        """
        abilities = AbilityScores.from_dict(data.get('abilities') or {})
        options = {
            'edition': str(data.get('edition') or '2014'),
            'background_id': data.get('background_id') or data.get('backgroundId'),
            'selected_skills': data.get('selected_skills') or data.get('selectedSkills') or (),
            'expertise_skills': data.get('expertise_skills') or data.get('expertiseSkills') or (),
            'level': data.get('level'),
        }
        progression = data.get('class_progression') or data.get('classProgression')
        if progression:
            rows = [LevelProgression.from_dict(row) for row in progression]
            return BuildState.from_progression(abilities, rows, **options)
        classes = [ClassLevel.from_dict(row) for row in data.get('classes') or ()]
        return BuildState.from_classes(abilities, classes, **options)

    @property
    def total_level(self) -> int:
        """Explicit character level if given, else the sum of class levels; at least 1."""
        total = self.level or sum(cls.level for cls in self.classes) or 1
        return max(total, 1)


def _tuple_fields(kwargs: Dict[str, Any]) -> Dict[str, Any]:
    for key in ('selected_skills', 'expertise_skills'):
        if key in kwargs:
            kwargs[key] = tuple(kwargs[key] or ())
    return kwargs


# === Rule data ===

@dataclass(frozen=True)
class SkillChoices:
    """A skill menu: pick `count` skills from `options`."""
    count: int
    options: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {'count': self.count, 'options': list(self.options)}


@dataclass(frozen=True)
class ClassRule:
    """Static rules for one class in one edition."""
    hit_die: int
    spellcasting: str
    subclass_level: int
    asi_levels: Tuple[int, ...]
    saving_throws: Tuple[str, ...] = ()
    skill_choices: SkillChoices = SkillChoices(0, ())
    spellcasting_ability: Optional[str] = None
    prepared_formula: Optional[str] = None
    cantrip_progression: Optional[Mapping[int, int]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'hit_die': self.hit_die,
            'spellcasting': self.spellcasting,
            'subclass_level': self.subclass_level,
            'asi_levels': list(self.asi_levels),
            'saving_throws': list(self.saving_throws),
            'skill_choices': self.skill_choices.to_dict(),
            'spellcasting_ability': self.spellcasting_ability,
            'prepared_formula': self.prepared_formula,
            'cantrip_progression': (
                {str(level): count for level, count in self.cantrip_progression.items()}
                if self.cantrip_progression else None
            ),
        }


@dataclass(frozen=True)
class PactMagicSlots:
    """Pact magic pool: a few slots, all of the same level."""
    slots: int
    slot_level: int

    def to_dict(self) -> Dict[str, int]:
        return {'slots': self.slots, 'slot_level': self.slot_level}


@dataclass(frozen=True)
class EditionRuleSet:
    """
    Immutable rule tables for one edition.

    Level-keyed tables use 1-20 as keys.
    """
    edition: str
    classes: Mapping[str, ClassRule]
    proficiency_bonus_by_level: Mapping[int, int]
    multiclass_spell_slots: Mapping[int, Tuple[int, ...]]
    pact_magic_slots: Mapping[int, PactMagicSlots]

    @staticmethod
    def create(edition: str, classes: Dict[str, ClassRule], proficiency_bonus: Dict[int, int],
               multiclass_spell_slots: Dict[int, Tuple[int, ...]],
               pact_magic_slots: Dict[int, PactMagicSlots]) -> 'EditionRuleSet':
        """Freeze the given tables into a read-only rule set."""
        return EditionRuleSet(
            edition=edition,
            classes=MappingProxyType(dict(classes)),
            proficiency_bonus_by_level=MappingProxyType(dict(proficiency_bonus)),
            multiclass_spell_slots=MappingProxyType(dict(multiclass_spell_slots)),
            pact_magic_slots=MappingProxyType(dict(pact_magic_slots)),
        )

    def get_class(self, class_id: str) -> Optional[ClassRule]:
        """Rule for a class, or None when this edition does not know it."""
        return self.classes.get(class_id)


@dataclass(frozen=True)
class Background:
    """A character background and the proficiencies it grants."""
    id: str
    name: str
    description: str
    skill_choices: SkillChoices
    feature_name: str
    tools: Optional[SkillChoices] = None
    languages: Optional[SkillChoices] = None
    equipment: Tuple[str, ...] = ()

    @property
    def granted_skills(self) -> Tuple[str, ...]:
        """The first `count` skill options, which the background grants outright."""
        return self.skill_choices.options[:self.skill_choices.count]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'skill_choices': self.skill_choices.to_dict(),
            'tools': self.tools.to_dict() if self.tools else None,
            'languages': self.languages.to_dict() if self.languages else None,
            'feature': self.feature_name,
            'equipment': list(self.equipment),
        }


@dataclass(frozen=True)
class AbilityBonus:
    """An ability score increase granted by a feat."""
    ability: str
    bonus: int

    def to_dict(self) -> Dict[str, Any]:
        return {'ability': self.ability, 'bonus': self.bonus}


@dataclass(frozen=True)
class FeatPrerequisites:
    """Minimum level, ability scores and earlier feats a feat requires."""
    min_level: Optional[int] = None
    abilities: Mapping[str, int] = field(default_factory=dict)
    other_feats: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'min_level': self.min_level,
            'abilities': dict(self.abilities),
            'other_feats': list(self.other_feats),
        }


@dataclass(frozen=True)
class Feat:
    """
    A feat, or an ability score increase taken in place of one.

    Attributes:
        type: 'ability_bonus' for plain ability score increases, 'feat' otherwise
        ability_bonus: Fixed increase (ability_bonus feats)
        alternative_bonus: Half-feat increase on top of the feat's benefits
        edition: '2014', '2024' or 'both'
    """
    id: str
    name: str
    description: str
    type: str
    ability_bonus: Optional[AbilityBonus] = None
    alternative_bonus: Optional[AbilityBonus] = None
    prerequisites: Optional[FeatPrerequisites] = None
    benefits: Tuple[str, ...] = ()
    edition: str = 'both'

    def available_in(self, edition: str) -> bool:
        return self.edition in ('both', edition)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'type': self.type,
            'ability_bonus': self.ability_bonus.to_dict() if self.ability_bonus else None,
            'alternative_bonus': self.alternative_bonus.to_dict() if self.alternative_bonus else None,
            'prerequisites': self.prerequisites.to_dict() if self.prerequisites else None,
            'benefits': list(self.benefits),
            'edition': self.edition,
        }


@dataclass(frozen=True)
class SpellComponents:
    verbal: bool
    somatic: bool
    material: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'verbal': self.verbal, 'somatic': self.somatic, 'material': self.material}


@dataclass(frozen=True)
class Spell:
    """A spell catalogue entry. Level 0 is a cantrip."""
    id: str
    name: str
    level: int
    school: str
    casting_time: str
    range: str
    components: SpellComponents
    duration: str
    description: str
    classes: Tuple[str, ...]
    ritual: bool = False
    concentration: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'level': self.level,
            'school': self.school,
            'casting_time': self.casting_time,
            'range': self.range,
            'components': self.components.to_dict(),
            'duration': self.duration,
            'description': self.description,
            'classes': list(self.classes),
            'ritual': self.ritual,
            'concentration': self.concentration,
        }


# === Derived output ===

@dataclass(frozen=True)
class SpellSlotInfo:
    """
    One spell slot row for the single-class slot tracker.

    `locked` marks a slot level present in the table but with zero slots.
    `slot_level` is only set for pact magic rows.
    """
    level: int
    maximum: int
    locked: bool
    slot_level: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {'level': self.level, 'maximum': self.maximum, 'locked': self.locked}
        if self.slot_level is not None:
            data['slot_level'] = self.slot_level
        return data


@dataclass(frozen=True)
class SpellcastingDetails:
    """Spellcasting numbers for the character's primary spellcasting class."""
    ability: Optional[str] = None
    save_dc: Optional[int] = None
    attack_bonus: Optional[int] = None
    prepared_count: int = 0
    cantrips_known: int = 0

    @property
    def is_spellcaster(self) -> bool:
        return self.ability is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'ability': self.ability,
            'save_dc': self.save_dc,
            'attack_bonus': self.attack_bonus,
            'prepared_count': self.prepared_count,
            'cantrips_known': self.cantrips_known,
        }


NOT_A_SPELLCASTER = SpellcastingDetails()


@dataclass(frozen=True)
class DerivedStats:
    """
    Everything computed from a build state.

    Recomputed from scratch on every change; has no identity of its own.
    `spell_slots` index 0 holds the level-1 slot count.
    """
    total_level: int
    proficiency_bonus: int
    max_hp: int
    spell_slots: Tuple[int, ...]
    pact_magic_slots: Optional[PactMagicSlots]
    spellcasting: SpellcastingDetails
    saving_throws: Tuple[str, ...]
    skills: Tuple[str, ...]
    expertise_skills: Tuple[str, ...]
    ability_modifiers: Mapping[str, int] = field(default_factory=dict)
    saving_throw_modifiers: Mapping[str, int] = field(default_factory=dict)
    skill_modifiers: Mapping[str, int] = field(default_factory=dict)
    classes: Tuple[ClassLevel, ...] = ()
    feats: Tuple[str, ...] = ()
    spells: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        return {
            'total_level': self.total_level,
            'proficiency_bonus': self.proficiency_bonus,
            'max_hp': self.max_hp,
            'spell_slots': list(self.spell_slots),
            'pact_magic_slots': self.pact_magic_slots.to_dict() if self.pact_magic_slots else None,
            'spellcasting': self.spellcasting.to_dict() if self.spellcasting.is_spellcaster else None,
            'saving_throws': list(self.saving_throws),
            'skills': list(self.skills),
            'expertise_skills': list(self.expertise_skills),
            'ability_modifiers': dict(self.ability_modifiers),
            'saving_throw_modifiers': dict(self.saving_throw_modifiers),
            'skill_modifiers': dict(self.skill_modifiers),
            'classes': [cls.to_dict() for cls in self.classes],
            'feats': list(self.feats),
            'spells': list(self.spells),
        }
