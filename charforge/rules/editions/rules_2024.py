"""
Class rules for the 2024 edition.

The revised rules keep hit dice, saving throws and skill menus from 2014.
What changes: every subclass arrives at level 3, and every preparing caster
prepares ability modifier + proficiency bonus spells.
"""

from dataclasses import replace
from typing import Dict

from charforge.core.models import ClassRule, EditionRuleSet
from .rules_2014 import CLASS_RULES_2014, cantrip_table
from .tables import PROFICIENCY_BONUS, MULTICLASS_SPELL_SLOTS, PACT_MAGIC_SLOTS

SUBCLASS_LEVEL_2024 = 3


def _revise(rule: ClassRule, **overrides) -> ClassRule:
    changes = {'subclass_level': SUBCLASS_LEVEL_2024}
    if rule.prepared_formula is not None:
        changes['prepared_formula'] = 'ability+pb'
    changes.update(overrides)
    return replace(rule, **changes)


CLASS_RULES_2024: Dict[str, ClassRule] = {
    class_id: _revise(rule) for class_id, rule in CLASS_RULES_2014.items()
}

# Arcane Trickster gains its third cantrip at 10 instead of 9
CLASS_RULES_2024['Arcane Trickster'] = _revise(
    CLASS_RULES_2014['Arcane Trickster'],
    cantrip_progression=cantrip_table({3: 2, 10: 3}),
)

RULES_2024 = EditionRuleSet.create(
    edition='2024',
    classes=CLASS_RULES_2024,
    proficiency_bonus=PROFICIENCY_BONUS,
    multiclass_spell_slots=MULTICLASS_SPELL_SLOTS,
    pact_magic_slots=PACT_MAGIC_SLOTS,
)
