"""
Unit tests for the spellcasting details calculator.
"""

import pytest

from charforge.core.models import AbilityScores, ClassLevel
from charforge.engine.spellcasting import (
    calculate_spellcasting_details,
    cantrips_known,
    find_primary_caster,
    prepared_spell_count,
)
from charforge.rules.editions import RULES_2014, RULES_2024


class TestPreparedSpells:
    """Test prepared spell formulas."""

    def test_ability_plus_level(self):
        assert prepared_spell_count(RULES_2014.get_class('Wizard'), 3, 5, 3) == 8

    def test_ability_plus_half_level(self):
        assert prepared_spell_count(RULES_2014.get_class('Paladin'), 3, 5, 3) == 5

    def test_ability_plus_proficiency_bonus(self):
        assert prepared_spell_count(RULES_2024.get_class('Wizard'), 3, 5, 3) == 6

    @pytest.mark.parametrize('edition_rules', [RULES_2014, RULES_2024])
    @pytest.mark.parametrize('class_id', ['Wizard', 'Cleric', 'Druid', 'Bard', 'Sorcerer', 'Paladin', 'Ranger', 'Artificer'])
    def test_never_below_one(self, edition_rules, class_id):
        """Test the floor of 1 at modifier -5 and level 1."""
        assert prepared_spell_count(edition_rules.get_class(class_id), -5, 1, 2) == 1

    def test_no_formula_prepares_nothing(self):
        assert prepared_spell_count(RULES_2014.get_class('Warlock'), 4, 10, 4) == 0


class TestCantrips:
    """Test the sparse exact-level cantrip lookup."""

    def test_breakpoints(self):
        wizard = RULES_2014.get_class('Wizard')

        assert cantrips_known(wizard, 1) == 3
        assert cantrips_known(wizard, 4) == 4
        assert cantrips_known(wizard, 10) == 5

    def test_between_breakpoints_is_zero(self):
        """Test levels without an exact entry report 0, not the previous breakpoint."""
        wizard = RULES_2014.get_class('Wizard')

        assert cantrips_known(wizard, 2) == 0
        assert cantrips_known(wizard, 5) == 0
        assert cantrips_known(wizard, 11) == 0

    def test_no_table_default(self):
        """Test casters without a cantrip table get 2, then 3 from level 4."""
        paladin = RULES_2014.get_class('Paladin')

        assert cantrips_known(paladin, 1) == 2
        assert cantrips_known(paladin, 3) == 2
        assert cantrips_known(paladin, 4) == 3


class TestPrimaryCaster:
    """Test the first-class-wins tie-break."""

    def test_first_casting_class_wins(self):
        classes = [ClassLevel('Fighter', 2), ClassLevel('Cleric', 1), ClassLevel('Wizard', 3)]

        cls, rule = find_primary_caster(classes, '2014')

        assert cls.class_id == 'Cleric'
        assert rule.spellcasting_ability == 'WIS'

    def test_order_decides(self):
        cls, _ = find_primary_caster([ClassLevel('Wizard', 3), ClassLevel('Cleric', 1)], '2014')
        assert cls.class_id == 'Wizard'

    def test_unknown_classes_skipped(self):
        cls, _ = find_primary_caster([ClassLevel('Gunslinger', 5), ClassLevel('Bard', 1)], '2014')
        assert cls.class_id == 'Bard'

    def test_no_caster(self):
        assert find_primary_caster([ClassLevel('Barbarian', 5)], '2014') is None


class TestSpellcastingDetails:
    """Test full spellcasting details."""

    def test_wizard_level_five(self, wizard_abilities):
        details = calculate_spellcasting_details([ClassLevel('Wizard', 5)], wizard_abilities, 3, '2014')

        assert details.ability == 'INT'
        assert details.save_dc == 14
        assert details.attack_bonus == 6
        assert details.prepared_count == 8
        assert details.cantrips_known == 0
        assert details.is_spellcaster

    def test_wizard_level_five_2024(self, wizard_abilities):
        details = calculate_spellcasting_details([ClassLevel('Wizard', 5)], wizard_abilities, 3, '2024')

        assert details.save_dc == 14
        assert details.prepared_count == 6

    def test_multiclass_reports_first_caster_only(self):
        """Test a Cleric/Wizard reports the Cleric's WIS numbers."""
        abilities = AbilityScores(intelligence=18, wisdom=12)

        details = calculate_spellcasting_details(
            [ClassLevel('Cleric', 1), ClassLevel('Wizard', 4)], abilities, 3, '2014'
        )

        assert details.ability == 'WIS'
        assert details.save_dc == 12
        assert details.attack_bonus == 4
        assert details.prepared_count == 2
        assert details.cantrips_known == 3

    def test_warlock_prepares_nothing(self):
        details = calculate_spellcasting_details([ClassLevel('Warlock', 1)], AbilityScores(charisma=16), 2)

        assert details.ability == 'CHA'
        assert details.save_dc == 13
        assert details.prepared_count == 0
        assert details.cantrips_known == 2

    def test_non_caster(self):
        details = calculate_spellcasting_details([ClassLevel('Fighter', 5)], AbilityScores(), 3)

        assert details.ability is None
        assert details.save_dc is None
        assert details.attack_bonus is None
        assert details.prepared_count == 0
        assert details.cantrips_known == 0
        assert not details.is_spellcaster
