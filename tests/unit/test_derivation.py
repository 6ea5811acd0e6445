"""
Unit tests for the derivation orchestrator.
"""

import asyncio
import json

import httpx

from charforge.core.models import AbilityScores, BuildState, ClassLevel, LevelProgression, PactMagicSlots
from charforge.engine.caster_types import CasterTypeRefinement
from charforge.engine.derivation import derive_stats, normalize_class, normalize_classes, refine_caster_tiers
from charforge.rules.editions import RULES_2014
from conftest import class_documents_handler


def wizard_state(abilities, **kwargs):
    return BuildState.from_classes(abilities, [ClassLevel('Wizard', 5)], **kwargs)


class TestNormalizeClasses:
    """Test per-class normalization."""

    def test_attaches_rule_data(self):
        cls = normalize_class(ClassLevel('Paladin', 3), RULES_2014)
        assert cls == ClassLevel('Paladin', 3, spellcasting='half', hit_die=10)

    def test_clamps_levels(self):
        assert normalize_class(ClassLevel('Wizard', 0), RULES_2014).level == 1
        assert normalize_class(ClassLevel('Wizard', 27), RULES_2014).level == 20

    def test_explicit_values_win(self):
        cls = normalize_class(ClassLevel('Wizard', 3, spellcasting='half', hit_die=8), RULES_2014)

        assert cls.spellcasting == 'half'
        assert cls.hit_die == 8

    def test_unknown_class_defaults(self):
        assert normalize_class(ClassLevel('Gunslinger', 4), RULES_2014) == ClassLevel(
            'Gunslinger', 4, spellcasting='none', hit_die=8
        )

    def test_quarter_normalized(self):
        assert normalize_class(ClassLevel('Spellblade', 3, spellcasting='quarter'), RULES_2014).spellcasting == 'third'

    def test_keeps_order(self):
        state = BuildState.from_classes(AbilityScores(), [ClassLevel('Rogue', 1), ClassLevel('Bard', 2)])
        assert [cls.class_id for cls in normalize_classes(state)] == ['Rogue', 'Bard']


class TestDeriveStats:
    """Test full derivation."""

    def test_wizard_level_five(self, wizard_abilities):
        state = wizard_state(
            wizard_abilities,
            background_id='acolyte',
            selected_skills=['Arcana', 'Insight'],
            expertise_skills=['Arcana', 'Stealth'],
        )

        stats = derive_stats(state)

        assert stats.total_level == 5
        assert stats.proficiency_bonus == 3
        assert stats.max_hp == 32
        assert stats.spell_slots == (4, 3, 2)
        assert stats.pact_magic_slots is None
        assert stats.spellcasting.save_dc == 14
        assert stats.spellcasting.attack_bonus == 6
        assert stats.spellcasting.prepared_count == 8
        assert stats.saving_throws == ('INT', 'WIS')
        assert stats.skills == ('Arcana', 'Insight', 'Religion')
        assert stats.expertise_skills == ('Arcana',)

    def test_modifier_tables(self, wizard_abilities):
        stats = derive_stats(wizard_state(
            wizard_abilities, selected_skills=['Arcana'], expertise_skills=['Arcana'],
        ))

        assert stats.ability_modifiers['INT'] == 3
        assert stats.saving_throw_modifiers['INT'] == 6
        assert stats.saving_throw_modifiers['STR'] == -1
        assert stats.skill_modifiers['Arcana'] == 9
        assert stats.skill_modifiers['Stealth'] == 2

    def test_non_caster(self):
        state = BuildState.from_classes(AbilityScores(strength=16, constitution=14), [ClassLevel('Fighter', 5)])

        stats = derive_stats(state)

        assert stats.spell_slots == ()
        assert stats.pact_magic_slots is None
        assert not stats.spellcasting.is_spellcaster
        assert stats.to_dict()['spellcasting'] is None
        assert stats.max_hp == 44

    def test_warlock_wizard_two_pools(self):
        """Test a pact class and a full caster expose both slot resources."""
        state = BuildState.from_classes(
            AbilityScores(charisma=16),
            [ClassLevel('Warlock', 3), ClassLevel('Wizard', 2)],
        )

        stats = derive_stats(state)

        assert stats.spell_slots == (3,)
        assert stats.pact_magic_slots == PactMagicSlots(slots=2, slot_level=2)
        assert stats.spellcasting.ability == 'CHA'
        assert stats.saving_throws == ('WIS', 'CHA')
        assert stats.max_hp == 26

    def test_progression_log(self):
        """Test a progression log derives the same as the equivalent flat list."""
        abilities = AbilityScores(intelligence=14)
        log = [LevelProgression(level=n, class_id='Wizard') for n in (1, 2, 3)]

        from_log = derive_stats(BuildState.from_progression(abilities, log))
        from_flat = derive_stats(BuildState.from_classes(abilities, [ClassLevel('Wizard', 3)]))

        assert from_log == from_flat
        assert from_log.total_level == 3

    def test_progression_feats_and_spells(self):
        """Test feats and spells picked along the log are reported when the catalogues know them."""
        log = [
            LevelProgression(level=1, class_id='Fighter', spell_ids=('fire_bolt',)),
            LevelProgression(level=4, class_id='Fighter', feat_ids=('polearm_master', 'flying_kick')),
            LevelProgression(level=6, class_id='Fighter', feat_ids=('sentinel',), spell_ids=('fire_bolt',)),
        ]

        stats_2014 = derive_stats(BuildState.from_progression(AbilityScores(), log, edition='2014'))
        stats_2024 = derive_stats(BuildState.from_progression(AbilityScores(), log, edition='2024'))

        assert stats_2014.feats == ('polearm_master', 'sentinel')
        assert stats_2014.spells == ('fire_bolt',)
        assert stats_2024.feats == ('sentinel',)
        assert stats_2014.to_dict()['feats'] == ['polearm_master', 'sentinel']

    def test_edition_changes_prepared_count(self, wizard_abilities):
        stats_2014 = derive_stats(wizard_state(wizard_abilities, edition='2014'))
        stats_2024 = derive_stats(wizard_state(wizard_abilities, edition='2024'))

        assert stats_2014.spellcasting.prepared_count == 8
        assert stats_2024.spellcasting.prepared_count == 6

    def test_explicit_level_drives_proficiency(self):
        state = BuildState.from_classes(AbilityScores(), [ClassLevel('Fighter', 1)], level=9)
        assert derive_stats(state).proficiency_bonus == 4

    def test_never_raises_on_odd_input(self):
        """Test unknown classes, editions and backgrounds and bad levels resolve to defaults."""
        state = BuildState.from_classes(
            AbilityScores(constitution=3),
            [ClassLevel('Gunslinger', -2), ClassLevel('Wizard', 99)],
            edition='3.5',
            background_id='pirate_king',
            selected_skills=['Insight'],
            expertise_skills=['Stealth'],
        )

        stats = derive_stats(state)

        assert stats.classes[0].level == 1
        assert stats.classes[1].level == 20
        assert stats.saving_throws == ()
        assert stats.skills == ('Insight',)
        assert stats.expertise_skills == ()
        assert stats.spellcasting.ability == 'INT'
        assert stats.max_hp >= 1

    def test_no_classes(self):
        stats = derive_stats(BuildState.from_classes(AbilityScores(constitution=12), []))

        assert stats.total_level == 1
        assert stats.max_hp == 2
        assert stats.spell_slots == ()

    def test_deterministic(self, wizard_abilities):
        """Test deriving twice from the same state yields identical output."""
        state = wizard_state(wizard_abilities, background_id='sage', selected_skills=['Insight'])

        first = derive_stats(state)
        second = derive_stats(state)

        assert first == second
        assert json.dumps(first.to_dict()) == json.dumps(second.to_dict())

    def test_to_dict_shape(self, wizard_abilities):
        data = derive_stats(wizard_state(wizard_abilities)).to_dict()

        assert data['spell_slots'] == [4, 3, 2]
        assert data['spellcasting']['ability'] == 'INT'
        assert data['classes'] == [{'class_id': 'Wizard', 'level': 5, 'spellcasting': 'full', 'hit_die': 6}]
        assert len(data['skill_modifiers']) == 18


class TestRefineCasterTiers:
    """Test async caster tier refinement of a build state."""

    def test_refined_tier_changes_slots(self, make_classifier):
        """Test a class only the rules service knows gains slots after refinement."""
        state = BuildState.from_classes(AbilityScores(), [ClassLevel('Spellblade', 3)])
        refinement = CasterTypeRefinement(make_classifier(class_documents_handler()))

        refined = asyncio.run(refine_caster_tiers(state, refinement))

        assert derive_stats(state).spell_slots == ()
        assert refined.classes == (ClassLevel('Spellblade', 3, spellcasting='full'),)
        assert derive_stats(refined).spell_slots == (4, 2)

    def test_original_state_untouched(self, make_classifier):
        state = BuildState.from_classes(AbilityScores(), [ClassLevel('Warlock', 2), ClassLevel('Paladin', 2)])
        refinement = CasterTypeRefinement(make_classifier(class_documents_handler()))

        refined = asyncio.run(refine_caster_tiers(state, refinement))

        assert [cls.spellcasting for cls in refined.classes] == ['pact', 'half']
        assert [cls.spellcasting for cls in state.classes] == [None, None]

    def test_warlock_keeps_pact_pool_after_lowercase_lookup(self, make_classifier):
        """Test a cached lower-case warlock answer does not merge the pact and shared pools."""
        classifier = make_classifier(class_documents_handler())
        asyncio.run(classifier.get_caster_type('warlock'))

        state = BuildState.from_classes(AbilityScores(), [ClassLevel('Wizard', 5), ClassLevel('Warlock', 5)])
        refined = asyncio.run(refine_caster_tiers(state, CasterTypeRefinement(classifier)))
        stats = derive_stats(refined)

        assert [cls.spellcasting for cls in refined.classes] == ['full', 'pact']
        assert stats.spell_slots == (4, 3, 2)
        assert stats.pact_magic_slots == PactMagicSlots(slots=2, slot_level=3)

    def test_service_down_keeps_built_in_tiers(self, make_classifier):
        def handler(request):
            raise httpx.ConnectError('down', request=request)

        state = BuildState.from_classes(AbilityScores(), [ClassLevel('Cleric', 5)])
        refinement = CasterTypeRefinement(make_classifier(handler))

        refined = asyncio.run(refine_caster_tiers(state, refinement))

        assert derive_stats(refined).spell_slots == derive_stats(state).spell_slots
