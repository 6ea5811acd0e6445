"""
Integration tests for the Flask JSON API.
"""

import pytest

from charforge.web.server import create_app
from conftest import class_documents_handler


@pytest.fixture
def app(config, make_classifier):
    """App wired to a mocked rules service."""
    app = create_app(config, classifier=make_classifier(class_documents_handler()))
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


WIZARD_BUILD = {
    'abilities': {'STR': 8, 'DEX': 14, 'CON': 14, 'INT': 16, 'WIS': 12, 'CHA': 10},
    'classes': [{'classId': 'Wizard', 'level': 5}],
    'backgroundId': 'sage',
    'selectedSkills': ['Investigation', 'Insight'],
}


class TestRuleEndpoints:
    """Test read-only rule data endpoints."""

    def test_health(self, client):
        response = client.get('/api/health')
        data = response.get_json()

        assert response.status_code == 200
        assert data['success'] is True
        assert data['data']['status'] == 'ok'
        assert data['data']['rules_api_enabled'] is True

    def test_editions(self, client):
        data = client.get('/api/editions').get_json()
        assert data['data']['editions'] == ['2014', '2024']

    def test_classes(self, client):
        data = client.get('/api/rules/2024/classes').get_json()

        assert data['data']['edition'] == '2024'
        assert len(data['data']['classes']) == 15
        assert data['data']['classes']['Wizard']['prepared_formula'] == 'ability+pb'

    def test_single_class(self, client):
        data = client.get('/api/rules/2014/classes/Paladin').get_json()

        assert data['data']['class_id'] == 'Paladin'
        assert data['data']['hit_die'] == 10
        assert data['data']['spellcasting'] == 'half'

    def test_unknown_class(self, client):
        response = client.get('/api/rules/2014/classes/Gunslinger')

        assert response.status_code == 404
        assert response.get_json()['error_code'] == 'unknown_class'

    def test_unsupported_edition(self, client):
        response = client.get('/api/rules/3.5/classes')

        assert response.status_code == 404
        assert response.get_json()['error_code'] == 'unsupported_edition'

    def test_backgrounds(self, client):
        data = client.get('/api/backgrounds').get_json()
        assert len(data['data']['backgrounds']) == 15

    def test_single_background(self, client):
        data = client.get('/api/backgrounds/acolyte').get_json()
        assert data['data']['skill_choices']['options'] == ['Insight', 'Religion']

    def test_unknown_background(self, client):
        response = client.get('/api/backgrounds/pirate_king')

        assert response.status_code == 404
        assert response.get_json()['error_code'] == 'unknown_background'

    def test_unknown_route_is_json(self, client):
        response = client.get('/api/nowhere')

        assert response.status_code == 404
        assert response.get_json()['error_code'] == 'not_found'


class TestFeatEndpoints:
    """Test feat catalogue endpoints."""

    def test_all_feats(self, client):
        data = client.get('/api/feats').get_json()['data']
        assert len(data['feats']) == 25

    def test_filter_by_type(self, client):
        data = client.get('/api/feats?type=ability_bonus').get_json()['data']
        assert [feat['id'] for feat in data['feats']][:2] == ['asi_strength', 'asi_dexterity']
        assert len(data['feats']) == 6

    def test_filter_by_category_and_edition(self, client):
        feats_2014 = client.get('/api/feats?category=combat&edition=2014').get_json()['data']['feats']
        feats_2024 = client.get('/api/feats?category=combat&edition=2024').get_json()['data']['feats']

        assert len(feats_2014) == 8
        assert 'polearm_master' not in [feat['id'] for feat in feats_2024]

    def test_invalid_filters(self, client):
        assert client.get('/api/feats?type=magic').get_json()['error_code'] == 'validation_error'
        assert client.get('/api/feats?category=social').status_code == 400

        response = client.get('/api/feats?edition=3.5')
        assert response.status_code == 400
        assert response.get_json()['error_code'] == 'unsupported_edition'

    def test_single_feat(self, client):
        data = client.get('/api/feats/sharpshooter').get_json()['data']
        assert data['prerequisites']['abilities'] == {'DEX': 13}

    def test_unknown_feat(self, client):
        response = client.get('/api/feats/flying_kick')

        assert response.status_code == 404
        assert response.get_json()['error_code'] == 'unknown_feat'


class TestSpellEndpoints:
    """Test spell catalogue endpoints."""

    def test_filters(self, client):
        data = client.get('/api/spells?level=3&class=Wizard').get_json()['data']
        assert [spell['id'] for spell in data['spells']] == ['fireball', 'counterspell', 'lightning_bolt']

    def test_search(self, client):
        data = client.get('/api/spells?q=cure').get_json()['data']
        assert [spell['name'] for spell in data['spells']] == ['Cure Wounds', 'Mass Cure Wounds']

    def test_cantrips(self, client):
        assert len(client.get('/api/spells?level=0').get_json()['data']['spells']) == 6

    def test_invalid_filters(self, client):
        assert client.get('/api/spells?level=third').status_code == 400
        assert client.get('/api/spells?school=Chronurgy').get_json()['error_code'] == 'validation_error'

    def test_schools(self, client):
        data = client.get('/api/spells/schools').get_json()['data']
        assert len(data['schools']) == 8

    def test_single_spell(self, client):
        data = client.get('/api/spells/counterspell').get_json()['data']

        assert data['level'] == 3
        assert data['components'] == {'verbal': False, 'somatic': True, 'material': None}

    def test_unknown_spell(self, client):
        response = client.get('/api/spells/power_word_nap')

        assert response.status_code == 404
        assert response.get_json()['error_code'] == 'unknown_spell'


class TestDeriveEndpoint:
    """Test POST /api/derive."""

    def test_derive_wizard(self, client):
        response = client.post('/api/derive', json=WIZARD_BUILD)
        data = response.get_json()

        assert response.status_code == 200
        assert data['success'] is True
        stats = data['data']
        assert stats['proficiency_bonus'] == 3
        assert stats['max_hp'] == 32
        assert stats['spell_slots'] == [4, 3, 2]
        assert stats['spellcasting']['save_dc'] == 14
        assert stats['skills'] == ['Investigation', 'Insight', 'Arcana', 'History']

    def test_derive_progression(self, client):
        payload = {
            'abilities': {'WIS': 16},
            'classProgression': [
                {'level': 1, 'classId': 'Cleric'},
                {'level': 2, 'classId': 'Cleric'},
                {'level': 3, 'classId': 'Cleric'},
            ],
        }

        stats = client.post('/api/derive', json=payload).get_json()['data']

        assert stats['classes'] == [{'class_id': 'Cleric', 'level': 3, 'spellcasting': 'full', 'hit_die': 8}]
        assert stats['spell_slots'] == [4, 2]

    def test_server_default_edition(self, config, make_classifier):
        config.default_edition = '2024'
        client = create_app(config, classifier=make_classifier(class_documents_handler())).test_client()

        stats = client.post('/api/derive', json=WIZARD_BUILD).get_json()['data']

        assert stats['spellcasting']['prepared_count'] == 6

    def test_derive_is_deterministic(self, client):
        first = client.post('/api/derive', json=WIZARD_BUILD).get_data()
        second = client.post('/api/derive', json=WIZARD_BUILD).get_data()
        assert first == second

    def test_refine_with_rules_service(self, client):
        """Test ?refine=true lets the rules service classify unknown classes."""
        payload = {'abilities': {}, 'classes': [{'classId': 'Spellblade', 'level': 3}]}

        plain = client.post('/api/derive', json=payload).get_json()['data']
        refined = client.post('/api/derive?refine=true', json=payload).get_json()['data']

        assert plain['spell_slots'] == []
        assert refined['spell_slots'] == [4, 2]

    def test_refine_in_body(self, client):
        payload = {'abilities': {}, 'classes': [{'classId': 'Spellblade', 'level': 3}], 'refine': True}
        assert client.post('/api/derive', json=payload).get_json()['data']['spell_slots'] == [4, 2]

    def test_refine_false_string_in_body(self, client):
        """Test a JSON string 'false' does not turn refinement on."""
        payload = {'abilities': {}, 'classes': [{'classId': 'Spellblade', 'level': 3}], 'refine': 'false'}
        assert client.post('/api/derive', json=payload).get_json()['data']['spell_slots'] == []

    def test_refine_true_string_in_body(self, client):
        payload = {'abilities': {}, 'classes': [{'classId': 'Spellblade', 'level': 3}], 'refine': 'true'}
        assert client.post('/api/derive', json=payload).get_json()['data']['spell_slots'] == [4, 2]

    def test_derive_reports_feats_and_spells(self, client):
        payload = {
            'abilities': {'INT': 16},
            'classProgression': [
                {'level': 1, 'classId': 'Wizard', 'spellIds': ['fire_bolt', 'magic_missile']},
                {'level': 4, 'classId': 'Wizard', 'featIds': ['war_caster']},
            ],
        }

        stats = client.post('/api/derive', json=payload).get_json()['data']

        assert stats['feats'] == ['war_caster']
        assert stats['spells'] == ['fire_bolt', 'magic_missile']

    def test_validation_error(self, client):
        payload = dict(WIZARD_BUILD, classProgression=[{'level': 1, 'classId': 'Wizard'}])

        response = client.post('/api/derive', json=payload)
        data = response.get_json()

        assert response.status_code == 400
        assert data['success'] is False
        assert data['error_code'] == 'validation_error'

    def test_unsupported_edition(self, client):
        response = client.post('/api/derive', json=dict(WIZARD_BUILD, edition='3.5'))

        assert response.status_code == 400
        assert response.get_json()['error_code'] == 'unsupported_edition'

    def test_body_must_be_json_object(self, client):
        response = client.post('/api/derive', data='not json', content_type='text/plain')

        assert response.status_code == 400
        assert response.get_json()['error_code'] == 'invalid_input'

    def test_get_not_allowed(self, client):
        assert client.get('/api/derive').status_code == 405


class TestSpellSlotsEndpoint:
    """Test POST /api/spell-slots."""

    def test_wizard_rows(self, client):
        data = client.post('/api/spell-slots', json={'class': 'Wizard', 'level': 3}).get_json()['data']

        assert data['edition'] == '2014'
        assert data['slots'] == [
            {'level': 1, 'maximum': 4, 'locked': False},
            {'level': 2, 'maximum': 2, 'locked': False},
        ]

    def test_warlock_pact_row(self, client):
        data = client.post('/api/spell-slots', json={'class': 'Warlock', 'level': 11}).get_json()['data']
        assert data['slots'] == [{'level': 1, 'maximum': 3, 'locked': False, 'slot_level': 5}]

    def test_non_caster(self, client):
        data = client.post('/api/spell-slots', json={'class': 'Monk', 'level': 10}).get_json()['data']
        assert data['slots'] == []

    def test_refined(self, client):
        payload = {'class': 'Spellblade', 'level': 1, 'refine': True}
        data = client.post('/api/spell-slots', json=payload).get_json()['data']
        assert data['slots'] == [{'level': 1, 'maximum': 2, 'locked': False}]

    def test_missing_class(self, client):
        response = client.post('/api/spell-slots', json={'level': 3})

        assert response.status_code == 400
        assert response.get_json()['error_code'] == 'missing_required_field'

    def test_bad_level(self, client):
        response = client.post('/api/spell-slots', json={'class': 'Wizard', 'level': 'three'})

        assert response.status_code == 400
        assert response.get_json()['error_code'] == 'validation_error'

    def test_unsupported_edition(self, client):
        response = client.post('/api/spell-slots', json={'class': 'Wizard', 'level': 3, 'edition': '3.5'})

        assert response.status_code == 400
        assert response.get_json()['error_code'] == 'unsupported_edition'

    def test_refine_false_string(self, client):
        payload = {'class': 'Spellblade', 'level': 1, 'refine': 'false'}
        assert client.post('/api/spell-slots', json=payload).get_json()['data']['slots'] == []
