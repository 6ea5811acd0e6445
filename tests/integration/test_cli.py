"""
Integration tests for the charforge command-line interface.
"""

import json

import pytest

from charforge.cli import commands


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep the CLI from reconfiguring the root logger during tests."""
    monkeypatch.setattr(commands, 'setup_logging', lambda **kwargs: None)


@pytest.fixture
def build_file(tmp_path):
    path = tmp_path / 'build.json'
    path.write_text(json.dumps({
        'abilities': {'CHA': 16, 'CON': 12},
        'edition': '2014',
        'classes': [{'classId': 'Warlock', 'level': 3}, {'classId': 'Wizard', 'level': 2}],
        'backgroundId': 'charlatan',
        'selectedSkills': ['Deception', 'Arcana'],
    }))
    return path


class TestDeriveCommand:
    """Test `charforge derive`."""

    def test_derive_json(self, build_file, capsys):
        commands.main(['derive', str(build_file), '--json'])

        stats = json.loads(capsys.readouterr().out)
        assert stats['spell_slots'] == [3]
        assert stats['pact_magic_slots'] == {'slots': 2, 'slot_level': 2}
        assert stats['skills'] == ['Deception', 'Arcana', 'Sleight of Hand']
        assert stats['max_hp'] == 31

    def test_derive_summary(self, build_file, capsys):
        commands.main(['derive', str(build_file)])

        out = capsys.readouterr().out
        assert 'Level 5' in out
        assert 'Pact magic:  2 slot(s) of level 2' in out
        assert 'Spellcasting (CHA): save DC 14' in out

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            commands.main(['derive', str(tmp_path / 'missing.json')])

        assert exc_info.value.code == 1
        assert 'cannot read' in capsys.readouterr().err

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / 'broken.json'
        path.write_text('{"abilities": ')

        with pytest.raises(SystemExit):
            commands.main(['derive', str(path)])

        assert 'not valid JSON' in capsys.readouterr().err

    def test_invalid_build_state(self, tmp_path, capsys):
        path = tmp_path / 'bad.json'
        path.write_text(json.dumps({'abilities': {'luck': 18}, 'edition': '2014'}))

        with pytest.raises(SystemExit):
            commands.main(['derive', str(path)])

        assert 'Build state validation failed' in capsys.readouterr().err


class TestRuleCommands:
    """Test rule browsing commands."""

    def test_classes(self, capsys):
        commands.main(['classes', '--edition', '2024'])

        out = capsys.readouterr().out
        assert '15 classes (2024 rules)' in out
        assert 'Eldritch Knight' in out

    def test_backgrounds(self, capsys):
        commands.main(['backgrounds'])
        assert 'folk_hero' in capsys.readouterr().out

    def test_slots(self, capsys):
        commands.main(['slots', 'Wizard', '3'])

        out = capsys.readouterr().out
        assert 'level 1: 4' in out
        assert 'level 2: 2' in out

    def test_slots_pact(self, capsys):
        commands.main(['slots', 'Warlock', '5'])
        assert 'pact magic: 2 slot(s) of level 3' in capsys.readouterr().out

    def test_slots_non_caster(self, capsys):
        commands.main(['slots', 'Barbarian', '7'])
        assert 'no spell slots' in capsys.readouterr().out

    def test_caster_type(self, capsys):
        commands.main(['caster-type', 'Arcane Trickster'])
        assert capsys.readouterr().out.strip() == 'Arcane Trickster: third'

    def test_no_command(self):
        with pytest.raises(SystemExit) as exc_info:
            commands.main([])
        assert exc_info.value.code == 1
