"""
Shared fixtures for charforge tests.
"""

import httpx
import pytest

from charforge.core.config import Config
from charforge.core.models import AbilityScores
from charforge.engine.caster_types import CasterTypeClassifier, RulesContentClient, make_caster_cache

RULES_API_URL = 'https://rules.test/api'

# Trimmed class documents in the shape the rules service returns
CLASS_DOCUMENTS = {
    'wizard': {'index': 'wizard', 'name': 'Wizard', 'spellcasting': {'level': 1, 'spellcasting_ability': {'index': 'int'}}},
    'paladin': {'index': 'paladin', 'name': 'Paladin', 'spellcasting': {'level': 2, 'spellcasting_ability': {'index': 'cha'}}},
    'eldritch-knight': {'index': 'eldritch-knight', 'name': 'Eldritch Knight', 'spellcasting': {'level': 3}},
    'warlock': {'index': 'warlock', 'name': 'Warlock', 'spellcasting': {'level': 1, 'spellcasting_ability': {'index': 'cha'}}},
    'fighter': {'index': 'fighter', 'name': 'Fighter'},
    'spellblade': {'index': 'spellblade', 'name': 'Spellblade', 'spellcasting': {'level': 1}},
}


def class_documents_handler(calls=None):
    """MockTransport handler serving CLASS_DOCUMENTS; records requested indexes in `calls`."""
    def handler(request: httpx.Request) -> httpx.Response:
        index = request.url.path.rsplit('/', 1)[-1]
        if calls is not None:
            calls.append(index)
        document = CLASS_DOCUMENTS.get(index)
        if document is None:
            return httpx.Response(404, json={'error': 'Not found'})
        return httpx.Response(200, json=document)
    return handler


@pytest.fixture
def make_classifier():
    """Factory for a classifier talking to a MockTransport handler."""
    def factory(handler, cache=None, enabled=True):
        client = RulesContentClient(base_url=RULES_API_URL, timeout=1.0,
                                    transport=httpx.MockTransport(handler))
        return CasterTypeClassifier(client=client, cache=cache if cache is not None else make_caster_cache(),
                                    enabled=enabled)
    return factory


@pytest.fixture
def config(monkeypatch):
    """Config built from a clean environment."""
    for name in ('HOST', 'PORT', 'DEBUG', 'LOG_LEVEL', 'LOG_FILE', 'DEFAULT_EDITION',
                 'RULES_API_URL', 'RULES_API_TIMEOUT', 'RULES_API_ENABLED',
                 'CASTER_CACHE_TTL', 'CASTER_CACHE_SIZE'):
        monkeypatch.delenv(name, raising=False)
    return Config()


@pytest.fixture
def wizard_abilities():
    """Typical wizard array: INT 16, CON 14, DEX 14."""
    return AbilityScores(strength=8, dexterity=14, constitution=14,
                         intelligence=16, wisdom=12, charisma=10)
