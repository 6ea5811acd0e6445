"""
Caster classification.

Resolves a class name to a caster tier (full/half/third/pact/none).

Two entry points:
- get_caster_type_sync(): built-in map, always available
- CasterTypeClassifier.get_caster_type(): asks the rules content service
  and caches the answer; any failure degrades to the built-in map

The legacy 'quarter' tier is normalized to 'third' everywhere.
"""

import logging
import threading
import time
from typing import Any, Dict, Optional

import httpx
from cachetools import TTLCache

logger = logging.getLogger(__name__)

CASTER_TIERS = ('full', 'half', 'third', 'pact', 'none')

DEFAULT_CACHE_TTL = 60 * 60  # 1 hour
DEFAULT_CACHE_SIZE = 256

CLASS_CASTER_TYPE_FALLBACK: Dict[str, str] = {
    # Full casters (9th-level spells)
    'Bard': 'full',
    'Cleric': 'full',
    'Druid': 'full',
    'Sorcerer': 'full',
    'Wizard': 'full',

    # Half casters (5th-level spells)
    'Paladin': 'half',
    'Ranger': 'half',
    'Artificer': 'half',

    # Third casters (subclass spellcasting)
    'Eldritch Knight': 'third',
    'Arcane Trickster': 'third',

    # Pact magic
    'Warlock': 'pact',

    # No spellcasting
    'Barbarian': 'none',
    'Fighter': 'none',
    'Monk': 'none',
    'Rogue': 'none',
}

_FALLBACK_BY_NAME: Dict[str, str] = {name.lower(): tier for name, tier in CLASS_CASTER_TYPE_FALLBACK.items()}


def normalize_caster_type(raw: Optional[str]) -> str:
    """
    Normalize a caster tier value.

    'quarter' becomes 'third'; anything unrecognized becomes 'none'.
    """
    if raw == 'quarter':
        return 'third'
    if raw in CASTER_TIERS:
        return raw
    return 'none'


def get_caster_type_sync(class_name: str) -> str:
    """
    Caster tier from the built-in map. Class names match regardless of case.

    Examples:
        get_caster_type_sync('Wizard') -> 'full'
        get_caster_type_sync('warlock') -> 'pact'
        get_caster_type_sync('Gunslinger') -> 'none'
    """
    return normalize_caster_type(_FALLBACK_BY_NAME.get(class_name.strip().lower(), 'none'))


def can_cast_spells(class_name: str) -> bool:
    return get_caster_type_sync(class_name) != 'none'


def class_index(class_name: str) -> str:
    """Rules service index for a class name: 'Eldritch Knight' -> 'eldritch-knight'."""
    return '-'.join(class_name.strip().lower().split())


class RulesServiceError(Exception):
    """Raised when the rules content service cannot answer a class lookup."""

    def __init__(self, message: str, class_name: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.class_name = class_name
        self.original_error = original_error


def classify_class_payload(class_name: str, payload: Any) -> str:
    """
    Turn a class document from the rules service into a caster tier.

    The service reports the class level at which spellcasting starts:
    1 -> full, 2 -> half, 3 -> quarter (normalized to third). A class with
    no 'spellcasting' block is a non-caster.

    Raises:
        RulesServiceError: If the payload does not look like a class document
    """
    if not isinstance(payload, dict) or 'index' not in payload:
        raise RulesServiceError(f"Malformed class document for {class_name}", class_name)

    spellcasting = payload.get('spellcasting')
    if spellcasting is None:
        return 'none'
    if not isinstance(spellcasting, dict) or not isinstance(spellcasting.get('level'), int):
        raise RulesServiceError(f"Malformed spellcasting block for {class_name}", class_name)

    start_level = spellcasting['level']
    if start_level == 1:
        raw = 'full'
    elif start_level == 2:
        raw = 'half'
    elif start_level == 3:
        raw = 'quarter'
    else:
        raw = 'none'
    return normalize_caster_type(raw)


class RulesContentClient:
    """
    Minimal async client for a dnd5eapi-compatible rules content service.

    Only the class document endpoint is used: GET {base_url}/classes/{index}
    """

    def __init__(self, base_url: str = 'https://www.dnd5eapi.co/api', timeout: float = 5.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Args:
            base_url: Service root, without trailing slash
            timeout: Total request timeout in seconds
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.transport = transport

    async def fetch_class(self, class_name: str) -> Dict[str, Any]:
        """
        Fetch the class document for a class name.

        Raises:
            RulesServiceError: On network errors, non-2xx responses, or invalid JSON
        """
        url = f"{self.base_url}/classes/{class_index(class_name)}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPError as e:
            raise RulesServiceError(f"Rules service request failed for {class_name}: {e}",
                                    class_name, original_error=e) from e
        except ValueError as e:
            raise RulesServiceError(f"Rules service returned invalid JSON for {class_name}",
                                    class_name, original_error=e) from e


def make_caster_cache(ttl: float = DEFAULT_CACHE_TTL, maxsize: int = DEFAULT_CACHE_SIZE,
                      timer=time.monotonic) -> TTLCache:
    """Create the TTL cache used by CasterTypeClassifier. Tests pass a fake timer."""
    return TTLCache(maxsize=maxsize, ttl=ttl, timer=timer)


class CasterTypeClassifier:
    """
    Async caster classification backed by the rules content service.

    Results are cached by lower-cased class name. Failures are logged and
    answered from the built-in map without being cached, so the next call
    retries the service. The cache is shared by every request a web app
    serves, so reads and writes go through a lock.

    Example:
        classifier = CasterTypeClassifier(RulesContentClient())
        tier = await classifier.get_caster_type('Wizard')
    """

    def __init__(self, client: Optional[RulesContentClient] = None,
                 cache: Optional[TTLCache] = None, enabled: bool = True):
        self.client = client
        self.cache = cache if cache is not None else make_caster_cache()
        self.enabled = enabled and client is not None
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config) -> 'CasterTypeClassifier':
        """Build a classifier from a charforge Config."""
        client = RulesContentClient(base_url=config.rules_api_url, timeout=config.rules_api_timeout)
        cache = make_caster_cache(ttl=config.caster_cache_ttl, maxsize=config.caster_cache_size)
        return cls(client=client, cache=cache, enabled=config.rules_api_enabled)

    async def get_caster_type(self, class_name: str) -> str:
        """
        Caster tier for a class, refined by the rules service when possible.

        Never raises for a service failure.
        """
        cache_key = class_name.strip().lower()
        with self._lock:
            cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        if not self.enabled:
            return get_caster_type_sync(class_name)

        try:
            payload = await self.client.fetch_class(class_name)
            caster_type = classify_class_payload(class_name, payload)
        except RulesServiceError as e:
            logger.warning(f"Failed to fetch caster type for {class_name}, using built-in table: {e}")
            return get_caster_type_sync(class_name)

        # The service has no notion of pact magic; it reports warlocks as full casters
        if get_caster_type_sync(class_name) == 'pact':
            caster_type = 'pact'

        with self._lock:
            self.cache[cache_key] = caster_type
        logger.debug(f"Caster type for {class_name} from rules service: {caster_type}")
        return caster_type

    async def can_cast_spells(self, class_name: str) -> bool:
        return await self.get_caster_type(class_name) != 'none'

    def clear_cache(self) -> None:
        with self._lock:
            self.cache.clear()


class CasterTypeRefinement:
    """
    Discards async classification results that arrive after the build moved on.

    Each slot (for example a position in the class list) remembers the last
    class name requested for it. A result is applied only if it answers that
    latest request.

    Example:
        refinement = CasterTypeRefinement(classifier)
        tier = await refinement.refine('class-0', 'Wizard')
        if tier is not None:
            ...  # still current
    """

    def __init__(self, classifier: CasterTypeClassifier):
        self.classifier = classifier
        self._latest: Dict[str, str] = {}

    def is_current(self, slot: str, class_name: str) -> bool:
        return self._latest.get(slot) == class_name

    def forget(self, slot: str) -> None:
        self._latest.pop(slot, None)

    async def refine(self, slot: str, class_name: str) -> Optional[str]:
        """
        Request the refined tier for `class_name` in `slot`.

        Returns:
            The tier, or None if a newer request for the slot superseded this one
        """
        self._latest[slot] = class_name
        caster_type = await self.classifier.get_caster_type(class_name)
        if not self.is_current(slot, class_name):
            logger.debug(f"Dropping stale caster type for {class_name} in {slot}")
            return None
        return caster_type
