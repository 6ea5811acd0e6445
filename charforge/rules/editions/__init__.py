"""
Edition rule tables.

One immutable EditionRuleSet per supported edition, built at import time.
An unknown edition tag resolves to the 2014 tables.
"""

import logging
from typing import Dict, List, Optional

from charforge.core.models import ClassRule, EditionRuleSet
from .rules_2014 import RULES_2014
from .rules_2024 import RULES_2024
from .tables import clamp_level, MIN_LEVEL, MAX_LEVEL

logger = logging.getLogger(__name__)

DEFAULT_EDITION = '2014'

RULES_BY_EDITION: Dict[str, EditionRuleSet] = {
    '2014': RULES_2014,
    '2024': RULES_2024,
}


def get_rules(edition: Optional[str] = None) -> EditionRuleSet:
    """
    Return the rule set for an edition tag.

    Args:
        edition: '2014' or '2024'; anything else falls back to 2014

    Examples:
        get_rules('2024').edition -> '2024'
        get_rules('3.5').edition -> '2014'
    """
    rules = RULES_BY_EDITION.get(str(edition)) if edition is not None else None
    if rules is None:
        if edition is not None:
            logger.debug(f"No rule tables for edition {edition!r}, using {DEFAULT_EDITION}")
        return RULES_BY_EDITION[DEFAULT_EDITION]
    return rules


def is_supported_edition(edition: str) -> bool:
    return edition in RULES_BY_EDITION


def list_classes(edition: Optional[str] = None) -> List[str]:
    """Class ids known to an edition, in table order."""
    return list(get_rules(edition).classes.keys())


def is_subclass_level(rule: ClassRule, level: int) -> bool:
    """True when `level` is the level at which the class picks its subclass."""
    return level == rule.subclass_level


def is_asi_level(rule: ClassRule, level: int) -> bool:
    """True when the class grants an ability score improvement at `level`."""
    return level in rule.asi_levels


__all__ = [
    'RULES_2014',
    'RULES_2024',
    'RULES_BY_EDITION',
    'DEFAULT_EDITION',
    'get_rules',
    'is_supported_edition',
    'list_classes',
    'is_subclass_level',
    'is_asi_level',
    'clamp_level',
    'MIN_LEVEL',
    'MAX_LEVEL',
]
