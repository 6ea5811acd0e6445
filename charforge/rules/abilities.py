"""
Ability score helpers.
"""

from typing import Dict

from charforge.core.models import AbilityScores, ABILITIES


def get_ability_modifier(score: int) -> int:
    """
    Calculate the modifier for an ability score.

    Examples:
        get_ability_modifier(1) -> -5
        get_ability_modifier(15) -> 2
    """
    return AbilityScores.calculate_modifier(score)


def get_ability_modifiers(scores: AbilityScores) -> Dict[str, int]:
    """All six modifiers keyed by ability code."""
    return {ability: get_ability_modifier(scores.score(ability)) for ability in ABILITIES}


def format_modifier(modifier: int) -> str:
    """Format a modifier for display ('+3', '+0', '-1')."""
    return f"+{modifier}" if modifier >= 0 else str(modifier)
