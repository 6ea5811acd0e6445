"""Configuration, logging, results and data models."""

from .models import (
    AbilityScores,
    ClassLevel,
    LevelProgression,
    BuildState,
    DerivedStats,
    SpellSlotInfo,
    PactMagicSlots,
    SpellcastingDetails,
)
from .result import Result, ErrorCode

__all__ = [
    'AbilityScores',
    'ClassLevel',
    'LevelProgression',
    'BuildState',
    'DerivedStats',
    'SpellSlotInfo',
    'PactMagicSlots',
    'SpellcastingDetails',
    'Result',
    'ErrorCode',
]
