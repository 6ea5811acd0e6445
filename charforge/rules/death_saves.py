"""Death saving throw tallies."""

from dataclasses import dataclass

SAVES_TO_RESOLVE = 3


@dataclass(frozen=True)
class DeathSaves:
    success: int = 0
    failure: int = 0


def is_dead(state: DeathSaves) -> bool:
    return state.failure >= SAVES_TO_RESOLVE


def is_stable(state: DeathSaves) -> bool:
    return state.success >= SAVES_TO_RESOLVE
