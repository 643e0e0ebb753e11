"""Stat kinds and stage arithmetic — pure functions, no I/O."""
from __future__ import annotations

from enum import Enum

MIN_STAGE = -5
MAX_STAGE = 5


class StatType(str, Enum):
    HP = "HP"
    ATK = "ATK"
    DEF = "DEF"
    SPD = "SPD"
    PRC = "PRC"
    AGL = "AGL"


# Every stat except HP can be raised or lowered in stages.
STAGED_STATS: tuple[StatType, ...] = (
    StatType.ATK,
    StatType.DEF,
    StatType.SPD,
    StatType.PRC,
    StatType.AGL,
)

# Precision and agility scale more gently than the combat stats.
_STAGE_DENOMINATORS: dict[StatType, int] = {
    StatType.PRC: 3,
    StatType.AGL: 3,
}


def stage_denominator(stat: StatType) -> int:
    return _STAGE_DENOMINATORS.get(stat, 2)


def stage_factor(stat: StatType, stage: int) -> float:
    """Multiplier for a stat at the given stage.

    Non-negative stages grow linearly, negative stages shrink hyperbolically,
    so +s and -s are reciprocals of each other.
    """
    d = stage_denominator(stat)
    if stage >= 0:
        return (d + stage) / d
    return d / (d - stage)


def clamp_stage(stage: int) -> int:
    return max(MIN_STAGE, min(MAX_STAGE, stage))


def parse_stat(token: str) -> StatType:
    """Look up a stat by its short name (case-insensitive)."""
    try:
        return StatType(token.upper())
    except ValueError:
        raise ValueError(f"Unknown stat: {token}") from None
