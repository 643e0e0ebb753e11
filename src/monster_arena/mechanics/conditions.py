"""Status condition effects — pure data, no I/O."""
from __future__ import annotations

import math
from enum import Enum
from typing import Any

from monster_arena.mechanics.stats import StatType


class StatusCondition(str, Enum):
    BURN = "BURN"
    WET = "WET"
    QUICKSAND = "QUICKSAND"
    SLEEP = "SLEEP"


STATUS_PENALTY = 0.75
BURN_DAMAGE_FRACTION = 0.1
FADE_CHANCE = 33.33

# Message templates take the monster name as {name}.
CONDITION_EFFECTS: dict[StatusCondition, dict[str, Any]] = {
    StatusCondition.BURN: {
        "weakens": StatType.ATK,
        "skips_turn": False,
        "deals_damage": True,
        "onset": "{name} caught on fire!",
        "ongoing": "{name} is burning!",
        "faded": "{name}'s burning has faded!",
    },
    StatusCondition.WET: {
        "weakens": StatType.DEF,
        "skips_turn": False,
        "deals_damage": False,
        "onset": "{name} becomes soaking wet!",
        "ongoing": "{name} is soaked!",
        "faded": "{name}'s soaked has faded!",
    },
    StatusCondition.QUICKSAND: {
        "weakens": StatType.SPD,
        "skips_turn": False,
        "deals_damage": False,
        "onset": "{name} gets caught by quicksand!",
        "ongoing": "{name} is stuck in quicksand!",
        "faded": "{name}'s quicksand has faded!",
    },
    StatusCondition.SLEEP: {
        "weakens": None,
        "skips_turn": True,
        "deals_damage": False,
        "onset": "{name} fell asleep!",
        "ongoing": "{name} is sleeping and cannot move!",
        "faded": "{name}'s sleeping has faded!",
    },
}


def status_factor(condition: StatusCondition | None, stat: StatType) -> float:
    """Multiplier a condition applies to a stat (1.0 when unaffected)."""
    if condition is None:
        return 1.0
    if CONDITION_EFFECTS[condition]["weakens"] == stat:
        return STATUS_PENALTY
    return 1.0


def skips_turn(condition: StatusCondition | None) -> bool:
    return condition is not None and CONDITION_EFFECTS[condition]["skips_turn"]


def burn_damage(max_hp: int) -> int:
    """Damage a burning monster takes at the end of its turn."""
    return math.ceil(max_hp * BURN_DAMAGE_FRACTION)


def condition_message(condition: StatusCondition, phase: str, name: str) -> str:
    """Render the onset/ongoing/faded text for a monster."""
    return CONDITION_EFFECTS[condition][phase].format(name=name)


def parse_condition(token: str) -> StatusCondition:
    try:
        return StatusCondition(token.upper())
    except ValueError:
        raise ValueError(f"Unknown status condition: {token}") from None
