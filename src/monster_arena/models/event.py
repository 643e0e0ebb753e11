from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class BattleEventType(str, Enum):
    # Flow
    BATTLE_START = "BATTLE_START"
    ROUND_START = "ROUND_START"
    TURN_START = "TURN_START"
    BATTLE_END = "BATTLE_END"
    # Selection
    SELECTION_REJECTED = "SELECTION_REJECTED"
    PASS = "PASS"
    # Action resolution
    ACTION_USED = "ACTION_USED"
    ACTION_FAILED = "ACTION_FAILED"
    MISS = "MISS"
    EFFECTIVENESS = "EFFECTIVENESS"
    CRITICAL_HIT = "CRITICAL_HIT"
    DAMAGE = "DAMAGE"
    PROTECTED = "PROTECTED"
    HEAL = "HEAL"
    STAT_CHANGE = "STAT_CHANGE"
    FAINT = "FAINT"
    # Status & protection
    STATUS_APPLIED = "STATUS_APPLIED"
    STATUS_ALREADY = "STATUS_ALREADY"
    STATUS_ONGOING = "STATUS_ONGOING"
    STATUS_FADED = "STATUS_FADED"
    BURN_DAMAGE = "BURN_DAMAGE"
    PROTECTION_START = "PROTECTION_START"
    PROTECTION_END = "PROTECTION_END"
    # Diagnostics, only emitted in debug mode
    DEBUG = "DEBUG"


# Events that carry data for tests and logs but have nothing to narrate.
SILENT_EVENTS = frozenset({BattleEventType.MISS})


class BattleEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    event_type: BattleEventType
    round_number: int = 0
    actor: Optional[str] = None
    target: Optional[str] = None
    value: Optional[int] = None
    description: str = ""
    details: dict[str, Any] = Field(default_factory=dict)
