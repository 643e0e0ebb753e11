"""Status condition lifecycle: fading, ongoing narration and burn damage."""
from __future__ import annotations

import logging

from monster_arena.engine.events import Narrator
from monster_arena.mechanics.conditions import (
    FADE_CHANCE,
    StatusCondition,
    burn_damage,
    condition_message,
)
from monster_arena.mechanics.random_source import RandomSource, Stream
from monster_arena.models.event import BattleEventType
from monster_arena.models.monster import Monster

logger = logging.getLogger(__name__)


class StatusHandler:
    def __init__(self, rng: RandomSource, narrator: Narrator):
        self.rng = rng
        self.narrator = narrator

    def try_fade(self, monster: Monster) -> bool:
        """Roll the fade check for a monster's condition. Returns True if it faded."""
        condition = monster.condition
        if condition is None:
            return False
        if not self.rng.chance(FADE_CHANCE, f"{monster.name}'s {condition.value} fading", Stream.STATUS):
            return False
        monster.condition = None
        self.narrator.emit(BattleEventType.STATUS_FADED, condition_message(condition, "faded", monster.name),
                           target=monster.name, condition=condition.value)
        return True

    def announce_ongoing(self, monster: Monster) -> None:
        if monster.condition is None:
            return
        self.narrator.emit(BattleEventType.STATUS_ONGOING,
                           condition_message(monster.condition, "ongoing", monster.name),
                           target=monster.name, condition=monster.condition.value)

    def apply_burn(self, monster: Monster) -> int:
        """Burn tick at the end of a monster's turn. Returns damage dealt."""
        if monster.condition != StatusCondition.BURN or monster.is_defeated:
            return 0
        amount = burn_damage(monster.max_hp)
        monster.take_damage(amount)
        self.narrator.emit(BattleEventType.BURN_DAMAGE, f"{monster.name} takes {amount} damage from burning!",
                           target=monster.name, value=amount, hp_left=monster.current_hp)
        if monster.is_defeated:
            self.narrator.emit(BattleEventType.FAINT, f"{monster.name} faints!", target=monster.name)
        return amount
