"""Applies a single resolved effect to its target.

By the time an effect reaches here the target has been resolved and the hit
roll has succeeded. Each effect kind has one handler; the table below maps
kinds to handlers so adding a kind without a handler fails loudly.
"""
from __future__ import annotations

import logging
import math
from typing import Callable

from monster_arena.engine.damage import DamageCalculator
from monster_arena.engine.events import Narrator
from monster_arena.mechanics.conditions import condition_message
from monster_arena.mechanics.random_source import RandomSource
from monster_arena.mechanics.stats import StatType
from monster_arena.models.action import Action
from monster_arena.models.effect import (
    AmountKind,
    ContinueEffect,
    DamageEffect,
    HealingEffect,
    ProtectionEffect,
    ProtectionTarget,
    RepeatEffect,
    StatChangeEffect,
    StatusEffect,
)
from monster_arena.models.event import BattleEventType
from monster_arena.models.monster import Monster

logger = logging.getLogger(__name__)

_PROTECTION_LABELS: dict[ProtectionTarget, str] = {
    ProtectionTarget.HEALTH: "damage",
    ProtectionTarget.STATS: "status changes",
}


def relative_amount(max_hp: int, percent: int) -> int:
    return math.ceil(max_hp * percent / 100)


class EffectHandler:
    """Mutates monsters for hit effects and narrates the outcome."""

    def __init__(self, rng: RandomSource, narrator: Narrator):
        self.rng = rng
        self.narrator = narrator
        self.damage = DamageCalculator(rng, narrator)
        self._handlers: dict[type, Callable] = {
            DamageEffect: self._damage,
            HealingEffect: self._heal,
            StatChangeEffect: self._stat_change,
            StatusEffect: self._status,
            ProtectionEffect: self._protection,
            ContinueEffect: self._nothing,
            RepeatEffect: self._nothing,
        }

    def apply(self, effect, attacker: Monster, target: Monster, action: Action,
              announce: bool = False) -> None:
        handler = self._handlers[type(effect)]
        handler(effect, attacker, target, action, announce)

    # -- Damage --

    def _damage(self, effect: DamageEffect, attacker: Monster, target: Monster,
                action: Action, announce: bool) -> None:
        if target.is_protected(ProtectionTarget.HEALTH) and attacker is not target:
            self.narrator.emit(BattleEventType.PROTECTED, f"{target.name} is protected and takes no damage!",
                               actor=attacker.name, target=target.name)
            return

        if effect.amount_kind == AmountKind.ABSOLUTE:
            amount = effect.power
        elif effect.amount_kind == AmountKind.RELATIVE:
            amount = relative_amount(target.max_hp, effect.power)
        else:
            amount = self.damage.compute(attacker, target, action, effect.power, announce).amount

        self.deal_damage(target, amount, attacker=attacker)

    def deal_damage(self, target: Monster, amount: int, attacker: Monster | None = None) -> int:
        lost = target.take_damage(amount)
        self.narrator.emit(BattleEventType.DAMAGE, f"{target.name} takes {amount} damage!",
                           actor=attacker.name if attacker else None, target=target.name,
                           value=amount, hp_lost=lost, hp_left=target.current_hp)
        if target.is_defeated:
            self.narrator.emit(BattleEventType.FAINT, f"{target.name} faints!", target=target.name)
        return lost

    # -- Healing --

    def _heal(self, effect: HealingEffect, attacker: Monster, target: Monster,
              action: Action, announce: bool) -> None:
        if effect.amount_kind == AmountKind.ABSOLUTE:
            amount = effect.power
        elif effect.amount_kind == AmountKind.RELATIVE:
            amount = relative_amount(target.max_hp, effect.power)
        else:
            amount = math.ceil(effect.power * attacker.effective_stat(StatType.ATK) / 100)

        restored = target.heal(amount)
        self.narrator.emit(BattleEventType.HEAL, f"{target.name} gains back {restored} health!",
                           actor=attacker.name, target=target.name, value=restored, requested=amount)

    # -- Stats --

    def _stat_change(self, effect: StatChangeEffect, attacker: Monster, target: Monster,
                     action: Action, announce: bool) -> None:
        stat = effect.stat.value
        if effect.stages < 0 and attacker is not target and target.is_protected(ProtectionTarget.STATS):
            self.narrator.emit(BattleEventType.PROTECTED, f"{target.name} is protected and is unaffected!",
                               actor=attacker.name, target=target.name, stat=stat)
            return

        old, new = target.modify_stat(effect.stat, effect.stages)
        if new > old:
            text = f"{target.name}'s {stat} rises!"
        elif new < old:
            text = f"{target.name}'s {stat} decreases..."
        elif effect.stages > 0:
            text = f"{target.name}'s {stat} cannot go higher!"
        else:
            text = f"{target.name}'s {stat} cannot go lower!"
        self.narrator.emit(BattleEventType.STAT_CHANGE, text, actor=attacker.name, target=target.name,
                           value=new - old, stat=stat, old_stage=old, new_stage=new)

    # -- Status --

    def _status(self, effect: StatusEffect, attacker: Monster, target: Monster,
                action: Action, announce: bool) -> None:
        if target.condition is not None:
            self.narrator.emit(
                BattleEventType.STATUS_ALREADY,
                f"{target.name} is already affected by {target.condition.value}!",
                actor=attacker.name, target=target.name, condition=target.condition.value,
            )
            return
        target.condition = effect.condition
        self.narrator.emit(BattleEventType.STATUS_APPLIED,
                           condition_message(effect.condition, "onset", target.name),
                           actor=attacker.name, target=target.name, condition=effect.condition.value)

    # -- Protection --

    def _protection(self, effect: ProtectionEffect, attacker: Monster, target: Monster,
                    action: Action, announce: bool) -> None:
        if effect.is_random:
            rounds = self.rng.uniform_int(effect.min_rounds, effect.max_rounds,
                                          f"protection duration for {target.name}")
        else:
            rounds = effect.rounds
        target.protection[effect.protects] = rounds
        self.narrator.emit(BattleEventType.PROTECTION_START,
                           f"{target.name} is now protected against {_PROTECTION_LABELS[effect.protects]}!",
                           actor=attacker.name, target=target.name, value=rounds,
                           protects=effect.protects.value)

    def _nothing(self, effect, attacker: Monster, target: Monster, action: Action, announce: bool) -> None:
        pass
