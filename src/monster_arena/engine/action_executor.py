"""Effect interpreter — turns one action into a sequence of resolved effects.

Resolution rules:
  * repeats are expanded up front into a flat queue; random repeat counts
    are drawn once per use of the action
  * an effect aimed at TARGET hits the first living monster (in seat
    order) other than the attacker
  * every effect rolls to hit; if the first effect of the action misses or
    has nothing to hit, the whole action fails, later misses are skipped
  * only the first damage effect of an action announces effectiveness and
    critical hits
"""
from __future__ import annotations

import logging

from monster_arena.engine.effect_handlers import EffectHandler
from monster_arena.engine.events import Narrator
from monster_arena.mechanics.random_source import RandomSource
from monster_arena.mechanics.stats import StatType
from monster_arena.models.action import Action
from monster_arena.models.effect import DamageEffect, EffectTarget, RepeatEffect
from monster_arena.models.event import BattleEventType
from monster_arena.models.monster import Monster

logger = logging.getLogger(__name__)


def expand_effects(action: Action, rng: RandomSource) -> list:
    """Flatten repeats into a queue of leaf effects, drawing random counts now."""
    queue = []
    for effect in action.effects:
        if isinstance(effect, RepeatEffect):
            if effect.is_random:
                count = rng.uniform_int(effect.min_count, effect.max_count, "repeat count")
            else:
                count = effect.count
            for _ in range(count):
                queue.extend(effect.effects)
        else:
            queue.append(effect)
    return queue


def first_opponent(attacker: Monster, monsters: list[Monster]) -> Monster | None:
    for monster in monsters:
        if monster is not attacker and not monster.is_defeated:
            return monster
    return None


def hit_chance(effect, attacker: Monster, target: Monster) -> float:
    """Chance to hit in percent. Can exceed 100, which always hits."""
    base = effect.hit_rate * 100
    precision = attacker.effective_stat(StatType.PRC)
    if effect.target == EffectTarget.SELF:
        return base * precision
    return base * (precision / target.effective_stat(StatType.AGL))


class ActionExecutor:
    def __init__(self, rng: RandomSource, narrator: Narrator, handler: EffectHandler | None = None):
        self.rng = rng
        self.narrator = narrator
        self.handler = handler or EffectHandler(rng, narrator)

    def execute(self, attacker: Monster, action: Action, monsters: list[Monster]) -> bool:
        """Run an action. Returns False if it failed outright."""
        announce_damage = action.has_damage
        queue = expand_effects(action, self.rng)

        # Nothing to aim at: fail before anything is rolled.
        if any(e.target == EffectTarget.TARGET for e in action.effects) \
                and first_opponent(attacker, monsters) is None:
            logger.debug("%s has no opponent for %s", attacker.name, action.name)
            return False

        first_effect = True
        for effect in queue:
            if effect.target == EffectTarget.SELF:
                target = attacker
            else:
                target = first_opponent(attacker, monsters)

            if target is None:
                if first_effect:
                    return False
                continue

            if not self._roll_hit(effect, attacker, target):
                self.narrator.emit(BattleEventType.MISS, "", actor=attacker.name, target=target.name,
                                   effect=effect.kind, first=first_effect)
                if first_effect:
                    return False
                continue

            announce = announce_damage and isinstance(effect, DamageEffect)
            if announce:
                announce_damage = False
            self.handler.apply(effect, attacker, target, action, announce)
            first_effect = False

        return True

    def _roll_hit(self, effect, attacker: Monster, target: Monster) -> bool:
        if attacker.is_defeated:
            return False

        chance = hit_chance(effect, attacker, target)
        base = effect.hit_rate * 100
        prc = attacker.effective_stat(StatType.PRC)
        if effect.target == EffectTarget.SELF:
            self.narrator.trace(f"Hit calculation: {base:g}% * {prc:.3f} (PRC) = {chance:.3f}%",
                                hit_chance=chance)
        else:
            agl = target.effective_stat(StatType.AGL)
            self.narrator.trace(
                f"Hit calculation: {base:g}% * {prc:.3f}/{agl:.3f} (PRC/AGL) = {chance:.3f}%",
                hit_chance=chance,
            )
        return self.rng.chance(chance, f"hit calculation for {effect.kind}")
