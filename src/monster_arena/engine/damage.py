"""Base damage formula."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from monster_arena.engine.events import Narrator
from monster_arena.mechanics.elements import element_factor
from monster_arena.mechanics.random_source import RandomSource
from monster_arena.mechanics.stats import StatType
from monster_arena.models.action import Action
from monster_arena.models.event import BattleEventType
from monster_arena.models.monster import Monster

logger = logging.getLogger(__name__)

CRITICAL_MULTIPLIER = 2.0
SAME_ELEMENT_BONUS = 1.5
RANDOM_FACTOR_RANGE = (0.85, 1.0)
NORMALIZATION = 1.0 / 3.0


@dataclass
class DamageResult:
    amount: int
    element_factor: float = 1.0
    stat_ratio: float = 1.0
    critical_chance: float = 0.0
    is_critical: bool = False
    same_element: bool = False
    random_factor: float = 1.0


def critical_chance(attacker: Monster, target: Monster) -> float:
    """Crit chance in percent: 10^(-targetSPD/attackerSPD) * 100.

    Equal speeds give 10%, a much faster attacker approaches 100%.
    """
    attacker_spd = attacker.effective_stat(StatType.SPD)
    target_spd = target.effective_stat(StatType.SPD)
    return math.pow(10, -target_spd / attacker_spd) * 100


class DamageCalculator:
    def __init__(self, rng: RandomSource, narrator: Narrator):
        self.rng = rng
        self.narrator = narrator

    def compute(self, attacker: Monster, target: Monster, action: Action, power: int,
                announce: bool = True) -> DamageResult:
        """Full base-damage calculation, announcing effectiveness and crits if asked."""
        total = float(power)

        factor = element_factor(action.element, target.element)
        total *= factor
        if announce and factor > 1.0:
            self.narrator.emit(BattleEventType.EFFECTIVENESS, "It is very effective!",
                               actor=attacker.name, target=target.name, factor=factor)
        elif announce and factor < 1.0:
            self.narrator.emit(BattleEventType.EFFECTIVENESS, "It is not very effective...",
                               actor=attacker.name, target=target.name, factor=factor)

        ratio = attacker.effective_stat(StatType.ATK) / target.effective_stat(StatType.DEF)
        total *= ratio

        crit_chance = critical_chance(attacker, target)
        is_critical = self.rng.chance(crit_chance, "critical hit")
        if is_critical:
            total *= CRITICAL_MULTIPLIER
            if announce:
                self.narrator.emit(BattleEventType.CRITICAL_HIT, "Critical hit!",
                                   actor=attacker.name, target=target.name)

        same_element = action.element == attacker.element
        if same_element:
            total *= SAME_ELEMENT_BONUS

        random_factor = self.rng.uniform_float(*RANDOM_FACTOR_RANGE, "damage random factor")
        total *= random_factor
        total *= NORMALIZATION

        result = DamageResult(
            amount=math.ceil(total),
            element_factor=factor,
            stat_ratio=ratio,
            critical_chance=crit_chance,
            is_critical=is_critical,
            same_element=same_element,
            random_factor=random_factor,
        )
        self.narrator.trace(
            f"Damage calculation: {power} * {factor} (element) * {ratio:.3f} (ATK/DEF) "
            f"* {CRITICAL_MULTIPLIER if is_critical else 1.0} (critical) "
            f"* {SAME_ELEMENT_BONUS if same_element else 1.0} (same element) "
            f"* {random_factor:.3f} (random) / 3 = {result.amount}",
            power=power,
            element_factor=factor,
            stat_ratio=ratio,
            critical_chance=crit_chance,
            is_critical=is_critical,
            random_factor=random_factor,
        )
        logger.debug("%s -> %s base damage %d", attacker.name, target.name, result.amount)
        return result


def compute_base_damage(attacker: Monster, target: Monster, action: Action, power: int,
                        rng: RandomSource, narrator: Narrator | None = None,
                        announce: bool = True) -> int:
    """Convenience wrapper returning only the damage amount."""
    calculator = DamageCalculator(rng, narrator or Narrator())
    return calculator.compute(attacker, target, action, power, announce).amount
