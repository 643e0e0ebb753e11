"""Round orchestrator — drives a competition from first round to result.

A round has three phases:
  1. selection: every living monster, in seat order, picks an action or passes
  2. execution: monsters act in descending effective speed (ties by seat);
     conditions may fade or keep a sleeping monster from acting, and burning
     monsters take damage at the end of their turn
  3. end of round: protection counters tick down, conditions get a second
     chance to fade, and all selections are cleared

The battle ends as soon as at most one monster is left standing.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from monster_arena.engine.action_executor import ActionExecutor
from monster_arena.engine.events import EventSink, Narrator
from monster_arena.engine.status import StatusHandler
from monster_arena.engine.validators import validate_selection
from monster_arena.mechanics.conditions import skips_turn
from monster_arena.mechanics.random_source import RandomSource
from monster_arena.models.effect import ProtectionTarget
from monster_arena.models.event import BattleEventType
from monster_arena.models.monster import Monster

logger = logging.getLogger(__name__)

_PROTECTION_END_LABELS: dict[ProtectionTarget, str] = {
    ProtectionTarget.HEALTH: "damage",
    ProtectionTarget.STATS: "stat reduction",
}


class Outcome(str, Enum):
    ONGOING = "ongoing"
    WINNER = "winner"
    DRAW = "draw"


@dataclass
class BattleResult:
    outcome: Outcome
    winner: Monster | None = None
    rounds: int = 0

    @property
    def is_over(self) -> bool:
        return self.outcome != Outcome.ONGOING


class ActionProvider:
    """Decides what a monster does this round.

    ``choose`` returns an action name, or None to pass. It may block (e.g.
    waiting for console input); a rejected choice is asked for again.
    """

    def choose(self, monster: Monster, battle: Battle) -> str | None:
        raise NotImplementedError


class FirstActionProvider(ActionProvider):
    """Always picks the monster's first known action, passing if it knows none."""

    def choose(self, monster: Monster, battle: Battle) -> str | None:
        return monster.actions[0].name if monster.actions else None


class Battle:
    def __init__(
        self,
        monsters: list[Monster],
        rng: RandomSource | None = None,
        sink: EventSink | None = None,
        debug: bool = False,
    ):
        if len(monsters) < 2:
            raise ValueError("a battle needs at least two monsters")
        self.monsters = list(monsters)
        for seat, monster in enumerate(self.monsters, start=1):
            monster.seat = seat
        self.rng = rng or RandomSource()
        self.narrator = Narrator(sink, debug=debug)
        self.executor = ActionExecutor(self.rng, self.narrator)
        self.status = StatusHandler(self.rng, self.narrator)
        self.round_number = 0
        self.result = BattleResult(Outcome.ONGOING)

    @property
    def events(self):
        """The underlying sink (an EventLog unless one was supplied)."""
        return self.narrator.sink

    @property
    def is_over(self) -> bool:
        return self.result.is_over

    def living(self) -> list[Monster]:
        return [m for m in self.monsters if not m.is_defeated]

    # -- Lifecycle --

    def start(self) -> None:
        self.narrator.emit(BattleEventType.BATTLE_START,
                           f"The {len(self.monsters)} monsters enter the competition!",
                           value=len(self.monsters), monsters=[m.name for m in self.monsters])
        self._begin_round()

    def _begin_round(self) -> None:
        self.round_number += 1
        self.narrator.round_number = self.round_number
        self.narrator.emit(BattleEventType.ROUND_START, f"=== Round {self.round_number} ===",
                           value=self.round_number)

    # -- Phase 1: selection --

    def next_to_select(self) -> Monster | None:
        """Lowest-seat living monster that has neither chosen nor passed."""
        for monster in self.monsters:
            if not monster.is_defeated and monster.selected_action is None and not monster.has_passed:
                return monster
        return None

    @property
    def selections_complete(self) -> bool:
        return self.next_to_select() is None

    def select_action(self, monster: Monster, action_name: str) -> tuple[bool, str]:
        ok, reason = validate_selection(monster, action_name)
        if not ok:
            self.narrator.emit(BattleEventType.SELECTION_REJECTED, f"Error, {reason}",
                               actor=monster.name, action=action_name)
            return False, reason
        monster.selected_action = monster.find_action(action_name)
        logger.debug("%s selects %s", monster.name, monster.selected_action.name)
        return True, ""

    def pass_turn(self, monster: Monster) -> None:
        monster.selected_action = None
        monster.has_passed = True

    def collect_selections(self, provider: ActionProvider) -> None:
        while (monster := self.next_to_select()) is not None:
            choice = provider.choose(monster, self)
            if choice is None:
                self.pass_turn(monster)
            else:
                self.select_action(monster, choice)

    # -- Phase 2: execution --

    def turn_order(self) -> list[Monster]:
        """Living monsters by descending effective speed, ties by seat."""
        return sorted(self.living(), key=lambda m: (-m.effective_speed, m.seat))

    def execute_actions_phase(self) -> None:
        for monster in self.turn_order():
            if monster.is_defeated:
                continue
            self._take_turn(monster)

    def _take_turn(self, monster: Monster) -> None:
        self.narrator.emit(BattleEventType.TURN_START, f"It's {monster.name}'s turn.", actor=monster.name)

        if monster.condition is not None and not self.status.try_fade(monster):
            self.status.announce_ongoing(monster)
            if skips_turn(monster.condition):
                self.status.apply_burn(monster)
                return

        action = monster.selected_action
        if action is None:
            self.narrator.emit(BattleEventType.PASS, f"{monster.name} passes!", actor=monster.name)
            self.status.apply_burn(monster)
            return

        self.narrator.emit(BattleEventType.ACTION_USED, f"{monster.name} uses {action.name}!",
                           actor=monster.name, action=action.name)
        if not self.executor.execute(monster, action, self.monsters):
            self.narrator.emit(BattleEventType.ACTION_FAILED, "The action failed...",
                               actor=monster.name, action=action.name)
        self.status.apply_burn(monster)
        monster.selected_action = None

    # -- Phase 3: end of round --

    def end_of_round_phase(self) -> None:
        for monster in self.monsters:
            if monster.is_defeated:
                continue
            for target, rounds in monster.protection.items():
                if rounds <= 0:
                    continue
                monster.protection[target] = rounds - 1
                if rounds - 1 == 0:
                    self.narrator.emit(
                        BattleEventType.PROTECTION_END,
                        f"{monster.name}'s {_PROTECTION_END_LABELS[target]} protection has ended.",
                        target=monster.name, protects=target.value,
                    )
            self.status.try_fade(monster)

        for monster in self.monsters:
            monster.clear_selection()

    # -- Outcome --

    def check_outcome(self) -> BattleResult:
        if self.result.is_over:
            return self.result

        alive = self.living()
        if len(alive) == 1:
            winner = alive[0]
            self.result = BattleResult(Outcome.WINNER, winner, self.round_number)
            self.narrator.emit(BattleEventType.BATTLE_END,
                               f"{winner.name} has no opponents left and wins the competition!",
                               actor=winner.name, outcome=Outcome.WINNER.value)
        elif not alive:
            self.result = BattleResult(Outcome.DRAW, None, self.round_number)
            self.narrator.emit(BattleEventType.BATTLE_END, "No monsters left. It's a draw!",
                               outcome=Outcome.DRAW.value)
        return self.result

    def resolve_round(self) -> BattleResult:
        """Run execution and end-of-round once every selection is in."""
        self.execute_actions_phase()
        result = self.check_outcome()
        if not result.is_over:
            self.end_of_round_phase()
            self._begin_round()
        return result

    def play_round(self, provider: ActionProvider) -> BattleResult:
        if self.round_number == 0:
            self.start()
        self.collect_selections(provider)
        return self.resolve_round()

    def run(self, provider: ActionProvider, max_rounds: int | None = None) -> BattleResult:
        """Play rounds until the battle ends or max_rounds have been played."""
        played = 0
        while not self.is_over:
            if max_rounds is not None and played >= max_rounds:
                break
            self.play_round(provider)
            played += 1
        return self.result
