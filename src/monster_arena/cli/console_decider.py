"""Debug-mode decider: asks the player to settle every random draw."""
from __future__ import annotations

from typing import Callable

from monster_arena.mechanics.random_source import Decider


class ConsoleDecider(Decider):
    def __init__(self, ask: Callable[[str], str] | None = None, say: Callable[[str], None] | None = None):
        self.ask = ask or input
        self.say = say or print

    def _read(self, question: str) -> str:
        return self.ask(question).strip().lower()

    def decide_chance(self, purpose: str) -> bool:
        while True:
            answer = self._read(f"Decide {purpose}: yes or no? (y/n)")
            if answer in ("y", "yes"):
                return True
            if answer in ("n", "no"):
                return False
            self.say("Error, enter y or n.")

    def decide_float(self, low: float, high: float, purpose: str) -> float:
        while True:
            answer = self._read(f"Decide {purpose}: a number between {low:.2f} and {high:.2f}?")
            try:
                value = float(answer)
            except ValueError:
                self.say("Error, invalid number format.")
                continue
            if low <= value <= high:
                return value
            self.say("Error, out of range.")

    def decide_int(self, low: int, high: int, purpose: str) -> int:
        while True:
            answer = self._read(f"Decide {purpose}: an integer between {low} and {high}?")
            try:
                value = int(answer)
            except ValueError:
                self.say("Error, invalid number format.")
                continue
            if low <= value <= high:
                return value
            self.say("Error, out of range.")
