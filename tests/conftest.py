"""Shared fixtures for the Monster Arena test suite."""
from __future__ import annotations

from collections import deque
from typing import Any

import pytest

from monster_arena.engine.battle import ActionProvider
from monster_arena.engine.events import EventLog, Narrator
from monster_arena.mechanics.elements import Element
from monster_arena.mechanics.random_source import Decider, RandomSource
from monster_arena.models.action import Action
from monster_arena.models.effect import (
    AmountKind,
    DamageEffect,
    EffectTarget,
    RepeatEffect,
)
from monster_arena.models.monster import BaseStats, Monster


class ScriptedDecider(Decider):
    """Answers random draws from queues; falls back to defaults when a queue is empty.

    Defaults make every roll succeed, pick the top of float ranges (no
    damage variance) and the bottom of integer ranges.
    """

    def __init__(self, chances=(), floats=(), ints=(), default_chance: bool = True):
        self.chances = deque(chances)
        self.floats = deque(floats)
        self.ints = deque(ints)
        self.default_chance = default_chance
        self.asked: list[str] = []

    def decide_chance(self, purpose: str) -> bool:
        self.asked.append(purpose)
        return self.chances.popleft() if self.chances else self.default_chance

    def decide_float(self, low: float, high: float, purpose: str) -> float:
        self.asked.append(purpose)
        return self.floats.popleft() if self.floats else high

    def decide_int(self, low: int, high: int, purpose: str) -> int:
        self.asked.append(purpose)
        return self.ints.popleft() if self.ints else low


class ScriptedProvider(ActionProvider):
    """Plays back fixed choices per monster name; passes once a script runs out."""

    def __init__(self, script: dict[str, list[str | None]]):
        self.script = {name: deque(choices) for name, choices in script.items()}

    def choose(self, monster: Monster, battle: Any) -> str | None:
        choices = self.script.get(monster.name)
        return choices.popleft() if choices else None


def make_monster(
    name: str = "Blob",
    element: Element = Element.NORMAL,
    hp: int = 100,
    atk: int = 50,
    defense: int = 50,
    spd: int = 50,
    prc: int = 1,
    agl: int = 1,
    actions: tuple[Action, ...] = (),
    seat: int = 1,
) -> Monster:
    return Monster(
        name=name,
        element=element,
        seat=seat,
        base_stats=BaseStats(hp=hp, atk=atk, def_=defense, spd=spd, prc=prc, agl=agl),
        actions=actions,
    )


def absolute_hit(power: int, target: EffectTarget = EffectTarget.TARGET, hit_rate: float = 1.0) -> DamageEffect:
    return DamageEffect(target=target, amount_kind=AmountKind.ABSOLUTE, power=power, hit_rate=hit_rate)


@pytest.fixture
def scripted():
    return ScriptedDecider()


@pytest.fixture
def manual_rng(scripted):
    return RandomSource(decider=scripted)


@pytest.fixture
def seeded_rng():
    return RandomSource(seed=42)


@pytest.fixture
def event_log():
    return EventLog()


@pytest.fixture
def narrator(event_log):
    return Narrator(event_log)


@pytest.fixture
def punch() -> Action:
    return Action(name="Punch", element=Element.NORMAL, effects=(absolute_hit(20),))


@pytest.fixture
def tackle() -> Action:
    return Action(name="Tackle", element=Element.NORMAL, effects=(
        DamageEffect(target=EffectTarget.TARGET, amount_kind=AmountKind.BASE, power=40, hit_rate=0.95),
    ))


@pytest.fixture
def triple_jab() -> Action:
    return Action(name="TripleJab", element=Element.NORMAL, effects=(
        RepeatEffect(count=3, effects=(absolute_hit(5),)),
    ))


@pytest.fixture
def monster_factory():
    return make_monster


@pytest.fixture
def decider_factory():
    return ScriptedDecider


@pytest.fixture
def provider_factory():
    return ScriptedProvider


@pytest.fixture
def hit_factory():
    return absolute_hit
