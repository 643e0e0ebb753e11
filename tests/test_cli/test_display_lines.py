"""Tests for src/monster_arena/cli/display.py."""
from __future__ import annotations

import pytest
from rich.console import Console

from monster_arena.cli.display import ArenaDisplay, action_line, health_bar, monster_line, stats_line
from monster_arena.mechanics.conditions import StatusCondition
from monster_arena.mechanics.elements import Element
from monster_arena.mechanics.stats import StatType
from monster_arena.models.action import Action
from monster_arena.models.effect import (
    AmountKind,
    DamageEffect,
    RepeatEffect,
    StatusEffect,
)
from monster_arena.models.event import BattleEvent, BattleEventType
from monster_arena.models.monster import BaseStats, MonsterTemplate


@pytest.fixture
def display():
    d = ArenaDisplay(bar_width=10)
    d.console = Console(record=True, width=100)
    return d


class TestHealthBar:
    def test_full(self, monster_factory):
        m = monster_factory("Rex", seat=2)
        assert health_bar(m, width=10) == "[XXXXXXXXXX] 2 Rex (OK)"

    def test_partial_rounds(self, monster_factory):
        m = monster_factory("Rex", hp=100)
        m.set_hp(46)
        assert health_bar(m, width=10) == "[XXXXX_____] 1 Rex (OK)"

    def test_current_marker_and_condition(self, monster_factory):
        m = monster_factory("Rex")
        m.condition = StatusCondition.WET
        assert health_bar(m, width=4, current=m) == "[XXXX] 1 *Rex (WET)"

    def test_fainted(self, monster_factory):
        m = monster_factory("Rex")
        m.set_hp(0)
        assert health_bar(m, width=4) == "[____] 1 Rex (FAINTED)"


class TestLines:
    def test_monster_line(self):
        template = MonsterTemplate(name="Pebble", element=Element.EARTH,
                                   base_stats=BaseStats(hp=60, atk=30, def_=70, spd=20), actions=())
        assert monster_line(template) == "Pebble: ELEMENT EARTH, HP 60, ATK 30, DEF 70, SPD 20"

    def test_action_line(self, tackle):
        assert action_line(tackle) == "Tackle: ELEMENT NORMAL, Damage b40, HitRate 95"

    def test_action_line_without_damage(self):
        lullaby = Action(name="Lullaby", effects=(StatusEffect(condition=StatusCondition.SLEEP, hit_rate=0.6),))
        assert action_line(lullaby) == "Lullaby: ELEMENT NORMAL, Damage --, HitRate 60"

    def test_action_line_repeat(self):
        flurry = Action(name="Flurry", effects=(RepeatEffect(min_count=2, max_count=4, effects=(
            DamageEffect(amount_kind=AmountKind.RELATIVE, power=15, hit_rate=0.29),
        )),))
        assert action_line(flurry) == "Flurry: ELEMENT NORMAL, Damage r15, HitRate 29"

    def test_stats_line(self, monster_factory):
        m = monster_factory(hp=100, atk=40, defense=30, spd=20, prc=1, agl=2)
        m.set_hp(80)
        m.modify_stat(StatType.ATK, 1)
        m.modify_stat(StatType.AGL, -2)
        assert stats_line(m) == "HP 80/100, ATK 40(+1), DEF 30, SPD 20, PRC 1, AGL 2(-2)"


class TestArenaDisplay:
    def test_error_prefix(self, display):
        display.show_error("unknown command: dance")
        assert "Error, unknown command: dance" in display.console.export_text()

    def test_brackets_are_not_markup(self, display, monster_factory):
        display.show_competition([monster_factory("Rex")])
        assert "[XXXXXXXXXX] 1 Rex (OK)" in display.console.export_text()

    def test_miss_is_silent(self, display):
        display.show_event(BattleEvent(event_type=BattleEventType.MISS, description=""))
        assert display.console.export_text() == ""

    def test_debug_hidden_when_disabled(self, display):
        display.show_debug = False
        display.show_event(BattleEvent(event_type=BattleEventType.DEBUG, description="Hit calculation"))
        assert display.console.export_text() == ""

    def test_event_text(self, display):
        display.show_event(BattleEvent(event_type=BattleEventType.DAMAGE, description="Rex takes 5 damage!"))
        assert "Rex takes 5 damage!" in display.console.export_text()

    def test_actions_heading(self, display, monster_factory, tackle):
        display.show_actions(monster_factory("Rex", actions=(tackle,)))
        text = display.console.export_text()
        assert "ACTIONS OF Rex" in text
        assert "Tackle: ELEMENT NORMAL, Damage b40, HitRate 95" in text
