"""Tests for src/monster_arena/content/config_parser.py."""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from monster_arena.content.config_parser import ConfigParser, parse_config, parse_effect, parse_file
from monster_arena.errors import ConfigError
from monster_arena.mechanics.conditions import StatusCondition
from monster_arena.mechanics.elements import Element
from monster_arena.mechanics.stats import StatType
from monster_arena.models.effect import (
    AmountKind,
    ContinueEffect,
    DamageEffect,
    EffectTarget,
    HealingEffect,
    ProtectionEffect,
    ProtectionTarget,
    RepeatEffect,
    StatChangeEffect,
    StatusEffect,
)

SAMPLE_ARENA = Path(__file__).resolve().parents[2] / "arenas" / "arena.txt"

BASIC = """\
action Tackle NORMAL
damage target base 40 95
end action

monster Pika WATER 100 40 35 60 Tackle
"""


class TestParseEffect:
    def test_damage(self):
        effect = parse_effect("damage target base 40 95")
        assert isinstance(effect, DamageEffect)
        assert effect.target == EffectTarget.TARGET
        assert effect.amount_kind == AmountKind.BASE
        assert effect.power == 40
        assert effect.hit_rate == pytest.approx(0.95)

    @pytest.mark.parametrize("token", ["user", "self", "USER"])
    def test_self_targets(self, token):
        assert parse_effect(f"heal {token} rel 25 100").target == EffectTarget.SELF

    def test_heal(self):
        effect = parse_effect("heal user abs 10 100")
        assert isinstance(effect, HealingEffect)
        assert effect.amount_kind == AmountKind.ABSOLUTE

    def test_status(self):
        effect = parse_effect("inflictStatusCondition target BURN 30")
        assert isinstance(effect, StatusEffect)
        assert effect.condition == StatusCondition.BURN
        assert effect.hit_rate == pytest.approx(0.3)

    def test_stat_change(self):
        effect = parse_effect("inflictStatChange target SPD -2 80")
        assert isinstance(effect, StatChangeEffect)
        assert effect.stat == StatType.SPD
        assert effect.stages == -2

    def test_fixed_protection(self):
        effect = parse_effect("protectStat stats 3 100")
        assert isinstance(effect, ProtectionEffect)
        assert effect.protects == ProtectionTarget.STATS
        assert effect.rounds == 3
        assert not effect.is_random

    def test_random_protection(self):
        effect = parse_effect("protectStat health random 1 3 100")
        assert effect.is_random
        assert (effect.min_rounds, effect.max_rounds) == (1, 3)

    def test_continue(self):
        effect = parse_effect("continue 50")
        assert isinstance(effect, ContinueEffect)
        assert effect.hit_rate == pytest.approx(0.5)

    @pytest.mark.parametrize("line", [
        "damage target base 40",
        "damage enemy base 40 95",
        "damage target huge 40 95",
        "damage target base forty 95",
        "inflictStatusCondition target POISON 30",
        "inflictStatChange target HP 1 100",
        "protectStat health random 1 100",
        "explode target 100",
    ])
    def test_rejects(self, line):
        parser = ConfigParser()
        with pytest.raises(Exception):
            parse_effect(line)
        # The block parser turns the same failure into a warning.
        catalog = parser.parse(f"action Bad NORMAL\n{line}\nend action\nmonster M NORMAL 1 1 1 1\n")
        assert "Bad" not in catalog.actions
        assert parser.skipped >= 1


class TestActions:
    def test_basic(self):
        catalog = parse_config(BASIC)
        tackle = catalog.actions["Tackle"]
        assert tackle.element == Element.NORMAL
        assert len(tackle.effects) == 1

    def test_fixed_repeat(self):
        catalog = parse_config(
            "action Jab NORMAL\nrepeat 3\ndamage target abs 5 100\nend repeat\nend action\n"
        )
        repeat = catalog.actions["Jab"].effects[0]
        assert isinstance(repeat, RepeatEffect)
        assert repeat.count == 3
        assert len(repeat.effects) == 1

    def test_random_repeat(self):
        catalog = parse_config(
            "action Flurry NORMAL\nrepeat random 2 4\ndamage target base 15 80\nend repeat\nend action\n"
        )
        repeat = catalog.actions["Flurry"].effects[0]
        assert repeat.is_random
        assert (repeat.min_count, repeat.max_count) == (2, 4)

    def test_effects_around_repeat_keep_order(self):
        catalog = parse_config(
            "action Mix NORMAL\ncontinue 100\nrepeat 2\ndamage target abs 5 100\nend repeat\n"
            "heal user abs 3 100\nend action\n"
        )
        kinds = [e.kind for e in catalog.actions["Mix"].effects]
        assert kinds == ["continue", "repeat", "heal"]

    def test_nested_repeat_ignored(self, caplog):
        text = ("action Deep NORMAL\nrepeat 2\nrepeat 2\ndamage target abs 1 100\nend repeat\n"
                "end repeat\nend action\n")
        with caplog.at_level(logging.WARNING):
            catalog = parse_config(text)
        assert "Nested repeats are not supported and will be ignored" in caplog.text
        assert catalog.actions["Deep"].effects[0].count == 2

    def test_empty_repeat_dropped(self, caplog):
        text = "action Hollow NORMAL\nrepeat 2\nend repeat\ncontinue 100\nend action\n"
        with caplog.at_level(logging.WARNING):
            catalog = parse_config(text)
        assert [e.kind for e in catalog.actions["Hollow"].effects] == ["continue"]

    def test_action_without_effects_skipped(self, caplog):
        text = "action Empty NORMAL\nend action\n" + BASIC
        with caplog.at_level(logging.WARNING):
            catalog = parse_config(text)
        assert "Empty" not in catalog.actions
        assert "No valid effects found for action: Empty" in caplog.text

    def test_bad_element_skipped(self):
        catalog = parse_config("action Zap LIGHTNING\ncontinue 100\nend action\n" + BASIC)
        assert "Zap" not in catalog.actions


class TestMonsters:
    def test_basic(self):
        catalog = parse_config(BASIC)
        pika = catalog.get_monster("Pika")
        assert pika.element == Element.WATER
        assert pika.base_stats.hp == 100
        assert pika.base_stats.def_ == 35
        assert pika.base_stats.prc == 1 and pika.base_stats.agl == 1
        assert [a.name for a in pika.actions] == ["Tackle"]

    def test_unknown_action_skipped(self, caplog):
        with caplog.at_level(logging.WARNING):
            catalog = parse_config(BASIC.replace("Tackle\n", "Tackle Splash\n"))
        assert [a.name for a in catalog.get_monster("Pika").actions] == ["Tackle"]
        assert "Unknown action Splash for monster Pika" in caplog.text

    def test_too_few_fields(self):
        parser = ConfigParser()
        catalog = parser.parse(BASIC + "monster Broken FIRE 10 10\n")
        assert [m.name for m in catalog.monsters] == ["Pika"]
        assert parser.skipped == 1

    def test_non_positive_stat(self):
        catalog = parse_config(BASIC + "monster Ghost NORMAL 0 10 10 10\n")
        assert [m.name for m in catalog.monsters] == ["Pika"]


class TestDocument:
    def test_comments_and_blank_lines(self):
        catalog = parse_config("# arena\n\n" + BASIC + "\n# end\n")
        assert catalog.summary() == "Loaded 1 actions, 1 monsters."

    def test_unexpected_line_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            parse_config("hello there\n" + BASIC, source="arena.txt")
        assert "arena.txt:1: unexpected line: hello there" in caplog.text

    def test_empty_is_error(self):
        with pytest.raises(ConfigError, match="no actions or monsters found"):
            parse_config("# nothing here\n", source="empty.txt")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="cannot read file"):
            parse_file(tmp_path / "missing.txt")

    def test_sample_arena(self):
        catalog = parse_file(SAMPLE_ARENA)
        assert catalog.summary() == "Loaded 8 actions, 4 monsters."
        assert [a.name for a in catalog.get_monster("Clodhopper").actions] == ["Shell", "Tackle"]
