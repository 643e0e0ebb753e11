"""Parser for the plain-text arena format.

Actions are blocks, monsters are single lines::

    action Tackle NORMAL
    damage target base 40 95
    end action

    monster Pika WATER 100 40 35 60 Tackle

Hit rates are whole percentages. Malformed definitions are logged and
skipped so one typo does not throw away the rest of the file.
"""
from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from monster_arena.errors import ConfigError
from monster_arena.mechanics.conditions import parse_condition
from monster_arena.mechanics.elements import parse_element
from monster_arena.mechanics.stats import parse_stat
from monster_arena.models.action import Action
from monster_arena.models.catalog import Catalog
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
from monster_arena.models.monster import BaseStats, MonsterTemplate

logger = logging.getLogger(__name__)

_TARGETS: dict[str, EffectTarget] = {
    "target": EffectTarget.TARGET,
    "user": EffectTarget.SELF,
    "self": EffectTarget.SELF,
}

_AMOUNTS: dict[str, AmountKind] = {
    "base": AmountKind.BASE,
    "rel": AmountKind.RELATIVE,
    "abs": AmountKind.ABSOLUTE,
}

_PROTECTS: dict[str, ProtectionTarget] = {
    "health": ProtectionTarget.HEALTH,
    "stats": ProtectionTarget.STATS,
}


class _LineError(Exception):
    """A single line could not be parsed; the caller decides whether to skip it."""


def _lookup(table: dict, token: str, what: str):
    try:
        return table[token.lower()]
    except KeyError:
        raise _LineError(f"unknown {what}: {token}") from None


def _int(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise _LineError(f"not an integer: {token}") from None


def _rate(token: str) -> float:
    try:
        return float(token) / 100.0
    except ValueError:
        raise _LineError(f"not a hit rate: {token}") from None


def _need(parts: list[str], count: int, usage: str) -> None:
    if len(parts) < count:
        raise _LineError(f"expected '{usage}'")


def parse_effect(line: str):
    """Parse one effect line (repeats are handled by the block parser)."""
    parts = line.split()
    keyword = parts[0]
    try:
        if keyword == "damage":
            _need(parts, 5, "damage TARGET base|rel|abs POWER HIT")
            return DamageEffect(target=_lookup(_TARGETS, parts[1], "target"),
                                amount_kind=_lookup(_AMOUNTS, parts[2], "amount kind"),
                                power=_int(parts[3]), hit_rate=_rate(parts[4]))
        if keyword == "heal":
            _need(parts, 5, "heal TARGET base|rel|abs POWER HIT")
            return HealingEffect(target=_lookup(_TARGETS, parts[1], "target"),
                                 amount_kind=_lookup(_AMOUNTS, parts[2], "amount kind"),
                                 power=_int(parts[3]), hit_rate=_rate(parts[4]))
        if keyword == "inflictStatusCondition":
            _need(parts, 4, "inflictStatusCondition TARGET CONDITION HIT")
            return StatusEffect(target=_lookup(_TARGETS, parts[1], "target"),
                                condition=parse_condition(parts[2]), hit_rate=_rate(parts[3]))
        if keyword == "inflictStatChange":
            _need(parts, 5, "inflictStatChange TARGET STAT STAGES HIT")
            return StatChangeEffect(target=_lookup(_TARGETS, parts[1], "target"),
                                    stat=parse_stat(parts[2]), stages=_int(parts[3]),
                                    hit_rate=_rate(parts[4]))
        if keyword == "protectStat":
            _need(parts, 4, "protectStat health|stats ROUNDS|random MIN MAX HIT")
            protects = _lookup(_PROTECTS, parts[1], "protection target")
            if parts[2].lower() == "random":
                _need(parts, 6, "protectStat health|stats random MIN MAX HIT")
                return ProtectionEffect(protects=protects, min_rounds=_int(parts[3]),
                                        max_rounds=_int(parts[4]), hit_rate=_rate(parts[5]))
            return ProtectionEffect(protects=protects, rounds=_int(parts[2]), hit_rate=_rate(parts[3]))
        if keyword == "continue":
            _need(parts, 2, "continue HIT")
            return ContinueEffect(hit_rate=_rate(parts[1]))
    except (ValueError, ValidationError) as e:
        raise _LineError(str(e).splitlines()[0]) from None
    raise _LineError(f"unknown effect type: {keyword}")


def _repeat_header(line: str) -> dict[str, int]:
    parts = line.split()
    if len(parts) >= 4 and parts[1].lower() == "random":
        return {"min_count": _int(parts[2]), "max_count": _int(parts[3])}
    _need(parts, 2, "repeat COUNT | repeat random MIN MAX")
    return {"count": _int(parts[1])}


class ConfigParser:
    def __init__(self, source: str = "<config>"):
        self.source = source
        self.actions: dict[str, Action] = {}
        self.monsters: list[MonsterTemplate] = []
        self.skipped = 0

    def _warn(self, lineno: int, message: str) -> None:
        self.skipped += 1
        logger.warning("%s:%d: %s", self.source, lineno, message)

    def parse(self, text: str) -> Catalog:
        lines = [(n, raw.strip()) for n, raw in enumerate(text.splitlines(), start=1)]
        i = 0
        while i < len(lines):
            lineno, line = lines[i]
            i += 1
            if not line or line.startswith("#"):
                continue
            keyword = line.split()[0]
            if keyword == "action":
                i = self._parse_action(lines, i - 1)
            elif keyword == "monster":
                self._parse_monster(lineno, line)
            else:
                self._warn(lineno, f"unexpected line: {line}")

        if not self.actions and not self.monsters:
            raise ConfigError("no actions or monsters found", source=self.source)
        return Catalog(actions=self.actions, monsters=self.monsters)

    def _parse_action(self, lines: list[tuple[int, str]], start: int) -> int:
        """Parse an action block starting at lines[start]. Returns the index after 'end action'."""
        lineno, header = lines[start]
        parts = header.split()
        i = start + 1

        effects = []
        repeat: dict | None = None
        repeat_effects: list = []
        depth = 0
        while i < len(lines):
            n, line = lines[i]
            i += 1
            if not line:
                continue
            if line == "end action":
                break
            if line.startswith("repeat "):
                depth += 1
                if depth > 1:
                    self._warn(n, "Nested repeats are not supported and will be ignored")
                    continue
                try:
                    repeat = _repeat_header(line)
                except _LineError as e:
                    self._warn(n, str(e))
                    repeat = None
                repeat_effects = []
                continue
            if line == "end repeat":
                if depth == 0:
                    self._warn(n, "'end repeat' without matching 'repeat'")
                    continue
                depth -= 1
                if depth > 0:
                    continue
                if repeat is None:
                    continue
                if not repeat_effects:
                    self._warn(n, "Repeat block contains no valid effects")
                    continue
                try:
                    effects.append(RepeatEffect(effects=tuple(repeat_effects), **repeat))
                except ValidationError as e:
                    self._warn(n, f"invalid repeat: {e.errors()[0]['msg']}")
                continue

            try:
                effect = parse_effect(line)
            except _LineError as e:
                self._warn(n, str(e))
                continue
            if depth > 0:
                repeat_effects.append(effect)
            else:
                effects.append(effect)

        if len(parts) < 3:
            self._warn(lineno, f"Invalid action format: {header}")
            return i
        name = parts[1]
        try:
            element = parse_element(parts[2])
        except ValueError as e:
            self._warn(lineno, str(e))
            return i
        if not effects:
            self._warn(lineno, f"No valid effects found for action: {name}")
            return i
        self.actions[name] = Action(name=name, element=element, effects=tuple(effects))
        return i

    def _parse_monster(self, lineno: int, line: str) -> None:
        parts = line.split()
        if len(parts) < 7:
            self._warn(lineno, f"Invalid monster format: {line}")
            return
        name = parts[1]
        try:
            element = parse_element(parts[2])
            stats = BaseStats(hp=int(parts[3]), atk=int(parts[4]), def_=int(parts[5]), spd=int(parts[6]))
        except (ValueError, ValidationError) as e:
            self._warn(lineno, f"Invalid monster {name}: {str(e).splitlines()[0]}")
            return

        actions = []
        for action_name in parts[7:]:
            action = self.actions.get(action_name)
            if action is None:
                self._warn(lineno, f"Unknown action {action_name} for monster {name}")
                continue
            actions.append(action)
        self.monsters.append(MonsterTemplate(name=name, element=element, base_stats=stats,
                                             actions=tuple(actions)))


def parse_config(text: str, source: str = "<config>") -> Catalog:
    return ConfigParser(source).parse(text)


def parse_file(path: str | Path) -> Catalog:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read file: {e.strerror}", source=str(path)) from e
    return parse_config(text, source=str(path))
