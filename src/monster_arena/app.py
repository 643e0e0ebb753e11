"""Main application bootstrap — wires content, engine and console together."""
from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any, Callable

from monster_arena.cli.console_decider import ConsoleDecider
from monster_arena.cli.display import ArenaDisplay
from monster_arena.cli.input_handler import InputHandler
from monster_arena.content.loader import load_catalog_file
from monster_arena.engine.battle import Battle
from monster_arena.engine.events import CallbackSink
from monster_arena.errors import ConfigError, UnknownMonsterError
from monster_arena.mechanics.random_source import RandomSource
from monster_arena.models.catalog import Catalog, build_competitors

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config.toml"


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load config.toml (project root by default). Missing file means defaults."""
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if config_path.exists():
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    return {}


class GameApp:
    """Console command loop: load content, run competitions turn by turn."""

    def __init__(
        self,
        seed: int | None = None,
        debug: bool | None = None,
        config_path: str | Path | None = None,
        display: ArenaDisplay | None = None,
        ask: Callable[[str], str] | None = None,
    ):
        self.config = load_config(config_path)
        battle_cfg = self.config.get("battle", {})
        display_cfg = self.config.get("display", {})

        self.seed = seed if seed is not None else battle_cfg.get("seed")
        self.debug = debug if debug is not None else battle_cfg.get("debug", False)
        self.display = display or ArenaDisplay(
            bar_width=display_cfg.get("health_bar_width", 20),
            show_debug=display_cfg.get("show_debug", True),
        )
        self.ask = ask or self.display.prompt
        self.input_handler = InputHandler()

        decider = ConsoleDecider(ask=self.ask, say=self.display.show_message) if self.debug else None
        self.rng = RandomSource(self.seed, decider)

        self.catalog: Catalog | None = None
        self.battle: Battle | None = None
        self.running = True

        self._handlers: dict[str, Callable[[list[str]], None]] = {
            "quit": self._quit,
            "help": lambda args: self.display.show_help(),
            "load": self._load,
            "competition": self._competition,
            "show": self._show,
            "show_monsters": self._show_monsters,
            "show_actions": self._show_actions,
            "show_stats": self._show_stats,
            "action": self._action,
            "pass": self._pass,
        }

    # -- Loop --

    @property
    def current_monster(self):
        if self.battle is None or self.battle.is_over:
            return None
        return self.battle.next_to_select()

    def prompt_text(self) -> str:
        monster = self.current_monster
        if monster is not None:
            return f"What should {monster.name} do?"
        return ""

    def run(self, content_path: str | Path | None = None) -> None:
        if content_path is not None:
            self.load(content_path)
        while self.running:
            try:
                raw = self.ask(self.prompt_text())
            except (EOFError, KeyboardInterrupt):
                break
            self.handle(raw)

    def handle(self, raw: str) -> None:
        parsed = self.input_handler.classify(raw)
        command = parsed["command"]
        if command is None:
            if raw.strip():
                self.display.show_error(f"unknown command: {raw.strip()}")
            return
        self._handlers[command](parsed["args"])

    # -- Content --

    def load(self, path: str | Path) -> bool:
        try:
            catalog = load_catalog_file(path)
        except ConfigError as e:
            self.display.show_error(str(e))
            return False
        self.catalog = catalog
        self.battle = None
        self.display.show_message(catalog.summary())
        return True

    def _load(self, args: list[str]) -> None:
        self.load(args[0])

    def _quit(self, args: list[str]) -> None:
        self.running = False

    # -- Competition --

    def _competition(self, names: list[str]) -> None:
        if self.catalog is None:
            self.display.show_error("no monsters loaded.")
            return
        try:
            monsters = build_competitors(self.catalog, names)
        except (UnknownMonsterError, ValueError) as e:
            self.display.show_error(str(e))
            return
        self.battle = Battle(monsters, rng=self.rng, sink=CallbackSink(self.display.show_event),
                             debug=self.debug)
        self.battle.start()

    def _require_turn(self):
        monster = self.current_monster
        if monster is None:
            self.display.show_error("no competition in progress.")
        return monster

    def _action(self, args: list[str]) -> None:
        monster = self._require_turn()
        if monster is None:
            return
        if len(args) > 1:
            logger.debug("Ignoring explicit target %s; targets are resolved automatically", args[1])
        ok, _ = self.battle.select_action(monster, args[0])
        if ok:
            self._advance()

    def _pass(self, args: list[str]) -> None:
        monster = self._require_turn()
        if monster is None:
            return
        self.battle.pass_turn(monster)
        self._advance()

    def _advance(self) -> None:
        if not self.battle.selections_complete:
            return
        result = self.battle.resolve_round()
        if result.is_over:
            self.battle = None

    # -- Show --

    def _show(self, args: list[str]) -> None:
        if self.battle is None:
            self.display.show_error("show is only available during a competition.")
            return
        self.display.show_competition(self.battle.monsters, self.current_monster)

    def _show_monsters(self, args: list[str]) -> None:
        if self.catalog is None:
            self.display.show_error("no monsters loaded.")
            return
        self.display.show_monsters(self.catalog)

    def _show_actions(self, args: list[str]) -> None:
        monster = self._require_turn()
        if monster is not None:
            self.display.show_actions(monster)

    def _show_stats(self, args: list[str]) -> None:
        monster = self._require_turn()
        if monster is not None:
            self.display.show_stats(monster)
