"""Rich terminal display for competitions."""
from __future__ import annotations

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from monster_arena.mechanics.stats import STAGED_STATS
from monster_arena.models.action import Action
from monster_arena.models.catalog import Catalog
from monster_arena.models.event import SILENT_EVENTS, BattleEvent, BattleEventType
from monster_arena.models.monster import Monster, MonsterTemplate

console = Console()

_EVENT_STYLES: dict[BattleEventType, str] = {
    BattleEventType.ROUND_START: "bold yellow",
    BattleEventType.TURN_START: "bold",
    BattleEventType.ACTION_USED: "cyan",
    BattleEventType.ACTION_FAILED: "dim",
    BattleEventType.CRITICAL_HIT: "bold red",
    BattleEventType.EFFECTIVENESS: "magenta",
    BattleEventType.DAMAGE: "red",
    BattleEventType.BURN_DAMAGE: "red",
    BattleEventType.HEAL: "green",
    BattleEventType.FAINT: "bold red",
    BattleEventType.STATUS_APPLIED: "yellow",
    BattleEventType.STATUS_FADED: "green",
    BattleEventType.PROTECTION_START: "blue",
    BattleEventType.PROTECTION_END: "blue",
    BattleEventType.SELECTION_REJECTED: "red",
    BattleEventType.BATTLE_END: "bold green",
    BattleEventType.DEBUG: "dim",
}


def health_bar(monster: Monster, width: int = 20, current: Monster | None = None) -> str:
    """'[XXXX____] 1 *Name (OK)'. The filled share rounds to the nearest cell."""
    filled = round(width * monster.current_hp / monster.max_hp)
    bar = "[" + "X" * filled + "_" * (width - filled) + "]"
    marker = "*" if current is not None and monster is current else ""
    return f"{bar} {monster.seat} {marker}{monster.name} ({monster.status_display})"


def monster_line(template: MonsterTemplate) -> str:
    s = template.base_stats
    return (f"{template.name}: ELEMENT {template.element.value}, "
            f"HP {s.hp}, ATK {s.atk}, DEF {s.def_}, SPD {s.spd}")


def action_line(action: Action) -> str:
    return (f"{action.name}: ELEMENT {action.element.value}, "
            f"Damage {action.damage_display()}, HitRate {action.hit_rate_display()}")


def stats_line(monster: Monster) -> str:
    """'HP 80/100, ATK 40(+1), DEF 30, ...'. Stages are shown only when non-zero."""
    parts = [f"HP {monster.current_hp}/{monster.max_hp}"]
    for stat in STAGED_STATS:
        entry = f"{stat.value} {monster.base_stats.get(stat)}"
        stage = monster.stages.get(stat)
        if stage:
            entry += f"({stage:+d})"
        parts.append(entry)
    return ", ".join(parts)


class ArenaDisplay:
    def __init__(self, bar_width: int = 20, show_debug: bool = True):
        self.console = console
        self.bar_width = bar_width
        self.show_debug = show_debug

    def show_title(self) -> None:
        title = Text()
        title.append("MONSTER ARENA\n", style="bold cyan")
        title.append("Type 'help' for commands.", style="dim")
        self.console.print(Panel(title, border_style="cyan", box=box.DOUBLE))

    def show_message(self, text: str, style: str = "") -> None:
        self.console.print(Text(text, style=style))

    def show_error(self, text: str) -> None:
        self.console.print(Text(f"Error, {text}", style="red"))

    def show_event(self, event: BattleEvent) -> None:
        if event.event_type in SILENT_EVENTS:
            return
        if event.event_type == BattleEventType.DEBUG and not self.show_debug:
            return
        if event.event_type in (BattleEventType.ROUND_START, BattleEventType.TURN_START):
            self.console.print()
        self.console.print(Text(event.description, style=_EVENT_STYLES.get(event.event_type, "")))

    def show_competition(self, monsters: list[Monster], current: Monster | None = None) -> None:
        for monster in monsters:
            style = "dim" if monster.is_defeated else ""
            self.console.print(Text(health_bar(monster, self.bar_width, current), style=style))

    def show_monsters(self, catalog: Catalog) -> None:
        for template in catalog.monsters:
            self.console.print(Text(monster_line(template)))

    def show_actions(self, monster: Monster) -> None:
        self.console.print(Text(f"ACTIONS OF {monster.name}", style="bold"))
        for action in monster.actions:
            self.console.print(Text(action_line(action)))

    def show_stats(self, monster: Monster) -> None:
        self.console.print(Text(f"STATS OF {monster.name}", style="bold"))
        self.console.print(Text(stats_line(monster)))

    def show_help(self) -> None:
        table = Table(box=box.SIMPLE, show_header=False)
        table.add_column("Command", style="cyan")
        table.add_column("Description")
        table.add_row("load <path>", "Load actions and monsters from a file")
        table.add_row("competition <m1> <m2> ...", "Start a competition")
        table.add_row("action <name>", "Select an action for the current monster")
        table.add_row("pass", "Skip the current monster's turn")
        table.add_row("show", "Show the competitors")
        table.add_row("show monsters", "List loaded monsters")
        table.add_row("show actions", "List the current monster's actions")
        table.add_row("show stats", "Show the current monster's stats")
        table.add_row("quit", "Exit")
        self.console.print(table)

    def prompt(self, text: str) -> str:
        self.console.print(Text(text, style="bold cyan"))
        return self.console.input("> ")
