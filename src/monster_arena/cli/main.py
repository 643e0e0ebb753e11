"""Typer CLI application."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="monster-arena",
    help="Turn-based monster competitions driven by scripted actions",
    no_args_is_help=False,
)

DEFAULT_SIMULATION_ROUNDS = 100


def _setup_logging(config: dict) -> None:
    level = config.get("logging", {}).get("level", "WARNING")
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.WARNING),
                        format="%(levelname)s %(name)s: %(message)s")


@app.command()
def play(
    content: Optional[Path] = typer.Argument(None, help="Content file (.toml or text format)"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Seed for reproducible battles"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Decide every random outcome by hand"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.toml"),
) -> None:
    """Start the interactive arena."""
    from monster_arena.app import GameApp, load_config
    from monster_arena.content.loader import DEFAULT_CATALOG

    _setup_logging(load_config(config))
    game_app = GameApp(seed=seed, debug=debug or None, config_path=config)
    game_app.display.show_title()
    game_app.run(content or DEFAULT_CATALOG)


@app.command()
def check(
    content: Path = typer.Argument(..., help="Content file to validate"),
) -> None:
    """Parse a content file and list what it defines."""
    from monster_arena.cli.display import ArenaDisplay, action_line, monster_line
    from monster_arena.content.loader import load_catalog_file
    from monster_arena.errors import ConfigError

    display = ArenaDisplay()
    try:
        catalog = load_catalog_file(content)
    except ConfigError as e:
        display.show_error(str(e))
        raise typer.Exit(code=1)

    display.show_message(catalog.summary(), style="bold")
    for action in catalog.actions.values():
        display.show_message(action_line(action))
    for template in catalog.monsters:
        display.show_message(monster_line(template))


@app.command()
def simulate(
    content: Path = typer.Argument(..., help="Content file"),
    monsters: list[str] = typer.Argument(..., help="Names of the competing monsters"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Seed for reproducible battles"),
    rounds: int = typer.Option(DEFAULT_SIMULATION_ROUNDS, "--rounds", "-r", help="Stop after this many rounds"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Show hit and damage calculations"),
) -> None:
    """Run a competition where every monster uses its first action."""
    from monster_arena.cli.display import ArenaDisplay
    from monster_arena.content.loader import load_catalog_file
    from monster_arena.engine.battle import Battle, FirstActionProvider
    from monster_arena.engine.events import CallbackSink
    from monster_arena.errors import ConfigError, UnknownMonsterError
    from monster_arena.mechanics.random_source import RandomSource
    from monster_arena.models.catalog import build_competitors

    display = ArenaDisplay(show_debug=debug)
    try:
        catalog = load_catalog_file(content)
        competitors = build_competitors(catalog, monsters)
    except (ConfigError, UnknownMonsterError, ValueError) as e:
        display.show_error(str(e))
        raise typer.Exit(code=1)

    battle = Battle(competitors, rng=RandomSource(seed), sink=CallbackSink(display.show_event), debug=debug)
    result = battle.run(FirstActionProvider(), max_rounds=rounds)
    if not result.is_over:
        display.show_message(f"Stopped after {battle.round_number - 1} rounds without a winner.", style="dim")


if __name__ == "__main__":
    app()
