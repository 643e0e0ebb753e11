from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from monster_arena.content.config_parser import parse_file
from monster_arena.errors import ConfigError
from monster_arena.models.action import Action
from monster_arena.models.catalog import Catalog
from monster_arena.models.monster import BaseStats, MonsterTemplate

logger = logging.getLogger(__name__)

CONTENT_DIR = Path(__file__).parent
DEFAULT_CATALOG = CONTENT_DIR / "default_arena.toml"


def load_toml(filepath: Path) -> dict[str, Any]:
    with open(filepath, "rb") as f:
        return tomllib.load(f)


def _percent_to_rate(effect: dict[str, Any]) -> dict[str, Any]:
    """TOML content gives hit rates as whole percentages, like the text format."""
    effect = dict(effect)
    if "hit_rate" in effect:
        effect["hit_rate"] = effect["hit_rate"] / 100.0
    if "effects" in effect:
        effect["effects"] = [_percent_to_rate(e) for e in effect["effects"]]
    return effect


def _first_error(e: ValidationError) -> str:
    err = e.errors()[0]
    where = ".".join(str(p) for p in err["loc"])
    return f"{where}: {err['msg']}" if where else err["msg"]


def catalog_from_dict(data: dict[str, Any], source: str = "<toml>") -> Catalog:
    actions: dict[str, Action] = {}
    for raw in data.get("actions", []):
        raw = dict(raw)
        raw["effects"] = [_percent_to_rate(e) for e in raw.get("effects", [])]
        try:
            action = Action.model_validate(raw)
        except ValidationError as e:
            raise ConfigError(f"action {raw.get('name', '?')}: {_first_error(e)}", source=source) from e
        actions[action.name] = action

    monsters: list[MonsterTemplate] = []
    for raw in data.get("monsters", []):
        name = raw.get("name", "?")
        known = []
        for action_name in raw.get("actions", []):
            if action_name not in actions:
                raise ConfigError(f"monster {name}: unknown action {action_name}", source=source)
            known.append(actions[action_name])
        try:
            stats = BaseStats.model_validate({k: raw[k] for k in ("hp", "atk", "def", "spd", "prc", "agl") if k in raw})
            monsters.append(MonsterTemplate(name=name, element=raw.get("element", "NORMAL"),
                                            base_stats=stats, actions=tuple(known)))
        except ValidationError as e:
            raise ConfigError(f"monster {name}: {_first_error(e)}", source=source) from e

    logger.info("Loaded %d actions and %d monsters from %s", len(actions), len(monsters), source)
    return Catalog(actions=actions, monsters=monsters)


def load_catalog(path: str | Path) -> Catalog:
    """Load a TOML catalog file."""
    path = Path(path)
    try:
        data = load_toml(path)
    except OSError as e:
        raise ConfigError(f"cannot read file: {e.strerror}", source=str(path)) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"invalid TOML: {e}", source=str(path)) from e
    return catalog_from_dict(data, source=str(path))


def load_catalog_file(path: str | Path) -> Catalog:
    """Load any supported content file, picking the parser by suffix."""
    path = Path(path)
    if path.suffix.lower() == ".toml":
        return load_catalog(path)
    return parse_file(path)


def load_default_catalog() -> Catalog:
    return load_catalog(DEFAULT_CATALOG)
