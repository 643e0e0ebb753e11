from __future__ import annotations

from pydantic import BaseModel, Field

from monster_arena.errors import UnknownActionError, UnknownMonsterError
from monster_arena.models.action import Action
from monster_arena.models.monster import Monster, MonsterTemplate


class Catalog(BaseModel):
    """Every action and monster loaded from one content file."""

    actions: dict[str, Action] = Field(default_factory=dict)
    monsters: list[MonsterTemplate] = Field(default_factory=list)

    def get_action(self, name: str) -> Action:
        try:
            return self.actions[name]
        except KeyError:
            raise UnknownActionError(name) from None

    def get_monster(self, name: str) -> MonsterTemplate:
        wanted = name.lower()
        for template in self.monsters:
            if template.name.lower() == wanted:
                return template
        raise UnknownMonsterError(name)

    def summary(self) -> str:
        return f"Loaded {len(self.actions)} actions, {len(self.monsters)} monsters."


def build_competitors(catalog: Catalog, names: list[str]) -> list[Monster]:
    """Spawn fresh monsters for a competition, seated in the given order.

    Names that occur more than once get '#1', '#2', ... suffixes so every
    combatant in the battle is uniquely addressable.
    """
    if len(names) < 2:
        raise ValueError("a competition needs at least two monsters")

    templates = [catalog.get_monster(n) for n in names]
    totals: dict[str, int] = {}
    for t in templates:
        totals[t.name] = totals.get(t.name, 0) + 1

    seen: dict[str, int] = {}
    monsters = []
    for seat, template in enumerate(templates, start=1):
        name = template.name
        if totals[name] > 1:
            seen[name] = seen.get(name, 0) + 1
            name = f"{name}#{seen[name]}"
        monsters.append(template.spawn(name=name, seat=seat))
    return monsters
