"""Exceptions raised at the edges of the arena (content loading, setup)."""
from __future__ import annotations


class MonsterArenaError(Exception):
    pass


class ConfigError(MonsterArenaError):
    """Content could not be read or validated."""

    def __init__(self, message: str, source: str | None = None, line: int | None = None):
        self.source = source
        self.line = line
        where = ""
        if source is not None:
            where = f"{source}:{line}: " if line is not None else f"{source}: "
        super().__init__(f"{where}{message}")


class UnknownMonsterError(MonsterArenaError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown monster: {name}")


class UnknownActionError(MonsterArenaError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown action: {name}")
