from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from monster_arena.mechanics.conditions import StatusCondition, status_factor
from monster_arena.mechanics.elements import Element
from monster_arena.mechanics.stats import MAX_STAGE, MIN_STAGE, STAGED_STATS, StatType, clamp_stage, stage_factor
from monster_arena.models.action import Action
from monster_arena.models.effect import ProtectionTarget

# "def" is a keyword, so the DEF field is stored as def_ and aliased.
_STAT_FIELDS: dict[StatType, str] = {
    StatType.HP: "hp",
    StatType.ATK: "atk",
    StatType.DEF: "def_",
    StatType.SPD: "spd",
    StatType.PRC: "prc",
    StatType.AGL: "agl",
}


class BaseStats(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    hp: int = Field(gt=0)
    atk: int = Field(gt=0)
    def_: int = Field(gt=0, alias="def")
    spd: int = Field(gt=0)
    prc: int = Field(default=1, gt=0)
    agl: int = Field(default=1, gt=0)

    def get(self, stat: StatType) -> int:
        return getattr(self, _STAT_FIELDS[stat])


class StatStages(BaseModel):
    """Current stage of each staged stat, always within [MIN_STAGE, MAX_STAGE]."""

    atk: int = Field(default=0, ge=MIN_STAGE, le=MAX_STAGE)
    def_: int = Field(default=0, ge=MIN_STAGE, le=MAX_STAGE)
    spd: int = Field(default=0, ge=MIN_STAGE, le=MAX_STAGE)
    prc: int = Field(default=0, ge=MIN_STAGE, le=MAX_STAGE)
    agl: int = Field(default=0, ge=MIN_STAGE, le=MAX_STAGE)

    def get(self, stat: StatType) -> int:
        if stat not in STAGED_STATS:
            return 0
        return getattr(self, _STAT_FIELDS[stat])

    def shift(self, stat: StatType, delta: int) -> tuple[int, int]:
        """Move a stat by delta stages, clamped. Returns (old, new)."""
        if stat not in STAGED_STATS:
            raise ValueError(f"{stat.value} has no stages")
        old = self.get(stat)
        new = clamp_stage(old + delta)
        setattr(self, _STAT_FIELDS[stat], new)
        return old, new


class MonsterTemplate(BaseModel):
    """Immutable definition of a monster as loaded from content."""

    model_config = ConfigDict(frozen=True)

    name: str
    element: Element
    base_stats: BaseStats
    actions: tuple[Action, ...] = ()

    def spawn(self, name: str | None = None, seat: int = 0) -> Monster:
        """Create a fresh battle instance at full health."""
        return Monster(
            name=name or self.name,
            element=self.element,
            seat=seat,
            base_stats=self.base_stats,
            actions=self.actions,
        )


class Monster(BaseModel):
    """A monster taking part in one battle. Mutated by the engine, discarded afterwards."""

    name: str
    element: Element
    seat: int = 0
    base_stats: BaseStats
    actions: tuple[Action, ...] = ()
    current_hp: Optional[int] = None
    condition: Optional[StatusCondition] = None
    stages: StatStages = Field(default_factory=StatStages)
    protection: dict[ProtectionTarget, int] = Field(
        default_factory=lambda: {ProtectionTarget.HEALTH: 0, ProtectionTarget.STATS: 0}
    )
    selected_action: Optional[Action] = None
    has_passed: bool = False

    @model_validator(mode="after")
    def _start_at_full_health(self) -> Monster:
        if self.current_hp is None:
            self.current_hp = self.base_stats.hp
        return self

    # -- Stats --

    @property
    def max_hp(self) -> int:
        return self.base_stats.hp

    def effective_stat(self, stat: StatType) -> float:
        """Base value scaled by stage and condition, never below 1.0."""
        value = float(self.base_stats.get(stat))
        value *= stage_factor(stat, self.stages.get(stat))
        value *= status_factor(self.condition, stat)
        return max(1.0, value)

    @property
    def effective_speed(self) -> int:
        return int(self.effective_stat(StatType.SPD))

    def modify_stat(self, stat: StatType, stages: int) -> tuple[int, int]:
        return self.stages.shift(stat, stages)

    # -- Health --

    @property
    def is_defeated(self) -> bool:
        return self.current_hp <= 0

    def set_hp(self, value: int) -> int:
        """Set HP clamped to [0, max_hp]. Returns the new value."""
        self.current_hp = max(0, min(value, self.max_hp))
        return self.current_hp

    def take_damage(self, amount: int) -> int:
        """Lose HP; returns how much was actually lost."""
        before = self.current_hp
        return before - self.set_hp(before - amount)

    def heal(self, amount: int) -> int:
        """Regain HP; returns how much was actually restored."""
        before = self.current_hp
        return self.set_hp(before + amount) - before

    # -- Protection --

    def is_protected(self, target: ProtectionTarget) -> bool:
        return self.protection.get(target, 0) > 0

    # -- Status --

    @property
    def status_display(self) -> str:
        if self.is_defeated:
            return "FAINTED"
        if self.condition is None:
            return "OK"
        return self.condition.value

    # -- Actions --

    def find_action(self, name: str) -> Action | None:
        """Case-insensitive lookup among the actions this monster knows."""
        wanted = name.lower()
        for action in self.actions:
            if action.name.lower() == wanted:
                return action
        return None

    def clear_selection(self) -> None:
        self.selected_action = None
        self.has_passed = False
