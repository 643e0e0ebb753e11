"""Effect definitions — the closed set of things an action can do.

Effects are immutable and shared between every monster that knows the
action. The ``kind`` field discriminates the union so content files can be
validated straight into the right model.
"""
from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from monster_arena.mechanics.conditions import StatusCondition
from monster_arena.mechanics.stats import STAGED_STATS, StatType


class EffectTarget(str, Enum):
    SELF = "SELF"
    TARGET = "TARGET"


class AmountKind(str, Enum):
    BASE = "BASE"
    RELATIVE = "RELATIVE"
    ABSOLUTE = "ABSOLUTE"


class ProtectionTarget(str, Enum):
    HEALTH = "HEALTH"
    STATS = "STATS"


_AMOUNT_PREFIX: dict[AmountKind, str] = {
    AmountKind.BASE: "b",
    AmountKind.RELATIVE: "r",
    AmountKind.ABSOLUTE: "a",
}


class _Effect(BaseModel):
    model_config = ConfigDict(frozen=True)

    hit_rate: float = Field(default=1.0, ge=0.0)


class DamageEffect(_Effect):
    kind: Literal["damage"] = "damage"
    target: EffectTarget = EffectTarget.TARGET
    amount_kind: AmountKind
    power: int = Field(ge=0)

    def describe(self) -> str:
        return f"{_AMOUNT_PREFIX[self.amount_kind]}{self.power}"


class HealingEffect(_Effect):
    kind: Literal["heal"] = "heal"
    target: EffectTarget = EffectTarget.SELF
    amount_kind: AmountKind
    power: int = Field(ge=0)

    def describe(self) -> str:
        return f"{_AMOUNT_PREFIX[self.amount_kind]}{self.power}"


class StatChangeEffect(_Effect):
    kind: Literal["stat_change"] = "stat_change"
    target: EffectTarget = EffectTarget.TARGET
    stat: StatType
    stages: int

    @model_validator(mode="after")
    def _staged_stat(self) -> StatChangeEffect:
        if self.stat not in STAGED_STATS:
            raise ValueError(f"{self.stat.value} cannot be changed in stages")
        return self


class StatusEffect(_Effect):
    kind: Literal["status"] = "status"
    target: EffectTarget = EffectTarget.TARGET
    condition: StatusCondition


class ProtectionEffect(_Effect):
    """Shields the user; a fixed duration or one drawn from [min_rounds, max_rounds]."""

    kind: Literal["protection"] = "protection"
    target: Literal[EffectTarget.SELF] = EffectTarget.SELF
    protects: ProtectionTarget
    rounds: int | None = Field(default=None, ge=1)
    min_rounds: int | None = Field(default=None, ge=1)
    max_rounds: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def _duration(self) -> ProtectionEffect:
        if self.rounds is None and (self.min_rounds is None or self.max_rounds is None):
            raise ValueError("protection needs 'rounds' or both 'min_rounds' and 'max_rounds'")
        if self.rounds is None and self.min_rounds > self.max_rounds:
            raise ValueError("min_rounds must not exceed max_rounds")
        return self

    @property
    def is_random(self) -> bool:
        return self.rounds is None


class ContinueEffect(_Effect):
    """Does nothing but still needs to hit; used to chain actions."""

    kind: Literal["continue"] = "continue"
    target: Literal[EffectTarget.SELF] = EffectTarget.SELF


LeafEffect = Annotated[
    Union[DamageEffect, HealingEffect, StatChangeEffect, StatusEffect, ProtectionEffect, ContinueEffect],
    Field(discriminator="kind"),
]


class RepeatEffect(BaseModel):
    """Runs its inner effects a fixed or random number of times.

    Repeats never nest: the inner list only admits leaf effects.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["repeat"] = "repeat"
    target: Literal[EffectTarget.SELF] = EffectTarget.SELF
    hit_rate: float = 1.0
    count: int | None = Field(default=None, ge=0)
    min_count: int | None = Field(default=None, ge=0)
    max_count: int | None = Field(default=None, ge=0)
    effects: tuple[LeafEffect, ...] = ()

    @model_validator(mode="after")
    def _count(self) -> RepeatEffect:
        if self.count is None and (self.min_count is None or self.max_count is None):
            raise ValueError("repeat needs 'count' or both 'min_count' and 'max_count'")
        if self.count is None and self.min_count > self.max_count:
            raise ValueError("min_count must not exceed max_count")
        return self

    @property
    def is_random(self) -> bool:
        return self.count is None


Effect = Annotated[
    Union[
        DamageEffect,
        HealingEffect,
        StatChangeEffect,
        StatusEffect,
        ProtectionEffect,
        ContinueEffect,
        RepeatEffect,
    ],
    Field(discriminator="kind"),
]
