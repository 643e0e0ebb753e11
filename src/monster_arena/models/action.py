from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from monster_arena.mechanics.elements import Element
from monster_arena.models.effect import DamageEffect, Effect, RepeatEffect


class Action(BaseModel):
    """A named, ordered list of effects. Immutable and shared by reference."""

    model_config = ConfigDict(frozen=True)

    name: str
    element: Element = Element.NORMAL
    effects: tuple[Effect, ...] = Field(min_length=1)

    @property
    def has_damage(self) -> bool:
        """True if any effect deals damage, including inside a repeat."""
        for effect in self.effects:
            if isinstance(effect, DamageEffect):
                return True
            if isinstance(effect, RepeatEffect) and any(isinstance(e, DamageEffect) for e in effect.effects):
                return True
        return False

    def damage_display(self) -> str:
        """Short damage label like 'b40', or '--' when the action deals none."""
        for effect in self.effects:
            if isinstance(effect, DamageEffect):
                return effect.describe()
            if isinstance(effect, RepeatEffect) and effect.effects:
                first = effect.effects[0]
                return first.describe() if isinstance(first, DamageEffect) else "--"
        return "--"

    def hit_rate_display(self) -> str:
        """Hit rate of the first rolled effect as a whole percentage."""
        for effect in self.effects:
            if isinstance(effect, RepeatEffect):
                if not effect.effects:
                    continue
                effect = effect.effects[0]
            return str(round(effect.hit_rate * 100))
        return "--"
