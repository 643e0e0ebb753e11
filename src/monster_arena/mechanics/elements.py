"""Elements and the effectiveness cycle.

Pure mechanics — no I/O. Water beats Fire, Fire beats Earth, Earth beats
Water. Normal is neutral against everything.
"""
from __future__ import annotations

from enum import Enum


class Element(str, Enum):
    NORMAL = "NORMAL"
    FIRE = "FIRE"
    WATER = "WATER"
    EARTH = "EARTH"


VERY_EFFECTIVE = 2.0
NOT_VERY_EFFECTIVE = 0.5
NEUTRAL = 1.0

# attacker element -> element it is strong against
ELEMENT_ADVANTAGES: dict[Element, Element] = {
    Element.WATER: Element.FIRE,
    Element.FIRE: Element.EARTH,
    Element.EARTH: Element.WATER,
}


def element_factor(attack: Element, defender: Element) -> float:
    """Damage multiplier for an attack of one element against a defender of another."""
    if ELEMENT_ADVANTAGES.get(attack) == defender:
        return VERY_EFFECTIVE
    if ELEMENT_ADVANTAGES.get(defender) == attack:
        return NOT_VERY_EFFECTIVE
    return NEUTRAL


def parse_element(token: str) -> Element:
    try:
        return Element(token.upper())
    except ValueError:
        raise ValueError(f"Unknown element: {token}") from None
