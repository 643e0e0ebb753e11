"""Seedable randomness for battles.

Every random draw a battle makes goes through one RandomSource so that a
fixed seed and identical action choices replay the exact same battle. Two
independent streams are kept: the combat stream (hits, crits, damage
variance, repeat counts, protection durations) and the status stream
(condition fade checks). Both are seeded from the same seed.

In debug mode a Decider answers every draw instead of the streams; the
purpose label passed with each draw tells a human what is being decided.
"""
from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from enum import Enum

logger = logging.getLogger(__name__)


class Stream(str, Enum):
    COMBAT = "combat"
    STATUS = "status"


class Decider(ABC):
    """Supplies random outcomes by hand (debug mode)."""

    @abstractmethod
    def decide_chance(self, purpose: str) -> bool: ...

    @abstractmethod
    def decide_float(self, low: float, high: float, purpose: str) -> float: ...

    @abstractmethod
    def decide_int(self, low: int, high: int, purpose: str) -> int: ...


class RandomSource:
    def __init__(self, seed: int | None = None, decider: Decider | None = None):
        self.decider = decider
        self.seed = seed
        self._streams = self._make_streams(seed)

    @staticmethod
    def _make_streams(seed: int | None) -> dict[Stream, random.Random]:
        return {Stream.COMBAT: random.Random(seed), Stream.STATUS: random.Random(seed)}

    @property
    def is_manual(self) -> bool:
        return self.decider is not None

    def reseed(self, seed: int | None) -> None:
        """Replace both streams. Last write wins."""
        logger.warning("Random source is being reinitialized (seed=%s)", seed)
        self.seed = seed
        self._streams = self._make_streams(seed)

    def chance(self, percent: float, purpose: str, stream: Stream = Stream.COMBAT) -> bool:
        """True with probability percent/100. Values >= 100 always succeed."""
        if self.decider is not None:
            return self.decider.decide_chance(purpose)
        result = self._streams[stream].random() * 100 <= percent
        logger.debug("chance %s: %.2f%% -> %s", purpose, percent, result)
        return result

    def uniform_float(self, low: float, high: float, purpose: str, stream: Stream = Stream.COMBAT) -> float:
        if self.decider is not None:
            return self.decider.decide_float(low, high, purpose)
        value = low + self._streams[stream].random() * (high - low)
        logger.debug("float %s in [%.2f, %.2f] -> %.4f", purpose, low, high, value)
        return value

    def uniform_int(self, low: int, high: int, purpose: str, stream: Stream = Stream.COMBAT) -> int:
        """Inclusive on both ends."""
        if self.decider is not None:
            return self.decider.decide_int(low, high, purpose)
        if high <= low:
            return low
        value = self._streams[stream].randint(low, high)
        logger.debug("int %s in [%d, %d] -> %d", purpose, low, high, value)
        return value
