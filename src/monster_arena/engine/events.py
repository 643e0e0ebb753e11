"""Event sinks — where battle narration goes.

The engine never prints. It builds BattleEvents and hands them to a sink;
the CLI renders them, tests inspect them.
"""
from __future__ import annotations

import logging
from typing import Any, Callable

from monster_arena.models.event import SILENT_EVENTS, BattleEvent, BattleEventType

logger = logging.getLogger(__name__)


class EventSink:
    def emit(self, event: BattleEvent) -> None:
        raise NotImplementedError


class EventLog(EventSink):
    """Keeps every event in order."""

    def __init__(self) -> None:
        self.events: list[BattleEvent] = []

    def emit(self, event: BattleEvent) -> None:
        self.events.append(event)

    def descriptions(self, include_debug: bool = False) -> list[str]:
        """Narration text in order, leaving out silent events (and DEBUG unless asked)."""
        return [
            e.description for e in self.events
            if e.event_type not in SILENT_EVENTS
            and (include_debug or e.event_type != BattleEventType.DEBUG)
        ]

    def of_type(self, event_type: BattleEventType) -> list[BattleEvent]:
        return [e for e in self.events if e.event_type == event_type]

    def clear(self) -> None:
        self.events.clear()


class CallbackSink(EventSink):
    def __init__(self, callback: Callable[[BattleEvent], Any]):
        self.callback = callback

    def emit(self, event: BattleEvent) -> None:
        self.callback(event)


class Narrator:
    """Stamps events with the current round and forwards them to a sink."""

    def __init__(self, sink: EventSink | None = None, debug: bool = False):
        self.sink = sink or EventLog()
        self.debug = debug
        self.round_number = 0

    def emit(
        self,
        event_type: BattleEventType,
        description: str,
        actor: str | None = None,
        target: str | None = None,
        value: int | None = None,
        **details: Any,
    ) -> BattleEvent:
        event = BattleEvent(
            event_type=event_type,
            round_number=self.round_number,
            actor=actor,
            target=target,
            value=value,
            description=description,
            details=details,
        )
        logger.debug("[%s] %s", event_type.value, description)
        self.sink.emit(event)
        return event

    def trace(self, description: str, **details: Any) -> None:
        """Emit a DEBUG event, only when debug mode is on."""
        if self.debug:
            self.emit(BattleEventType.DEBUG, description, **details)
