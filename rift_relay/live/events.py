"""
Live event feed: cursor-based deduplication and event formatting.
"""

from typing import Any, Sequence

from ..logging_config import get_logger
from .models import GameEvent

logger = get_logger(__name__)


class EventCursor:
    """
    Tracks how many upstream events have already been emitted this game.

    The Live Client event log is append-only with stable indices within one
    game, so emitting the suffix past the cursor surfaces every event exactly
    once regardless of poll cadence. A log that shrinks or reorders mid-game
    is not recovered from; the cursor just follows the new length.
    """

    def __init__(self) -> None:
        self.position = 0

    def advance(self, events: Sequence[Any]) -> list[Any]:
        """Return the events not yet emitted and move the cursor past them."""
        if len(events) < self.position:
            logger.debug(
                f"Event log shrank from {self.position} to {len(events)} entries; "
                "skipping to the new end"
            )
            self.position = len(events)
            return []

        new_events = list(events[self.position:])
        self.position = len(events)
        return new_events

    def reset(self) -> None:
        self.position = 0


def format_event(event: dict[str, Any]) -> GameEvent:
    """Convert a raw Live Client event into a GameEvent."""
    if not isinstance(event, dict):
        event = {}

    try:
        event_time = float(event.get("EventTime") or 0.0)
    except (TypeError, ValueError):
        event_time = 0.0

    assisters = event.get("Assisters")
    if not isinstance(assisters, list):
        assisters = []

    return GameEvent(
        type=event.get("EventName") or "Unknown",
        time=event_time,
        killer=event.get("KillerName") or None,
        victim=event.get("VictimName") or None,
        assisters=[str(a) for a in assisters],
        dragon_type=event.get("DragonType") or None,
        turret_killed=event.get("TurretKilled") or None,
        inhib_killed=event.get("InhibKilled") or None,
        stolen=_is_truthy(event.get("Stolen")),
        data=event,
    )


def _is_truthy(value: Any) -> bool:
    # The API reports Stolen as the string "True"/"False"
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)
