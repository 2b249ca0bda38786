"""
Objective respawn timers.

Timers are derived by replaying the whole event log on every call rather than
tracking kills incrementally: the client's log is authoritative, so a replay
corrects itself if the client ever resends or trims events.
"""

from typing import Any, Iterable, Optional

from .models import ObjectiveTimer

BARON = "baron"
DRAGON = "dragon"
HERALD = "herald"
ELDER_DRAGON = "elderDragon"

OBJECTIVE_KEYS = (BARON, DRAGON, HERALD, ELDER_DRAGON)

# Respawn durations in seconds after the kill
RESPAWN_SECONDS = {
    BARON: 360.0,
    DRAGON: 300.0,
    HERALD: 360.0,
    ELDER_DRAGON: 360.0,
}

ELDER_DRAGON_TYPE = "Elder"


def _objective_for_event(event: dict[str, Any]) -> Optional[str]:
    """Map a raw event to the objective it kills, or None."""
    name = event.get("EventName")
    if name == "BaronKill":
        return BARON
    if name == "HeraldKill":
        return HERALD
    if name == "DragonKill":
        if event.get("DragonType") == ELDER_DRAGON_TYPE:
            return ELDER_DRAGON
        return DRAGON
    return None


def _event_time(event: dict[str, Any]) -> float:
    try:
        return float(event.get("EventTime") or 0.0)
    except (TypeError, ValueError):
        return 0.0


def compute_objective_timers(
    events: Optional[Iterable[Any]],
    game_time: float,
) -> dict[str, ObjectiveTimer]:
    """
    Compute the respawn state of baron, dragon, herald and elder dragon.

    Args:
        events: Full event log of the current game (raw Live Client events)
        game_time: Current game clock in seconds

    Returns:
        Mapping of objective key to ObjectiveTimer. With no kill events every
        objective is alive with zero time remaining.
    """
    timers = {key: ObjectiveTimer() for key in OBJECTIVE_KEYS}
    timers[DRAGON].dragon_type = ""

    for event in events or ():
        if not isinstance(event, dict):
            continue
        key = _objective_for_event(event)
        if key is None:
            continue

        # Last kill wins: only the next respawn matters
        timer = timers[key]
        timer.alive = False
        timer.respawn_at = _event_time(event) + RESPAWN_SECONDS[key]
        timer.last_killed_by = event.get("KillerName") or ""
        if key == DRAGON:
            timer.dragon_type = event.get("DragonType") or ""

    for timer in timers.values():
        if not timer.alive and game_time >= timer.respawn_at:
            timer.alive = True
        timer.time_remaining = 0.0 if timer.alive else max(0.0, timer.respawn_at - game_time)

    return timers
