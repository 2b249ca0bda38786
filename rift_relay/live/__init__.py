"""
Live game module

Provides:
- Live Client Data API client
- Snapshot normalization (teams, players, approximated gold)
- Objective respawn timers
- Gold-difference sampling
- Event feed deduplication
- The in-game poller state machine
"""

from .client import LiveClientAPI
from .events import EventCursor, format_event
from .gold import GoldHistory, SAMPLE_PERIOD_SECONDS
from .models import (
    GameEvent,
    GoldSample,
    ItemSlot,
    LiveGameState,
    ObjectiveTimer,
    PlayerStat,
    TeamAggregate,
)
from .normalizer import normalize_game_data, normalize_player, aggregate_team
from .objectives import compute_objective_timers, RESPAWN_SECONDS, OBJECTIVE_KEYS
from .poller import LiveGamePoller

__all__ = [
    "LiveClientAPI",
    "EventCursor",
    "format_event",
    "GoldHistory",
    "SAMPLE_PERIOD_SECONDS",
    "GameEvent",
    "GoldSample",
    "ItemSlot",
    "LiveGameState",
    "ObjectiveTimer",
    "PlayerStat",
    "TeamAggregate",
    "normalize_game_data",
    "normalize_player",
    "aggregate_team",
    "compute_objective_timers",
    "RESPAWN_SECONDS",
    "OBJECTIVE_KEYS",
    "LiveGamePoller",
]
