"""
Live Client Data Normalizer

Turns one raw /allgamedata snapshot into a LiveGameState:
- Splits players into blue (ORDER) and red (CHAOS)
- Resolves display names (Riot ID name, then summoner name, then "Unknown")
- Approximates per-player gold from item prices
- Folds team totals
- Derives objective timers from the snapshot's event log

Every upstream field is treated as optional. Missing or mistyped values fall
back to zero / empty defaults; nothing here raises on partial data.
"""

from typing import Any, Optional

from .models import ItemSlot, LiveGameState, PlayerStat, TeamAggregate
from .objectives import compute_objective_timers

BLUE_TEAM_TAG = "ORDER"
RED_TEAM_TAG = "CHAOS"

UNKNOWN_PLAYER_NAME = "Unknown"


# ============================================================
# Tolerant accessors
# ============================================================

def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _as_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _as_str(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def extract_events(data: Any) -> list[dict[str, Any]]:
    """Return the raw event log (events.Events) of a snapshot, or []."""
    events = _as_list(_as_dict(_as_dict(data).get("events")).get("Events"))
    return [e for e in events if isinstance(e, dict)]


# ============================================================
# Players
# ============================================================

def resolve_display_name(player: dict[str, Any]) -> str:
    """Riot ID game name, then legacy summoner name, then 'Unknown'."""
    return (
        _as_str(player.get("riotIdGameName"))
        or _as_str(player.get("summonerName"))
        or UNKNOWN_PLAYER_NAME
    )


def normalize_item(item: dict[str, Any]) -> ItemSlot:
    # A missing (or zero) count is treated as a single item
    return ItemSlot(
        item_id=_as_int(item.get("itemID")),
        display_name=_as_str(item.get("displayName")),
        count=_as_int(item.get("count"), 1) or 1,
        price=_as_int(item.get("price")),
    )


def approximate_gold(items: list[ItemSlot]) -> int:
    """Sum of unit price x count over a player's items."""
    return sum(item.total_price for item in items)


def normalize_player(player: Any) -> PlayerStat:
    """Normalize one entry of allPlayers."""
    player = _as_dict(player)
    scores = _as_dict(player.get("scores"))
    items = [normalize_item(i) for i in _as_list(player.get("items")) if isinstance(i, dict)]

    return PlayerStat(
        summoner_name=resolve_display_name(player),
        tag_line=_as_str(player.get("riotIdTagLine")),
        champion_name=_as_str(player.get("championName")),
        raw_champion_name=_as_str(player.get("rawChampionName")),
        team=_as_str(player.get("team")),
        position=_as_str(player.get("position")),
        level=_as_int(player.get("level")),
        kills=_as_int(scores.get("kills")),
        deaths=_as_int(scores.get("deaths")),
        assists=_as_int(scores.get("assists")),
        creep_score=_as_int(scores.get("creepScore")),
        items=items,
        summoner_spells=_as_dict(player.get("summonerSpells")),
        runes=_as_dict(player.get("runes")),
        is_dead=bool(player.get("isDead", False)),
        respawn_timer=_as_float(player.get("respawnTimer")),
        skin_id=_as_int(player.get("skinID")),
        approximate_gold=approximate_gold(items),
    )


def aggregate_team(players: list[PlayerStat]) -> TeamAggregate:
    """Fold per-player stats into team totals."""
    return TeamAggregate(
        total_kills=sum(p.kills for p in players),
        total_deaths=sum(p.deaths for p in players),
        total_assists=sum(p.assists for p in players),
        total_cs=sum(p.creep_score for p in players),
        total_gold=sum(p.approximate_gold for p in players),
        players=list(players),
    )


# ============================================================
# Snapshot
# ============================================================

def normalize_game_data(data: Optional[dict[str, Any]]) -> LiveGameState:
    """
    Normalize a raw /allgamedata snapshot.

    The returned state has an empty gold_history; the poller attaches the
    session's buffer after sampling.
    """
    data = _as_dict(data)
    game_data = _as_dict(data.get("gameData"))
    active_player = _as_dict(data.get("activePlayer"))

    players = [normalize_player(p) for p in _as_list(data.get("allPlayers"))]
    blue = [p for p in players if p.team == BLUE_TEAM_TAG]
    red = [p for p in players if p.team == RED_TEAM_TAG]

    game_time = max(0.0, _as_float(game_data.get("gameTime")))

    return LiveGameState(
        game_time=game_time,
        game_mode=_as_str(game_data.get("gameMode")) or "CLASSIC",
        map_name=_as_str(game_data.get("mapName")) or "Map11",
        map_number=_as_int(game_data.get("mapNumber"), 11) or 11,
        blue_team=aggregate_team(blue),
        red_team=aggregate_team(red),
        active_player_name=(
            _as_str(active_player.get("riotIdGameName"))
            or _as_str(active_player.get("summonerName"))
        ),
        objective_timers=compute_objective_timers(extract_events(data), game_time),
    )
