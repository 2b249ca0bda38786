"""
Data models for the in-game (Live Client Data) side.

Every model is rebuilt from scratch on each poll tick; only the gold history
buffer and the event cursor persist across ticks, and they live on the poller.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ItemSlot:
    """One inventory entry as reported by the Live Client Data API."""
    item_id: int = 0
    display_name: str = ""
    count: int = 1
    price: int = 0

    @property
    def total_price(self) -> int:
        return self.price * self.count

    def to_dict(self) -> dict[str, Any]:
        return {
            "item_id": self.item_id,
            "display_name": self.display_name,
            "count": self.count,
            "price": self.price,
        }


@dataclass
class PlayerStat:
    """Normalized per-player stats."""
    summoner_name: str
    champion_name: str = ""
    raw_champion_name: str = ""
    tag_line: str = ""
    team: str = ""
    position: str = ""
    level: int = 0

    kills: int = 0
    deaths: int = 0
    assists: int = 0
    creep_score: int = 0

    items: list[ItemSlot] = field(default_factory=list)
    summoner_spells: dict[str, Any] = field(default_factory=dict)
    runes: dict[str, Any] = field(default_factory=dict)

    is_dead: bool = False
    respawn_timer: float = 0.0
    skin_id: int = 0

    # Sum of item prices. The API does not expose real gold, so this ignores
    # unspent gold and anything sold.
    approximate_gold: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "summoner_name": self.summoner_name,
            "tag_line": self.tag_line,
            "champion_name": self.champion_name,
            "raw_champion_name": self.raw_champion_name,
            "team": self.team,
            "position": self.position,
            "level": self.level,
            "kills": self.kills,
            "deaths": self.deaths,
            "assists": self.assists,
            "creep_score": self.creep_score,
            "items": [item.to_dict() for item in self.items],
            "summoner_spells": self.summoner_spells,
            "runes": self.runes,
            "is_dead": self.is_dead,
            "respawn_timer": self.respawn_timer,
            "skin_id": self.skin_id,
            "approximate_gold": self.approximate_gold,
        }


@dataclass
class TeamAggregate:
    """Per-team totals plus the players they were folded from."""
    total_kills: int = 0
    total_deaths: int = 0
    total_assists: int = 0
    total_cs: int = 0
    total_gold: int = 0
    players: list[PlayerStat] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_kills": self.total_kills,
            "total_deaths": self.total_deaths,
            "total_assists": self.total_assists,
            "total_cs": self.total_cs,
            "total_gold": self.total_gold,
            "players": [p.to_dict() for p in self.players],
        }


@dataclass
class ObjectiveTimer:
    """Respawn state of one map objective."""
    alive: bool = True
    respawn_at: float = 0.0
    last_killed_by: str = ""
    time_remaining: float = 0.0
    dragon_type: Optional[str] = None  # Only tracked for the regular drake

    def to_dict(self) -> dict[str, Any]:
        data = {
            "alive": self.alive,
            "respawn_at": self.respawn_at,
            "last_killed_by": self.last_killed_by,
            "time_remaining": self.time_remaining,
        }
        if self.dragon_type is not None:
            data["dragon_type"] = self.dragon_type
        return data


@dataclass(frozen=True)
class GoldSample:
    """One point of the gold-difference graph."""
    time: int
    blue_gold: int
    red_gold: int
    diff: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "time": self.time,
            "blue_gold": self.blue_gold,
            "red_gold": self.red_gold,
            "diff": self.diff,
        }


@dataclass
class GameEvent:
    """A single formatted entry from the live event feed."""
    type: str
    time: float = 0.0
    killer: Optional[str] = None
    victim: Optional[str] = None
    assisters: list[str] = field(default_factory=list)
    dragon_type: Optional[str] = None
    turret_killed: Optional[str] = None
    inhib_killed: Optional[str] = None
    stolen: bool = False
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "time": self.time,
            "killer": self.killer,
            "victim": self.victim,
            "assisters": list(self.assisters),
            "dragon_type": self.dragon_type,
            "turret_killed": self.turret_killed,
            "inhib_killed": self.inhib_killed,
            "stolen": self.stolen,
            "data": self.data,
        }


@dataclass
class LiveGameState:
    """Canonical in-game state composed on every successful poll."""
    game_time: float = 0.0
    game_mode: str = "CLASSIC"
    map_name: str = "Map11"
    map_number: int = 11
    blue_team: TeamAggregate = field(default_factory=TeamAggregate)
    red_team: TeamAggregate = field(default_factory=TeamAggregate)
    active_player_name: str = ""
    objective_timers: dict[str, ObjectiveTimer] = field(default_factory=dict)
    gold_history: list[GoldSample] = field(default_factory=list)
    is_game_active: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "game_time": self.game_time,
            "game_mode": self.game_mode,
            "map_name": self.map_name,
            "map_number": self.map_number,
            "blue_team": self.blue_team.to_dict(),
            "red_team": self.red_team.to_dict(),
            "active_player_name": self.active_player_name,
            "objective_timers": {k: v.to_dict() for k, v in self.objective_timers.items()},
            "gold_history": [s.to_dict() for s in self.gold_history],
            "is_game_active": self.is_game_active,
        }
