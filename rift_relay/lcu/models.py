"""
Data models for the League Client (LCU) side: champion select and gameflow.
"""

import base64
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class GamePhase(Enum):
    """Coarse match lifecycle phase shown by the overlays."""
    IDLE = "idle"
    CHAMP_SELECT = "champSelect"
    IN_GAME = "inGame"
    POST_GAME = "postGame"


class SelectPhase(Enum):
    """Champion select sub-phase reported in the session timer."""
    PLANNING = "PLANNING"
    BAN_PICK = "BAN_PICK"
    FINALIZATION = "FINALIZATION"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> "SelectPhase":
        return cls.UNKNOWN


class Side(Enum):
    BLUE = "blue"
    RED = "red"


class ActionKind(Enum):
    BAN = "ban"
    PICK = "pick"


class ConnectionState(Enum):
    """Client-session connection state."""
    DISCONNECTED = "disconnected"
    EVENT_DRIVEN = "connected_event_driven"
    POLLING = "connected_polling"


@dataclass(frozen=True)
class LCUCredentials:
    """Where and how to reach the running League Client."""
    port: int
    password: str
    protocol: str = "https"
    host: str = "127.0.0.1"
    pid: Optional[int] = None

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.host}:{self.port}"

    @property
    def websocket_url(self) -> str:
        scheme = "wss" if self.protocol == "https" else "ws"
        return f"{scheme}://{self.host}:{self.port}/"

    @property
    def basic_auth_header(self) -> str:
        token = base64.b64encode(f"riot:{self.password}".encode("utf-8")).decode("utf-8")
        return f"Basic {token}"

    def __repr__(self) -> str:
        # Keep the auth token out of logs
        return f"LCUCredentials(host={self.host!r}, port={self.port}, protocol={self.protocol!r}, pid={self.pid})"


@dataclass(frozen=True)
class SelectTimer:
    total_time_ms: int = 0
    adjusted_time_ms: int = 0
    reference_epoch_ms: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_time_ms": self.total_time_ms,
            "adjusted_time_ms": self.adjusted_time_ms,
            "reference_epoch_ms": self.reference_epoch_ms,
        }


@dataclass(frozen=True)
class BanPickAction:
    champion_id: int
    side: Side
    completed: bool
    actor_cell_id: int
    kind: ActionKind

    def to_dict(self) -> dict[str, Any]:
        return {
            "champion_id": self.champion_id,
            "side": self.side.value,
            "completed": self.completed,
            "actor_cell_id": self.actor_cell_id,
            "kind": self.kind.value,
        }


@dataclass(frozen=True)
class PlayerSlot:
    cell_id: int
    champion_id: int = 0
    summoner_id: int = 0
    spell1_id: int = 0
    spell2_id: int = 0
    assigned_position: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "cell_id": self.cell_id,
            "champion_id": self.champion_id,
            "summoner_id": self.summoner_id,
            "spell1_id": self.spell1_id,
            "spell2_id": self.spell2_id,
            "assigned_position": self.assigned_position,
        }


@dataclass
class ChampSelectSession:
    """Flattened champion select session, rebuilt on every update."""
    phase: SelectPhase = SelectPhase.UNKNOWN
    timer: Optional[SelectTimer] = None
    bans: list[BanPickAction] = field(default_factory=list)
    picks: list[BanPickAction] = field(default_factory=list)
    blue_team: list[PlayerSlot] = field(default_factory=list)
    red_team: list[PlayerSlot] = field(default_factory=list)
    local_player_cell_id: int = -1

    def to_dict(self) -> dict[str, Any]:
        return {
            "phase": self.phase.value,
            "timer": self.timer.to_dict() if self.timer else None,
            "bans": [a.to_dict() for a in self.bans],
            "picks": [a.to_dict() for a in self.picks],
            "blue_team": [p.to_dict() for p in self.blue_team],
            "red_team": [p.to_dict() for p in self.red_team],
            "local_player_cell_id": self.local_player_cell_id,
        }
