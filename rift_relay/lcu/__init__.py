"""
League Client (LCU) module

Provides:
- Credential discovery for the running client
- Authenticated REST client
- Websocket event subscription
- Champion select normalization and gameflow phase mapping
- The client session state machine
"""

from .champ_select import GAMEFLOW_PHASE_MAP, map_gameflow_phase, normalize_champ_select
from .client import LCUClient
from .credentials import discover_credentials, parse_command_line, parse_lockfile
from .models import (
    ActionKind,
    BanPickAction,
    ChampSelectSession,
    ConnectionState,
    GamePhase,
    LCUCredentials,
    PlayerSlot,
    SelectPhase,
    SelectTimer,
    Side,
)
from .session import ClientSession
from .subscription import LCUSubscription

__all__ = [
    "GAMEFLOW_PHASE_MAP",
    "map_gameflow_phase",
    "normalize_champ_select",
    "LCUClient",
    "discover_credentials",
    "parse_command_line",
    "parse_lockfile",
    "ActionKind",
    "BanPickAction",
    "ChampSelectSession",
    "ConnectionState",
    "GamePhase",
    "LCUCredentials",
    "PlayerSlot",
    "SelectPhase",
    "SelectTimer",
    "Side",
    "ClientSession",
    "LCUSubscription",
]
