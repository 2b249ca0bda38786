"""
Overlay State

Merges the client session and live game poller signals into the one state
document the overlays render, and re-broadcasts every change on a named
channel:

    lcuStatus    {"connected": bool}
    champSelect  ChampSelectSession
    gamePhase    {"phase": str, "raw_phase": str}
    gameStart    {}
    gameData     LiveGameState
    gameEvent    GameEvent
    gameEnd      {"final_data": LiveGameState | None}

Payloads are JSON-ready dicts.
"""

from typing import Any, Optional

from .lcu.champ_select import map_gameflow_phase
from .lcu.models import ChampSelectSession, GamePhase, LCUCredentials
from .lcu.session import ClientSession
from .live.models import GameEvent, LiveGameState
from .live.poller import LiveGamePoller
from .logging_config import get_logger
from .signals import Signal

logger = get_logger(__name__)

MAX_FEED_EVENTS = 20


class OverlayState:
    """
    Current overlay state.

    Usage:
        state = OverlayState()
        state.broadcast.connect(lambda channel, payload: push(channel, payload))
        state.attach(live_poller, client_session)
    """

    def __init__(self):
        self.phase = GamePhase.IDLE
        self.champ_select: Optional[dict[str, Any]] = None
        self.game_data: Optional[dict[str, Any]] = None
        self.events: list[dict[str, Any]] = []
        self.lcu_connected = False
        self.game_active = False

        self.broadcast = Signal("broadcast")
        self._live_poller: Optional[LiveGamePoller] = None

    def attach(self, live_poller: LiveGamePoller, client_session: ClientSession) -> None:
        """Subscribe to both state machines."""
        self._live_poller = live_poller

        client_session.connect.connect(self.on_lcu_connect)
        client_session.disconnect.connect(self.on_lcu_disconnect)
        client_session.champ_select_update.connect(self.on_champ_select)
        client_session.gameflow_phase.connect(self.on_gameflow_phase)

        live_poller.game_start.connect(self.on_game_start)
        live_poller.game_data.connect(self.on_game_data)
        live_poller.game_event.connect(self.on_game_event)
        live_poller.game_end.connect(self.on_game_end)

    # ==================== Client session ====================

    def on_lcu_connect(self, credentials: LCUCredentials) -> None:
        self.lcu_connected = True
        logger.info("LCU connected")
        self.broadcast.emit("lcuStatus", {"connected": True})

    def on_lcu_disconnect(self, reason: str) -> None:
        self.lcu_connected = False
        logger.info(f"LCU disconnected: {reason}")
        self.broadcast.emit("lcuStatus", {"connected": False})

    def on_champ_select(self, session: ChampSelectSession) -> None:
        self.phase = GamePhase.CHAMP_SELECT
        self.champ_select = session.to_dict()
        self.broadcast.emit("champSelect", self.champ_select)

    def on_gameflow_phase(self, raw_phase: str, mapped: Optional[GamePhase] = None) -> None:
        if mapped is None:
            mapped = map_gameflow_phase(raw_phase)

        if mapped is not None:
            self.phase = mapped
        if mapped == GamePhase.IDLE:
            self.champ_select = None
            self.game_data = None
            self.events = []

        self.broadcast.emit("gamePhase", {"phase": self.phase.value, "raw_phase": raw_phase})

    # ==================== Live game ====================

    def on_game_start(self) -> None:
        self.phase = GamePhase.IN_GAME
        self.game_active = True
        self.events = []
        logger.info("Game started")
        self.broadcast.emit("gameStart", {})

    def on_game_data(self, state: LiveGameState) -> None:
        self.game_data = state.to_dict()
        self.game_active = True
        self.broadcast.emit("gameData", self.game_data)

    def on_game_event(self, event: GameEvent) -> None:
        payload = event.to_dict()
        self.events.insert(0, payload)
        del self.events[MAX_FEED_EVENTS:]
        self.broadcast.emit("gameEvent", payload)

    def on_game_end(self, last_state: Optional[LiveGameState]) -> None:
        self.phase = GamePhase.POST_GAME
        self.game_active = False
        final_data = last_state.to_dict() if last_state is not None else self.game_data
        logger.info("Game ended")
        self.broadcast.emit("gameEnd", {"final_data": final_data})

    # ==================== Query surface ====================

    def gold_history(self) -> list[dict[str, Any]]:
        if self._live_poller is None:
            return []
        return [sample.to_dict() for sample in self._live_poller.gold_history]

    def snapshot(self) -> dict[str, Any]:
        return {
            "phase": self.phase.value,
            "champ_select": self.champ_select,
            "game_data": self.game_data,
            "events": list(self.events),
            "lcu_connected": self.lcu_connected,
            "game_active": self.game_active,
        }
