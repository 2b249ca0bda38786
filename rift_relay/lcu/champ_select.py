"""
Champion Select Normalization

Flattens the LCU /lol-champ-select/v1/session payload:
- actions arrive as a list of rounds, each a list of actions
- placeholder actions (championId <= 0) are dropped
- ally actions are reported as blue, enemy actions as red

Also maps the raw gameflow phase string to the overlay GamePhase.
"""

from typing import Any, Optional

from .models import (
    ActionKind,
    BanPickAction,
    ChampSelectSession,
    GamePhase,
    PlayerSlot,
    SelectPhase,
    SelectTimer,
    Side,
)

GAMEFLOW_PHASE_MAP = {
    "ChampSelect": GamePhase.CHAMP_SELECT,
    "InProgress": GamePhase.IN_GAME,
    "GameStart": GamePhase.IN_GAME,
    "EndOfGame": GamePhase.POST_GAME,
    "PreEndOfGame": GamePhase.POST_GAME,
    "Lobby": GamePhase.IDLE,
    "None": GamePhase.IDLE,
}


def map_gameflow_phase(raw_phase: Any) -> Optional[GamePhase]:
    """
    Map an LCU gameflow phase to a GamePhase.

    Phases without an overlay meaning (Matchmaking, ReadyCheck, Reconnect,
    WaitingForStats, ...) return None, meaning "leave the phase unchanged".
    """
    if not isinstance(raw_phase, str):
        return None
    return GAMEFLOW_PHASE_MAP.get(raw_phase)


def _int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _normalize_action(action: dict[str, Any]) -> Optional[BanPickAction]:
    try:
        kind = ActionKind(action.get("type"))
    except ValueError:
        # ten_bans_reveal and other bookkeeping actions
        return None

    champion_id = _int(action.get("championId"))
    if champion_id <= 0:
        return None

    return BanPickAction(
        champion_id=champion_id,
        side=Side.BLUE if action.get("isAllyAction") else Side.RED,
        completed=bool(action.get("completed", False)),
        actor_cell_id=_int(action.get("actorCellId"), -1),
        kind=kind,
    )


def _normalize_slot(player: dict[str, Any]) -> PlayerSlot:
    return PlayerSlot(
        cell_id=_int(player.get("cellId"), -1),
        champion_id=_int(player.get("championId")),
        summoner_id=_int(player.get("summonerId")),
        spell1_id=_int(player.get("spell1Id")),
        spell2_id=_int(player.get("spell2Id")),
        assigned_position=player.get("assignedPosition") or "",
    )


def _roster(value: Any) -> list[PlayerSlot]:
    if not isinstance(value, list):
        return []
    return [_normalize_slot(p) for p in value if isinstance(p, dict)]


def normalize_champ_select(session: Any) -> ChampSelectSession:
    """
    Normalize a raw champion select session.

    Args:
        session: Raw LCU session payload (may be None or malformed)

    Returns:
        ChampSelectSession. Without an actions list the result is empty:
        phase unknown, no bans or picks, no timer.
    """
    if not isinstance(session, dict) or not isinstance(session.get("actions"), list):
        return ChampSelectSession()

    bans: list[BanPickAction] = []
    picks: list[BanPickAction] = []

    for round_actions in session["actions"]:
        if not isinstance(round_actions, list):
            continue
        for raw_action in round_actions:
            if not isinstance(raw_action, dict):
                continue
            action = _normalize_action(raw_action)
            if action is None:
                continue
            if action.kind == ActionKind.BAN:
                bans.append(action)
            else:
                picks.append(action)

    raw_timer = session.get("timer")
    if isinstance(raw_timer, dict):
        phase = SelectPhase(raw_timer.get("phase"))
        timer = SelectTimer(
            total_time_ms=_int(raw_timer.get("totalTimeInPhase")),
            adjusted_time_ms=_int(raw_timer.get("adjustedTimeLeftInPhase")),
            reference_epoch_ms=_int(raw_timer.get("internalNowInEpochMs")),
        )
    else:
        phase = SelectPhase.PLANNING
        timer = None

    return ChampSelectSession(
        phase=phase,
        timer=timer,
        bans=bans,
        picks=picks,
        blue_team=_roster(session.get("myTeam")),
        red_team=_roster(session.get("theirTeam")),
        local_player_cell_id=_int(session.get("localPlayerCellId"), -1),
    )
