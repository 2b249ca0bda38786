"""
Integration tests for the overlay state merge.

Signals are emitted straight from real poller / session instances; neither
is started, so no network is touched.
"""

import json
import pytest

from rift_relay.lcu.champ_select import normalize_champ_select
from rift_relay.lcu.models import GamePhase, LCUCredentials
from rift_relay.lcu.session import ClientSession
from rift_relay.live.events import format_event
from rift_relay.live.poller import LiveGamePoller
from rift_relay.state import MAX_FEED_EVENTS, OverlayState


@pytest.fixture
def wired():
    """OverlayState attached to an idle poller and client session"""
    poller = LiveGamePoller(api=None)
    session = ClientSession()
    state = OverlayState()
    broadcasts = []
    state.broadcast.connect(lambda channel, payload: broadcasts.append((channel, payload)))
    state.attach(poller, session)
    return state, poller, session, broadcasts


class TestClientSessionSignals:
    """Tests for LCU-driven state changes"""

    def test_connect_and_disconnect(self, wired):
        state, _, session, broadcasts = wired

        session.connect.emit(LCUCredentials(port=1, password="pw"))
        assert state.lcu_connected is True

        session.disconnect.emit("client closed")
        assert state.lcu_connected is False

        assert broadcasts == [
            ("lcuStatus", {"connected": True}),
            ("lcuStatus", {"connected": False}),
        ]

    def test_champ_select_update(self, wired, sample_champ_select):
        state, _, session, broadcasts = wired

        session.champ_select_update.emit(normalize_champ_select(sample_champ_select))

        assert state.phase == GamePhase.CHAMP_SELECT
        assert state.champ_select["bans"][0]["champion_id"] == 14
        assert broadcasts[-1] == ("champSelect", state.champ_select)

    @pytest.mark.parametrize("raw,expected", [
        ("ChampSelect", "champSelect"),
        ("InProgress", "inGame"),
        ("EndOfGame", "postGame"),
    ])
    def test_gameflow_phase(self, wired, raw, expected):
        state, _, session, broadcasts = wired

        session.gameflow_phase.emit(raw, None)

        assert state.phase.value == expected
        assert broadcasts[-1] == ("gamePhase", {"phase": expected, "raw_phase": raw})

    def test_unmapped_phase_keeps_current(self, wired):
        state, _, session, broadcasts = wired
        session.gameflow_phase.emit("ChampSelect", GamePhase.CHAMP_SELECT)

        session.gameflow_phase.emit("ReadyCheck", None)

        assert state.phase == GamePhase.CHAMP_SELECT
        assert broadcasts[-1] == ("gamePhase", {"phase": "champSelect", "raw_phase": "ReadyCheck"})

    def test_idle_clears_game_state(self, wired, sample_champ_select, sample_game_data):
        state, poller, session, _ = wired
        session.champ_select_update.emit(normalize_champ_select(sample_champ_select))
        poller.apply_snapshot(sample_game_data)

        session.gameflow_phase.emit("Lobby", GamePhase.IDLE)

        assert state.phase == GamePhase.IDLE
        assert state.champ_select is None
        assert state.game_data is None
        assert state.events == []


class TestLiveGameSignals:
    """Tests for in-game state changes"""

    def test_game_lifecycle(self, wired, sample_game_data):
        state, poller, _, broadcasts = wired

        poller.apply_snapshot(sample_game_data)

        assert state.phase == GamePhase.IN_GAME
        assert state.game_active is True
        assert state.game_data["blue_team"]["total_gold"] == 6000
        channels = [b[0] for b in broadcasts]
        assert channels[:2] == ["gameStart", "gameData"]
        assert channels.count("gameEvent") == 4

        poller.apply_snapshot(None)

        assert state.phase == GamePhase.POST_GAME
        assert state.game_active is False
        channel, payload = broadcasts[-1]
        assert channel == "gameEnd"
        assert payload["final_data"]["game_time"] == 520.0

    def test_feed_newest_first(self, wired):
        state, poller, _, _ = wired

        poller.game_event.emit(format_event({"EventName": "FirstBlood", "EventTime": 100}))
        poller.game_event.emit(format_event({"EventName": "ChampionKill", "EventTime": 120}))

        assert [e["type"] for e in state.events] == ["ChampionKill", "FirstBlood"]

    def test_feed_capped(self, wired):
        state, poller, _, _ = wired

        for i in range(MAX_FEED_EVENTS + 5):
            poller.game_event.emit(format_event({"EventName": "ChampionKill", "EventTime": i}))

        assert len(state.events) == MAX_FEED_EVENTS
        assert state.events[0]["time"] == MAX_FEED_EVENTS + 4

    def test_game_start_clears_feed(self, wired):
        state, poller, _, _ = wired
        poller.game_event.emit(format_event({"EventName": "Ace"}))

        poller.game_start.emit()

        assert state.events == []


class TestQuerySurface:
    """Tests for snapshot() and gold_history()"""

    def test_snapshot_is_json_ready(self, wired, sample_game_data):
        state, poller, _, _ = wired
        poller.apply_snapshot(sample_game_data)

        snapshot = state.snapshot()
        json.dumps(snapshot)

        assert snapshot["phase"] == "inGame"
        assert snapshot["game_active"] is True
        assert snapshot["lcu_connected"] is False
        assert len(snapshot["events"]) == 4

    def test_gold_history(self, wired, sample_game_data):
        state, poller, _, _ = wired
        sample_game_data["gameData"]["gameTime"] = 30.2

        poller.apply_snapshot(sample_game_data)

        assert state.gold_history() == [{"time": 30, "blue_gold": 6000, "red_gold": 3333, "diff": 2667}]

    def test_gold_history_without_poller(self):
        assert OverlayState().gold_history() == []
