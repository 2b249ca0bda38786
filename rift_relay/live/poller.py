"""
In-Game Poller

Polls the Live Client Data API on a fixed interval and turns snapshot
presence into game lifecycle signals:

    inactive --(snapshot)--> active      emits game_start
    active   --(snapshot)--> active      emits game_data, then game_event per new event
    active   --(no data)-->  inactive    emits game_end(last game data)

Each tick runs as its own task so a slow request never delays the next one.
All state changes of a tick happen in one synchronous block after its fetch
returns; a tick that finishes after a newer tick was applied is dropped.
"""

import asyncio
from typing import Any, Optional

from ..config import DEFAULT_LIVE_CLIENT_URL
from ..logging_config import get_logger, new_game_session_id, LogContext
from ..signals import Signal
from .client import LiveClientAPI
from .events import EventCursor, format_event
from .gold import GoldHistory
from .models import GoldSample, LiveGameState
from .normalizer import extract_events, normalize_game_data

logger = get_logger(__name__)


class LiveGamePoller:
    """
    Live game state machine.

    Usage:
        poller = LiveGamePoller(poll_interval_ms=500)
        poller.game_data.connect(lambda state: print(state.game_time))
        poller.start()      # inside a running event loop
        ...
        poller.stop()

    Signals:
        game_start()                          first snapshot of a new game
        game_data(LiveGameState)              every successful tick
        game_event(GameEvent)                 once per new upstream event
        game_end(Optional[LiveGameState])     first failed tick after a game
    """

    def __init__(
        self,
        api: Optional[LiveClientAPI] = None,
        poll_interval_ms: int = 500,
        request_timeout_ms: int = 3000,
        base_url: str = DEFAULT_LIVE_CLIENT_URL,
    ):
        if poll_interval_ms <= 0:
            raise ValueError(f"poll_interval_ms must be positive, got {poll_interval_ms}")

        self.api = api or LiveClientAPI(base_url=base_url, timeout_ms=request_timeout_ms)
        self.poll_interval_ms = poll_interval_ms

        self.game_start = Signal("game_start")
        self.game_data = Signal("game_data")
        self.game_event = Signal("game_event")
        self.game_end = Signal("game_end")

        self._active = False
        self._last_state: Optional[LiveGameState] = None
        self._gold = GoldHistory()
        self._cursor = EventCursor()
        self._session_id: Optional[str] = None

        self._timer_task: Optional[asyncio.Task] = None
        self._tick_tasks: set[asyncio.Task] = set()
        self._tick_seq = 0
        self._applied_seq = 0

    # ==================== Query surface ====================

    @property
    def is_running(self) -> bool:
        return self._timer_task is not None and not self._timer_task.done()

    @property
    def is_game_active(self) -> bool:
        return self._active

    @property
    def gold_history(self) -> list[GoldSample]:
        return self._gold.snapshot()

    @property
    def last_game_data(self) -> Optional[LiveGameState]:
        return self._last_state

    # ==================== Lifecycle ====================

    def start(self) -> None:
        """Start the repeating poll timer. Must be called from a running loop."""
        if self.is_running:
            return

        logger.info(f"Starting live game poller (every {self.poll_interval_ms}ms)")
        self._cursor.reset()
        self._gold.reset()
        self._timer_task = asyncio.get_running_loop().create_task(self._run())

    def stop(self) -> None:
        """Cancel the timer and abandon in-flight ticks. Safe to call repeatedly."""
        if self._timer_task is not None:
            self._timer_task.cancel()
            self._timer_task = None

        for task in list(self._tick_tasks):
            task.cancel()
        self._tick_tasks.clear()

        if self._active:
            self._active = False
            self._session_id = None
        logger.info("Live game poller stopped")

    async def _run(self) -> None:
        interval = self.poll_interval_ms / 1000.0
        try:
            while True:
                self._spawn_tick()
                await asyncio.sleep(interval)
        finally:
            await self.api.close()

    def _spawn_tick(self) -> None:
        task = asyncio.get_running_loop().create_task(self.poll_once())
        self._tick_tasks.add(task)
        task.add_done_callback(self._tick_tasks.discard)

    # ==================== Ticks ====================

    async def poll_once(self) -> None:
        """Fetch one snapshot and apply it."""
        self._tick_seq += 1
        seq = self._tick_seq
        data = await self.api.get_all_game_data()
        self.apply_snapshot(data, seq=seq)

    def apply_snapshot(self, data: Optional[dict[str, Any]], seq: Optional[int] = None) -> None:
        """
        Apply one snapshot (or None for a failed fetch) to the state machine.

        Args:
            data: Raw /allgamedata payload, or None when the fetch failed
            seq: Tick sequence number; older than the last applied tick means stale
        """
        if seq is None:
            self._tick_seq += 1
            seq = self._tick_seq
        if seq < self._applied_seq:
            logger.debug(f"Dropping stale tick {seq} (already applied {self._applied_seq})")
            return
        self._applied_seq = seq

        if data is None:
            if self._active:
                self._end_game()
            return

        with LogContext(game_session_id=self._session_id):
            if not self._active:
                self._begin_game()
            self._publish(data)

    def _begin_game(self) -> None:
        self._active = True
        self._gold.reset()
        self._cursor.reset()
        self._last_state = None
        # Tags the rest of this tick; apply_snapshot restores the outer context
        self._session_id = new_game_session_id()
        logger.info("Game detected")
        self.game_start.emit()

    def _end_game(self) -> None:
        self._active = False
        last_state = self._last_state

        with LogContext(game_session_id=self._session_id):
            logger.info("Game ended or live client API unavailable")
        self._session_id = None
        self.game_end.emit(last_state)

    def _publish(self, data: dict[str, Any]) -> None:
        state = normalize_game_data(data)

        sample = self._gold.maybe_sample(
            state.game_time,
            state.blue_team.total_gold,
            state.red_team.total_gold,
        )
        if sample is not None:
            logger.debug(f"Gold sample at {sample.time}s: diff {sample.diff}")
        state.gold_history = self._gold.snapshot()

        self._last_state = state
        self.game_data.emit(state)

        for raw_event in self._cursor.advance(extract_events(data)):
            self.game_event.emit(format_event(raw_event))
