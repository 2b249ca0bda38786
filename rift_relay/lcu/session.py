"""
League Client Session

Owns the connection to the League Client for champion select and gameflow:

    disconnected --(credentials found)--> connect
        --(websocket subscribed)--> connected_event_driven
        --(subscription failed)-->  connected_polling

Discovery failures emit disconnect and are retried after a fixed backoff,
forever, since the client may simply not be open yet. A dropped websocket
emits disconnect and restarts discovery, as do repeated failed polls in the
polling fallback.
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional

from tenacity import AsyncRetrying, RetryCallState, retry_if_exception_type, wait_fixed

from ..exceptions import ClientDiscoveryError, LCUAPIError, LCUNotConnectedError, SubscriptionError
from ..logging_config import get_logger
from ..signals import Signal
from .champ_select import map_gameflow_phase, normalize_champ_select
from .client import CHAMP_SELECT_SESSION_PATH, GAMEFLOW_PHASE_PATH, LCUClient
from .credentials import authenticate
from .models import ConnectionState, LCUCredentials
from .subscription import LCUSubscription

logger = get_logger(__name__)

RETRY_BACKOFF_SECONDS = 5.0
# Consecutive unreachable or rejected polls before the client is considered gone
MAX_POLL_FAILURES = 3
CHAMP_SELECT_RAW_PHASE = "ChampSelect"

Authenticator = Callable[[], Awaitable[LCUCredentials]]


class ClientSession:
    """
    League Client connection state machine.

    Usage:
        session = ClientSession(poll_interval_ms=1000)
        session.champ_select_update.connect(on_champ_select)
        session.start()     # inside a running event loop
        ...
        session.stop()

    Signals:
        connect(LCUCredentials)
        disconnect(reason: str)
        champ_select_update(ChampSelectSession)
        gameflow_phase(raw_phase: str, mapped: Optional[GamePhase])
    """

    def __init__(
        self,
        poll_interval_ms: int = 1000,
        authenticator: Authenticator = authenticate,
        client_factory: Callable[[LCUCredentials], LCUClient] = LCUClient,
        subscription_factory: Callable[[LCUCredentials], LCUSubscription] = LCUSubscription,
    ):
        if poll_interval_ms <= 0:
            raise ValueError(f"poll_interval_ms must be positive, got {poll_interval_ms}")

        self.poll_interval_ms = poll_interval_ms
        self._authenticator = authenticator
        self._client_factory = client_factory
        self._subscription_factory = subscription_factory

        self.connect = Signal("connect")
        self.disconnect = Signal("disconnect")
        self.champ_select_update = Signal("champ_select_update")
        self.gameflow_phase = Signal("gameflow_phase")

        self._state = ConnectionState.DISCONNECTED
        self._credentials: Optional[LCUCredentials] = None
        self._client: Optional[LCUClient] = None
        self._subscription: Optional[LCUSubscription] = None
        self._task: Optional[asyncio.Task] = None
        self._last_phase: Optional[str] = None
        self._poll_failures = 0

    # ==================== Query surface ====================

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state != ConnectionState.DISCONNECTED

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def credentials(self) -> Optional[LCUCredentials]:
        return self._credentials

    # ==================== Lifecycle ====================

    def start(self) -> None:
        """Start the connection loop. Must be called from a running loop."""
        if self.is_running:
            return
        logger.info("Waiting for League Client...")
        self._task = asyncio.get_running_loop().create_task(self._run())

    def stop(self) -> None:
        """Tear down subscription, polling and credentials. Safe to call repeatedly."""
        if self._task is not None:
            self._task.cancel()
            self._task = None
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None

        self._state = ConnectionState.DISCONNECTED
        self._credentials = None
        self._last_phase = None
        logger.info("League Client session stopped")

    async def request(self, method: str, path: str, json: Any = None) -> Any:
        """
        Make an authenticated request to the League Client.

        Raises:
            LCUNotConnectedError: If no credentials have been obtained yet
            LCUAPIError: If the request fails
        """
        if self._client is None or self._credentials is None:
            raise LCUNotConnectedError()
        return await self._client.request(method, path, json=json)

    # ==================== Connection loop ====================

    async def _run(self) -> None:
        while True:
            credentials = await self._discover()
            self._credentials = credentials
            self._client = self._client_factory(credentials)
            logger.info(f"Connected to League Client on port {credentials.port} (pid {credentials.pid})")
            self.connect.emit(credentials)

            try:
                reason = await self._serve(credentials)
            finally:
                client, self._client = self._client, None
                await client.close()

            self._state = ConnectionState.DISCONNECTED
            self._credentials = None
            self._last_phase = None
            self.disconnect.emit(reason)

    async def _discover(self) -> LCUCredentials:
        def _on_failure(retry_state: RetryCallState) -> None:
            reason = str(retry_state.outcome.exception())
            logger.warning(f"League Client connection failed: {reason}. Retrying in {RETRY_BACKOFF_SECONDS:g}s")
            self.disconnect.emit(reason)

        retrying = AsyncRetrying(
            retry=retry_if_exception_type((ClientDiscoveryError, OSError)),
            wait=wait_fixed(RETRY_BACKOFF_SECONDS),
            before_sleep=_on_failure,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await self._authenticator()

    async def _serve(self, credentials: LCUCredentials) -> str:
        """Serve one connection until it is lost. Returns the disconnect reason."""
        subscription = self._subscription_factory(credentials)
        subscription.subscribe(CHAMP_SELECT_SESSION_PATH, self._on_champ_select_event)
        subscription.subscribe(GAMEFLOW_PHASE_PATH, self._on_gameflow_event)

        try:
            await subscription.open()
        except SubscriptionError as e:
            logger.warning(f"{e}. Falling back to polling every {self.poll_interval_ms}ms")
            self._state = ConnectionState.POLLING
            await self._poll_loop()
            return "LCU stopped answering polls"

        self._subscription = subscription
        self._state = ConnectionState.EVENT_DRIVEN
        logger.info("LCU event subscriptions active")

        closed = asyncio.Event()
        subscription.closed.connect(closed.set)
        try:
            await closed.wait()
        finally:
            subscription.close()
            if self._subscription is subscription:
                self._subscription = None
        return "LCU event connection closed"

    def _on_champ_select_event(self, data: Any, event_type: str) -> None:
        self.champ_select_update.emit(normalize_champ_select(data))

    def _on_gameflow_event(self, data: Any, event_type: str) -> None:
        if isinstance(data, str):
            self._emit_phase(data)

    def _emit_phase(self, raw_phase: str) -> None:
        self._last_phase = raw_phase
        logger.info(f"Gameflow phase: {raw_phase}")
        self.gameflow_phase.emit(raw_phase, map_gameflow_phase(raw_phase))

    # ==================== Polling fallback ====================

    async def _poll_loop(self) -> None:
        interval = self.poll_interval_ms / 1000.0
        self._poll_failures = 0
        while True:
            await self.poll_once()
            if self._poll_failures >= MAX_POLL_FAILURES:
                logger.warning(f"League Client failed {self._poll_failures} polls in a row, reconnecting")
                return
            await asyncio.sleep(interval)

    async def poll_once(self) -> None:
        """One polling tick: emit the gameflow phase on change, and the session during champ select."""
        if self._client is None:
            return

        try:
            raw_phase = await self._client.get_gameflow_phase()
            if raw_phase is not None and raw_phase != self._last_phase:
                self._emit_phase(raw_phase)

            if raw_phase == CHAMP_SELECT_RAW_PHASE:
                session = await self._client.get_champ_select_session()
                self.champ_select_update.emit(normalize_champ_select(session))
        except LCUAPIError as e:
            logger.debug(f"LCU poll failed: {e}")
            # No response or stale credentials both mean the client went away
            if e.status_code is None or e.status_code in (401, 403):
                self._poll_failures += 1
            else:
                self._poll_failures = 0
            return

        self._poll_failures = 0
