"""
LCU Event Subscription

The League Client pushes JSON API changes over a WAMP-style websocket on the
same port as its REST API. Subscribing to "OnJsonApiEvent" delivers every
change as:

    [8, "OnJsonApiEvent", {"uri": "...", "eventType": "Update", "data": ...}]

Events are dispatched to handlers registered for their exact uri.
"""

import asyncio
import json
import ssl
from typing import Any, Callable, Optional

from websockets.asyncio.client import connect
from websockets.exceptions import ConnectionClosed, WebSocketException

from ..exceptions import SubscriptionError
from ..logging_config import get_logger
from ..signals import Signal
from .models import LCUCredentials

logger = get_logger(__name__)

WAMP_SUBSCRIBE = 5
WAMP_EVENT = 8
JSON_API_EVENT = "OnJsonApiEvent"

EventHandler = Callable[[Any, str], Any]


def _unverified_ssl_context() -> ssl.SSLContext:
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


class LCUSubscription:
    """
    Websocket subscription to LCU JSON API events.

    Usage:
        sub = LCUSubscription(credentials)
        sub.subscribe("/lol-gameflow/v1/gameflow-phase", on_phase)
        await sub.open()
        ...
        sub.close()

    Handlers receive (data, event_type). The `closed` signal fires once if
    the connection drops without close() having been called.
    """

    def __init__(self, credentials: LCUCredentials, open_timeout: float = 5.0):
        self.credentials = credentials
        self.open_timeout = open_timeout
        self.closed = Signal("subscription_closed")

        self._handlers: dict[str, list[EventHandler]] = {}
        self._ws = None
        self._listen_task: Optional[asyncio.Task] = None
        self._closing = False

    @property
    def is_open(self) -> bool:
        return self._listen_task is not None and not self._listen_task.done()

    def subscribe(self, uri: str, handler: EventHandler) -> None:
        self._handlers.setdefault(uri, []).append(handler)

    async def open(self) -> None:
        """
        Connect and subscribe to JSON API events.

        Raises:
            SubscriptionError: If the websocket handshake or subscribe fails
        """
        use_tls = self.credentials.websocket_url.startswith("wss")
        try:
            self._ws = await connect(
                self.credentials.websocket_url,
                ssl=_unverified_ssl_context() if use_tls else None,
                additional_headers={"Authorization": self.credentials.basic_auth_header},
                open_timeout=self.open_timeout,
            )
            await self._ws.send(json.dumps([WAMP_SUBSCRIBE, JSON_API_EVENT]))
        except (OSError, asyncio.TimeoutError, WebSocketException) as e:
            if self._ws is not None:
                await self._ws.close()
                self._ws = None
            raise SubscriptionError.handshake_failed(f"{type(e).__name__}: {e}") from e

        logger.info(f"Subscribed to LCU events on port {self.credentials.port}")
        self._closing = False
        self._listen_task = asyncio.get_running_loop().create_task(self._listen(self._ws))

    def close(self) -> None:
        """Stop listening. The socket is closed by the listener task."""
        self._closing = True
        if self._listen_task is not None:
            self._listen_task.cancel()
            self._listen_task = None

    async def _listen(self, ws) -> None:
        try:
            async for message in ws:
                self.dispatch(message)
        except ConnectionClosed as e:
            logger.warning(f"LCU websocket closed: {e}")
        finally:
            await ws.close()
            if self._ws is ws:
                self._ws = None
            if not self._closing:
                self.closed.emit()

    def dispatch(self, message: Any) -> bool:
        """
        Route one raw websocket message to its uri handlers.

        Returns:
            True if the message was a JSON API event with at least one handler
        """
        if isinstance(message, bytes):
            message = message.decode("utf-8", errors="replace")
        if not message:
            return False

        try:
            frame = json.loads(message)
        except ValueError:
            logger.debug(f"Ignoring non-JSON websocket frame: {message[:80]!r}")
            return False

        if (
            not isinstance(frame, list)
            or len(frame) < 3
            or frame[0] != WAMP_EVENT
            or frame[1] != JSON_API_EVENT
            or not isinstance(frame[2], dict)
        ):
            return False

        payload = frame[2]
        uri = payload.get("uri")
        if not isinstance(uri, str):
            return False

        handlers = self._handlers.get(uri, [])
        for handler in handlers:
            try:
                handler(payload.get("data"), payload.get("eventType", ""))
            except Exception:
                # Keep listening past a failing handler
                logger.exception(f"Handler for {uri} failed")
        return bool(handlers)
