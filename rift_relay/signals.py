"""
Signal / observer primitive used by both pollers.

Handlers are called synchronously, in connection order, on the event loop
that emits. A handler that returns an awaitable has it scheduled as a task so
emission never suspends the poller mid-tick.
"""

import asyncio
import inspect
from typing import Any, Callable

from .logging_config import get_logger

logger = get_logger(__name__)


class Signal:
    """
    A named, typed-by-convention event source.

    Usage:
        game_start = Signal("game_start")
        game_start.connect(lambda: print("started"))
        game_start.emit()
    """

    def __init__(self, name: str):
        self.name = name
        self._handlers: list[Callable[..., Any]] = []

    def connect(self, handler: Callable[..., Any]) -> Callable[..., Any]:
        """Register a handler. Returns it so this can be used as a decorator."""
        if handler not in self._handlers:
            self._handlers.append(handler)
        return handler

    def disconnect(self, handler: Callable[..., Any]) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def emit(self, *args: Any) -> None:
        """Deliver to every handler. A failing handler is logged and skipped."""
        for handler in list(self._handlers):
            try:
                result = handler(*args)
                if inspect.isawaitable(result):
                    asyncio.ensure_future(result)
            except Exception:
                logger.exception(f"Handler {handler!r} for signal '{self.name}' raised")

    @property
    def handler_count(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"Signal({self.name!r}, handlers={len(self._handlers)})"
