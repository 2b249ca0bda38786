"""
Live Client Data API Client

The in-game API (https://127.0.0.1:2999/liveclientdata) only answers while a
game is running. Every failure mode (connection refused, timeout, non-2xx
status, unparsable body) resolves to None, which the poller reads as
"no game".
"""

from typing import Any, Optional

import httpx

from ..config import DEFAULT_LIVE_CLIENT_URL
from ..logging_config import get_logger

logger = get_logger(__name__)


class LiveClientAPI:
    """
    Live Client Data API client.

    Usage:
        api = LiveClientAPI()
        data = await api.get_all_game_data()   # dict or None
        await api.close()
    """

    def __init__(
        self,
        base_url: str = DEFAULT_LIVE_CLIENT_URL,
        timeout_ms: int = 3000,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_ms / 1000.0
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            # The game serves a self-signed certificate on localhost
            self._client = httpx.AsyncClient(verify=False, timeout=self.timeout_seconds)
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch(self, endpoint: str) -> Optional[Any]:
        """
        GET an endpoint and return its parsed JSON, or None on any failure.

        Args:
            endpoint: Path under /liveclientdata, e.g. "/allgamedata"
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        client = self._get_client()

        try:
            response = await client.get(url, timeout=self.timeout_seconds)
        except httpx.HTTPError as e:
            logger.debug(f"Live client unavailable ({type(e).__name__}): {url}")
            return None

        if not response.is_success:
            # The API answers 404 while the game is still loading
            logger.debug(f"Live client returned HTTP {response.status_code} for {url}")
            return None

        try:
            return response.json()
        except ValueError:
            logger.debug(f"Live client returned invalid JSON for {url}")
            return None

    async def get_all_game_data(self) -> Optional[dict[str, Any]]:
        """Full snapshot: allPlayers, activePlayer, gameData, events."""
        data = await self.fetch("/allgamedata")
        if not isinstance(data, dict):
            return None
        return data
