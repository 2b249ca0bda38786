"""
League Client (LCU) REST Client

Authenticated HTTPS client for the local League Client API. Credentials come
from credential discovery; the client serves a self-signed certificate.
"""

from typing import Any, Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from ..exceptions import LCUAPIError
from ..logging_config import get_logger
from .models import LCUCredentials

logger = get_logger(__name__)

GAMEFLOW_PHASE_PATH = "/lol-gameflow/v1/gameflow-phase"
CHAMP_SELECT_SESSION_PATH = "/lol-champ-select/v1/session"


def _is_transport_failure(exc: BaseException) -> bool:
    # Only retry when no response came back; HTTP errors are final
    return isinstance(exc, LCUAPIError) and exc.status_code is None


class LCUClient:
    """
    League Client REST API client.

    Usage:
        client = LCUClient(credentials)
        phase = await client.get_gameflow_phase()
        await client.close()
    """

    def __init__(
        self,
        credentials: LCUCredentials,
        timeout_ms: int = 3000,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.credentials = credentials
        self.timeout_seconds = timeout_ms / 1000.0
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.credentials.base_url,
                auth=("riot", self.credentials.password),
                verify=False,
                timeout=self.timeout_seconds,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _send(self, method: str, path: str, json: Any = None) -> Any:
        """Single request attempt. Returns parsed JSON, or None for an empty body."""
        client = self._get_client()

        try:
            response = await client.request(method, path, json=json)
        except httpx.HTTPError as e:
            raise LCUAPIError.request_failed(path, type(e).__name__) from e

        if response.status_code == 404:
            raise LCUAPIError.not_found(path)
        if response.status_code in (401, 403):
            raise LCUAPIError.unauthorized(response.status_code)
        if response.status_code >= 500:
            raise LCUAPIError.server_error(response.status_code, path)
        if not response.is_success:
            raise LCUAPIError(
                f"LCU returned HTTP {response.status_code} for {path}",
                status_code=response.status_code,
                response_body=response.text,
                path=path,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise LCUAPIError(
                f"LCU returned invalid JSON for {path}",
                status_code=response.status_code,
                response_body=response.text,
                path=path,
            ) from e

    @retry(
        retry=retry_if_exception(_is_transport_failure),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        reraise=True,
    )
    async def request(self, method: str, path: str, json: Any = None) -> Any:
        """
        Make an authenticated request, retrying connection failures.

        Args:
            method: HTTP method
            path: LCU endpoint path, e.g. "/lol-summoner/v1/current-summoner"
            json: Optional JSON body

        Returns:
            Parsed JSON response, or None for an empty body

        Raises:
            LCUAPIError: On HTTP errors or after repeated connection failures
        """
        return await self._send(method, path, json=json)

    async def get_gameflow_phase(self) -> Optional[str]:
        """Raw gameflow phase string, e.g. "ChampSelect"."""
        phase = await self._send("GET", GAMEFLOW_PHASE_PATH)
        return phase if isinstance(phase, str) else None

    async def get_champ_select_session(self) -> Optional[dict[str, Any]]:
        """Raw champion select session, or None outside champion select."""
        try:
            session = await self._send("GET", CHAMP_SELECT_SESSION_PATH)
        except LCUAPIError as e:
            if e.status_code == 404:
                return None
            raise
        return session if isinstance(session, dict) else None
