"""
Application Exception Hierarchy

Provides structured exceptions for:
- Local client API failures (LCU)
- Client discovery / credential errors
- Event subscription errors
- Configuration errors

Upstream unavailability is expected and is normally absorbed by the pollers;
these exceptions surface only where a caller can act on them.
"""

from typing import Optional, Any


class RiftRelayError(Exception):
    """Base exception for all rift-relay errors"""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }

    def __str__(self) -> str:
        return self.message


# ==================== API Errors ====================

class APIError(RiftRelayError):
    """Base class for local API errors"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        **kwargs: Any
    ):
        self.status_code = status_code
        self.response_body = response_body
        details = {"status_code": status_code, **kwargs}
        super().__init__(message, details)


class LCUAPIError(APIError):
    """League Client (LCU) API error"""

    @classmethod
    def not_found(cls, path: str) -> "LCUAPIError":
        return cls(f"LCU endpoint not found: {path}", status_code=404, path=path)

    @classmethod
    def unauthorized(cls, status_code: int = 401) -> "LCUAPIError":
        return cls(
            "LCU rejected the credentials. The client was probably restarted.",
            status_code=status_code
        )

    @classmethod
    def server_error(cls, status_code: int, path: str) -> "LCUAPIError":
        return cls(f"LCU server error (HTTP {status_code}) for {path}", status_code=status_code, path=path)

    @classmethod
    def request_failed(cls, path: str, reason: str) -> "LCUAPIError":
        return cls(f"LCU request to {path} failed: {reason}", path=path, reason=reason)


class LCUNotConnectedError(LCUAPIError):
    """A request was issued before the client session authenticated"""

    def __init__(self) -> None:
        super().__init__("LCU not connected. Start the client session first.")


# ==================== Discovery Errors ====================

class ClientDiscoveryError(RiftRelayError):
    """Could not find credentials for a running League Client"""

    @classmethod
    def client_not_running(cls) -> "ClientDiscoveryError":
        return cls("League Client process not found. Is the client running?")

    @classmethod
    def lockfile_unreadable(cls, path: str, reason: str) -> "ClientDiscoveryError":
        return cls(
            f"Could not read lockfile at {path}: {reason}",
            {"path": path, "reason": reason}
        )

    @classmethod
    def missing_arguments(cls, pid: int) -> "ClientDiscoveryError":
        return cls(
            f"League Client process {pid} exposes neither port/token arguments nor a lockfile",
            {"pid": pid}
        )


# ==================== Subscription Errors ====================

class SubscriptionError(RiftRelayError):
    """Event subscription transport could not be set up"""

    @classmethod
    def handshake_failed(cls, reason: str) -> "SubscriptionError":
        return cls(f"LCU websocket handshake failed: {reason}", {"reason": reason})


# ==================== Configuration Errors ====================

class ConfigurationError(RiftRelayError):
    """Configuration error"""
    pass
