"""
Unit tests for the exception hierarchy.
"""

from rift_relay.exceptions import (
    APIError,
    ClientDiscoveryError,
    LCUAPIError,
    LCUNotConnectedError,
    RiftRelayError,
    SubscriptionError,
)


class TestHierarchy:
    """Tests for exception inheritance"""

    def test_all_derive_from_base(self):
        for exc in (
            LCUAPIError.not_found("/x"),
            LCUNotConnectedError(),
            ClientDiscoveryError.client_not_running(),
            SubscriptionError.handshake_failed("refused"),
        ):
            assert isinstance(exc, RiftRelayError)

    def test_not_connected_is_lcu_error(self):
        assert isinstance(LCUNotConnectedError(), LCUAPIError)
        assert isinstance(LCUNotConnectedError(), APIError)


class TestFactories:
    """Tests for classmethod constructors"""

    def test_not_found(self):
        exc = LCUAPIError.not_found("/lol-champ-select/v1/session")

        assert exc.status_code == 404
        assert exc.details["path"] == "/lol-champ-select/v1/session"

    def test_request_failed_has_no_status(self):
        exc = LCUAPIError.request_failed("/lol-gameflow/v1/gameflow-phase", "ConnectError")

        assert exc.status_code is None
        assert "ConnectError" in str(exc)

    def test_lockfile_unreadable(self):
        exc = ClientDiscoveryError.lockfile_unreadable("/games/lockfile", "permission denied")

        assert exc.details == {"path": "/games/lockfile", "reason": "permission denied"}

    def test_to_dict(self):
        data = SubscriptionError.handshake_failed("refused").to_dict()

        assert data["error_type"] == "SubscriptionError"
        assert "refused" in data["message"]
        assert data["details"] == {"reason": "refused"}
