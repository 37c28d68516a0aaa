"""Tests for the relay's exception classes."""

from connected_screens.exceptions import BroadcastError, InvalidMessageError


class TestInvalidMessageError:
    """Test InvalidMessageError formatting."""

    def test_message_with_detail(self):
        ex = InvalidMessageError("invalid_move", "screen: too small")

        assert ex.reason == "invalid_move"
        assert str(ex) == "invalid_move: screen: too small"

    def test_message_without_detail(self):
        assert str(InvalidMessageError("missing_type")) == "missing_type"


class TestBroadcastError:
    """Test BroadcastError formatting."""

    def test_keeps_cause_and_connection_id(self):
        cause = RuntimeError("closed")
        ex = BroadcastError(3, cause)

        assert ex.connection_id == 3
        assert ex.cause is cause
        assert "connection 3" in str(ex)
