"""Tests for log redaction."""

from cadbridge.logging import REDACTED, redact_secrets


class TestRedactSecrets:
    """Tests for the redact_secrets processor."""

    def test_masks_cookie_and_secret(self):
        """Test that cookie values and secrets are replaced."""
        event = {"event": "session_started", "cookie_value": "eyJ.abc", "session_secret_key": "s3cret"}
        assert redact_secrets(None, "info", event) == {
            "event": "session_started",
            "cookie_value": REDACTED,
            "session_secret_key": REDACTED,
        }

    def test_keeps_identity(self):
        """Test that Discord ids and other context pass through."""
        event = {"event": "session_ended", "discord_id": "123456789012345678", "token": None}
        assert redact_secrets(None, "info", dict(event)) == event
