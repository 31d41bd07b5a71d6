"""Tests for the cookie wire encoding and signing helpers."""

import base64

import pytest
from itsdangerous import URLSafeSerializer

from cadbridge.core.modules.cookie.codec import decode_payload, encode_payload, load_signed, make_serializer

URLSAFE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"


class TestEncoding:
    """Tests for encode_payload / decode_payload."""

    def test_value_is_cookie_safe(self):
        """Test that encoded values only use unpadded URL-safe base64 characters."""
        value = encode_payload({"discordId": "123456789012345678", "issuedAt": 1, "expiresAt": 2})
        assert set(value) <= set(URLSAFE_ALPHABET)

    def test_decodes_to_same_object(self):
        """Test that field order and values survive decoding."""
        payload = {"discordId": "123456789012345678", "issuedAt": 1, "expiresAt": 2, "signature": "ab"}
        decoded = decode_payload(encode_payload(payload))
        assert decoded == payload
        assert list(decoded) == ["discordId", "issuedAt", "expiresAt", "signature"]

    def test_padded_value_rejected(self):
        """Test that a value with explicit padding is not accepted as an alias."""
        value = encode_payload({"a": 1})
        with pytest.raises(ValueError):
            decode_payload(value + "==")

    def test_unused_bits_rejected(self):
        """Test that flipping bits base64 ignores still changes the accepted value."""
        value = encode_payload({"a": 1})  # 7 bytes, last character carries unused bits
        last = URLSAFE_ALPHABET.index(value[-1])
        alias = value[:-1] + URLSAFE_ALPHABET[last ^ 1]

        assert base64.urlsafe_b64decode(alias + "==") == base64.urlsafe_b64decode(value + "==")
        with pytest.raises(ValueError, match="canonically"):
            decode_payload(alias)

    def test_key_order_is_significant(self):
        """Test that a reordered payload is a different value."""
        assert encode_payload({"a": 1, "b": 2}) != encode_payload({"b": 2, "a": 1})

    @pytest.mark.parametrize("value", ["", "e30=", "bnVsbA", "MQ"])
    def test_non_object_rejected(self, value):
        """Test that empty, padded and non-object payloads raise ValueError."""
        with pytest.raises(ValueError):
            decode_payload(value)


class TestSigning:
    """Tests for signed cookie values."""

    FIELDS = {"discordId": "123456789012345678", "issuedAt": 1_700_000_000_000, "expiresAt": 1_700_604_800_000}

    @pytest.fixture(autouse=True)
    def setup(self):
        self.serializer = make_serializer("secret")

    def test_signed_value_verifies(self):
        """Test that a signed value loads back with a verified signature."""
        value = self.serializer.dumps(self.FIELDS)
        assert set(value) <= set(URLSAFE_ALPHABET + ".")
        assert load_signed(self.serializer, value) == (self.FIELDS, True)

    def test_other_secret_is_unverified(self):
        """Test that a value signed with another key still yields its payload, unverified."""
        value = make_serializer("other").dumps(self.FIELDS)
        assert load_signed(self.serializer, value) == (self.FIELDS, False)

    def test_other_salt_is_unverified(self):
        """Test that signatures are bound to the session cookie salt."""
        value = URLSafeSerializer("secret").dumps(self.FIELDS)
        assert load_signed(self.serializer, value)[1] is False

    def test_unsigned_value_is_unverified(self):
        """Test that a plain value reads as a payload without a signature."""
        assert load_signed(self.serializer, encode_payload(self.FIELDS)) == (self.FIELDS, False)

    def test_changed_payload_is_unverified(self):
        """Test that a new payload under an old signature fails verification."""
        signature = self.serializer.dumps(self.FIELDS).rsplit(".", 1)[1]
        forged = {**self.FIELDS, "expiresAt": self.FIELDS["expiresAt"] + 1}
        value = f"{self.serializer.dump_payload(forged).decode('ascii')}.{signature}"
        assert load_signed(self.serializer, value) == (forged, False)

    def test_signature_alias_rejected(self):
        """Test that flipping bits base64 ignores in the signature is not accepted."""
        value = self.serializer.dumps(self.FIELDS)  # 32 byte digest, last character carries unused bits
        last = URLSAFE_ALPHABET.index(value[-1])
        alias = value[:-1] + URLSAFE_ALPHABET[last ^ 1]

        with pytest.raises(ValueError, match="canonically"):
            load_signed(self.serializer, alias)

    @pytest.mark.parametrize("value", ["invalid_cookie_data", "a.b", "!!!.abc", "."])
    def test_undecodable_values(self, value):
        """Test that values without a recoverable payload raise ValueError."""
        with pytest.raises(ValueError):
            load_signed(self.serializer, value)
