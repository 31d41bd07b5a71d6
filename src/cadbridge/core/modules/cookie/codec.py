"""Wire encoding for session cookies.

Plain cookies are unpadded URL-safe base64 over compact JSON. Signed cookies
are the same payload followed by an itsdangerous signature,
``<payload>.<signature>``. Padding is dropped so the value only uses
characters legal in an unquoted cookie value.
"""

import base64
import hashlib
import json
from typing import Any

from itsdangerous import BadData, BadPayload, BadSignature, URLSafeSerializer

SIGNING_SALT = "cadbridge-session"


def make_serializer(secret: str) -> URLSafeSerializer:
    return URLSafeSerializer(secret, salt=SIGNING_SALT, signer_kwargs={"digest_method": hashlib.sha256})


def encode_payload(payload: dict[str, Any]) -> str:
    raw = json.dumps(payload, separators=(",", ":"))
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii").rstrip("=")


def decode_payload(value: str) -> dict[str, Any]:
    """Decode a plain cookie value back into its JSON object.

    Only the exact output of encode_payload is accepted: the decoded object
    is re-encoded and must reproduce the input, so two different strings
    never decode to the same payload.

    Raises:
        ValueError: If the value is not a canonically encoded JSON object
    """
    try:
        raw = base64.urlsafe_b64decode(value.encode("ascii") + b"=" * (-len(value) % 4))
        payload = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        raise ValueError("Cookie value cannot be decoded") from exc

    if not isinstance(payload, dict):
        raise ValueError("Cookie payload is not an object")
    if encode_payload(payload) != value:
        raise ValueError("Cookie value is not canonically encoded")
    return payload


def load_signed(serializer: URLSafeSerializer, value: str) -> tuple[Any, bool]:
    """Decode a signed cookie value without trusting it yet.

    Returns the payload and whether its signature verified. A value with no
    signature at all is read as a plain payload with a failed signature.

    Raises:
        ValueError: If no payload can be recovered, or a verified value is not
            in the exact form dumps would produce
    """
    try:
        payload = serializer.loads(value)
    except BadPayload as exc:
        raise ValueError("Cookie payload cannot be decoded") from exc
    except BadSignature as exc:
        if exc.payload is None:
            return decode_payload(value), False
        try:
            return serializer.load_payload(exc.payload), False
        except BadPayload as payload_exc:
            raise ValueError("Cookie payload cannot be decoded") from payload_exc
    except BadData as exc:
        raise ValueError("Cookie value cannot be decoded") from exc

    # base64 ignores trailing bits, so a verified tag can have aliases
    if serializer.dumps(payload) != value:
        raise ValueError("Cookie value is not canonically encoded")
    return payload, True
