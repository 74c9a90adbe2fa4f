from __future__ import annotations

import base64
import binascii
import json

from pydantic import ValidationError as PydanticValidationError

from .exceptions import TokenDecodeError
from .models import TokenClaims


def _b64url_decode(segment: str) -> bytes:
    padded = segment + "=" * (-len(segment) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii"))


def decode_token(token: str) -> TokenClaims:
    """Read the claims of a JWT without verifying its signature.

    The signature is checked by the API on every request; the client only
    needs the payload to know who is signed in and when the token expires.
    """
    parts = token.strip().split(".")
    if len(parts) != 3 or not parts[1]:
        raise TokenDecodeError("Token is not a JWT")
    try:
        payload = json.loads(_b64url_decode(parts[1]))
    except (binascii.Error, UnicodeError, ValueError) as exc:
        raise TokenDecodeError("Token payload is not valid base64 JSON") from exc
    if not isinstance(payload, dict):
        raise TokenDecodeError("Token payload must be a JSON object")
    try:
        return TokenClaims.model_validate(payload)
    except PydanticValidationError as exc:
        raise TokenDecodeError(f"Token payload is missing claims: {exc.error_count()} error(s)") from exc
