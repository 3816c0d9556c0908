"""
ROLE RESOLVER

Derive the role claim from a bearer credential.

Trust boundary:
- The payload is decoded WITHOUT signature verification
- The resulting role only drives navigation and which controls are shown
- The backend re-checks every request; this is never a security control

Rules:
- Never raises on malformed input
- Pure and idempotent (callers cache the result next to the token)
"""

import base64
import binascii
import json
import logging
from typing import Optional

from security.roles import ALL_ROLES

logger = logging.getLogger(__name__)


def _decode_segment(segment: str) -> bytes:
    """Reverse the URL-safe alphabet and restore the stripped padding."""
    standard = segment.replace("-", "+").replace("_", "/")
    standard += "=" * (-len(standard) % 4)
    return base64.b64decode(standard, validate=True)


def role_from_token(token: Optional[str]) -> Optional[str]:
    """
    Extract the role claim from a ``header.payload.signature`` credential.

    Args:
        token: Bearer credential as issued by the backend

    Returns:
        One of ``customer``/``owner``/``admin``, or None when the token is
        missing, malformed or carries no recognised role.
    """
    if not token or not isinstance(token, str):
        return None

    parts = token.split(".")
    if len(parts) != 3 or not parts[1]:
        return None

    try:
        payload = json.loads(_decode_segment(parts[1]).decode("utf-8"))
    except (binascii.Error, ValueError, RecursionError) as e:
        # UnicodeDecodeError and JSONDecodeError are both ValueErrors;
        # deeply nested payloads exhaust the parser stack
        logger.warning(f"Unreadable credential payload: {type(e).__name__}")
        return None

    if not isinstance(payload, dict):
        return None

    role = payload.get("role")
    if isinstance(role, str) and role in ALL_ROLES:
        return role
    return None
