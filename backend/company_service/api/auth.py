"""Caller identity extraction.

The bearer token is a JWT whose payload is decoded WITHOUT signature
verification: the identity is whatever ``userId`` the caller claims. A
verifying decoder can replace ``extract_user_id`` without touching the
ownership logic, which only consumes the resulting identity string.
"""

import base64
import binascii
import json
import logging
from typing import Annotated

from fastapi import Cookie, Header

from backend.company_service.db.context import RequestContext
from backend.company_service.errors import Unauthorized

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def _decode_segment(segment: str) -> bytes:
    """Lenient base64: accepts the standard or URL-safe alphabet, padding optional."""
    normalized = segment.replace("-", "+").replace("_", "/")
    normalized += "=" * (-len(normalized) % 4)
    return base64.b64decode(normalized, validate=True)


def extract_user_id(authorization: str | None, jwt_cookie: str | None) -> str | None:
    """Extract the caller identity from request credentials.

    The ``Authorization: Bearer`` header wins over the ``jwt`` cookie.

    Args:
        authorization: Authorization header value
        jwt_cookie: Value of the ``jwt`` cookie

    Returns:
        The ``userId`` claim, or None if there is no usable credential
    """
    token = ""
    if authorization and authorization.startswith(BEARER_PREFIX):
        token = authorization[len(BEARER_PREFIX) :]
    elif jwt_cookie:
        token = jwt_cookie

    if not token:
        return None

    parts = token.split(".")
    if len(parts) != 3:
        return None

    try:
        payload = json.loads(_decode_segment(parts[1]))
    except (binascii.Error, ValueError):
        return None

    if not isinstance(payload, dict):
        return None

    user_id = payload.get("userId")
    if not isinstance(user_id, str) or not user_id:
        return None

    return user_id


async def get_current_context(
    authorization: Annotated[str | None, Header()] = None,
    jwt: Annotated[str | None, Cookie()] = None,
) -> RequestContext:
    """Resolve the request context from the bearer header or ``jwt`` cookie.

    Raises:
        Unauthorized: If no identity can be extracted
    """
    user_id = extract_user_id(authorization, jwt)
    if user_id is None:
        logger.info("Rejected request without a usable credential")
        raise Unauthorized()

    return RequestContext(user_id=user_id)
