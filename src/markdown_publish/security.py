"""API key guard for the mutating and listing routes."""

from __future__ import annotations

import logging
import secrets
from enum import Enum

from fastapi import Request

from .errors import AuthInvalid, AuthMissing

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"


class AuthStatus(str, Enum):
    AUTHORIZED = "authorized"
    MISSING = "missing"
    INVALID = "invalid"


def check_api_key(header_value: str | None, secret: str) -> AuthStatus:
    """Compare a request's credential against the configured secret.

    Uses a constant-time compare so a mismatch does not leak how much matched.
    """
    if header_value is None:
        return AuthStatus.MISSING
    if secrets.compare_digest(header_value.encode("utf-8"), secret.encode("utf-8")):
        return AuthStatus.AUTHORIZED
    return AuthStatus.INVALID


def require_api_key(request: Request) -> None:
    """FastAPI dependency guarding every mutating or listing route."""
    status = check_api_key(request.headers.get(API_KEY_HEADER), request.app.state.settings.api_key)
    if status is AuthStatus.MISSING:
        logger.warning("Rejected %s %s: missing API key", request.method, request.url.path)
        raise AuthMissing()
    if status is AuthStatus.INVALID:
        logger.warning("Rejected %s %s: invalid API key", request.method, request.url.path)
        raise AuthInvalid()
