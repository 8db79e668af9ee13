"""
security helpers:
- Session token creation/verification via PyJWT
- Identity claim validation and field resolution
- Cookie attributes for the session token
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from flask import current_app
from marshmallow import ValidationError

IDENTITY_CLAIM = "identity"


class InvalidTokenError(Exception):
    """Raised when a session token fails signature, format or expiry checks."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


def validate_identity_claim(claim: Any) -> Any:
    """Accept a non-empty string or a non-empty object as an identity claim."""
    if isinstance(claim, str) and claim.strip():
        return claim
    if isinstance(claim, dict) and claim:
        return claim
    raise ValidationError("Identity claim must be a non-empty string or object.", field_name="identity")


def identity_value(identity: Any, field: str) -> Any:
    """
    Resolve the value an ownership check compares against.
    A bare string identity is the value itself; an object identity
    contributes its `field` entry (None when missing).
    """
    if isinstance(identity, dict):
        return identity.get(field)
    return identity


def create_session_token(claim: Any, expires_in: timedelta | None = None) -> str:
    """Sign `claim` into a token that expires after JWT_TOKEN_EXPIRES (7 days)."""
    issued = _now()
    exp = issued + (expires_in if expires_in is not None else current_app.config["JWT_TOKEN_EXPIRES"])
    payload = {
        IDENTITY_CLAIM: claim,
        "iat": int(issued.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, current_app.config["JWT_SECRET"], algorithm=current_app.config["JWT_ALGORITHM"])


def decode_session_token(token: str) -> Any:
    """
    Decode and validate a session token and return its identity claim.
    Raises InvalidTokenError on bad signature, malformed token or expiry.
    """
    try:
        decoded: Dict[str, Any] = jwt.decode(
            token,
            current_app.config["JWT_SECRET"],
            algorithms=[current_app.config["JWT_ALGORITHM"]],
            options={"require": ["exp", IDENTITY_CLAIM]},
        )
    except jwt.ExpiredSignatureError:
        raise InvalidTokenError("Token expired")
    except jwt.InvalidTokenError as exc:
        raise InvalidTokenError(f"Invalid token: {exc}")
    return decoded[IDENTITY_CLAIM]


def cookie_options() -> Dict[str, Any]:
    return {
        "httponly": True,
        "secure": current_app.config["TOKEN_COOKIE_SECURE"],
        "samesite": current_app.config["TOKEN_COOKIE_SAMESITE"],
    }
