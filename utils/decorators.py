from __future__ import annotations

import logging
from functools import wraps

from flask import request, g, abort, current_app

from utils.security import decode_session_token, identity_value, InvalidTokenError

logger = logging.getLogger(__name__)

UNAUTHORIZED = "Unauthorized access"
FORBIDDEN = "forbidden access"


def token_required(optional: bool = False):
    """
    Verify the session cookie before the view runs and expose the decoded
    identity as `g.identity`.
    With optional=True a missing or rejected token lets the request through
    with `g.identity = None` instead of answering 401.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            g.identity = None
            token = request.cookies.get(current_app.config["TOKEN_COOKIE_NAME"])
            if not token:
                if optional:
                    return fn(*args, **kwargs)
                abort(401, description=UNAUTHORIZED)
            try:
                g.identity = decode_session_token(token)
            except InvalidTokenError as e:
                logger.warning("Session token rejected on %s %s: %s", request.method, request.path, e)
                if optional:
                    return fn(*args, **kwargs)
                abort(401, description=UNAUTHORIZED)
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def owner_required(param: str, claim_field: str):
    """
    Allow access only if the identity's `claim_field` equals the `param`
    path argument exactly. Deny with 403 otherwise.
    """
    def decorator(fn):
        @wraps(fn)
        @token_required()
        def wrapper(*args, **kwargs):
            if identity_value(g.identity, claim_field) != kwargs.get(param):
                abort(403, description=FORBIDDEN)
            return fn(*args, **kwargs)

        return wrapper

    return decorator
