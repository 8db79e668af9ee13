"""
Session blueprint:
- POST /jwt     sign the caller's identity claim into the `token` cookie
- GET  /logout  clear the `token` cookie

The issuer trusts the claim as sent; there is no user registry behind it.
Tokens are not tracked server-side, so logout only removes the cookie and a
copied token stays valid until it expires.
"""
from __future__ import annotations

import logging

from flask import Blueprint, request, jsonify, abort, current_app

from utils.security import create_session_token, cookie_options, validate_identity_claim

logger = logging.getLogger(__name__)

bp = Blueprint("auth", __name__)


@bp.post("/jwt")
def issue_token():
    """
    Issue a session token for the supplied identity claim
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        description: Bare identity string (e.g. an email) or an object such as {"email", "name"}
        schema:
          type: object
    responses:
      200:
        description: Cookie `token` set
        schema:
          type: object
          properties:
            success: { type: boolean, example: true }
      400:
        description: Missing or malformed identity claim
    """
    payload = request.get_json(silent=True)
    if payload is None:
        abort(400, description="Request body must be JSON")
    claim = validate_identity_claim(payload)

    token = create_session_token(claim)
    response = jsonify({"success": True})
    response.set_cookie(current_app.config["TOKEN_COOKIE_NAME"], token, **cookie_options())
    return response


@bp.get("/logout")
def logout():
    """
    Clear the session cookie
    ---
    tags:
      - Auth
    responses:
      200:
        description: Cookie `token` expired
        schema:
          type: object
          properties:
            success: { type: boolean, example: true }
    """
    response = jsonify({"success": True})
    response.delete_cookie(current_app.config["TOKEN_COOKIE_NAME"], **cookie_options())
    return response
