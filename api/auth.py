"""
Authentication blueprint:
- POST /login    email + password -> user, session token, refresh token
- POST /refresh  refresh token as bearer -> new session token
- POST /revoke   refresh token as bearer -> 204

Session tokens are HS256 JWTs valid for at most an hour. Refresh tokens are
opaque, stored in the refresh_tokens table, valid for 60 days unless revoked,
and are not rotated by /refresh.
"""
from __future__ import annotations

from flask import Blueprint, request, jsonify, g, current_app

from models.schemas.user import UserLoginSchema, LoginOutSchema
from utils.decorators import bearer_required

bp = Blueprint("auth", __name__)

user_login_schema = UserLoginSchema()
login_out_schema = LoginOutSchema()


@bp.post("/login")
def login():
    """
    Login: return the user with a session token and a refresh token
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             email: { type: string }
             password: { type: string }
             expires_in_seconds: { type: integer }
    responses:
      200:
        description: OK (returns tokens)
      401:
        description: Unauthorized
    """
    payload = request.get_json(silent=True) or {}
    data = user_login_schema.load(payload)

    result = current_app.extensions["sessions"].login(
        data["email"], data["password"], data.get("expires_in_seconds")
    )
    body = login_out_schema.dump(
        {
            "id": result.user.id,
            "created_at": result.user.created_at,
            "updated_at": result.user.updated_at,
            "email": result.user.email,
            "token": result.token,
            "refresh_token": result.refresh_token,
        }
    )
    return jsonify(body), 200


@bp.post("/refresh")
@bearer_required()
def refresh():
    """
    Exchange a refresh token for a new session token
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: OK (returns token)
      401:
        description: Missing, unknown, expired or revoked refresh token
    """
    token = current_app.extensions["sessions"].refresh(g.bearer_token)
    return jsonify({"token": token}), 200


@bp.post("/revoke")
@bearer_required()
def revoke():
    """
    Revoke a refresh token
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      204:
        description: ""
      401:
        description: Missing or unknown refresh token
    """
    current_app.extensions["sessions"].revoke(g.bearer_token)
    return ("", 204)
