from __future__ import annotations

from flask import Blueprint, request, jsonify, g, current_app

from models.schemas.user import UserCreateSchema, UserUpdateSchema, UserOutSchema
from utils.decorators import jwt_required

bp = Blueprint("users", __name__)

user_create_schema = UserCreateSchema()
user_update_schema = UserUpdateSchema()
user_out_schema = UserOutSchema()


@bp.post("/users")
def create_user():
    """
    Register a new user.
    ---
    tags:
      - Users
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            email: { type: string }
            password: { type: string }
    responses:
      201:
        description: Created
      409:
        description: Email already registered
      422:
        description: Validation error
    """
    payload = request.get_json(silent=True) or {}
    data = user_create_schema.load(payload)

    user = current_app.extensions["sessions"].register(data["email"], data["password"])
    return jsonify(user_out_schema.dump(user)), 201


@bp.put("/users")
@jwt_required()
def update_user():
    """
    Change the email and password of the calling user.
    ---
    tags:
      - Users
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            email: { type: string }
            password: { type: string }
    responses:
      200:
        description: OK
      401:
        description: Unauthorized
      409:
        description: Email already registered
    """
    payload = request.get_json(silent=True) or {}
    data = user_update_schema.load(payload)

    user = current_app.extensions["sessions"].update_credentials(
        g.current_user_id, data["email"], data["password"]
    )
    return jsonify(user_out_schema.dump(user)), 200
