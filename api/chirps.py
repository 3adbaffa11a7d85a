from __future__ import annotations

import logging
import uuid

from flask import Blueprint, request, jsonify, g, current_app

from models.chirp import Chirp
from models.schemas.chirp import ChirpCreateSchema, ChirpOutSchema
from utils.decorators import jwt_required
from utils.exceptions import Forbidden, InvalidInputError, NotFound

logger = logging.getLogger(__name__)

bp = Blueprint("chirps", __name__)

chirp_out_schema = ChirpOutSchema()
chirp_list_out_schema = ChirpOutSchema(many=True)


def _create_schema() -> ChirpCreateSchema:
    return ChirpCreateSchema(
        max_length=current_app.config.get("CHIRP_MAX_LENGTH", 140),
        profane_words=current_app.config.get("PROFANE_WORDS", ()),
    )


def _get_chirp_or_404(chirp_id: str) -> Chirp:
    try:
        chirp_id = str(uuid.UUID(chirp_id))
    except ValueError:
        raise NotFound("Chirp not found")
    chirp = current_app.extensions["storage"].get(Chirp, chirp_id)
    if chirp is None:
        raise NotFound("Chirp not found")
    return chirp


@bp.post("/chirps")
@jwt_required()
def create_chirp():
    """
    Post a chirp as the calling user
    ---
    tags:
      - Chirps
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
            body: { type: string, maxLength: 140 }
    responses:
      201:
        description: Created
      401:
        description: Unauthorized
      422:
        description: Empty or too long
    """
    payload = request.get_json(silent=True) or {}
    data = _create_schema().load(payload)

    storage = current_app.extensions["storage"]
    chirp = Chirp(body=data["body"], user_id=g.current_user_id)
    storage.new(chirp)
    storage.save()
    return jsonify(chirp_out_schema.dump(chirp)), 201


@bp.get("/chirps")
def list_chirps():
    """
    List chirps ordered by creation time
    ---
    tags:
      - Chirps
    parameters:
      - in: query
        name: author_id
        type: string
        required: false
      - in: query
        name: sort
        type: string
        enum: [asc, desc]
        required: false
    responses:
      200: { description: OK }
      422: { description: Unsupported sort }
    """
    sort = request.args.get("sort", "asc").lower()
    if sort not in ("asc", "desc"):
        raise InvalidInputError("Unsupported sort. Allowed: asc, desc")
    author_id = request.args.get("author_id") or None

    rows = current_app.extensions["storage"].list_chirps(author_id=author_id, descending=sort == "desc")
    return jsonify(chirp_list_out_schema.dump(rows)), 200


@bp.get("/chirps/<chirp_id>")
def get_chirp(chirp_id: str):
    """
    Fetch one chirp
    ---
    tags:
      - Chirps
    parameters:
      - in: path
        name: chirp_id
        type: string
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    return jsonify(chirp_out_schema.dump(_get_chirp_or_404(chirp_id))), 200


@bp.delete("/chirps/<chirp_id>")
@jwt_required()
def delete_chirp(chirp_id: str):
    """
    Delete one of the caller's chirps
    ---
    tags:
      - Chirps
    security:
      - Bearer: []
    parameters:
      - in: path
        name: chirp_id
        type: string
        required: true
    responses:
      204: { description: Deleted }
      401: { description: Unauthorized }
      403: { description: Chirp belongs to another user }
      404: { description: Not found }
    """
    chirp = _get_chirp_or_404(chirp_id)
    if chirp.user_id != g.current_user_id:
        raise Forbidden("You can only delete your own chirps")

    storage = current_app.extensions["storage"]
    storage.delete(chirp)
    storage.save()
    logger.info("user %s deleted chirp %s", g.current_user_id, chirp.id)
    return ("", 204)
