import logging

from flask import Blueprint, current_app, jsonify

from utils.decorators import platform_required

logger = logging.getLogger(__name__)

bp = Blueprint("admin", __name__)

METRICS_PAGE = """<html>
  <body>
    <h1>Welcome, Chirpy Admin</h1>
    <p>Chirpy has been visited {hits} times!</p>
  </body>
</html>"""


@bp.get("/healthz")
def healthz():
    """
    Readiness check
    ---
    tags:
      - Admin
    produces:
      - text/plain
    responses:
      200:
        description: API is up
    """
    return "OK", 200, {"Content-Type": "text/plain; charset=utf-8"}


@bp.get("/metrics")
def metrics():
    """
    Number of requests served under /app/
    ---
    tags:
      - Admin
    produces:
      - text/html
    responses:
      200:
        description: HTML page with the hit count
    """
    hits = current_app.extensions["hits"].value
    return METRICS_PAGE.format(hits=hits), 200, {"Content-Type": "text/html; charset=utf-8"}


@bp.post("/reset")
@platform_required("dev")
def reset():
    """
    Zero the hit counter and delete every user (dev platform only)
    ---
    tags:
      - Admin
    responses:
      200: { description: Reset done }
      403: { description: Not running on the dev platform }
    """
    current_app.extensions["hits"].reset()
    deleted = current_app.extensions["storage"].reset_users()
    logger.warning("admin reset: deleted %d users", deleted)
    return jsonify({"hits": 0, "deleted_users": deleted}), 200
