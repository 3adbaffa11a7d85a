from flask import Blueprint, current_app, send_from_directory

bp = Blueprint("static_files", __name__)


@bp.get("/")
def index():
    return serve("index.html")


@bp.get("/<path:path>")
def serve(path: str):
    """Serve STATIC_DIR under /app/; every request counts as a hit."""
    current_app.extensions["hits"].increment()
    return send_from_directory(current_app.config["STATIC_DIR"], path)
