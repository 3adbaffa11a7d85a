from flask import Flask
from flasgger import Swagger
from flask_cors import CORS

from .config import get_config
from .errors import register_error_handlers
from models import create_storage
from utils.metrics import HitCounter
from utils.session import SessionConfig, SessionService

# Minimal Swagger config: exposes /swagger.json and UI at /apidocs
SWAGGER_TEMPLATE = {
    "swagger": "2.0.0",
    "info": {
        "title": "Chirpy API",
        "version": "1.0.0",
        "description": "REST API for users, sessions and chirps (posts of at most 140 characters).",
    },
    "basePath": "/",
    "schemes": ["http"],
    "securityDefinitions": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Enter the token with the `Bearer ` prefix, e.g. \"Bearer abcde12345\"."
        }
    }
}

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec_1",
            "route": "/swagger.json",
            "rule_filter": lambda rule: True,   # include all endpoints
            "model_filter": lambda tag: True,   # include all models
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/",
}


def create_app(config_name: str | None = None, **overrides) -> Flask:
    """
    Application factory: creates and configures the Flask app.
    Keyword overrides are applied on top of the selected config class.

    Per-app state lives in app.extensions:
      - "storage":  DBStorage (engine + scoped session)
      - "sessions": SessionService built from the app's secret and platform
      - "hits":     HitCounter for requests served under /app/
    """
    app = Flask(__name__)

    # Load configuration (reads .env via get_config)
    app.config.from_object(get_config(config_name))
    app.config.update(overrides)

    # Cross-Origin Resource Sharing: enable for dev, configurable for prod
    CORS(app, resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    # Swagger UI and JSON
    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)

    # Register global error handlers that return the uniform error envelope
    register_error_handlers(app)

    storage = create_storage(app.config["DATABASE_URL"], echo=app.config.get("SQL_ECHO", False))
    app.extensions["storage"] = storage
    app.extensions["sessions"] = SessionService(SessionConfig.from_mapping(app.config), storage)
    app.extensions["hits"] = HitCounter()

    from .admin import bp as admin_bp
    from .static_files import bp as static_bp
    from .users import bp as users_bp
    from .auth import bp as auth_bp
    from .chirps import bp as chirps_bp

    app.register_blueprint(admin_bp, url_prefix="/admin")
    app.register_blueprint(static_bp, url_prefix="/app")
    app.register_blueprint(users_bp, url_prefix="/api")
    app.register_blueprint(auth_bp, url_prefix="/api")
    app.register_blueprint(chirps_bp, url_prefix="/api")

    # Ensure the DB session is removed at the end of each request/app context
    # This calls scoped_session.remove(), preventing connection leaks
    @app.teardown_appcontext
    def remove_session(exception=None):
        storage.close()

    @app.route("/")
    def root():
        return {
            "message": "Welcome to Chirpy",
            "docs": "/apidocs/",
            "health": "/admin/healthz",
        }, 200

    return app
