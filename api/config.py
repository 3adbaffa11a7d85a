"""
Environment-aware configuration.
Values come from the process environment, with a .env file loaded first.
SECRET and DB_URL are still honoured as fallbacks for JWT_SECRET and DATABASE_URL.
"""
import os
from dotenv import load_dotenv
from datetime import timedelta

load_dotenv()  # Read .env if present


def _csv(value: str) -> tuple:
    return tuple(w.strip() for w in value.split(",") if w.strip())


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
    DEBUG = False
    TESTING = False
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    APP_ENV = os.getenv("APP_ENV", "dev")
    # "dev" unlocks POST /admin/reset
    PLATFORM = os.getenv("PLATFORM", "")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    DATABASE_URL = os.getenv("DATABASE_URL", os.getenv("DB_URL", "sqlite:///chirpy.db"))
    SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")

    JWT_SECRET = os.getenv("JWT_SECRET", os.getenv("SECRET", "dev-secret-change-me"))
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_ISSUER = os.getenv("JWT_ISSUER", "chirpy")
    JWT_MAX_EXPIRES = timedelta(seconds=int(os.getenv("JWT_MAX_EXPIRES_SECONDS", "3600")))
    REFRESH_TOKEN_EXPIRES = timedelta(days=int(os.getenv("REFRESH_TOKEN_EXPIRES_DAYS", "60")))

    CHIRP_MAX_LENGTH = int(os.getenv("CHIRP_MAX_LENGTH", "140"))
    PROFANE_WORDS = _csv(os.getenv("PROFANE_WORDS", "kerfuffle,sharbert,fornax"))

    # Served under /app/
    STATIC_DIR = os.getenv("STATIC_DIR", os.getcwd())


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    # In dev, propagate exceptions so our error handler has full context
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    DEBUG = False


class TestingConfig(BaseConfig):
    TESTING = True
    PLATFORM = "dev"
    DATABASE_URL = "sqlite://"
    SQL_ECHO = False
    JWT_SECRET = "testing-secret-with-enough-bytes-for-hs256"


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/prod/test).
    """
    env = (name or os.getenv("APP_ENV", "dev")).lower()
    if env in ["prod", "production"]:
        return ProductionConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return DevelopmentConfig
