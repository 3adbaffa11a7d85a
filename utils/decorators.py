from __future__ import annotations
from functools import wraps
from flask import request, g, current_app
from utils.exceptions import Forbidden
from utils.security import get_bearer_token


def jwt_required():
    """Require a valid session token; exposes the caller as g.current_user_id."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            token = get_bearer_token(request.headers)
            sessions = current_app.extensions["sessions"]
            g.current_user_id = sessions.authenticate(token)
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def bearer_required():
    """Require any bearer credential; exposes it as g.bearer_token unchecked."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            g.bearer_token = get_bearer_token(request.headers)
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def platform_required(platform: str):
    """
    Allow the endpoint only when the app runs on the given PLATFORM.
    Used to keep destructive admin endpoints off anything but dev.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            if current_app.extensions["sessions"].config.platform != platform:
                raise Forbidden(f"Only available on the {platform} platform")
            return fn(*args, **kwargs)

        return wrapper

    return decorator
