from functools import wraps
from flask import request, g
from utils.tokens import decode_jwt
from classes.errors import Unauthorized, Forbidden


def get_request_token():
    """Bearer header first, then the access_token cookie set at login."""
    auth_header = request.headers.get("Authorization", "")
    if auth_header.lower().startswith("bearer "):
        return auth_header.split(" ", 1)[1].strip()
    return request.cookies.get("access_token")


def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = get_request_token()
        if not token:
            raise Unauthorized("Access token required")

        decoded = decode_jwt(token)
        if not decoded or "user_id" not in decoded:
            raise Unauthorized("Invalid token")
        g.user = decoded

        return f(*args, **kwargs)

    return decorated_function


def admin_required(f):
    @wraps(f)
    @login_required
    def decorated_function(*args, **kwargs):
        if g.user.get("role") != "admin":
            raise Forbidden("Admin access required")
        return f(*args, **kwargs)

    return decorated_function
