import logging

from flask import Blueprint, request, jsonify, make_response, g, current_app
from models.users import User, ROLES
from models import db
from classes.errors import ValidationError, Unauthorized, NotFound
from utils.tokens import get_jwt_token
from utils.utils import login_required
from utils.helpers import commit_session

auth_bp = Blueprint('auth_bp', __name__)
logger = logging.getLogger(__name__)


def _token_response(user, status=200, message="Login successful"):
    token = get_jwt_token({
        "user_id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
    })

    response = make_response(jsonify({
        "message": message,
        "token": token,
        "user": user.to_dict()
    }), status)

    response.set_cookie(
        "access_token", token,
        httponly=True,
        secure=not current_app.config.get("TESTING", False),
        samesite="None" if not current_app.config.get("TESTING", False) else "Lax",
        path="/",
        max_age=int(current_app.config["JWT_EXPIRATION"].total_seconds())
    )
    return response

# Register
@auth_bp.route('/register', methods=['POST'])
def register():
    data = request.get_json(silent=True) or {}

    name = data.get('name')
    email = data.get('email')
    password = data.get('password')
    role = data.get('role', 'student')

    if not name or not email or not password:
        raise ValidationError("All fields are required")
    if role not in ROLES:
        raise ValidationError("Role must be 'student' or 'admin'")

    if User.query.filter_by(email=email).first():
        raise ValidationError("User already exists")

    new_user = User(name=name, email=email, role=role)
    new_user.set_password(password)

    db.session.add(new_user)
    commit_session()
    logger.info("Registered %s user %s", role, new_user.id)

    return _token_response(new_user, status=201, message="User registered successfully!")

# Login
@auth_bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    email = data.get("email")
    password = data.get("password")

    user = User.query.filter_by(email=email).first() if email else None

    if not user or not password or not user.check_password(password):
        raise Unauthorized("Invalid credentials")

    return _token_response(user)

# Logout
@auth_bp.route('/logout', methods=['POST'])
def logout():
    response = make_response(jsonify({"message": "Logout successful"}))
    response.set_cookie("access_token", "", path="/", max_age=0)
    return response

# Current user
@auth_bp.route('/me', methods=['GET'])
@login_required
def me():
    user = db.session.get(User, int(g.user.get("user_id")))
    if not user:
        raise NotFound("User not found")
    return jsonify(user.to_dict()), 200
