from flask import Blueprint, request, jsonify, current_app
from werkzeug.security import generate_password_hash, check_password_hash
import logging

import models
import schemas
from errors import AuthorizationError, NotFoundError, ValidationError
from services import rate_limit
from services.email_service import send_password_changed
from services.session import start_session, end_session, login_required

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.route("/register", methods=["POST"])
def register():
    data = schemas.parse(schemas.RegisterIn, request.get_json(silent=True))
    if models.find_user_by_email(data.email):
        raise ValidationError("User already exists")

    # Self-registration always creates a student; admins are seeded
    user = models.create_user(
        data.name.strip(),
        data.email,
        generate_password_hash(data.password),
        role=models.ROLE_STUDENT,
        school=data.school,
        age=data.age,
    )
    logger.info(f"Registered {user['email']}")
    return jsonify(start_session(user).to_dict()), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    data = schemas.parse(schemas.LoginIn, request.get_json(silent=True))
    user = models.find_user_by_email(data.email)
    if not user or not check_password_hash(user["password"], data.password):
        raise AuthorizationError("Invalid email or password")
    return jsonify(start_session(user).to_dict())


@auth_bp.route("/logout", methods=["POST"])
@login_required
def logout(session):
    end_session(session)
    return jsonify({"message": "Logged out"})


@auth_bp.route("/profile", methods=["GET"])
@login_required
def profile(session):
    return jsonify(models.public_user(session.user))


@auth_bp.route("/profile", methods=["PUT"])
@login_required
def update_profile(session):
    data = schemas.parse(schemas.ProfileUpdateIn, request.get_json(silent=True))
    fields = schemas.changed_fields(data)
    password = fields.pop("password", None)
    if password:
        fields["password"] = generate_password_hash(password)
    if not fields:
        return jsonify(models.public_user(session.user))
    return jsonify(models.update_user(session.user_id, fields))


@auth_bp.route("/forgot-password", methods=["POST"])
def forgot_password():
    data = schemas.parse(schemas.ForgotPasswordIn, request.get_json(silent=True))
    rate_limit.hit(
        f"forgot:{data.email}",
        current_app.config["PASSWORD_RESET_MAX_ATTEMPTS"],
        current_app.config["PASSWORD_RESET_WINDOW"],
        message="Too many attempts. Try again in 1 hour.",
    )
    user = models.find_user_by_email(data.email)
    if not user:
        raise NotFoundError("Email not found")
    return jsonify({"success": True, "message": "Email found", "user_id": user["_id"]})


@auth_bp.route("/forgot-password", methods=["PUT"])
def reset_password():
    data = schemas.parse(schemas.ResetPasswordIn, request.get_json(silent=True))
    rate_limit.hit(
        f"reset:{data.email}",
        current_app.config["PASSWORD_RESET_MAX_ATTEMPTS"],
        current_app.config["PASSWORD_RESET_WINDOW"],
        message="Too many attempts. Try again in 1 hour.",
    )
    user = models.find_user_by_email(data.email)
    if not user:
        raise NotFoundError("Email not found")

    models.update_user(user["_id"], {"password": generate_password_hash(data.password)})
    logger.info(f"Password reset for {user['email']}")
    send_password_changed(user)
    return jsonify({"success": True, "message": "Password changed"})
