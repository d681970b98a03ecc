from flask import Blueprint, request, jsonify, current_app
import logging

import models
import schemas
from errors import NotFoundError, ValidationError
from services import statistics
from services.session import admin_required

logger = logging.getLogger(__name__)

admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")


def _user_or_404(user_id):
    user = models.get_user(user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


@admin_bp.route("/users", methods=["GET"])
@admin_required
def list_users(session):
    return jsonify(models.list_students())


@admin_bp.route("/users/<user_id>", methods=["GET"])
@admin_required
def get_user(user_id, session):
    return jsonify(statistics.user_report(user_id))


@admin_bp.route("/users/<user_id>", methods=["PUT"])
@admin_required
def update_user(user_id, session):
    user = _user_or_404(user_id)
    data = schemas.parse(schemas.UserUpdateIn, request.get_json(silent=True))
    fields = schemas.changed_fields(data)

    email = fields.get("email")
    if email and email != user.get("email"):
        taken = models.find_user_by_email(email)
        if taken and taken["_id"] != user["_id"]:
            raise ValidationError("Email already in use")

    if not fields:
        return jsonify(user)
    return jsonify(models.update_user(user["_id"], fields))


@admin_bp.route("/users/<user_id>", methods=["DELETE"])
@admin_required
def delete_user(user_id, session):
    user = _user_or_404(user_id)
    if user.get("role") == models.ROLE_ADMIN:
        raise ValidationError("Cannot delete admin users")

    # Results first, then the user; no rollback if the second step fails
    removed = models.delete_user_results(user["_id"])
    models.delete_user(user["_id"])
    logger.info(f"User {user['_id']} deleted with {removed} results")
    return jsonify({"message": "User and associated data removed"})


@admin_bp.route("/statistics", methods=["GET"])
@admin_required
def dashboard_statistics(session):
    limit = current_app.config.get("RECENT_ACTIVITY_LIMIT", 5)
    return jsonify(statistics.dashboard_statistics(limit))
