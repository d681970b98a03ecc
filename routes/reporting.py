from flask import Blueprint, jsonify

from services import completion_gate, statistics
from services.session import login_required, admin_required

reporting_bp = Blueprint("reporting", __name__, url_prefix="/api/reporting")


@reporting_bp.route("/history", methods=["GET"])
@login_required
def history(session):
    return jsonify(statistics.history(session.user_id))


@reporting_bp.route("/check-prerequisite/<quiz_id>", methods=["GET"])
@login_required
def check_prerequisite(quiz_id, session):
    return jsonify(completion_gate.check_prerequisite(quiz_id, session.user_id))


@reporting_bp.route("/completion-status", methods=["GET"])
@login_required
def completion_status(session):
    return jsonify(completion_gate.get_completion_status(session.user_id))


@reporting_bp.route("/admin/recap", methods=["GET"])
@admin_required
def admin_recap(session):
    return jsonify(statistics.recap())
