from flask import Blueprint, request, jsonify
import logging

import models
import schemas
from errors import ForbiddenError, NotFoundError, ValidationError
from services import completion_gate, scoring
from services.session import login_required, admin_required

logger = logging.getLogger(__name__)

quiz_bp = Blueprint("quiz", __name__, url_prefix="/api/quizzes")


def _quiz_or_404(quiz_id):
    quiz = models.get_quiz(quiz_id)
    if not quiz:
        raise NotFoundError("Quiz not found")
    return quiz


def _question_or_404(quiz, question_id):
    question = models.get_question(quiz["_id"], question_id)
    if not question:
        raise NotFoundError("Question not found")
    return question


@quiz_bp.route("", methods=["GET"])
@login_required
def list_quizzes(session):
    return jsonify(models.list_quizzes())


@quiz_bp.route("", methods=["POST"])
@admin_required
def create_quiz(session):
    data = schemas.parse(schemas.QuizIn, request.get_json(silent=True))
    quiz = models.create_quiz(data.title.strip(), data.type, data.description)
    logger.info(f"Quiz {quiz['_id']} created ({quiz['type']})")
    return jsonify(quiz), 201


@quiz_bp.route("/<quiz_id>", methods=["GET"])
@login_required
def get_quiz(quiz_id, session):
    return jsonify(_quiz_or_404(quiz_id))


@quiz_bp.route("/<quiz_id>", methods=["PUT"])
@admin_required
def update_quiz(quiz_id, session):
    quiz = _quiz_or_404(quiz_id)
    data = schemas.parse(schemas.QuizUpdateIn, request.get_json(silent=True))
    fields = schemas.changed_fields(data)
    if not fields:
        return jsonify(quiz)
    return jsonify(models.update_quiz(quiz["_id"], fields))


@quiz_bp.route("/<quiz_id>", methods=["DELETE"])
@admin_required
def delete_quiz(quiz_id, session):
    quiz = _quiz_or_404(quiz_id)
    removed = models.delete_quiz(quiz["_id"])
    logger.info(f"Quiz {quiz['_id']} deleted with {removed} questions")
    return jsonify({"message": "Quiz and associated questions removed"})


# ----------------------
# Questions
# ----------------------
@quiz_bp.route("/<quiz_id>/questions", methods=["GET"])
@login_required
def list_questions(quiz_id, session):
    quiz = _quiz_or_404(quiz_id)
    # students never see the answer key
    return jsonify(models.get_questions(quiz["_id"], include_key=session.is_admin))


@quiz_bp.route("/<quiz_id>/questions", methods=["POST"])
@admin_required
def add_question(quiz_id, session):
    quiz = _quiz_or_404(quiz_id)
    data = schemas.parse(schemas.QuestionIn, request.get_json(silent=True))
    question = models.create_question(quiz["_id"], data.prompt, data.options, data.answer_key)
    return jsonify(question), 201


@quiz_bp.route("/<quiz_id>/questions/<question_id>", methods=["PUT"])
@admin_required
def update_question(quiz_id, question_id, session):
    quiz = _quiz_or_404(quiz_id)
    question = _question_or_404(quiz, question_id)
    data = schemas.parse(schemas.QuestionUpdateIn, request.get_json(silent=True))

    fields = schemas.changed_fields(data)
    options = fields.get("options", question["options"])
    answer_key = fields.get("answer_key", question["answer_key"])
    if answer_key >= len(options):
        raise ValidationError("answer_key must point at one of the options")

    if not fields:
        return jsonify(question)
    return jsonify(models.update_question(question["_id"], fields))


@quiz_bp.route("/<quiz_id>/questions/<question_id>", methods=["DELETE"])
@admin_required
def delete_question(quiz_id, question_id, session):
    quiz = _quiz_or_404(quiz_id)
    question = _question_or_404(quiz, question_id)
    models.delete_question(question["_id"])
    return jsonify({"message": "Question removed"})


# ----------------------
# Taking a quiz
# ----------------------
@quiz_bp.route("/<quiz_id>/submit", methods=["POST"])
@login_required
def submit(quiz_id, session):
    data = schemas.parse(schemas.SubmissionIn, request.get_json(silent=True))
    quiz = _quiz_or_404(quiz_id)

    allowed, reason = completion_gate.can_take(session.user_id, quiz)
    if not allowed:
        raise ForbiddenError(reason)

    outcome = scoring.submit_quiz_answers(
        quiz["_id"], session.user_id, [a.model_dump() for a in data.answers]
    )
    outcome["message"] = "Quiz submitted successfully"
    return jsonify(outcome), 201
