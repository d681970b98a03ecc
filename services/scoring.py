# services/scoring.py
import logging

import models
from errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def score_answers(questions, answers):
    """
    Score submitted answers against the answer key.

    ``questions`` are question documents, ``answers`` a list of
    ``{"question_id", "chosen_index"}`` dicts. Answers for unknown question
    ids simply do not count. Returns ``(correct_count, total, score)`` where
    score is an unrounded percentage.
    """
    key = {str(q["_id"]): q["answer_key"] for q in questions}
    total = len(questions)

    correct = 0
    for ans in answers:
        expected = key.get(str(ans["question_id"]))
        if expected is not None and expected == ans["chosen_index"]:
            correct += 1

    score = (correct / total) * 100
    return correct, total, score


def submit_quiz_answers(quiz_id, user_id, answers):
    """
    Grade a submission and persist it as a new Result.

    Nothing is written unless the submission covers every question of the
    quiz exactly once. Retakes add another Result.
    """
    quiz = models.get_quiz(quiz_id)
    if not quiz:
        raise NotFoundError("Quiz not found")

    questions = models.get_questions(quiz["_id"])
    if not questions:
        raise NotFoundError("Quiz/Questions not found")

    total = len(questions)
    if len(answers) != total:
        raise ValidationError(
            f"You must answer all {total} questions. You provided {len(answers)} answers."
        )

    seen = set()
    for ans in answers:
        qid = str(ans["question_id"])
        if qid in seen:
            raise ValidationError(f"Question {qid} was answered more than once")
        seen.add(qid)

    correct, total, score = score_answers(questions, answers)

    details = [
        {"question_id": str(a["question_id"]), "chosen_index": a["chosen_index"]}
        for a in answers
    ]
    result = models.store_result(user_id, quiz["_id"], quiz["type"], score, details)
    logger.info(f"Result {result['_id']} stored: user={user_id} quiz={quiz['_id']} score={score}")

    return {
        "score": score,
        "total_questions": total,
        "correct_count": correct,
        "result_id": result["_id"],
    }
