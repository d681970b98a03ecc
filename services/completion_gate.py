# services/completion_gate.py
"""
Pre-test / post-test progression.

A pre-test can always be taken. A post-test unlocks once the user has at
least one Result for any pre-test, and stays unlocked from then on. The
decision reads the store on every call.
"""
import models
from errors import NotFoundError

PRETEST_OPEN = "Pre-test can be taken anytime"
PREREQUISITE_MET = "Prerequisite met: Pre-test completed"
PREREQUISITE_MISSING = "You must complete a pre-test before taking a post-test"


def has_completed_pretest(user_id):
    return models.has_result_of_type(user_id, models.PRE_TEST)


def can_take(user_id, quiz):
    """Returns ``(allowed, reason)`` for ``quiz`` (a quiz document)."""
    if quiz["type"] == models.PRE_TEST:
        return True, PRETEST_OPEN
    if has_completed_pretest(user_id):
        return True, PREREQUISITE_MET
    return False, PREREQUISITE_MISSING


def check_prerequisite(quiz_id, user_id):
    quiz = models.get_quiz(quiz_id)
    if not quiz:
        raise NotFoundError("Quiz not found")
    allowed, reason = can_take(user_id, quiz)
    return {"can_take": allowed, "reason": reason}


def get_completion_status(user_id):
    """
    Per-quiz completion for display. The reported score is the latest
    attempt; completing a quiz never prevents retaking it.
    """
    latest = {}
    for result in models.get_user_results(user_id):
        # newest first, keep the first one seen per quiz
        latest.setdefault(str(result["quiz_id"]), result)

    quiz_status = []
    for quiz in models.list_quizzes():
        result = latest.get(str(quiz["_id"]))
        quiz_status.append({
            "quiz_id": quiz["_id"],
            "title": quiz.get("title"),
            "type": quiz.get("type"),
            "completed": result is not None,
            "score": result["score"] if result is not None else None,
        })

    pretest_done = has_completed_pretest(user_id)
    return {
        "quiz_status": quiz_status,
        "has_completed_pretest": pretest_done,
        "can_take_posttest": pretest_done,
    }
