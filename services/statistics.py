# services/statistics.py
import models
from errors import NotFoundError

USER_SUMMARY = ("name", "email", "school")
QUIZ_SUMMARY = ("title", "type")


def _summary(doc, fields):
    if not doc:
        return None
    out = {"_id": doc["_id"]}
    out.update({f: doc.get(f) for f in fields})
    return out


def _with_refs(results, include_user=True):
    """Attach user and quiz summaries to result documents."""
    quiz_ids = {r["quiz_id"] for r in results}
    quizzes = {q["_id"]: q for q in models.quizzes_col().find({"_id": {"$in": list(quiz_ids)}})}
    users = {}
    if include_user:
        user_ids = {r["user_id"] for r in results}
        users = {
            u["_id"]: u
            for u in models.users_col().find({"_id": {"$in": list(user_ids)}}, models.USER_PUBLIC)
        }

    out = []
    for r in results:
        item = dict(r)
        item["quiz"] = _summary(quizzes.get(r["quiz_id"]), QUIZ_SUMMARY)
        if include_user:
            item["user"] = _summary(users.get(r["user_id"]), USER_SUMMARY)
        out.append(item)
    return out


def _mean(scores):
    scores = list(scores)
    if not scores:
        return 0
    return round(sum(scores) / len(scores), 2)


def average_score():
    rows = list(models.results_col().aggregate([
        {"$group": {"_id": None, "average_score": {"$avg": "$score"}}},
    ]))
    if not rows or rows[0]["average_score"] is None:
        return 0
    return round(rows[0]["average_score"], 2)


def dashboard_statistics(limit):
    results = models.results_col()
    users = models.users_col()

    counts = {
        "total_users": users.count_documents({"role": models.ROLE_STUDENT}),
        "total_admins": users.count_documents({"role": models.ROLE_ADMIN}),
        "total_materials": models.materials_col().count_documents({}),
        "total_videos": models.videos_col().count_documents({}),
        "total_quizzes": models.quizzes_col().count_documents({}),
        "total_attempts": results.count_documents({}),
        "total_participants": len(results.distinct("user_id")),
    }

    recent_results = list(results.find({}).sort(models.NEWEST_RESULTS).limit(limit))
    recent_users = list(
        users.find({"role": models.ROLE_STUDENT}, {"name": 1, "email": 1, "school": 1, "created_at": 1})
        .sort("created_at", -1)
        .limit(limit)
    )

    return {
        "counts": counts,
        "average_score": average_score(),
        "recent_results": _with_refs(recent_results),
        "recent_users": recent_users,
    }


def recap():
    return _with_refs(list(models.results_col().find({}).sort(models.NEWEST_RESULTS)))


def history(user_id):
    return _with_refs(models.get_user_results(user_id), include_user=False)


def user_report(user_id):
    user = models.get_user(user_id)
    if not user:
        raise NotFoundError("User not found")
    results = history(user["_id"])
    return {
        "user": user,
        "quiz_results": results,
        "total_attempts": len(results),
        "average_score": _mean(r["score"] for r in results),
    }
