import models
from conftest import answers_for
from services.scoring import submit_quiz_answers


def test_history_only_own_results(client, make_quiz, make_user, student, student_headers):
    quiz, questions = make_quiz(models.PRE_TEST, keys=(1,))
    other = make_user(email="other@example.com")
    submit_quiz_answers(quiz["_id"], student["_id"], answers_for(questions, [1]))
    submit_quiz_answers(quiz["_id"], other["_id"], answers_for(questions, [0]))

    history = client.get("/api/reporting/history", headers=student_headers).get_json()
    assert len(history) == 1
    assert history[0]["score"] == 100
    assert history[0]["quiz"] == {"_id": str(quiz["_id"]), "title": quiz["title"], "type": models.PRE_TEST}
    assert "user" not in history[0]


def test_admin_recap(client, make_quiz, student, admin_headers):
    quiz, questions = make_quiz(models.PRE_TEST, keys=(1, 2))
    submit_quiz_answers(quiz["_id"], student["_id"], answers_for(questions, [1, 0]))

    recap = client.get("/api/reporting/admin/recap", headers=admin_headers).get_json()
    assert len(recap) == 1
    assert recap[0]["user"]["name"] == student["name"]
    assert recap[0]["user"]["school"] == student["school"]
    assert recap[0]["quiz"]["type"] == models.PRE_TEST
    assert recap[0]["score"] == 50


def test_recap_survives_deleted_quiz(client, make_quiz, student, admin_headers):
    quiz, questions = make_quiz(models.PRE_TEST, keys=(1,))
    submit_quiz_answers(quiz["_id"], student["_id"], answers_for(questions, [1]))
    models.delete_quiz(quiz["_id"])

    recap = client.get("/api/reporting/admin/recap", headers=admin_headers).get_json()
    assert recap[0]["quiz"] is None
    assert recap[0]["quiz_type"] == models.PRE_TEST


def test_home(client):
    data = client.get("/").get_json()
    assert data["version"]


def test_unknown_route_is_json(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.get_json()["success"] is False
