import datetime

import models
from conftest import answers_for
from services.scoring import submit_quiz_answers


def test_list_users_only_students(client, admin, student, admin_headers):
    users = client.get("/api/admin/users", headers=admin_headers).get_json()
    assert [u["email"] for u in users] == [student["email"]]
    assert "password" not in users[0]


def test_admin_endpoints_reject_students(client, student_headers):
    for url in ("/api/admin/users", "/api/admin/statistics", "/api/reporting/admin/recap"):
        assert client.get(url, headers=student_headers).status_code == 403


def test_user_report(client, make_quiz, student, admin_headers):
    quiz, questions = make_quiz(keys=(1, 0))
    submit_quiz_answers(quiz["_id"], student["_id"], answers_for(questions, [1, 0]))
    submit_quiz_answers(quiz["_id"], student["_id"], answers_for(questions, [1, 1]))

    data = client.get(f"/api/admin/users/{student['_id']}", headers=admin_headers).get_json()
    assert data["user"]["email"] == student["email"]
    assert data["total_attempts"] == 2
    assert data["average_score"] == 75
    assert data["quiz_results"][0]["quiz"]["title"] == quiz["title"]


def test_user_report_not_found(client, admin_headers):
    assert client.get("/api/admin/users/0123456789abcdef01234567", headers=admin_headers).status_code == 404


def test_update_user(client, student, admin_headers):
    resp = client.put(
        f"/api/admin/users/{student['_id']}",
        json={"school": "SMA 3", "age": 16, "name": ""},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["school"] == "SMA 3"
    assert data["age"] == 16
    assert data["name"] == student["name"]


def test_update_user_email_conflict(client, make_user, student, admin_headers):
    make_user(email="taken@example.com")
    resp = client.put(f"/api/admin/users/{student['_id']}", json={"email": "taken@example.com"}, headers=admin_headers)
    assert resp.status_code == 400


def test_delete_user_cascades_results(client, db, make_quiz, make_user, student, admin_headers):
    quiz, questions = make_quiz(keys=(1,))
    other = make_user(email="other@example.com")
    submit_quiz_answers(quiz["_id"], student["_id"], answers_for(questions, [1]))
    submit_quiz_answers(quiz["_id"], other["_id"], answers_for(questions, [1]))

    resp = client.delete(f"/api/admin/users/{student['_id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert db.users.find_one({"_id": student["_id"]}) is None
    assert db.results.count_documents({"user_id": student["_id"]}) == 0
    assert db.results.count_documents({"user_id": other["_id"]}) == 1


def test_cannot_delete_admin(client, db, admin, admin_headers):
    resp = client.delete(f"/api/admin/users/{admin['_id']}", headers=admin_headers)
    assert resp.status_code == 400
    assert db.users.find_one({"_id": admin["_id"]}) is not None


def test_statistics(client, db, make_quiz, make_user, student, admin, admin_headers):
    pre, pre_q = make_quiz(models.PRE_TEST, keys=(1, 0))
    db.materials.insert_one({"title": "m", "uploaded_at": datetime.datetime.utcnow()})
    other = make_user(email="other@example.com")

    submit_quiz_answers(pre["_id"], student["_id"], answers_for(pre_q, [1, 0]))
    submit_quiz_answers(pre["_id"], student["_id"], answers_for(pre_q, [0, 0]))
    submit_quiz_answers(pre["_id"], other["_id"], answers_for(pre_q, [0, 1]))

    data = client.get("/api/admin/statistics", headers=admin_headers).get_json()
    counts = data["counts"]
    assert counts["total_users"] == 2
    assert counts["total_admins"] == 1
    assert counts["total_materials"] == 1
    assert counts["total_videos"] == 0
    assert counts["total_quizzes"] == 1
    assert counts["total_attempts"] == 3
    assert counts["total_participants"] == 2
    assert data["average_score"] == 50
    assert len(data["recent_results"]) == 3
    assert data["recent_results"][0]["user"]["email"] in (student["email"], other["email"])
    assert {u["email"] for u in data["recent_users"]} == {student["email"], other["email"]}


def test_statistics_limit(client, app, make_user, admin_headers):
    for i in range(7):
        make_user(email=f"s{i}@example.com")
    data = client.get("/api/admin/statistics", headers=admin_headers).get_json()
    assert len(data["recent_users"]) == app.config["RECENT_ACTIVITY_LIMIT"]


def test_statistics_empty_store(client, admin_headers):
    data = client.get("/api/admin/statistics", headers=admin_headers).get_json()
    assert data["average_score"] == 0
    assert data["recent_results"] == []
