import mongomock
import pytest
from werkzeug.security import generate_password_hash

import models
from app import app as flask_app
from extensions import mongo
from services import rate_limit
from services.session import issue_token

PASSWORD = "secret123"


@pytest.fixture
def db(monkeypatch):
    database = mongomock.MongoClient()["health_edu_test"]
    monkeypatch.setattr(mongo, "db", database)
    return database


@pytest.fixture
def app(db):
    flask_app.config.update(TESTING=True, MAIL_ENABLED=False)
    rate_limit.reset()
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(db):
    def _make(email="student@example.com", role=models.ROLE_STUDENT, name="Student", school="SMA 1", age=15):
        return models.create_user(name, email, generate_password_hash(PASSWORD), role=role, school=school, age=age)
    return _make


@pytest.fixture
def headers_for(app):
    def _headers(user):
        with app.app_context():
            token = issue_token(user["_id"])
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def student(make_user):
    return make_user()


@pytest.fixture
def admin(make_user):
    return make_user(email="admin@example.com", role=models.ROLE_ADMIN, name="Admin", school=None, age=None)


@pytest.fixture
def student_headers(student, headers_for):
    return headers_for(student)


@pytest.fixture
def admin_headers(admin, headers_for):
    return headers_for(admin)


@pytest.fixture
def make_quiz(db):
    """Create a quiz with one four-option question per answer key."""
    def _make(quiz_type=models.PRE_TEST, keys=(1, 0), title=None):
        quiz = models.create_quiz(title or f"Quiz {quiz_type}", quiz_type, "About adolescent health")
        questions = [
            models.create_question(quiz["_id"], f"Question {i + 1}", ["A", "B", "C", "D"], key)
            for i, key in enumerate(keys)
        ]
        return quiz, questions
    return _make


def answers_for(questions, chosen):
    return [
        {"question_id": str(q["_id"]), "chosen_index": c}
        for q, c in zip(questions, chosen)
    ]
