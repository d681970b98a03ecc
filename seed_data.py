import sys
from werkzeug.security import generate_password_hash

import config
import models
from app import app, mongo

SAMPLE_QUESTIONS = [
    ("Which organ produces insulin?", ["Liver", "Pancreas", "Kidney", "Heart"], 1),
    ("What blood pressure reading counts as hypertension?", ["90/60", "110/70", "140/90 or higher", "100/65"], 2),
    ("Which habit lowers the risk of obesity?", ["Skipping breakfast", "Regular physical activity", "Sugary drinks", "Late-night snacks"], 1),
]


def seed_admin():
    if models.find_user_by_email(config.DEFAULT_ADMIN_EMAIL):
        print(f"Admin {config.DEFAULT_ADMIN_EMAIL} already exists")
        return
    models.create_user(
        config.DEFAULT_ADMIN_NAME,
        config.DEFAULT_ADMIN_EMAIL,
        generate_password_hash(config.DEFAULT_ADMIN_PASSWORD),
        role=models.ROLE_ADMIN,
    )
    print(f"Created admin {config.DEFAULT_ADMIN_EMAIL}")


def seed_quizzes():
    if models.quizzes_col().count_documents({}):
        print("Quizzes already present, skipping samples")
        return
    for quiz_type in models.QUIZ_TYPES:
        quiz = models.create_quiz(
            f"Adolescent health {quiz_type}",
            quiz_type,
            f"Sample {quiz_type} covering diabetes, hypertension and obesity.",
        )
        for prompt, options, key in SAMPLE_QUESTIONS:
            models.create_question(quiz["_id"], prompt, options, key)
        print(f"Created {quiz_type} quiz {quiz['_id']}")


if __name__ == "__main__":
    with app.app_context():
        try:
            db = mongo.db
            # List collections to verify connection
            collections = db.list_collection_names()
            print("MongoDB connected successfully!")
            print("Existing collections:", collections)
        except Exception as e:
            print("MongoDB connection failed:", str(e))
            sys.exit(1)

        seed_admin()
        if "--samples" in sys.argv:
            seed_quizzes()
