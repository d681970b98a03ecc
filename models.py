# models.py
from extensions import mongo
from bson import ObjectId
import datetime

ROLE_STUDENT = "student"
ROLE_ADMIN = "admin"

PRE_TEST = "pre-test"
POST_TEST = "post-test"
QUIZ_TYPES = (PRE_TEST, POST_TEST)

# Never sent back to clients
USER_PUBLIC = {"password": 0}

NEWEST_RESULTS = [("completed_at", -1), ("_id", -1)]


def now():
    return datetime.datetime.utcnow()


def to_object_id(value):
    """Returns an ObjectId for ``value`` or None when it is not a valid id."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def users_col():
    return mongo.db.users

def quizzes_col():
    return mongo.db.quizzes

def questions_col():
    return mongo.db.questions

def results_col():
    return mongo.db.results

def materials_col():
    return mongo.db.materials

def videos_col():
    return mongo.db.videos

def revoked_tokens_col():
    return mongo.db.revoked_tokens


# ----------------------
# Users
# ----------------------
def create_user(name, email, password_hash, role=ROLE_STUDENT, school=None, age=None):
    doc = {
        "name": name,
        "email": email,
        "password": password_hash,
        "role": role,
        "school": school,
        "age": age,
        "created_at": now(),
    }
    inserted = users_col().insert_one(doc)
    doc["_id"] = inserted.inserted_id
    return doc

def find_user_by_email(email):
    return users_col().find_one({"email": email})

def get_user(user_id):
    oid = to_object_id(user_id)
    if oid is None:
        return None
    return users_col().find_one({"_id": oid}, USER_PUBLIC)

def list_students():
    return list(users_col().find({"role": ROLE_STUDENT}, USER_PUBLIC).sort("created_at", -1))

def update_user(user_id, fields):
    users_col().update_one({"_id": user_id}, {"$set": fields})
    return get_user(user_id)

def delete_user(user_id):
    users_col().delete_one({"_id": user_id})

def public_user(user):
    return {k: v for k, v in user.items() if k != "password"}


# ----------------------
# Quizzes & questions
# ----------------------
def create_quiz(title, quiz_type, description):
    doc = {
        "title": title,
        "type": quiz_type,
        "description": description,
        "created_at": now(),
    }
    doc["_id"] = quizzes_col().insert_one(doc).inserted_id
    return doc

def list_quizzes():
    return list(quizzes_col().find({}).sort("created_at", -1))

def get_quiz(quiz_id):
    oid = to_object_id(quiz_id)
    if oid is None:
        return None
    return quizzes_col().find_one({"_id": oid})

def update_quiz(quiz_id, fields):
    quizzes_col().update_one({"_id": quiz_id}, {"$set": fields})
    if "type" in fields:
        # Results carry the quiz type the gate reads; keep them in step
        results_col().update_many({"quiz_id": quiz_id}, {"$set": {"quiz_type": fields["type"]}})
    return quizzes_col().find_one({"_id": quiz_id})

def delete_quiz(quiz_id):
    # Questions first, then the quiz; no rollback if the second step fails
    removed = questions_col().delete_many({"quiz_id": quiz_id}).deleted_count
    quizzes_col().delete_one({"_id": quiz_id})
    return removed

def create_question(quiz_id, prompt, options, answer_key):
    doc = {
        "quiz_id": quiz_id,
        "prompt": prompt,
        "options": list(options),
        "answer_key": answer_key,
    }
    doc["_id"] = questions_col().insert_one(doc).inserted_id
    return doc

def get_questions(quiz_id, include_key=True):
    projection = None if include_key else {"answer_key": 0}
    return list(questions_col().find({"quiz_id": quiz_id}, projection).sort("_id", 1))

def get_question(quiz_id, question_id):
    oid = to_object_id(question_id)
    if oid is None:
        return None
    return questions_col().find_one({"_id": oid, "quiz_id": quiz_id})

def update_question(question_id, fields):
    questions_col().update_one({"_id": question_id}, {"$set": fields})
    return questions_col().find_one({"_id": question_id})

def delete_question(question_id):
    questions_col().delete_one({"_id": question_id})


# ----------------------
# Results
# ----------------------
def store_result(user_id, quiz_id, quiz_type, score, answers):
    doc = {
        "user_id": user_id,
        "quiz_id": quiz_id,
        "quiz_type": quiz_type,
        "score": score,
        "answers": answers,
        "completed_at": now(),
    }
    doc["_id"] = results_col().insert_one(doc).inserted_id
    return doc

def get_user_results(user_id):
    return list(results_col().find({"user_id": user_id}).sort(NEWEST_RESULTS))

def has_result_of_type(user_id, quiz_type):
    return results_col().find_one({"user_id": user_id, "quiz_type": quiz_type}) is not None

def delete_user_results(user_id):
    return results_col().delete_many({"user_id": user_id}).deleted_count


# ----------------------
# Education content
# ----------------------
def create_document(collection, fields):
    doc = dict(fields)
    doc["uploaded_at"] = now()
    doc["_id"] = collection.insert_one(doc).inserted_id
    return doc

def list_documents(collection):
    return list(collection.find({}).sort("uploaded_at", -1))

def get_document(collection, doc_id):
    oid = to_object_id(doc_id)
    if oid is None:
        return None
    return collection.find_one({"_id": oid})

def update_document(collection, doc_id, fields):
    collection.update_one({"_id": doc_id}, {"$set": fields})
    return collection.find_one({"_id": doc_id})

def delete_document(collection, doc_id):
    collection.delete_one({"_id": doc_id})


# ----------------------
# Revoked tokens
# ----------------------
def revoke_token(token):
    revoked_tokens_col().update_one(
        {"token": token},
        {"$setOnInsert": {"revoked_at": now()}},
        upsert=True,
    )

def is_token_revoked(token):
    return revoked_tokens_col().find_one({"token": token}) is not None
