# extensions.py
from datetime import datetime

from bson import ObjectId
from flask.json.provider import DefaultJSONProvider
from flask_mail import Mail
from flask_pymongo import PyMongo

mongo = PyMongo()
mail = Mail()


class MongoJSONProvider(DefaultJSONProvider):
    """JSON provider that understands the BSON types stored in MongoDB documents."""

    @staticmethod
    def default(o):
        if isinstance(o, ObjectId):
            return str(o)
        if isinstance(o, datetime):
            return o.isoformat()
        return DefaultJSONProvider.default(o)
