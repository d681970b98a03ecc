# services/session.py
"""
Bearer-token sessions.

A session is created by login/registration, handed explicitly to every
protected view, and ended by logout (the token is revoked in the store).
"""
import logging
from dataclasses import dataclass
from functools import wraps

from flask import current_app, request
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

import config
import models
from errors import AuthorizationError, ForbiddenError

logger = logging.getLogger(__name__)


@dataclass
class AuthSession:
    user: dict
    token: str

    @property
    def user_id(self):
        return self.user["_id"]

    @property
    def is_admin(self):
        return self.user.get("role") == models.ROLE_ADMIN

    def to_dict(self):
        user = models.public_user(self.user)
        return {
            "_id": user["_id"],
            "name": user.get("name"),
            "email": user.get("email"),
            "role": user.get("role"),
            "token": self.token,
        }


def _serializer():
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt=config.TOKEN_SALT)


def issue_token(user_id):
    return _serializer().dumps({"id": str(user_id)})


def start_session(user):
    """Open a session for a freshly authenticated user."""
    return AuthSession(user=models.public_user(user), token=issue_token(user["_id"]))


def load_session(token):
    if not token:
        raise AuthorizationError("Not authorized, no token")
    max_age = current_app.config.get("TOKEN_MAX_AGE", config.TOKEN_MAX_AGE)
    try:
        payload = _serializer().loads(token, max_age=max_age)
    except SignatureExpired:
        raise AuthorizationError("Not authorized, token expired")
    except BadSignature:
        raise AuthorizationError("Not authorized, token failed")

    if models.is_token_revoked(token):
        raise AuthorizationError("Not authorized, token revoked")

    user = models.get_user(payload.get("id"))
    if not user:
        raise AuthorizationError("Not authorized, user no longer exists")
    return AuthSession(user=user, token=token)


def end_session(session):
    models.revoke_token(session.token)
    logger.info(f"Session closed for {session.user.get('email')}")


def token_from_request():
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        return header.split(" ", 1)[1].strip()
    return None


def login_required(view):
    """Authenticate the request and pass the AuthSession as ``session``."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        kwargs["session"] = load_session(token_from_request())
        return view(*args, **kwargs)
    return wrapped


def admin_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        session = load_session(token_from_request())
        if not session.is_admin:
            raise ForbiddenError("Not authorized as admin")
        kwargs["session"] = session
        return view(*args, **kwargs)
    return wrapped
