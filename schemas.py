from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from typing import List, Optional, Literal

import config
from errors import ValidationError

EMAIL_PATTERN = r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$"

QuizType = Literal["pre-test", "post-test"]


def parse(model, payload):
    """Validate ``payload`` against ``model``, raising our ValidationError on failure."""
    if payload is None:
        raise ValidationError("Request body must be a JSON object")
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        errors = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
        raise ValidationError("Invalid request data", errors=errors)


def _lower_email(value):
    return value.strip().lower() if isinstance(value, str) else value


# ----------------------
# Users
# ----------------------
class RegisterIn(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6)
    school: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return _lower_email(value)


class LoginIn(BaseModel):
    email: str
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return _lower_email(value)


class ProfileUpdateIn(BaseModel):
    name: Optional[str] = None
    school: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0)
    password: Optional[str] = Field(default=None, min_length=6)


class UserUpdateIn(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN)
    school: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return _lower_email(value)


class ForgotPasswordIn(BaseModel):
    email: str = Field(pattern=EMAIL_PATTERN)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return _lower_email(value)


class ResetPasswordIn(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=6)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return _lower_email(value)


# ----------------------
# Quizzes
# ----------------------
class QuizIn(BaseModel):
    title: str = Field(min_length=1)
    type: QuizType
    description: str = Field(min_length=1)


class QuizUpdateIn(BaseModel):
    title: Optional[str] = None
    type: Optional[QuizType] = None
    description: Optional[str] = None


class QuestionIn(BaseModel):
    prompt: str = Field(min_length=1)
    options: List[str] = Field(min_length=2)
    answer_key: int = Field(ge=0)

    @model_validator(mode="after")
    def key_within_options(self):
        if self.answer_key >= len(self.options):
            raise ValueError("answer_key must point at one of the options")
        return self


class QuestionUpdateIn(BaseModel):
    prompt: Optional[str] = None
    options: Optional[List[str]] = Field(default=None, min_length=2)
    answer_key: Optional[int] = Field(default=None, ge=0)


class AnswerIn(BaseModel):
    question_id: str
    chosen_index: int = Field(strict=True, ge=0)


class SubmissionIn(BaseModel):
    answers: List[AnswerIn]


# ----------------------
# Education content
# ----------------------
class MaterialIn(BaseModel):
    title: str = Field(min_length=1)
    category: str
    body: str = Field(min_length=1)
    image_url: str = config.DEFAULT_MATERIAL_IMAGE

    @field_validator("category")
    @classmethod
    def known_category(cls, value):
        if value not in config.MATERIAL_CATEGORIES:
            raise ValueError(f"category must be one of {', '.join(config.MATERIAL_CATEGORIES)}")
        return value


class MaterialUpdateIn(BaseModel):
    title: Optional[str] = None
    category: Optional[str] = None
    body: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("category")
    @classmethod
    def known_category(cls, value):
        if value is not None and value not in config.MATERIAL_CATEGORIES:
            raise ValueError(f"category must be one of {', '.join(config.MATERIAL_CATEGORIES)}")
        return value


class VideoIn(BaseModel):
    title: str = Field(min_length=1)
    video_url: str = Field(min_length=1)
    description: str = Field(min_length=1)
    duration: str = Field(min_length=1)


class VideoUpdateIn(BaseModel):
    title: Optional[str] = None
    video_url: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[str] = None


def changed_fields(update):
    """Fields of a partial update that carry a value; empty strings keep the stored value."""
    return {
        k: v for k, v in update.model_dump().items()
        if v is not None and v != ""
    }
