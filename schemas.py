import re
from datetime import datetime
from typing import Optional

from email_validator import validate_email, EmailNotValidError
from pydantic import BaseModel, Field, StrictInt, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from models import Task, TaskStatus, User, as_utc, utcnow

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")
STATUS_MESSAGE = "Status must be one of: Pending (0), InProgress (1), Completed (2)."


def _invalid(code: str, message: str) -> PydanticCustomError:
    return PydanticCustomError(code, message)


def _check_status(value: int) -> int:
    try:
        TaskStatus(value)
    except ValueError:
        raise _invalid("status_invalid", STATUS_MESSAGE)
    return value


def _check_description(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value) > 1000:
        raise _invalid("description_too_long", "Description cannot exceed 1000 characters.")
    return value


def _check_required_title(value: str) -> str:
    if not value or not value.strip():
        raise _invalid("title_required", "Title is required.")
    if len(value) > 200:
        raise _invalid("title_too_long", "Title cannot exceed 200 characters.")
    return value


class CamelModel(BaseModel):
    """JSON uses camelCase; snake_case is accepted on input too"""
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


# Auth

class UserRegister(CamelModel):
    """Schema for registering a new user"""
    username: str = Field("", validate_default=True)
    email: str = Field("", validate_default=True)
    password: str = Field("", validate_default=True)

    @field_validator("username")
    @classmethod
    def check_username(cls, value: str) -> str:
        if not value:
            raise _invalid("username_required", "Username is required.")
        if len(value) < 3:
            raise _invalid("username_too_short", "Username must be at least 3 characters long.")
        if len(value) > 50:
            raise _invalid("username_too_long", "Username cannot exceed 50 characters.")
        if not USERNAME_PATTERN.match(value):
            raise _invalid(
                "username_invalid",
                "Username can only contain letters, numbers, and underscores.",
            )
        return value

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        if not value:
            raise _invalid("email_required", "Email is required.")
        if len(value) > 255:
            raise _invalid("email_too_long", "Email cannot exceed 255 characters.")
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            raise _invalid("email_invalid", "Email must be in valid format.")
        return value

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        if not value:
            raise _invalid("password_required", "Password is required.")
        if len(value) < 8:
            raise _invalid("password_too_short", "Password must be at least 8 characters long.")
        # bcrypt only reads the first 72 bytes
        if len(value.encode("utf-8")) > 72:
            raise _invalid("password_too_long", "Password cannot exceed 72 bytes.")
        has_upper = re.search(r"[A-Z]", value)
        has_lower = re.search(r"[a-z]", value)
        has_digit = re.search(r"\d", value)
        if not (has_upper and has_lower and has_digit):
            raise _invalid(
                "password_weak",
                "Password must contain at least one uppercase letter, "
                "one lowercase letter, and one number.",
            )
        return value


class UserLogin(CamelModel):
    """Schema for logging in"""
    username: str = Field("", validate_default=True)
    password: str = Field("", validate_default=True)

    @field_validator("username")
    @classmethod
    def check_username(cls, value: str) -> str:
        if not value:
            raise _invalid("username_required", "Username is required.")
        if len(value) > 50:
            raise _invalid("username_too_long", "Username cannot exceed 50 characters.")
        return value

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        if not value:
            raise _invalid("password_required", "Password is required.")
        return value


class UserProfile(CamelModel):
    """Public view of a user; never carries the password hash"""
    id: int
    username: str
    email: str
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserProfile":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            created_at=user.created_at,
        )


class LoginResponse(CamelModel):
    """Token bundle returned by a successful login"""
    token: str
    expires: datetime
    user: UserProfile


# Tasks

class TaskCreate(CamelModel):
    """Schema for creating a new task"""
    title: str = Field("", validate_default=True)
    description: Optional[str] = ""
    status: StrictInt = 0
    due_date: Optional[datetime] = Field(None, validate_default=True)

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str) -> str:
        return _check_required_title(value)

    @field_validator("description")
    @classmethod
    def check_description(cls, value: Optional[str]) -> str:
        return _check_description(value) or ""

    @field_validator("status")
    @classmethod
    def check_status(cls, value: int) -> int:
        return _check_status(value)

    @field_validator("due_date")
    @classmethod
    def check_due_date(cls, value: Optional[datetime]) -> datetime:
        if value is None:
            raise _invalid("due_date_required", "Due date is required.")
        value = as_utc(value)
        if value <= utcnow():
            raise _invalid("due_date_past", "Due date must be in the future.")
        return value


class TaskUpdate(CamelModel):
    """Schema for replacing every editable field of a task"""
    title: str = Field("", validate_default=True)
    description: Optional[str] = ""
    status: StrictInt = 0
    due_date: Optional[datetime] = Field(None, validate_default=True)

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str) -> str:
        return _check_required_title(value)

    @field_validator("description")
    @classmethod
    def check_description(cls, value: Optional[str]) -> str:
        return _check_description(value) or ""

    @field_validator("status")
    @classmethod
    def check_status(cls, value: int) -> int:
        return _check_status(value)

    @field_validator("due_date")
    @classmethod
    def check_due_date(cls, value: Optional[datetime]) -> datetime:
        if value is None:
            raise _invalid("due_date_required", "Due date is required.")
        return as_utc(value)


class TaskPatch(CamelModel):
    """
    Schema for partially updating a task

    None means "leave unchanged". An empty title is also left unchanged,
    while an empty description clears the stored one.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[StrictInt] = None
    due_date: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, value: Optional[str]) -> Optional[str]:
        if value and len(value) > 200:
            raise _invalid("title_too_long", "Title cannot exceed 200 characters.")
        return value

    @field_validator("description")
    @classmethod
    def check_description(cls, value: Optional[str]) -> Optional[str]:
        return _check_description(value)

    @field_validator("status")
    @classmethod
    def check_status(cls, value: Optional[int]) -> Optional[int]:
        if value is None:
            return value
        return _check_status(value)

    @field_validator("due_date")
    @classmethod
    def check_due_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value) if value is not None else None


class TaskResponse(CamelModel):
    """Schema for task response"""
    id: int
    title: str
    description: str
    status: str
    due_date: datetime
    user_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=TaskStatus(task.status).label,
            due_date=task.due_date,
            user_id=task.user_id,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )
