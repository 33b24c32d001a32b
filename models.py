from datetime import datetime, timezone
from enum import IntEnum
from typing import Optional

from sqlalchemy import Column, DateTime
from sqlalchemy.types import TypeDecorator
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken as UTC; aware ones are converted"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Stores naive UTC, always loads timezone-aware UTC"""
    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            value = as_utc(value).replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is not None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class TaskStatus(IntEnum):
    """Task workflow state; integers on write, labels on read"""
    PENDING = 0
    IN_PROGRESS = 1
    COMPLETED = 2

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    TaskStatus.PENDING: "Pending",
    TaskStatus.IN_PROGRESS: "InProgress",
    TaskStatus.COMPLETED: "Completed",
}


def normalize_key(value: str) -> str:
    """Key used for case-insensitive username/email lookups"""
    return value.casefold()


class User(SQLModel, table=True):
    """Registered account"""
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(max_length=50)
    email: str = Field(max_length=255)
    # Case-folded copies carry the uniqueness constraints.
    username_key: str = Field(max_length=50, unique=True, index=True)
    email_key: str = Field(max_length=255, unique=True, index=True)
    password_hash: str
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(UTCDateTime(), nullable=False),
    )


class Task(SQLModel, table=True):
    """Task owned by exactly one user"""
    __tablename__ = "tasks"
    # Ids are never handed out twice, even after deletes.
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    title: str = Field(max_length=200)
    description: str = Field(default="", max_length=1000)
    status: TaskStatus = Field(default=TaskStatus.PENDING)
    due_date: datetime = Field(sa_column=Column(UTCDateTime(), nullable=False))
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(UTCDateTime(), nullable=False),
    )
    updated_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(UTCDateTime(), nullable=True),
    )
