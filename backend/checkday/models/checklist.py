"""
Checklist Models
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
import datetime as dt
import uuid

from ..core.priority import Priority, normalize_priority


def new_id() -> str:
    return str(uuid.uuid4())


def _text(value) -> str:
    # Stored rows may carry numbers where strings are expected
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


class TemplateItem(BaseModel):
    """Single template entry used to seed each new day"""
    id: str = Field(default_factory=new_id)
    title: str
    priority: Priority = Priority.MED

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return _text(value) or new_id()

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, value):
        return _text(value)

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, value):
        return normalize_priority(value)


class TaskItem(BaseModel):
    """Single task of a day's checklist"""
    id: str = Field(default_factory=new_id)
    title: str = ""
    done: bool = False
    priority: Priority = Priority.MED

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return _text(value) or new_id()

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, value):
        return _text(value)

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, value):
        return normalize_priority(value)

    @field_validator("done", mode="before")
    @classmethod
    def _coerce_done(cls, value):
        return bool(value)


class ItemWrite(BaseModel):
    """Request for adding or editing a template item or a task

    Without a priority, a new item gets ``med`` and an edited one keeps
    the priority it had.
    """
    title: str
    priority: Optional[Priority] = None

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, value):
        if value is None:
            return None
        return normalize_priority(value)


class ConfirmRequest(BaseModel):
    """Second step of a destructive reset"""
    token: str


class ConfirmationPrompt(BaseModel):
    """First step of a destructive reset"""
    action: str
    title: str
    description: str
    confirm_token: str
    expires_in_seconds: int


class RecapRow(BaseModel):
    """Completion of a single day inside a recap window"""
    date: dt.date
    total: int = 0
    done: int = 0
    percent: int = 0
    full_done: bool = False


class DaySummary(BaseModel):
    """Counters for a day's checklist"""
    total: int = 0
    done: int = 0
    undone: int = 0
    progress: int = 0
    high: int = 0
    med: int = 0
    low: int = 0


class TemplateResponse(BaseModel):
    items: List[TemplateItem]


class DailyResponse(BaseModel):
    """Today's checklist with its counters and the current streak

    ``tasks`` honours the list filters of the request while ``summary``
    always covers the whole day.
    """
    day: str
    tasks: List[TaskItem]
    summary: DaySummary
    streak: int


class RecapResponse(BaseModel):
    days: int
    rows: List[RecapRow]
    empty: bool
    streak: int
