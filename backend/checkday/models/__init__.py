# Pydantic Models
from .user import User, EmailRegisterRequest, EmailLoginRequest, AuthResponse
from .checklist import (
    TemplateItem, TaskItem, ItemWrite, ConfirmRequest, ConfirmationPrompt,
    RecapRow, DaySummary, TemplateResponse, DailyResponse, RecapResponse,
)

__all__ = [
    # User
    "User", "EmailRegisterRequest", "EmailLoginRequest", "AuthResponse",
    # Checklist
    "TemplateItem", "TaskItem", "ItemWrite", "ConfirmRequest", "ConfirmationPrompt",
    "RecapRow", "DaySummary", "TemplateResponse", "DailyResponse", "RecapResponse",
]
