"""
Confirmation tokens for destructive actions

A reset is a two-step command: the request returns a short-lived signed
token, and only a confirm call carrying that token performs the reset.
The token also carries a digest of the list as it was when the reset was
requested, so it stops working as soon as that list changes, including
through the reset it confirms.
"""
from datetime import datetime, timedelta
from typing import Optional, Sequence
import hashlib
import json

from jose import jwt, JWTError
from pydantic import BaseModel

from ..config import settings

RESET_TODAY = "reset_today"
RESET_TEMPLATE = "reset_template"

PROMPTS = {
    RESET_TODAY: (
        "Reset today's tasks?",
        "Today's tasks will be refilled from the template. Today's progress will be lost.",
    ),
    RESET_TEMPLATE: (
        "Reset template to default?",
        "Your template will be replaced by the default one.",
    ),
}


def ttl_seconds() -> int:
    return settings.confirmation_ttl_minutes * 60


def fingerprint(items: Sequence[BaseModel]) -> str:
    """Digest of a template or task list; any change to it gives a new value"""
    payload = json.dumps([item.model_dump(mode="json") for item in items], sort_keys=True)
    return hashlib.sha256(payload.encode()).hexdigest()


def issue_confirmation(user_id: str, action: str, state: str, day: Optional[str] = None) -> str:
    """Signed token allowing ``user_id`` to run ``action`` on the list whose fingerprint is ``state``"""
    payload = {
        "sub": user_id,
        "act": action,
        "state": state,
        "exp": datetime.utcnow() + timedelta(seconds=ttl_seconds()),
    }
    if day is not None:
        payload["day"] = day
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_confirmation(
    token: str, user_id: str, action: str, state: str, day: Optional[str] = None
) -> bool:
    """True if the token was issued to this user for this action on the list as it is now"""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return False
    if payload.get("sub") != user_id or payload.get("act") != action:
        return False
    if payload.get("state") != state:
        return False
    if day is not None and payload.get("day") != day:
        return False
    return True
