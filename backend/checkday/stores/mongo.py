"""MongoDB implementations of the stores, backed by motor."""

import asyncio
import logging
from datetime import datetime
from typing import Any, Awaitable, Dict, List, Optional, TypeVar

from pydantic import ValidationError
from pymongo.errors import DuplicateKeyError, PyMongoError

from ..config import settings
from ..database import (
    get_daily_tasks_collection,
    get_templates_collection,
    get_users_collection,
)
from ..models import TaskItem, TemplateItem, User
from ..services.encryption import get_encryption
from .base import StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _bounded(operation: str, call: Awaitable[T]) -> T:
    """Await a store call under the configured timeout, mapping failures to StoreError."""
    try:
        return await asyncio.wait_for(call, timeout=settings.store_timeout_seconds)
    except asyncio.TimeoutError:
        raise StoreError(operation, f"timed out after {settings.store_timeout_seconds}s")
    except PyMongoError as e:
        raise StoreError(operation, str(e)) from e


def _collection(operation: str, accessor):
    try:
        return accessor()
    except RuntimeError as e:
        raise StoreError(operation, str(e)) from e


def _item_dicts(raw: Any, operation: str) -> Optional[List[dict]]:
    """Decrypted item mappings from a stored document, dropping corrupt entries."""
    if not isinstance(raw, list):
        return None
    items = [item for item in raw if isinstance(item, dict)]
    if len(items) != len(raw):
        logger.warning(f"{operation}: dropped {len(raw) - len(items)} malformed items")
    return get_encryption().decrypt_items(items)


def _parse(model, items: List[dict], operation: str) -> list:
    parsed = []
    for item in items:
        try:
            parsed.append(model(**item))
        except ValidationError as e:
            logger.warning(f"{operation}: skipped unreadable item: {e}")
    return parsed


def _dump(items: list) -> List[dict]:
    return get_encryption().encrypt_items([item.model_dump(mode="json") for item in items])


class MongoTemplateStore:
    """Templates collection: one document per user."""

    async def load(self, user_id: str) -> Optional[List[TemplateItem]]:
        op = "template.load"
        templates = _collection(op, get_templates_collection)
        doc = await _bounded(op, templates.find_one({"user_id": user_id}))
        if not doc:
            return None
        items = _item_dicts(doc.get("items"), op)
        if items is None:
            return None
        return _parse(TemplateItem, items, op)

    async def save(self, user_id: str, items: List[TemplateItem]) -> None:
        op = "template.save"
        templates = _collection(op, get_templates_collection)
        await _bounded(op, templates.update_one(
            {"user_id": user_id},
            {"$set": {"items": _dump(items), "updated_at": datetime.utcnow()}},
            upsert=True,
        ))


class MongoDailyTaskStore:
    """Daily tasks collection: one document per user and day."""

    async def load(self, user_id: str, day: str) -> Optional[List[TaskItem]]:
        op = "daily.load"
        daily = _collection(op, get_daily_tasks_collection)
        doc = await _bounded(op, daily.find_one({"user_id": user_id, "day": day}))
        if not doc:
            return None
        items = _item_dicts(doc.get("items"), op)
        if items is None:
            return None
        return _parse(TaskItem, items, op)

    async def save(self, user_id: str, day: str, items: List[TaskItem]) -> None:
        op = "daily.save"
        daily = _collection(op, get_daily_tasks_collection)
        await _bounded(op, daily.update_one(
            {"user_id": user_id, "day": day},
            {"$set": {"items": _dump(items), "updated_at": datetime.utcnow()}},
            upsert=True,
        ))

    async def load_range(self, user_id: str, from_day: str, to_day: str) -> Dict[str, List[TaskItem]]:
        op = "daily.load_range"
        daily = _collection(op, get_daily_tasks_collection)
        cursor = daily.find(
            {"user_id": user_id, "day": {"$gte": from_day, "$lte": to_day}},
            {"day": 1, "items": 1},
        )
        docs = await _bounded(op, cursor.to_list(None))

        snapshots: Dict[str, List[TaskItem]] = {}
        for doc in docs:
            items = _item_dicts(doc.get("items"), op)
            if items is not None:
                snapshots[doc["day"]] = _parse(TaskItem, items, op)
        return snapshots


class MongoUserStore:
    """Users collection."""

    async def get_by_id(self, user_id: str) -> Optional[User]:
        op = "users.get_by_id"
        users = _collection(op, get_users_collection)
        data = await _bounded(op, users.find_one({"id": user_id}))
        return User(**data) if data else None

    async def get_by_email(self, email: str) -> Optional[User]:
        op = "users.get_by_email"
        users = _collection(op, get_users_collection)
        data = await _bounded(op, users.find_one({"email": email}))
        return User(**data) if data else None

    async def create(self, user: User) -> None:
        op = "users.create"
        users = _collection(op, get_users_collection)
        try:
            await _bounded(op, users.insert_one(user.model_dump()))
        except StoreError as e:
            if isinstance(e.__cause__, DuplicateKeyError):
                raise ValueError("email already registered") from e
            raise

    async def touch_login(self, user_id: str) -> None:
        op = "users.touch_login"
        users = _collection(op, get_users_collection)
        await _bounded(op, users.update_one(
            {"id": user_id},
            {"$set": {"last_login": datetime.utcnow()}},
        ))
