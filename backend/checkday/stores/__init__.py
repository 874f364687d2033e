"""Stores - persistence interfaces and their MongoDB implementations."""

from .base import StoreError, TemplateStore, DailyTaskStore, UserStore
from .mongo import MongoTemplateStore, MongoDailyTaskStore, MongoUserStore

__all__ = [
    "StoreError",
    "TemplateStore",
    "DailyTaskStore",
    "UserStore",
    "MongoTemplateStore",
    "MongoDailyTaskStore",
    "MongoUserStore",
]
