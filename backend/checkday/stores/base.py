"""Persistence interfaces consumed by the services."""

from typing import Dict, List, Optional, Protocol

from ..models import TaskItem, TemplateItem, User


class StoreError(Exception):
    """Transport, timeout or permission failure from a store."""

    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation}: {message}")
        self.operation = operation


class TemplateStore(Protocol):
    """Per-user task template."""

    async def load(self, user_id: str) -> Optional[List[TemplateItem]]:
        """Return the stored template, or None if the user has none."""
        ...

    async def save(self, user_id: str, items: List[TemplateItem]) -> None:
        """Replace the user's template."""
        ...


class DailyTaskStore(Protocol):
    """Per-user, per-day task lists."""

    async def load(self, user_id: str, day: str) -> Optional[List[TaskItem]]:
        """Return the list stored for a day, or None if there is none."""
        ...

    async def save(self, user_id: str, day: str, items: List[TaskItem]) -> None:
        """Replace the list stored for a day."""
        ...

    async def load_range(self, user_id: str, from_day: str, to_day: str) -> Dict[str, List[TaskItem]]:
        """Lists for every stored day between the two keys, inclusive."""
        ...


class UserStore(Protocol):
    """Registered accounts."""

    async def get_by_id(self, user_id: str) -> Optional[User]:
        ...

    async def get_by_email(self, email: str) -> Optional[User]:
        ...

    async def create(self, user: User) -> None:
        ...

    async def touch_login(self, user_id: str) -> None:
        ...
