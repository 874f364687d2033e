"""
Shared fixtures: in-memory stores, a fixed clock and an API client wired to them
"""
from datetime import date
from typing import Dict, List, Optional, Tuple

import httpx
import pytest

from checkday.dependencies import (
    get_clock,
    get_daily_store,
    get_reporter,
    get_template_store,
    get_user_store,
)
from checkday.main import app
from checkday.models import TaskItem, TemplateItem, User
from checkday.services.daily import DailyTaskService
from checkday.services.recap import RecapService
from checkday.services.templates import TemplateService
from checkday.stores import StoreError


class InMemoryTemplateStore:
    """Keeps serialized templates, like a document store would"""

    def __init__(self):
        self.docs: Dict[str, List[dict]] = {}
        self.saves = 0

    async def load(self, user_id: str) -> Optional[List[TemplateItem]]:
        if user_id not in self.docs:
            return None
        return [TemplateItem(**item) for item in self.docs[user_id]]

    async def save(self, user_id: str, items: List[TemplateItem]) -> None:
        self.saves += 1
        self.docs[user_id] = [item.model_dump(mode="json") for item in items]


class InMemoryDailyTaskStore:
    def __init__(self):
        self.docs: Dict[Tuple[str, str], List[dict]] = {}
        self.saves = 0

    def put(self, user_id: str, day: str, items: List[dict]):
        self.docs[(user_id, day)] = items

    async def load(self, user_id: str, day: str) -> Optional[List[TaskItem]]:
        if (user_id, day) not in self.docs:
            return None
        return [TaskItem(**item) for item in self.docs[(user_id, day)]]

    async def save(self, user_id: str, day: str, items: List[TaskItem]) -> None:
        self.saves += 1
        self.docs[(user_id, day)] = [item.model_dump(mode="json") for item in items]

    async def load_range(self, user_id: str, from_day: str, to_day: str) -> Dict[str, List[TaskItem]]:
        return {
            day: [TaskItem(**item) for item in items]
            for (uid, day), items in self.docs.items()
            if uid == user_id and from_day <= day <= to_day
        }


class InMemoryUserStore:
    def __init__(self):
        self.users: Dict[str, User] = {}

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    async def create(self, user: User) -> None:
        self.users[user.id] = user

    async def touch_login(self, user_id: str) -> None:
        pass


class BrokenStore:
    """Every call fails the way an unreachable database does"""

    async def load(self, *args):
        raise StoreError("load", "connection refused")

    async def save(self, *args):
        raise StoreError("save", "connection refused")

    async def load_range(self, *args):
        raise StoreError("load_range", "connection refused")


class RecordingReporter:
    def __init__(self):
        self.reports: List[Tuple[str, Exception]] = []

    def report(self, operation: str, error: Exception) -> None:
        self.reports.append((operation, error))

    @property
    def operations(self) -> List[str]:
        return [op for op, _ in self.reports]


@pytest.fixture
def today():
    return date(2024, 3, 15)


@pytest.fixture
def template_store():
    return InMemoryTemplateStore()


@pytest.fixture
def daily_store():
    return InMemoryDailyTaskStore()


@pytest.fixture
def user_store():
    return InMemoryUserStore()


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def templates(template_store, reporter):
    return TemplateService(template_store, reporter)


@pytest.fixture
def daily(daily_store, templates, reporter, today):
    return DailyTaskService(daily_store, templates, reporter, clock=lambda: today)


@pytest.fixture
def recap(daily_store, reporter, today):
    return RecapService(daily_store, reporter, clock=lambda: today)


@pytest.fixture
async def client(template_store, daily_store, user_store, reporter, today):
    """Async HTTP client talking to the app in-process"""
    app.dependency_overrides[get_template_store] = lambda: template_store
    app.dependency_overrides[get_daily_store] = lambda: daily_store
    app.dependency_overrides[get_user_store] = lambda: user_store
    app.dependency_overrides[get_reporter] = lambda: reporter
    app.dependency_overrides[get_clock] = lambda: (lambda: today)

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test", timeout=30.0) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def registered_user(client):
    """Registers a user and returns the token, the public user and the credentials"""
    credentials = {"email": "fauziyah@example.com", "password": "TestPassword123!"}
    response = await client.post("/api/auth/register", json=credentials)
    assert response.status_code == 200, f"Registration failed: {response.text}"
    data = response.json()
    return {
        "token": data["access_token"],
        "user": data["user"],
        "credentials": credentials,
        "headers": {"Authorization": f"Bearer {data['access_token']}"},
    }


@pytest.fixture
def broken_store():
    return BrokenStore()
