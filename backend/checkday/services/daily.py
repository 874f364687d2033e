"""
Daily Task Service

Seeds today's checklist from the template and applies the user's edits.
Every mutation reads the current list, applies one change and writes the
whole list back.
"""
from typing import Callable, List, Optional
import logging

from ..core.dates import Clock, local_today, today_key
from ..core.priority import Priority, normalize_priority
from ..core.seeding import build_daily_from_template, clean_title
from ..models import TaskItem
from ..stores.base import DailyTaskStore, StoreError
from .reporting import ErrorReporter
from .templates import TemplateService

logger = logging.getLogger(__name__)


class DailyTaskService:
    """Today's checklist for a user"""

    def __init__(
        self,
        store: DailyTaskStore,
        templates: TemplateService,
        reporter: ErrorReporter,
        clock: Clock = local_today,
    ):
        self.store = store
        self.templates = templates
        self.reporter = reporter
        self.clock = clock

    def today(self) -> str:
        return today_key(self.clock)

    async def get_today(self, user_id: str) -> List[TaskItem]:
        """Load today's list, seeding it from the template if the day has none.

        An existing non-empty list is returned as is, even if the template
        changed since it was seeded. When the store fails the list is
        synthesized in memory and not persisted.
        """
        return await self._load_day(user_id, self.today())

    async def _load_day(self, user_id: str, day: str) -> List[TaskItem]:
        try:
            tasks = await self.store.load(user_id, day)
        except StoreError as e:
            self.reporter.report("daily.load", e)
            return await self._synthesize(user_id)

        if tasks:
            return tasks

        tasks = await self._synthesize(user_id)
        logger.info(f"Seeded {len(tasks)} tasks for user {user_id} on {day}")
        await self._save(user_id, day, tasks)
        return tasks

    async def toggle(self, user_id: str, task_id: str) -> List[TaskItem]:
        return await self._update(
            user_id,
            lambda tasks: [
                t.model_copy(update={"done": not t.done}) if t.id == task_id else t
                for t in tasks
            ],
        )

    async def add(self, user_id: str, title: str, priority: Optional[Priority] = None) -> List[TaskItem]:
        """Prepend a new unchecked task; a blank title is ignored"""
        title = clean_title(title)
        if title is None:
            return await self.get_today(user_id)

        task = TaskItem(title=title, done=False, priority=normalize_priority(priority))
        return await self._update(user_id, lambda tasks: [task, *tasks])

    async def edit(
        self, user_id: str, task_id: str, title: str, priority: Optional[Priority] = None
    ) -> List[TaskItem]:
        """Rename a task; its priority changes only when one is given"""
        title = clean_title(title)
        if title is None:
            return await self.get_today(user_id)

        update = {"title": title}
        if priority is not None:
            update["priority"] = normalize_priority(priority)
        return await self._update(
            user_id,
            lambda tasks: [t.model_copy(update=update) if t.id == task_id else t for t in tasks],
        )

    async def remove(self, user_id: str, task_id: str) -> List[TaskItem]:
        return await self._update(user_id, lambda tasks: [t for t in tasks if t.id != task_id])

    async def mark_all_done(self, user_id: str) -> List[TaskItem]:
        return await self._update(
            user_id, lambda tasks: [t.model_copy(update={"done": True}) for t in tasks]
        )

    async def unmark_all(self, user_id: str) -> List[TaskItem]:
        return await self._update(
            user_id, lambda tasks: [t.model_copy(update={"done": False}) for t in tasks]
        )

    async def reset_from_template(self, user_id: str) -> List[TaskItem]:
        """Replace today's list with a fresh copy of the template.

        Today's progress is discarded, so callers confirm first.
        """
        tasks = await self._synthesize(user_id)
        await self._save(user_id, self.today(), tasks)
        return tasks

    async def _update(
        self, user_id: str, change: Callable[[List[TaskItem]], List[TaskItem]]
    ) -> List[TaskItem]:
        day = self.today()
        current = await self._load_day(user_id, day)
        updated = change(current)
        if updated != current:
            await self._save(user_id, day, updated)
        return updated

    async def _synthesize(self, user_id: str) -> List[TaskItem]:
        template = await self.templates.get_template(user_id)
        return build_daily_from_template(template)

    async def _save(self, user_id: str, day: str, tasks: List[TaskItem]):
        try:
            await self.store.save(user_id, day, tasks)
        except StoreError as e:
            self.reporter.report("daily.save", e)
