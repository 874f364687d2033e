"""
Template Service

Keeps the user's reusable task template. Store failures never reach the
caller: a failed load falls back to the default template in memory and a
failed save is reported while the updated template is still returned.
"""
from typing import List, Optional
import logging

from ..core.priority import Priority, normalize_priority
from ..core.seeding import clean_title, default_template
from ..models import TemplateItem
from ..stores.base import StoreError, TemplateStore
from .reporting import ErrorReporter

logger = logging.getLogger(__name__)


class TemplateService:
    """Read and mutate a user's template"""

    def __init__(self, store: TemplateStore, reporter: ErrorReporter):
        self.store = store
        self.reporter = reporter

    async def get_template(self, user_id: str) -> List[TemplateItem]:
        """Stored template, seeding the default on first use"""
        try:
            items = await self.store.load(user_id)
        except StoreError as e:
            self.reporter.report("template.load", e)
            return default_template()

        if items:
            return items

        logger.info(f"Seeding default template for user {user_id}")
        seed = default_template()
        await self._save(user_id, seed)
        return seed

    async def add_item(self, user_id: str, title: str, priority: Optional[Priority] = None) -> List[TemplateItem]:
        """Prepend a new item; a blank title leaves the template untouched"""
        items = await self.get_template(user_id)
        title = clean_title(title)
        if title is None:
            return items

        items = [TemplateItem(title=title, priority=normalize_priority(priority)), *items]
        await self._save(user_id, items)
        return items

    async def edit_item(
        self, user_id: str, item_id: str, title: str, priority: Optional[Priority] = None
    ) -> List[TemplateItem]:
        items = await self.get_template(user_id)
        title = clean_title(title)
        if title is None or not any(item.id == item_id for item in items):
            return items

        update = {"title": title}
        if priority is not None:
            update["priority"] = normalize_priority(priority)
        items = [item.model_copy(update=update) if item.id == item_id else item for item in items]
        await self._save(user_id, items)
        return items

    async def remove_item(self, user_id: str, item_id: str) -> List[TemplateItem]:
        items = await self.get_template(user_id)
        remaining = [item for item in items if item.id != item_id]
        if len(remaining) == len(items):
            return items

        await self._save(user_id, remaining)
        return remaining

    async def reset_to_default(self, user_id: str) -> List[TemplateItem]:
        """Replace the template with the default one. Callers confirm first."""
        items = default_template()
        await self._save(user_id, items)
        return items

    async def _save(self, user_id: str, items: List[TemplateItem]):
        try:
            await self.store.save(user_id, items)
        except StoreError as e:
            self.reporter.report("template.save", e)
