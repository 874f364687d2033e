"""
Template defaults and daily list synthesis
"""
from typing import List, Optional, Sequence

from ..models.checklist import TemplateItem, TaskItem, new_id
from .priority import Priority, normalize_priority

DEFAULT_TEMPLATE = (
    ("Check incoming email", Priority.MED),
    ("Follow up on pending items", Priority.HIGH),
    ("Tidy up work documents", Priority.LOW),
)


def default_template() -> List[TemplateItem]:
    """Built-in template, with fresh ids on every call"""
    return [TemplateItem(title=title, priority=priority) for title, priority in DEFAULT_TEMPLATE]


def build_daily_from_template(template: Sequence[TemplateItem]) -> List[TaskItem]:
    """One unchecked task per template item, in template order.

    Tasks get their own ids so a day's list never shares identity with the
    template it came from.
    """
    return [
        TaskItem(
            id=new_id(),
            title=item.title,
            done=False,
            priority=normalize_priority(item.priority),
        )
        for item in template
    ]


def clean_title(title: Optional[str]) -> Optional[str]:
    """Trimmed title, or None when nothing is left to accept"""
    if title is None:
        return None
    title = title.strip()
    return title or None
