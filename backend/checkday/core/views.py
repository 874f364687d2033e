"""
List views: title search, status and priority filters, undone-first order

Views never change what is stored; counters are computed over the full list.
"""
from enum import Enum
from typing import List, Optional, Sequence

from ..models.checklist import TaskItem, TemplateItem
from .priority import Priority, normalize_priority


class StatusFilter(str, Enum):
    ALL = "all"
    UNDONE = "undone"
    DONE = "done"


def matches_query(title: str, query: Optional[str]) -> bool:
    """Case-insensitive substring match; a blank query matches everything"""
    needle = (query or "").strip().lower()
    return not needle or needle in title.lower()


def filter_tasks(
    tasks: Sequence[TaskItem],
    query: Optional[str] = None,
    status: StatusFilter = StatusFilter.ALL,
    priority: Optional[Priority] = None,
    undone_first: bool = False,
) -> List[TaskItem]:
    view = [t for t in tasks if matches_query(t.title, query)]
    if status == StatusFilter.UNDONE:
        view = [t for t in view if not t.done]
    elif status == StatusFilter.DONE:
        view = [t for t in view if t.done]
    if priority is not None:
        view = [t for t in view if normalize_priority(t.priority) == priority]

    if undone_first:
        # sorted() is stable, so the stored order holds within each group
        view = sorted(view, key=lambda t: t.done)
    return view


def filter_template(
    items: Sequence[TemplateItem],
    query: Optional[str] = None,
    priority: Optional[Priority] = None,
) -> List[TemplateItem]:
    view = [i for i in items if matches_query(i.title, query)]
    if priority is not None:
        view = [i for i in view if normalize_priority(i.priority) == priority]
    return view
