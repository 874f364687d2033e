"""
Recap and streak computation over stored daily snapshots
"""
from datetime import date
from typing import Dict, List, Mapping, Optional, Sequence

from ..models.checklist import DaySummary, RecapRow, TaskItem
from .dates import day_key
from .priority import Priority, normalize_priority


def completion_percent(done: int, total: int) -> int:
    """Rounded share of done tasks, 0 for an empty day"""
    if total <= 0:
        return 0
    # Half-up rounding
    return (200 * done + total) // (2 * total)


def recap_row(day: date, tasks: Optional[Sequence[TaskItem]]) -> RecapRow:
    total = len(tasks) if tasks else 0
    done = sum(1 for t in tasks if t.done) if tasks else 0
    return RecapRow(
        date=day,
        total=total,
        done=done,
        percent=completion_percent(done, total),
        full_done=total > 0 and done == total,
    )


def build_recap_rows(
    days: Sequence[date],
    snapshots: Mapping[str, Sequence[TaskItem]],
) -> List[RecapRow]:
    """One row per day, in the order given; days without a snapshot count as empty"""
    return [recap_row(day, snapshots.get(day_key(day))) for day in days]


def empty_recap(days: Sequence[date]) -> List[RecapRow]:
    return [RecapRow(date=day) for day in days]


def is_recap_empty(rows: Sequence[RecapRow]) -> bool:
    return all(row.total == 0 for row in rows)


def streak_from_rows(rows: Sequence[RecapRow]) -> int:
    """Length of the leading run of fully done days.

    ``rows`` must start at today and go backward one day at a time. The run
    ends at the first day that is not fully done, and an empty day is not.
    """
    streak = 0
    for row in rows:
        if not row.full_done:
            break
        streak += 1
    return streak


def summarize(tasks: Sequence[TaskItem]) -> DaySummary:
    """Counters for a day's list; priority counts cover undone tasks only"""
    done = sum(1 for t in tasks if t.done)
    counts: Dict[Priority, int] = {p: 0 for p in Priority}
    for task in tasks:
        if not task.done:
            counts[normalize_priority(task.priority)] += 1
    return DaySummary(
        total=len(tasks),
        done=done,
        undone=len(tasks) - done,
        progress=completion_percent(done, len(tasks)),
        high=counts[Priority.HIGH],
        med=counts[Priority.MED],
        low=counts[Priority.LOW],
    )
