"""
Recap Service
Per-day completion over a trailing window, and the current streak
"""
from typing import List

from ..config import settings
from ..core.dates import Clock, day_key, last_n_days, local_today
from ..core.recap import build_recap_rows, empty_recap, streak_from_rows
from ..models import RecapRow
from ..stores.base import DailyTaskStore, StoreError
from .reporting import ErrorReporter


class RecapService:
    """Aggregates stored daily snapshots; reads only"""

    def __init__(self, store: DailyTaskStore, reporter: ErrorReporter, clock: Clock = local_today):
        self.store = store
        self.reporter = reporter
        self.clock = clock

    async def compute_recap(self, user_id: str, window_days: int) -> List[RecapRow]:
        """Rows for ``window_days`` days ending today, most recent first.

        A store failure yields an all-empty window instead of an error.
        """
        days = last_n_days(window_days, self.clock())
        if not days:
            return []

        try:
            snapshots = await self.store.load_range(user_id, day_key(days[-1]), day_key(days[0]))
        except StoreError as e:
            self.reporter.report("recap.load_range", e)
            return empty_recap(days)

        return build_recap_rows(days, snapshots)

    async def compute_streak(self, user_id: str) -> int:
        """Fully done days in a row, counted back from today"""
        days = last_n_days(settings.streak_window_days, self.clock())
        if not days:
            return 0

        try:
            snapshots = await self.store.load_range(user_id, day_key(days[-1]), day_key(days[0]))
        except StoreError as e:
            self.reporter.report("streak.load_range", e)
            return 0

        return streak_from_rows(build_recap_rows(days, snapshots))
