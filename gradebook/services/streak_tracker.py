"""
gradebook/services/streak_tracker.py
Daily learning streak

A streak is the number of consecutive calendar days, ending today or
yesterday, with at least one submission (quiz or practice).

- Only the trailing window (30 days by default) is read
- Days are bucketed in the configured timezone; naive timestamps are UTC
- If today has no activity, counting starts from yesterday (one grace day)
- Counting stops at the first day without activity
"""
import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, Iterable, Optional, Set
from zoneinfo import ZoneInfo

from gradebook.config import settings
from gradebook.repositories.interfaces import SubmissionStore
from gradebook.services.upstream import call_upstream

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StreakTracker:

    def __init__(
        self,
        submission_store: SubmissionStore,
        tz: str = settings.TIMEZONE,
        window_days: int = settings.STREAK_WINDOW_DAYS,
        clock: Callable[[], datetime] = utc_now,
        upstream_timeout: Optional[float] = settings.UPSTREAM_TIMEOUT_SECONDS,
    ):
        self.submission_store = submission_store
        self.tz = ZoneInfo(tz)
        self.window_days = window_days
        self.clock = clock
        self.upstream_timeout = upstream_timeout

    def today(self) -> date:
        now = self.clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now.astimezone(self.tz).date()

    def window_start(self, today: date) -> datetime:
        """Local midnight `window_days` before today."""
        return datetime.combine(today - timedelta(days=self.window_days), time.min, tzinfo=self.tz)

    def to_local_date(self, timestamp: datetime) -> date:
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return timestamp.astimezone(self.tz).date()

    def active_days(self, timestamps: Iterable[datetime]) -> Set[date]:
        return {self.to_local_date(ts) for ts in timestamps if ts is not None}

    @staticmethod
    def count_streak(active_days: Set[date], today: date) -> int:
        check = today
        if check not in active_days:
            check -= timedelta(days=1)

        streak = 0
        while check in active_days:
            streak += 1
            check -= timedelta(days=1)
        return streak

    async def current_streak(self, learner_id: int) -> int:
        today = self.today()
        since = self.window_start(today)

        timestamps = await call_upstream(
            "SubmissionStore",
            "recent_submission_timestamps",
            self.submission_store.recent_submission_timestamps(learner_id, since),
            timeout=self.upstream_timeout,
        )

        streak = self.count_streak(self.active_days(timestamps), today)
        logger.debug(f"Streak for learner {learner_id}: {streak} day(s) as of {today}")
        return streak
