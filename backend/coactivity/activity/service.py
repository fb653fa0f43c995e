from collections import defaultdict
from datetime import date

import structlog

from coactivity.activity.rhythm import classify_rhythm, weekly_rhythm
from coactivity.activity.schemas import (
    ActivityItem,
    ActivityStreamResponse,
    RhythmResponse,
    UserRhythm,
)
from coactivity.circles.membership import member_keys, profiles_by_key
from coactivity.circles.schemas import MemberProfile
from coactivity.commits.schemas import CommitStatRecord
from coactivity.commits.service import load_commit_stats, lookback_window
from coactivity.config import resolve_override
from coactivity.connectors.base import CommitStatsConnector

logger = structlog.get_logger()


class ActivityService:
    """Activity stream and weekly rhythm for a user and their rivals."""

    def __init__(self, commit_stats: CommitStatsConnector, *, window_days: int | None = None):
        self.commit_stats = commit_stats
        self.window_days = resolve_override("ACTIVITY_WINDOW_DAYS", window_days)

    def get_activity_stream(
        self,
        user: MemberProfile,
        rivals: list[MemberProfile],
        today: date | None = None,
    ) -> ActivityStreamResponse:
        members = [user, *rivals]
        records, _, _ = self._load(members, today)
        profiles = profiles_by_key(members)

        activities = []
        for record in records:
            profile = profiles.get(record.github_user_id)
            if profile is None:
                continue
            activities.append(ActivityItem(
                github_username=profile.github_username,
                avatar_url=profile.avatar_url,
                repository=record.repository,
                commit_count=record.commit_count,
                date=record.date.isoformat(),
            ))

        activities.sort(key=lambda a: a.date, reverse=True)
        return ActivityStreamResponse(activities=activities)

    def get_rhythm(
        self,
        user: MemberProfile,
        rivals: list[MemberProfile],
        today: date | None = None,
    ) -> RhythmResponse:
        members = [user, *rivals]
        records, start_date, end_date = self._load(members, today)

        active_dates: dict = defaultdict(set)
        for record in records:
            active_dates[record.github_user_id].add(record.date)

        users = []
        # user first, then rivals in the order given
        for member in members:
            rhythm = weekly_rhythm(active_dates.get(member.github_user_id, ()))
            users.append(UserRhythm(
                github_username=member.github_username,
                avatar_url=member.avatar_url,
                pattern_label=classify_rhythm(rhythm).value,
                weekly_rhythm=rhythm,
            ))

        return RhythmResponse(users=users, period=f"{start_date.isoformat()}/{end_date.isoformat()}")

    def _load(
        self,
        members: list[MemberProfile],
        today: date | None,
    ) -> tuple[list[CommitStatRecord], date, date]:
        start_date, end_date = lookback_window(today or date.today(), self.window_days - 1)
        records = load_commit_stats(self.commit_stats, member_keys(members), start_date, end_date)
        logger.info("activity_window_loaded", members=len(members), records=len(records))
        return records, start_date, end_date
