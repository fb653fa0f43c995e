"""Side-by-side commit totals for a user and their rivals over a week or the current month."""

from collections import Counter
from datetime import date

import structlog

from coactivity.circles.membership import member_keys
from coactivity.circles.schemas import MemberKey, MemberProfile
from coactivity.commits.schemas import CommitStatRecord
from coactivity.commits.service import load_commit_stats, lookback_window
from coactivity.config import resolve_override
from coactivity.connectors.base import CommitStatsConnector
from coactivity.dashboard.schemas import (
    DailyCommitSummary,
    DashboardData,
    RepositoryCommitSummary,
    UserCommitStats,
)

logger = structlog.get_logger()


def summarize_member(member: MemberProfile, records: list[CommitStatRecord]) -> UserCommitStats:
    """Sum one member's records per date and per repository."""
    daily: Counter[str] = Counter()
    repos: Counter[str] = Counter()
    for record in records:
        daily[record.date.isoformat()] += record.commit_count
        repos[record.repository] += record.commit_count

    return UserCommitStats(
        github_user_id=member.github_user_id,
        github_username=member.github_username,
        avatar_url=member.avatar_url,
        total_commits=sum(daily.values()),
        daily_stats=[
            DailyCommitSummary(date=day, commit_count=count)
            for day, count in sorted(daily.items())
        ],
        repo_stats=[
            RepositoryCommitSummary(repository=repo, commit_count=count)
            for repo, count in sorted(repos.items(), key=lambda item: (-item[1], item[0]))
        ],
    )


class DashboardService:
    def __init__(self, commit_stats: CommitStatsConnector, *, window_days: int | None = None):
        self.commit_stats = commit_stats
        self.window_days = resolve_override("ACTIVITY_WINDOW_DAYS", window_days)

    def get_weekly_dashboard(
        self,
        user: MemberProfile,
        rivals: list[MemberProfile],
        today: date | None = None,
    ) -> DashboardData:
        start_date, end_date = lookback_window(today or date.today(), self.window_days - 1)
        return self._build("weekly", start_date, end_date, user, rivals)

    def get_monthly_dashboard(
        self,
        user: MemberProfile,
        rivals: list[MemberProfile],
        today: date | None = None,
    ) -> DashboardData:
        end_date = today or date.today()
        return self._build("monthly", end_date.replace(day=1), end_date, user, rivals)

    def _build(
        self,
        period: str,
        start_date: date,
        end_date: date,
        user: MemberProfile,
        rivals: list[MemberProfile],
    ) -> DashboardData:
        members = [user, *rivals]
        records = load_commit_stats(self.commit_stats, member_keys(members), start_date, end_date)

        by_member: dict[MemberKey, list[CommitStatRecord]] = {}
        for record in records:
            by_member.setdefault(record.github_user_id, []).append(record)

        logger.info(
            "dashboard_built",
            period=period,
            start_date=start_date.isoformat(),
            end_date=end_date.isoformat(),
            rivals=len(rivals),
            records=len(records),
        )
        return DashboardData(
            period=period,
            start_date=start_date.isoformat(),
            end_date=end_date.isoformat(),
            my_stats=summarize_member(user, by_member.get(user.github_user_id, [])),
            rivals=[summarize_member(r, by_member.get(r.github_user_id, [])) for r in rivals],
        )
