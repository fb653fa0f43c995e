"""List-backed connectors for tests and for hosts that already hold the data in memory."""

from coactivity.circles.membership import is_member
from coactivity.circles.schemas import Circle, MemberKey
from coactivity.commits.schemas import CommitStatRecord
from coactivity.connectors.base import CircleConnector, CommitStatsConnector


class InMemoryCommitStatsConnector(CommitStatsConnector):
    source_type = "memory"

    def __init__(self, records: list[CommitStatRecord] | None = None):
        self.records: list[CommitStatRecord] = list(records or [])

    def add(self, *records: CommitStatRecord) -> None:
        self.records.extend(records)

    def fetch_commit_stats(self, member_keys, start_date, end_date):
        wanted: set[MemberKey] = set(member_keys)
        matches = [
            r for r in self.records
            if r.github_user_id in wanted and start_date <= r.date <= end_date
        ]
        # Same ordering a SQL store would give: member, date, repository
        matches.sort(key=lambda r: (r.github_user_id, r.date, r.repository))
        return matches


class InMemoryCircleConnector(CircleConnector):
    source_type = "memory"

    def __init__(self, circles: list[Circle] | None = None):
        self.circles: dict[int, Circle] = {c.id: c for c in circles or []}

    def get_circle(self, circle_id: int) -> Circle | None:
        return self.circles.get(circle_id)

    def list_circles_for_user(self, user_id: int) -> list[Circle]:
        return [c for c in self.circles.values() if is_member(c, user_id)]

