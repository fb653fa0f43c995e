from abc import ABC, abstractmethod
from datetime import date

from coactivity.circles.schemas import Circle, MemberKey
from coactivity.commits.schemas import CommitStatRecord


class CommitStatsConnector(ABC):
    source_type: str

    @abstractmethod
    def fetch_commit_stats(
        self,
        member_keys: list[MemberKey],
        start_date: date,
        end_date: date,
    ) -> list[CommitStatRecord]:
        """Return every record for ``member_keys`` dated within [start_date, end_date]."""


class CircleConnector(ABC):
    source_type: str

    @abstractmethod
    def get_circle(self, circle_id: int) -> Circle | None:
        pass

    @abstractmethod
    def list_circles_for_user(self, user_id: int) -> list[Circle]:
        pass
