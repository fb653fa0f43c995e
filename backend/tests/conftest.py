from datetime import date

import pytest

from coactivity.circles.schemas import Circle, MemberProfile
from coactivity.commits.schemas import CommitStatRecord
from coactivity.connectors.memory import InMemoryCircleConnector, InMemoryCommitStatsConnector
from coactivity.logging import configure_logging

TODAY = date(2026, 2, 14)


@pytest.fixture(scope="session", autouse=True)
def logging_configured():
    configure_logging(level="DEBUG")


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def me() -> MemberProfile:
    return MemberProfile(user_id=1, github_user_id=100, github_username="me", avatar_url="https://avatar/me")


@pytest.fixture
def tanaka() -> MemberProfile:
    return MemberProfile(user_id=2, github_user_id=200, github_username="tanaka", avatar_url="https://avatar/tanaka")


@pytest.fixture
def suzuki() -> MemberProfile:
    return MemberProfile(user_id=3, github_user_id=300, github_username="suzuki", avatar_url="https://avatar/suzuki")


@pytest.fixture
def circle(me: MemberProfile, tanaka: MemberProfile) -> Circle:
    return Circle(id=1, name="テストサークル", members=[me, tanaka])


@pytest.fixture
def stats_connector() -> InMemoryCommitStatsConnector:
    return InMemoryCommitStatsConnector()


@pytest.fixture
def circle_connector(circle: Circle) -> InMemoryCircleConnector:
    return InMemoryCircleConnector([circle])


def _make_record(member: int, day: date, repository: str = "repo", commit_count: int = 1, **kwargs) -> CommitStatRecord:
    return CommitStatRecord(
        github_user_id=member,
        date=day,
        repository=repository,
        commit_count=commit_count,
        **kwargs,
    )


@pytest.fixture
def make_record():
    return _make_record
