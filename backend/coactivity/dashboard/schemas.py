from pydantic import BaseModel, Field

from coactivity.circles.schemas import MemberKey


class DailyCommitSummary(BaseModel):
    date: str
    commit_count: int


class RepositoryCommitSummary(BaseModel):
    repository: str
    commit_count: int


class UserCommitStats(BaseModel):
    github_user_id: MemberKey
    github_username: str
    avatar_url: str
    total_commits: int = 0
    daily_stats: list[DailyCommitSummary] = Field(default_factory=list)
    repo_stats: list[RepositoryCommitSummary] = Field(default_factory=list)


class DashboardData(BaseModel):
    period: str  # weekly, monthly
    start_date: str
    end_date: str
    my_stats: UserCommitStats
    rivals: list[UserCommitStats]
