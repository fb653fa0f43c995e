import datetime as dt
from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from coactivity.circles.schemas import MemberKey


class CommitStatRecord(BaseModel):
    """One member's commits to one repository on one calendar day."""

    github_user_id: MemberKey
    github_username: str = ""
    date: dt.date
    repository: str
    commit_count: int = Field(0, ge=0)
    primary_hour: int | None = Field(None, ge=0, le=23)  # most frequent commit hour, None if unknown
    language: str | None = None  # repository's primary language


@dataclass
class DayAggregate:
    """Folded (member, date) summary across every repository touched that day."""

    has_commit: bool = False
    hours: set[int] = field(default_factory=set)
    languages: set[str] = field(default_factory=set)
