from pydantic import BaseModel


class ActivityItem(BaseModel):
    github_username: str
    avatar_url: str
    repository: str
    commit_count: int
    date: str


class ActivityStreamResponse(BaseModel):
    activities: list[ActivityItem]


class WeeklyRhythm(BaseModel):
    mon: bool = False
    tue: bool = False
    wed: bool = False
    thu: bool = False
    fri: bool = False
    sat: bool = False
    sun: bool = False


class UserRhythm(BaseModel):
    github_username: str
    avatar_url: str
    pattern_label: str
    weekly_rhythm: WeeklyRhythm


class RhythmResponse(BaseModel):
    users: list[UserRhythm]
    period: str  # "YYYY-MM-DD/YYYY-MM-DD"
