from pydantic import BaseModel, Field

# GitHub user id joining a local account to its activity stream. Numeric strings
# from a store are coerced so every index and profile lookup uses the same key.
MemberKey = int


class MemberProfile(BaseModel):
    github_user_id: MemberKey
    github_username: str
    avatar_url: str = ""
    user_id: int | None = None  # local account; None for rivals tracked without an account


class Circle(BaseModel):
    id: int
    name: str
    members: list[MemberProfile] = Field(default_factory=list)
