"""Helpers for resolving who is who inside a circle or a rival list."""

from coactivity.circles.schemas import Circle, MemberKey, MemberProfile


def find_member(circle: Circle, user_id: int) -> MemberProfile | None:
    """Return the member profile belonging to local account ``user_id``."""
    for member in circle.members:
        if member.user_id == user_id:
            return member
    return None


def is_member(circle: Circle, user_id: int) -> bool:
    return find_member(circle, user_id) is not None


def member_keys(members: list[MemberProfile]) -> list[MemberKey]:
    """GitHub keys in member order, duplicates dropped."""
    return list(dict.fromkeys(m.github_user_id for m in members))


def profiles_by_key(members: list[MemberProfile]) -> dict[MemberKey, MemberProfile]:
    """Map GitHub key -> profile, preserving member order (first profile wins)."""
    profiles: dict[MemberKey, MemberProfile] = {}
    for member in members:
        profiles.setdefault(member.github_user_id, member)
    return profiles
