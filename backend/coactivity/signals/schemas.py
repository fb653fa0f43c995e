import datetime as dt
from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel, Field

from coactivity.circles.schemas import MemberKey

SAME_DAY_DETAIL = "同じ日にコミット"


class SignalKind(str, Enum):
    SAME_DAY = "same_day"
    SAME_HOUR = "same_hour"
    SAME_LANGUAGE = "same_language"


def hour_detail(hour: int) -> str:
    return f"{hour}時台"


class SignalKey(NamedTuple):
    """Dedup identity. ``peer`` is None for same_day, which accumulates every peer of the date."""

    kind: SignalKind
    date: str
    detail: str
    peer: MemberKey | None = None


class SignalUser(BaseModel):
    github_username: str
    avatar_url: str


class Signal(BaseModel):
    type: SignalKind
    date: dt.date
    users: list[SignalUser] = Field(default_factory=list)
    detail: str
    circle_id: int | None = None
    circle_name: str | None = None


class SignalsListResponse(BaseModel):
    signals: list[Signal]


def build_signals_list_response(signals: list[Signal]) -> SignalsListResponse:
    """Wrap detection output for JSON serialization (``model_dump(mode="json")``)."""
    return SignalsListResponse(signals=signals)
