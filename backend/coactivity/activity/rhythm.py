"""Weekly commit rhythm: which weekdays a member was active, and what kind of committer that makes them."""

from collections.abc import Iterable
from datetime import date
from enum import Enum

from coactivity.activity.schemas import WeeklyRhythm

STEADY_MIN_ACTIVE_DAYS = 5
WEEKEND_MAX_WEEKDAYS = 2

# date.weekday(): Monday == 0
_WEEKDAY_FIELDS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")


class RhythmPattern(str, Enum):
    STEADY = "安定型"
    WEEKEND = "週末型"
    BURST = "バースト型"


def classify_pattern(active_days: int, weekday_count: int, weekend_count: int) -> RhythmPattern:
    if active_days >= STEADY_MIN_ACTIVE_DAYS:
        return RhythmPattern.STEADY
    if weekday_count <= WEEKEND_MAX_WEEKDAYS and weekend_count >= 1:
        return RhythmPattern.WEEKEND
    return RhythmPattern.BURST


def weekly_rhythm(active_dates: Iterable[date]) -> WeeklyRhythm:
    flags = {_WEEKDAY_FIELDS[d.weekday()]: True for d in active_dates}
    return WeeklyRhythm(**flags)


def classify_rhythm(rhythm: WeeklyRhythm) -> RhythmPattern:
    weekday_count = sum([rhythm.mon, rhythm.tue, rhythm.wed, rhythm.thu, rhythm.fri])
    weekend_count = sum([rhythm.sat, rhythm.sun])
    return classify_pattern(weekday_count + weekend_count, weekday_count, weekend_count)
