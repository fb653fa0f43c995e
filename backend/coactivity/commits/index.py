"""Commit-day index: fold per-repository commit stats into per-member, per-date aggregates."""

from collections.abc import Iterable, Mapping
from typing import Any

import structlog
from pydantic import ValidationError

from coactivity.circles.schemas import MemberKey
from coactivity.commits.schemas import CommitStatRecord, DayAggregate
from coactivity.exceptions import MalformedRecordError

logger = structlog.get_logger()

# member key -> ISO date -> aggregate
DayIndex = dict[MemberKey, dict[str, DayAggregate]]


def coerce_record(raw: CommitStatRecord | Mapping[str, Any]) -> CommitStatRecord:
    """Validate a raw row into a ``CommitStatRecord``.

    Raises ``MalformedRecordError`` instead of skipping the row.
    """
    if isinstance(raw, CommitStatRecord):
        return raw
    try:
        return CommitStatRecord.model_validate(raw)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise MalformedRecordError(raw, f"{location}: {first.get('msg', 'invalid')}") from exc


def build_day_index(
    records: Iterable[CommitStatRecord | Mapping[str, Any]],
    member_keys: Iterable[MemberKey],
) -> DayIndex:
    """Build ``{member_key: {"YYYY-MM-DD": DayAggregate}}``.

    Every key in ``member_keys`` gets an entry (possibly empty) so a member
    without activity is distinguishable from a non-member. A record marks its
    day active whatever its ``commit_count``, zero included.
    """
    index: DayIndex = {key: {} for key in member_keys}
    folded = 0

    for raw in records:
        record = coerce_record(raw)
        days = index.setdefault(record.github_user_id, {})
        day = days.get(record.date.isoformat())
        if day is None:
            day = DayAggregate()
            days[record.date.isoformat()] = day

        day.has_commit = True
        if record.primary_hour is not None:
            day.hours.add(record.primary_hour)
        if record.language:
            day.languages.add(record.language)
        folded += 1

    logger.debug("day_index_built", members=len(index), records=folded)
    return index
